"""
SQLite-backed roster cache.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.models.bowler import BowlerRecord
from bowling_lab.models.roster_meta import RosterMeta

FINGERPRINT_KEY = "fingerprint"


class RosterStore:
    """Thin query layer over the bowlers table for one session."""

    def __init__(self, session: Session):
        self.session = session

    def replace_all(self, profiles: List[BowlerProfile], fingerprint: Optional[str] = None) -> int:
        """Swap in a new roster; the fingerprint of its source text is remembered when given."""
        self.session.query(BowlerRecord).delete()
        for profile in profiles:
            self.session.add(BowlerRecord.from_profile(profile))
        self._set_meta(FINGERPRINT_KEY, fingerprint)
        self.session.commit()
        return len(profiles)

    def fingerprint(self) -> Optional[str]:
        meta = self.session.get(RosterMeta, FINGERPRINT_KEY)
        return meta.value if meta else None

    def _set_meta(self, key: str, value: Optional[str]):
        meta = self.session.get(RosterMeta, key)
        if meta is None:
            self.session.add(RosterMeta(key=key, value=value))
        else:
            meta.value = value
            meta.updated_at = datetime.utcnow()

    def count(self) -> int:
        return self.session.query(BowlerRecord).count()

    def list(self) -> List[BowlerProfile]:
        records = self.session.query(BowlerRecord).order_by(BowlerRecord.name).all()
        return [r.to_profile() for r in records]

    def get(self, bowler_id: str) -> Optional[BowlerProfile]:
        record = self.session.get(BowlerRecord, bowler_id)
        return record.to_profile() if record else None

    def teams(self) -> List[str]:
        rows = self.session.query(BowlerRecord.team).filter(BowlerRecord.team.isnot(None)).distinct().all()
        return sorted(team for (team,) in rows if team)

    def search(self, query: str = "", team: Optional[str] = None, fmt: Optional[str] = None) -> List[BowlerProfile]:
        """
        Filter the roster.

        The team filter always applies. A text query matches name, country,
        team, archetype and strengths; while a query is present the format
        filter is ignored so every format is searched.
        """
        q = (query or "").strip().lower()
        bowlers = self.list()
        if team and team != "All":
            bowlers = [b for b in bowlers if b.team == team]

        if q:
            return [b for b in bowlers if q in _search_text(b)]

        if fmt:
            bowlers = [b for b in bowlers if not b.formats or fmt in b.formats]
        return bowlers


def _search_text(profile: BowlerProfile) -> str:
    parts = [
        profile.name,
        profile.country or "",
        profile.team or "",
        profile.archetype.value,
        " ".join(profile.strengths),
    ]
    return " ".join(parts).lower()
