from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, DateTime, Text, Enum
from sqlalchemy.orm import Mapped, mapped_column
import json

from bowling_lab.database import Base
from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.taxonomy import Arm, Archetype


def _load_list(raw: Optional[str]) -> list:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return []
    return value if isinstance(value, list) else []


class BowlerRecord(Base):
    """Cached roster entry. Generated plans are never stored."""
    __tablename__ = "bowlers"

    id: Mapped[str] = mapped_column(String(120), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    country: Mapped[Optional[str]] = mapped_column(String(60), nullable=True)
    team: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)

    arm: Mapped[Arm] = mapped_column(Enum(Arm), default=Arm.RIGHT)
    archetype: Mapped[Archetype] = mapped_column(Enum(Archetype), default=Archetype.PACE)
    pace_kph: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    is_legend: Mapped[bool] = mapped_column(Boolean, default=False)

    formats_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)     # JSON array
    strengths_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)   # JSON array
    strategies_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # JSON array

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def formats(self) -> list:
        return _load_list(self.formats_json)

    @property
    def strengths(self) -> list:
        return _load_list(self.strengths_json)

    @property
    def strategies(self) -> list:
        return _load_list(self.strategies_json)

    def to_profile(self) -> BowlerProfile:
        return BowlerProfile(
            id=self.id,
            name=self.name,
            arm=self.arm,
            archetype=self.archetype,
            strengths=self.strengths,
            strategies=self.strategies,
            country=self.country,
            team=self.team,
            formats=self.formats,
            pace_kph=self.pace_kph,
            is_legend=self.is_legend,
        )

    @classmethod
    def from_profile(cls, profile: BowlerProfile) -> "BowlerRecord":
        return cls(
            id=profile.id,
            name=profile.name,
            country=profile.country,
            team=profile.team,
            arm=profile.arm,
            archetype=profile.archetype,
            pace_kph=profile.pace_kph,
            is_legend=profile.is_legend,
            formats_json=json.dumps(profile.formats),
            strengths_json=json.dumps(profile.strengths),
            strategies_json=json.dumps(profile.strategies),
            updated_at=datetime.utcnow(),
        )

    def __repr__(self):
        return f"<Bowler {self.name} ({self.archetype.value})>"
