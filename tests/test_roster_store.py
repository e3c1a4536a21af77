"""
Tests for the SQLite roster cache.
"""
import json

from bowling_lab.engine.taxonomy import Arm, Archetype
from bowling_lab.models import BowlerRecord
from bowling_lab.roster import RosterStore, parse_roster
from tests.conftest import make_bowler


def _roster(pace_bowler, finger_spinner, wrist_spinner):
    starc = make_bowler(
        "starc", Archetype.LEFT_ARM_PACE, arm=Arm.LEFT, name="Mitchell Starc",
        team="Kolkata Knights", country="Australia", formats=["ODI", "Test"],
        strengths=["New-ball outswing"],
    )
    return [pace_bowler, finger_spinner, wrist_spinner, starc]


class TestRosterStore:

    def test_replace_all_and_get(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = RosterStore(db_session)
        assert store.replace_all(_roster(pace_bowler, finger_spinner, wrist_spinner)) == 4
        assert store.count() == 4

        loaded = store.get("starc")
        assert loaded.arm == Arm.LEFT
        assert loaded.archetype == Archetype.LEFT_ARM_PACE
        assert loaded.formats == ["ODI", "Test"]
        assert loaded.strengths == ["New-ball outswing"]
        assert store.get("nobody") is None

    def test_replace_all_replaces(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = RosterStore(db_session)
        store.replace_all(_roster(pace_bowler, finger_spinner, wrist_spinner))
        store.list()
        store.replace_all([pace_bowler])
        assert [b.id for b in store.list()] == ["bumrah"]

    def test_replace_all_with_suffixed_duplicates(self, db_session):
        text = json.dumps([
            {"id": "a", "name": "First A"},
            {"id": "a", "name": "Second A"},
            {"id": "a-2", "name": "Real A2"},
        ])
        store = RosterStore(db_session)
        assert store.replace_all(parse_roster(text)) == 3
        assert store.get("a-2").name == "Real A2"
        assert store.get("a-3").name == "Second A"

    def test_profile_round_trip(self, db_session, pace_bowler):
        RosterStore(db_session).replace_all([pace_bowler])
        record = db_session.get(BowlerRecord, "bumrah")
        assert record.to_profile() == pace_bowler
        assert "Bumrah" in repr(record)

    def test_list_sorted_by_name(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = RosterStore(db_session)
        store.replace_all(_roster(pace_bowler, finger_spinner, wrist_spinner))
        names = [b.name for b in store.list()]
        assert names == sorted(names)

    def test_teams(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = RosterStore(db_session)
        store.replace_all(_roster(pace_bowler, finger_spinner, wrist_spinner) + [make_bowler("free", team=None)])
        assert store.teams() == ["Chennai Kings", "Kolkata Knights", "Mumbai Titans", "Rajasthan Royals XI"]

    def test_fingerprint_remembered(self, db_session, pace_bowler):
        store = RosterStore(db_session)
        assert store.fingerprint() is None
        store.replace_all([pace_bowler], fingerprint="abc")
        assert store.fingerprint() == "abc"
        store.replace_all([pace_bowler])
        assert store.fingerprint() is None


class TestRosterSearch:
    """Text query, team and format filters."""

    def _store(self, db_session, *bowlers):
        store = RosterStore(db_session)
        store.replace_all(_roster(*bowlers))
        return store

    def test_query_matches_country_and_strengths(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = self._store(db_session, pace_bowler, finger_spinner, wrist_spinner)
        assert [b.id for b in store.search("australia")] == ["starc"]
        assert [b.id for b in store.search("GOOGLY")] == ["chahal"]

    def test_team_filter(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = self._store(db_session, pace_bowler, finger_spinner, wrist_spinner)
        assert [b.id for b in store.search(team="Mumbai Titans")] == ["bumrah"]
        assert len(store.search(team="All")) == 4

    def test_format_filter(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = self._store(db_session, pace_bowler, finger_spinner, wrist_spinner)
        assert {b.id for b in store.search(fmt="T20I")} == {"bumrah", "chahal"}

    def test_query_ignores_format(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        """A text query searches every format."""
        store = self._store(db_session, pace_bowler, finger_spinner, wrist_spinner)
        assert [b.id for b in store.search("ashwin", fmt="T20I")] == ["ashwin"]

    def test_team_applies_with_query(self, db_session, pace_bowler, finger_spinner, wrist_spinner):
        store = self._store(db_session, pace_bowler, finger_spinner, wrist_spinner)
        assert store.search("india", team="Chennai Kings")[0].id == "ashwin"
        assert len(store.search("india", team="Chennai Kings")) == 1
