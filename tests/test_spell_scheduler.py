"""
Tests for round-robin spell scheduling.
"""
from dataclasses import replace

from bowling_lab.engine import OverComposer, SpellItem, SpellScheduler
from bowling_lab.engine.spell_scheduler import over_order, schedule
from bowling_lab.engine.taxonomy import Archetype, Phase, Pitch, legal_types
from tests.conftest import make_bowler


class TestOverOrder:

    def test_even_split_alternates(self, pace_bowler, wrist_spinner):
        items = [SpellItem(pace_bowler, 2), SpellItem(wrist_spinner, 2)]
        assert over_order(items) == ["bumrah", "chahal", "bumrah", "chahal"]

    def test_uneven_split_finishes_with_longer_spell(self, pace_bowler, wrist_spinner):
        items = [SpellItem(pace_bowler, 3), SpellItem(wrist_spinner, 1)]
        assert over_order(items) == ["bumrah", "chahal", "bumrah", "bumrah"]

    def test_zero_overs_skipped(self, pace_bowler, wrist_spinner):
        items = [SpellItem(pace_bowler, 0), SpellItem(wrist_spinner, 2)]
        assert over_order(items) == ["chahal", "chahal"]

    def test_empty(self):
        assert over_order([]) == []


class TestSchedule:

    def test_over_map_and_numbering(self, pace_bowler, wrist_spinner, finger_spinner):
        items = [SpellItem(pace_bowler, 2), SpellItem(wrist_spinner, 1), SpellItem(finger_spinner, 2)]
        spell = schedule(items, Phase.MIDDLE, Pitch.NORMAL)

        assert spell.total_overs == 5
        assert spell.over_to_bowler == {1: "bumrah", 2: "chahal", 3: "ashwin", 4: "bumrah", 5: "ashwin"}
        assert len(spell.deliveries) == 30
        for i, d in enumerate(spell.deliveries):
            assert (d.over, d.ball) == (i // 6 + 1, i % 6 + 1)
        assert spell.overs_for("ashwin") == [3, 5]

    def test_each_over_is_a_salted_single_over_plan(self, pace_bowler, wrist_spinner):
        items = [SpellItem(pace_bowler, 2), SpellItem(wrist_spinner, 2)]
        spell = SpellScheduler().schedule(items, Phase.DEATH, Pitch.DRY)

        composer = OverComposer()
        for over, bowler in enumerate([pace_bowler, wrist_spinner, pace_bowler, wrist_spinner], start=1):
            expected = [
                replace(d, over=over)
                for d in composer.compose(bowler, 6, Phase.DEATH, Pitch.DRY, salt=f"over:{over}")
            ]
            got = [d for d in spell.deliveries if d.over == over]
            assert got == expected, f"over {over} does not match its own plan"

    def test_repeat_overs_differ(self, pace_bowler):
        """The same bowler's two overs are salted apart."""
        spell = schedule([SpellItem(pace_bowler, 2)], Phase.MIDDLE, Pitch.NORMAL)
        first = [d.triple for d in spell.deliveries if d.over == 1]
        second = [d.triple for d in spell.deliveries if d.over == 2]
        assert first != second

    def test_types_legal_per_bowler(self, pace_bowler, wrist_spinner):
        items = [SpellItem(pace_bowler, 3), SpellItem(wrist_spinner, 3)]
        spell = schedule(items, "powerplay", "Green")
        bowlers = {"bumrah": pace_bowler, "chahal": wrist_spinner}
        for d in spell.deliveries:
            bowler = bowlers[spell.over_to_bowler[d.over]]
            assert d.delivery_type in legal_types(bowler.archetype)

    def test_deterministic(self, pace_bowler, wrist_spinner):
        items = [SpellItem(pace_bowler, 2), SpellItem(wrist_spinner, 2)]
        assert schedule(items, Phase.MIDDLE, Pitch.NORMAL) == schedule(items, Phase.MIDDLE, Pitch.NORMAL)

    def test_shared_id_keeps_each_items_profile(self):
        quick = make_bowler("guest", Archetype.FAST)
        spinner = make_bowler("guest", Archetype.LEG_SPIN)
        spell = schedule([SpellItem(quick, 1), SpellItem(spinner, 1)], Phase.MIDDLE, Pitch.NORMAL)

        assert spell.over_to_bowler == {1: "guest", 2: "guest"}
        first = {d.delivery_type for d in spell.deliveries if d.over == 1}
        second = {d.delivery_type for d in spell.deliveries if d.over == 2}
        assert first <= legal_types(Archetype.FAST)
        assert second <= legal_types(Archetype.LEG_SPIN)
