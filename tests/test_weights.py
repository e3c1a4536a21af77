"""
Tests for the weight table pipeline.
"""
import pytest

from bowling_lab.engine.taxonomy import (
    Arm, Archetype, DeliveryType, Length, Line, Phase, Pitch, FAMILY_TYPES, family_of,
)
from bowling_lab.engine.weights import (
    STRATEGY_SCALE, LEFT_ARM_INSWING_BOOST, build_weight_tables,
)
from tests.conftest import make_bowler


class TestLegality:
    """Only the bowler's family may carry type weight."""

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_pools_only_hold_legal_types(self, archetype):
        bowler = make_bowler(archetype=archetype, strengths=["Carrom ball", "Accurate yorkers", "Googly"])
        for phase in Phase:
            for pitch in Pitch:
                pools = build_weight_tables(bowler, phase, pitch).pools()
                legal = FAMILY_TYPES[family_of(archetype)]
                assert pools.types, f"{archetype} has an empty type pool"
                assert all(t in legal for t, _ in pools.types), \
                    f"{archetype} {phase} {pitch} drew illegal types {pools.types}"

    def test_pools_are_positive(self):
        pools = build_weight_tables(make_bowler(archetype=Archetype.LEG_SPIN), Phase.DEATH, Pitch.DRY).pools()
        for pool in (pools.types, pools.lengths, pools.lines):
            assert pool
            assert all(w > 0 for _, w in pool)


class TestLayers:

    def test_yorker_strength_raises_yorker_length(self):
        plain = build_weight_tables(make_bowler(), Phase.MIDDLE, Pitch.NORMAL)
        skilled = build_weight_tables(make_bowler(strengths=["Accurate yorkers"]), Phase.MIDDLE, Pitch.NORMAL)
        assert skilled.lengths[Length.YORKER] > plain.lengths[Length.YORKER]
        assert skilled.types[DeliveryType.STANDARD] > plain.types[DeliveryType.STANDARD]

    def test_strategy_text_is_scaled_down(self):
        """Strategy notes use the keyword table at a quarter of the strength weight."""
        plain = build_weight_tables(make_bowler(), Phase.MIDDLE, Pitch.NORMAL)
        as_strength = build_weight_tables(make_bowler(strengths=["outswing"]), Phase.MIDDLE, Pitch.NORMAL)
        as_strategy = build_weight_tables(make_bowler(strategies=["outswing"]), Phase.MIDDLE, Pitch.NORMAL)

        strength_delta = as_strength.types[DeliveryType.OUTSWING] - plain.types[DeliveryType.OUTSWING]
        strategy_delta = as_strategy.types[DeliveryType.OUTSWING] - plain.types[DeliveryType.OUTSWING]
        assert strategy_delta == pytest.approx(strength_delta * STRATEGY_SCALE)

    def test_left_arm_pace_gets_inswing(self):
        right = build_weight_tables(make_bowler(arm=Arm.RIGHT), Phase.POWERPLAY, Pitch.NORMAL)
        left = build_weight_tables(make_bowler(arm=Arm.LEFT), Phase.POWERPLAY, Pitch.NORMAL)
        assert left.types[DeliveryType.INSWING] - right.types[DeliveryType.INSWING] == \
            pytest.approx(LEFT_ARM_INSWING_BOOST)

    def test_left_arm_spinner_gets_no_inswing(self):
        tables = build_weight_tables(
            make_bowler(archetype=Archetype.LEFT_ARM_ORTHODOX, arm=Arm.LEFT), Phase.MIDDLE, Pitch.NORMAL
        )
        assert tables.types[DeliveryType.INSWING] == 0.0

    def test_death_favours_yorkers(self):
        bowler = make_bowler()
        death = build_weight_tables(bowler, Phase.DEATH, Pitch.NORMAL)
        powerplay = build_weight_tables(bowler, Phase.POWERPLAY, Pitch.NORMAL)
        assert death.lengths[Length.YORKER] > powerplay.lengths[Length.YORKER]
        assert death.lines[Line.WIDE_OUTSIDE_OFF] > powerplay.lines[Line.WIDE_OUTSIDE_OFF]

    def test_green_pitch_boosts_cross_seam(self):
        bowler = make_bowler()
        green = build_weight_tables(bowler, Phase.MIDDLE, Pitch.GREEN)
        normal = build_weight_tables(bowler, Phase.MIDDLE, Pitch.NORMAL)
        assert green.types[DeliveryType.CROSS_SEAM] > normal.types[DeliveryType.CROSS_SEAM]

    def test_spinners_bowl_fewer_yorkers_and_short_balls(self):
        pace = build_weight_tables(make_bowler(), Phase.MIDDLE, Pitch.NORMAL)
        spin = build_weight_tables(make_bowler(archetype=Archetype.OFF_SPIN), Phase.MIDDLE, Pitch.NORMAL)
        assert spin.lengths[Length.YORKER] < pace.lengths[Length.YORKER]
        assert spin.lengths[Length.SHORT] < pace.lengths[Length.SHORT]

    def test_tables_are_deterministic(self):
        bowler = make_bowler(strengths=["Wobble seam"])
        assert build_weight_tables(bowler, Phase.DEATH, Pitch.DUSTY) == \
            build_weight_tables(bowler, Phase.DEATH, Pitch.DUSTY)


class TestFinalize:
    """All-zero tables fall back to family defaults."""

    def test_defaults_restored_after_wipeout(self):
        def wipe(ctx, tables):
            for table in (tables.types, tables.lengths, tables.lines):
                for key in table:
                    table[key] = -5.0

        pace = build_weight_tables(make_bowler(), Phase.MIDDLE, Pitch.NORMAL, layers=[wipe]).pools()
        assert pace.types == [(DeliveryType.STANDARD, 1.0)]
        assert pace.lengths == [(Length.GOOD, 1.0)]
        assert pace.lines == [(Line.OFF_STUMP, 1.0)]

        wrist = build_weight_tables(
            make_bowler(archetype=Archetype.LEG_SPIN), Phase.MIDDLE, Pitch.NORMAL, layers=[wipe]
        ).pools()
        assert wrist.types == [(DeliveryType.LEG_BREAK, 1.0)]

    def test_without_type_keeps_pool_when_only_one_type(self):
        def only_standard(ctx, tables):
            for key in tables.types:
                tables.types[key] = 0.0
            tables.types[DeliveryType.STANDARD] = 2.0

        pools = build_weight_tables(make_bowler(), Phase.MIDDLE, Pitch.NORMAL, layers=[only_standard]).pools()
        assert pools.without_type(DeliveryType.STANDARD) == [(DeliveryType.STANDARD, 2.0)]
        assert pools.without_type(DeliveryType.BOUNCER) == [(DeliveryType.STANDARD, 2.0)]
