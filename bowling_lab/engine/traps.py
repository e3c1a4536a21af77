"""
Scripted wicket traps: two setup balls then a contrasting payoff.
One literal pattern per (pace|spin, phase). Spin patterns are written with
finger-spin deliveries and mirrored onto the wrist-spin family when needed.
"""
from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.taxonomy import (
    BowlerClass, DeliveryType, Family, Length, Line, Phase, FAMILY_TYPES,
    bowler_class_of,
)


@dataclass(frozen=True)
class TrapStep:
    delivery_type: DeliveryType
    length: Length
    line: Line
    purpose: str

    @property
    def triple(self) -> Tuple[DeliveryType, Length, Line]:
        return (self.delivery_type, self.length, self.line)


@dataclass(frozen=True)
class TrapPattern:
    setup: Tuple[TrapStep, TrapStep]
    payoff: TrapStep

    @property
    def steps(self) -> List[TrapStep]:
        return [self.setup[0], self.setup[1], self.payoff]


TRAP_LIBRARY: Dict[Tuple[BowlerClass, Phase], TrapPattern] = {
    (BowlerClass.PACE, Phase.POWERPLAY): TrapPattern(
        setup=(
            TrapStep(DeliveryType.OUTSWING, Length.GOOD, Line.FOURTH_STUMP,
                     "Set-up: new-ball shape away to draw the drive"),
            TrapStep(DeliveryType.OUTSWING, Length.GOOD, Line.OFF_STUMP,
                     "Set-up: reinforce the away channel"),
        ),
        payoff=TrapStep(DeliveryType.INSWING, Length.FULL, Line.MIDDLE_STUMP,
                        "Payoff: full in-ducker at pads and stumps"),
    ),
    (BowlerClass.PACE, Phase.MIDDLE): TrapPattern(
        setup=(
            TrapStep(DeliveryType.CROSS_SEAM, Length.BACK_OF_LENGTH, Line.OFF_STUMP,
                     "Set-up: hit the deck, variable bounce"),
            TrapStep(DeliveryType.SLOWER, Length.GOOD, Line.OUTSIDE_OFF,
                     "Set-up: take pace off and widen the line"),
        ),
        payoff=TrapStep(DeliveryType.INSWING, Length.FULL, Line.MIDDLE_STUMP,
                        "Payoff: full and straight, lbw or bowled"),
    ),
    (BowlerClass.PACE, Phase.DEATH): TrapPattern(
        setup=(
            TrapStep(DeliveryType.STANDARD, Length.YORKER, Line.WIDE_OUTSIDE_OFF,
                     "Set-up: wide yorker outside the tramline"),
            TrapStep(DeliveryType.STANDARD, Length.YORKER, Line.OUTSIDE_OFF,
                     "Set-up: repeat the wide yorker, a touch straighter"),
        ),
        payoff=TrapStep(DeliveryType.BOUNCER, Length.SHORT, Line.AT_BODY,
                        "Payoff: surprise bumper for the top edge"),
    ),
    (BowlerClass.SPIN, Phase.POWERPLAY): TrapPattern(
        setup=(
            TrapStep(DeliveryType.OFF_BREAK, Length.GOOD, Line.OUTSIDE_OFF,
                     "Set-up: tease the drive over the ring"),
            TrapStep(DeliveryType.TOP_SPINNER, Length.GOOD, Line.OFF_STUMP,
                     "Set-up: dip and bounce to draw them forward"),
        ),
        payoff=TrapStep(DeliveryType.ARM_BALL, Length.FULL, Line.MIDDLE_STUMP,
                        "Payoff: skid on to pad or stumps"),
    ),
    (BowlerClass.SPIN, Phase.MIDDLE): TrapPattern(
        setup=(
            TrapStep(DeliveryType.OFF_BREAK, Length.GOOD, Line.OUTSIDE_OFF,
                     "Set-up: drive temptation with turn"),
            TrapStep(DeliveryType.CARROM_BALL, Length.GOOD, Line.FOURTH_STUMP,
                     "Set-up: show the other way"),
        ),
        payoff=TrapStep(DeliveryType.ARM_BALL, Length.FULL, Line.MIDDLE_STUMP,
                        "Payoff: skid on for lbw or bowled"),
    ),
    (BowlerClass.SPIN, Phase.DEATH): TrapPattern(
        setup=(
            TrapStep(DeliveryType.TOP_SPINNER, Length.GOOD, Line.OUTSIDE_OFF,
                     "Set-up: flat and quick on a wide line"),
            TrapStep(DeliveryType.OFF_BREAK, Length.GOOD, Line.FOURTH_STUMP,
                     "Set-up: keep them reaching"),
        ),
        payoff=TrapStep(DeliveryType.ARM_BALL, Length.FULL, Line.LEG_STUMP,
                        "Payoff: beat the sweep across the line"),
    ),
}

# Equivalent deliveries between the finger-spin and wrist-spin families
_TO_WRIST_SPIN = {
    DeliveryType.OFF_BREAK: DeliveryType.LEG_BREAK,
    DeliveryType.ARM_BALL: DeliveryType.SLIDER,
    DeliveryType.CARROM_BALL: DeliveryType.GOOGLY,
}
_TO_FINGER_SPIN = {v: k for k, v in _TO_WRIST_SPIN.items()}

_FAMILY_MIRROR = {
    Family.WRIST_SPIN: _TO_WRIST_SPIN,
    Family.FINGER_SPIN: _TO_FINGER_SPIN,
}


def trap_for(bowler_class: BowlerClass, phase: Phase) -> TrapPattern:
    return TRAP_LIBRARY[(bowler_class, phase)]


def _legal_step(step: TrapStep, family: Family) -> TrapStep:
    if step.delivery_type in FAMILY_TYPES[family]:
        return step
    mirrored = _FAMILY_MIRROR.get(family, {}).get(step.delivery_type)
    if mirrored is None:
        return step
    return replace(step, delivery_type=mirrored)


def resolve_trap(profile: BowlerProfile, phase: Phase) -> TrapPattern:
    """The trap for this bowler and phase, with every type legal for the bowler."""
    pattern = trap_for(bowler_class_of(profile.archetype), phase)
    family = profile.family
    return TrapPattern(
        setup=(_legal_step(pattern.setup[0], family), _legal_step(pattern.setup[1], family)),
        payoff=_legal_step(pattern.payoff, family),
    )
