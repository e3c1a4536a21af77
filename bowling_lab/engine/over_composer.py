"""
Over Composer - builds a ball-by-ball delivery plan for one bowler.

Each call derives its own seed and stream, builds the weight pools once,
draws unique (type, length, line) triples with an anti-streak rule and
coherence corrections, then overwrites a mid-sequence window with the
bowler's scripted trap.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.purpose import describe_purpose
from bowling_lab.engine.random_source import Mulberry32, pick_weighted, seed_from_string
from bowling_lab.engine.taxonomy import (
    DeliveryType, Length, Line, Phase, Pitch, Triple, YORKER_LINES, is_spin,
    parse_phase, parse_pitch,
)
from bowling_lab.engine.traps import resolve_trap
from bowling_lab.engine.weights import WeightPools, build_weight_tables

logger = logging.getLogger(__name__)

BALLS_PER_OVER = 6
MIN_OVERS = 1
MAX_OVERS = 10
TRAP_STEP_LABELS = ("setup", "setup", "payoff")


@dataclass(frozen=True)
class Delivery:
    """One planned ball. Over and ball numbers are 1-based."""
    over: int
    ball: int
    delivery_type: DeliveryType
    length: Length
    line: Line
    purpose: str
    trap_step: Optional[str] = None

    @property
    def triple(self) -> Triple:
        return (self.delivery_type, self.length, self.line)

    def to_dict(self) -> dict:
        return {
            "over": self.over,
            "ball": self.ball,
            "type": self.delivery_type.value,
            "length": self.length.value,
            "line": self.line.value,
            "purpose": self.purpose,
            "trap_step": self.trap_step,
        }


@dataclass(frozen=True)
class DrawResult:
    triple: Triple
    forced: bool
    attempts: int


@dataclass
class OverPlan:
    bowler_id: str
    phase: Phase
    pitch: Pitch
    seed: int
    deliveries: List[Delivery] = field(default_factory=list)
    forced_draws: int = 0
    trap_start: Optional[int] = None

    @property
    def total_balls(self) -> int:
        return len(self.deliveries)


def clamp_overs(overs: int) -> int:
    return max(MIN_OVERS, min(MAX_OVERS, int(overs)))


def stamp(index: int) -> tuple:
    """(over, ball) for a 0-based ball index."""
    return index // BALLS_PER_OVER + 1, index % BALLS_PER_OVER + 1


class OverComposer:
    """Draws delivery sequences. Holds only tuning constants, no call state."""

    def __init__(self, max_attempts: int = 200, spin_short_remap: float = 0.6):
        self.max_attempts = max_attempts
        self.spin_short_remap = spin_short_remap

    @staticmethod
    def seed_for(bowler_id: str, phase: Phase, pitch: Pitch, total_balls: int, salt: str = "") -> int:
        return seed_from_string(f"{bowler_id}|{phase.value}|{pitch.value}|{total_balls}|{salt}")

    @staticmethod
    def coherent(triple: Triple) -> Triple:
        """Deterministic fix-ups: yorkers aimed at legal lines, bouncers short at the body."""
        delivery_type, length, line = triple
        if length == Length.YORKER and line not in YORKER_LINES:
            line = Line.OFF_STUMP
        if delivery_type == DeliveryType.BOUNCER:
            if length in (Length.FULL, Length.YORKER):
                length = Length.SHORT
            line = Line.AT_BODY
        return (delivery_type, length, line)

    def resolve(self, stream: Mulberry32, triple: Triple, is_spin: bool) -> Triple:
        delivery_type, length, line = self.coherent(triple)
        if is_spin and length == Length.SHORT and stream.next_float() < self.spin_short_remap:
            length = Length.BACK_OF_LENGTH
        return (delivery_type, length, line)

    def _fallback(self, type_pool, pools: WeightPools, used: Set[Triple]) -> Triple:
        for delivery_type, _ in type_pool:
            for length, _ in pools.lengths:
                for line, _ in pools.lines:
                    triple = self.coherent((delivery_type, length, line))
                    if triple not in used:
                        return triple
        return self.coherent((type_pool[0][0], pools.lengths[0][0], pools.lines[0][0]))

    def draw_unique(
        self,
        stream: Mulberry32,
        pools: WeightPools,
        used: Set[Triple],
        is_spin: bool = False,
        exclude_type: Optional[DeliveryType] = None,
    ) -> DrawResult:
        """
        Draw a triple not yet in ``used``.

        Redraws up to ``max_attempts`` times, then takes the first unused
        triple in pool order (or the first pool entries once every
        combination is spent). Never raises; ``forced`` reports the fallback.
        """
        type_pool = pools.without_type(exclude_type) if exclude_type else pools.types
        for attempt in range(1, self.max_attempts + 1):
            candidate = (
                pick_weighted(stream, type_pool),
                pick_weighted(stream, pools.lengths),
                pick_weighted(stream, pools.lines),
            )
            triple = self.resolve(stream, candidate, is_spin)
            if triple not in used:
                return DrawResult(triple=triple, forced=False, attempts=attempt)
        return DrawResult(
            triple=self._fallback(type_pool, pools, used),
            forced=True,
            attempts=self.max_attempts,
        )

    @staticmethod
    def _delivery(index: int, triple: Triple, purpose: str, trap_step: Optional[str] = None) -> Delivery:
        over, ball = stamp(index)
        delivery_type, length, line = triple
        return Delivery(
            over=over,
            ball=ball,
            delivery_type=delivery_type,
            length=length,
            line=line,
            purpose=purpose,
            trap_step=trap_step,
        )

    def compose_plan(self, bowler: BowlerProfile, total_balls: int, phase, pitch, salt: str = "") -> OverPlan:
        phase = parse_phase(phase)
        pitch = parse_pitch(pitch)
        total_balls = max(0, int(total_balls))
        seed = self.seed_for(bowler.id, phase, pitch, total_balls, str(salt))
        stream = Mulberry32(seed)
        pools = build_weight_tables(bowler, phase, pitch).pools()
        spin = is_spin(bowler.archetype)

        plan = OverPlan(bowler_id=bowler.id, phase=phase, pitch=pitch, seed=seed)
        used: Set[Triple] = set()
        recent: List[DeliveryType] = []

        for index in range(total_balls):
            # No third ball of the same type in a row when there is an alternative
            exclude = recent[-1] if len(recent) == 2 and recent[0] == recent[1] else None
            result = self.draw_unique(stream, pools, used, spin, exclude)
            if result.forced:
                plan.forced_draws += 1
                logger.debug("Fallback draw for %s at ball %d: %s", bowler.id, index, result.triple)
            used.add(result.triple)
            recent = (recent + [result.triple[0]])[-2:]
            purpose = describe_purpose(*result.triple, phase)
            plan.deliveries.append(self._delivery(index, result.triple, purpose))

        if total_balls >= BALLS_PER_OVER:
            trap = resolve_trap(bowler, phase)
            plan.trap_start = max(0, total_balls // 2 - 2)
            for offset, (step, label) in enumerate(zip(trap.steps, TRAP_STEP_LABELS)):
                index = plan.trap_start + offset
                plan.deliveries[index] = self._delivery(index, step.triple, step.purpose, label)

        return plan

    def compose(self, bowler: BowlerProfile, total_balls: int, phase, pitch, salt: str = "") -> List[Delivery]:
        return self.compose_plan(bowler, total_balls, phase, pitch, salt).deliveries

    def plan_overs(self, bowler: BowlerProfile, overs: int, phase, pitch, salt: str = "") -> List[Delivery]:
        """Single-bowler plan; overs are clamped to the supported range."""
        return self.compose(bowler, clamp_overs(overs) * BALLS_PER_OVER, phase, pitch, salt)


def compose(bowler: BowlerProfile, total_balls: int, phase, pitch, salt: str = "") -> List[Delivery]:
    return OverComposer().compose(bowler, total_balls, phase, pitch, salt)
