"""
Weight tables for delivery type, length and line.

Tables start from a family/phase-neutral base and are adjusted by an ordered
pipeline of additive layers (strength keywords, strategy notes, handedness,
phase, pitch, spin). A single finalisation step then clamps negatives, zeroes
types outside the bowler's family and restores a safe default if a table
would otherwise be all zero.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Tuple

from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.taxonomy import (
    Arm, DeliveryType, Family, Length, Line, Phase, Pitch,
    DEFAULT_LENGTH, DEFAULT_LINE, FAMILY_DEFAULT_TYPE, FAMILY_TYPES,
)


@dataclass(frozen=True)
class KeywordBoost:
    """Substring keywords and the deltas they add when a tag contains one."""
    keywords: Tuple[str, ...]
    types: Dict[DeliveryType, float] = field(default_factory=dict)
    lengths: Dict[Length, float] = field(default_factory=dict)


STRENGTH_KEYWORDS: List[KeywordBoost] = [
    KeywordBoost(("yorker",), types={DeliveryType.STANDARD: 0.2}, lengths={Length.YORKER: 0.8}),
    KeywordBoost(("outswing", "away swing", "away-swing"), types={DeliveryType.OUTSWING: 1.5}),
    KeywordBoost(("inswing", "in-swing", "inducker"), types={DeliveryType.INSWING: 1.5}),
    KeywordBoost(("swing",), types={DeliveryType.OUTSWING: 0.5, DeliveryType.INSWING: 0.5}),
    KeywordBoost(("wobble", "seam"), types={DeliveryType.CROSS_SEAM: 1.2, DeliveryType.STANDARD: 0.4}),
    KeywordBoost(("cutter",), types={DeliveryType.OFF_CUTTER: 1.2, DeliveryType.LEG_CUTTER: 1.2}),
    KeywordBoost(("bouncer", "bumper", "short ball"),
                 types={DeliveryType.BOUNCER: 1.2}, lengths={Length.SHORT: 0.3}),
    KeywordBoost(("slower", "change of pace", "change-of-pace", "knuckle"),
                 types={DeliveryType.SLOWER: 1.2}),
    KeywordBoost(("hard length", "hard 4th", "back of length", "back-of-length"),
                 lengths={Length.BACK_OF_LENGTH: 0.6}),
    KeywordBoost(("full",), lengths={Length.FULL: 0.5}),
    KeywordBoost(("arm ball", "arm-ball"), types={DeliveryType.ARM_BALL: 1.5}),
    KeywordBoost(("carrom",), types={DeliveryType.CARROM_BALL: 1.5}),
    KeywordBoost(("googly", "wrong'un", "wrongun"), types={DeliveryType.GOOGLY: 1.5}),
    KeywordBoost(("top-spin", "top spin", "topspin"), types={DeliveryType.TOP_SPINNER: 1.0}),
    KeywordBoost(("leg-break", "leg break", "legbreak"), types={DeliveryType.LEG_BREAK: 1.0}),
    KeywordBoost(("off-break", "off break", "offbreak"), types={DeliveryType.OFF_BREAK: 1.0}),
    KeywordBoost(("slider", "flipper"), types={DeliveryType.SLIDER: 1.0}),
]

# Strategy notes reuse the keyword table at a reduced scale
STRATEGY_SCALE = 0.25
LEFT_ARM_INSWING_BOOST = 0.3

_PHASE_LENGTHS: Dict[Phase, Dict[Length, float]] = {
    Phase.POWERPLAY: {Length.GOOD: 0.6, Length.BACK_OF_LENGTH: 0.3, Length.FULL: 0.3},
    Phase.MIDDLE: {Length.GOOD: 0.4, Length.BACK_OF_LENGTH: 0.4},
    Phase.DEATH: {Length.YORKER: 1.6, Length.SHORT: 0.6, Length.FULL: 0.3},
}

_PHASE_LINES: Dict[Phase, Dict[Line, float]] = {
    Phase.POWERPLAY: {Line.FOURTH_STUMP: 0.4, Line.OFF_STUMP: 0.3},
    Phase.MIDDLE: {},
    Phase.DEATH: {Line.WIDE_OUTSIDE_OFF: 1.0, Line.OUTSIDE_OFF: 0.6, Line.AT_BODY: 0.4},
}

_PITCH_TYPES: Dict[Pitch, Dict[DeliveryType, float]] = {
    Pitch.NORMAL: {},
    Pitch.GREEN: {DeliveryType.CROSS_SEAM: 0.6, DeliveryType.STANDARD: 0.3},
    Pitch.DUSTY: {
        DeliveryType.OFF_CUTTER: 0.7,
        DeliveryType.LEG_CUTTER: 0.7,
        DeliveryType.OFF_BREAK: 0.5,
        DeliveryType.LEG_BREAK: 0.5,
    },
    Pitch.DRY: {DeliveryType.SLOWER: 0.4},
}

_PITCH_LENGTHS: Dict[Pitch, Dict[Length, float]] = {
    Pitch.NORMAL: {Length.YORKER: 0.2},
    Pitch.GREEN: {Length.BACK_OF_LENGTH: 0.5},
    Pitch.DUSTY: {Length.BACK_OF_LENGTH: 0.3, Length.FULL: 0.2, Length.GOOD: 0.2},
    Pitch.DRY: {Length.YORKER: 0.5},
}

_PITCH_LINES: Dict[Pitch, Dict[Line, float]] = {
    Pitch.NORMAL: {},
    Pitch.GREEN: {},
    Pitch.DUSTY: {},
    Pitch.DRY: {Line.WIDE_OUTSIDE_OFF: 0.6},
}

_SPIN_LENGTHS = {Length.GOOD: 0.4, Length.SHORT: -0.5, Length.YORKER: -0.8}
_SPIN_LINES = {Line.OUTSIDE_OFF: 0.4, Line.LEG_STUMP: 0.3}

# Common attacking channels on top of a low uniform line base
_LINE_BASE = 0.5
_ATTACKING_LINES = {
    Line.OFF_STUMP: 0.8,
    Line.MIDDLE_STUMP: 0.6,
    Line.FOURTH_STUMP: 0.8,
    Line.FIFTH_STUMP: 0.5,
}


@dataclass
class WeightContext:
    profile: BowlerProfile
    phase: Phase
    pitch: Pitch

    @property
    def family(self) -> Family:
        return self.profile.family

    @property
    def is_spin(self) -> bool:
        return self.family != Family.PACE


@dataclass
class WeightPools:
    """Positive-weight (item, weight) lists in enumeration order."""
    types: List[Tuple[DeliveryType, float]]
    lengths: List[Tuple[Length, float]]
    lines: List[Tuple[Line, float]]

    def without_type(self, excluded: DeliveryType) -> List[Tuple[DeliveryType, float]]:
        """Type pool minus one type, or the full pool if nothing else is left."""
        rest = [(t, w) for t, w in self.types if t != excluded]
        return rest or self.types


@dataclass
class WeightTables:
    types: Dict[DeliveryType, float]
    lengths: Dict[Length, float]
    lines: Dict[Line, float]

    def pools(self) -> WeightPools:
        return WeightPools(
            types=_positive(self.types, DeliveryType),
            lengths=_positive(self.lengths, Length),
            lines=_positive(self.lines, Line),
        )


Layer = Callable[[WeightContext, WeightTables], None]


def _positive(weights: dict, enum_cls) -> list:
    return [(item, weights[item]) for item in enum_cls if weights.get(item, 0.0) > 0]


def _bump(weights: dict, deltas: dict, scale: float = 1.0) -> None:
    for key, delta in deltas.items():
        weights[key] = weights.get(key, 0.0) + delta * scale


def _normalize_tag(tag: str) -> str:
    text = str(tag).lower()
    for dash in ("\u2010", "\u2011", "\u2012", "\u2013", "\u2014"):
        text = text.replace(dash, "-")
    return text.replace("\u2019", "'")


def _apply_keywords(tables: WeightTables, tags: Iterable[str], scale: float) -> None:
    for tag in tags:
        text = _normalize_tag(tag)
        for boost in STRENGTH_KEYWORDS:
            if any(k in text for k in boost.keywords):
                _bump(tables.types, boost.types, scale)
                _bump(tables.lengths, boost.lengths, scale)


# ================================================================
# LAYERS
# ================================================================

def _base_tables(ctx: WeightContext) -> WeightTables:
    legal = FAMILY_TYPES[ctx.family]
    types = {t: (1.0 if t in legal else 0.0) for t in DeliveryType}
    lengths = {length: 1.0 for length in Length}
    lines = {line: _LINE_BASE for line in Line}
    _bump(lines, _ATTACKING_LINES)
    return WeightTables(types=types, lengths=lengths, lines=lines)


def strength_layer(ctx: WeightContext, tables: WeightTables) -> None:
    _apply_keywords(tables, ctx.profile.strengths, 1.0)


def strategy_layer(ctx: WeightContext, tables: WeightTables) -> None:
    _apply_keywords(tables, ctx.profile.strategies, STRATEGY_SCALE)


def handedness_layer(ctx: WeightContext, tables: WeightTables) -> None:
    if ctx.profile.arm == Arm.LEFT and not ctx.is_spin:
        _bump(tables.types, {DeliveryType.INSWING: LEFT_ARM_INSWING_BOOST})


def phase_layer(ctx: WeightContext, tables: WeightTables) -> None:
    _bump(tables.lengths, _PHASE_LENGTHS[ctx.phase])
    _bump(tables.lines, _PHASE_LINES[ctx.phase])


def pitch_layer(ctx: WeightContext, tables: WeightTables) -> None:
    _bump(tables.types, _PITCH_TYPES[ctx.pitch])
    _bump(tables.lengths, _PITCH_LENGTHS[ctx.pitch])
    _bump(tables.lines, _PITCH_LINES[ctx.pitch])


def spin_layer(ctx: WeightContext, tables: WeightTables) -> None:
    if ctx.is_spin:
        _bump(tables.lengths, _SPIN_LENGTHS)
        _bump(tables.lines, _SPIN_LINES)


LAYERS: List[Layer] = [
    strength_layer,
    strategy_layer,
    handedness_layer,
    phase_layer,
    pitch_layer,
    spin_layer,
]


def finalize_tables(ctx: WeightContext, tables: WeightTables) -> WeightTables:
    """Clamp, enforce family legality and keep every table non-zero."""
    legal = FAMILY_TYPES[ctx.family]
    for t in DeliveryType:
        weight = tables.types.get(t, 0.0)
        tables.types[t] = max(0.0, weight) if t in legal else 0.0
    for length in Length:
        tables.lengths[length] = max(0.0, tables.lengths.get(length, 0.0))
    for line in Line:
        tables.lines[line] = max(0.0, tables.lines.get(line, 0.0))

    if not any(w > 0 for w in tables.types.values()):
        tables.types[FAMILY_DEFAULT_TYPE[ctx.family]] = 1.0
    if not any(w > 0 for w in tables.lengths.values()):
        tables.lengths[DEFAULT_LENGTH] = 1.0
    if not any(w > 0 for w in tables.lines.values()):
        tables.lines[DEFAULT_LINE] = 1.0
    return tables


def build_weight_tables(
    profile: BowlerProfile,
    phase: Phase,
    pitch: Pitch,
    layers: List[Layer] = None,
) -> WeightTables:
    """Pure function of (profile, phase, pitch); no shared state."""
    ctx = WeightContext(profile=profile, phase=phase, pitch=pitch)
    tables = _base_tables(ctx)
    for layer in (LAYERS if layers is None else layers):
        layer(ctx, tables)
    return finalize_tables(ctx, tables)
