"""
Canonical delivery taxonomy for the planning engine.
Delivery types, lengths, lines, phases, pitches and bowler archetypes,
plus the archetype -> family mapping that decides which types are legal.
"""
import enum
from typing import Dict, FrozenSet, List, Tuple


class DeliveryType(enum.Enum):
    # Pace family
    STANDARD = "Standard"
    SLOWER = "Slower"
    OUTSWING = "Outswing"
    INSWING = "Inswing"
    CROSS_SEAM = "Cross seam"
    OFF_CUTTER = "Off cutter"
    LEG_CUTTER = "Leg cutter"
    BOUNCER = "Bouncer"
    # Spin family
    OFF_BREAK = "Off-break"
    ARM_BALL = "Arm ball"
    CARROM_BALL = "Carrom ball"
    LEG_BREAK = "Leg-break"
    GOOGLY = "Googly"
    TOP_SPINNER = "Top-spinner"
    SLIDER = "Slider"


class Length(enum.Enum):
    FULL = "Full"
    GOOD = "Good"
    SHORT = "Short"
    YORKER = "Yorker"
    BACK_OF_LENGTH = "Back-of-length"


class Line(enum.Enum):
    OFF_STUMP = "Off stump"
    MIDDLE_STUMP = "Middle stump"
    LEG_STUMP = "Leg stump"
    FOURTH_STUMP = "4th stump"
    FIFTH_STUMP = "5th stump"
    OUTSIDE_OFF = "Outside off"
    WIDE_OUTSIDE_OFF = "Wide outside off"
    AT_BODY = "At body"
    OUTSIDE_LEG = "Outside leg"


class Phase(enum.Enum):
    POWERPLAY = "powerplay"
    MIDDLE = "middle"
    DEATH = "death"


class Pitch(enum.Enum):
    NORMAL = "Normal"   # flat deck
    GREEN = "Green"
    DUSTY = "Dusty"
    DRY = "Dry"


class Arm(enum.Enum):
    RIGHT = "R"
    LEFT = "L"


class Archetype(enum.Enum):
    PACE = "pace"
    FAST = "fast"
    FAST_MEDIUM = "fast-medium"
    MEDIUM = "medium"
    SEAM = "seam"
    SWING = "swing"
    LEFT_ARM_PACE = "left-arm pace"
    OFF_SPIN = "off-spin"
    LEFT_ARM_ORTHODOX = "left-arm orthodox"
    LEG_SPIN = "leg-spin"
    LEFT_ARM_WRIST_SPIN = "left-arm wrist-spin"
    MYSTERY = "mystery"


class Family(enum.Enum):
    PACE = "pace"
    FINGER_SPIN = "finger_spin"
    WRIST_SPIN = "wrist_spin"
    MYSTERY_SPIN = "mystery_spin"


class BowlerClass(enum.Enum):
    """Coarse pace/spin split used to key trap patterns."""
    PACE = "pace"
    SPIN = "spin"


PACE_TYPES: List[DeliveryType] = [
    DeliveryType.STANDARD,
    DeliveryType.SLOWER,
    DeliveryType.OUTSWING,
    DeliveryType.INSWING,
    DeliveryType.CROSS_SEAM,
    DeliveryType.OFF_CUTTER,
    DeliveryType.LEG_CUTTER,
    DeliveryType.BOUNCER,
]

SPIN_TYPES: List[DeliveryType] = [
    DeliveryType.OFF_BREAK,
    DeliveryType.ARM_BALL,
    DeliveryType.CARROM_BALL,
    DeliveryType.LEG_BREAK,
    DeliveryType.GOOGLY,
    DeliveryType.TOP_SPINNER,
    DeliveryType.SLIDER,
]

ARCHETYPE_FAMILY: Dict[Archetype, Family] = {
    Archetype.PACE: Family.PACE,
    Archetype.FAST: Family.PACE,
    Archetype.FAST_MEDIUM: Family.PACE,
    Archetype.MEDIUM: Family.PACE,
    Archetype.SEAM: Family.PACE,
    Archetype.SWING: Family.PACE,
    Archetype.LEFT_ARM_PACE: Family.PACE,
    Archetype.OFF_SPIN: Family.FINGER_SPIN,
    Archetype.LEFT_ARM_ORTHODOX: Family.FINGER_SPIN,
    Archetype.LEG_SPIN: Family.WRIST_SPIN,
    Archetype.LEFT_ARM_WRIST_SPIN: Family.WRIST_SPIN,
    Archetype.MYSTERY: Family.MYSTERY_SPIN,
}

FAMILY_TYPES: Dict[Family, FrozenSet[DeliveryType]] = {
    Family.PACE: frozenset(PACE_TYPES),
    Family.FINGER_SPIN: frozenset({
        DeliveryType.OFF_BREAK,
        DeliveryType.ARM_BALL,
        DeliveryType.CARROM_BALL,
        DeliveryType.TOP_SPINNER,
    }),
    Family.WRIST_SPIN: frozenset({
        DeliveryType.LEG_BREAK,
        DeliveryType.GOOGLY,
        DeliveryType.TOP_SPINNER,
        DeliveryType.SLIDER,
    }),
    Family.MYSTERY_SPIN: frozenset(SPIN_TYPES),
}

# Restored when every type weight ends up at zero
FAMILY_DEFAULT_TYPE: Dict[Family, DeliveryType] = {
    Family.PACE: DeliveryType.STANDARD,
    Family.FINGER_SPIN: DeliveryType.OFF_BREAK,
    Family.WRIST_SPIN: DeliveryType.LEG_BREAK,
    Family.MYSTERY_SPIN: DeliveryType.OFF_BREAK,
}

DEFAULT_LENGTH = Length.GOOD
DEFAULT_LINE = Line.OFF_STUMP

# Lines a yorker may be aimed at: the stumps or the off-side wide channel
YORKER_LINES: FrozenSet[Line] = frozenset({
    Line.OFF_STUMP,
    Line.MIDDLE_STUMP,
    Line.LEG_STUMP,
    Line.OUTSIDE_OFF,
    Line.WIDE_OUTSIDE_OFF,
})

Triple = Tuple[DeliveryType, Length, Line]


def family_of(archetype: Archetype) -> Family:
    return ARCHETYPE_FAMILY.get(archetype, Family.PACE)


def bowler_class_of(archetype: Archetype) -> BowlerClass:
    if family_of(archetype) == Family.PACE:
        return BowlerClass.PACE
    return BowlerClass.SPIN


def legal_types(archetype: Archetype) -> FrozenSet[DeliveryType]:
    """Delivery types a bowler of this archetype may be planned to bowl."""
    return FAMILY_TYPES[family_of(archetype)]


def is_spin(archetype: Archetype) -> bool:
    return bowler_class_of(archetype) == BowlerClass.SPIN


def parse_phase(value) -> Phase:
    """Accept a Phase, its value, or its name (any case)."""
    if isinstance(value, Phase):
        return value
    text = str(value).strip().lower()
    for phase in Phase:
        if text in (phase.value, phase.name.lower()):
            return phase
    raise ValueError(f"Unknown phase: {value!r}")


def parse_pitch(value) -> Pitch:
    """Accept a Pitch, its value or name; 'flat' is an alias of Normal."""
    if isinstance(value, Pitch):
        return value
    text = str(value).strip().lower()
    if text == "flat":
        return Pitch.NORMAL
    for pitch in Pitch:
        if text in (pitch.value.lower(), pitch.name.lower()):
            return pitch
    raise ValueError(f"Unknown pitch: {value!r}")
