"""
Purpose annotator: turns a resolved (type, length, line, phase) into a
short tactical note. Rules are checked in order, most specific first.
"""
from dataclasses import dataclass
from typing import Callable, List

from bowling_lab.engine.taxonomy import DeliveryType, Length, Line, Phase

_STUMP_LINES = {Line.OFF_STUMP, Line.MIDDLE_STUMP, Line.LEG_STUMP}
_WIDE_OFF_LINES = {Line.OUTSIDE_OFF, Line.WIDE_OUTSIDE_OFF}
_CHANNEL_LINES = {Line.FOURTH_STUMP, Line.OFF_STUMP}


@dataclass(frozen=True)
class PurposeRule:
    matches: Callable[[DeliveryType, Length, Line, Phase], bool]
    text: str


PURPOSE_RULES: List[PurposeRule] = [
    # Yorker length + line
    PurposeRule(lambda t, l, n, p: l == Length.YORKER and n in _WIDE_OFF_LINES,
                "Wide yorker: deny room and leverage, force the toe-end"),
    PurposeRule(lambda t, l, n, p: l == Length.YORKER and n in _STUMP_LINES,
                "Stump yorker: attack the base of the stumps and the toes"),
    # Short stuff
    PurposeRule(lambda t, l, n, p: (t == DeliveryType.BOUNCER or l == Length.SHORT) and n == Line.AT_BODY,
                "Body bouncer: rush the hook and pull for a top edge"),
    PurposeRule(lambda t, l, n, p: (t == DeliveryType.BOUNCER or l == Length.SHORT) and n == Line.OFF_STUMP,
                "Shoulder-high on off: glove or edge to the ring"),
    PurposeRule(lambda t, l, n, p: t == DeliveryType.BOUNCER or l == Length.SHORT,
                "Change-up bouncer: upset their length read"),
    # Pace types
    PurposeRule(lambda t, l, n, p: t == DeliveryType.OUTSWING and n in _CHANNEL_LINES,
                "Shape away at 4th/off stump: draw the drive and the outside edge"),
    PurposeRule(lambda t, l, n, p: t == DeliveryType.INSWING and n in (Line.MIDDLE_STUMP, Line.LEG_STUMP),
                "Bring it back in at the stumps: play across it, lbw or bowled"),
    PurposeRule(lambda t, l, n, p: t == DeliveryType.CROSS_SEAM and l in (Length.BACK_OF_LENGTH, Length.GOOD),
                "Cross seam into the deck: variable bounce for a miscue"),
    PurposeRule(lambda t, l, n, p: t in (DeliveryType.OFF_CUTTER, DeliveryType.LEG_CUTTER),
                "Cutter into the surface: grip and hold to beat the timing"),
    PurposeRule(lambda t, l, n, p: t == DeliveryType.SLOWER,
                "Take pace off: toe-end or sky one to the deep"),
    # Spin types
    PurposeRule(lambda t, l, n, p: t in (DeliveryType.OFF_BREAK, DeliveryType.LEG_BREAK) and n in _WIDE_OFF_LINES,
                "Tease the drive with turn: edge to slip or the ring"),
    PurposeRule(lambda t, l, n, p: t in (DeliveryType.ARM_BALL, DeliveryType.SLIDER)
                and n in (Line.MIDDLE_STUMP, Line.LEG_STUMP),
                "Skid on without turn: pad and stumps in play"),
    PurposeRule(lambda t, l, n, p: t == DeliveryType.GOOGLY and n in _CHANNEL_LINES,
                "Wrong'un across the bat face: inside edge or lbw"),
    PurposeRule(lambda t, l, n, p: t == DeliveryType.CARROM_BALL,
                "Flick it the other way: find the outside edge"),
    PurposeRule(lambda t, l, n, p: t == DeliveryType.TOP_SPINNER,
                "Dip and extra bounce: bat-pad or a close catch"),
    # Phase framing
    PurposeRule(lambda t, l, n, p: p == Phase.DEATH and n in _WIDE_OFF_LINES,
                "Death plan: outside-off channel to protect the leg-side boundary"),
    PurposeRule(lambda t, l, n, p: p == Phase.POWERPLAY and n in _CHANNEL_LINES,
                "New-ball channel: challenge the outside edge"),
    PurposeRule(lambda t, l, n, p: p == Phase.MIDDLE and l in (Length.GOOD, Length.BACK_OF_LENGTH),
                "Squeeze: hold the length and build dot-ball pressure"),
]


def fallback_purpose(delivery_type: DeliveryType, length: Length, line: Line) -> str:
    return f"{delivery_type.value} • {length.value} at {line.value}"


def describe_purpose(delivery_type: DeliveryType, length: Length, line: Line, phase: Phase) -> str:
    for rule in PURPOSE_RULES:
        if rule.matches(delivery_type, length, line, phase):
            return rule.text
    return fallback_purpose(delivery_type, length, line)
