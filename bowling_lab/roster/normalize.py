"""
Field normalisation for raw roster rows (JSON objects or CSV records).
Rows are only dropped when they have neither id nor name; everything else
is coerced to something the planner can use.
"""
import re
from typing import Dict, List, Optional

from bowling_lab.engine.profile import BowlerProfile, parse_archetype, parse_arm
from bowling_lab.engine.taxonomy import Archetype, Family, family_of

FORMAT_ORDER = ["T20I", "ODI", "Test"]

# Header spellings seen across roster sources, keyed by profile field
FIELD_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "bowler_id", "slug"],
    "name": ["name", "bowler", "player"],
    "country": ["country"],
    "team": ["iplteam", "ipl_team", "team"],
    "formats": ["formats", "formats_active"],
    "arm": ["arm", "handedness"],
    "type": ["archetype", "type", "bowling_type", "category"],
    "pace_spin": ["pace_spin", "style"],
    "pace_kph": ["pacekph", "pace_kph", "ball_speed_kph", "speed"],
    "strengths": ["strengths"],
    "strategies": ["strategies"],
    "is_legend": ["islegend", "is_legend", "legend"],
}

_INVISIBLE = re.compile("[\u00a0\u200b\u200c\u200d\ufeff]")


def safe_str(value) -> str:
    if value is None:
        return ""
    return _INVISIBLE.sub("", str(value)).strip()


def opt_str(value) -> Optional[str]:
    s = safe_str(value)
    return s or None


def to_string_list(value, separators: str = r"[|;,]") -> List[str]:
    if isinstance(value, (list, tuple)):
        return [safe_str(v) for v in value if safe_str(v)]
    s = safe_str(value)
    if not s:
        return []
    return [part.strip() for part in re.split(separators, s) if part.strip()]


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return safe_str(value).lower() in ("1", "true", "yes", "y", "legend")


def dedupe_strings(items: List[str]) -> List[str]:
    seen = set()
    out = []
    for item in items:
        key = item.strip().lower()
        if key and key not in seen:
            seen.add(key)
            out.append(item.strip())
    return out


def title_case(name: str) -> str:
    """Capitalise each word unless it already carries inner capitals (McGrath)."""
    words = []
    for word in name.split(" "):
        if any(c.isupper() for c in word[1:]):
            words.append(word)
        else:
            words.append(word[:1].upper() + word[1:])
    return " ".join(words)


def slug_id(value: str) -> str:
    return re.sub(r"\s+", "_", safe_str(value).lower())


def normalize_formats(value) -> List[str]:
    found = set()
    for raw in to_string_list(value):
        s = raw.strip().lower()
        if s == "test":
            found.add("Test")
        elif s == "odi":
            found.add("ODI")
        elif s in ("t20", "t20i") or re.fullmatch(r"ipl\s*only", s):
            found.add("T20I")
    return [f for f in FORMAT_ORDER if f in found]


def derive_archetype(type_hint: str, style_hint: str = "") -> Archetype:
    """Archetype from the bowling type column, then from the pace/spin style."""
    for hint in (type_hint, style_hint):
        if not hint:
            continue
        archetype = parse_archetype(hint)
        if archetype != Archetype.PACE or "pace" in hint.lower():
            return archetype
    return Archetype.PACE


def derive_strengths(archetype: Archetype, style: str = "") -> List[str]:
    style = style.lower()
    family = family_of(archetype)
    if archetype in (Archetype.SWING, Archetype.LEFT_ARM_PACE):
        return ["New-ball outswing", "Occasional inswing at the stumps", "Full lengths to draw drives"]
    if family == Family.PACE:
        change_up = "Disguised cutters" if "cutter" in style else "Well-disguised change of pace"
        return ["Hard length into the pitch", "Accurate yorkers", change_up]
    if family == Family.FINGER_SPIN:
        return ["Tight stump-to-stump lines", "Arm-ball variation", "Changes of pace and trajectory"]
    if family == Family.WRIST_SPIN:
        return ["Quick leg-break", "Deceptive googly", "Top-spinner for bounce"]
    return ["Carrom ball", "Googly out of the front of the hand", "Flat skidding slider"]


def derive_strategies(archetype: Archetype, style: str = "") -> List[str]:
    style = style.lower()
    family = family_of(archetype)
    if archetype in (Archetype.SWING, Archetype.LEFT_ARM_PACE):
        return ["Set up with two or three outswingers, then the full inswinger at middle and leg."]
    if family == Family.PACE:
        if "yorker" in style:
            return ["Powerplay: hard 4th stump. Death: yorker, bouncer, then the wide yorker."]
        return ["Hard length to set up, then the surprise yorker or back-of-length into the body."]
    if family == Family.FINGER_SPIN:
        return ["Tie them down on middle and leg, then sneak the arm ball after a wider flighted one."]
    if family == Family.WRIST_SPIN:
        return ["Two leg-breaks on 4th stump, then a fuller googly at the pads or top of off."]
    return ["Hide the variation: stock ball twice, then the carrom ball on a fuller length."]


def _lookup(row: Dict[str, object], field: str):
    for alias in FIELD_ALIASES[field]:
        if alias in row and row[alias] not in (None, ""):
            return row[alias]
    return None


def normalize_record(raw: Dict[str, object]) -> Optional[BowlerProfile]:
    """One raw row to a BowlerProfile, or None when it has no id and no name."""
    row = {str(k).strip().lower(): v for k, v in raw.items()}

    name = title_case(safe_str(_lookup(row, "name")))
    bowler_id = slug_id(_lookup(row, "id") or name)
    if not bowler_id or not (name or _lookup(row, "id")):
        return None

    style = safe_str(_lookup(row, "pace_spin"))
    archetype = derive_archetype(safe_str(_lookup(row, "type")), style)

    strengths = dedupe_strings(to_string_list(_lookup(row, "strengths")))
    strategies = dedupe_strings(to_string_list(_lookup(row, "strategies"), r"[|;]"))

    return BowlerProfile(
        id=bowler_id,
        name=name or bowler_id,
        arm=parse_arm(_lookup(row, "arm")),
        archetype=archetype,
        strengths=strengths or derive_strengths(archetype, style),
        strategies=strategies or derive_strategies(archetype, style),
        country=opt_str(_lookup(row, "country")),
        team=opt_str(_lookup(row, "team")),
        formats=normalize_formats(_lookup(row, "formats")),
        pace_kph=opt_str(_lookup(row, "pace_kph")),
        is_legend=parse_bool(_lookup(row, "is_legend")),
    )
