"""
Bowler profile read by the planning engine, with dict serialization.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from bowling_lab.engine.taxonomy import Arm, Archetype, Family, family_of


def parse_archetype(value) -> Archetype:
    """
    Map free text to an Archetype. Unknown or missing values fall back to
    generic pace so a profile is always plannable.
    """
    if isinstance(value, Archetype):
        return value
    text = str(value or "").strip().lower().replace("_", "-")
    for archetype in Archetype:
        if text == archetype.value:
            return archetype

    compact = text.replace(" ", "-")
    if "wrist" in compact:
        return Archetype.LEFT_ARM_WRIST_SPIN
    if "orthodox" in compact:
        return Archetype.LEFT_ARM_ORTHODOX
    if "mystery" in compact:
        return Archetype.MYSTERY
    if "leg" in compact and ("spin" in compact or "break" in compact):
        return Archetype.LEG_SPIN
    if "off" in compact and ("spin" in compact or "break" in compact):
        return Archetype.OFF_SPIN
    if compact == "leg":
        return Archetype.LEG_SPIN
    if compact == "off":
        return Archetype.OFF_SPIN
    if "spin" in compact:
        return Archetype.LEFT_ARM_ORTHODOX if "left" in compact else Archetype.OFF_SPIN
    if "swing" in compact:
        return Archetype.SWING
    if "seam" in compact:
        return Archetype.SEAM
    if "left-arm" in compact or "leftarm" in compact:
        return Archetype.LEFT_ARM_PACE
    if "fast-medium" in compact or "medium-fast" in compact:
        return Archetype.FAST_MEDIUM
    if "fast" in compact:
        return Archetype.FAST
    if "medium" in compact:
        return Archetype.MEDIUM
    return Archetype.PACE


def parse_arm(value) -> Arm:
    if isinstance(value, Arm):
        return value
    text = str(value or "").strip().lower()
    if text.startswith("l"):
        return Arm.LEFT
    return Arm.RIGHT


def _as_list(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass
class BowlerProfile:
    id: str
    name: str
    arm: Arm = Arm.RIGHT
    archetype: Archetype = Archetype.PACE
    strengths: List[str] = field(default_factory=list)
    strategies: List[str] = field(default_factory=list)
    # Roster-only details, never read by the engine
    country: Optional[str] = None
    team: Optional[str] = None
    formats: List[str] = field(default_factory=list)
    pace_kph: Optional[str] = None
    is_legend: bool = False

    @property
    def family(self) -> Family:
        return family_of(self.archetype)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "arm": self.arm.value,
            "archetype": self.archetype.value,
            "strengths": list(self.strengths),
            "strategies": list(self.strategies),
            "country": self.country,
            "team": self.team,
            "formats": list(self.formats),
            "pace_kph": self.pace_kph,
            "is_legend": self.is_legend,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "BowlerProfile":
        name = str(d.get("name") or d.get("id") or "Unknown")
        return cls(
            id=str(d.get("id") or name),
            name=name,
            arm=parse_arm(d.get("arm")),
            archetype=parse_archetype(d.get("archetype") or d.get("type")),
            strengths=_as_list(d.get("strengths")),
            strategies=_as_list(d.get("strategies")),
            country=d.get("country"),
            team=d.get("team"),
            formats=_as_list(d.get("formats")),
            pace_kph=d.get("pace_kph"),
            is_legend=bool(d.get("is_legend", False)),
        )
