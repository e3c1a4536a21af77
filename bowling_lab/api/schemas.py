"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from enum import Enum

from bowling_lab.engine.profile import BowlerProfile


# Enums
class PhaseEnum(str, Enum):
    POWERPLAY = "powerplay"
    MIDDLE = "middle"
    DEATH = "death"


class PitchEnum(str, Enum):
    NORMAL = "Normal"
    GREEN = "Green"
    DUSTY = "Dusty"
    DRY = "Dry"


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


# Bowler Schemas
class BowlerIn(BaseModel):
    """Inline bowler profile for planning without a stored roster."""
    id: str
    name: str
    arm: str = "R"
    archetype: str = "pace"
    strengths: List[str] = []
    strategies: List[str] = []

    def to_profile(self) -> BowlerProfile:
        return BowlerProfile.from_dict(self.model_dump())


class BowlerResponse(BaseModel):
    id: str
    name: str
    arm: str
    archetype: str
    strengths: List[str]
    strategies: List[str]
    country: Optional[str] = None
    team: Optional[str] = None
    formats: List[str] = []
    pace_kph: Optional[str] = None
    is_legend: bool = False

    @classmethod
    def from_profile(cls, profile: BowlerProfile) -> "BowlerResponse":
        return cls(**profile.to_dict())


# Plan Schemas
class PlanRequest(BaseModel):
    bowler_id: Optional[str] = None
    bowler: Optional[BowlerIn] = None
    overs: int = Field(4, ge=1, le=10)
    phase: PhaseEnum = PhaseEnum.POWERPLAY
    pitch: PitchEnum = PitchEnum.NORMAL
    salt: str = ""


class DeliveryResponse(BaseModel):
    over: int
    ball: int
    type: str
    length: str
    line: str
    purpose: str
    trap_step: Optional[str] = None


class PlanResponse(BaseModel):
    bowler_id: str
    bowler_name: str
    phase: str
    pitch: str
    overs: int
    seed: int
    deliveries: List[DeliveryResponse]


# Spell Schemas
class SpellItemRequest(BaseModel):
    bowler_id: Optional[str] = None
    bowler: Optional[BowlerIn] = None
    overs: int = Field(..., ge=1, le=10)


class SpellRequest(BaseModel):
    items: List[SpellItemRequest] = Field(..., min_length=1)
    phase: PhaseEnum = PhaseEnum.MIDDLE
    pitch: PitchEnum = PitchEnum.NORMAL


class SpellResponse(BaseModel):
    phase: str
    pitch: str
    total_overs: int
    over_to_bowler: Dict[int, str]
    deliveries: List[DeliveryResponse]


# Roster Schemas
class RosterRefreshRequest(BaseModel):
    url: Optional[str] = None
    force: bool = False


class RosterLoadResponse(BaseModel):
    loaded: int
    fingerprint: str
    collisions: Dict[str, int] = {}
    skipped: bool = False
