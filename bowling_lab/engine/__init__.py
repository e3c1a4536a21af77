from bowling_lab.engine.over_composer import OverComposer, Delivery, OverPlan
from bowling_lab.engine.spell_scheduler import SpellScheduler, SpellItem, SpellPlan
from bowling_lab.engine.profile import BowlerProfile

__all__ = [
    "OverComposer", "Delivery", "OverPlan",
    "SpellScheduler", "SpellItem", "SpellPlan",
    "BowlerProfile",
]
