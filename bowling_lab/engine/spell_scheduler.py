"""
Spell Scheduler - interleaves several bowlers into one over-by-over spell.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from bowling_lab.engine.over_composer import BALLS_PER_OVER, Delivery, OverComposer
from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.taxonomy import parse_phase, parse_pitch


@dataclass
class SpellItem:
    bowler: BowlerProfile
    overs: int


@dataclass
class SpellPlan:
    deliveries: List[Delivery] = field(default_factory=list)
    over_to_bowler: Dict[int, str] = field(default_factory=dict)

    @property
    def total_overs(self) -> int:
        return len(self.over_to_bowler)

    def overs_for(self, bowler_id: str) -> List[int]:
        return [over for over, bid in self.over_to_bowler.items() if bid == bowler_id]


def item_order(items: Sequence[SpellItem]) -> List[int]:
    """
    Round-robin over the items in their given order, one over per pass per
    item with overs remaining. Returns item positions:
    [(A,2),(B,2)] -> [0,1,0,1]; [(A,3),(B,1)] -> [0,1,0,0].
    """
    remaining = [max(0, int(item.overs)) for item in items]
    order: List[int] = []
    while any(r > 0 for r in remaining):
        for i in range(len(items)):
            if remaining[i] > 0:
                order.append(i)
                remaining[i] -= 1
    return order


def over_order(items: Sequence[SpellItem]) -> List[str]:
    """Bowler id for each over of the spell, in bowling order."""
    return [items[i].bowler.id for i in item_order(items)]


class SpellScheduler:
    def __init__(self, composer: Optional[OverComposer] = None):
        self.composer = composer or OverComposer()

    def schedule(self, items: Sequence[SpellItem], phase, pitch) -> SpellPlan:
        phase = parse_phase(phase)
        pitch = parse_pitch(pitch)
        plan = SpellPlan()
        for position, index in enumerate(item_order(items), start=1):
            bowler = items[index].bowler
            plan.over_to_bowler[position] = bowler.id
            # Salt by global over so repeat overs from one bowler differ
            one_over = self.composer.compose(
                bowler, BALLS_PER_OVER, phase, pitch, salt=f"over:{position}"
            )
            plan.deliveries.extend(replace(d, over=position) for d in one_over)
        return plan


def schedule(items: Sequence[SpellItem], phase, pitch) -> SpellPlan:
    return SpellScheduler().schedule(items, phase, pitch)
