from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bowling_lab.database import get_db
from bowling_lab.engine import SpellScheduler, SpellItem
from bowling_lab.engine.taxonomy import parse_phase, parse_pitch
from bowling_lab.api.plan import resolve_bowler, delivery_responses
from bowling_lab.api.schemas import SpellRequest, SpellResponse

router = APIRouter(prefix="/spell", tags=["Spells"])


@router.post("", response_model=SpellResponse)
def generate_spell(request: SpellRequest, db: Session = Depends(get_db)):
    """Interleave several bowlers round-robin and plan every over"""
    items = [
        SpellItem(bowler=resolve_bowler(item.bowler_id, item.bowler, db), overs=item.overs)
        for item in request.items
    ]
    phase = parse_phase(request.phase.value)
    pitch = parse_pitch(request.pitch.value)

    spell = SpellScheduler().schedule(items, phase, pitch)
    return SpellResponse(
        phase=phase.value,
        pitch=pitch.value,
        total_overs=spell.total_overs,
        over_to_bowler=spell.over_to_bowler,
        deliveries=delivery_responses(spell.deliveries),
    )
