from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Optional

from bowling_lab.database import get_db
from bowling_lab.engine import OverComposer, BowlerProfile
from bowling_lab.engine.over_composer import BALLS_PER_OVER
from bowling_lab.engine.taxonomy import parse_phase, parse_pitch
from bowling_lab.export import export_filename, plan_to_csv, plan_to_json
from bowling_lab.roster import RosterStore
from bowling_lab.api.schemas import (
    BowlerIn, PlanRequest, PlanResponse, DeliveryResponse, ExportFormat,
)

router = APIRouter(prefix="/plan", tags=["Plans"])


def resolve_bowler(bowler_id: Optional[str], bowler: Optional[BowlerIn], db: Session) -> BowlerProfile:
    """Inline profile wins; otherwise look the id up in the cached roster."""
    if bowler is not None:
        return bowler.to_profile()
    if not bowler_id:
        raise HTTPException(status_code=400, detail="Provide bowler_id or an inline bowler")
    profile = RosterStore(db).get(bowler_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Bowler '{bowler_id}' not found")
    return profile


def delivery_responses(deliveries) -> list:
    return [DeliveryResponse(**d.to_dict()) for d in deliveries]


@router.post("", response_model=PlanResponse)
def generate_plan(request: PlanRequest, db: Session = Depends(get_db)):
    """Generate a seeded over plan for one bowler"""
    profile = resolve_bowler(request.bowler_id, request.bowler, db)
    phase = parse_phase(request.phase.value)
    pitch = parse_pitch(request.pitch.value)

    plan = OverComposer().compose_plan(
        profile, request.overs * BALLS_PER_OVER, phase, pitch, request.salt
    )
    return PlanResponse(
        bowler_id=profile.id,
        bowler_name=profile.name,
        phase=phase.value,
        pitch=pitch.value,
        overs=request.overs,
        seed=plan.seed,
        deliveries=delivery_responses(plan.deliveries),
    )


@router.post("/export")
def export_plan(
    request: PlanRequest,
    format: ExportFormat = ExportFormat.CSV,
    db: Session = Depends(get_db),
):
    """Same plan as POST /plan, serialised as a CSV or JSON download"""
    profile = resolve_bowler(request.bowler_id, request.bowler, db)
    phase = parse_phase(request.phase.value)
    pitch = parse_pitch(request.pitch.value)

    deliveries = OverComposer().compose(
        profile, request.overs * BALLS_PER_OVER, phase, pitch, request.salt
    )
    if format == ExportFormat.JSON:
        content = plan_to_json(profile, phase, pitch, deliveries)
        media_type = "application/json"
    else:
        content = plan_to_csv(profile, phase, pitch, deliveries)
        media_type = "text/csv; charset=utf-8"

    filename = export_filename(profile.name, phase, pitch, ext=format.value)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
