from fastapi import APIRouter, Depends, HTTPException, Header, Request
from sqlalchemy.orm import Session
from typing import Optional, List
import logging

import httpx

from bowling_lab.config import settings
from bowling_lab.database import get_db
from bowling_lab.roster import RosterStore, RosterFormatError, RosterFetchError, roster_fingerprint
from bowling_lab.roster.loader import parse_roster_with_report
from bowling_lab.roster.remote import refresh_roster
from bowling_lab.api.schemas import (
    BowlerResponse, RosterRefreshRequest, RosterLoadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roster", tags=["Roster"])


def require_admin(x_admin_code: Optional[str] = Header(None)):
    """Gate for roster refresh; checked per request, nothing is remembered."""
    if not x_admin_code or x_admin_code != settings.ADMIN_CODE:
        raise HTTPException(status_code=403, detail="Incorrect admin code")


@router.get("", response_model=List[BowlerResponse])
def list_bowlers(
    q: str = "",
    team: Optional[str] = None,
    format: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Search the cached roster"""
    bowlers = RosterStore(db).search(query=q, team=team, fmt=format)
    return [BowlerResponse.from_profile(b) for b in bowlers]


@router.get("/teams", response_model=List[str])
def list_teams(db: Session = Depends(get_db)):
    return ["All"] + RosterStore(db).teams()


@router.get("/{bowler_id}", response_model=BowlerResponse)
def get_bowler(bowler_id: str, db: Session = Depends(get_db)):
    profile = RosterStore(db).get(bowler_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Bowler '{bowler_id}' not found")
    return BowlerResponse.from_profile(profile)


@router.post("/import", response_model=RosterLoadResponse)
async def import_roster(request: Request, db: Session = Depends(get_db)):
    """Replace the cached roster with pasted JSON or CSV text (raw request body)"""
    text = (await request.body()).decode("utf-8", errors="replace")
    try:
        profiles, collisions = parse_roster_with_report(text)
    except RosterFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    fingerprint = roster_fingerprint(text)
    loaded = RosterStore(db).replace_all(profiles, fingerprint=fingerprint)
    return RosterLoadResponse(
        loaded=loaded,
        fingerprint=fingerprint,
        collisions=collisions,
    )


def _allowed_hosts() -> List[str]:
    hosts = [h.lower() for h in settings.ROSTER_ALLOWED_HOSTS]
    if settings.ROSTER_URL:
        hosts.append(httpx.URL(settings.ROSTER_URL).host.lower())
    return hosts


def _check_refresh_url(url: str):
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        raise HTTPException(status_code=400, detail=f"Invalid roster URL: {url}")
    if parsed.scheme not in ("http", "https") or parsed.host.lower() not in _allowed_hosts():
        raise HTTPException(status_code=400, detail=f"Roster host not allowed: {parsed.host or url}")


@router.post("/refresh", response_model=RosterLoadResponse, dependencies=[Depends(require_admin)])
def refresh_from_remote(request: Optional[RosterRefreshRequest] = None, db: Session = Depends(get_db)):
    """Admin only: pull the roster from the configured URL (or another allowed host)"""
    url = (request.url if request else None) or settings.ROSTER_URL
    if not url:
        raise HTTPException(status_code=400, detail="No roster URL configured")
    _check_refresh_url(url)

    try:
        result = refresh_roster(db, url, force=request.force if request else False)
    except RosterFetchError as exc:
        logger.warning("Roster refresh from %s failed: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    except RosterFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return RosterLoadResponse(
        loaded=result.loaded,
        fingerprint=result.fingerprint,
        collisions=result.collisions,
        skipped=result.skipped,
    )
