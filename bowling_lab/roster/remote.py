"""
Remote roster refresh over HTTP.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import httpx
from sqlalchemy.orm import Session

from bowling_lab.config import settings
from bowling_lab.roster.errors import RosterFetchError
from bowling_lab.roster.loader import parse_roster_with_report, roster_fingerprint
from bowling_lab.roster.store import RosterStore

logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    loaded: int
    fingerprint: str
    collisions: Dict[str, int] = field(default_factory=dict)
    skipped: bool = False


def fetch_roster_text(url: str, client: Optional[httpx.Client] = None, timeout: Optional[float] = None) -> str:
    """GET the roster with a cache-busting parameter; raise RosterFetchError on failure."""
    if not url:
        raise RosterFetchError("No roster URL configured")
    owns_client = client is None
    http = client or httpx.Client(timeout=timeout or settings.REMOTE_TIMEOUT_S, follow_redirects=True)
    try:
        response = http.get(url, params={"__t": str(int(time.time() * 1000))})
    except httpx.HTTPError as exc:
        raise RosterFetchError(f"Roster fetch failed: {exc}") from exc
    finally:
        if owns_client:
            http.close()

    if response.status_code >= 400:
        raise RosterFetchError(
            f"Roster fetch failed ({response.status_code})", status_code=response.status_code
        )
    return response.text


def refresh_roster(
    session: Session, url: str, client: Optional[httpx.Client] = None, force: bool = False
) -> RefreshResult:
    """
    Fetch, parse and store the remote roster, replacing the cached one.

    When the fetched text has the same fingerprint as the roster already in
    the cache the store is left alone and the result is marked skipped,
    unless force is set.
    """
    text = fetch_roster_text(url, client=client)
    fingerprint = roster_fingerprint(text)
    store = RosterStore(session)
    if not force and store.fingerprint() == fingerprint and store.count() > 0:
        logger.info("Roster from %s unchanged (%s), skipping", url, fingerprint)
        return RefreshResult(loaded=0, fingerprint=fingerprint, skipped=True)

    profiles, collisions = parse_roster_with_report(text)
    loaded = store.replace_all(profiles, fingerprint=fingerprint)
    logger.info("Refreshed roster from %s: %d bowlers (%s)", url, loaded, fingerprint)
    return RefreshResult(loaded=loaded, fingerprint=fingerprint, collisions=collisions)
