"""
Roster loading from JSON or CSV text.
"""
import csv
import io
import json
import logging
from typing import Dict, List, Tuple

from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.roster.errors import RosterFormatError
from bowling_lab.roster.normalize import normalize_record, safe_str

logger = logging.getLogger(__name__)

_DELIMITERS = (",", ";", "\t")


def roster_fingerprint(text: str) -> str:
    """Short stable hash of the raw roster text (djb2 xor variant, base36)."""
    h = 5381
    for ch in text:
        h = ((h * 33) ^ ord(ch)) & 0xFFFFFFFF
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    out = ""
    while True:
        h, r = divmod(h, 36)
        out = digits[r] + out
        if h == 0:
            return out


def detect_delimiter(text: str) -> str:
    first_line = text.split("\n", 1)[0]
    counts = sorted(((first_line.count(d), d) for d in _DELIMITERS), reverse=True)
    count, delimiter = counts[0]
    return delimiter if count > 0 else ","


def _rows_from_json(data) -> List[Dict[str, object]]:
    if isinstance(data, list):
        return [row for row in data if isinstance(row, dict)]
    if isinstance(data, dict):
        # An object wrapping the array, e.g. {"bowlers": [...]}
        for value in data.values():
            if isinstance(value, list) and value and all(isinstance(row, dict) for row in value):
                return value
        return [data]
    return []


def _rows_from_csv(text: str) -> List[Dict[str, object]]:
    reader = csv.DictReader(io.StringIO(text), delimiter=detect_delimiter(text))
    rows = []
    for record in reader:
        cleaned = {safe_str(k): safe_str(v) for k, v in record.items() if k is not None}
        if any(cleaned.values()):
            rows.append(cleaned)
    return rows


def dedupe_ids(profiles: List[BowlerProfile]) -> Tuple[List[BowlerProfile], Dict[str, int]]:
    """Suffix repeated ids with -2, -3, ... and report how many of each were seen.

    A suffix already taken elsewhere in the roster is skipped, so every
    returned id is unique.
    """
    taken = {p.id for p in profiles}
    seen: Dict[str, int] = {}
    collisions: Dict[str, int] = {}
    out = []
    for profile in profiles:
        n = seen.get(profile.id, 0) + 1
        seen[profile.id] = n
        if n > 1:
            collisions[profile.id] = n
            base = profile.id
            suffix = n
            while f"{base}-{suffix}" in taken:
                suffix += 1
            profile.id = f"{base}-{suffix}"
            taken.add(profile.id)
        out.append(profile)
    return out, collisions


def parse_roster_with_report(text: str) -> Tuple[List[BowlerProfile], Dict[str, int]]:
    src = safe_str(text)
    if not src:
        raise RosterFormatError("Roster is empty")

    if src[0] in "[{":
        try:
            rows = _rows_from_json(json.loads(src))
        except json.JSONDecodeError as exc:
            raise RosterFormatError(f"Invalid JSON roster: {exc.msg} (line {exc.lineno})") from exc
    else:
        rows = _rows_from_csv(src.replace("\r\n", "\n").replace("\r", "\n"))

    profiles = []
    for index, row in enumerate(rows):
        profile = normalize_record(row)
        if profile is None:
            logger.debug("Skipping roster row %d without id or name", index)
            continue
        profiles.append(profile)

    if not profiles:
        raise RosterFormatError("Roster parsed 0 usable rows - check the headers")

    profiles, collisions = dedupe_ids(profiles)
    if collisions:
        logger.warning("Fixed duplicate bowler ids: %s", ", ".join(sorted(collisions)))
    logger.info("Parsed %d bowlers from roster", len(profiles))
    return profiles, collisions


def parse_roster(text: str) -> List[BowlerProfile]:
    """Parse JSON (array or wrapped array) or CSV roster text into profiles."""
    profiles, _ = parse_roster_with_report(text)
    return profiles
