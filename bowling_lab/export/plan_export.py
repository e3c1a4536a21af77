"""
CSV and JSON serialisation of generated plans.
"""
import csv
import io
import json
import re
from typing import Dict, List, Optional

from bowling_lab.engine.over_composer import Delivery
from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.spell_scheduler import SpellPlan
from bowling_lab.engine.taxonomy import Phase, Pitch

PLAN_COLUMNS = ["bowler", "phase", "pitch", "over", "ball", "type", "length", "line", "purpose"]


def _slug(text: str) -> str:
    return re.sub(r"\s+", "_", text.strip().lower())


def export_filename(bowler_name: str, phase: Phase, pitch: Pitch, ext: str = "csv") -> str:
    return f"{_slug(bowler_name)}_{phase.value}_{pitch.value}.{ext}"


def plan_rows(bowler: BowlerProfile, phase: Phase, pitch: Pitch, deliveries: List[Delivery]) -> List[dict]:
    return [
        {
            "bowler": bowler.name,
            "phase": phase.value,
            "pitch": pitch.value,
            "over": d.over,
            "ball": d.ball,
            "type": d.delivery_type.value,
            "length": d.length.value,
            "line": d.line.value,
            "purpose": d.purpose,
        }
        for d in deliveries
    ]


def spell_rows(
    spell: SpellPlan,
    phase: Phase,
    pitch: Pitch,
    names: Optional[Dict[str, str]] = None,
) -> List[dict]:
    """Rows for a spell; ``names`` maps bowler id to display name."""
    names = names or {}
    rows = []
    for d in spell.deliveries:
        bowler_id = spell.over_to_bowler.get(d.over, "")
        rows.append({
            "bowler": names.get(bowler_id, bowler_id),
            "phase": phase.value,
            "pitch": pitch.value,
            "over": d.over,
            "ball": d.ball,
            "type": d.delivery_type.value,
            "length": d.length.value,
            "line": d.line.value,
            "purpose": d.purpose,
        })
    return rows


def rows_to_csv(rows: List[dict], columns: List[str] = PLAN_COLUMNS) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def plan_to_csv(bowler: BowlerProfile, phase: Phase, pitch: Pitch, deliveries: List[Delivery]) -> str:
    return rows_to_csv(plan_rows(bowler, phase, pitch, deliveries))


def spell_to_csv(spell: SpellPlan, phase: Phase, pitch: Pitch, names: Optional[Dict[str, str]] = None) -> str:
    return rows_to_csv(spell_rows(spell, phase, pitch, names))


def plan_to_json(bowler: BowlerProfile, phase: Phase, pitch: Pitch, deliveries: List[Delivery]) -> str:
    payload = {
        "bowler": bowler.to_dict(),
        "phase": phase.value,
        "pitch": pitch.value,
        "plan": [d.to_dict() for d in deliveries],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
