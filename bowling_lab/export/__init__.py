from bowling_lab.export.plan_export import (
    export_filename, plan_rows, plan_to_csv, plan_to_json, spell_rows, spell_to_csv,
)

__all__ = [
    "export_filename", "plan_rows", "plan_to_csv", "plan_to_json", "spell_rows", "spell_to_csv",
]
