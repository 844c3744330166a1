"""
models/defaults.py
------------------
The one place where fallback values for missing fields are defined.
Repositories call ``apply_defaults`` once, right before a create is persisted.
"""

from typing import Any

FIELD_DEFAULTS: dict[str, dict[str, Any]] = {
    "prisoner": {
        "gender": "Male",
        "behavior_rating": 3,
        "parole_status": "Ineligible",
    },
    "cell": {
        "occupancy": 0,
    },
    "cell_block": {
        "current_capacity": 0,
    },
}


def apply_defaults(entity: str, values: dict[str, Any]) -> dict[str, Any]:
    """
    Fill absent, None or empty-string fields from FIELD_DEFAULTS.

    Args:
        entity: Key into FIELD_DEFAULTS ('prisoner', 'cell', 'cell_block').
        values: Field values about to be persisted. Not modified.

    Returns:
        A new dict with defaults applied.
    """
    merged = dict(values)
    for name, default in FIELD_DEFAULTS.get(entity, {}).items():
        if merged.get(name) in (None, ""):
            merged[name] = default
    return merged
