"""
liftstats — Log store reader

Read-only access to the date-keyed JSON log the tracker writes:

    {"2026-10-19": {"startTime": 1760860800000, "exercises": [...]}, ...}

Also builds the previous-best lookup the stats engine consumes and a flat
per-set DataFrame for tables.
"""
import json
from pathlib import Path

import pandas as pd

from liftstats.dates import parse_date_key
from liftstats.parsing import parse_minutes, parse_time_seconds, safe_float, with_pace
from liftstats.stats import exercise_sets, exercise_type, is_time_mode, log_exercises


class StoreError(ValueError):
    """Raised when the log store exists but cannot be read."""


def normalize_workout_data(raw) -> dict:
    """
    Keep valid YYYY-MM-DD keys only; wrap legacy logs stored as a bare
    list of exercises into {"exercises": [...]}.
    """
    if not isinstance(raw, dict):
        raise StoreError(f"Log store must be a JSON object keyed by date, got {type(raw).__name__}")
    data = {}
    for key, log in raw.items():
        if parse_date_key(key) is None:
            continue
        if isinstance(log, list):
            log = {"exercises": log}
        if isinstance(log, dict):
            data[key] = log
    return data


def load_workout_data(path) -> dict:
    """Load the store from disk. A missing file is an empty store."""
    path = Path(path)
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StoreError(f"Corrupt log store {path}: {e}") from e
    return normalize_workout_data(raw)


def previous_best_lookup(workout_data: dict, exclude_key: str | None = None):
    """
    Build `get_previous_best(name)` over the store.

    Best completed-set weight for that exercise name on any day other than
    `exclude_key`; None when the exercise was never loaded.
    """
    best: dict[str, float] = {}
    for key, log in (workout_data or {}).items():
        if key == exclude_key:
            continue
        for ex in log_exercises(log):
            name = ex.get("name")
            for s in exercise_sets(ex):
                if not s.get("completed"):
                    continue
                weight = safe_float(s.get("weight"))
                if weight > best.get(name, 0):
                    best[name] = weight

    def get_previous_best(name):
        weight = best.get(name, 0)
        return {"weight": weight} if weight > 0 else None

    return get_previous_best


def workout_data_to_dataframe(workout_data: dict) -> pd.DataFrame:
    """Flatten the store: one row per set."""
    rows = []
    for key in sorted(workout_data or {}):
        if parse_date_key(key) is None:
            continue
        for ex in log_exercises(workout_data[key]):
            kind = exercise_type(ex)
            mode = ex.get("cardioMode") if kind == "cardio" else ex.get("coreMode") if kind == "abs" else None
            distance_mode = kind == "cardio" and not is_time_mode(mode)
            for i, s in enumerate(exercise_sets(ex), start=1):
                weight = safe_float(s.get("weight"))
                reps = safe_float(s.get("reps"))
                rows.append({
                    "date": pd.Timestamp(parse_date_key(key)),
                    "key": key,
                    "exercise": ex.get("name") or "?",
                    "type": kind,
                    "mode": mode,
                    "set_number": i,
                    "completed": bool(s.get("completed")),
                    "weight_kg": weight,
                    "reps": reps,
                    "distance_km": safe_float(s.get("distance")),
                    "time_min": parse_minutes(s.get("time")) if kind == "cardio" else 0.0,
                    "pace": with_pace(s)["pace"] if distance_mode else "",
                    "hold_s": max(parse_time_seconds(s.get("holdTime")), 0),
                    "volume_kg": max(weight, 0) * max(reps, 0) if kind == "strength" else 0.0,
                })
    return pd.DataFrame(rows)
