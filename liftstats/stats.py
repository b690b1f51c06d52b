"""
liftstats — Stats Engine

Turns one day's raw log into session metrics.

Strength, cardio and core work have no common unit, so each exercise is
scored against its own target ("target volume") and the day's adherence
score is actual ÷ target across all exercises:

- strength: sets × reps × reference weight
- cardio:   sets × reps, where "reps" stands for minutes or km
- core:     sets × reps, where "reps" stands for reps or hold seconds

Missing values never raise; a completed set with nothing recorded counts as
having hit its target.
"""
import numpy as np

from liftstats.config import (
    DEFAULT_TARGET_REPS,
    DEFAULT_TARGET_SETS,
    EXERCISE_TYPES,
    TIME_CARDIO_MODES,
)
from liftstats.dates import as_timestamp, now
from liftstats.parsing import (
    parse_minutes,
    parse_target_reps,
    parse_time_seconds,
    round_half_up,
    safe_float,
)

EMPTY_STATS = {"score": 0, "volume": 0, "duration": "0m"}


# ── Exercise helpers ─────────────────────────────────────────────────

def exercise_type(ex: dict) -> str:
    """Normalized type: cardio, abs or strength (anything unknown is strength)."""
    kind = ex.get("type") or "strength"
    return kind if kind in EXERCISE_TYPES else "strength"


def is_time_mode(mode) -> bool:
    return mode in TIME_CARDIO_MODES


def exercise_sets(ex) -> list[dict]:
    if not isinstance(ex, dict) or not isinstance(ex.get("sets"), list):
        return []
    return [s for s in ex["sets"] if isinstance(s, dict)]


def log_exercises(log) -> list[dict]:
    if not isinstance(log, dict) or not isinstance(log.get("exercises"), list):
        return []
    return [ex for ex in log["exercises"] if isinstance(ex, dict)]


def target_reps(ex: dict) -> float:
    reps = safe_float(ex.get("numericalTargetReps"))
    if reps > 0:
        return reps
    parsed = parse_target_reps(ex.get("targetReps"))
    return parsed if parsed > 0 else DEFAULT_TARGET_REPS


def target_sets(ex: dict) -> float:
    sets = safe_float(ex.get("targetSets"))
    return sets if sets > 0 else DEFAULT_TARGET_SETS


def reference_weight(ex: dict, get_previous_best=None) -> float:
    """
    Weight a strength target is measured in.

    Previous best if known, else the mean of the positive weights logged in
    this exercise, else 1 (keeps the target non-zero).
    """
    ref = 0.0
    if callable(get_previous_best):
        best = get_previous_best(ex.get("name"))
        if isinstance(best, dict):
            ref = safe_float(best.get("weight"))

    if ref <= 0 and exercise_type(ex) == "strength":
        weights = [w for w in (safe_float(s.get("weight")) for s in exercise_sets(ex)) if w > 0]
        if weights:
            ref = float(np.mean(weights))

    return ref if ref > 0 else 1.0


def calculate_exercise_load(ex: dict, get_previous_best=None) -> dict:
    """Target and actual (score) volume of a single exercise."""
    kind = exercise_type(ex)
    t_reps = target_reps(ex)
    t_sets = target_sets(ex)
    ref = reference_weight(ex, get_previous_best)

    if kind == "strength":
        target_vol = t_sets * t_reps * ref
    else:
        target_vol = t_sets * t_reps

    actual_vol = 0.0
    for s in exercise_sets(ex):
        if not s.get("completed"):
            continue
        if kind == "cardio":
            if is_time_mode(ex.get("cardioMode")):
                value = parse_minutes(s.get("time"))
            else:
                value = safe_float(s.get("distance"))
            actual_vol += value if value > 0 else t_reps
        elif kind == "abs":
            if ex.get("coreMode") == "hold":
                value = parse_time_seconds(s.get("holdTime"))
            else:
                value = safe_float(s.get("reps"))
            actual_vol += value if value > 0 else t_reps
        else:
            reps = safe_float(s.get("reps"))
            weight = safe_float(s.get("weight"))
            set_target = parse_target_reps(s.get("target"))
            eff_reps = reps if reps > 0 else (set_target if set_target > 0 else t_reps)
            eff_weight = weight if weight > 0 else ref
            actual_vol += eff_reps * eff_weight

    return {
        "type": kind,
        "target_vol": target_vol,
        "actual_vol": actual_vol,
        "reference_weight": ref,
    }


# ── Raw aggregates (no fallbacks) ────────────────────────────────────

def _cardio_sets_aggregate(sets: list[dict], mode, totals: dict) -> None:
    for s in sets:
        if not isinstance(s, dict) or not s.get("completed"):
            continue
        if is_time_mode(mode):
            minutes = parse_minutes(s.get("time"))
            totals["cardio_min"] += minutes
            totals["cardio_circuit_min"] += minutes
        else:
            totals["cardio_dist"] += max(safe_float(s.get("distance")), 0)
            if s.get("time"):
                minutes = parse_minutes(s.get("time"))
                totals["cardio_min"] += minutes
                totals["cardio_dist_min"] += minutes


def calculate_raw_aggregates(log) -> dict:
    """
    Unmixed per-unit totals from completed sets: kg lifted, cardio minutes,
    cardio km, core reps and hold seconds.

    Cardio sets stored under a previously selected mode (`storedSets`) are
    included so switching modes does not hide logged work.
    """
    totals = {
        "strength_kg": 0.0,
        "cardio_min": 0.0,
        "cardio_dist": 0.0,
        "cardio_circuit_min": 0.0,
        "cardio_dist_min": 0.0,
        "core_reps": 0.0,
        "core_hold": 0.0,
    }
    for ex in log_exercises(log):
        kind = exercise_type(ex)
        done = [s for s in exercise_sets(ex) if s.get("completed")]
        if kind == "cardio":
            mode = ex.get("cardioMode")
            _cardio_sets_aggregate(done, mode, totals)
            stored = ex.get("storedSets")
            if isinstance(stored, dict):
                for stored_mode, sets in stored.items():
                    if stored_mode == mode or not isinstance(sets, list):
                        continue
                    _cardio_sets_aggregate(sets, stored_mode, totals)
        elif kind == "abs":
            if ex.get("coreMode") == "hold":
                totals["core_hold"] += sum(max(parse_time_seconds(s.get("holdTime")), 0) for s in done)
            else:
                totals["core_reps"] += sum(max(safe_float(s.get("reps")), 0) for s in done)
        else:
            totals["strength_kg"] += sum(
                max(safe_float(s.get("reps")), 0) * max(safe_float(s.get("weight")), 0) for s in done
            )
    return totals


# ── Duration ─────────────────────────────────────────────────────────

def format_duration(start_time, end_time=None) -> str:
    """Elapsed time as "1h 5m", "42m" or "35s"; "0m" when nothing positive elapsed."""
    start = as_timestamp(start_time)
    if start is None:
        return "0m"
    end = as_timestamp(end_time) or now()
    elapsed = (end - start).total_seconds()
    if elapsed <= 0:
        return "0m"
    minutes = int(elapsed // 60)
    if minutes >= 60:
        return f"{minutes // 60}h {minutes % 60}m"
    if minutes >= 1:
        return f"{minutes}m"
    return f"{int(elapsed)}s"


# ═══════════════════════════════════════════════════════════════════════
# SESSION STATS
# ═══════════════════════════════════════════════════════════════════════

def calculate_session_stats(log, get_previous_best=None, end_time=None) -> dict:
    """
    Score, per-category volumes and duration for one day's log.

    `get_previous_best(name)` returns {"weight": kg} or None. `end_time`
    defaults to the log's own endTime, then to now.
    """
    if log is None:
        return dict(EMPTY_STATS)

    total_actual = 0.0
    total_target = 0.0
    strength_vol = 0.0
    cardio_vol = 0.0
    abs_vol = 0.0

    for ex in log_exercises(log):
        load = calculate_exercise_load(ex, get_previous_best)
        total_actual += load["actual_vol"]
        total_target += load["target_vol"]
        if load["type"] == "cardio":
            cardio_vol += load["actual_vol"]
        elif load["type"] == "abs":
            abs_vol += load["actual_vol"]
        else:
            strength_vol += load["actual_vol"]

    score = min(100, int(round_half_up(total_actual / max(total_target, 1) * 100)))

    raw = calculate_raw_aggregates(log)
    start = log.get("startTime") if isinstance(log, dict) else None
    end = end_time if end_time is not None else (log.get("endTime") if isinstance(log, dict) else None)

    return {
        "score": score,
        "volume": raw["strength_kg"],
        "duration": format_duration(start, end),
        "has_strength": strength_vol > 0,
        "has_cardio": cardio_vol > 0,
        "has_core": abs_vol > 0,
        "strength_vol": strength_vol,
        "cardio_vol": cardio_vol,
        "abs_vol": abs_vol,
        "actual_vol": total_actual,
        "target_vol": total_target,
        "cardio_min": raw["cardio_min"],
        "cardio_dist": raw["cardio_dist"],
        "cardio_circuit_min": raw["cardio_circuit_min"],
        "cardio_dist_min": raw["cardio_dist_min"],
        "core_reps": raw["core_reps"],
        "core_hold": raw["core_hold"],
    }
