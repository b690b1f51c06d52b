"""
liftstats — Progress Engine

1. Volume load (reps × weight, bodyweight-aware)
2. Estimated 1RM (Epley)
3. Session-vs-session comparison with a qualitative verdict
"""
from liftstats.config import (
    E1RM_MAX_REPS,
    E1RM_MIN_REPS,
    VERDICT_BASELINE,
    VERDICT_DELOAD,
    VERDICT_MAINTENANCE,
    VERDICT_OVERLOAD,
    VERDICT_REGRESSION,
    VERDICT_VOLUME,
    VOLUME_PROGRESSION_PCT,
    REGRESSION_KG,
    DELOAD_PCT,
)
from liftstats.dates import parse_date_key
from liftstats.parsing import round_half_up, safe_float


def calculate_volume_load(sets: list[dict], bodyweight: float = 0) -> float:
    """
    Total volume load: sum of reps × effective weight.

    Effective weight is the loaded weight, or `bodyweight` for unloaded
    (0 kg) sets when a positive bodyweight is given. No filtering on
    `completed` — the caller picks the sets.
    """
    bw = safe_float(bodyweight)
    total = 0.0
    for s in sets or []:
        weight = safe_float((s or {}).get("weight"))
        reps = safe_float((s or {}).get("reps"))
        effective = weight if weight > 0 else (bw if bw > 0 else 0)
        total += reps * effective
    return total


def calculate_max_1rm(sets: list[dict]) -> float | None:
    """
    Best Epley estimate, weight × (1 + reps/30), over the sets.

    Only sets with 1 ≤ reps ≤ 15 and weight > 0 qualify; returns None when no
    set does, so "no valid data" never shows up as a 0 kg max.
    """
    estimates = []
    for s in sets or []:
        weight = safe_float((s or {}).get("weight"))
        reps = safe_float((s or {}).get("reps"))
        if reps < E1RM_MIN_REPS or reps > E1RM_MAX_REPS or weight <= 0:
            continue
        estimates.append(weight * (1 + reps / 30))
    return max(estimates) if estimates else None


def compare_progress(current: dict, previous: dict | None) -> dict:
    """
    Compare two {volume, max1RM} snapshots.

    Verdict priority: strength gain > volume gain (> 2.5%) > strength drop
    (> 5 kg) > volume drop (> 10%) > maintenance.
    """
    if previous is None:
        return {
            "volume_delta_pct": None,
            "strength_delta_kg": None,
            "verdict": VERDICT_BASELINE,
        }

    cur_vol = safe_float(current.get("volume"))
    prev_vol = safe_float(previous.get("volume"))
    if prev_vol > 0:
        volume_delta = (cur_vol - prev_vol) / prev_vol * 100
    elif cur_vol > 0:
        volume_delta = 100.0
    else:
        volume_delta = 0.0

    cur_1rm = current.get("max1RM")
    prev_1rm = previous.get("max1RM")
    strength_delta = None
    if cur_1rm is not None and prev_1rm is not None:
        strength_delta = safe_float(cur_1rm) - safe_float(prev_1rm)

    if strength_delta is not None and strength_delta > 0:
        verdict = VERDICT_OVERLOAD
    elif volume_delta > VOLUME_PROGRESSION_PCT:
        verdict = VERDICT_VOLUME
    elif strength_delta is not None and strength_delta < REGRESSION_KG:
        verdict = VERDICT_REGRESSION
    elif volume_delta < DELOAD_PCT:
        verdict = VERDICT_DELOAD
    else:
        verdict = VERDICT_MAINTENANCE

    return {
        "volume_delta_pct": round_half_up(volume_delta, 1),
        "strength_delta_kg": round_half_up(strength_delta, 1) if strength_delta is not None else None,
        "verdict": verdict,
    }


# ═══════════════════════════════════════════════════════════════════════
# PER-EXERCISE HISTORY
# ═══════════════════════════════════════════════════════════════════════

def session_snapshot(sets: list[dict], bodyweight: float = 0) -> dict:
    """{volume, max1RM} from the completed sets of one exercise."""
    done = [s for s in sets or [] if s and s.get("completed")]
    return {
        "volume": calculate_volume_load(done, bodyweight),
        "max1RM": calculate_max_1rm(done),
    }


def exercise_progress(
    workout_data: dict,
    exercise_name: str,
    as_of: str | None = None,
    bodyweight: float = 0,
) -> dict:
    """
    Latest session of an exercise vs the one before it.

    Sessions are the date keys (up to and including `as_of`) whose log holds
    an exercise with that name and at least one completed set.
    """
    sessions = []
    for key in sorted(workout_data or {}):
        if parse_date_key(key) is None or (as_of is not None and key > as_of):
            continue
        log = workout_data[key]
        exercises = log.get("exercises") if isinstance(log, dict) else None
        if not isinstance(exercises, list):
            continue
        sets = []
        for ex in exercises:
            if isinstance(ex, dict) and ex.get("name") == exercise_name and isinstance(ex.get("sets"), list):
                sets.extend(ex["sets"])
        if any(s and s.get("completed") for s in sets):
            sessions.append((key, session_snapshot(sets, bodyweight)))

    if not sessions:
        return {"exercise": exercise_name, "date": None, "current": None, "previous": None,
                **compare_progress({}, None)}

    key, current = sessions[-1]
    previous = sessions[-2][1] if len(sessions) > 1 else None
    return {
        "exercise": exercise_name,
        "date": key,
        "current": current,
        "previous": previous,
        **compare_progress(current, previous),
    }
