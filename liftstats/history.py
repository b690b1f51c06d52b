"""
liftstats — History Aggregator

Folds the per-day stats over the whole date-keyed log store: chart series,
category distribution, totals, streak and the cross-history discipline score.
"""
from datetime import date, datetime, timedelta

import pandas as pd

from liftstats.config import USER_STAGES
from liftstats.dates import local_today, parse_date_key, short_label
from liftstats.parsing import round_half_up
from liftstats.stats import calculate_raw_aggregates, calculate_session_stats

HISTORY_COLUMNS = [
    "key", "date", "label", "active",
    "score", "has_strength", "has_cardio", "has_core",
    "strength_vol", "actual_vol", "target_vol",
    "strength_volume", "cardio_minutes", "cardio_distance", "core_reps", "core_hold",
]


def _as_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_key(value)


def _logged_keys(workout_data: dict) -> list[str]:
    """Valid date keys holding a log, ascending."""
    return sorted(
        k for k, log in (workout_data or {}).items()
        if log is not None and parse_date_key(k) is not None
    )


def history_frame(workout_data: dict, get_previous_best=None) -> pd.DataFrame:
    """
    One row per logged day.

    `active` marks days with completed work in at least one category; the
    unit-specific series columns come straight from the raw completed sets so
    cardio minutes and distance never get mixed.
    """
    rows = []
    for key in _logged_keys(workout_data):
        log = workout_data[key]
        stats = calculate_session_stats(log, get_previous_best)
        raw = calculate_raw_aggregates(log)
        rows.append({
            "key": key,
            "date": pd.Timestamp(parse_date_key(key)),
            "label": short_label(key),
            "active": bool(stats["has_strength"] or stats["has_cardio"] or stats["has_core"]),
            "score": stats["score"],
            "has_strength": stats["has_strength"],
            "has_cardio": stats["has_cardio"],
            "has_core": stats["has_core"],
            "strength_vol": stats["strength_vol"],
            "actual_vol": stats["actual_vol"],
            "target_vol": stats["target_vol"],
            "strength_volume": raw["strength_kg"],
            "cardio_minutes": raw["cardio_min"],
            "cardio_distance": raw["cardio_dist"],
            "core_reps": raw["core_reps"],
            "core_hold": raw["core_hold"],
        })
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)


def calculate_streak(date_keys, today=None) -> int:
    """
    Consecutive logged days ending today or yesterday.

    A most-recent log older than yesterday means the streak is broken (0).
    """
    days = sorted({d for d in (parse_date_key(k) for k in date_keys) if d is not None})
    if not days:
        return 0
    today = _as_date(today) or local_today()
    if days[-1] not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    for i in range(len(days) - 1, 0, -1):
        if (days[i] - days[i - 1]).days == 1:
            streak += 1
        else:
            break
    return streak


def user_stage(active_days: int) -> int:
    """Journey stage 0-5 from the number of active days."""
    for threshold, stage in USER_STAGES:
        if active_days >= threshold:
            return stage
    return 0


def monthly_stats(frame: pd.DataFrame, today: date) -> dict:
    """Sessions and dominant category for the month containing `today`."""
    if frame.empty:
        return {"sessions": 0, "top_focus": "Mixed"}
    month = frame[(frame["date"].dt.year == today.year) & (frame["date"].dt.month == today.month)]
    focus = {
        "Strength": int(month["has_strength"].sum()),
        "Cardio": int(month["has_cardio"].sum()),
        "Core": int(month["has_core"].sum()),
    }
    top, count = max(focus.items(), key=lambda kv: kv[1])
    return {"sessions": len(month), "top_focus": top if count > 0 else "Mixed"}


def discipline_score(frame: pd.DataFrame) -> int:
    """Cross-history adherence: Σ actual volume ÷ Σ target volume, 0-100."""
    if frame.empty:
        return 0
    target = float(frame["target_vol"].sum())
    if target <= 0:
        return 0
    return min(100, int(round_half_up(float(frame["actual_vol"].sum()) / target * 100)))


# ═══════════════════════════════════════════════════════════════════════
# HISTORY
# ═══════════════════════════════════════════════════════════════════════

def compute_history(workout_data: dict, get_previous_best=None, today=None) -> dict:
    """
    Aggregate the whole log store.

    Returns chart labels and per-unit series for active days, category
    distribution, session/volume totals, streak, discipline, journey stage
    and the current month's summary.
    """
    today = _as_date(today) or local_today()
    frame = history_frame(workout_data, get_previous_best)
    active = frame[frame["active"]] if not frame.empty else frame

    return {
        "labels": active["label"].tolist(),
        "series": {
            "strength_volume": active["strength_volume"].astype(float).tolist(),
            "cardio_minutes": active["cardio_minutes"].astype(float).tolist(),
            "cardio_distance": active["cardio_distance"].astype(float).tolist(),
            "core_reps": active["core_reps"].astype(float).tolist(),
            "core_hold": active["core_hold"].astype(float).tolist(),
        },
        "distribution": {
            "strength": int(active["has_strength"].sum()),
            "cardio": int(active["has_cardio"].sum()),
            "core": int(active["has_core"].sum()),
        },
        "total_sessions": len(frame),
        "active_sessions": len(active),
        "total_volume": float(frame["strength_vol"].sum()) if not frame.empty else 0.0,
        "streak": calculate_streak(frame["key"].tolist(), today),
        "discipline": discipline_score(frame),
        "user_stage": user_stage(len(active)),
        "monthly_stats": monthly_stats(frame, today),
    }
