"""
liftstats — Calendar Status Classifier

Per-day status for a month view, straight from the raw logs (independent of
the adherence score). Days are looked up by their local date key.
"""
import calendar
from datetime import date, datetime

from liftstats.config import COMPLETION_GOOD, COMPLETION_MEDIUM, REST_WEEKDAY
from liftstats.dates import local_today, parse_date_key, to_date_key
from liftstats.stats import exercise_sets, log_exercises


def completion_ratio(log) -> float | None:
    """Completed ÷ total sets, or None when the log holds no sets at all."""
    total = 0
    completed = 0
    for ex in log_exercises(log):
        for s in exercise_sets(ex):
            total += 1
            if s.get("completed"):
                completed += 1
    if total == 0:
        return None
    return completed / total


def classify_day(day: date, log, today: date, rest_weekday: int = REST_WEEKDAY) -> str:
    """
    Status of one calendar day (first match wins):

    complete-good / complete-medium / complete-low / complete-none for a log
    with sets, then future, empty (today), rest, absent.
    """
    ratio = completion_ratio(log) if log is not None else None
    if ratio is not None:
        if ratio >= COMPLETION_GOOD:
            return "complete-good"
        if ratio >= COMPLETION_MEDIUM:
            return "complete-medium"
        if ratio > 0:
            return "complete-low"
        return "complete-none"
    if day > today:
        return "future"
    if day == today:
        return "empty"
    if day.weekday() == rest_weekday:
        return "rest"
    return "absent"


def classify_calendar_month(
    year: int,
    month: int,
    workout_data: dict,
    today=None,
    rest_weekday: int = REST_WEEKDAY,
) -> list[dict]:
    """One status entry per day of the month, in order."""
    if isinstance(today, datetime):
        today = today.date()
    elif isinstance(today, str):
        today = parse_date_key(today)
    today = today or local_today()

    workout_data = workout_data or {}
    days = []
    for day_num in range(1, calendar.monthrange(year, month)[1] + 1):
        day = date(year, month, day_num)
        key = to_date_key(day)
        log = workout_data.get(key)
        status = classify_day(day, log, today, rest_weekday)
        days.append({
            "date": day,
            "key": key,
            "status": status,
            "completion": completion_ratio(log) if log is not None else None,
            "is_future": day > today,
            "is_rest_day": day.weekday() == rest_weekday,
            "interactive": status != "future",
        })
    return days


def leading_blanks(year: int, month: int) -> int:
    """Empty cells before day 1 in a Sunday-first week grid."""
    return (date(year, month, 1).weekday() + 1) % 7
