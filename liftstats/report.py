"""
liftstats — Console report
Run: python -m liftstats.report [path/to/workouts.json] [--date YYYY-MM-DD]
"""
import sys
from datetime import datetime

from liftstats.calendar_status import classify_calendar_month
from liftstats.config import BODYWEIGHT, DATA_PATH
from liftstats.dates import local_today, parse_date_key, to_date_key
from liftstats.history import compute_history
from liftstats.progress import exercise_progress
from liftstats.stats import calculate_session_stats, exercise_type, log_exercises
from liftstats.store import StoreError, load_workout_data, previous_best_lookup

STATUS_ICONS = {
    "complete-good": "🟢",
    "complete-medium": "🟡",
    "complete-low": "🟠",
    "complete-none": "🔴",
    "future": "·",
    "empty": "○",
    "rest": "💤",
    "absent": "❌",
}


def run_report(path: str = DATA_PATH, day_key: str | None = None) -> dict:
    """
    Print the day / history / calendar summary for one store.

    Returns the computed day stats and history so callers can reuse them.
    """
    print("📊 liftstats — Report")
    print(f"   {datetime.now().isoformat()}")

    print(f"\n📥 Loading logs from {path}...")
    workout_data = load_workout_data(path)
    print(f"   Found {len(workout_data)} logged days")

    today = local_today()
    day_key = day_key or to_date_key(today)
    get_previous_best = previous_best_lookup(workout_data, exclude_key=day_key)

    # 1. Selected day
    log = workout_data.get(day_key)
    day_stats = calculate_session_stats(log, get_previous_best)
    print(f"\n📅 {day_key}")
    if log is None:
        print("   No session logged.")
    else:
        print(f"   Score: {day_stats['score']}% | Duration: {day_stats['duration']}")
        print(f"   Strength: {day_stats['volume']:,.0f} kg | Cardio: {day_stats['cardio_min']:.1f} min, "
              f"{day_stats['cardio_dist']:.2f} km | Core: {day_stats['core_reps']:.0f} reps, "
              f"{day_stats['core_hold']:.0f}s hold")
        for ex in log_exercises(log):
            if exercise_type(ex) != "strength":
                continue
            prog = exercise_progress(workout_data, ex.get("name"), as_of=day_key, bodyweight=BODYWEIGHT)
            if prog["current"] is None:
                continue
            delta = prog["strength_delta_kg"]
            delta_txt = f" ({delta:+.1f} kg e1RM)" if delta is not None else ""
            print(f"   🏋️ {ex.get('name')}: {prog['verdict']}{delta_txt}")

    # 2. History
    history = compute_history(workout_data, get_previous_best, today=today)
    dist = history["distribution"]
    print(f"\n{'='*50}")
    print("📈 History:")
    print(f"   Sessions: {history['total_sessions']} ({history['active_sessions']} active)")
    print(f"   Total strength volume: {history['total_volume']:,.0f}")
    print(f"   Streak: {history['streak']} days | Discipline: {history['discipline']}%")
    print(f"   Split: {dist['strength']} strength · {dist['cardio']} cardio · {dist['core']} core")
    month = history["monthly_stats"]
    print(f"   This month: {month['sessions']} sessions, focus {month['top_focus']}")

    # 3. Calendar
    day = parse_date_key(day_key) or today
    cal = classify_calendar_month(day.year, day.month, workout_data, today=today)
    print(f"\n🗓️ {day:%B %Y}")
    print("   " + " ".join(STATUS_ICONS.get(d["status"], "?") for d in cal))

    return {"day": day_stats, "history": history}


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    day_arg = None
    if "--date" in sys.argv:
        idx = sys.argv.index("--date")
        day_arg = sys.argv[idx + 1] if idx + 1 < len(sys.argv) else None
        args = [a for a in args if a != day_arg]
        if parse_date_key(day_arg) is None:
            print(f"❌ Invalid --date {day_arg!r}, expected YYYY-MM-DD")
            sys.exit(2)

    try:
        run_report(args[0] if args else DATA_PATH, day_arg)
    except StoreError as e:
        print(f"\n❌ Report FAILED: {e}")
        sys.exit(1)
