"""
liftstats — Configuration

Defaults used by the scoring engine plus the few deployment knobs that come
from the environment. Everything here is a plain module-level constant so the
analytics functions stay pure.
"""
import os

# ── Store / Locale ───────────────────────────────────────────────────
DATA_PATH = os.environ.get("LIFTSTATS_DATA", "data/workouts.json")

# IANA zone name used for YYYY-MM-DD keys. Empty = system local zone.
TIMEZONE = os.environ.get("LIFTSTATS_TZ", "")

# ── Physical ─────────────────────────────────────────────────────────
BODYWEIGHT = float(os.environ.get("LIFTSTATS_BODYWEIGHT", "0") or 0)

# ── Exercise defaults ────────────────────────────────────────────────
DEFAULT_TARGET_REPS = 8
DEFAULT_TARGET_SETS = 3

EXERCISE_TYPES = ("strength", "cardio", "abs")
TIME_CARDIO_MODES = ("circuit", "duration")  # "duration" = legacy name of circuit

# ── 1RM (Epley) ──────────────────────────────────────────────────────
E1RM_MIN_REPS = 1
E1RM_MAX_REPS = 15

# ── Progress verdicts ────────────────────────────────────────────────
VERDICT_BASELINE = "Baseline Established"
VERDICT_OVERLOAD = "Progressive Overload Achieved"
VERDICT_VOLUME = "Volume Progression"
VERDICT_REGRESSION = "Regression / Fatigue"
VERDICT_DELOAD = "Deload"
VERDICT_MAINTENANCE = "Maintenance"

VOLUME_PROGRESSION_PCT = 2.5
REGRESSION_KG = -5.0
DELOAD_PCT = -10.0

# ── Calendar ─────────────────────────────────────────────────────────
# Monday=0 ... Sunday=6. Tuesday is the fixed weekly rest day by default.
REST_WEEKDAY = int(os.environ.get("LIFTSTATS_REST_WEEKDAY", "1"))

COMPLETION_GOOD = 0.8
COMPLETION_MEDIUM = 0.5

# ── User journey (active days → stage) ───────────────────────────────
USER_STAGES = [
    (15, 5),
    (8, 4),
    (5, 3),
    (2, 2),
    (1, 1),
]

# ── Rest timer ───────────────────────────────────────────────────────
DEFAULT_REST_SECONDS = 90
