"""
liftstats — Lenient input parsers

Set fields come straight from text inputs, so every value may be a number,
a numeric string, a partial string ("10 reps", "1:30") or garbage. Nothing in
here raises: unparseable input degrades to 0 (or None where "no value" has to
stay distinguishable from zero).
"""
import math
import re

_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?)")
_LEADING_DIGITS_RE = re.compile(r"^(\d+)")
_RANGE_SPLIT_RE = re.compile(r"[-–]")


def _as_number(val) -> float | None:
    """Strict numeric check: the whole value must be a finite number."""
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        return float(val) if math.isfinite(val) else None
    if isinstance(val, str) and _NUMBER_RE.match(val):
        number = float(val)
        return number if math.isfinite(number) else None
    return None


def _leading_number(text) -> float | None:
    """Number at the start of a string ("12 reps" → 12), or None."""
    match = _LEADING_FLOAT_RE.match(str(text))
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def round_half_up(x: float, ndigits: int = 0) -> float:
    """Round halves away from zero: 2.5 → 3, 0.25 → 0.3 at one decimal."""
    factor = 10 ** ndigits
    return math.copysign(math.floor(abs(x) * factor + 0.5) / factor, x)


def safe_float(val, fallback: float = 0.0) -> float:
    """
    Coerce a messy input into a float.

    Reads a leading number the way form inputs are usually typed
    ("62.5", "62.5kg", " 8 ") and returns `fallback` for anything else.
    """
    if isinstance(val, bool) or val is None:
        return fallback
    if isinstance(val, (int, float)):
        return float(val) if math.isfinite(val) else fallback
    number = _leading_number(val)
    return fallback if number is None else number


def parse_target_reps(expr) -> float:
    """
    Turn a target-reps expression into a single comparison ceiling.

    "8-12" → 12, "8-12 reps" → 12, "5–8" → 8, "10" → 10, "10 reps" → 10,
    "AMRAP" → 0. Empty input and anything unparseable give 0.
    """
    if not expr:
        return 0
    number = _as_number(expr)
    if number is not None:
        return max(0.0, number)

    text = str(expr)
    if "-" in text or "–" in text:
        parts = _RANGE_SPLIT_RE.split(text)
        high = _leading_number(parts[1]) if len(parts) > 1 else None
        if high is not None:
            return max(0.0, high)
        low = _leading_number(parts[0])
        return max(0.0, low) if low is not None else 0

    match = _LEADING_DIGITS_RE.match(text.strip())
    if match:
        return float(match.group(1))
    return 0


def parse_time_seconds(val) -> float:
    """Parse "m:ss" / "h:mm:ss" or a plain number of seconds into seconds."""
    if not val:
        return 0.0
    text = str(val).strip()
    if ":" in text:
        parts = [safe_float(p) for p in text.split(":")]
        if len(parts) == 2:
            return parts[0] * 60 + parts[1]
        if len(parts) == 3:
            return parts[0] * 3600 + parts[1] * 60 + parts[2]
    return safe_float(val)


def parse_minutes(val) -> float:
    """Cardio time: plain numbers are minutes, "mm:ss" is converted."""
    if not val:
        return 0.0
    if ":" in str(val):
        return parse_time_seconds(val) / 60
    return safe_float(val)


def calculate_pace(distance, time) -> float | None:
    """Pace in min/km, or None unless both inputs are valid numbers > 0."""
    km = safe_float(distance)
    minutes = parse_minutes(time)
    if km > 0 and minutes > 0:
        return minutes / km
    return None


def format_pace(pace: float | None) -> str:
    if pace is None:
        return ""
    total = int(round_half_up(pace * 60))
    return f"{total // 60}:{total % 60:02d}"


def with_pace(set_: dict) -> dict:
    """Copy of a distance-mode set with its derived `pace` recomputed or cleared."""
    updated = dict(set_ or {})
    updated["pace"] = format_pace(calculate_pace(updated.get("distance"), updated.get("time")))
    return updated
