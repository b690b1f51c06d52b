"""
Tests for the log store reader, rest timer and console report.
Run: pytest tests/ -v
"""
import json

import pytest


def _make_store(tmp_path, data, name="workouts.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _make_bench_day(weights=(100,), reps=5, completed=True):
    return {
        "startTime": "2026-10-19T10:00:00+00:00",
        "exercises": [{
            "name": "Bench Press",
            "type": "strength",
            "targetSets": 3,
            "numericalTargetReps": 8,
            "sets": [{"weight": w, "reps": reps, "completed": completed} for w in weights],
        }],
    }


# ═══════════════════════════════════════════════════════════════════════
# STORE
# ═══════════════════════════════════════════════════════════════════════

class TestLoadWorkoutData:

    def test_missing_file_is_empty_store(self, tmp_path):
        from liftstats.store import load_workout_data
        assert load_workout_data(tmp_path / "nope.json") == {}

    def test_round_trip(self, tmp_path):
        from liftstats.store import load_workout_data
        path = _make_store(tmp_path, {"2026-10-19": _make_bench_day()})
        data = load_workout_data(path)
        assert list(data) == ["2026-10-19"]
        assert data["2026-10-19"]["exercises"][0]["name"] == "Bench Press"

    def test_corrupt_json(self, tmp_path):
        from liftstats.store import StoreError, load_workout_data
        path = tmp_path / "workouts.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError):
            load_workout_data(path)

    def test_top_level_must_be_object(self, tmp_path):
        from liftstats.store import StoreError, load_workout_data
        path = _make_store(tmp_path, [1, 2, 3])
        with pytest.raises(StoreError):
            load_workout_data(path)


class TestNormalize:

    def test_drops_invalid_keys(self):
        from liftstats.store import normalize_workout_data
        data = normalize_workout_data({
            "2026-10-19": {"exercises": []},
            "2026-02-30": {"exercises": []},
            "settings": {"theme": "dark"},
        })
        assert list(data) == ["2026-10-19"]

    def test_wraps_legacy_list_logs(self):
        from liftstats.store import normalize_workout_data
        data = normalize_workout_data({"2026-10-19": [{"name": "Squat", "sets": []}]})
        assert data["2026-10-19"] == {"exercises": [{"name": "Squat", "sets": []}]}

    def test_store_error_is_value_error(self):
        from liftstats.store import StoreError, normalize_workout_data
        with pytest.raises(ValueError):
            normalize_workout_data("2026-10-19")
        assert issubclass(StoreError, ValueError)


class TestPreviousBest:

    def _data(self):
        return {
            "2026-10-12": _make_bench_day(weights=(90, 100)),
            "2026-10-15": _make_bench_day(weights=(120,), completed=False),
            "2026-10-19": _make_bench_day(weights=(110,)),
        }

    def test_best_completed_weight(self):
        from liftstats.store import previous_best_lookup
        get_previous_best = previous_best_lookup(self._data())
        assert get_previous_best("Bench Press") == {"weight": 110}

    def test_excludes_current_day(self):
        from liftstats.store import previous_best_lookup
        get_previous_best = previous_best_lookup(self._data(), exclude_key="2026-10-19")
        assert get_previous_best("Bench Press") == {"weight": 100}

    def test_unknown_exercise(self):
        from liftstats.store import previous_best_lookup
        assert previous_best_lookup(self._data())("Deadlift") is None


class TestSetsDataFrame:

    def test_one_row_per_set(self):
        from liftstats.store import workout_data_to_dataframe
        data = {
            "2026-10-12": _make_bench_day(weights=(90, 100)),
            "2026-10-13": {"exercises": [{
                "name": "Run", "type": "cardio", "cardioMode": "distance",
                "sets": [{"distance": "5", "time": "27:30", "completed": True}],
            }]},
        }
        df = workout_data_to_dataframe(data)
        assert len(df) == 3
        bench = df[df["exercise"] == "Bench Press"]
        assert bench["volume_kg"].tolist() == [450.0, 500.0]
        assert bench["set_number"].tolist() == [1, 2]
        run = df[df["exercise"] == "Run"].iloc[0]
        assert run["distance_km"] == 5
        assert run["time_min"] == 27.5
        assert run["pace"] == "5:30"
        assert bench["pace"].tolist() == ["", ""]
        assert run["volume_kg"] == 0

    def test_empty_store(self):
        from liftstats.store import workout_data_to_dataframe
        assert workout_data_to_dataframe({}).empty


# ═══════════════════════════════════════════════════════════════════════
# REST TIMER
# ═══════════════════════════════════════════════════════════════════════

class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self):
        return self.t


class TestRestTimer:

    def test_counts_down_and_fires_once(self):
        from liftstats.rest_timer import RestTimer
        clock = FakeClock()
        fired = []
        timer = RestTimer(clock=clock)
        timer.start(60, on_complete=lambda: fired.append(clock.t))
        assert timer.is_active
        assert timer.remaining() == 60

        clock.t = 30.5
        assert timer.remaining() == 30
        assert timer.poll() is False

        clock.t = 60
        assert timer.poll() is True
        assert timer.poll() is False
        assert fired == [60]
        assert not timer.is_active
        assert timer.remaining() == 0

    def test_adjust_extends(self):
        from liftstats.rest_timer import RestTimer
        clock = FakeClock()
        timer = RestTimer(clock=clock)
        timer.start(30)
        timer.adjust(15)
        assert timer.remaining() == 45

    def test_adjust_never_negative(self):
        from liftstats.rest_timer import RestTimer
        clock = FakeClock()
        fired = []
        timer = RestTimer(clock=clock)
        timer.start(30, on_complete=lambda: fired.append(True))
        timer.adjust(-1000)
        assert timer.remaining() == 0
        assert timer.poll() is True
        assert fired == [True]

    def test_stop_cancels_callback(self):
        from liftstats.rest_timer import RestTimer
        clock = FakeClock()
        fired = []
        timer = RestTimer(clock=clock)
        timer.start(10, on_complete=lambda: fired.append(True))
        timer.stop()
        clock.t = 20
        assert timer.poll() is False
        assert fired == []

    def test_restart_replaces_callback(self):
        from liftstats.rest_timer import RestTimer
        clock = FakeClock()
        fired = []
        timer = RestTimer(clock=clock)
        timer.start(10, on_complete=lambda: fired.append("first"))
        timer.start(20, on_complete=lambda: fired.append("second"))
        clock.t = 25
        timer.poll()
        assert fired == ["second"]

    def test_zero_duration_stays_idle(self):
        from liftstats.rest_timer import RestTimer
        timer = RestTimer(clock=FakeClock())
        timer.start(0)
        assert not timer.is_active
        assert timer.poll() is False

    def test_default_duration(self):
        from liftstats.config import DEFAULT_REST_SECONDS
        from liftstats.rest_timer import RestTimer
        timer = RestTimer(clock=FakeClock())
        timer.start()
        assert timer.remaining() == DEFAULT_REST_SECONDS


# ═══════════════════════════════════════════════════════════════════════
# REPORT
# ═══════════════════════════════════════════════════════════════════════

class TestReport:

    def test_day_summary(self, tmp_path, capsys):
        from liftstats.report import run_report
        day = _make_bench_day(weights=(50, 50, 50), reps=8)
        day["exercises"][0]["sets"][1]["completed"] = False
        day["exercises"][0]["sets"][2]["completed"] = False
        path = _make_store(tmp_path, {"2026-10-19": day})

        result = run_report(str(path), "2026-10-19")
        out = capsys.readouterr().out
        assert result["day"]["score"] == 33
        assert "📅 2026-10-19" in out
        assert "Score: 33%" in out
        assert "Baseline Established" in out
        assert result["history"]["total_sessions"] == 1

    def test_missing_day(self, tmp_path, capsys):
        from liftstats.report import run_report
        result = run_report(str(tmp_path / "empty.json"), "2026-10-19")
        out = capsys.readouterr().out
        assert "No session logged." in out
        assert result["day"] == {"score": 0, "volume": 0, "duration": "0m"}

    def test_corrupt_store_raises(self, tmp_path):
        from liftstats.report import run_report
        from liftstats.store import StoreError
        path = tmp_path / "workouts.json"
        path.write_text("[", encoding="utf-8")
        with pytest.raises(StoreError):
            run_report(str(path), "2026-10-19")
