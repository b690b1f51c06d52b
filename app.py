"""
🏋️ liftstats — Streamlit Dashboard
Run: streamlit run app.py
"""
import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from liftstats.calendar_status import classify_calendar_month, leading_blanks
from liftstats.config import BODYWEIGHT, DATA_PATH, DEFAULT_REST_SECONDS
from liftstats.dates import local_today, to_date_key
from liftstats.history import compute_history, history_frame
from liftstats.progress import exercise_progress
from liftstats.rest_timer import RestTimer
from liftstats.stats import calculate_session_stats, exercise_type, log_exercises
from liftstats.store import StoreError, load_workout_data, previous_best_lookup, workout_data_to_dataframe

# ── Page Config ──────────────────────────────────────────────────────
st.set_page_config(page_title="liftstats", page_icon="🏋️", layout="wide", initial_sidebar_state="expanded")

PL = dict(
    template="plotly_dark", paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
    margin=dict(l=40, r=20, t=40, b=40),
)

STATUS_COLORS = {
    "complete-good": "#10b981",
    "complete-medium": "#f59e0b",
    "complete-low": "#f97316",
    "complete-none": "#ef4444",
    "future": "#27272a",
    "empty": "#3f3f46",
    "rest": "#52525b",
    "absent": "#7f1d1d",
}


# ── Data Loading ─────────────────────────────────────────────────────
@st.cache_data(ttl=60)
def load_data(path: str) -> dict:
    return {"data": load_workout_data(path), "ts": pd.Timestamp.now()}


with st.sidebar:
    st.markdown("# 🏋️ liftstats")
    path = st.text_input("Log store", value=DATA_PATH)
    if st.button("🔄 Reload", use_container_width=True):
        st.cache_data.clear()
        st.rerun()

try:
    result = load_data(path)
    workout_data, last_load = result["data"], result["ts"]
except StoreError as e:
    st.error(f"Error loading logs: {e}")
    st.stop()

today = local_today()

with st.sidebar:
    st.caption(f"📡 Loaded {last_load:%H:%M:%S} — {len(workout_data)} days")
    selected_day = st.date_input("Day", value=today)
    st.divider()
    page = st.radio("Section", [
        "📊 Day",
        "📈 Progress",
        "🗓️ Calendar",
        "🏆 Exercises",
        "💪 Sets",
    ], label_visibility="collapsed")

    st.divider()
    st.markdown("### ⏱️ Rest")
    timer = st.session_state.setdefault("rest_timer", RestTimer())
    r1, r2, r3 = st.columns(3)
    if r1.button(f"{DEFAULT_REST_SECONDS}s", use_container_width=True):
        timer.start()
    if r2.button("+15s", use_container_width=True):
        timer.adjust(15)
    if r3.button("Stop", use_container_width=True):
        timer.stop()
    if timer.poll():
        st.toast("Rest over, next set!", icon="🔔")
    st.caption(f"{timer.remaining()}s left" if timer.is_active else "Idle")

day_key = to_date_key(selected_day)
get_previous_best = previous_best_lookup(workout_data, exclude_key=day_key)


# ══════════════════════════════════════════════════════════════════════
# 📊 DAY
# ══════════════════════════════════════════════════════════════════════
if page == "📊 Day":
    st.markdown(f"## 📊 {selected_day:%A %d %b %Y}")
    log = workout_data.get(day_key)
    if log is None:
        st.info("No session logged for this day.")
        st.stop()

    stats = calculate_session_stats(log, get_previous_best)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Adherence", f"{stats['score']}%")
    c2.metric("Duration", stats["duration"])
    c3.metric("Strength volume", f"{stats['volume']:,.0f} kg")
    c4.metric("Cardio output", f"{stats['cardio_vol']:.1f}")

    c5, c6, c7, c8 = st.columns(4)
    c5.metric("Cardio time", f"{stats['cardio_min']:.1f} min")
    c6.metric("Distance", f"{stats['cardio_dist']:.2f} km")
    c7.metric("Core reps", f"{stats['core_reps']:.0f}")
    c8.metric("Core hold", f"{stats['core_hold']:.0f} s")

    st.progress(min(stats["score"], 100) / 100)

    rows = []
    for ex in log_exercises(log):
        if exercise_type(ex) != "strength":
            continue
        prog = exercise_progress(workout_data, ex.get("name"), as_of=day_key, bodyweight=BODYWEIGHT)
        if prog["current"] is None:
            continue
        rows.append({
            "Exercise": ex.get("name"),
            "Volume (kg)": round(prog["current"]["volume"]),
            "e1RM": round(prog["current"]["max1RM"], 1) if prog["current"]["max1RM"] is not None else None,
            "Δ Volume %": prog["volume_delta_pct"],
            "Δ e1RM kg": prog["strength_delta_kg"],
            "Verdict": prog["verdict"],
        })
    if rows:
        st.markdown("### Progressive overload")
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


# ══════════════════════════════════════════════════════════════════════
# 📈 PROGRESS
# ══════════════════════════════════════════════════════════════════════
elif page == "📈 Progress":
    st.markdown("## 📈 Progress")
    history = compute_history(workout_data, get_previous_best, today=today)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Sessions", history["total_sessions"])
    c2.metric("Streak", f"{history['streak']} d")
    c3.metric("Discipline", f"{history['discipline']}%")
    c4.metric("This month", history["monthly_stats"]["sessions"], history["monthly_stats"]["top_focus"])

    if not history["labels"]:
        st.warning("No completed sessions yet.")
        st.stop()

    series = history["series"]
    col_left, col_right = st.columns([2, 1])
    with col_left:
        st.markdown("### Strength volume")
        fig = go.Figure()
        fig.add_trace(go.Bar(x=history["labels"], y=series["strength_volume"], marker_color="#ef4444"))
        fig.update_layout(**PL, yaxis_title="kg", showlegend=False, height=320)
        st.plotly_chart(fig, use_container_width=True, key="chart_strength")

        st.markdown("### Cardio")
        fig = go.Figure()
        fig.add_trace(go.Bar(x=history["labels"], y=series["cardio_minutes"], name="Minutes",
                             marker_color="#3b82f6"))
        fig.add_trace(go.Scatter(x=history["labels"], y=series["cardio_distance"], name="km",
                                 mode="lines+markers", yaxis="y2", line=dict(color="#22c55e", width=3)))
        fig.update_layout(**PL, height=320, yaxis=dict(title="min"),
                          yaxis2=dict(title="km", overlaying="y", side="right"))
        st.plotly_chart(fig, use_container_width=True, key="chart_cardio")

    with col_right:
        st.markdown("### Split")
        dist = history["distribution"]
        split = pd.DataFrame({"category": ["Strength", "Cardio", "Core"],
                              "days": [dist["strength"], dist["cardio"], dist["core"]]})
        fig = px.pie(split, values="days", names="category", hole=0.45,
                     color="category",
                     color_discrete_map={"Strength": "#ef4444", "Cardio": "#3b82f6", "Core": "#eab308"})
        fig.update_layout(**PL, height=320)
        st.plotly_chart(fig, use_container_width=True, key="chart_split")

        st.markdown("### Adherence")
        frame = history_frame(workout_data, get_previous_best)
        frame = frame[frame["active"]]
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=frame["label"], y=frame["score"], mode="lines+markers",
                                 line=dict(color="#fbbf24", width=3)))
        fig.update_layout(**PL, yaxis=dict(range=[0, 105]), height=320, showlegend=False)
        st.plotly_chart(fig, use_container_width=True, key="chart_score")


# ══════════════════════════════════════════════════════════════════════
# 🗓️ CALENDAR
# ══════════════════════════════════════════════════════════════════════
elif page == "🗓️ Calendar":
    st.markdown(f"## 🗓️ {selected_day:%B %Y}")
    days = classify_calendar_month(selected_day.year, selected_day.month, workout_data, today=today)
    cells = [None] * leading_blanks(selected_day.year, selected_day.month) + days

    header = st.columns(7)
    for col, name in zip(header, ["S", "M", "T", "W", "T", "F", "S"]):
        col.markdown(f"**{name}**")
    for week_start in range(0, len(cells), 7):
        cols = st.columns(7)
        for col, cell in zip(cols, cells[week_start:week_start + 7]):
            if cell is None:
                continue
            color = STATUS_COLORS.get(cell["status"], "#3f3f46")
            col.markdown(
                f"<div style='background:{color};border-radius:8px;padding:6px;text-align:center'>"
                f"{cell['date'].day}</div>",
                unsafe_allow_html=True,
            )
    st.caption(" · ".join(STATUS_COLORS))


# ══════════════════════════════════════════════════════════════════════
# 🏆 EXERCISES
# ══════════════════════════════════════════════════════════════════════
elif page == "🏆 Exercises":
    st.markdown("## 🏆 Exercise progress")
    sets_df = workout_data_to_dataframe(workout_data)
    if sets_df.empty:
        st.warning("No sets logged.")
        st.stop()
    strength = sets_df[(sets_df["type"] == "strength") & sets_df["completed"]]
    names = sorted(strength["exercise"].unique().tolist())
    selected = st.selectbox("Exercise", names)
    if selected:
        prog = exercise_progress(workout_data, selected, bodyweight=BODYWEIGHT)
        c1, c2, c3 = st.columns(3)
        c1.metric("Verdict", prog["verdict"])
        c2.metric("Δ Volume", f"{prog['volume_delta_pct']}%" if prog["volume_delta_pct"] is not None else "—")
        c3.metric("Δ e1RM", f"{prog['strength_delta_kg']} kg" if prog["strength_delta_kg"] is not None else "—")

        per_day = (
            strength[strength["exercise"] == selected]
            .groupby("date")
            .agg(volume_kg=("volume_kg", "sum"), max_weight=("weight_kg", "max"))
            .reset_index()
        )
        fig = go.Figure()
        fig.add_trace(go.Bar(x=per_day["date"], y=per_day["volume_kg"], name="Volume",
                             marker_color="#7f1d1d"))
        fig.add_trace(go.Scatter(x=per_day["date"], y=per_day["max_weight"], name="Top weight",
                                 mode="lines+markers", yaxis="y2", line=dict(color="#ef4444", width=3)))
        fig.update_layout(**PL, height=380, yaxis=dict(title="kg volume"),
                          yaxis2=dict(title="kg", overlaying="y", side="right"))
        st.plotly_chart(fig, use_container_width=True, key="chart_exercise")


# ══════════════════════════════════════════════════════════════════════
# 💪 SETS
# ══════════════════════════════════════════════════════════════════════
elif page == "💪 Sets":
    st.markdown("## 💪 All sets")
    sets_df = workout_data_to_dataframe(workout_data)
    if sets_df.empty:
        st.warning("No sets logged.")
        st.stop()
    only_day = st.checkbox(f"Only {day_key}", value=True)
    if only_day:
        sets_df = sets_df[sets_df["key"] == day_key]
    st.dataframe(sets_df.drop(columns=["date"]), use_container_width=True, hide_index=True)
