# file: pages/Traffic.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import streamlit as st

import drawdash

settings = drawdash.load_settings()
drawdash.configure_logging(settings.log_level)

st.set_page_config(page_title="DrawDash - Site Traffic", layout="wide")
st.title("Daily utilization metrics for data.lacity.org")

state = drawdash.session_load_state("traffic_load", settings.traffic_source, drawdash.parse_traffic_csv, settings)
records = state.records if state.status == drawdash.STATUS_READY else ()
summary = drawdash.cached_traffic_summary(records)

st.caption(f"Combined Socrata + GeoHub users ({summary.time_range_label or drawdash.DEFAULT_TRAFFIC_RANGE}).")
if summary.peak_day is not None:
    peak = summary.peak_day
    st.write(f"Highest combined traffic: **{peak.combined_users:,}** users on **{peak.date_label}**.")

if drawdash.render_status(state, noun="traffic data"):
    drawdash.render_metric_cards(drawdash.traffic_metric_cards(summary))
    drawdash.render_traffic_chart(records)

    st.subheader("Most recent days")
    recent = drawdash.traffic_frame(records[-30:][::-1])
    recent["date"] = [r.date_label for r in records[-30:][::-1]]
    st.dataframe(
        recent[["date", "Combined users", "Socrata users", "GeoHub users"]],
        use_container_width=True,
        hide_index=True,
    )
