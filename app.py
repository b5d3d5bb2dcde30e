import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Any, Dict, Optional

from ot_core import data as dc
from ot_core.errors import SourceLoadError
from ot_core.filters import ALL
from ot_core.logging_config import setup_logging
from ot_core.metrics_breakdown import compute_breakdown
from ot_core.metrics_debug import compute_debug
from ot_core.metrics_overview import compute_overview
from ot_core.metrics_trend import compute_trend
from ot_core.parsing import format_hours, truncate_text
from ot_core.settings import DashboardSettings

settings = DashboardSettings.from_env()
setup_logging(settings.log_level)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(filters) -> str:
    chips = [
        f"Dates: {filters.start_date or '…'} – {filters.end_date or '…'}",
        "Officer: All" if filters.officer == ALL else f"Officer: {truncate_text(filters.officer, 20)}",
        "Status: All" if filters.status == ALL else f"Status: {truncate_text(filters.status, 25)}",
        "Staff: All" if filters.staff == ALL else f"Staff: {truncate_text(filters.staff, 20)}",
    ]
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def render_page_header(title: str, breadcrumb: str, filter_summary_html: str, export_df: Optional[pd.DataFrame] = None, export_name: str = "export.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )
    st.markdown(f"<div class='chip-row'>{filter_summary_html}</div>", unsafe_allow_html=True)


def render_chart(charts: Dict[str, Any], name: str, empty_message: str = "No records match the selected filters."):
    spec = charts.get(name)
    if not spec:
        st.info(empty_message)
        return
    st.vega_lite_chart(spec, use_container_width=True)


# ---------- UI setup ----------
st.set_page_config(page_title="ERS Overtime Analysis Dashboard", layout="wide")
inject_base_styles()
st.title("ERS Overtime Analysis Dashboard")
st.caption("Clock deltas, potential overtime and OT claim status by staff, shift and reporting officer.")

try:
    data_ctx = dc.load_dashboard_data(settings.data_path)
except SourceLoadError as exc:
    st.error(f"Error loading data: {exc}")
    st.stop()

options = data_ctx["options"]
skipped = data_ctx.get("skipped", ())

# ----- Sidebar: navigation + filters -----
with st.sidebar:
    st.markdown("### Navigate")
    nav_choice = st.radio("Navigate", ["Overview", "Trends", "Breakdown", "Data Quality"], index=0)

    st.markdown("---")
    st.markdown("### Filters")
    date_range = st.date_input(
        "Shift date range",
        value=(options.min_date, options.max_date),
        min_value=options.min_date,
        max_value=options.max_date,
    )
    officer = st.selectbox("Reporting officer", [ALL] + options.officers, format_func=lambda v: "All" if v == ALL else truncate_text(v, 20))
    status = st.selectbox("OT status", [ALL] + options.statuses, format_func=lambda v: "All" if v == ALL else truncate_text(v, 25))
    staff = st.selectbox("Staff", [ALL] + options.staff, format_func=lambda v: "All" if v == ALL else truncate_text(v, 20))

    st.markdown("---")
    with st.expander("Advanced settings", expanded=False):
        top_n = st.slider("Top N rows", min_value=1, max_value=50, value=settings.default_top_n, step=1)

start_date, end_date = (date_range if isinstance(date_range, (list, tuple)) and len(date_range) == 2 else (options.min_date, options.max_date))
filters = {
    "start_date": start_date,
    "end_date": end_date,
    "officer": officer,
    "status": status,
    "staff": staff,
    "top_n": top_n,
}

ctx = dc.prepare_context(filters, data_ctx)
criteria = ctx["filters"]
filtered = ctx["filtered"]
filter_summary_html = format_filter_summary(criteria)

if skipped:
    st.warning(f"{len(skipped)} row(s) could not be parsed and were skipped. See Data Quality for details.")


def render_overview_page():
    payload = compute_overview(criteria, ctx)
    render_page_header("Overview", "Home / Overview", filter_summary_html, export_df=dc.records_frame(filtered), export_name="overtime_filtered.csv")
    summary = payload["summary"]
    insights = payload["insights"]
    with card("Summary"):
        cols = st.columns(3)
        cols[0].metric("Total records", f"{summary['total_records']:,}")
        cols[1].metric("Average delta", format_hours(summary["avg_delta"]))
        cols[2].metric("Potential OT cases", f"{summary['potential_ot_count']:,}", help=f"Records whose delta exceeds {data_ctx['potential_ot_threshold']} hours.")
    with card("Key insights"):
        cols = st.columns(4)
        cols[0].metric("Highest delta", format_hours(insights["max_delta"]))
        cols[1].metric("Most common status", truncate_text(insights["most_common_status"], 15), help=insights["most_common_status"])
        cols[2].metric("Total potential OT hours", format_hours(insights["total_potential_hours"]))
        cols[3].metric("Average staff delta", format_hours(insights["avg_delta"]))
    with card("OT status distribution"):
        render_chart(payload["charts"], "status")
        if payload["status"]:
            st.dataframe(pd.DataFrame(payload["status"]).drop(columns=["color"]), hide_index=True, use_container_width=True)


def render_trends_page():
    payload = compute_trend(criteria, ctx)
    render_page_header("Trends", "Home / Trends", filter_summary_html, export_df=pd.DataFrame(payload["daily"]), export_name="daily_trend.csv")
    with card("Daily trend"):
        render_chart(payload["charts"], "daily")
    with card("Delta distribution"):
        render_chart(payload["charts"], "delta_histogram")


def render_breakdown_page():
    payload = compute_breakdown(criteria, ctx)
    render_page_header("Breakdown", "Home / Breakdown", filter_summary_html)
    cols = st.columns(2)
    with cols[0]:
        with card(f"Top {criteria.top_n} staff by average delta"):
            render_chart(payload["charts"], "staff")
    with cols[1]:
        with card("Shift type analysis"):
            render_chart(payload["charts"], "shift")
    with card(f"Reporting officers (top {criteria.top_n} by cases)"):
        render_chart(payload["charts"], "officer")
        if payload["officer"]:
            st.dataframe(pd.DataFrame(payload["officer"]), hide_index=True, use_container_width=True)


def render_debug_page():
    payload = compute_debug(criteria, ctx)
    render_page_header("Data Quality", "Home / Data Quality", filter_summary_html)
    with card("Data Quality"):
        st.markdown("**Row counts**")
        st.write(payload["row_counts"])
        st.markdown("**Date coverage**")
        st.write(payload["date_coverage"])
        if payload["skipped"]:
            st.markdown("**Skipped rows**")
            st.dataframe(pd.DataFrame(payload["skipped"]), hide_index=True, use_container_width=True)
    st.caption(f"Source: {data_ctx.get('source')}. Replace the CSV to refresh; the dashboard reloads when the file changes.")


if nav_choice == "Overview":
    render_overview_page()
elif nav_choice == "Trends":
    render_trends_page()
elif nav_choice == "Breakdown":
    render_breakdown_page()
else:
    render_debug_page()
