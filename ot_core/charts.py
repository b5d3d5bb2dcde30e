from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

from ot_core.palette import PRIMARY_COLORS, status_color
from ot_core.shifts import SHIFT_ORDER

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def status_donut(status_df: pd.DataFrame) -> alt.Chart:
    labels: List[str] = [str(k) for k in status_df["key"].tolist()]
    colors = [status_color(label, i) for i, label in enumerate(labels)]
    hover = alt.selection_point(fields=["key"], on="mouseover", empty="all")
    return (
        alt.Chart(status_df)
        .mark_arc(innerRadius=50)
        .encode(
            theta=alt.Theta("count:Q"),
            color=alt.Color("key:N", title="OT Status", scale=alt.Scale(domain=labels, range=colors), sort=labels),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.6)),
            tooltip=[
                alt.Tooltip("key:N", title="Status"),
                alt.Tooltip("count:Q", title="Cases"),
                alt.Tooltip("share:Q", title="Share", format=".1%"),
            ],
        )
        .add_params(hover)
    )


def delta_histogram_chart(bins_df: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(bins_df)
        .mark_bar(opacity=0.7, color=PRIMARY_COLORS[0])
        .encode(
            x=alt.X("lower:Q", bin="binned", title="Delta (hours)", axis=alt.Axis(grid=False)),
            x2="upper:Q",
            y=alt.Y("count:Q", title="Records", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            tooltip=[
                alt.Tooltip("range:N", title="Range"),
                alt.Tooltip("count:Q", title="Count"),
            ],
        )
    )


def daily_trend_chart(daily_df: pd.DataFrame) -> alt.LayerChart:
    long_df = daily_df.melt(
        id_vars=["date"],
        value_vars=["positive_delta_sum", "potential_ot_count"],
        var_name="metric",
        value_name="value",
    )
    long_df["metric"] = long_df["metric"].map({"positive_delta_sum": "Total OT Hours", "potential_ot_count": "Potential OT Cases"})
    hover = alt.selection_point(fields=["metric"], on="mouseover", empty="all")
    return (
        alt.Chart(long_df)
        .mark_line(point={"filled": True}, interpolate="monotone")
        .encode(
            x=alt.X("date:T", title="Date", axis=alt.Axis(format="%m/%d", grid=False)),
            y=alt.Y("value:Q", title=None, axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color(
                "metric:N",
                title="Metric",
                scale=alt.Scale(domain=["Total OT Hours", "Potential OT Cases"], range=PRIMARY_COLORS[:2]),
            ),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.2)),
            tooltip=[
                alt.Tooltip("date:T", title="Date", format="%d %b %Y"),
                alt.Tooltip("metric:N", title="Metric"),
                alt.Tooltip("value:Q", title="Value", format=".1f"),
            ],
        )
        .add_params(hover)
    )


def staff_chart(staff_df: pd.DataFrame) -> alt.Chart:
    order = staff_df["label"].tolist()
    return (
        alt.Chart(staff_df)
        .mark_bar(opacity=0.8, color=PRIMARY_COLORS[2])
        .encode(
            x=alt.X("mean_delta:Q", title="Average Delta (hours)", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            y=alt.Y("label:N", title=None, sort=order, axis=alt.Axis(grid=False)),
            tooltip=[
                alt.Tooltip("key:N", title="Staff"),
                alt.Tooltip("mean_delta:Q", title="Avg Delta", format=".1f"),
                alt.Tooltip("count:Q", title="Records"),
                alt.Tooltip("potential_ot_count:Q", title="Potential OT"),
            ],
        )
    )


def shift_chart(shift_df: pd.DataFrame) -> alt.Chart:
    domain = [s.value for s in SHIFT_ORDER]
    return (
        alt.Chart(shift_df)
        .mark_bar(opacity=0.8)
        .encode(
            x=alt.X("key:N", title="Shift Type", sort=domain, axis=alt.Axis(grid=False)),
            y=alt.Y("count:Q", title="Records", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("key:N", legend=None, scale=alt.Scale(domain=domain, range=PRIMARY_COLORS[: len(domain)])),
            tooltip=[
                alt.Tooltip("key:N", title="Shift"),
                alt.Tooltip("count:Q", title="Records"),
                alt.Tooltip("mean_delta:Q", title="Avg Delta", format=".1f"),
                alt.Tooltip("potential_ot_count:Q", title="Potential OT"),
            ],
        )
    )


def officer_chart(officer_df: pd.DataFrame) -> alt.LayerChart:
    order = officer_df["label"].tolist()
    base = alt.Chart(officer_df).encode(
        y=alt.Y("label:N", title=None, sort=order, axis=alt.Axis(grid=False)),
        tooltip=[
            alt.Tooltip("key:N", title="Officer"),
            alt.Tooltip("count:Q", title="Total Cases"),
            alt.Tooltip("potential_ot_count:Q", title="Potential OT"),
            alt.Tooltip("mean_delta:Q", title="Avg Delta", format=".1f"),
        ],
    )
    total = base.mark_bar(opacity=0.3, color=PRIMARY_COLORS[0]).encode(x=alt.X("count:Q", title="Cases"))
    potential = base.mark_bar(opacity=0.8, color=PRIMARY_COLORS[1]).encode(x="potential_ot_count:Q")
    return alt.layer(total, potential)
