"""Line chart of mean anomaly per group."""
from __future__ import annotations

import math

import plotly.graph_objects as go

from zonewiz.aggregate import GroupSeries
from zonewiz.config import (CHART_HEIGHT, CHART_MARGIN, CHART_WIDTH, GROUP_COLORS, TAS_UNIT,
                            X_TICKS, Y_TICKS)
from zonewiz.grouping import GroupAssignment

_E10, _E5, _E2 = math.sqrt(50), math.sqrt(10), math.sqrt(2)

# (group, text, ax, ay) drawn only for the poles / mid-latitudes / tropics preset
PRESET_CALLOUTS = (
    (1, "Poles warm fastest<br>(polar amplification)", -90, -40),
    (3, "Tropics: slower,<br>steadier warming", -90, 40),
)


def tick_increment(start: float, stop: float, count: int) -> float:
    # positive: step size; negative: -1/step for steps below one
    step = (stop - start) / count
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def nice_domain(lo: float, hi: float, count: int = Y_TICKS) -> tuple[float, float]:
    """Extend ``[lo, hi]`` outwards so both ends fall on round tick values."""
    if lo > hi:
        lo, hi = hi, lo
    if lo == hi:
        lo, hi = lo - 0.5, hi + 0.5
    prestep = None
    for _ in range(10):
        step = tick_increment(lo, hi, count)
        if step == prestep:
            break
        if step > 0:
            lo, hi = math.floor(lo / step) * step, math.ceil(hi / step) * step
        else:
            lo, hi = math.ceil(lo * step) / step, math.floor(hi * step) / step
        prestep = step
    return lo, hi


def axis_domains(series: list[GroupSeries]):
    """``((x0, x1), (y0, y1))`` over all non-empty series, or None when nothing plots."""
    frames = [s.frame for s in series if not s.empty]
    if not frames:
        return None
    x0 = min(int(f["year"].min()) for f in frames)
    x1 = max(int(f["year"].max()) for f in frames)
    y0 = min(float(f["tas"].min()) for f in frames)
    y1 = max(float(f["tas"].max()) for f in frames)
    return (x0, x1), nice_domain(y0, y1)


def _base_layout(fig: go.Figure) -> None:
    fig.update_layout(
        width=CHART_WIDTH + CHART_MARGIN["l"] + CHART_MARGIN["r"],
        height=CHART_HEIGHT + CHART_MARGIN["t"] + CHART_MARGIN["b"],
        margin=CHART_MARGIN,
        template="plotly_white",
        legend=dict(x=1.02, y=1, xanchor="left", yanchor="top", font=dict(size=12)),
        hovermode="x unified",
    )


def build_line_chart(series: list[GroupSeries], assignment: GroupAssignment) -> go.Figure:
    fig = go.Figure()
    _base_layout(fig)
    domains = axis_domains(series)
    if domains is None:
        fig.add_annotation(text="Click a latitude band on the map to start a group",
                           x=0.5, y=0.5, xref="paper", yref="paper", showarrow=False,
                           font=dict(size=14, color="#666"))
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False)
        return fig

    (x0, x1), (y0, y1) = domains
    for s in series:
        if s.empty:
            continue
        fig.add_trace(go.Scatter(
            x=s.frame["year"], y=s.frame["tas"], mode="lines", name=s.label,
            line=dict(color=GROUP_COLORS[s.group_id], width=2),
            hovertemplate="%{y:.2f} °C<extra>Group " + str(s.group_id) + "</extra>",
        ))
    fig.update_xaxes(range=[x0, x1], nticks=X_TICKS, tickformat="d", title_text="Year")
    fig.update_yaxes(range=[y0, y1], nticks=Y_TICKS, title_text=TAS_UNIT, zeroline=True)

    if assignment.matches_preset():
        by_group = {s.group_id: s for s in series if not s.empty}
        for gid, text, ax, ay in PRESET_CALLOUTS:
            s = by_group.get(gid)
            if s is None:
                continue
            last = s.frame.iloc[-1]
            fig.add_annotation(x=int(last["year"]), y=float(last["tas"]), text=text,
                               showarrow=True, arrowhead=2, ax=ax, ay=ay,
                               font=dict(size=11, color=GROUP_COLORS[gid]),
                               bgcolor="rgba(255,255,255,0.8)")
    return fig
