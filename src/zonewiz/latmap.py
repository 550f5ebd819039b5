"""World map with the six latitude bands overlaid in their group colours."""
from __future__ import annotations

from typing import Any, Mapping

import numpy as np
import plotly.graph_objects as go

from zonewiz.bands import BANDS, get_band
from zonewiz.config import BAND_OPACITY, GROUP_COLORS, MAP_HEIGHT, UNASSIGNED_COLOR
from zonewiz.exceptions import UnknownBandError
from zonewiz.grouping import GroupAssignment
from zonewiz.log import get_logger

log = get_logger("latmap")

# parallels are sampled densely so geo line segments follow the latitude
_EDGE_LONS = np.arange(-180, 181, 2)
_HANDLE_LONS = np.arange(-150, 151, 60)


def band_color(assignment: GroupAssignment, band_id: int) -> str:
    gid = assignment.group_of(band_id)
    return UNASSIGNED_COLOR if gid is None else GROUP_COLORS[gid]


def _rgba(hex_color: str, alpha: float) -> str:
    h = hex_color.lstrip("#")
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def _strip(band) -> tuple[list[float], list[float]]:
    lons = list(_EDGE_LONS) + list(_EDGE_LONS[::-1]) + [_EDGE_LONS[0]]
    lats = [band.min] * len(_EDGE_LONS) + [band.max] * len(_EDGE_LONS) + [band.min]
    return [float(x) for x in lons], [float(y) for y in lats]


def build_lat_map(assignment: GroupAssignment) -> go.Figure:
    fig = go.Figure()
    for band in BANDS:
        color = band_color(assignment, band.id)
        gid = assignment.group_of(band.id)
        hover = f"{band.label}<br>{'unassigned' if gid is None else f'Group {gid}'}"
        lons, lats = _strip(band)
        fig.add_trace(go.Scattergeo(
            lon=lons, lat=lats, mode="lines", fill="toself",
            fillcolor=_rgba(color, BAND_OPACITY), line=dict(color=color, width=0.5),
            name=band.label, hoverinfo="skip", showlegend=False,
        ))
        # click targets carrying the band id
        fig.add_trace(go.Scattergeo(
            lon=_HANDLE_LONS, lat=[band.center] * len(_HANDLE_LONS), mode="markers",
            marker=dict(size=14, color=color, opacity=0.9, line=dict(color="white", width=1)),
            customdata=[band.id] * len(_HANDLE_LONS),
            hovertext=[hover] * len(_HANDLE_LONS), hoverinfo="text",
            name=band.label, showlegend=False,
        ))
    fig.update_geos(
        projection_type="equirectangular",
        showland=True, landcolor="#f0f0f0",
        showocean=True, oceancolor="#ffffff",
        showcoastlines=True, coastlinecolor="#888",
        showcountries=False, showframe=False,
        lataxis_range=[-90, 90], lonaxis_range=[-180, 180],
    )
    fig.update_layout(height=MAP_HEIGHT, margin=dict(l=0, r=0, t=0, b=0),
                      clickmode="event+select", dragmode=False)
    return fig


def _as_band_id(raw: Any) -> int | None:
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else None
    if raw is None:
        return None
    try:
        return get_band(int(raw)).id
    except (TypeError, ValueError, UnknownBandError):
        log.warning("ignoring click on unknown band %r", raw)
        return None


def clicked_band_ids(event: Mapping | None) -> list[int]:
    """Band ids named by a Streamlit plotly selection event, in click order, deduplicated."""
    if not event:
        return []
    selection = event.get("selection") or {}
    out: list[int] = []
    for point in selection.get("points") or []:
        bid = _as_band_id(point.get("customdata"))
        if bid is not None and bid not in out:
            out.append(bid)
    return out


def apply_clicks(assignment: GroupAssignment, event: Mapping | None) -> list[int]:
    """Cycle every band clicked in ``event`` once; returns the bands that moved."""
    clicked = clicked_band_ids(event)
    for band_id in clicked:
        assignment.cycle(band_id)
    return clicked
