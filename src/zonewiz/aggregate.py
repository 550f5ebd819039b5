from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from zonewiz.bands import band_mask, bands_label
from zonewiz.grouping import GroupAssignment


@dataclass
class GroupSeries:
    group_id: int
    band_ids: list[int]
    frame: pd.DataFrame  # columns: year, tas

    @property
    def label(self) -> str:
        return f"Group {self.group_id}: {bands_label(self.band_ids)}"

    @property
    def empty(self) -> bool:
        return self.frame.empty


def group_mean(df: pd.DataFrame, band_ids: Iterable[int]) -> pd.DataFrame:
    """Mean ``tas`` per year over samples whose latitude lies in any of ``band_ids``."""
    sub = df[band_mask(df["lat"], band_ids)]
    out = sub.groupby("year", as_index=False, sort=True)["tas"].mean()
    return out[["year", "tas"]].reset_index(drop=True)


def grouped_series(df: pd.DataFrame, assignment: GroupAssignment) -> list[GroupSeries]:
    return [GroupSeries(gid, band_ids, group_mean(df, band_ids))
            for gid, band_ids in assignment.non_empty_groups()]


def series_table(series: list[GroupSeries]) -> pd.DataFrame:
    frames = []
    for s in series:
        f = s.frame.copy()
        f.insert(0, "bands", bands_label(s.band_ids))
        f.insert(0, "group", s.group_id)
        frames.append(f)
    if not frames:
        return pd.DataFrame(columns=["group", "bands", "year", "tas"])
    return pd.concat(frames, ignore_index=True)


def decadal_trend(frame: pd.DataFrame) -> float:
    """Least-squares slope of tas against year, in °C per decade."""
    f = frame.dropna(subset=["year", "tas"])
    if len(f) < 2 or f["year"].nunique() < 2:
        return float("nan")
    slope, _ = np.polyfit(f["year"].astype(float), f["tas"].astype(float), 1)
    return float(slope * 10)


def summary_table(series: list[GroupSeries]) -> pd.DataFrame:
    rows = []
    for s in series:
        f = s.frame
        rows.append({
            "group": s.group_id,
            "bands": bands_label(s.band_ids),
            "first_year": int(f["year"].min()) if not f.empty else None,
            "last_year": int(f["year"].max()) if not f.empty else None,
            "latest_tas": round(float(f["tas"].iloc[-1]), 3) if not f.empty else None,
            "trend_c_per_decade": round(decadal_trend(f), 3),
        })
    return pd.DataFrame(rows, columns=["group", "bands", "first_year", "last_year",
                                       "latest_tas", "trend_c_per_decade"])
