"""Build ``zonal_anomaly.csv`` from absolute zonal-mean temperatures.

Input rows are ``year, lat, temp_c`` (annual) or ``year, month, lat, temp_c``
(monthly). Anomalies are taken against a per-latitude reference window.
"""
from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from zonewiz.config import MIN_MONTHS, REF_END, REF_START

SUPPORTED = {".csv", ".parquet", ".feather"}


def load_any(path: Path) -> pd.DataFrame:
    sfx = path.suffix.lower()
    if sfx == ".csv":
        return pd.read_csv(path)
    if sfx == ".parquet":
        return pd.read_parquet(path)
    if sfx == ".feather":
        return pd.read_feather(path)
    raise ValueError(f"Unsupported file: {path}")


def save_any(df: pd.DataFrame, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".parquet":
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)


def ensure_cols(df: pd.DataFrame, src: str = "input") -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    if "temp_c" not in df.columns and "tas" in df.columns:
        df = df.rename(columns={"tas": "temp_c"})
    for req in ["year", "lat", "temp_c"]:
        if req not in df.columns:
            raise SystemExit(f"{src}: missing required column '{req}'")
    df["year"] = df["year"].astype(int)
    df["lat"] = df["lat"].astype(float)
    cols = ["year", "month", "lat", "temp_c"] if "month" in df.columns else ["year", "lat", "temp_c"]
    if "month" in df.columns:
        df["month"] = df["month"].astype(int)
    return df[cols]


def aggregate_to_years(df: pd.DataFrame, min_months: int = MIN_MONTHS) -> pd.DataFrame:
    """Average monthly rows to annual; years short of ``min_months`` months are dropped."""
    if "month" not in df.columns:
        return df[["year", "lat", "temp_c"]].copy()
    valid = df.dropna(subset=["temp_c"])
    g = valid.groupby(["year", "lat"])
    out = g["temp_c"].mean().to_frame()
    out["n_months"] = g["month"].nunique()
    out = out[out["n_months"] >= min_months].reset_index()
    return out[["year", "lat", "temp_c"]]


def compute_climatology(df: pd.DataFrame, start: int = REF_START, end: int = REF_END) -> pd.DataFrame:
    in_ref = (df["year"] >= start) & (df["year"] <= end)
    clim = (df.loc[in_ref]
            .groupby("lat", as_index=False)["temp_c"]
            .mean()
            .rename(columns={"temp_c": "clim_temp_c"}))
    clim["ref_start"] = start
    clim["ref_end"] = end
    return clim


def compute_anomalies(df: pd.DataFrame, clim: pd.DataFrame) -> pd.DataFrame:
    """``tas = temp_c - clim_temp_c``; latitudes without a climatology are dropped."""
    out = df.merge(clim[["lat", "clim_temp_c"]], on="lat", how="inner")
    out["tas"] = (out["temp_c"] - out["clim_temp_c"]).round(4)
    return out[["year", "lat", "tas"]].sort_values(["year", "lat"]).reset_index(drop=True)


def validate_zonal(anom: pd.DataFrame, start: int = REF_START, end: int = REF_END,
                   tol: float = 0.15) -> pd.DataFrame:
    """Per-latitude checks on an anomaly table."""
    dup = anom.duplicated(subset=["year", "lat"], keep=False)
    rows = []
    for lat, g in anom.groupby("lat"):
        within = g[(g["year"] >= start) & (g["year"] <= end)]
        mean_ref = float(within["tas"].mean()) if len(within) else np.nan
        rows.append({
            "lat": float(lat),
            "rows": int(len(g)),
            "first_year": int(g["year"].min()),
            "last_year": int(g["year"].max()),
            "mean_anom_in_ref": mean_ref,
            "mean_anom_in_ref_ok": bool(abs(mean_ref) < tol) if len(within) else False,
            "duplicate_rows": int(dup.loc[g.index].sum()),
        })
    return pd.DataFrame(rows, columns=["lat", "rows", "first_year", "last_year", "mean_anom_in_ref",
                                       "mean_anom_in_ref_ok", "duplicate_rows"])
