from __future__ import annotations

from pathlib import Path
from typing import IO, Union

import numpy as np
import pandas as pd

from zonewiz.config import REQUIRED_COLUMNS
from zonewiz.exceptions import AnomalyDataError
from zonewiz.log import get_logger

log = get_logger("data")

Source = Union[str, Path, IO]


def empty_frame() -> pd.DataFrame:
    return pd.DataFrame({"year": pd.Series(dtype="int64"),
                         "lat": pd.Series(dtype="float64"),
                         "tas": pd.Series(dtype="float64")})


def _read(source: Source) -> pd.DataFrame:
    sfx = Path(source).suffix.lower() if isinstance(source, (str, Path)) else ".csv"
    if sfx == ".parquet":
        return pd.read_parquet(source)
    return pd.read_csv(source)


def load_anomalies(source: Source) -> pd.DataFrame:
    """Read a ``year, lat, tas`` table and coerce it to numeric columns.

    Rows with a non-numeric or infinite value in any of the three columns are dropped.
    Raises AnomalyDataError when a required column is missing.
    """
    df = _read(source)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = set(REQUIRED_COLUMNS) - set(df.columns)
    if missing:
        raise AnomalyDataError(f"Missing columns in {source}: {sorted(missing)}")
    df = df[list(REQUIRED_COLUMNS)].apply(pd.to_numeric, errors="coerce")
    # "inf" parses as a number but cannot be plotted
    df = df.replace([np.inf, -np.inf], np.nan)
    bad = int(df.isna().any(axis=1).sum())
    if bad:
        log.warning("dropping %d non-numeric row(s) from %s", bad, source)
        df = df.dropna().copy()
    df["year"] = df["year"].astype("int64")
    df["lat"] = df["lat"].astype("float64")
    df["tas"] = df["tas"].astype("float64")
    log.info("loaded %d samples, %d years, %d latitudes from %s",
             len(df), df["year"].nunique(), df["lat"].nunique(), source)
    return df.reset_index(drop=True)


def load_anomalies_safe(source: Source) -> pd.DataFrame:
    """Like :func:`load_anomalies` but logs any failure and returns an empty frame."""
    try:
        return load_anomalies(source)
    except Exception:
        log.exception("Error loading data from %s", source)
        return empty_frame()
