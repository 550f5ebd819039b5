#!/usr/bin/env python
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse, json
from datetime import datetime, timezone
from pathlib import Path

from zonewiz.config import MIN_MONTHS, REF_END, REF_START
from zonewiz.prep import (aggregate_to_years, compute_anomalies, compute_climatology, ensure_cols,
                          load_any, save_any)


def main():
    ap = argparse.ArgumentParser(description="Compute zonal temperature anomalies (year, lat, tas).")
    ap.add_argument("--input", required=True, help="Zonal means with year/lat/temp_c (month optional); .csv, .parquet or .feather.")
    ap.add_argument("--output", default="data/zonal_anomaly.csv", help="Output file (.csv or .parquet).")
    ap.add_argument("--output_climatology", default=None, help="Optional output for the per-latitude climatology.")
    ap.add_argument("--ref_start", type=int, default=REF_START, help="Reference start year (inclusive).")
    ap.add_argument("--ref_end", type=int, default=REF_END, help="Reference end year (inclusive).")
    ap.add_argument("--min_months", type=int, default=MIN_MONTHS, help="Months required for an annual mean.")
    args = ap.parse_args()

    src = Path(args.input)
    df = ensure_cols(load_any(src), src.name)
    yearly = aggregate_to_years(df, args.min_months)
    clim = compute_climatology(yearly, args.ref_start, args.ref_end)
    if clim.empty:
        raise SystemExit(f"No rows inside reference window {args.ref_start}-{args.ref_end}")
    missing = sorted(set(yearly["lat"]) - set(clim["lat"]))
    if missing:
        print(f"[WARN] {len(missing)} latitude(s) without reference data dropped: {missing[:5]}")

    anomalies = compute_anomalies(yearly, clim)
    save_any(anomalies, Path(args.output))
    if args.output_climatology:
        save_any(clim, Path(args.output_climatology))

    meta = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "input": str(src),
        "ref_window": [args.ref_start, args.ref_end],
        "rows_input": int(len(df)),
        "rows_anomalies": int(len(anomalies)),
        "latitudes": int(anomalies["lat"].nunique()),
        "years": [int(anomalies["year"].min()), int(anomalies["year"].max())] if len(anomalies) else None,
    }
    print("[OK] anomalies written:", args.output)
    print(json.dumps(meta, indent=2))


if __name__ == "__main__":
    main()
