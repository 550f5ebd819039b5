#!/usr/bin/env python
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse, json
from datetime import datetime, timezone
from pathlib import Path

from zonewiz.bands import BANDS, band_mask
from zonewiz.config import REF_END, REF_START
from zonewiz.data import load_anomalies
from zonewiz.prep import validate_zonal


def main():
    ap = argparse.ArgumentParser(description="Validate a zonal anomaly table before serving it.")
    ap.add_argument("--anomalies", default="data/zonal_anomaly.csv", help="CSV with year, lat, tas")
    ap.add_argument("--ref_start", type=int, default=REF_START)
    ap.add_argument("--ref_end", type=int, default=REF_END)
    ap.add_argument("--report_csv", default=None, help="Optional per-latitude report output")
    args = ap.parse_args()

    anom = load_anomalies(Path(args.anomalies))
    per_lat = validate_zonal(anom, args.ref_start, args.ref_end)
    if args.report_csv:
        out = Path(args.report_csv)
        out.parent.mkdir(parents=True, exist_ok=True)
        per_lat.to_csv(out, index=False)
        print("[OK] report written:", str(out))

    band_rows = {b.label: int(band_mask(anom["lat"], [b.id]).sum()) for b in BANDS}
    empty_bands = [k for k, v in band_rows.items() if v == 0]
    if empty_bands:
        print(f"[WARN] bands without samples: {empty_bands}")

    meta = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "anomalies_file": args.anomalies,
        "rows": int(len(anom)),
        "latitudes": int(per_lat["lat"].nunique()),
        "rows_per_band": band_rows,
        "duplicate_rows": int(per_lat["duplicate_rows"].sum()),
        "share_mean_anom_ref_ok": float(per_lat["mean_anom_in_ref_ok"].mean()) if len(per_lat) else None,
    }
    print(json.dumps(meta, indent=2))


if __name__ == "__main__":
    main()
