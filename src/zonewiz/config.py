from __future__ import annotations

import os
from pathlib import Path


# relative to the working directory; run the page from the repository root
DEFAULT_DATA_CSV = Path("data/zonal_anomaly.csv")
REQUIRED_COLUMNS = ("year", "lat", "tas")

MAX_GROUPS = 3
# d3.schemeSet1, first three entries
GROUP_COLORS = {1: "#e41a1c", 2: "#377eb8", 3: "#4daf4a"}
UNASSIGNED_COLOR = "#bdbdbd"
BAND_OPACITY = 0.45

CHART_WIDTH, CHART_HEIGHT = 800, 400
CHART_MARGIN = {"t": 40, "r": 120, "b": 40, "l": 60}
Y_TICKS = 10
X_TICKS = 10

MAP_HEIGHT = 360

# Reference window used by the prep scripts (inclusive)
REF_START, REF_END = 1951, 1980
MIN_MONTHS = 10

TAS_UNIT = "Temperature anomaly ΔT (°C)"


def data_csv() -> Path:
    return Path(os.getenv("ZONEWIZ_DATA_CSV") or DEFAULT_DATA_CSV)
