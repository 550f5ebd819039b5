"""Shared fixtures."""

import pandas as pd
import pytest

from zonewiz.data import load_anomalies

# lat 30 sits on the edge of bands 3 (0..30) and 4 (30..60)
FIXTURE_CSV = """year,lat,tas
2000,-75,1.0
2000,75,3.0
2000,15,0.2
2000,-15,0.4
2000,45,0.5
2001,-75,2.0
2001,45,0.7
2001,30,0.9
2002,15,0.1
"""


@pytest.fixture
def anomaly_csv(tmp_path):
    path = tmp_path / "zonal_anomaly.csv"
    path.write_text(FIXTURE_CSV)
    return path


@pytest.fixture
def anomaly_df(anomaly_csv) -> pd.DataFrame:
    return load_anomalies(anomaly_csv)
