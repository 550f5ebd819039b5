"""Tests for the anomaly CSV loader."""

import logging
from pathlib import Path

import pytest

from zonewiz.aggregate import grouped_series
from zonewiz.chart import build_line_chart
from zonewiz.config import data_csv
from zonewiz.data import empty_frame, load_anomalies, load_anomalies_safe
from zonewiz.exceptions import AnomalyDataError
from zonewiz.grouping import GroupAssignment


class TestLoadAnomalies:
    """Strict loader."""

    def test_columns_and_types(self, anomaly_df):
        assert list(anomaly_df.columns) == ["year", "lat", "tas"]
        assert str(anomaly_df["year"].dtype) == "int64"
        assert len(anomaly_df) == 9

    def test_header_is_normalised(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_text(" Year ,LAT,tas,extra\n1990,10,0.5,x\n")
        df = load_anomalies(path)
        assert list(df.columns) == ["year", "lat", "tas"]
        assert df.iloc[0].tolist() == [1990, 10.0, 0.5]

    def test_non_numeric_rows_dropped(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_text("year,lat,tas\n1990,10,0.5\n1991,n/a,0.6\n1992,10,\n"
                        "2000,75,inf\n2001,75,-inf\n")
        df = load_anomalies(path)
        assert df["year"].tolist() == [1990]

    def test_infinite_values_do_not_reach_chart(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_text("year,lat,tas\n2000,75,inf\n2001,75,0.5\n")
        df = load_anomalies(path)
        assert df["tas"].tolist() == [0.5]
        groups = GroupAssignment.defaults()
        fig = build_line_chart(grouped_series(df, groups), groups)
        assert list(fig.layout.xaxis.range) == [2001, 2001]

    def test_missing_column(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_text("year,lat\n1990,10\n")
        with pytest.raises(AnomalyDataError):
            load_anomalies(path)


class TestLoadAnomaliesSafe:
    """Failures are logged and yield an empty frame."""

    def test_missing_file(self, tmp_path, caplog):
        logger = logging.getLogger("zonewiz")
        logger.addHandler(caplog.handler)
        try:
            with caplog.at_level(logging.ERROR, logger="zonewiz"):
                df = load_anomalies_safe(tmp_path / "nope.csv")
        finally:
            logger.removeHandler(caplog.handler)
        assert df.empty
        assert list(df.columns) == ["year", "lat", "tas"]
        assert any("Error loading data" in r.getMessage() for r in caplog.records)

    def test_bad_columns(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_text("a,b\n1,2\n")
        assert load_anomalies_safe(path).empty

    def test_success_passthrough(self, anomaly_csv):
        assert len(load_anomalies_safe(anomaly_csv)) == 9

    def test_empty_frame(self):
        assert empty_frame().empty


class TestDataPath:
    """Default data location."""

    def test_default_is_relative_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ZONEWIZ_DATA_CSV", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "zonal_anomaly.csv").write_text("year,lat,tas\n2000,10,0.1\n")
        assert data_csv() == Path("data/zonal_anomaly.csv")
        assert len(load_anomalies(data_csv())) == 1

    def test_env_override(self, anomaly_csv, monkeypatch):
        monkeypatch.setenv("ZONEWIZ_DATA_CSV", str(anomaly_csv))
        assert data_csv() == anomaly_csv
