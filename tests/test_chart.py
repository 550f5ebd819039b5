"""Tests for axis domains and the line chart figure."""

import pandas as pd
import pytest

from zonewiz.aggregate import GroupSeries, grouped_series
from zonewiz.chart import axis_domains, build_line_chart, nice_domain, tick_increment
from zonewiz.config import GROUP_COLORS
from zonewiz.grouping import GroupAssignment


class TestNiceDomain:
    """Domains snap outwards to round ticks."""

    def test_fractional(self):
        assert nice_domain(-0.37, 1.23) == pytest.approx((-0.4, 1.4))

    def test_integer_steps(self):
        assert nice_domain(0.5, 9.7) == pytest.approx((0.0, 10.0))

    def test_large(self):
        assert nice_domain(13, 987) == pytest.approx((0, 1000))

    def test_reversed_and_degenerate(self):
        assert nice_domain(1.23, -0.37) == pytest.approx((-0.4, 1.4))
        lo, hi = nice_domain(2.0, 2.0)
        assert lo < 2.0 < hi

    def test_tick_increment(self):
        assert tick_increment(0, 100, 10) == 10
        assert tick_increment(0, 1, 10) == -10


class TestAxisDomains:
    """Domains across all plotted series."""

    def test_extent(self, anomaly_df):
        series = grouped_series(anomaly_df, GroupAssignment.defaults())
        (x0, x1), (y0, y1) = axis_domains(series)
        assert (x0, x1) == (2000, 2002)
        assert y0 <= 0.1 and y1 >= 2.0

    def test_nothing_to_plot(self):
        assert axis_domains([]) is None
        empty = GroupSeries(1, [0], pd.DataFrame(columns=["year", "tas"]))
        assert axis_domains([empty]) is None


class TestLineChart:
    """Figure contents."""

    def test_one_line_per_group(self, anomaly_df):
        groups = GroupAssignment.defaults()
        fig = build_line_chart(grouped_series(anomaly_df, groups), groups)
        assert len(fig.data) == 3
        assert [t.line.color for t in fig.data] == [GROUP_COLORS[g] for g in (1, 2, 3)]
        assert list(fig.layout.xaxis.range) == [2000, 2002]
        assert fig.layout.xaxis.tickformat == "d"

    def test_preset_callouts(self, anomaly_df):
        groups = GroupAssignment.defaults()
        fig = build_line_chart(grouped_series(anomaly_df, groups), groups)
        texts = [a.text for a in fig.layout.annotations]
        assert len(texts) == 2
        assert any("polar amplification" in t for t in texts)

    def test_no_callouts_off_preset(self, anomaly_df):
        groups = GroupAssignment.defaults()
        groups.cycle(0)
        fig = build_line_chart(grouped_series(anomaly_df, groups), groups)
        assert len(fig.layout.annotations) == 0

    def test_empty(self):
        fig = build_line_chart([], GroupAssignment())
        assert len(fig.data) == 0
        assert len(fig.layout.annotations) == 1
