"""Tests for the latitude map and click extraction."""

from zonewiz.config import GROUP_COLORS, UNASSIGNED_COLOR
from zonewiz.grouping import GroupAssignment
from zonewiz.latmap import apply_clicks, band_color, build_lat_map, clicked_band_ids


class TestLatMap:
    """Strips follow group colours."""

    def test_traces(self):
        fig = build_lat_map(GroupAssignment.defaults())
        assert len(fig.data) == 12
        handles = fig.data[1::2]
        assert [int(h.customdata[0]) for h in handles] == [0, 1, 2, 3, 4, 5]
        assert handles[0].marker.color == GROUP_COLORS[1]
        assert handles[2].marker.color == GROUP_COLORS[3]

    def test_strip_spans_band(self):
        fig = build_lat_map(GroupAssignment())
        strip = fig.data[4]  # band 2 strip
        assert min(strip.lat) == -30 and max(strip.lat) == 0
        assert min(strip.lon) == -180 and max(strip.lon) == 180

    def test_unassigned_grey(self):
        groups = GroupAssignment()
        groups.cycle(4)
        assert band_color(groups, 4) == GROUP_COLORS[1]
        assert band_color(groups, 3) == UNASSIGNED_COLOR


class TestClickedBands:
    """Selection payloads from the page."""

    def test_points(self):
        event = {"selection": {"points": [
            {"customdata": 3, "point_index": 0},
            {"customdata": [3]},
            {"customdata": [5]},
            {"customdata": 9},
            {},
        ]}}
        assert clicked_band_ids(event) == [3, 5]

    def test_empty(self):
        assert clicked_band_ids(None) == []
        assert clicked_band_ids({}) == []
        assert clicked_band_ids({"selection": {"points": []}}) == []

    def test_apply_clicks_cycles_each_band_once(self):
        groups = GroupAssignment.defaults()
        event = {"selection": {"points": [{"customdata": [0]}, {"customdata": [0]}, {"customdata": [3]}]}}
        assert apply_clicks(groups, event) == [0, 3]
        assert groups.group_of(0) == 2
        assert groups.group_of(3) is None

    def test_apply_clicks_without_selection(self):
        groups = GroupAssignment.defaults()
        assert apply_clicks(groups, {"selection": {"points": []}}) == []
        assert groups.matches_preset()
