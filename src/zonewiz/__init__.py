"""ZoneWiz: group latitude bands and compare their temperature anomaly trends."""
from __future__ import annotations

from zonewiz.bands import BANDS, LatBand, band_mask, get_band
from zonewiz.exceptions import AnomalyDataError, InvalidGroupError, UnknownBandError, ZoneWizError
from zonewiz.grouping import GROUP_IDS, GroupAssignment

__version__ = "0.1.0"

__all__ = [
    "BANDS",
    "GROUP_IDS",
    "AnomalyDataError",
    "GroupAssignment",
    "InvalidGroupError",
    "LatBand",
    "UnknownBandError",
    "ZoneWizError",
    "band_mask",
    "get_band",
]
