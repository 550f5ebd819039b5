from __future__ import annotations


class ZoneWizError(Exception):
    """Base class for all ZoneWiz errors."""


class AnomalyDataError(ZoneWizError, ValueError):
    """The anomaly CSV could not be read or lacks required columns."""


class UnknownBandError(ZoneWizError, KeyError):
    def __init__(self, band_id):
        super().__init__(band_id)
        self.band_id = band_id

    def __str__(self) -> str:
        return f"Unknown latitude band: {self.band_id!r} (expected 0..5)"


class InvalidGroupError(ZoneWizError, ValueError):
    pass
