from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from zonewiz.exceptions import UnknownBandError

BAND_WIDTH = 30


def fmt_lat(lat: float) -> str:
    if lat == 0:
        return "0°"
    return f"{abs(lat):g}°{'N' if lat > 0 else 'S'}"


@dataclass(frozen=True)
class LatBand:
    id: int
    min: float
    max: float

    @property
    def label(self) -> str:
        return f"{fmt_lat(self.min)}–{fmt_lat(self.max)}"

    @property
    def center(self) -> float:
        return (self.min + self.max) / 2

    def contains(self, lat: float) -> bool:
        # both ends inclusive: boundary rows belong to both neighbours
        return self.min <= lat <= self.max


BANDS: tuple[LatBand, ...] = tuple(
    LatBand(i, -90 + BAND_WIDTH * i, -90 + BAND_WIDTH * (i + 1)) for i in range(6)
)
BAND_IDS = tuple(b.id for b in BANDS)


def get_band(band_id: int) -> LatBand:
    try:
        idx = int(band_id)
    except (TypeError, ValueError):
        raise UnknownBandError(band_id) from None
    if idx not in BAND_IDS or idx != band_id:
        raise UnknownBandError(band_id)
    return BANDS[idx]


def band_mask(lats: pd.Series, band_ids: Iterable[int]) -> pd.Series:
    """Boolean mask of latitudes falling in any of ``band_ids`` (each row counted once)."""
    mask = pd.Series(False, index=lats.index)
    for bid in band_ids:
        band = get_band(bid)
        mask |= lats.between(band.min, band.max, inclusive="both")
    return mask


def bands_label(band_ids: Iterable[int]) -> str:
    return ", ".join(get_band(b).label for b in sorted(band_ids))
