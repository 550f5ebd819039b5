"""Assignment of latitude bands to user-defined groups.

Each band is owned by at most one of the groups 1..3 or is unassigned.
Clicking a band walks it through unassigned -> 1 -> 2 -> 3 -> unassigned.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from zonewiz.bands import get_band
from zonewiz.config import MAX_GROUPS
from zonewiz.exceptions import InvalidGroupError
from zonewiz.log import get_logger

log = get_logger("grouping")

GROUP_IDS = tuple(range(1, MAX_GROUPS + 1))
# poles / mid-latitudes / tropics
DEFAULT_PRESET: dict[int, frozenset[int]] = {
    1: frozenset({0, 5}),
    2: frozenset({1, 4}),
    3: frozenset({2, 3}),
}


def _check_group(group_id) -> None:
    if group_id is not None and group_id not in GROUP_IDS:
        raise InvalidGroupError(f"Invalid group {group_id!r}; expected one of {GROUP_IDS} or None")


class GroupAssignment:
    def __init__(self, groups: Mapping[int, Iterable[int]] | None = None):
        self._groups: dict[int, set[int]] = {g: set() for g in GROUP_IDS}
        for gid, band_ids in (groups or {}).items():
            for bid in band_ids:
                self.assign(bid, gid)

    @classmethod
    def defaults(cls) -> "GroupAssignment":
        return cls(DEFAULT_PRESET)

    def group_of(self, band_id: int) -> int | None:
        get_band(band_id)
        for gid, members in self._groups.items():
            if band_id in members:
                return gid
        return None

    def assign(self, band_id: int, group_id: int | None) -> None:
        get_band(band_id)
        _check_group(group_id)
        for members in self._groups.values():
            members.discard(band_id)
        if group_id is not None:
            self._groups[group_id].add(band_id)

    def cycle(self, band_id: int) -> int | None:
        """Advance ``band_id`` one step along the click cycle and return its new group."""
        current = self.group_of(band_id)
        nxt = 1 if current is None else (current + 1 if current < GROUP_IDS[-1] else None)
        self.assign(band_id, nxt)
        log.debug("band %s: group %s -> %s", band_id, current, nxt)
        return nxt

    def clear(self) -> None:
        for members in self._groups.values():
            members.clear()

    def restore_defaults(self) -> None:
        self.clear()
        for gid, band_ids in DEFAULT_PRESET.items():
            self._groups[gid].update(band_ids)

    def matches_preset(self) -> bool:
        return all(self._groups[g] == set(DEFAULT_PRESET[g]) for g in GROUP_IDS)

    def members(self, group_id: int) -> list[int]:
        _check_group(group_id)
        return sorted(self._groups[group_id])

    def non_empty_groups(self) -> list[tuple[int, list[int]]]:
        return [(g, sorted(self._groups[g])) for g in GROUP_IDS if self._groups[g]]

    def assigned_band_ids(self) -> list[int]:
        return sorted(b for members in self._groups.values() for b in members)

    def to_dict(self) -> dict[int, list[int]]:
        return {g: sorted(self._groups[g]) for g in GROUP_IDS}

    @classmethod
    def from_dict(cls, data: Mapping) -> "GroupAssignment":
        """Inverse of :meth:`to_dict`; keys may be ints or numeric strings.

        A band listed under two groups is a conflict and raises
        :class:`InvalidGroupError` rather than silently picking one.
        """
        seen: dict[int, int] = {}
        groups: dict[int, list[int]] = {}
        for key, band_ids in data.items():
            try:
                gid = int(key)
            except (TypeError, ValueError):
                raise InvalidGroupError(f"Invalid group key {key!r}") from None
            _check_group(gid)
            for bid in band_ids:
                bid = int(bid)
                if bid in seen and seen[bid] != gid:
                    raise InvalidGroupError(f"Band {bid} listed in groups {seen[bid]} and {gid}")
                seen[bid] = gid
            groups[gid] = [int(b) for b in band_ids]
        return cls(groups)

    def to_query(self) -> dict[str, str]:
        return {f"g{g}": ",".join(str(b) for b in sorted(self._groups[g])) for g in GROUP_IDS if self._groups[g]}

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "GroupAssignment | None":
        """Parse ``?g1=0,5&g2=1,4`` style params; ``None`` when no group key is present."""
        keys = [f"g{g}" for g in GROUP_IDS]
        if not any(k in params for k in keys):
            return None
        data = {}
        for g, k in zip(GROUP_IDS, keys):
            raw = str(params.get(k, "") or "").strip()
            if not raw:
                continue
            try:
                data[g] = [int(tok) for tok in raw.split(",") if tok.strip()]
            except ValueError:
                raise InvalidGroupError(f"Bad band list for {k}: {raw!r}") from None
        return cls.from_dict(data)

    def copy(self) -> "GroupAssignment":
        return GroupAssignment(self.to_dict())

    def __eq__(self, other) -> bool:
        if not isinstance(other, GroupAssignment):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"GroupAssignment({self.to_dict()})"


__all__ = ["DEFAULT_PRESET", "GROUP_IDS", "GroupAssignment"]
