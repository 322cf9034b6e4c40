"""Layer 1: Drive, one device as (capacity, free) in allocation units.

Provides the mutation primitives the allocator uses and the ordering it
picks targets by: most free space first, ties broken by input position.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Sequence

from chunk_capacity.types import InvalidInputError, UnderflowError


@dataclass
class Drive:
    """Mutable allocation state for one device.

    free only ever decreases during a run; free == 0 means exhausted.
    """

    capacity: int
    drive_id: Hashable | None = None
    free: int = field(init=False)

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a capacity
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise InvalidInputError(
                f"Drive {self.drive_id!r}: capacity must be an integer number "
                f"of allocation units, got {self.capacity!r}"
            )
        if self.capacity <= 0:
            raise InvalidInputError(
                f"Drive {self.drive_id!r}: capacity must be positive, "
                f"got {self.capacity}"
            )
        self.free = self.capacity

    @property
    def used(self) -> int:
        return self.capacity - self.free

    @property
    def is_exhausted(self) -> bool:
        return self.free == 0

    def has_free_space(self) -> bool:
        return self.free > 0

    def decrement_free(self) -> None:
        """Consume exactly one allocation unit.

        Raises UnderflowError if the drive is already exhausted.
        """
        if self.free == 0:
            raise UnderflowError(self.drive_id, self.free, 1)
        self.free -= 1

    def reserve(self, units: int) -> None:
        """Consume `units` allocation units at once (closed-form profiles)."""
        if units < 0:
            raise InvalidInputError(
                f"Drive {self.drive_id!r}: cannot reserve {units} units"
            )
        if units > self.free:
            raise UnderflowError(self.drive_id, self.free, units)
        self.free -= units


def make_drives(
    capacities: Iterable[int],
    ids: Sequence[Hashable] | None = None,
) -> list[Drive]:
    """Build fresh drives, using positional indices as ids unless given."""
    capacities = list(capacities)
    if ids is None:
        ids = range(len(capacities))
    elif len(ids) != len(capacities):
        raise InvalidInputError(
            f"Got {len(ids)} drive ids for {len(capacities)} capacities"
        )
    return [Drive(capacity, drive_id) for capacity, drive_id in zip(capacities, ids)]


def _rank_key(item: tuple[int, Drive]) -> tuple[int, int]:
    position, drive = item
    return (-drive.free, position)


def rank_by_free(drives: Sequence[Drive]) -> list[Drive]:
    """All drives, most free first; equal free keeps input order."""
    return [drive for _, drive in sorted(enumerate(drives), key=_rank_key)]


def top_by_free(drives: Sequence[Drive], k: int) -> list[Drive]:
    """The first `k` drives of rank_by_free(), without a full sort.

    Returns fewer than `k` drives when the sequence is shorter.
    """
    if k <= 0:
        return []
    return [drive for _, drive in heapq.nsmallest(k, enumerate(drives), key=_rank_key)]


def available(drives: Iterable[Drive]) -> list[Drive]:
    """Drives that still have free space, in input order."""
    return [drive for drive in drives if drive.has_free_space()]


def total_free(drives: Iterable[Drive]) -> int:
    return sum(drive.free for drive in drives)


def total_capacity(drives: Iterable[Drive]) -> int:
    return sum(drive.capacity for drive in drives)
