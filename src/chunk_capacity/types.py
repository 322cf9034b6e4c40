"""Shared types: CalculationResult, AllocationTally and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from chunk_capacity.drive import Drive
    from chunk_capacity.profiles import CustomProfile, Profile
    from chunk_capacity.units import ChunkSize

    AnyProfile = Union[Profile, CustomProfile]


@dataclass(frozen=True)
class CalculationResult:
    """Immutable summary of one allocation run.

    Invariants:
        - usable_capacity + unusable_space <= raw_capacity
        - rounds <= raw_capacity
    """

    profile: AnyProfile
    raw_capacity: int
    usable_capacity: int
    unusable_space: int
    rounds: int = 0

    @property
    def overhead(self) -> int:
        """Space consumed by extra copies or parity."""
        return self.raw_capacity - self.usable_capacity - self.unusable_space

    @property
    def efficiency(self) -> float:
        """Usable fraction of raw capacity (0.0 for an empty pool)."""
        if self.raw_capacity == 0:
            return 0.0
        return self.usable_capacity / self.raw_capacity


@dataclass
class AllocationTally:
    """Running totals of a round-based simulation."""

    usable: int = 0
    rounds: int = 0

    def record_round(self, usable_units: int) -> None:
        self.usable += usable_units
        self.rounds += 1


@dataclass(frozen=True)
class PoolDefinition:
    """A pool loaded from a definition file, ready to be calculated."""

    pool_id: str
    profile: AnyProfile
    drives: tuple[Drive, ...]
    chunk_size: ChunkSize


class CapacityError(Exception):
    """Base class for errors reported to the caller of a calculation."""


class InvalidInputError(CapacityError, ValueError):
    """Raised when a drive, size or profile definition is not representable."""


class InsufficientDrivesError(CapacityError):
    """Raised when a profile needs more drives than were supplied."""

    def __init__(self, profile: AnyProfile, required: int, available: int) -> None:
        self.profile = profile
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient drives: profile {_profile_label(profile)} needs "
            f"at least {required} drive(s), got {available}"
        )


class UnsupportedProfileError(CapacityError):
    """Raised when a profile has no allocation procedure."""

    def __init__(self, profile: AnyProfile) -> None:
        self.profile = profile
        super().__init__(
            f"Unsupported profile: no allocation procedure for "
            f"{_profile_label(profile)}"
        )


class UnderflowError(RuntimeError):
    """Raised when an exhausted drive is decremented.

    Not a CapacityError: it means a loop guard is wrong, not that the
    input was bad.
    """

    def __init__(self, drive_id: object, free: int, requested: int) -> None:
        self.drive_id = drive_id
        self.free = free
        self.requested = requested
        super().__init__(
            f"Underflow: drive {drive_id!r} has {free} free unit(s), "
            f"{requested} requested"
        )


def _profile_label(profile: object) -> str:
    label = getattr(profile, "label", None)
    return label if isinstance(label, str) else repr(profile)
