"""Layer 2: chunk allocation, a round-based simulation of the greedy allocator.

Provides one simulator per profile family (mirror_rounds, striped_rounds,
striped_mirror_rounds) and calculate(), which validates the drive count,
dispatches on the profile and summarises the final drive state.

Every round takes one unit from each selected drive, so total free space
strictly decreases and a run performs at most raw_capacity rounds.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from chunk_capacity.drive import (
    Drive,
    available,
    rank_by_free,
    top_by_free,
    total_capacity,
    total_free,
)
from chunk_capacity.profiles import AnyProfile, CustomProfile, Profile, configuration_of
from chunk_capacity.types import (
    AllocationTally,
    CalculationResult,
    InsufficientDrivesError,
    UnsupportedProfileError,
)

logger = logging.getLogger(__name__)

_MIRRORED = frozenset({Profile.RAID1, Profile.RAID1C3, Profile.RAID1C4})
_PARITY = frozenset({Profile.RAID5, Profile.RAID6})


class Raid10Layout(Enum):
    """Stripe width used by RAID10 rounds."""

    # copies x stripe_min drives per round, extra drives idle until needed
    FIXED = "fixed"
    # every drive with free space, rounded down to a multiple of copies
    FULL_WIDTH = "full-width"


def mirror_rounds(drives: Sequence[Drive], copies: int) -> AllocationTally:
    """Place `copies` copies of each chunk on `copies` distinct drives.

    Each round takes the `copies` drives with the most free space. The run
    stops when the least free of them (the pivot) is exhausted.
    """
    tally = AllocationTally()
    while True:
        chosen = top_by_free(drives, copies)
        if len(chosen) < copies or not chosen[-1].has_free_space():
            break
        for drive in chosen:
            drive.decrement_free()
        tally.record_round(1)
    return tally


def striped_rounds(
    drives: Sequence[Drive],
    parity: int = 0,
    copies: int = 1,
) -> AllocationTally:
    """Stripe each round across every drive that has free space.

    `parity` units per round are overhead. The run stops when fewer than
    parity + copies drives have free space. parity=0 is RAID0.

    Parity is charged against the full width each round rather than
    rotated across explicit parity drives.
    """
    tally = AllocationTally()
    while True:
        members = available(drives)
        width = len(members)
        if width < parity + copies:
            break
        for drive in members:
            drive.decrement_free()
        tally.record_round(width - parity)
    return tally


def striped_mirror_rounds(
    drives: Sequence[Drive],
    copies: int,
    stripe_width: int,
    layout: Raid10Layout = Raid10Layout.FIXED,
) -> AllocationTally:
    """Mirrored stripes (RAID10).

    FIXED: each round takes the copies + stripe_width most free drives while
    the drive ranked at index copies - 1 + stripe_width has free space, and
    yields stripe_width usable units.

    FULL_WIDTH: each round takes every drive with free space, rounded down
    to a multiple of `copies`, and yields width // copies usable units. The
    run stops when fewer than copies * stripe_width drives are left.
    """
    if layout is Raid10Layout.FULL_WIDTH:
        return _striped_mirror_full_width(drives, copies, stripe_width)

    group = copies + stripe_width
    tally = AllocationTally()
    while True:
        chosen = top_by_free(drives, group)
        if len(chosen) < group or not chosen[-1].has_free_space():
            break
        for drive in chosen:
            drive.decrement_free()
        tally.record_round(stripe_width)
    return tally


def _striped_mirror_full_width(
    drives: Sequence[Drive],
    copies: int,
    stripe_width: int,
) -> AllocationTally:
    tally = AllocationTally()
    minimum = copies * stripe_width
    while True:
        members = [d for d in rank_by_free(drives) if d.has_free_space()]
        width = len(members) - len(members) % copies
        if width < minimum:
            break
        for drive in members[:width]:
            drive.decrement_free()
        tally.record_round(width // copies)
    return tally


def _consume_all(drives: Sequence[Drive]) -> int:
    """Single: every free unit becomes usable."""
    usable = total_free(drives)
    for drive in drives:
        drive.reserve(drive.free)
    return usable


def _consume_pooled(drives: Sequence[Drive], copies: int) -> int:
    """Dup: copies may share a drive, so the pool is one undifferentiated space."""
    usable = total_free(drives) // copies
    remaining = usable * copies
    for drive in rank_by_free(drives):
        if remaining == 0:
            break
        take = min(drive.free, remaining)
        drive.reserve(take)
        remaining -= take
    return usable


def calculate(
    profile: AnyProfile,
    drives: Sequence[Drive],
    *,
    raid10_layout: Raid10Layout = Raid10Layout.FIXED,
) -> CalculationResult:
    """Simulate allocation of `profile` chunks until no group can be formed.

    Mutates the drives' free space in place; the order of `drives` is left
    unchanged.

    Args:
        profile: A catalog Profile or a CustomProfile.
        drives: Drives to allocate from. Owned by this call until it returns.
        raid10_layout: Stripe width policy for RAID10.

    Returns:
        CalculationResult summarising raw, usable and stranded space.

    Raises:
        InsufficientDrivesError: Fewer drives than the profile's copies.
        UnsupportedProfileError: No procedure for the profile (custom).
    """
    config = configuration_of(profile)
    if len(drives) < config.copies:
        raise InsufficientDrivesError(profile, config.copies, len(drives))

    raw_capacity = total_capacity(drives)
    logger.debug(
        "Calculating %s over %d drive(s), raw capacity %d",
        profile.label, len(drives), raw_capacity,
    )

    if isinstance(profile, CustomProfile):
        raise UnsupportedProfileError(profile)

    if profile is Profile.SINGLE:
        tally = AllocationTally(usable=_consume_all(drives))
    elif profile is Profile.DUP:
        tally = AllocationTally(usable=_consume_pooled(drives, config.copies))
    elif profile in _MIRRORED:
        tally = mirror_rounds(drives, config.copies)
    elif profile is Profile.RAID0:
        tally = striped_rounds(drives, parity=0, copies=config.copies)
    elif profile is Profile.RAID10:
        tally = striped_mirror_rounds(
            drives, config.copies, config.stripe_min, raid10_layout
        )
    elif profile in _PARITY:
        tally = striped_rounds(drives, parity=config.parity, copies=config.copies)
    else:
        raise UnsupportedProfileError(profile)

    result = CalculationResult(
        profile=profile,
        raw_capacity=raw_capacity,
        usable_capacity=tally.usable,
        unusable_space=total_free(drives),
        rounds=tally.rounds,
    )
    logger.debug(
        "%s finished after %d round(s): usable %d, unusable %d",
        profile.label, result.rounds, result.usable_capacity, result.unusable_space,
    )
    return result
