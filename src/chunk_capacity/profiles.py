"""Profile catalog: named allocation profiles and their configurations."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Union

from chunk_capacity.types import InvalidInputError

# Stripe width limited only by the number of drives
UNBOUNDED = sys.maxsize


@dataclass(frozen=True)
class ProfileConfig:
    """How many copies, stripe members and parity units one chunk needs.

    Invariants: copies >= 1, 1 <= stripe_min <= stripe_max, parity >= 0.
    """

    copies: int
    stripe_min: int
    stripe_max: int
    parity: int

    def __post_init__(self) -> None:
        errors: list[str] = []
        for name in ("copies", "stripe_min", "stripe_max", "parity"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")
        if errors:
            raise InvalidInputError("Invalid profile configuration: " + "; ".join(errors))

        if self.copies < 1:
            errors.append(f"copies must be >= 1, got {self.copies}")
        if self.stripe_min < 1:
            errors.append(f"stripe_min must be >= 1, got {self.stripe_min}")
        if self.stripe_max < self.stripe_min:
            errors.append(
                f"stripe_max ({self.stripe_max}) must be >= "
                f"stripe_min ({self.stripe_min})"
            )
        if self.parity < 0:
            errors.append(f"parity must be >= 0, got {self.parity}")
        if errors:
            raise InvalidInputError("Invalid profile configuration: " + "; ".join(errors))

    @property
    def unbounded_stripe(self) -> bool:
        return self.stripe_max == UNBOUNDED


class Profile(Enum):
    """Named block group profiles."""

    SINGLE = "single"
    # Two copies anywhere, both may land on the same drive
    DUP = "dup"
    RAID0 = "raid0"
    # Two copies on two distinct drives
    RAID1 = "raid1"
    RAID1C3 = "raid1c3"
    RAID1C4 = "raid1c4"
    RAID10 = "raid10"
    RAID5 = "raid5"
    RAID6 = "raid6"

    @property
    def label(self) -> str:
        return self.value.upper() if self.value.startswith("raid") else self.value.capitalize()


@dataclass(frozen=True)
class CustomProfile:
    """Escape hatch for configurations outside the catalog."""

    config: ProfileConfig

    @property
    def label(self) -> str:
        c = self.config
        stripe_max = "inf" if c.unbounded_stripe else str(c.stripe_max)
        return (
            f"Custom(copies={c.copies}, stripe={c.stripe_min}..{stripe_max}, "
            f"parity={c.parity})"
        )


AnyProfile = Union[Profile, CustomProfile]

_CATALOG: dict[Profile, ProfileConfig] = {
    Profile.SINGLE: ProfileConfig(copies=1, stripe_min=1, stripe_max=1, parity=0),
    Profile.DUP: ProfileConfig(copies=2, stripe_min=1, stripe_max=1, parity=0),
    Profile.RAID1: ProfileConfig(copies=2, stripe_min=1, stripe_max=1, parity=0),
    Profile.RAID1C3: ProfileConfig(copies=3, stripe_min=1, stripe_max=1, parity=0),
    Profile.RAID1C4: ProfileConfig(copies=4, stripe_min=1, stripe_max=1, parity=0),
    Profile.RAID0: ProfileConfig(copies=1, stripe_min=2, stripe_max=UNBOUNDED, parity=0),
    Profile.RAID10: ProfileConfig(copies=2, stripe_min=2, stripe_max=UNBOUNDED, parity=0),
    Profile.RAID5: ProfileConfig(copies=1, stripe_min=1, stripe_max=UNBOUNDED, parity=1),
    Profile.RAID6: ProfileConfig(copies=1, stripe_min=1, stripe_max=UNBOUNDED, parity=2),
}


def configuration_of(profile: AnyProfile) -> ProfileConfig:
    """Configuration record for a profile. Pure lookup."""
    if isinstance(profile, CustomProfile):
        return profile.config
    return _CATALOG[profile]


def parse_profile(name: str) -> Profile:
    """Resolve a profile name such as "raid1c3" or "RAID10"."""
    try:
        return Profile(name.strip().lower())
    except (ValueError, AttributeError):
        known = ", ".join(p.value for p in Profile)
        raise InvalidInputError(
            f"Unknown profile {name!r} (expected one of: {known})"
        ) from None
