"""Data loading utilities for pool definitions."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from chunk_capacity.drive import Drive
from chunk_capacity.profiles import (
    UNBOUNDED,
    AnyProfile,
    CustomProfile,
    ProfileConfig,
    parse_profile,
)
from chunk_capacity.schema import validate_pool
from chunk_capacity.types import InvalidInputError, PoolDefinition
from chunk_capacity.units import GIB, ChunkSize, parse_size

logger = logging.getLogger(__name__)


def load_pool_json(path: str | Path) -> PoolDefinition:
    """Load a PoolDefinition from a JSON file.

    The JSON file must have the format:
    {
        "id": "...",
        "profile": "raid1" | {"copies": 2, "stripe_min": 1, ...},
        "chunk_size": "1GiB",
        "drives": [{"id": "sda", "size": "4TiB"}, "2TiB", 500, ...]
    }

    Raises InvalidInputError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"{path.name} is not valid JSON: {e}") from e

    pool_id = data.get("id", path.stem) if isinstance(data, dict) else path.stem
    pool = pool_from_dict(data, default_id=pool_id, source=path.name)
    logger.debug(
        "Loaded pool %r from %s: %d drive(s), profile %s",
        pool.pool_id, path, len(pool.drives), pool.profile.label,
    )
    return pool


def pool_from_dict(
    data: object,
    default_id: str = "pool",
    source: str = "pool definition",
) -> PoolDefinition:
    """Validate and convert an already-parsed pool definition."""
    errors = validate_pool(data)
    if errors:
        raise InvalidInputError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    chunk_size = ChunkSize.parse(data["chunk_size"]) if "chunk_size" in data else GIB
    profile = profile_from_value(data["profile"])

    drives: list[Drive] = []
    for i, entry in enumerate(data["drives"]):
        if isinstance(entry, dict):
            size, drive_id = entry["size"], entry.get("id", i)
        else:
            size, drive_id = entry, i
        drives.append(Drive(_size_to_units(size, chunk_size, drive_id), drive_id))

    return PoolDefinition(
        pool_id=str(data.get("id", default_id)),
        profile=profile,
        drives=tuple(drives),
        chunk_size=chunk_size,
    )


def profile_from_value(value: str | dict) -> AnyProfile:
    """Profile name or custom configuration object to a profile."""
    if isinstance(value, str):
        return parse_profile(value)
    stripe_max = value.get("stripe_max")
    return CustomProfile(
        ProfileConfig(
            copies=value["copies"],
            stripe_min=value["stripe_min"],
            stripe_max=UNBOUNDED if stripe_max is None else stripe_max,
            parity=value["parity"],
        )
    )


def _size_to_units(size: str | int, chunk_size: ChunkSize, drive_id: object) -> int:
    # Plain integers are already allocation units
    if isinstance(size, int):
        return size
    units = chunk_size.to_units(parse_size(size))
    if units == 0:
        raise InvalidInputError(
            f"Drive {drive_id!r}: {size} is smaller than one {chunk_size.label} chunk"
        )
    return units
