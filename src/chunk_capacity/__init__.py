"""chunk-capacity: usable capacity of heterogeneous multi-device pools."""

from chunk_capacity.allocator import (
    Raid10Layout,
    calculate,
    mirror_rounds,
    striped_mirror_rounds,
    striped_rounds,
)
from chunk_capacity.drive import Drive, make_drives, rank_by_free, top_by_free
from chunk_capacity.profiles import (
    UNBOUNDED,
    CustomProfile,
    Profile,
    ProfileConfig,
    configuration_of,
    parse_profile,
)
from chunk_capacity.types import (
    AllocationTally,
    CalculationResult,
    CapacityError,
    InsufficientDrivesError,
    InvalidInputError,
    PoolDefinition,
    UnderflowError,
    UnsupportedProfileError,
)
from chunk_capacity.units import GIB, MIB, ChunkSize, parse_size

__all__ = [
    "AllocationTally",
    "CalculationResult",
    "CapacityError",
    "ChunkSize",
    "CustomProfile",
    "Drive",
    "GIB",
    "InsufficientDrivesError",
    "InvalidInputError",
    "MIB",
    "PoolDefinition",
    "Profile",
    "ProfileConfig",
    "Raid10Layout",
    "UNBOUNDED",
    "UnderflowError",
    "UnsupportedProfileError",
    "calculate",
    "configuration_of",
    "make_drives",
    "mirror_rounds",
    "parse_profile",
    "parse_size",
    "rank_by_free",
    "striped_mirror_rounds",
    "striped_rounds",
    "top_by_free",
]
