"""Boundary: ChunkSize, byte sizes to whole allocation units and back."""

from __future__ import annotations

import re
from dataclasses import dataclass

from chunk_capacity.types import InvalidInputError

_SUFFIXES: dict[str, int] = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kib": 1024,
    "m": 1024**2,
    "mib": 1024**2,
    "g": 1024**3,
    "gib": 1024**3,
    "t": 1024**4,
    "tib": 1024**4,
    "p": 1024**5,
    "pib": 1024**5,
    "kb": 1000,
    "mb": 1000**2,
    "gb": 1000**3,
    "tb": 1000**4,
    "pb": 1000**5,
}

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")

_DISPLAY = (("PiB", 1024**5), ("TiB", 1024**4), ("GiB", 1024**3), ("MiB", 1024**2), ("KiB", 1024))


def parse_size(text: str | int) -> int:
    """Parse "500G", "1.5TiB", "4TB" or a plain integer into bytes.

    Suffixes without "i" and a trailing "B" are binary (K, M, G...), the
    two-letter forms KB, MB, GB... are decimal.
    """
    if isinstance(text, bool):
        raise InvalidInputError(f"Invalid size: {text!r}")
    if isinstance(text, int):
        if text < 0:
            raise InvalidInputError(f"Size must not be negative, got {text}")
        return text

    match = _SIZE_RE.match(str(text))
    if match is None:
        raise InvalidInputError(f"Invalid size: {text!r}")
    number, suffix = match.groups()
    multiplier = _SUFFIXES.get(suffix.lower())
    if multiplier is None:
        raise InvalidInputError(f"Invalid size suffix {suffix!r} in {text!r}")

    if "." in number:
        whole, frac = number.split(".")
        # exact: avoid float rounding on large sizes
        return (int(whole + frac) * multiplier) // (10 ** len(frac))
    return int(number) * multiplier


def format_size(nbytes: int) -> str:
    """Human readable binary size, e.g. 1.50TiB."""
    for label, factor in _DISPLAY:
        if nbytes >= factor:
            return f"{nbytes / factor:.2f}{label}"
    return f"{nbytes}B"


@dataclass(frozen=True)
class ChunkSize:
    """Converts between bytes and allocation units. Immutable.

    The unit is set once at the boundary; the allocator only ever sees
    whole units.
    """

    unit_bytes: int
    label: str

    def __post_init__(self) -> None:
        if self.unit_bytes <= 0:
            raise InvalidInputError(
                f"Chunk size must be positive, got {self.unit_bytes}"
            )

    @classmethod
    def parse(cls, text: str | int) -> ChunkSize:
        nbytes = parse_size(text)
        for constant in (MIB, GIB):
            if constant.unit_bytes == nbytes:
                return constant
        return cls(unit_bytes=nbytes, label=format_size(nbytes))

    def to_units(self, nbytes: int) -> int:
        """Whole chunks that fit in `nbytes`. A trailing partial chunk is dropped."""
        if nbytes < 0:
            raise InvalidInputError(f"Size must not be negative, got {nbytes}")
        return nbytes // self.unit_bytes

    def to_bytes(self, units: int) -> int:
        return units * self.unit_bytes


MIB = ChunkSize(unit_bytes=1024**2, label="MiB")
GIB = ChunkSize(unit_bytes=1024**3, label="GiB")
