"""Plain-text tables of drive state and calculation results.

Builds strings only; printing is left to the caller.
"""

from __future__ import annotations

from typing import Sequence

from chunk_capacity.drive import Drive
from chunk_capacity.types import CalculationResult
from chunk_capacity.units import ChunkSize, format_size


def table(headers: list[str], rows: list[list[str]], indent: int = 2) -> str:
    """Format a table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    lines = [fmt.format(*headers).rstrip(), sep]
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        lines.append(fmt.format(*padded).rstrip())
    return "\n".join(lines)


def _amount(units: int, chunk_size: ChunkSize | None) -> str:
    if chunk_size is None:
        return str(units)
    return f"{units} ({format_size(chunk_size.to_bytes(units))})"


def show_drives(drives: Sequence[Drive], chunk_size: ChunkSize | None = None) -> str:
    """One row per drive: id, capacity, used and remaining free space."""
    rows = [
        [
            str(d.drive_id),
            _amount(d.capacity, chunk_size),
            _amount(d.used, chunk_size),
            _amount(d.free, chunk_size),
        ]
        for d in drives
    ]
    return table(["Drive", "Capacity", "Used", "Free"], rows)


def show_result(result: CalculationResult, chunk_size: ChunkSize | None = None) -> str:
    """Key/value summary of a CalculationResult."""
    rows = [
        ["Profile", result.profile.label],
        ["Raw capacity", _amount(result.raw_capacity, chunk_size)],
        ["Usable capacity", _amount(result.usable_capacity, chunk_size)],
        ["Redundancy overhead", _amount(result.overhead, chunk_size)],
        ["Unusable space", _amount(result.unusable_space, chunk_size)],
        ["Efficiency", f"{result.efficiency:.1%}"],
        ["Rounds", str(result.rounds)],
    ]
    return table(["Field", "Value"], rows)


def show_comparison(
    results: Sequence[CalculationResult],
    unavailable: Sequence[tuple[str, str]] = (),
    chunk_size: ChunkSize | None = None,
) -> str:
    """One row per profile; `unavailable` holds (label, reason) pairs."""
    rows = [
        [
            r.profile.label,
            _amount(r.usable_capacity, chunk_size),
            _amount(r.unusable_space, chunk_size),
            f"{r.efficiency:.1%}",
        ]
        for r in results
    ]
    rows.extend([label, "-", "-", reason] for label, reason in unavailable)
    return table(["Profile", "Usable", "Unusable", "Efficiency"], rows)
