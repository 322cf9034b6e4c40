"""Tests for ChunkSize and size parsing.

Test data loaded from: data/fixtures/scenarios/units.json
"""

from __future__ import annotations

import pytest

from conftest import load_scenarios

_data = load_scenarios("units")


class TestParseSize:

    @pytest.mark.parametrize("scenario", _data["sizes"], ids=lambda s: s["text"])
    def test_parse(self, scenario):
        from chunk_capacity.units import parse_size

        assert parse_size(scenario["text"]) == scenario["expected"]

    @pytest.mark.parametrize("text", _data["bad_sizes"])
    def test_bad_size(self, text):
        from chunk_capacity.types import InvalidInputError
        from chunk_capacity.units import parse_size

        with pytest.raises(InvalidInputError):
            parse_size(text)

    def test_integer_passthrough(self):
        from chunk_capacity.units import parse_size

        assert parse_size(1234) == 1234

    def test_negative_integer(self):
        from chunk_capacity.types import InvalidInputError
        from chunk_capacity.units import parse_size

        with pytest.raises(InvalidInputError):
            parse_size(-1)


class TestChunkSize:

    @pytest.mark.parametrize(
        "scenario", _data["to_units"], ids=lambda s: f"{s['chunk']}-{s['bytes']}"
    )
    def test_to_units_floors(self, scenario):
        from chunk_capacity.units import ChunkSize

        chunk = ChunkSize.parse(scenario["chunk"])
        assert chunk.to_units(scenario["bytes"]) == scenario["expected"]

    def test_to_bytes(self):
        from chunk_capacity.units import GIB

        assert GIB.to_bytes(3) == 3 * 1024**3

    def test_parse_returns_known_constants(self):
        from chunk_capacity.units import GIB, MIB, ChunkSize

        assert ChunkSize.parse("1GiB") is GIB
        assert ChunkSize.parse("1M") is MIB

    def test_custom_label(self):
        from chunk_capacity.units import ChunkSize

        assert ChunkSize.parse("256MiB").label == "256.00MiB"

    def test_zero_chunk_rejected(self):
        from chunk_capacity.types import InvalidInputError
        from chunk_capacity.units import ChunkSize

        with pytest.raises(InvalidInputError):
            ChunkSize.parse("0")

    def test_format_size(self):
        from chunk_capacity.units import format_size

        assert format_size(512) == "512B"
        assert format_size(1536) == "1.50KiB"
        assert format_size(2 * 1024**4) == "2.00TiB"
