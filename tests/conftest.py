"""Shared test fixtures and data loading for chunk-capacity.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
POOLS_DIR = FIXTURES_DIR / "pools"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def pool_path(name: str) -> Path:
    """Path of a pool definition in data/fixtures/pools/."""
    return POOLS_DIR / f"{name}.json"


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def make_drives(capacities: list[int]):
    """Fresh drives with positional ids."""
    from chunk_capacity.drive import make_drives as _make

    return _make(capacities)


def profile_named(name: str):
    from chunk_capacity.profiles import parse_profile

    return parse_profile(name)


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def mixed_drives():
    """Three drives of unequal size: 300, 200, 50 units."""
    return make_drives([300, 200, 50])


@pytest.fixture
def raid10_drives():
    """Five drives whose RAID10 capacity needs the round simulation."""
    return make_drives([200, 300, 50, 25, 25])
