"""Tests for calculate() and the per-family round simulators.

Test data loaded from: data/fixtures/scenarios/calculate.json
"""

from __future__ import annotations

import pytest

from conftest import load_scenarios, make_drives, profile_named

_data = load_scenarios("calculate")


class TestCalculate:
    """calculate() against hand-derived round-by-round results."""

    @pytest.mark.parametrize("scenario", _data["calculate"], ids=lambda s: s["id"])
    def test_scenario(self, scenario):
        from chunk_capacity.allocator import calculate

        profile = profile_named(scenario["profile"])
        result = calculate(profile, make_drives(scenario["capacities"]))

        assert result.profile is profile
        assert result.raw_capacity == scenario["expected_raw"]
        assert result.usable_capacity == scenario["expected_usable"]
        assert result.unusable_space == scenario["expected_unusable"]
        assert result.rounds == scenario["expected_rounds"]

    @pytest.mark.parametrize("scenario", _data["calculate"], ids=lambda s: s["id"])
    def test_unusable_matches_final_drive_state(self, scenario):
        from chunk_capacity.allocator import calculate

        drives = make_drives(scenario["capacities"])
        result = calculate(profile_named(scenario["profile"]), drives)
        assert result.unusable_space == sum(d.free for d in drives)

    def test_raid1c3_bounded_by_smallest(self):
        """Three copies on three drives: the 500 drive limits the pool."""
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile

        drives = make_drives([1000, 1000, 500])
        result = calculate(Profile.RAID1C3, drives)
        assert result.usable_capacity == 500
        assert result.unusable_space == 1000
        assert [d.free for d in drives] == [500, 500, 0]

    def test_raid0_consumes_everything(self, mixed_drives):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile

        result = calculate(Profile.RAID0, mixed_drives)
        assert result.usable_capacity == result.raw_capacity == 550
        assert result.unusable_space == 0
        assert all(d.is_exhausted for d in mixed_drives)

    def test_raid10_round_by_round(self, raid10_drives):
        """50 rounds of four drives: the two 25-unit drives alternate."""
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile

        result = calculate(Profile.RAID10, raid10_drives)
        assert result.rounds == 50
        assert result.usable_capacity == 100
        assert result.unusable_space == 400
        assert [d.free for d in raid10_drives] == [150, 250, 0, 0, 0]

    def test_drive_order_preserved(self, mixed_drives):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile

        calculate(Profile.RAID5, mixed_drives)
        assert [d.drive_id for d in mixed_drives] == [0, 1, 2]
        assert [d.free for d in mixed_drives] == [100, 0, 0]

    def test_dup_drains_most_free_first(self):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile

        drives = make_drives([10, 31])
        result = calculate(Profile.DUP, drives)
        assert result.usable_capacity == 20
        assert [d.free for d in drives] == [1, 0]

    def test_overhead(self, mixed_drives):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile

        result = calculate(Profile.RAID5, mixed_drives)
        # 50 rounds of 1 parity unit plus 150 rounds of 1
        assert result.overhead == 200
        assert result.efficiency == pytest.approx(250 / 550)

    def test_result_is_frozen(self, mixed_drives):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile

        result = calculate(Profile.SINGLE, mixed_drives)
        with pytest.raises(AttributeError):
            result.usable_capacity = 0  # type: ignore[misc]


class TestRaid10Layout:

    @pytest.mark.parametrize("scenario", _data["raid10_full_width"], ids=lambda s: s["id"])
    def test_full_width(self, scenario):
        from chunk_capacity.allocator import Raid10Layout, calculate
        from chunk_capacity.profiles import Profile

        result = calculate(
            Profile.RAID10,
            make_drives(scenario["capacities"]),
            raid10_layout=Raid10Layout.FULL_WIDTH,
        )
        assert result.usable_capacity == scenario["expected_usable"]
        assert result.unusable_space == scenario["expected_unusable"]
        assert result.rounds == scenario["expected_rounds"]

    def test_layouts_agree_on_four_drives(self):
        """With exactly four drives both layouts stripe the same group."""
        from chunk_capacity.allocator import Raid10Layout, calculate
        from chunk_capacity.profiles import Profile

        fixed = calculate(Profile.RAID10, make_drives([80, 60, 60, 40]))
        full = calculate(
            Profile.RAID10,
            make_drives([80, 60, 60, 40]),
            raid10_layout=Raid10Layout.FULL_WIDTH,
        )
        assert fixed.usable_capacity == full.usable_capacity == 80

    def test_layout_ignored_for_other_profiles(self, mixed_drives):
        from chunk_capacity.allocator import Raid10Layout, calculate
        from chunk_capacity.profiles import Profile

        result = calculate(
            Profile.RAID0, mixed_drives, raid10_layout=Raid10Layout.FULL_WIDTH
        )
        assert result.usable_capacity == 550


class TestSimulators:
    """The round simulators used by calculate()."""

    def test_mirror_rounds_single_copy_equals_total(self):
        """The general loop with one copy reproduces the Single shortcut."""
        from chunk_capacity.allocator import calculate, mirror_rounds
        from chunk_capacity.profiles import Profile

        capacities = [300, 200, 50, 7]
        tally = mirror_rounds(make_drives(capacities), copies=1)
        result = calculate(Profile.SINGLE, make_drives(capacities))
        assert tally.usable == result.usable_capacity == sum(capacities)
        assert tally.rounds == sum(capacities)

    def test_mirror_rounds_too_few_drives(self):
        from chunk_capacity.allocator import mirror_rounds

        drives = make_drives([10, 10])
        tally = mirror_rounds(drives, copies=3)
        assert tally.usable == 0
        assert [d.free for d in drives] == [10, 10]

    def test_striped_rounds_parity_overhead(self):
        from chunk_capacity.allocator import striped_rounds

        tally = striped_rounds(make_drives([10, 10, 10, 10]), parity=2)
        assert tally.usable == 20
        assert tally.rounds == 10

    def test_striped_mirror_rounds_fixed(self):
        from chunk_capacity.allocator import striped_mirror_rounds

        drives = make_drives([10, 10, 10, 10, 10])
        tally = striped_mirror_rounds(drives, copies=2, stripe_width=2)
        # Four of five drives per round, rotating: 50 units / 4 per round
        assert tally.rounds == 12
        assert tally.usable == 24
        assert sum(d.free for d in drives) == 2


class TestErrors:

    @pytest.mark.parametrize("scenario", _data["insufficient"], ids=lambda s: s["id"])
    def test_insufficient_drives(self, scenario):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.types import InsufficientDrivesError

        profile = profile_named(scenario["profile"])
        drives = make_drives(scenario["capacities"])
        with pytest.raises(InsufficientDrivesError) as exc_info:
            calculate(profile, drives)

        err = exc_info.value
        assert err.profile is profile
        assert err.required == scenario["required"]
        assert err.available == len(scenario["capacities"])
        # No mutation before the precondition failure
        assert all(d.free == d.capacity for d in drives)

    def test_insufficient_at_every_count_below_copies(self):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import Profile, configuration_of
        from chunk_capacity.types import InsufficientDrivesError

        for profile in Profile:
            copies = configuration_of(profile).copies
            for count in range(copies):
                with pytest.raises(InsufficientDrivesError):
                    calculate(profile, make_drives([100] * count))
            calculate(profile, make_drives([100] * copies))

    def test_custom_profile_unsupported(self):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import CustomProfile, ProfileConfig
        from chunk_capacity.types import UnsupportedProfileError

        profile = CustomProfile(ProfileConfig(copies=2, stripe_min=1, stripe_max=1, parity=1))
        drives = make_drives([100, 100, 100])
        with pytest.raises(UnsupportedProfileError) as exc_info:
            calculate(profile, drives)
        assert exc_info.value.profile is profile
        assert "Custom" in str(exc_info.value)
        assert all(d.free == 100 for d in drives)

    def test_custom_profile_checks_drive_count_first(self):
        from chunk_capacity.allocator import calculate
        from chunk_capacity.profiles import CustomProfile, ProfileConfig
        from chunk_capacity.types import InsufficientDrivesError

        profile = CustomProfile(ProfileConfig(copies=5, stripe_min=1, stripe_max=1, parity=0))
        with pytest.raises(InsufficientDrivesError):
            calculate(profile, make_drives([100, 100]))

    def test_errors_share_base_class(self):
        from chunk_capacity.types import (
            CapacityError,
            InsufficientDrivesError,
            InvalidInputError,
            UnsupportedProfileError,
        )

        for cls in (InsufficientDrivesError, InvalidInputError, UnsupportedProfileError):
            assert issubclass(cls, CapacityError)
