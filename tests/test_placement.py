"""Tests for pellet rejection sampling.

Validates that:
- Exactly K pellets are returned
- No pellet lies inside an exclusion zone, all lie inside the arena
- Seeded generators reproduce layouts
- An arena fully covered by zones fails fast instead of spinning
"""

import logging
import math

import numpy as np
import pytest

from habitat_gen.materials import make_palette
from habitat_gen.placement import (
    PELLET_PITCH,
    ExclusionZone,
    Pellet,
    UnsatisfiablePlacementError,
    build_pellets,
    sample_pellets,
)

REFERENCE_ZONES = (
    ExclusionZone(20, 20, 8),
    ExclusionZone(20, -20, 8),
    ExclusionZone(-20, -20, 8),
    ExclusionZone(20, 0, 8),
)


def _assert_valid(pellets, width, depth, zones):
    for p in pellets:
        assert abs(p.x) <= width / 2
        assert abs(p.z) <= depth / 2
        assert 0 <= p.yaw < 2 * math.pi
        for zone in zones:
            dist = math.hypot(p.x - zone.center_x, p.z - zone.center_z)
            assert dist >= zone.radius, f"{p} inside {zone}"


class TestExclusionZone:
    def test_contains_strict(self):
        zone = ExclusionZone(0, 0, 5)
        assert zone.contains(0, 0)
        assert zone.contains(3, 3.9)
        assert not zone.contains(3, 4)  # exactly on the boundary
        assert not zone.contains(10, 0)

    def test_zero_radius_excludes_nothing(self):
        assert not ExclusionZone(1, 1, 0).contains(1, 1)


class TestSampler:
    def test_reference_scenario(self):
        """Arena 55x55, the four accessory zones, K=40."""
        rng = np.random.default_rng(20240611)
        pellets = sample_pellets(rng, 40, 55, 55, REFERENCE_ZONES)
        assert len(pellets) == 40
        assert all(isinstance(p, Pellet) for p in pellets)
        _assert_valid(pellets, 55, 55, REFERENCE_ZONES)

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_invariants_across_seeds(self, seed):
        zones = (ExclusionZone(0, 0, 4), ExclusionZone(-15, 5, 3))
        pellets = sample_pellets(np.random.default_rng(seed), 200, 30, 10, zones)
        assert len(pellets) == 200
        _assert_valid(pellets, 30, 10, zones)

    def test_seeded_is_deterministic(self):
        a = sample_pellets(np.random.default_rng(99), 40, 55, 55, REFERENCE_ZONES)
        b = sample_pellets(np.random.default_rng(99), 40, 55, 55, REFERENCE_ZONES)
        assert a == b

    def test_different_seeds_differ(self):
        a = sample_pellets(np.random.default_rng(1), 10, 55, 55, REFERENCE_ZONES)
        b = sample_pellets(np.random.default_rng(2), 10, 55, 55, REFERENCE_ZONES)
        assert a != b

    def test_no_zones(self):
        pellets = sample_pellets(np.random.default_rng(0), 25, 4, 4)
        assert len(pellets) == 25
        _assert_valid(pellets, 4, 4, ())

    def test_zero_count(self):
        assert sample_pellets(np.random.default_rng(0), 0, 55, 55, REFERENCE_ZONES) == []

    def test_negative_count(self):
        with pytest.raises(ValueError):
            sample_pellets(np.random.default_rng(0), -1, 55, 55)

    def test_fully_covered_arena_fails(self):
        zones = (ExclusionZone(0, 0, 100),)
        with pytest.raises(UnsatisfiablePlacementError) as info:
            sample_pellets(np.random.default_rng(0), 5, 55, 55, zones, max_attempts=500)
        assert info.value.placed == 0
        assert info.value.requested == 5
        assert info.value.attempts == 500
        assert "Unsatisfiable placement" in str(info.value)

    def test_partial_progress_reported(self):
        # Only ~1% of the arena (the corners) is free; 3 misses in a row end it
        zones = (ExclusionZone(0, 0, 6.5),)
        with pytest.raises(UnsatisfiablePlacementError) as info:
            sample_pellets(np.random.default_rng(3), 100, 10, 10, zones, max_attempts=3)
        assert info.value.placed < 100
        assert info.value.attempts >= 3

    def test_budget_is_per_pellet(self):
        # Free arena, far more pellets than the budget: never unsatisfiable
        pellets = sample_pellets(np.random.default_rng(0), 500, 55, 55, (), max_attempts=10)
        assert len(pellets) == 500
        _assert_valid(pellets, 55, 55, ())

    def test_budget_resets_after_acceptance(self):
        # Half the arena blocked: total draws exceed the budget many times over
        zones = (ExclusionZone(-10, 0, 8), ExclusionZone(10, 0, 8))
        pellets = sample_pellets(np.random.default_rng(1), 400, 40, 20, zones, max_attempts=50)
        assert len(pellets) == 400
        _assert_valid(pellets, 40, 20, zones)

    def test_low_acceptance_warns(self, caplog):
        zones = (ExclusionZone(0, 0, 6.5),)
        with caplog.at_level(logging.WARNING, logger="habitat_gen.placement"):
            pellets = sample_pellets(np.random.default_rng(5), 3, 10, 10, zones)
        assert len(pellets) == 3
        _assert_valid(pellets, 10, 10, zones)
        assert "Low pellet acceptance" in caplog.text


class TestPelletNodes:
    def test_one_child_per_pellet(self):
        pellets = [Pellet(1.0, 2.0, 0.5), Pellet(-3.0, 4.0, 1.5)]
        group = build_pellets(pellets, make_palette(), height=1.1)
        assert group.name == "pellets"
        assert len(group.children) == 2
        first = group.children[0]
        assert first.position == (1.0, 1.1, 2.0)
        assert first.euler == (PELLET_PITCH, 0.0, 0.5)

    def test_pellets_share_geometry(self):
        pellets = [Pellet(0.0, 0.0, 0.0)] * 3
        group = build_pellets(pellets, make_palette(), height=1.1)
        geoms = {id(c.geometry) for c in group.children}
        assert len(geoms) == 1
        assert all(c.material.name == "pellet" for c in group.children)

    def test_empty(self):
        assert build_pellets([], make_palette(), height=1.1).children == []
