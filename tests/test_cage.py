"""Tests for configuration, the bedding texture and full cage assembly."""

import dataclasses
import math

import numpy as np
import pytest
from PIL import Image

from habitat_gen import HamsterCage, describe_cage
from habitat_gen.config import CageConfig, ConfigError
from habitat_gen.placement import ExclusionZone, UnsatisfiablePlacementError
from habitat_gen.preview import main as preview_main
from habitat_gen.scene import Node, Scene
from habitat_gen.texture import (
    BASE_COLOR,
    TextureUnavailableError,
    WoodShavingTexture,
    resolve_texture,
)

ASSEMBLY_ORDER = ["base", "frame", "bottle", "bowl", "wheel", "house", "tunnel", "pellets"]


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    def test_defaults_valid(self):
        cfg = CageConfig()
        cfg.validate()
        assert (cfg.width, cfg.height, cfg.depth) == (60.0, 30.0, 60.0)
        assert cfg.arena_width == 55.0
        assert cfg.arena_depth == 55.0
        assert len(cfg.exclusion_zones) == 4

    def test_small_preset_valid(self):
        CageConfig.small().validate()

    @pytest.mark.parametrize(
        "changes",
        [
            {"width": 0},
            {"height": -1},
            {"depth": float("nan")},
            {"bar_thickness": 0},
            {"bar_spacing": -5},
            {"pellet_count": -1},
            {"pellet_count": 2.5},
            {"pellet_count": 3.0},
            {"pellet_count": True},
            {"arena_margin": -0.1},
            {"arena_margin": 30},
            {"bar_thickness": 31},
            {"base_thickness": 0},
            {"base_inset": 40},
            {"exclusion_zones": (ExclusionZone(0, 0, -1),)},
            {"max_placement_attempts": 0},
            {"texture_repeat": 0},
        ],
        ids=str,
    )
    def test_invalid_rejected(self, changes):
        cfg = dataclasses.replace(CageConfig(), **changes)
        with pytest.raises(ConfigError):
            cfg.validate()

    def test_numpy_integer_count_accepted(self):
        CageConfig(pellet_count=np.int64(12)).validate()

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            CageConfig(width=-1).validate()

    def test_to_dict(self):
        d = CageConfig().to_dict()
        assert d["pellet_count"] == 40
        assert d["exclusion_zones"][0] == {"center_x": 20.0, "center_z": 20.0, "radius": 8.0}


# ---------------------------------------------------------------------------
# Texture
# ---------------------------------------------------------------------------


class _FixedRng:
    """Stands in for a Generator with scripted draws."""

    def __init__(self, ints, floats):
        self._ints = iter(ints)
        self._floats = iter(floats)

    def integers(self, low, high):
        return next(self._ints)

    def random(self):
        return next(self._floats)


class TestTexture:
    def test_image_shape(self):
        image = WoodShavingTexture(np.random.default_rng(0)).generate()
        assert isinstance(image, Image.Image)
        assert image.size == (64, 64)
        assert image.mode == "RGB"

    def test_mostly_base_color(self):
        image = WoodShavingTexture(np.random.default_rng(0)).generate()
        colors = image.getcolors(maxcolors=64 * 64)
        assert len(colors) > 1
        _, dominant = max(colors)
        assert dominant == BASE_COLOR

    def test_seeded_is_deterministic(self):
        a = WoodShavingTexture(np.random.default_rng(11)).generate()
        b = WoodShavingTexture(np.random.default_rng(11)).generate()
        assert a.tobytes() == b.tobytes()

    def test_edge_spot_wraps(self):
        # One 3px spot at x=63: columns 63, 0 and 1 darken, column 2 stays base
        rng = _FixedRng(ints=[63, 10, 2], floats=[0.5])
        image = WoodShavingTexture(rng, n_spots=1).generate()
        assert image.getpixel((63, 10)) != BASE_COLOR
        assert image.getpixel((0, 10)) != BASE_COLOR
        assert image.getpixel((1, 12)) != BASE_COLOR
        assert image.getpixel((2, 10)) == BASE_COLOR
        assert image.getpixel((62, 10)) == BASE_COLOR

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            WoodShavingTexture(np.random.default_rng(0), size=0)

    def test_resolve_wraps_os_error(self):
        class NoSurface:
            def generate(self):
                raise OSError("no drawing surface")

        with pytest.raises(TextureUnavailableError, match="no drawing surface"):
            resolve_texture(NoSurface())

    def test_resolve_rejects_non_image(self):
        class Broken:
            def generate(self):
                return None

        with pytest.raises(TextureUnavailableError):
            resolve_texture(Broken())


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def _world_positions(group: Node, parent: np.ndarray) -> list[np.ndarray]:
    return [world[:3, 3] for node, world in group.walk(parent) if node is not group]


class TestHamsterCage:
    @pytest.fixture(scope="class")
    def built(self):
        scene = Scene()
        cage = HamsterCage(scene, seed=42)
        return scene, cage

    def test_adds_exactly_one_node(self, built):
        scene, cage = built
        assert scene.children == [cage.root]
        assert cage.root.name == "hamster_cage"

    def test_global_offset(self, built):
        _, cage = built
        assert cage.root.position == (0.0, -1.0, 0.0)

    def test_assembly_order(self, built):
        _, cage = built
        assert [c.name for c in cage.root.children] == ASSEMBLY_ORDER

    def test_base_slab(self, built):
        _, cage = built
        base = cage.root.find("base")
        lo, hi = base.geometry.bounds()
        assert np.allclose(hi - lo, [58, 1, 58])
        assert base.position == (0.0, 0.5, 0.0)
        assert base.material.texture is not None
        assert base.material.texture_repeat == (5, 5)

    def test_frame_is_one_mesh(self, built):
        _, cage = built
        frame = cage.root.find("frame")
        assert frame.children == []
        assert len(cage.bar_specs) == 36
        assert frame.geometry.n_vertices == sum(s.geometry().n_vertices for s in cage.bar_specs)

    def test_pellets(self, built):
        _, cage = built
        cfg = cage.config
        assert len(cage.pellets) == cfg.pellet_count
        for p in cage.pellets:
            assert abs(p.x) <= cfg.arena_width / 2
            assert abs(p.z) <= cfg.arena_depth / 2
            for zone in cfg.exclusion_zones:
                assert math.hypot(p.x - zone.center_x, p.z - zone.center_z) >= zone.radius

    def test_pellets_rest_on_bedding(self, built):
        _, cage = built
        root_world = cage.root.local_matrix()
        group = cage.root.find("pellets")
        positions = _world_positions(group, root_world)
        assert len(positions) == 40
        # offset -1 + pellet height 1.1
        assert all(pos[1] == pytest.approx(0.1) for pos in positions)

    def test_same_seed_same_cage(self):
        a = HamsterCage(Scene(), seed=7)
        b = HamsterCage(Scene(), seed=7)
        assert a.pellets == b.pellets
        assert a.bar_specs == b.bar_specs
        assert (
            a.palette["bedding"].texture.tobytes() == b.palette["bedding"].texture.tobytes()
        )
        fa = a.root.find("frame").geometry.vertices
        fb = b.root.find("frame").geometry.vertices
        assert np.array_equal(fa, fb)

    def test_rng_equivalent_to_seed(self):
        a = HamsterCage(Scene(), seed=3)
        b = HamsterCage(Scene(), rng=np.random.default_rng(3))
        assert a.pellets == b.pellets

    def test_constructions_are_independent(self):
        scene = Scene()
        a = HamsterCage(scene, CageConfig.small(), seed=1)
        b = HamsterCage(scene, CageConfig.small(), seed=1)
        assert scene.children == [a.root, b.root]
        assert a.root is not b.root
        a.root.find("pellets").children.clear()
        assert len(b.root.find("pellets").children) == 5

    def test_unseeded_keeps_invariants(self):
        cage = HamsterCage(Scene(), CageConfig(pellet_count=60))
        assert len(cage.pellets) == 60
        for p in cage.pellets:
            for zone in cage.config.exclusion_zones:
                assert not zone.contains(p.x, p.z)

    def test_invalid_config_adds_nothing(self):
        scene = Scene()
        with pytest.raises(ConfigError):
            HamsterCage(scene, CageConfig(pellet_count=-3), seed=0)
        assert scene.children == []

    def test_unsatisfiable_placement(self):
        scene = Scene()
        cfg = CageConfig(
            exclusion_zones=(ExclusionZone(0, 0, 100),),
            max_placement_attempts=200,
        )
        with pytest.raises(UnsatisfiablePlacementError):
            HamsterCage(scene, cfg, seed=0)
        assert scene.children == []

    def test_pellet_count_above_attempt_budget(self):
        cfg = dataclasses.replace(
            CageConfig.small(), pellet_count=300, max_placement_attempts=50
        )
        cage = HamsterCage(Scene(), cfg, seed=0)
        assert len(cage.pellets) == 300
        assert len(cage.root.find("pellets").children) == 300

    def test_texture_failure_propagates(self):
        class NoSurface:
            def generate(self):
                raise OSError("canvas unavailable")

        scene = Scene()
        with pytest.raises(TextureUnavailableError):
            HamsterCage(scene, seed=0, texture_provider=NoSurface())
        assert scene.children == []

    def test_custom_texture_provider(self):
        image = Image.new("RGB", (8, 8), (1, 2, 3))

        class Solid:
            def generate(self):
                return image

        cage = HamsterCage(Scene(), CageConfig.small(), seed=0, texture_provider=Solid())
        assert cage.palette["bedding"].texture is image

    def test_custom_host(self):
        class Recorder:
            def __init__(self):
                self.added = []

            def add(self, node):
                self.added.append(node)

        host = Recorder()
        cage = HamsterCage(host, CageConfig.small(), seed=0)
        assert host.added == [cage.root]

    def test_describe(self, built):
        _, cage = built
        desc = describe_cage(cage)
        assert desc.startswith("Cage 60x30x60 (seed=42)")
        assert "(36 bars)" in desc
        for name in ASSEMBLY_ORDER:
            assert name in desc


# ---------------------------------------------------------------------------
# Preview CLI
# ---------------------------------------------------------------------------


class TestPreview:
    def test_writes_outputs(self, tmp_path, capsys):
        png = tmp_path / "bedding.png"
        obj = tmp_path / "cage.obj"
        code = preview_main(
            ["--seed", "1", "--pellets", "10", "--texture-out", str(png), "--obj-out", str(obj)]
        )
        assert code == 0
        assert "Cage 60x30x60 (seed=1)" in capsys.readouterr().out

        with Image.open(png) as image:
            assert image.size == (64, 64)

        text = obj.read_text()
        assert "o frame" in text
        assert text.count("\no pellet_") == 10
        first_face = next(line for line in text.splitlines() if line.startswith("f "))
        assert min(int(i) for i in first_face.split()[1:]) >= 1

    def test_bad_config_exit_code(self):
        assert preview_main(["--pellets", "-1"]) == 2
