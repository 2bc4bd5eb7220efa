"""
Cage configuration.

Every tunable dimension of the habitat in one place. Validated eagerly,
before any geometry is built, so bad values never surface mid-assembly.
"""

from __future__ import annotations

import numbers
from dataclasses import asdict, dataclass

from habitat_gen.accessories import exclusion_zones
from habitat_gen.placement import DEFAULT_MAX_ATTEMPTS, ExclusionZone

DEFAULT_EXCLUSION_ZONES = exclusion_zones()


class ConfigError(ValueError):
    """Invalid cage configuration."""


@dataclass(frozen=True)
class CageConfig:
    """Cage dimensions, frame, pellet scattering and placement settings."""

    # Cage extents
    width: float = 60.0
    height: float = 30.0
    depth: float = 60.0

    # Frame
    bar_thickness: float = 0.3
    bar_spacing: float = 10.0  # Face bar spacing (first bar half a spacing from the corner)

    # Pellets
    pellet_count: int = 40
    arena_margin: float = 2.5  # Arena = cage minus this on every side
    exclusion_zones: tuple[ExclusionZone, ...] = DEFAULT_EXCLUSION_ZONES
    pellet_height: float = 1.1  # Just above the bedding
    max_placement_attempts: int = DEFAULT_MAX_ATTEMPTS

    # Bedding slab
    base_thickness: float = 1.0
    base_inset: float = 1.0  # Slab is inset from the frame on every side
    texture_repeat: int = 5

    # Global placement of the whole assembly in the host scene
    offset: tuple[float, float, float] = (0.0, -1.0, 0.0)

    @property
    def arena_width(self) -> float:
        return self.width - 2 * self.arena_margin

    @property
    def arena_depth(self) -> float:
        return self.depth - 2 * self.arena_margin

    def validate(self) -> None:
        """Raise ConfigError describing the first invalid field."""
        for name in ("width", "height", "depth", "bar_thickness", "bar_spacing"):
            value = getattr(self, name)
            if not value > 0:
                raise ConfigError(f"{name} must be positive, got {value}")

        count = self.pellet_count
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            raise ConfigError(f"pellet_count must be an integer, got {count!r}")
        if self.pellet_count < 0:
            raise ConfigError(f"pellet_count must be non-negative, got {self.pellet_count}")
        if self.arena_margin < 0:
            raise ConfigError(f"arena_margin must be non-negative, got {self.arena_margin}")
        if self.arena_width <= 0 or self.arena_depth <= 0:
            raise ConfigError(
                f"arena_margin {self.arena_margin} leaves no arena inside "
                f"{self.width}x{self.depth}"
            )
        if 2 * self.bar_thickness >= min(self.width, self.depth):
            raise ConfigError(
                f"bar_thickness {self.bar_thickness} too large for "
                f"{self.width}x{self.depth} cage"
            )
        if self.base_thickness <= 0:
            raise ConfigError(f"base_thickness must be positive, got {self.base_thickness}")
        if 2 * self.base_inset >= min(self.width, self.depth) or self.base_inset < 0:
            raise ConfigError(f"base_inset {self.base_inset} out of range")

        for zone in self.exclusion_zones:
            if zone.radius < 0:
                raise ConfigError(f"exclusion zone radius must be non-negative: {zone}")

        if self.max_placement_attempts <= 0:
            raise ConfigError(
                f"max_placement_attempts must be positive, got {self.max_placement_attempts}"
            )
        if self.texture_repeat <= 0:
            raise ConfigError(f"texture_repeat must be positive, got {self.texture_repeat}")

    def to_dict(self) -> dict:
        """Plain dict (zones as dicts) for logging."""
        return asdict(self)

    @classmethod
    def small(cls) -> CageConfig:
        """Reduced cage for fast tests: few bars, few pellets, no zones."""
        return cls(
            width=20.0,
            height=10.0,
            depth=20.0,
            bar_spacing=5.0,
            pellet_count=5,
            exclusion_zones=(),
        )
