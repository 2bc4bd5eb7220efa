"""Material palette — semantic name -> surface description.

Accessory prims refer to materials by key ("bars", "wheel", ...). The
palette is built once per cage because the bedding entry carries the
generated wood-shaving texture.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image


def hex_to_rgba(color: int, alpha: float = 1.0) -> tuple[float, float, float, float]:
    """0xRRGGBB -> (r, g, b, a) with components in [0, 1]."""
    r = (color >> 16) & 0xFF
    g = (color >> 8) & 0xFF
    b = color & 0xFF
    return (r / 255, g / 255, b / 255, alpha)


@dataclass(frozen=True)
class Material:
    """Surface description handed to the renderer.

    Attributes:
        name: Palette key
        rgba: Base color and opacity, values in [0, 1]
        transparent: Whether the renderer should alpha-blend
        texture: Optional surface pattern, tiled `texture_repeat` times
        texture_repeat: (u, v) tiling count for the texture
        double_sided: Render back faces (open meshes like tubes and discs)
    """

    name: str
    rgba: tuple[float, float, float, float]
    transparent: bool = False
    texture: Image.Image | None = None
    texture_repeat: tuple[int, int] = (1, 1)
    double_sided: bool = False

    @property
    def opacity(self) -> float:
        return self.rgba[3]


# ---------------------------------------------------------------------------
# Palette colors
# ---------------------------------------------------------------------------

BARS = 0xCDCDCD  # light metallic
BEDDING = 0xDAC292  # tan wood shavings
BOTTLE = 0xADD8E6  # light blue
BOWL = 0xE67E22  # orange ceramic
WHEEL = 0x95A5A6  # gray plastic
HOUSE = 0x8E44AD  # purple plastic

CAP = 0xFFFFFF
SPOUT = 0xC0C0C0
BOWL_INTERIOR = 0xBF6516
ENTRANCE = 0x000000
TUNNEL = 0x2ECC71
TUNNEL_RING = 0x27AE60
PELLET = 0xA0522D

BOTTLE_OPACITY = 0.7

# Keys every palette must provide
SEMANTIC_KEYS = ("bars", "bedding", "bottle", "bowl", "wheel", "house")


def make_palette(
    bedding_texture: Image.Image | None = None,
    texture_repeat: int = 5,
) -> dict[str, Material]:
    """Build the full palette: the six semantic materials plus accents."""
    entries = [
        Material("bars", hex_to_rgba(BARS)),
        Material(
            "bedding",
            hex_to_rgba(BEDDING),
            texture=bedding_texture,
            texture_repeat=(texture_repeat, texture_repeat),
        ),
        Material(
            "bottle",
            hex_to_rgba(BOTTLE, BOTTLE_OPACITY),
            transparent=True,
        ),
        Material("bowl", hex_to_rgba(BOWL)),
        Material("wheel", hex_to_rgba(WHEEL)),
        Material("house", hex_to_rgba(HOUSE)),
        Material("cap", hex_to_rgba(CAP)),
        Material("spout", hex_to_rgba(SPOUT)),
        Material("bowl_interior", hex_to_rgba(BOWL_INTERIOR)),
        Material("entrance", hex_to_rgba(ENTRANCE), double_sided=True),
        Material("tunnel", hex_to_rgba(TUNNEL), double_sided=True),
        Material("tunnel_ring", hex_to_rgba(TUNNEL_RING)),
        Material("pellet", hex_to_rgba(PELLET)),
    ]
    return {m.name: m for m in entries}
