"""Procedural bedding texture.

The cage only needs *some* tileable image for the bedding surface, so the
texture source is a small provider protocol. WoodShavingTexture is the
default: a tan background sprinkled with darker 1-3 px flecks, drawn with
Pillow from an injected numpy Generator.

Usage:
    rng = np.random.default_rng(7)
    image = WoodShavingTexture(rng).generate()   # 64x64 RGB, tiles seamlessly
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from PIL import Image, ImageDraw

BASE_COLOR = (0xDA, 0xC2, 0x92)
SPOT_COLOR = (180, 160, 120)
SPOT_ALPHA_MIN = 0.5
SPOT_ALPHA_JITTER = 0.2


class TextureUnavailableError(RuntimeError):
    """The texture provider could not produce an image."""


class TextureProvider(Protocol):
    def generate(self) -> Image.Image: ...


class WoodShavingTexture:
    """Tileable wood-shaving pattern.

    Spots that cross an edge are also drawn on the opposite edge, so the
    image repeats without seams.
    """

    def __init__(self, rng: np.random.Generator, size: int = 64, n_spots: int = 100):
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        self.rng = rng
        self.size = size
        self.n_spots = n_spots

    def generate(self) -> Image.Image:
        n = self.size
        image = Image.new("RGB", (n, n), BASE_COLOR)
        draw = ImageDraw.Draw(image, "RGBA")

        for _ in range(self.n_spots):
            x = int(self.rng.integers(0, n))
            y = int(self.rng.integers(0, n))
            spot = 1 + int(self.rng.integers(0, 3))
            alpha = SPOT_ALPHA_MIN + self.rng.random() * SPOT_ALPHA_JITTER
            fill = (*SPOT_COLOR, int(round(alpha * 255)))

            # Wrap across edges for seamless tiling
            for dx in (0, -n) if x + spot > n else (0,):
                for dy in (0, -n) if y + spot > n else (0,):
                    x0, y0 = x + dx, y + dy
                    draw.rectangle((x0, y0, x0 + spot - 1, y0 + spot - 1), fill=fill)

        return image


def resolve_texture(provider: TextureProvider) -> Image.Image:
    """Run a provider, turning any failure into TextureUnavailableError."""
    try:
        image = provider.generate()
    except OSError as e:
        raise TextureUnavailableError(f"Texture provider failed: {e}") from e
    if not isinstance(image, Image.Image):
        raise TextureUnavailableError(
            f"Texture provider returned {type(image).__name__}, expected a PIL image"
        )
    return image
