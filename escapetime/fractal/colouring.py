from enum import Enum
from typing import Optional, Tuple

import numpy as np

from escapetime.fractal.iteration import PixelResult
from escapetime.fractal.variants import FractalVariant
from escapetime.utils.constants import BROT_COLOUR, OPAQUE

COSINE_RGB_OFFSETS = (0.28, 0.422, 0.438)
COSINE_CYCLES = 3


class Palette(Enum):
    BLUE_RAMP = "blue_ramp"
    BANDED = "banded"
    EMBER = "ember"
    COSINE = "cosine"
    HUE = "hue"

    @classmethod
    def for_variant(cls, variant: FractalVariant) -> "Palette":
        return DEFAULT_PALETTES[variant]


DEFAULT_PALETTES = {
    FractalVariant.JULIA: Palette.BLUE_RAMP,
    FractalVariant.MANDELBROT: Palette.BANDED,
    FractalVariant.BURNING_SHIP: Palette.EMBER,
}


def blue_ramp_colouring(iterations, cutoff):
    return np.stack([(iterations // 4) % 256, (iterations // 2) % 256, iterations % 256], axis=-1)


def banded_colouring(iterations, cutoff):
    return np.stack([iterations % 8 * 32, iterations * 3 % 256, iterations % 256], axis=-1)


def ember_colouring(iterations, cutoff):
    return np.stack([iterations % 4 * 64, iterations % 8 * 32, iterations % 16 * 8], axis=-1)


def cosine_colouring(iterations, cutoff, rgb_offsets=COSINE_RGB_OFFSETS, num_cycles=COSINE_CYCLES):
    cols = num_cycles * iterations / cutoff
    a = np.stack([(cols + offset) * 2 * np.pi for offset in rgb_offsets], axis=-1)
    return (255 * (0.5 + 0.5 * np.cos(a))).astype(np.int64)


def hue_colouring(iterations, cutoff):
    # hsv with full saturation and value, hue swept once over [0, cutoff)
    h = 6 * iterations / cutoff
    sector = np.floor(h).astype(np.int64) % 6
    rising = h - np.floor(h)
    falling = 1 - rising
    ones = np.ones_like(h)
    zeros = np.zeros_like(h)
    channels = np.choose(
        sector[..., None],
        [
            np.stack([ones, rising, zeros], axis=-1),
            np.stack([falling, ones, zeros], axis=-1),
            np.stack([zeros, ones, rising], axis=-1),
            np.stack([zeros, falling, ones], axis=-1),
            np.stack([rising, zeros, ones], axis=-1),
            np.stack([ones, zeros, falling], axis=-1),
        ],
    )
    return (255 * channels).astype(np.int64)


COLOURINGS = {
    Palette.BLUE_RAMP: blue_ramp_colouring,
    Palette.BANDED: banded_colouring,
    Palette.EMBER: ember_colouring,
    Palette.COSINE: cosine_colouring,
    Palette.HUE: hue_colouring,
}


def colourise(iterations: np.ndarray, cutoff: int, palette: Palette) -> np.ndarray:
    """Colour a grid of iteration counts.

    Returns an array with a trailing RGBA axis. Counts that reached ``cutoff``
    are interior points and get ``BROT_COLOUR``; every pixel is opaque.
    """
    iterations = np.asarray(iterations, dtype=np.int64)
    brot_pixels = iterations >= cutoff

    colours = np.empty(iterations.shape + (4,), dtype=np.uint8)
    colours[..., :3] = COLOURINGS[palette](iterations, cutoff)
    colours[..., 3] = OPAQUE
    colours[brot_pixels, :3] = BROT_COLOUR
    return colours


def colour_for(
    result: PixelResult,
    cutoff: int,
    palette: Optional[Palette] = None,
    variant: Optional[FractalVariant] = None,
) -> Tuple[int, int, int, int]:
    """Colour a single pixel result as an opaque ``(r, g, b, a)`` tuple.

    Without a palette the colours of ``variant`` are used, and without either
    those of the default variant (Julia).
    """
    if palette is None:
        palette = Palette.for_variant(variant or FractalVariant.default())
    iterations = result.iterations if result.escaped else cutoff
    r, g, b, a = colourise(np.array([iterations]), cutoff, palette)[0]
    return int(r), int(g), int(b), int(a)
