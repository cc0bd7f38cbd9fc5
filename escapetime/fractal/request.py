import numbers
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from escapetime.fractal.arithmetic import ComplexValue
from escapetime.fractal.colouring import Palette
from escapetime.fractal.variants import FractalVariant
from escapetime.utils.constants import DEFAULT_MAX_ITERATIONS, MAX_IMAGE_DIMENSION
from escapetime.utils.errors import InvalidCutoff, InvalidDimension
from escapetime.utils.fractal_utils import Viewport


@dataclass(frozen=True)
class RenderRequest:
    width: int
    height: int
    variant: FractalVariant = FractalVariant.JULIA
    real: float = 0.0
    imaginary: float = 0.0
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    palette: Optional[Palette] = None
    viewport: Viewport = field(default_factory=Viewport)

    def validate(self):
        _check_dimension("width", self.width)
        _check_dimension("height", self.height)
        if not _is_integer(self.max_iterations) or self.max_iterations <= 0:
            raise InvalidCutoff(f"max iterations must be a positive integer, got {self.max_iterations!r}")
        self.viewport.validate()

    def get_parameter(self) -> ComplexValue:
        return ComplexValue(float(self.real), float(self.imaginary))

    def get_palette(self) -> Palette:
        return self.palette if self.palette is not None else Palette.for_variant(self.variant)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGBA8 pixels, four bytes per pixel, top row first."""

    width: int
    height: int
    data: np.ndarray

    def __len__(self):
        return self.data.size

    def rgba(self) -> np.ndarray:
        return self.data.reshape(self.height, self.width, 4)

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def pixel(self, row: int, col: int):
        return tuple(int(v) for v in self.rgba()[row, col])


def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _check_dimension(name, value):
    if not _is_integer(value):
        raise InvalidDimension(f"{name} must be an integer, got {value!r}")
    if not 0 < value <= MAX_IMAGE_DIMENSION:
        raise InvalidDimension(f"{name} must be between 1 and {MAX_IMAGE_DIMENSION}, got {value}")
