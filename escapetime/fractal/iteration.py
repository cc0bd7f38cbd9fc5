import math
from dataclasses import dataclass

from numba import njit

from escapetime.fractal.arithmetic import ComplexValue, add, escaped, sq_mod, square
from escapetime.fractal.variants import FractalVariant
from escapetime.utils.constants import BREAKOUT_R2

JULIA = FractalVariant.JULIA.code
BURNING_SHIP = FractalVariant.BURNING_SHIP.code


@dataclass(frozen=True)
class PixelResult:
    iterations: int
    escaped: bool


@njit(nogil=True)
def starting_point(variant, point_real, point_imag, param_real, param_imag):
    """Return ``(z_real, z_imag, c_real, c_imag)`` for a mapped pixel."""
    if variant == JULIA:
        return point_real, point_imag, param_real, param_imag
    return 0.0, 0.0, point_real, point_imag


@njit(nogil=True)
def escape_time(z_real, z_imag, c_real, c_imag, variant, max_iter):
    i = 0
    while i < max_iter:
        if escaped(sq_mod(z_real, z_imag), BREAKOUT_R2):
            return i
        if variant == BURNING_SHIP:
            z_real = math.fabs(z_real)
            z_imag = math.fabs(z_imag)
        z_real, z_imag = square(z_real, z_imag)
        z_real, z_imag = add(z_real, z_imag, c_real, c_imag)
        i += 1
    return i


@njit(nogil=True)
def iterate_point(point_real, point_imag, param_real, param_imag, variant, max_iter):
    z_real, z_imag, c_real, c_imag = starting_point(variant, point_real, point_imag, param_real, param_imag)
    return escape_time(z_real, z_imag, c_real, c_imag, variant, max_iter)


def iterate(start: ComplexValue, parameter: ComplexValue, variant: FractalVariant, cutoff: int) -> PixelResult:
    """Run the escape-time recurrence for a single mapped pixel.

    ``start`` is the pixel's point in the plane. For the Julia family it is the
    initial ``z`` and ``parameter`` is the constant ``c``; the other variants
    start from ``z = 0`` with ``c = start`` and ignore ``parameter``.

    The count is the number of steps taken before ``|z|^2`` exceeded 4 (or
    stopped being finite); a point that never escapes reports ``cutoff``.
    """
    iterations = iterate_point(
        float(start.real),
        float(start.imag),
        float(parameter.real),
        float(parameter.imag),
        variant.code,
        int(cutoff),
    )
    return PixelResult(iterations=int(iterations), escaped=bool(iterations < cutoff))
