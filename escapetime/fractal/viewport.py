from typing import Optional

from escapetime.fractal.arithmetic import ComplexValue
from escapetime.utils.fractal_utils import Viewport

DEFAULT_VIEWPORT = Viewport()


def map_pixel(row: int, col: int, width: int, height: int, viewport: Optional[Viewport] = None) -> ComplexValue:
    """Map the pixel at ``(row, col)`` of a ``width`` x ``height`` image into the plane.

    Row 0 is the top of the image and column 0 its left edge. The arithmetic
    matches the compiled grid kernel exactly, so a pixel maps to the same point
    whichever path computes it.
    """
    viewport = viewport or DEFAULT_VIEWPORT
    return ComplexValue.from_complex(viewport.get_point_by_coords(row, col, width, height))
