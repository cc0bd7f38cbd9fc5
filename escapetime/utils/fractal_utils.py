import logging
import math
import numbers
from dataclasses import dataclass, replace

from escapetime.utils.constants import PLANE_WIDTH
from escapetime.utils.errors import InvalidViewport

logging.basicConfig(format="%(levelname)s: %(message)s")
my_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """The region of the complex plane shown in an image.

    The plane width is ``PLANE_WIDTH / zoom`` and the height follows the
    aspect ratio of the image, so pixels are always square. The default
    viewport is centred on the origin with the real axis spanning [-2, 2).
    """

    center: complex = 0j
    zoom: float = 1.0

    def validate(self):
        if not isinstance(self.zoom, numbers.Real) or not math.isfinite(self.zoom) or self.zoom <= 0:
            raise InvalidViewport(f"zoom must be positive, got {self.zoom!r}")
        center = complex(self.center)
        if not (math.isfinite(center.real) and math.isfinite(center.imag)):
            raise InvalidViewport(f"center must be finite, got {self.center!r}")

    def get_width(self):
        return _convert_between_zoom_width(self.zoom)

    def get_height(self, image_width: int, image_height: int):
        return self.get_width() * image_height / image_width

    def get_width_per_pix(self, image_width: int):
        return self.get_width() / image_width

    def get_height_per_pix(self, image_width: int, image_height: int):
        return self.get_height(image_width, image_height) / image_height

    def t_left(self, image_width: int, image_height: int) -> complex:
        half_width = self.get_width() / 2
        half_height = half_width * image_height / image_width
        return complex(self.center) + complex(-half_width, half_height)

    def get_point_by_coords(self, row, col, image_width: int, image_height: int) -> complex:
        t_left = self.t_left(image_width, image_height)
        return complex(
            t_left.real + col * self.get_width_per_pix(image_width),
            t_left.imag - row * self.get_height_per_pix(image_width, image_height),
        )

    def set_center(self, center: complex) -> "Viewport":
        return replace(self, center=complex(center))

    def set_zoom(self, zoom: float) -> "Viewport":
        if zoom <= 0:
            raise InvalidViewport("zoom must be positive")
        return replace(self, zoom=zoom)

    def set_zoom_from_width(self, width: float) -> "Viewport":
        return self.set_zoom(_convert_between_zoom_width(width))


def _convert_between_zoom_width(value):
    return PLANE_WIDTH / value
