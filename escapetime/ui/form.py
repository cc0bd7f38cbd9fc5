import math
import re
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from escapetime.fractal.colouring import Palette
from escapetime.fractal.request import PixelBuffer, RenderRequest
from escapetime.fractal.variants import FractalVariant
from escapetime.utils.fractal_utils import Viewport
from escapetime.utils.constants import DEFAULT_MAX_ITERATIONS

FLOAT_PREFIX = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass(frozen=True)
class FormValues:
    real: float
    imaginary: float
    cutoff: int
    selection: str


def parse_float(text, default=0.0):
    # reads the leading number and ignores the rest, like `parseFloat(x) || 0`
    match = FLOAT_PREFIX.match(str(text))
    if match is None:
        return default
    value = float(match.group(0))
    if not math.isfinite(value) or value == 0:
        return default
    return value


def parse_int(text, default=DEFAULT_MAX_ITERATIONS):
    text = str(text).strip()
    digits = len(text) - len(text.lstrip("+-"))
    while digits < len(text) and text[digits].isdigit():
        digits += 1
    try:
        value = int(text[:digits])
    except ValueError:
        return default
    return value or default


def parse_form(real, imaginary, cutoff, selection) -> FormValues:
    """Read the viewer's text fields with the canvas page's fallbacks.

    Unparsable real or imaginary parts become 0, an unparsable or zero cutoff
    becomes 500, and the selection is passed through untouched so the engine
    can apply its own fallback.
    """
    return FormValues(
        real=parse_float(real),
        imaginary=parse_float(imaginary),
        cutoff=parse_int(cutoff),
        selection=selection,
    )


def to_image(buffer: PixelBuffer) -> Image.Image:
    # copy, the buffer itself is read-only
    return Image.fromarray(buffer.rgba().copy())


def make_request(
    values: FormValues,
    width: int,
    height: int,
    viewport: Optional[Viewport] = None,
    palette: Optional[Palette] = None,
) -> RenderRequest:
    return RenderRequest(
        width=width,
        height=height,
        variant=FractalVariant.from_selector(values.selection),
        real=values.real,
        imaginary=values.imaginary,
        max_iterations=values.cutoff,
        palette=palette,
        viewport=viewport or Viewport(),
    )


def uses_parameter(selection) -> bool:
    return FractalVariant.from_selector(selection).uses_parameter


def make_cli_args(request: RenderRequest):
    center = complex(request.viewport.center)
    args = (
        f"-v {SELECTION_NAMES[request.variant]} -r {request.real} -im {request.imaginary}"
        f' -i {request.max_iterations} --width {request.width} --height {request.height}'
        f' -c "{center.real} {center.imag}" -z {request.viewport.zoom}'
    )

    if request.palette is not None:
        args += f" -p {request.palette.value}"

    return args


SELECTION_NAMES = {
    FractalVariant.JULIA: "julia",
    FractalVariant.MANDELBROT: "mandel",
    FractalVariant.BURNING_SHIP: "ship",
}
