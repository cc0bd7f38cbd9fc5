import argparse

from escapetime.fractal.colouring import Palette
from escapetime.fractal.controller import draw
from escapetime.fractal.request import RenderRequest
from escapetime.fractal.variants import FractalVariant
from escapetime.ui.form import to_image
from escapetime.utils.constants import (
    DEFAULT_IMAGE_SIZE,
    DEFAULT_IMAGINARY,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_REAL,
    DEFAULT_SELECTION,
)
from escapetime.utils.errors import RenderError
from escapetime.utils.fractal_utils import Viewport, my_logger


def build_parser():
    parser = argparse.ArgumentParser(description="Render escape-time fractals")
    parser.add_argument(
        "-v",
        "--variant",
        type=str,
        help="which fractal to draw: julia, mandel or ship. Anything else draws the Julia set.",
        default=DEFAULT_SELECTION,
    )
    parser.add_argument(
        "-r",
        "--real",
        type=float,
        help="real part of the Julia constant",
        default=DEFAULT_REAL,
    )
    parser.add_argument(
        "-im",
        "--imaginary",
        type=float,
        help="imaginary part of the Julia constant",
        default=DEFAULT_IMAGINARY,
    )
    parser.add_argument(
        "-i",
        "--iterations",
        type=int,
        help="The number of iterations done for each pixel.",
        default=DEFAULT_MAX_ITERATIONS,
    )
    parser.add_argument(
        "-c",
        "--center",
        type=str,
        help="the complex number center to start at in '<real> <imag>' format",
        default="0 0",
    )
    parser.add_argument("-z", "--zoom", type=float, help="zoom", default=1.0)
    parser.add_argument("--height", type=int, default=DEFAULT_IMAGE_SIZE)
    parser.add_argument("--width", type=int, default=DEFAULT_IMAGE_SIZE)
    parser.add_argument(
        "-p",
        "--palette",
        choices=[palette.value for palette in Palette],
        help="colour scheme, defaults to the one matching the fractal",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="write the image to this PNG file instead of opening the viewer",
    )
    parser.add_argument(
        "-nm",
        "--no-multiprocessing",
        action="store_false",
        dest="parallel",
        help="Don't split rows across threads.",
    )
    parser.add_argument("-log", "--log-level", choices=["debug", "info", "warning"], default="info")
    return parser


def parse_center(text: str) -> complex:
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"expected '<real> <imag>', got {text!r}")
    return complex(float(parts[0]), float(parts[1]))


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    my_logger.setLevel(args.log_level.upper())

    try:
        viewport = Viewport(center=parse_center(args.center), zoom=args.zoom)
    except ValueError as e:
        parser.error(str(e))

    palette = Palette(args.palette) if args.palette else None

    if args.output is None:
        # imported here so headless renders don't need tkinter
        from escapetime.ui import tkinter_ui

        request = RenderRequest(
            width=args.width,
            height=args.height,
            variant=FractalVariant.from_selector(args.variant),
            real=args.real,
            imaginary=args.imaginary,
            max_iterations=args.iterations,
            palette=palette,
            viewport=viewport,
        )
        try:
            request.validate()
        except RenderError as e:
            parser.error(str(e))
        tkinter_ui.run(request, args.parallel)
        return

    try:
        buffer = draw(
            args.width,
            args.height,
            args.variant,
            args.real,
            args.imaginary,
            args.iterations,
            palette=palette,
            viewport=viewport,
            parallel=args.parallel,
        )
    except RenderError as e:
        parser.error(str(e))

    to_image(buffer).save(args.output, "PNG", optimize=True)
    my_logger.info(f"saved {args.width}x{args.height} image to {args.output}")


if __name__ == "__main__":
    main()
