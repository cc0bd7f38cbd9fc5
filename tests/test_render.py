import logging

import numpy as np
import pytest

from escapetime.fractal.arithmetic import ComplexValue
from escapetime.fractal.assembler import iteration_grid, render
from escapetime.fractal.colouring import Palette, colour_for
from escapetime.fractal.controller import draw
from escapetime.fractal.iteration import iterate
from escapetime.fractal.request import RenderRequest
from escapetime.fractal.variants import FractalVariant
from escapetime.fractal.viewport import map_pixel
from escapetime.utils.errors import InvalidCutoff, InvalidDimension, InvalidViewport, RenderError
from escapetime.utils.fractal_utils import Viewport, my_logger


@pytest.mark.parametrize("width, height", [(1, 1), (7, 3), (16, 9), (9, 16)])
def test_buffer_has_four_bytes_per_pixel(width, height):
    buffer = draw(width, height, "julia", -0.15, 0.65, 50)
    assert len(buffer) == width * height * 4
    assert buffer.rgba().shape == (height, width, 4)
    assert len(buffer.tobytes()) == width * height * 4


@pytest.mark.parametrize("selector", ["julia", "mandel", "ship"])
def test_every_pixel_is_opaque(selector):
    buffer = draw(40, 30, selector, -0.15, 0.65, 100)
    assert np.all(buffer.rgba()[..., 3] == 255)


def test_draw_is_deterministic():
    first = draw(120, 90, "mandel", 0, 0, 200)
    second = draw(120, 90, "mandel", 0, 0, 200)
    assert first.tobytes() == second.tobytes()


def test_empty_selector_draws_the_default_julia_set():
    fallback = draw(750, 750, "", -0.15, 0.65, 500)
    julia = draw(750, 750, "julia", -0.15, 0.65, 500)
    assert len(fallback) == 750 * 750 * 4
    assert fallback.tobytes() == julia.tobytes()


def test_serial_and_parallel_renders_agree():
    request = RenderRequest(64, 48, FractalVariant.JULIA, -0.8, 0.156, 300)
    assert render(request, parallel=False).tobytes() == render(request, parallel=True).tobytes()


def test_buffer_is_read_only():
    buffer = draw(4, 4, "julia", 0, 0, 10)
    assert not buffer.data.flags.writeable
    with pytest.raises(ValueError):
        buffer.data[0] = 1


def test_known_pixels_of_the_mandelbrot_set():
    buffer = draw(8, 8, "mandel", 0, 0, 500)
    # pixel (4, 4) is the origin, an interior point
    assert buffer.pixel(4, 4) == (0, 0, 0, 255)
    # the top-left corner is -2 + 2i, which escapes after one step
    corner = iterate(map_pixel(0, 0, 8, 8), ComplexValue(0.0, 0.0), FractalVariant.MANDELBROT, 500)
    expected = colour_for(corner, 500, Palette.BANDED)
    assert buffer.pixel(0, 0) == expected
    assert buffer.pixel(0, 0) == (32, 3, 1, 255)


@pytest.mark.parametrize("variant", list(FractalVariant))
def test_grid_matches_single_pixel_iteration(variant):
    request = RenderRequest(
        width=13,
        height=9,
        variant=variant,
        real=-0.15,
        imaginary=0.65,
        max_iterations=60,
        viewport=Viewport(center=complex(-0.4, 0.1), zoom=1.5),
    )
    grid = iteration_grid(request)
    assert grid.shape == (9, 13)
    for row in range(request.height):
        for col in range(request.width):
            start = map_pixel(row, col, request.width, request.height, request.viewport)
            result = iterate(start, request.get_parameter(), variant, request.max_iterations)
            assert grid[row, col] == result.iterations


def test_buffer_is_row_major():
    request = RenderRequest(11, 5, FractalVariant.MANDELBROT, max_iterations=80, palette=Palette.HUE)
    buffer = render(request)
    data = buffer.data
    for row, col in [(0, 10), (2, 3), (4, 0)]:
        start = map_pixel(row, col, 11, 5)
        expected = colour_for(iterate(start, request.get_parameter(), request.variant, 80), 80, Palette.HUE)
        offset = (row * 11 + col) * 4
        assert tuple(int(v) for v in data[offset:offset + 4]) == expected


@pytest.mark.parametrize("width, height", [(0, 100), (100, 0), (-5, 10), (8193, 10), (10.5, 10), (True, 10)])
def test_invalid_dimensions(width, height):
    with pytest.raises(InvalidDimension):
        draw(width, height, "julia", 0, 0, 500)


@pytest.mark.parametrize("cutoff", [0, -1, 2.5])
def test_invalid_cutoff(cutoff):
    with pytest.raises(InvalidCutoff):
        draw(100, 100, "julia", 0, 0, cutoff)


def test_invalid_viewport():
    with pytest.raises(InvalidViewport):
        draw(10, 10, "julia", 0, 0, 10, viewport=Viewport(zoom=0))


def test_errors_are_value_errors():
    assert issubclass(InvalidDimension, RenderError)
    assert issubclass(InvalidCutoff, ValueError)


def test_explicit_palette_overrides_the_variant_default():
    request = RenderRequest(10, 10, FractalVariant.JULIA, palette=Palette.EMBER)
    assert request.get_palette() is Palette.EMBER
    assert RenderRequest(10, 10, FractalVariant.BURNING_SHIP).get_palette() is Palette.EMBER


def test_render_timing_is_logged_at_info(caplog):
    with caplog.at_level(logging.INFO, logger=my_logger.name):
        render(RenderRequest(12, 8, FractalVariant.MANDELBROT, max_iterations=20))
    timings = [record for record in caplog.records if "took" in record.getMessage()]
    assert [record.levelno for record in timings] == [logging.INFO]
    assert timings[0].getMessage().startswith("mandelbrot 12x8 took")
