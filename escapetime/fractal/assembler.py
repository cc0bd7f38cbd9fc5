import time

import numpy as np
from numba import njit, prange

from escapetime.fractal.colouring import colourise
from escapetime.fractal.iteration import iterate_point
from escapetime.fractal.request import PixelBuffer, RenderRequest
from escapetime.utils.fractal_utils import my_logger


def iteration_grid(request: RenderRequest, parallel: bool = True) -> np.ndarray:
    """Compute the ``(height, width)`` grid of escape-time counts for a request."""
    viewport = request.viewport
    t_left = viewport.t_left(request.width, request.height)
    kernel = _parallel_iteration_grid if parallel else _serial_iteration_grid
    return kernel(
        t_left.real,
        t_left.imag,
        viewport.get_width_per_pix(request.width),
        viewport.get_height_per_pix(request.width, request.height),
        request.height,
        request.width,
        request.variant.code,
        float(request.real),
        float(request.imaginary),
        request.max_iterations,
    )


def _iteration_grid(t_left_r, t_left_i, hor_step, ver_step, height, width, variant, param_r, param_i, max_iter):
    iterations_grid = np.zeros((height, width), dtype=np.int64)

    # rows are independent, each worker owns whole rows of the grid
    for y in prange(height):
        c_imag = t_left_i - y * ver_step
        for x in range(width):
            c_real = t_left_r + x * hor_step
            iterations_grid[y, x] = iterate_point(c_real, c_imag, param_r, param_i, variant, max_iter)

    return iterations_grid


_serial_iteration_grid = njit(nogil=True)(_iteration_grid)
_parallel_iteration_grid = njit(parallel=True, nogil=True)(_iteration_grid)


def render(request: RenderRequest, parallel: bool = True) -> PixelBuffer:
    """Render a request into a read-only RGBA buffer.

    The request is validated before anything is computed, so a failing call
    never produces a partial buffer.
    """
    request.validate()

    start = time.time()
    iterations = iteration_grid(request, parallel)
    colours = colourise(iterations, request.max_iterations, request.get_palette())
    data = np.ascontiguousarray(colours).reshape(-1)
    data.setflags(write=False)
    my_logger.info(
        f"{request.variant.name.lower()} {request.width}x{request.height} "
        f"took {round(time.time() - start, 3)} seconds"
    )
    return PixelBuffer(width=request.width, height=request.height, data=data)
