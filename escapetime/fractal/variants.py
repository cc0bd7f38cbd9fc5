from enum import Enum
from typing import Union

from escapetime.utils.fractal_utils import my_logger


class FractalVariant(Enum):
    # values double as the codes understood by the compiled kernels
    MANDELBROT = 0
    JULIA = 1
    BURNING_SHIP = 2

    @property
    def code(self) -> int:
        return self.value

    @property
    def uses_parameter(self) -> bool:
        """Only the Julia family iterates with the caller supplied constant."""
        return self is FractalVariant.JULIA

    @classmethod
    def default(cls) -> "FractalVariant":
        return cls.JULIA

    @classmethod
    def from_selector(cls, selector: Union[str, "FractalVariant", None]) -> "FractalVariant":
        """Resolve a selector string, falling back to the default variant.

        Matching ignores case and surrounding whitespace. Unknown selectors,
        including the empty string, are not an error: they resolve to
        ``FractalVariant.default()``.
        """
        if isinstance(selector, cls):
            return selector
        key = selector.strip().lower() if isinstance(selector, str) else ""
        variant = SELECTORS.get(key)
        if variant is None:
            variant = cls.default()
            my_logger.debug(f"unknown fractal selector {selector!r}, drawing {variant.name.lower()}")
        return variant


SELECTORS = {
    "julia": FractalVariant.JULIA,
    "mandel": FractalVariant.MANDELBROT,
    "mandelbrot": FractalVariant.MANDELBROT,
    "ship": FractalVariant.BURNING_SHIP,
    "burning_ship": FractalVariant.BURNING_SHIP,
    "burning-ship": FractalVariant.BURNING_SHIP,
    "burningship": FractalVariant.BURNING_SHIP,
}
