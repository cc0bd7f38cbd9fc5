from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from escapetime.fractal.assembler import render
from escapetime.fractal.colouring import Palette
from escapetime.fractal.request import PixelBuffer, RenderRequest
from escapetime.fractal.variants import FractalVariant
from escapetime.utils.fractal_utils import Viewport


def draw(
    width: int,
    height: int,
    variant_selector: Optional[str],
    real: float,
    imaginary: float,
    cutoff: int,
    *,
    palette: Optional[Palette] = None,
    viewport: Optional[Viewport] = None,
    parallel: bool = True,
) -> PixelBuffer:
    """Render a fractal and return its RGBA pixels.

    ``variant_selector`` never fails to resolve: unknown or empty selectors
    draw the Julia set. Invalid dimensions or cutoffs raise ``InvalidDimension``
    or ``InvalidCutoff`` before any work is done.
    """
    request = RenderRequest(
        width=width,
        height=height,
        variant=FractalVariant.from_selector(variant_selector),
        real=real,
        imaginary=imaginary,
        max_iterations=cutoff,
        palette=palette,
        viewport=viewport or Viewport(),
    )
    return render(request, parallel)


@dataclass()
class Node:
    request: RenderRequest
    output: PixelBuffer
    parent: "Node"
    children: List["Node"] = field(default_factory=list)


class RenderController:
    def __init__(self, parallel: bool = True):
        self.history: Node = None
        self.parallel = parallel

    def push(self, request: RenderRequest, output: PixelBuffer):
        node = Node(request, output, self.history)
        if self.history is not None:
            self.history.children.append(node)
        self.history = node

    def back(self) -> Optional[Tuple[RenderRequest, PixelBuffer]]:
        if self.history is None:
            return
        prev = self.history.parent
        if prev is not None:
            self.history = prev
            return prev.request, prev.output

    def next(self) -> Optional[Tuple[RenderRequest, PixelBuffer]]:
        if self.history is not None and self.history.children:
            self.history = self.history.children[-1]
            return self.history.request, self.history.output

    def reset(self) -> Optional[Tuple[RenderRequest, PixelBuffer]]:
        pop = None
        temp = self.back()
        while temp is not None:
            pop = temp
            temp = self.back()
        return pop

    def compute(self, request: RenderRequest) -> PixelBuffer:
        output = render(request, self.parallel)
        self.push(request, output)
        return output
