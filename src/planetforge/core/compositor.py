"""Final pixel compositing into the RGBA output buffer."""
from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from .coloring import Color


TRANSPARENT: Color = (0, 0, 0, 0)
WHITE = (255, 255, 255)


def composite(base: Color, factor: float, tint: Sequence[int] = WHITE) -> Color:
    """Scale the RGB channels of ``base`` by ``factor`` and the light tint; alpha is kept."""
    factor = max(0.0, min(1.0, factor))
    r, g, b, a = base
    return (
        int(r * factor * tint[0] / 255.0),
        int(g * factor * tint[1] / 255.0),
        int(b * factor * tint[2] / 255.0),
        a,
    )


def with_coverage(color: Color, coverage: float) -> Color:
    """Scale alpha by the fraction of the pixel the disc covers (edge feathering)."""
    if coverage >= 1.0:
        return color
    alpha = max(1, int(color[3] * max(0.0, coverage)))
    return (color[0], color[1], color[2], alpha)


class Canvas:
    """Square RGBA buffer written one pixel at a time."""

    def __init__(self, size: int) -> None:
        self.size = size
        self.pixels = np.zeros((size, size, 4), dtype=np.uint8)

    def put(self, row: int, col: int, color: Color) -> None:
        self.pixels[row, col] = color

    def clear(self, row: int, col: int) -> None:
        self.pixels[row, col] = TRANSPARENT

    def stripes(self, rows_per_stripe: int) -> Iterator[range]:
        """Disjoint row ranges covering the canvas, top to bottom."""
        step = max(1, rows_per_stripe)
        for start in range(0, self.size, step):
            yield range(start, min(start + step, self.size))


__all__ = ["Canvas", "TRANSPARENT", "WHITE", "composite", "with_coverage"]
