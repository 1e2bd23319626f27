"""Orthographic projection of output pixels onto the planet sphere."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .noise import Point3


@dataclass(frozen=True)
class Projection:
    """Where a single output pixel lands on the sphere.

    Attributes:
        on_sphere: True when the pixel centre lies inside the silhouette
        x: Horizontal offset from the disc centre in screen radii (+X right)
        y: Vertical offset from the disc centre in screen radii (+Y up)
        normal: Unit surface normal, equal to the unit-sphere point (+Z faces the viewer)
        surface_point: The same point in world kilometres
        coverage: Fraction of the pixel covered by the disc, used to feather the edge
    """
    on_sphere: bool
    x: float
    y: float
    normal: Point3 = (0.0, 0.0, 0.0)
    surface_point: Point3 = (0.0, 0.0, 0.0)
    coverage: float = 0.0


def _off_sphere(x: float, y: float) -> Projection:
    return Projection(on_sphere=False, x=x, y=y)


def project(
    row: int,
    col: int,
    size: int,
    origin: tuple[float, float],
    radius: float,
) -> Projection:
    """Project pixel ``(row, col)`` of a ``size``×``size`` image onto the sphere.

    The disc fills the image: its screen radius is ``size / 2`` and pixel
    centres sit at half-integer positions, so every resolution samples the
    same logical unit-sphere coordinates.
    """
    half = size / 2.0
    x = (col + 0.5 - half) / half
    y = (half - (row + 0.5)) / half
    rho2 = x * x + y * y
    if not math.isfinite(rho2) or rho2 > 1.0:
        return _off_sphere(x, y)

    z = math.sqrt(max(0.0, 1.0 - rho2))
    surface_point = (origin[0] + x * radius, origin[1] + y * radius, z * radius)
    if not all(math.isfinite(c) for c in surface_point):
        return _off_sphere(x, y)

    # Distance to the edge in pixels; the outermost pixel ring fades out.
    edge_distance = (1.0 - math.sqrt(rho2)) * half
    coverage = min(1.0, edge_distance + 0.5)
    return Projection(
        on_sphere=True,
        x=x,
        y=y,
        normal=(x, y, z),
        surface_point=surface_point,
        coverage=coverage,
    )


def latitude(normal: Point3) -> float:
    """Latitude in radians of a unit normal, with the poles at ±Y."""
    return math.asin(max(-1.0, min(1.0, normal[1])))


__all__ = ["Projection", "latitude", "project"]
