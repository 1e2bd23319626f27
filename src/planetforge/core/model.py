"""Data models passed between the generation pipeline and its callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pygame

from .coloring import Color
from .noise import Point3
from .terrain import TerrainKind


@dataclass(frozen=True)
class SurfaceSample:
    """Everything computed for one output pixel."""

    on_sphere: bool
    normal: Point3 = (0.0, 0.0, 0.0)
    surface_point: Point3 = (0.0, 0.0, 0.0)
    noise: float = 0.0
    kind: TerrainKind | None = None
    base_color: Color | None = None
    shade: float = 1.0
    color: Color = (0, 0, 0, 0)


@dataclass
class PlanetImage:
    """RGBA raster returned by ``Planet.generate``; owned by the caller."""

    width: int
    height: int
    pixels: np.ndarray
    stats: dict[TerrainKind, int] = field(default_factory=dict)

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    @property
    def opaque_pixels(self) -> int:
        return int(np.count_nonzero(self.alpha))

    def coverage(self) -> dict[TerrainKind, float]:
        """Fraction of the planet's pixels per terrain kind."""
        total = sum(self.stats.values())
        if total == 0:
            return {}
        return {kind: count / total for kind, count in self.stats.items()}

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_surface(self) -> pygame.Surface:
        surface = pygame.image.frombuffer(self.to_bytes(), (self.width, self.height), "RGBA")
        return surface.copy()

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        if path.parent != Path("."):
            path.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(self.to_surface(), path.as_posix())
        return path


__all__ = ["PlanetImage", "SurfaceSample"]
