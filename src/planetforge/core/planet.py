"""Planet definition and the per-pixel generation pipeline."""
from __future__ import annotations

import logging
import math
import operator
import random
import time
import uuid
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from .coloring import EARTHLIKE, Color, ColoringScheme
from .compositor import Canvas, composite, with_coverage
from .config import RENDER_CFG
from .errors import InvalidParameter, NumericDegenerate
from .lighting import Light, shade
from .model import PlanetImage, SurfaceSample
from .noise import FieldSampler, Point3, as_uuid, sampler_for
from .projection import project
from .terrain import TerrainKind, classify_surface, normalize


logger = logging.getLogger(__name__)

# Noise value used when the field cannot be evaluated; lands in the lowest band.
FALLBACK_NOISE = -1.0


def _validate_size(size: object) -> int:
    if isinstance(size, bool):
        raise InvalidParameter(f"Image size must be a positive integer, got {size!r}")
    try:
        pixels = operator.index(size)
    except TypeError:
        raise InvalidParameter(f"Image size must be a positive integer, got {size!r}") from None
    if pixels <= 0:
        raise InvalidParameter(f"Image size must be positive, got {pixels}")
    return pixels


@dataclass(frozen=True)
class Planet:
    """
    Immutable description of a planet; rendering it never changes it.

    Attributes:
        seed: 128-bit seed, the only source of randomness for the terrain
        origin: Centre of the planet in world kilometres
        radius: Radius in kilometres
        colors: Coloring scheme (elevation bands, polar caps)
    """
    seed: uuid.UUID
    origin: tuple[float, float] = (0.0, 0.0)
    radius: float = 6_371.0
    colors: ColoringScheme = EARTHLIKE
    _sampler: FieldSampler = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "seed", as_uuid(self.seed))

        try:
            origin = tuple(float(c) for c in self.origin)
        except (TypeError, ValueError) as exc:
            raise InvalidParameter(f"Origin must be an (x, y) pair, got {self.origin!r}") from exc
        if len(origin) != 2 or not all(math.isfinite(c) for c in origin):
            raise InvalidParameter(f"Origin must be two finite numbers, got {self.origin!r}")
        object.__setattr__(self, "origin", origin)

        if isinstance(self.radius, bool) or not isinstance(self.radius, (int, float)):
            raise InvalidParameter(f"Radius must be a number, got {self.radius!r}")
        if not math.isfinite(self.radius) or self.radius <= 0.0:
            raise InvalidParameter(f"Radius must be positive and finite, got {self.radius!r}")
        object.__setattr__(self, "radius", float(self.radius))

        if not isinstance(self.colors, ColoringScheme):
            raise InvalidParameter(f"colors must be a ColoringScheme, got {type(self.colors).__name__}")
        object.__setattr__(self, "_sampler", sampler_for(self.seed))

    # =======================
    #   CONSTRUCTION HELPERS
    # =======================
    @staticmethod
    def calculate_origin(angle: float, distance: float) -> tuple[float, float]:
        """Origin of a planet ``distance`` km from the world origin at ``angle`` radians."""
        return (math.cos(angle) * distance, math.sin(angle) * distance)

    @classmethod
    def random(
        cls,
        *,
        origin: tuple[float, float] = (0.0, 0.0),
        radius: float = 6_371.0,
        colors: ColoringScheme = EARTHLIKE,
        rng: Optional[random.Random] = None,
    ) -> "Planet":
        """Planet with a fresh seed (``uuid4``, or drawn from ``rng`` for reproducibility)."""
        seed = uuid.UUID(int=rng.getrandbits(128)) if rng is not None else uuid.uuid4()
        return cls(seed=seed, origin=origin, radius=radius, colors=colors)

    # =======================
    #   PIXEL PIPELINE
    # =======================
    def terrain_at(self, normal: Point3) -> tuple[float, TerrainKind, Color]:
        """Noise value, terrain kind and unshaded color at a unit-sphere point."""
        try:
            noise = self._sampler.sample(normal)
        except NumericDegenerate:
            logger.debug("Degenerate noise at %r, using fallback", normal)
            noise = FALLBACK_NOISE
        kind = classify_surface(noise, normal, self.colors)
        return noise, kind, self.colors.color_for(kind, normalize(noise))

    def sample(
        self,
        row: int,
        col: int,
        size: int,
        light: Optional[Light] = None,
    ) -> SurfaceSample:
        """Run the full pipeline for one pixel of a ``size``×``size`` render."""
        projection = project(row, col, size, self.origin, self.radius)
        if not projection.on_sphere:
            return SurfaceSample(on_sphere=False)

        noise, kind, base = self.terrain_at(projection.normal)
        if light is None:
            factor = 1.0
            color = base
        else:
            factor = shade(projection.normal, light, projection.surface_point)
            color = composite(base, factor, light.color)
        if RENDER_CFG.edge_feather:
            color = with_coverage(color, projection.coverage)

        return SurfaceSample(
            on_sphere=True,
            normal=projection.normal,
            surface_point=projection.surface_point,
            noise=noise,
            kind=kind,
            base_color=base,
            shade=factor,
            color=color,
        )

    def _render_rows(self, canvas: Canvas, rows: range, light: Optional[Light]) -> Counter:
        stats: Counter = Counter()
        size = canvas.size
        for row in rows:
            for col in range(size):
                pixel = self.sample(row, col, size, light)
                if pixel.on_sphere:
                    canvas.put(row, col, pixel.color)
                    stats[pixel.kind] += 1
                else:
                    canvas.clear(row, col)
        return stats

    def generate(
        self,
        size: int,
        light: Optional[Light] = None,
        *,
        workers: Optional[int] = None,
    ) -> PlanetImage:
        """
        Render the planet into a new ``size``×``size`` RGBA image.

        Args:
            size: Width and height of the image in pixels
            light: Light source; None renders unshaded terrain colors
            workers: Worker threads (defaults to ``RENDER_CFG.workers``)

        Returns:
            A PlanetImage with the pixels and per-kind pixel counts

        Raises:
            InvalidParameter: If size is not a positive integer or light is not a Light
        """
        size = _validate_size(size)
        if light is not None and not isinstance(light, Light):
            raise InvalidParameter(f"light must be a Light or None, got {type(light).__name__}")
        workers = RENDER_CFG.workers if workers is None else workers
        if workers < 1:
            raise InvalidParameter(f"workers must be >= 1, got {workers}")

        start = time.perf_counter()
        canvas = Canvas(size)
        stripes = list(canvas.stripes(RENDER_CFG.rows_per_stripe))
        if workers == 1 or len(stripes) == 1:
            results = [self._render_rows(canvas, rows, light) for rows in stripes]
        else:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="planetforge") as pool:
                results = list(pool.map(lambda rows: self._render_rows(canvas, rows, light), stripes))

        totals: Counter = Counter()
        for stripe_stats in results:
            totals.update(stripe_stats)
        stats = {kind: totals[kind] for kind in TerrainKind if totals[kind]}

        logger.debug(
            "Generated %dx%d planet seed=%s in %.3fs (%d workers)",
            size,
            size,
            self.seed,
            time.perf_counter() - start,
            workers,
        )
        return PlanetImage(width=size, height=size, pixels=canvas.pixels, stats=stats)


__all__ = ["FALLBACK_NOISE", "Planet"]
