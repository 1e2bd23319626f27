"""Coloring schemes: ordered elevation bands mapped to RGBA colors."""
from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

from .errors import InvalidParameter
from .terrain import ELEVATION_KINDS, TerrainKind


Color = tuple[int, int, int, int]

# Lightness steps inside a band; a stepped ramp keeps the pixel-art look.
BAND_STEPS = 3


def as_rgba(color: Sequence[int]) -> Color:
    """Validate an RGB or RGBA sequence of 0-255 ints and return RGBA."""
    values = tuple(color)
    if len(values) not in (3, 4):
        raise InvalidParameter(f"Color must have 3 or 4 components, got {values!r}")
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise InvalidParameter(f"Color components must be ints in 0-255, got {values!r}")
    if len(values) == 3:
        values = (*values, 255)
    return values  # type: ignore[return-value]


def _to_linear(channel: int) -> float:
    c = channel / 255.0
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _to_srgb(linear: float) -> int:
    linear = max(0.0, min(1.0, linear))
    if linear <= 0.0031308:
        c = linear * 12.92
    else:
        c = 1.055 * linear ** (1.0 / 2.4) - 0.055
    return int(c * 255.0 + 0.5)


def lighten(color: Color, amount: float) -> Color:
    """Lighten ``color`` by ``amount`` in linear light (negative darkens)."""
    if amount == 0.0:
        return color
    r, g, b, a = color
    return (
        _to_srgb(_to_linear(r) + amount),
        _to_srgb(_to_linear(g) + amount),
        _to_srgb(_to_linear(b) + amount),
        a,
    )


def lerp_color(start: Color, end: Color, t: float) -> Color:
    t = max(0.0, min(1.0, t))
    return tuple(int(s + (e - s) * t + 0.5) for s, e in zip(start, end))  # type: ignore[return-value]


@dataclass(frozen=True)
class ColorBand:
    """One elevation band: values below ``upper`` (and above the previous band) use ``color``."""
    upper: float
    color: Color
    kind: TerrainKind = TerrainKind.LOWLAND

    def __post_init__(self) -> None:
        if isinstance(self.upper, bool) or not isinstance(self.upper, (int, float)):
            raise InvalidParameter(f"Band threshold must be a number, got {self.upper!r}")
        if not math.isfinite(self.upper) or not 0.0 <= self.upper <= 1.0:
            raise InvalidParameter(f"Band threshold {self.upper!r} is outside [0, 1]")
        if not isinstance(self.kind, TerrainKind):
            raise InvalidParameter(f"Band kind must be a TerrainKind, got {self.kind!r}")
        object.__setattr__(self, "upper", float(self.upper))
        object.__setattr__(self, "color", as_rgba(self.color))


@dataclass(frozen=True)
class ColoringScheme:
    """
    Named, ordered set of elevation bands.

    Band ``i`` covers normalized values in ``[bands[i-1].upper, bands[i].upper)``;
    the first band starts at 0 and the last one is closed at 1, so every
    value in [0, 1] falls into exactly one band.

    Attributes:
        name: Display name of the scheme
        bands: Bands ordered by strictly increasing ``upper`` threshold
        blend: Width (normalized units) of the gradient drawn across band boundaries
        band_shading: Maximum linear-light lightening applied towards the top of a band
        polar_latitude: ``|y|`` on the unit sphere above which the surface is ice, or None
        polar_color: Color of the polar caps
        polar_jitter: How far the noise value moves the ice edge
    """
    name: str
    bands: tuple[ColorBand, ...]
    blend: float = 0.0
    band_shading: float = 0.1
    polar_latitude: Optional[float] = None
    polar_color: Color = (244, 248, 255, 255)
    polar_jitter: float = 0.06
    _uppers: tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidParameter("Coloring scheme needs a non-empty name")
        bands = tuple(self.bands)
        if not bands:
            raise InvalidParameter(f"Coloring scheme '{self.name}' has no bands")
        for band in bands:
            if not isinstance(band, ColorBand):
                raise InvalidParameter(f"Expected ColorBand, got {band!r}")
        uppers = tuple(band.upper for band in bands)
        for lower, upper in zip(uppers, uppers[1:]):
            if upper <= lower:
                raise InvalidParameter(
                    f"Band thresholds of '{self.name}' must increase strictly: {uppers!r}"
                )
        for name in ("blend", "band_shading", "polar_latitude", "polar_jitter"):
            value = getattr(self, name)
            if name == "polar_latitude" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameter(f"{name} of '{self.name}' must be a number, got {value!r}")
        if not 0.0 <= self.blend < 0.5:
            raise InvalidParameter(f"blend must be in [0, 0.5), got {self.blend!r}")
        if not 0.0 <= self.band_shading <= 1.0:
            raise InvalidParameter(f"band_shading must be in [0, 1], got {self.band_shading!r}")
        if self.polar_latitude is not None and not 0.0 < self.polar_latitude <= 1.0:
            raise InvalidParameter(
                f"polar_latitude must be in (0, 1] or None, got {self.polar_latitude!r}"
            )
        if not 0.0 <= self.polar_jitter < 1.0:
            raise InvalidParameter(f"polar_jitter must be in [0, 1), got {self.polar_jitter!r}")
        object.__setattr__(self, "bands", bands)
        object.__setattr__(self, "polar_color", as_rgba(self.polar_color))
        object.__setattr__(self, "_uppers", uppers)

    # ------------------------------------------------------------------
    #   lookup
    # ------------------------------------------------------------------
    def band_index(self, value: float) -> int:
        """Index of the band holding the normalized ``value``."""
        if not math.isfinite(value):
            return 0
        return min(bisect_right(self._uppers, value), len(self.bands) - 1)

    def band_bounds(self, index: int) -> tuple[float, float]:
        lower = self._uppers[index - 1] if index > 0 else 0.0
        upper = 1.0 if index == len(self.bands) - 1 else self._uppers[index]
        return lower, upper

    def classify(self, value: float) -> TerrainKind:
        return self.bands[self.band_index(value)].kind

    def _step_color(self, index: int, level: int) -> Color:
        amount = self.band_shading * level / (BAND_STEPS - 1)
        return lighten(self.bands[index].color, amount)

    def color_for(self, kind: TerrainKind, value: float) -> Color:
        """Return the base color for a normalized elevation ``value`` in [0, 1]."""
        if kind is TerrainKind.POLAR_ICE:
            return self.polar_color
        value = max(0.0, min(1.0, value)) if math.isfinite(value) else 0.0
        index = self.band_index(value)
        lower, upper = self.band_bounds(index)
        span = upper - lower
        t = (value - lower) / span if span > 0.0 else 0.0
        level = min(BAND_STEPS - 1, int(t * BAND_STEPS))
        color = self._step_color(index, level)

        if self.blend > 0.0:
            if index + 1 < len(self.bands) and value > upper - self.blend:
                weight = 0.5 * (value - (upper - self.blend)) / self.blend
                color = lerp_color(color, self._step_color(index + 1, 0), weight)
            elif index > 0 and value < lower + self.blend:
                weight = 0.5 * (1.0 - (value - lower) / self.blend)
                color = lerp_color(color, self._step_color(index - 1, BAND_STEPS - 1), weight)
        return color

    # ------------------------------------------------------------------
    #   plain-data conversion
    # ------------------------------------------------------------------
    @classmethod
    def from_pairs(
        cls,
        name: str,
        pairs: Iterable[Sequence[Any]],
        **options: Any,
    ) -> "ColoringScheme":
        """
        Build a scheme from ``(upper, color)`` or ``(upper, color, kind)`` items.

        Bands without a kind are spread over the elevation kinds in order,
        deep water first and peaks last.
        """
        items = list(pairs)
        bands = []
        for index, item in enumerate(items):
            if len(item) not in (2, 3):
                raise InvalidParameter(f"Band definition must be (upper, color[, kind]), got {item!r}")
            if len(item) == 3:
                kind = item[2] if isinstance(item[2], TerrainKind) else _parse_kind(item[2])
            else:
                kind = ELEVATION_KINDS[index * len(ELEVATION_KINDS) // len(items)]
            bands.append(ColorBand(upper=item[0], color=tuple(item[1]), kind=kind))
        return cls(name=name, bands=tuple(bands), **options)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "bands": [
                {"upper": band.upper, "color": list(band.color), "kind": band.kind.value}
                for band in self.bands
            ],
            "blend": self.blend,
            "band_shading": self.band_shading,
            "polar_latitude": self.polar_latitude,
            "polar_color": list(self.polar_color),
            "polar_jitter": self.polar_jitter,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColoringScheme":
        try:
            bands = [
                (band["upper"], band["color"], band.get("kind")) if band.get("kind")
                else (band["upper"], band["color"])
                for band in data["bands"]
            ]
            options = {
                key: data[key]
                for key in ("blend", "band_shading", "polar_latitude", "polar_jitter")
                if key in data
            }
            if "polar_color" in data:
                options["polar_color"] = tuple(data["polar_color"])
            return cls.from_pairs(data["name"], bands, **options)
        except (KeyError, TypeError) as exc:
            raise InvalidParameter(f"Malformed coloring scheme definition: {exc}") from exc


def _parse_kind(value: object) -> TerrainKind:
    try:
        return TerrainKind(value)
    except ValueError:
        try:
            return TerrainKind[str(value).upper()]
        except KeyError:
            raise InvalidParameter(f"Unknown terrain kind {value!r}") from None


EARTHLIKE = ColoringScheme(
    name="earthlike",
    bands=(
        ColorBand(0.43, (18, 44, 104), TerrainKind.DEEP_WATER),
        ColorBand(0.50, (30, 88, 160), TerrainKind.SHALLOW_WATER),
        ColorBand(0.52, (214, 196, 138), TerrainKind.BEACH),
        ColorBand(0.60, (62, 132, 58), TerrainKind.LOWLAND),
        ColorBand(0.68, (118, 92, 60), TerrainKind.HIGHLAND),
        ColorBand(1.00, (232, 232, 236), TerrainKind.PEAK),
    ),
    blend=0.0,
    band_shading=0.1,
    polar_latitude=0.86,
)


def earthlike() -> ColoringScheme:
    """Ocean blues, green and brown land, white peaks and polar caps."""
    return EARTHLIKE


__all__ = [
    "BAND_STEPS",
    "Color",
    "ColorBand",
    "ColoringScheme",
    "EARTHLIKE",
    "as_rgba",
    "earthlike",
    "lerp_color",
    "lighten",
]
