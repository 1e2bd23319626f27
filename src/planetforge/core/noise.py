"""Seeded, stateless terrain noise.

Every planet owns a :class:`FieldSampler` keyed by its UUID seed. A sampler
holds one OpenSimplex generator per octave; the generators are built once
and never mutated, so sampling is a pure function of ``(seed, point)`` and
can run from any number of threads in any order.
"""
from __future__ import annotations

import hashlib
import math
import uuid
from functools import lru_cache
from typing import Sequence

from opensimplex import OpenSimplex

from .config import NOISE_CFG, NoiseCfg
from .errors import InvalidParameter, NumericDegenerate


Point3 = tuple[float, float, float]


def as_uuid(seed: object) -> uuid.UUID:
    """Coerce a UUID, UUID string, 16 raw bytes or a 128-bit int to a UUID."""
    if isinstance(seed, uuid.UUID):
        return seed
    try:
        if isinstance(seed, str):
            return uuid.UUID(seed)
        if isinstance(seed, (bytes, bytearray)):
            return uuid.UUID(bytes=bytes(seed))
        if isinstance(seed, int) and not isinstance(seed, bool):
            return uuid.UUID(int=seed)
    except ValueError as exc:
        raise InvalidParameter(f"Invalid seed {seed!r}: {exc}") from exc
    raise InvalidParameter(f"Seed must be a UUID, str, bytes or int, not {type(seed).__name__}")


def derive_octave_seed(seed: uuid.UUID, octave: int) -> int:
    """Stable 63-bit generator seed for one octave of ``seed``."""
    digest = hashlib.blake2b(
        seed.bytes,
        digest_size=8,
        person=f"octave{octave:02d}".encode("ascii"),
    ).digest()
    return int.from_bytes(digest, "big") >> 1


def _wrap(value: float, period: float) -> float:
    return math.fmod(value, period)


class FieldSampler:
    """Fractal (fBm) OpenSimplex field for a single seed."""

    def __init__(self, seed: object, cfg: NoiseCfg = NOISE_CFG) -> None:
        self.seed = as_uuid(seed)
        self.cfg = cfg
        self._octaves = tuple(
            OpenSimplex(seed=derive_octave_seed(self.seed, index))
            for index in range(cfg.octaves)
        )
        amplitude = 1.0
        total = 0.0
        for _ in range(cfg.octaves):
            total += amplitude
            amplitude *= cfg.persistence
        self._amplitude_sum = total

    def sample(self, point: Sequence[float]) -> float:
        """Return the field value at ``point`` in [-1, 1].

        Raises:
            NumericDegenerate: if the point has a NaN or infinite component.
        """
        x, y, z = (float(c) for c in point)
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            raise NumericDegenerate(f"Cannot sample noise at non-finite point {(x, y, z)!r}")

        cfg = self.cfg
        period = cfg.lattice_period
        x, y, z = _wrap(x, period), _wrap(y, period), _wrap(z, period)
        frequency = cfg.base_frequency
        amplitude = 1.0
        value = 0.0
        for generator in self._octaves:
            value += amplitude * generator.noise3(x * frequency, y * frequency, z * frequency)
            frequency *= cfg.lacunarity
            amplitude *= cfg.persistence

        value /= self._amplitude_sum
        if not math.isfinite(value):
            raise NumericDegenerate(f"Noise evaluated to {value!r} at {(x, y, z)!r}")
        return max(-1.0, min(1.0, value))

    def __repr__(self) -> str:
        return f"FieldSampler(seed={self.seed}, octaves={self.cfg.octaves})"


@lru_cache(maxsize=64)
def sampler_for(seed: uuid.UUID) -> FieldSampler:
    return FieldSampler(seed)


def sample(seed: object, point: Sequence[float]) -> float:
    """Sample the terrain field of ``seed`` at ``point`` (see :class:`FieldSampler`)."""
    return sampler_for(as_uuid(seed)).sample(point)


__all__ = ["FieldSampler", "Point3", "as_uuid", "derive_octave_seed", "sample", "sampler_for"]
