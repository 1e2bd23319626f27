"""Configuration dataclasses for planet generation."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class NoiseCfg:
    # Changing any of these changes every planet ever generated from a seed.
    octaves: int = 5
    base_frequency: float = 1.75
    persistence: float = 0.5
    lacunarity: float = 2.0
    lattice_period: float = 65_536.0


@dataclass(frozen=True)
class RenderCfg:
    default_size: int = 128
    workers: int = min(8, os.cpu_count() or 1)
    rows_per_stripe: int = 8
    default_ambient: float = 0.12
    default_limb_darkening: float = 0.25
    edge_feather: bool = True
    background_color: tuple[int, int, int] = (4, 8, 20)


@dataclass(frozen=True)
class CliCfg:
    default_output: Path = Path("output.png")
    default_resolution: int = 128
    default_distance_km: float = 150_200_000.0
    default_radius_km: float = 6_371.0
    default_angle_rad: float = -2.35619
    default_scheme: str = "earthlike"
    runs_dir: Path = Path("data") / "runs"
    viewer_window_size: tuple[int, int] = (800, 800)


NOISE_CFG = NoiseCfg()
RENDER_CFG = RenderCfg()
CLI_CFG = CliCfg()


__all__ = ["CLI_CFG", "NOISE_CFG", "RENDER_CFG", "CliCfg", "NoiseCfg", "RenderCfg"]
