"""Analyze a recorded generation run and produce diagnostic figures."""
from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from planetforge.core.terrain import TerrainKind


logger = logging.getLogger(__name__)

RENDERS_FILENAME = "renders.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"

KIND_COLORS: Dict[TerrainKind, str] = {
    TerrainKind.DEEP_WATER: "#122c68",
    TerrainKind.SHALLOW_WATER: "#1e58a0",
    TerrainKind.BEACH: "#d6c48a",
    TerrainKind.LOWLAND: "#3e843a",
    TerrainKind.HIGHLAND: "#765c3c",
    TerrainKind.PEAK: "#9a9aa0",
    TerrainKind.POLAR_ICE: "#c8d8f0",
}


def load_renders(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {
            name: [] for name in reader.fieldnames or [] if name != "seed"
        }
        for row in reader:
            for key, value in row.items():
                if key is None or key == "seed":
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def resolve_run_dir(run_dir: str | Path | None, runs_root: Path) -> Path:
    """Find a run directory by path, by id under ``runs_root``, or via ``last_run.txt``."""
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = runs_root / str(run_dir)
    else:
        last_run_file = runs_root / "last_run.txt"
        if not last_run_file.exists():
            raise FileNotFoundError(f"No run given and {last_run_file} does not exist")
        run_path = runs_root / last_run_file.read_text(encoding="utf-8").strip()
    if not run_path.is_dir():
        raise FileNotFoundError(f"Run directory not found: {run_path}")
    return run_path


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def coverage_fractions(renders: Dict[str, np.ndarray]) -> Dict[TerrainKind, np.ndarray]:
    """Per-render fraction of planet pixels for every terrain kind."""
    counts = {
        kind: renders.get(kind.value, np.zeros(0)) for kind in TerrainKind
    }
    totals = np.sum([values for values in counts.values() if values.size], axis=0)
    totals = np.where(totals > 0, totals, 1.0)
    return {kind: values / totals for kind, values in counts.items() if values.size}


def plot_coverage(fig_dir: Path, renders: Dict[str, np.ndarray]) -> Path:
    fractions = coverage_fractions(renders)
    index = renders["index"]
    fig, ax = plt.subplots(figsize=(8, 4))
    bottom = np.zeros_like(index, dtype=float)
    for kind, values in fractions.items():
        ax.bar(index, values, bottom=bottom, color=KIND_COLORS[kind], label=kind.label, width=0.8)
        bottom += values
    ax.set_xlabel("Render")
    ax.set_ylabel("Share of planet pixels")
    ax.set_ylim(0.0, 1.0)
    ax.set_title("Terrain coverage per render")
    ax.legend(loc="upper left", bbox_to_anchor=(1.0, 1.0), fontsize="small")
    fig.tight_layout()
    out = fig_dir / "terrain_coverage.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def plot_render_time(fig_dir: Path, renders: Dict[str, np.ndarray]) -> Path:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.scatter(renders["size"], renders["elapsed"], color="#4dabf7")
    ax.set_xlabel("Resolution [px]")
    ax.set_ylabel("Render time [s]")
    ax.set_title("Render time per resolution")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    out = fig_dir / "render_time.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def summarize(meta: dict, renders: Dict[str, np.ndarray]) -> Dict[str, object]:
    fractions = coverage_fractions(renders)
    water = sum(
        (values for kind, values in fractions.items() if kind.is_water),
        np.zeros(renders["index"].size),
    )
    return {
        "renders": float(renders["index"].size),
        "mean_elapsed": float(np.mean(renders["elapsed"])),
        "mean_water_fraction": float(np.mean(water)) if water.size else 0.0,
        "scheme": meta.get("scheme", "unknown"),
    }


def analyze_run(run_dir: Path) -> tuple[Dict[str, object], List[Path]]:
    """Write the figures for ``run_dir`` and return a summary plus the figure paths."""
    meta_path = run_dir / META_FILENAME
    renders_path = run_dir / RENDERS_FILENAME
    if not renders_path.exists():
        raise FileNotFoundError(f"{run_dir} has no {RENDERS_FILENAME}")

    meta: dict = {}
    if meta_path.exists():
        with meta_path.open("r", encoding="utf-8") as fh:
            meta = json.load(fh)

    renders = load_renders(renders_path)
    if not renders or renders.get("index", np.zeros(0)).size == 0:
        raise ValueError(f"{renders_path} is empty, nothing to analyze")

    fig_dir = ensure_fig_dir(run_dir)
    figures = [plot_coverage(fig_dir, renders), plot_render_time(fig_dir, renders)]
    logger.info("Wrote %d figures to %s", len(figures), fig_dir)
    return summarize(meta, renders), figures


__all__ = [
    "analyze_run",
    "coverage_fractions",
    "load_renders",
    "plot_coverage",
    "plot_render_time",
    "resolve_run_dir",
    "summarize",
]
