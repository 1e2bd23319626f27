"""Logging helpers: stdlib logging setup and a CSV recorder for generation runs."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .model import PlanetImage
from .terrain import TerrainKind


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int = 0) -> None:
    """Configure root logging; 0 = warnings, 1 = info, 2+ = debug."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


class RunLogger:
    """Buffered logger that stores every generated image of a run to CSV."""

    RENDERS_HEADER = [
        "index",
        "seed",
        "size",
        "elapsed",
        "opaque_pixels",
        *(kind.value for kind in TerrainKind),
    ]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        def make_candidate(suffix: Optional[int] = None) -> str:
            base = run_id or f"{timestamp}_run"
            if suffix is None:
                return base
            if run_id:
                return f"{run_id}_{suffix}"
            return f"{base}_{suffix:02d}"

        candidate_id = make_candidate()
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = make_candidate(suffix)
            suffix += 1

        self.run_id = candidate_id
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.renders_path = self.run_dir / "renders.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._file = self.renders_path.open("w", newline="")
        self._file.write(",".join(self.RENDERS_HEADER) + "\n")
        self._buffer: list[str] = []
        self._threshold = max(1, flush_threshold)
        self._count = 0

        last_run_marker = self.root_dir / "last_run.txt"
        last_run_marker.write_text(self.run_id, encoding="utf-8")

    @property
    def count(self) -> int:
        return self._count

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True, default=str)

    def log_render(self, seed: object, image: PlanetImage, elapsed: float) -> None:
        values: list[object] = [
            self._count,
            seed,
            image.width,
            elapsed,
            image.opaque_pixels,
            *(image.stats.get(kind, 0) for kind in TerrainKind),
        ]
        self._buffer.append(",".join(self._format_value(v) for v in values))
        self._count += 1
        if len(self._buffer) >= self._threshold:
            self._flush()

    def close(self) -> None:
        self._flush()
        self._file.close()

    def _flush(self) -> None:
        if self._buffer:
            self._file.write("\n".join(self._buffer) + "\n")
            self._file.flush()
            self._buffer.clear()

    @staticmethod
    def _format_value(value: object) -> str:
        if isinstance(value, float):
            return f"{value:.6g}"
        return str(value)

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["LOG_FORMAT", "RunLogger", "configure_logging"]
