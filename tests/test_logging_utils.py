import csv
import json
import logging
import uuid

import pytest

from planetforge.analyze import analyze_run, coverage_fractions, load_renders, resolve_run_dir
from planetforge.core.logging_utils import RunLogger, configure_logging
from planetforge.core.planet import Planet
from planetforge.core.terrain import TerrainKind


@pytest.fixture(scope="module")
def small_image():
    return Planet(seed=uuid.UUID(int=3)).generate(12)


def test_run_logger_writes_csv_meta_and_marker(tmp_path, small_image):
    with RunLogger(tmp_path, run_id="demo", flush_threshold=2) as run_logger:
        run_logger.write_meta({"scheme": "earthlike", "path": tmp_path})
        for _ in range(3):
            run_logger.log_render(uuid.UUID(int=3), small_image, 0.25)
        assert run_logger.count == 3

    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "demo"
    meta = json.loads((tmp_path / "demo" / "meta.json").read_text(encoding="utf-8"))
    assert meta["scheme"] == "earthlike"

    with (tmp_path / "demo" / "renders.csv").open(newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 3
    assert [row["index"] for row in rows] == ["0", "1", "2"]
    first = rows[0]
    assert first["seed"] == str(uuid.UUID(int=3))
    assert int(first["opaque_pixels"]) == small_image.opaque_pixels
    kind_total = sum(int(first[kind.value]) for kind in TerrainKind)
    assert kind_total == small_image.opaque_pixels


def test_run_ids_are_unique(tmp_path):
    first = RunLogger(tmp_path, run_id="same")
    second = RunLogger(tmp_path, run_id="same")
    first.close()
    second.close()
    assert first.run_dir != second.run_dir
    assert second.run_id == "same_1"
    assert (tmp_path / "last_run.txt").read_text(encoding="utf-8") == "same_1"


def test_configure_logging_levels(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs["level"]))
    for verbosity in (0, 1, 2, 5):
        configure_logging(verbosity)
    assert calls == [logging.WARNING, logging.INFO, logging.DEBUG, logging.DEBUG]


# ===== ANALYSIS =====

@pytest.fixture
def recorded_run(tmp_path, small_image):
    with RunLogger(tmp_path, run_id="analysis") as run_logger:
        run_logger.write_meta({"scheme": "earthlike"})
        run_logger.log_render(uuid.UUID(int=3), small_image, 0.1)
        run_logger.log_render(uuid.UUID(int=4), small_image, 0.3)
    return run_logger.run_dir


def test_load_renders_and_fractions(recorded_run):
    renders = load_renders(recorded_run / "renders.csv")
    assert "seed" not in renders
    assert list(renders["index"]) == [0.0, 1.0]
    fractions = coverage_fractions(renders)
    totals = sum(fractions.values())
    assert list(totals) == pytest.approx([1.0, 1.0])


def test_analyze_run_writes_figures(recorded_run):
    summary, figures = analyze_run(recorded_run)
    assert summary["renders"] == 2
    assert summary["mean_elapsed"] == pytest.approx(0.2)
    assert summary["scheme"] == "earthlike"
    assert 0.0 <= summary["mean_water_fraction"] <= 1.0
    assert [fig.name for fig in figures] == ["terrain_coverage.png", "render_time.png"]
    assert all(fig.exists() for fig in figures)


def test_resolve_run_dir(recorded_run, tmp_path):
    assert resolve_run_dir(None, tmp_path) == recorded_run
    assert resolve_run_dir("analysis", tmp_path) == recorded_run
    assert resolve_run_dir(str(recorded_run), tmp_path / "elsewhere") == recorded_run
    with pytest.raises(FileNotFoundError):
        resolve_run_dir("missing", tmp_path)
    with pytest.raises(FileNotFoundError):
        resolve_run_dir(None, tmp_path / "empty")


def test_analyze_empty_run(tmp_path):
    RunLogger(tmp_path, run_id="empty").close()
    with pytest.raises(ValueError):
        analyze_run(tmp_path / "empty")
