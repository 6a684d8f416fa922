"""
Tests for debug image rendering.

Usage:
    pytest tests/test_debug.py
"""

import sys
from pathlib import Path

import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tetonor import debug
from tetonor.debug import render_puzzle, save_debug_image
from tetonor.solver import sample_puzzle, solve_puzzle


def test_render_unsolved_puzzle():
    """An unsolved puzzle still renders grid and strip."""
    image = render_puzzle(sample_puzzle())

    assert image.mode == "RGB"
    assert image.size[0] >= 16 * debug.SLOT_WIDTH


def test_save_solved_puzzle(tmp_path):
    """A solved puzzle is written as a PNG of the rendered size."""
    puzzle = sample_puzzle()
    result = solve_puzzle(puzzle)

    path = save_debug_image(puzzle, result, tmp_path / "debug_sample.png")

    assert path.exists()
    with Image.open(path) as saved:
        assert saved.format == "PNG"
        assert saved.size == render_puzzle(puzzle, result).size


def test_save_not_found_result(tmp_path):
    """A budget result renders with its reason."""
    puzzle = sample_puzzle()
    result = solve_puzzle(puzzle, max_attempts=0)

    path = save_debug_image(puzzle, result, tmp_path / "debug_budget.png")
    assert path.exists()


def test_old_debug_images_are_removed(tmp_path, monkeypatch):
    """Only the newest MAX_DEBUG_IMAGES files are kept."""
    monkeypatch.setattr(debug, "MAX_DEBUG_IMAGES", 2)
    puzzle = sample_puzzle()

    for i in range(4):
        save_debug_image(puzzle, None, tmp_path / f"debug_{i}.png")

    assert len(list(tmp_path.glob("debug_*.png"))) == 2


def test_default_path_uses_debug_dir(tmp_path, monkeypatch):
    """Without a path, images land in DEBUG_DIR with a timestamped name."""
    monkeypatch.setattr(debug, "DEBUG_DIR", tmp_path / "debug")

    path = save_debug_image(sample_puzzle())

    assert path.parent == tmp_path / "debug"
    assert path.name.startswith("debug_")
    assert path.exists()


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
