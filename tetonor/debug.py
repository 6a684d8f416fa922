"""
Debug Image Utilities

Functions for saving annotated images of a puzzle and its solve result,
and for managing debug output.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from tetonor.solver import GRID_SIZE, Operator, SolveResult, TetonorPuzzle

logger = logging.getLogger(__name__)

# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

# Layout (pixels)
GRID_COLS = 4
CELL_WIDTH = 120
CELL_HEIGHT = 64
SLOT_WIDTH = 36
SLOT_HEIGHT = 32
MARGIN = 12
HEADER_HEIGHT = 40

# Colors
ADD_COLOR = "green"
MULTIPLY_COLOR = "blue"
KNOWN_COLOR = "black"
FILLED_COLOR = "darkgreen"
MISSING_COLOR = "red"


def _load_fonts():
    """Try to load a TrueType font, fall back to the default bitmap font."""
    try:
        font = ImageFont.truetype("arial.ttf", 16)
        small_font = ImageFont.truetype("arial.ttf", 12)
    except OSError:
        font = ImageFont.load_default()
        small_font = font
    return font, small_font


def render_puzzle(puzzle: TetonorPuzzle, result: Optional[SolveResult] = None) -> Image.Image:
    """
    Draw the grid, the strip and, if solved, every cell's equation.

    Annotations include:
    - Grid value per cell, with its equation colored by operator
    - Strip slots: revealed in black, solver-filled in green, unknown "?"
    - Summary line with attempts and time when a result is given

    Args:
        puzzle: Puzzle to draw
        result: Solve result (can be None)

    Returns:
        RGB PIL Image
    """
    rows = GRID_SIZE // GRID_COLS
    grid_width = GRID_COLS * CELL_WIDTH
    strip_width = len(puzzle.strip) * SLOT_WIDTH
    width = max(grid_width, strip_width) + 2 * MARGIN
    height = HEADER_HEIGHT + rows * CELL_HEIGHT + SLOT_HEIGHT + 3 * MARGIN

    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)
    font, small_font = _load_fonts()

    solution = result if result is not None and result.found else None

    if result is None:
        header = "Unsolved"
    elif solution is not None:
        header = (f"Solved: {result.metrics.attempts} attempts, "
                  f"{result.metrics.computation_time_ms:.1f}ms")
    else:
        header = (f"Not found ({result.reason.value}): "
                  f"{result.metrics.attempts} attempts")
    draw.text((MARGIN, MARGIN), header, fill=KNOWN_COLOR, font=font)

    # Grid cells
    top = HEADER_HEIGHT
    for index, value in enumerate(puzzle.grid):
        row, col = divmod(index, GRID_COLS)
        x = MARGIN + col * CELL_WIDTH
        y = top + row * CELL_HEIGHT
        draw.rectangle([x, y, x + CELL_WIDTH - 4, y + CELL_HEIGHT - 4], outline="gray", width=1)
        draw.text((x + 8, y + 6), str(value), fill=KNOWN_COLOR, font=font)

        if solution is not None and index in solution.assignment:
            equation = solution.assignment[index]
            color = ADD_COLOR if equation.operator is Operator.ADD else MULTIPLY_COLOR
            draw.text((x + 8, y + 34), str(equation), fill=color, font=small_font)

    # Strip
    y = top + rows * CELL_HEIGHT + MARGIN
    for index, known in enumerate(puzzle.strip):
        x = MARGIN + index * SLOT_WIDTH
        draw.rectangle([x, y, x + SLOT_WIDTH - 2, y + SLOT_HEIGHT], outline="gray", width=1)

        if known is not None:
            text, color = str(known), KNOWN_COLOR
        elif solution is not None:
            text, color = str(solution.built_strip[index]), FILLED_COLOR
        else:
            text, color = "?", MISSING_COLOR
        draw.text((x + 6, y + 8), text, fill=color, font=small_font)

    return image


def save_debug_image(puzzle: TetonorPuzzle, result: Optional[SolveResult] = None,
                     path: Optional[Path] = None) -> Path:
    """
    Save an annotated debug image of a puzzle and its solve result.

    Args:
        puzzle: Puzzle to draw
        result: Solve result (can be None)
        path: Output file path (default: timestamped file in DEBUG_DIR)

    Returns:
        Path of the written PNG
    """
    if path is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        path = DEBUG_DIR / f"debug_{timestamp}.png"
    path = Path(path)

    # Ensure debug directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    image = render_puzzle(puzzle, result)
    image.save(path, "PNG")
    logger.debug(f"Debug image saved: {path}")

    # Cleanup old debug images
    _cleanup_debug_images(path.parent)
    return path


def _cleanup_debug_images(directory: Path) -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not directory.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        directory.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old debug image {old_file}: {e}")
