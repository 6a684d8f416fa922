"""
Solution Context Module - Per-call inputs and limits for strategy execution.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .puzzle import TetonorPuzzle

# Full-combination checks allowed per solve call
DEFAULT_MAX_ATTEMPTS = 50_000


@dataclass
class SolutionContext:
    """
    Context passed to strategies containing the puzzle, the attempt
    budget, cancellation, and progress reporting.

    The context is owned by one solve call; strategies keep their search
    state on the call stack, never here.

    Attributes:
        puzzle: Puzzle to solve
        max_attempts: Maximum full 8-pair combinations to evaluate
        cancel_flag: Threading event the caller may set to stop early
        timeout_sec: Optional wall-clock limit in seconds
        start_time: When computation started
        progress_callback: Optional callback for progress updates
    """
    puzzle: TetonorPuzzle
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None

    def __post_init__(self):
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {self.max_attempts}")

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            return True
        return False

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

    def elapsed_time(self) -> float:
        """Seconds elapsed since computation started."""
        return time.time() - self.start_time
