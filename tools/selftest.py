#!/usr/bin/env python3
"""
Batch self-test: generate seeded puzzles, solve each one, and check every
solution with the player-input validator.

Usage:
    python tools/selftest.py [count] [difficulty] [max_attempts]

Examples:
    python tools/selftest.py                 # 20 medium puzzles
    python tools/selftest.py 50 hard 200000
"""

import sys
import time
from collections import Counter
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tetonor.generator import generate
from tetonor.solver import DEFAULT_MAX_ATTEMPTS, solve_puzzle
from tetonor.validator import inputs_from_solution, validate


def run_batch(count: int, difficulty: str, max_attempts: int) -> Counter:
    """
    Solve `count` puzzles with seeds 0..count-1.

    Returns:
        Counter of outcomes: "found", "exhausted", "budget", "invalid"
    """
    outcomes: Counter = Counter()

    for seed in range(count):
        puzzle = generate(seed=seed, difficulty=difficulty)
        start = time.perf_counter()
        result = solve_puzzle(puzzle, max_attempts=max_attempts)
        elapsed = (time.perf_counter() - start) * 1000

        if result.found:
            strip_inputs, grid_inputs = inputs_from_solution(puzzle, result)
            check = validate(puzzle, strip_inputs, grid_inputs)
            # Another valid decomposition may fill hidden slots differently
            same_strip = result.built_strip == puzzle.solution.strip
            status = "found" if check.success or not same_strip else "invalid"
        else:
            status = result.reason.value

        outcomes[status] += 1
        print(f"  seed {seed:3d}: {status:9s} attempts={result.metrics.attempts:6d} "
              f"candidates={result.metrics.candidates_found:3d} time={elapsed:.1f}ms")

    return outcomes


def main():
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 20
    difficulty = sys.argv[2] if len(sys.argv) > 2 else "medium"
    max_attempts = int(sys.argv[3]) if len(sys.argv) > 3 else DEFAULT_MAX_ATTEMPTS

    print(f"\n{'='*60}")
    print(f"Self-test: {count} {difficulty} puzzles, budget {max_attempts}")
    print('='*60)

    outcomes = run_batch(count, difficulty, max_attempts)

    print(f"\n{'='*60}")
    print("SUMMARY")
    print('='*60)
    for status in ("found", "exhausted", "budget", "invalid"):
        print(f"  {status}: {outcomes[status]}")

    # A generated puzzle always has a decomposition
    return 1 if outcomes["invalid"] or outcomes["exhausted"] else 0


if __name__ == "__main__":
    sys.exit(main())
