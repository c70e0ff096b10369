from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Sequence

from analyze import Analysis, analyze_maze, solve_maze
from config import SETTINGS, Settings
from maze import Maze, add_link, create_maze
from rng import Mulberry32, RandomSource, random_index, random_seed, system_random

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    maze: Maze
    completed: bool
    iterations: int


@dataclass
class LongMazeResult:
    maze: Maze | None
    length: int
    seed_packet: list[int]
    trials: int = 0
    history: list[int] = field(default_factory=list)


class _Progress:
    """Throttled INFO lines for long generations."""

    def __init__(self, total: int, interval: float):
        self.total = total
        self.interval = interval
        self.started = time.monotonic()
        self.last_print: float | None = None

    def update(self, remaining: int) -> None:
        now = time.monotonic()
        if self.last_print is not None and now - self.last_print < self.interval and remaining:
            return
        done = self.total - remaining
        percent = 100.0 * done / self.total if self.total else 100.0
        elapsed = now - self.started
        eta = remaining * elapsed / done if done and elapsed > 0 else 0.0
        logger.info(
            "%.1f%% complete | %d boundaries remaining | ETA %.1fs",
            percent,
            remaining,
            eta,
        )
        self.last_print = now


def generate_maze(
    width: int | None = None,
    height: int | None = None,
    *,
    initial_maze: Maze | None = None,
    max_iterations: int | None = None,
    seed_packet: Sequence[int] | None = None,
    rng: RandomSource | None = None,
    report_progress: bool = False,
    settings: Settings = SETTINGS,
) -> GenerationResult:
    """Link random boundary pairs until the maze is one connected group.

    Each step consumes the last remaining seed of seed_packet, so the final
    element governs the first step. Once the packet is empty the ambient rng
    takes over. The caller's initial_maze is never modified.
    """
    if initial_maze is not None:
        maze = initial_maze.clone()
    elif width is None or height is None:
        raise ValueError("generate_maze needs width and height or an initial_maze")
    else:
        maze = create_maze(width, height)
    if max_iterations is not None and max_iterations < 0:
        raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")

    ambient = rng if rng is not None else system_random()
    seeds = list(seed_packet or [])

    analysis = analyze_maze(maze)
    progress = _Progress(len(analysis.boundaries), settings.progress_interval) if report_progress else None
    iterations = 0

    while analysis.boundaries and (max_iterations is None or iterations < max_iterations):
        source = Mulberry32(seeds.pop()) if seeds else ambient
        boundary = analysis.boundaries[random_index(source, len(analysis.boundaries))]
        add_link(maze, boundary.a, boundary.b)
        iterations += 1
        analysis = analyze_maze(maze)
        if progress is not None:
            progress.update(len(analysis.boundaries))

    return GenerationResult(maze=maze, completed=_is_complete(analysis), iterations=iterations)


def _is_complete(analysis: Analysis) -> bool:
    if analysis.boundaries:
        return False
    if not analysis.connected:
        # Only possible when the cell set has holes that split the grid.
        logger.warning(
            "No boundaries left but %d groups remain; stopping generation",
            len(analysis.groups),
        )
        return False
    return True


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def generate_long_maze(
    width: int,
    height: int,
    iterations: int = SETTINGS.default_iterations,
    divisions: int = SETTINGS.default_divisions,
    *,
    rng: RandomSource | None = None,
    settings: Settings = SETTINGS,
) -> LongMazeResult:
    """Coordinate ascent over a seed packet, keeping the longest solution found.

    Every anchor index is bumped by one, iterations times, and the resulting
    packet regenerates a maze from scratch. Anchors are visited from index 0
    upward, and index 0 is the seed the generator consumes last.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")
    if divisions < 1:
        raise ValueError(f"divisions must be at least 1, got {divisions}")
    ambient = rng if rng is not None else system_random()

    packet_length = width * height
    seed_packet = [random_seed(ambient, settings.seed_ceiling) for _ in range(packet_length)]
    best = LongMazeResult(maze=None, length=0, seed_packet=list(seed_packet))

    step = max(1, _round_half_up(packet_length / divisions))
    for anchor in range(0, packet_length, step):
        for _ in range(iterations):
            seed_packet[anchor] += 1
            result = generate_maze(width, height, seed_packet=list(seed_packet), rng=ambient, settings=settings)
            solution = solve_maze(result.maze)
            best.trials += 1
            if solution.solved and solution.length > best.length:
                logger.debug(
                    "Anchor %d: path length %d -> %d", anchor, best.length, solution.length
                )
                best.maze = result.maze
                best.length = solution.length
                best.seed_packet = list(seed_packet)
            best.history.append(best.length)

    logger.info(
        "Longest path for %dx%d after %d trials: %d", width, height, best.trials, best.length
    )
    return best
