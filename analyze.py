from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict

from maze import Coord, Link, Maze

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """Connected groups of a maze and the adjacent pairs that straddle them."""

    groups: list[list[Coord]]
    boundaries: list[Link]

    @property
    def connected(self) -> bool:
        return len(self.groups) <= 1

    def to_record(self) -> dict:
        return {
            "groups": [[str(cell) for cell in group] for group in self.groups],
            "boundaries": [str(link) for link in self.boundaries],
        }


@dataclass
class Solution:
    solved: bool
    path: list[Coord] = field(default_factory=list)
    length: int = 0
    error: str | None = None

    def to_record(self) -> dict:
        record = {
            "solved": self.solved,
            "path": [str(cell) for cell in self.path],
            "length": self.length,
        }
        if self.error is not None:
            record["error"] = self.error
        return record


def find_leader(leader: Dict[Coord, Coord], cell: Coord) -> Coord:
    """Return the root of cell, pointing every node on the way straight at it."""
    root = cell
    while leader.get(root, root) != root:
        root = leader[root]
    while cell != root:
        nxt = leader[cell]
        leader[cell] = root
        cell = nxt
    return root


def connect(leader: Dict[Coord, Coord], a: Coord, b: Coord) -> None:
    # No rank: b's root always becomes the leader.
    leader[find_leader(leader, a)] = find_leader(leader, b)


def analyze_maze(maze: Maze) -> Analysis:
    leader: Dict[Coord, Coord] = {}
    for link in maze.links:
        if link.a in maze.cells and link.b in maze.cells:
            connect(leader, link.a, link.b)

    groups: Dict[Coord, list[Coord]] = {}
    for cell in maze.cells:
        groups.setdefault(find_leader(leader, cell), []).append(cell)

    boundaries: list[Link] = []
    for cell in maze.cells:
        cell_leader = find_leader(leader, cell)
        for neighbor in (cell.down(), cell.right()):
            if neighbor in maze.cells and find_leader(leader, neighbor) != cell_leader:
                boundaries.append(Link(cell, neighbor))

    return Analysis(groups=list(groups.values()), boundaries=boundaries)


def solve_maze(maze: Maze) -> Solution:
    """Breadth-first search for the shortest start-to-end path.

    Problems with the maze are reported in the returned Solution rather than
    raised. The length counts cells, so a one-step path has length 2.
    """
    if maze.start not in maze.cells:
        return Solution(solved=False, error="Start cell not found in maze")
    if maze.end not in maze.cells:
        return Solution(solved=False, error="End cell not found in maze")

    adjacency: Dict[Coord, list[Coord]] = {cell: [] for cell in maze.cells}
    for link in maze.links:
        if link.a in adjacency and link.b in adjacency:
            adjacency[link.a].append(link.b)
            adjacency[link.b].append(link.a)

    visited = {maze.start}
    queue: deque[list[Coord]] = deque([[maze.start]])
    while queue:
        path = queue.popleft()
        current = path[-1]
        if current == maze.end:
            return Solution(solved=True, path=path, length=len(path))
        for neighbor in adjacency[current]:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(path + [neighbor])

    logger.debug("No path from %s to %s", maze.start, maze.end)
    return Solution(solved=False, error="No path from start to end")
