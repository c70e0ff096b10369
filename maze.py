from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable


@dataclass(frozen=True, order=True)
class Coord:
    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x},{self.y}"

    @classmethod
    def parse(cls, text: str) -> "Coord":
        x, y = text.split(",")
        return cls(x=int(x), y=int(y))

    def down(self) -> "Coord":
        return Coord(self.x, self.y + 1)

    def right(self) -> "Coord":
        return Coord(self.x + 1, self.y)

    def is_adjacent(self, other: "Coord") -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) == 1


@dataclass(frozen=True, eq=False)
class Link:
    """An unordered pair of cells.

    The endpoints keep the order they were given in so the external text form
    is stable, but equality and hashing ignore it.
    """

    a: Coord
    b: Coord

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return {self.a, self.b} == {other.a, other.b}

    def __hash__(self) -> int:
        return hash(frozenset((self.a, self.b)))

    def __str__(self) -> str:
        return f"{self.a}-{self.b}"

    def __iter__(self):
        yield self.a
        yield self.b

    @classmethod
    def parse(cls, text: str) -> "Link":
        left, right = text.split("-")
        return cls(Coord.parse(left), Coord.parse(right))

    def other(self, cell: Coord) -> Coord:
        if cell == self.a:
            return self.b
        if cell == self.b:
            return self.a
        raise ValueError(f"{cell} is not an endpoint of {self}")


@dataclass
class Maze:
    width: int
    height: int
    start: Coord
    end: Coord
    cells: Dict[Coord, bool] = field(default_factory=dict)
    links: Dict[Link, bool] = field(default_factory=dict)

    def in_bounds(self, cell: Coord) -> bool:
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def has_cell(self, cell: Coord) -> bool:
        return cell in self.cells

    def has_link(self, a: Coord, b: Coord) -> bool:
        return Link(a, b) in self.links

    def add_link(self, a: Coord, b: Coord) -> Link:
        link = Link(a, b)
        self.links[link] = True
        return link

    def neighbors(self, cell: Coord) -> list[Coord]:
        return [link.other(cell) for link in self.links if cell in (link.a, link.b)]

    def clone(self) -> "Maze":
        return Maze(
            width=self.width,
            height=self.height,
            start=self.start,
            end=self.end,
            cells=dict(self.cells),
            links=dict(self.links),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "cells": {str(cell): True for cell in self.cells},
            "links": {str(link): True for link in self.links},
            "start": str(self.start),
            "end": str(self.end),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Maze":
        return cls(
            width=int(record["width"]),
            height=int(record["height"]),
            start=Coord.parse(record["start"]),
            end=Coord.parse(record["end"]),
            cells={Coord.parse(key): True for key in record.get("cells", {})},
            links={Link.parse(key): True for key in record.get("links", {})},
        )


def grid_cells(width: int, height: int) -> Iterable[Coord]:
    for y in range(height):
        for x in range(width):
            yield Coord(x, y)


def create_maze(width: int, height: int) -> Maze:
    """Build a width x height maze with every cell and no links."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")
    return Maze(
        width=width,
        height=height,
        start=Coord(0, 0),
        end=Coord(width - 1, height - 1),
        cells={cell: True for cell in grid_cells(width, height)},
    )


def add_link(maze: Maze, a: Coord, b: Coord) -> Link:
    # Adjacency is not checked; the generator only links boundary pairs.
    return maze.add_link(a, b)
