from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from analyze import analyze_maze, solve_maze
from config import SETTINGS, Settings
from db import open_repo
from generate import generate_long_maze, generate_maze

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A user-facing failure; main() prints it and exits with status 1."""


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _load(repo: Any, name: str):
    maze = repo.get_maze(name)
    if maze is None:
        raise CommandError(f"Maze not found: {name}")
    return maze


def cmd_generate(args: argparse.Namespace, repo: Any, settings: Settings) -> None:
    result = generate_maze(
        args.width,
        args.height,
        max_iterations=args.max_iterations,
        report_progress=True,
        settings=settings,
    )
    repo.save_maze(args.name, result.maze)
    if not result.completed:
        logger.warning("Stopped after %d links; maze is not fully connected", result.iterations)
    _emit({"name": args.name, "completed": result.completed, "iterations": result.iterations})


def cmd_long(args: argparse.Namespace, repo: Any, settings: Settings) -> None:
    result = generate_long_maze(
        args.width,
        args.height,
        iterations=args.iterations,
        divisions=args.divisions,
        settings=settings,
    )
    if result.maze is None:
        raise CommandError("No solvable maze was generated")
    repo.save_maze(args.name, result.maze, seed_packet=result.seed_packet, length=result.length)
    _emit({"name": args.name, "length": result.length, "trials": result.trials})


def cmd_analyze(args: argparse.Namespace, repo: Any, settings: Settings) -> None:
    _emit(analyze_maze(_load(repo, args.name)).to_record())


def cmd_solve(args: argparse.Namespace, repo: Any, settings: Settings) -> None:
    _emit(solve_maze(_load(repo, args.name)).to_record())


def cmd_list(args: argparse.Namespace, repo: Any, settings: Settings) -> None:
    _emit({"mazes": repo.list_mazes()})


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def build_parser(settings: Settings = SETTINGS) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="longmaze", description="Generate, analyze and solve grid mazes.")
    p.add_argument("--store", default=settings.store_path, help="maze directory, or a .db file")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    p1 = sub.add_parser("generate", help="generate a random spanning maze")
    p1.add_argument("width", type=_positive_int)
    p1.add_argument("height", type=_positive_int)
    p1.add_argument("name")
    p1.add_argument("--max-iterations", type=int, default=None)
    p1.set_defaults(func=cmd_generate)

    p2 = sub.add_parser("long", help="search seed packets for a long solution path")
    p2.add_argument("width", type=_positive_int)
    p2.add_argument("height", type=_positive_int)
    p2.add_argument("name")
    p2.add_argument("--iterations", type=int, default=settings.default_iterations)
    p2.add_argument("--divisions", type=_positive_int, default=settings.default_divisions)
    p2.set_defaults(func=cmd_long)

    p3 = sub.add_parser("analyze", help="print connected groups and boundaries")
    p3.add_argument("name")
    p3.set_defaults(func=cmd_analyze)

    p4 = sub.add_parser("solve", help="print the shortest start-to-end path")
    p4.add_argument("name")
    p4.set_defaults(func=cmd_solve)

    p5 = sub.add_parser("list", help="list stored mazes")
    p5.set_defaults(func=cmd_list)
    return p


def main(argv: Sequence[str] | None = None, settings: Settings = SETTINGS) -> int:
    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    repo = None
    try:
        repo = open_repo(args.store)
        args.func(args, repo, settings)
    except (CommandError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if hasattr(repo, "close"):
            repo.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
