from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from sqlmodel import Field, Session, SQLModel, create_engine, select

from maze import Maze


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _check_name(name: str) -> str:
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise ValueError(f"Invalid maze name: {name!r}")
    return name


def _entry(maze: Maze, seed_packet: list[int] | None, length: int | None) -> dict[str, Any]:
    record = maze.to_record()
    if seed_packet is not None:
        record["seed_packet"] = list(seed_packet)
    if length is not None:
        record["length"] = length
    return record


def _maze_from_entry(name: str, entry: dict[str, Any]) -> Maze:
    try:
        return Maze.from_record(entry)
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Stored maze {name!r} is not a valid maze record: {e}") from e


@dataclass
class MazeListing:
    name: str
    filename: str
    path: str
    size: int
    created: str


class JsonMazeRepository:
    """Directory of <name>.json files, one maze record per file."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, name: str) -> Path:
        return self.directory / f"{_check_name(name)}.json"

    def _read_doc(self, path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        raw = path.read_text(encoding="utf-8").strip()
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid maze JSON in {path.name}: {e}") from e

    def _write_doc(self, path: Path, doc: dict[str, Any]) -> None:
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(doc, indent=2), encoding="utf-8")
        tmp_path.replace(path)

    def list_mazes(self) -> list[dict[str, Any]]:
        items = []
        for path in sorted(self.directory.glob("*.json")):
            stats = path.stat()
            created = datetime.fromtimestamp(stats.st_mtime, timezone.utc)
            listing = MazeListing(
                name=path.stem,
                filename=path.name,
                path=str(path),
                size=stats.st_size,
                created=created.replace(microsecond=0).isoformat().replace("+00:00", "Z"),
            )
            items.append(asdict(listing))
        return items

    def get_entry(self, name: str) -> dict[str, Any] | None:
        return self._read_doc(self._path_for(name))

    def get_maze(self, name: str) -> Maze | None:
        entry = self.get_entry(name)
        if entry is None:
            return None
        return _maze_from_entry(name, entry)

    def save_maze(
        self,
        name: str,
        maze: Maze,
        seed_packet: list[int] | None = None,
        length: int | None = None,
    ) -> dict[str, Any]:
        entry = _entry(maze, seed_packet, length)
        self._write_doc(self._path_for(name), entry)
        return entry

    def delete_maze(self, name: str) -> bool:
        path = self._path_for(name)
        if not path.exists():
            return False
        path.unlink()
        return True


# ---------------------------------------------------------------------------
# SQLModel table for SqliteMazeRepository
# ---------------------------------------------------------------------------


class MazeModel(SQLModel, table=True):
    __tablename__ = "mazes"
    name: str = Field(primary_key=True)
    width: int
    height: int
    maze_json: str = Field(sa_column_kwargs={"name": "maze"})
    seed_packet_json: Optional[str] = Field(default=None, sa_column_kwargs={"name": "seed_packet"})
    length: Optional[int] = None
    created_at: str


class SqliteMazeRepository:
    """SQLite-backed maze store using SQLModel. Same interface as JsonMazeRepository."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{self.path}"
        self.engine = create_engine(url, connect_args={"check_same_thread": False})
        SQLModel.metadata.create_all(self.engine)

    def _row_entry(self, row: MazeModel) -> dict[str, Any]:
        entry = json.loads(row.maze_json)
        if row.seed_packet_json is not None:
            entry["seed_packet"] = json.loads(row.seed_packet_json)
        if row.length is not None:
            entry["length"] = row.length
        return entry

    def list_mazes(self) -> list[dict[str, Any]]:
        with Session(self.engine) as session:
            rows = session.exec(select(MazeModel).order_by(MazeModel.name)).all()
            return [
                asdict(
                    MazeListing(
                        name=row.name,
                        filename=row.name,
                        path=f"{self.path}#{row.name}",
                        size=len(row.maze_json.encode("utf-8")),
                        created=row.created_at,
                    )
                )
                for row in rows
            ]

    def get_entry(self, name: str) -> dict[str, Any] | None:
        with Session(self.engine) as session:
            row = session.get(MazeModel, _check_name(name))
            if row is None:
                return None
            return self._row_entry(row)

    def get_maze(self, name: str) -> Maze | None:
        entry = self.get_entry(name)
        if entry is None:
            return None
        return _maze_from_entry(name, entry)

    def save_maze(
        self,
        name: str,
        maze: Maze,
        seed_packet: list[int] | None = None,
        length: int | None = None,
    ) -> dict[str, Any]:
        _check_name(name)
        maze_json = json.dumps(maze.to_record())
        packet_json = json.dumps(list(seed_packet)) if seed_packet is not None else None
        with Session(self.engine) as session:
            row = session.get(MazeModel, name)
            if row is None:
                row = MazeModel(
                    name=name,
                    width=maze.width,
                    height=maze.height,
                    maze_json=maze_json,
                    seed_packet_json=packet_json,
                    length=length,
                    created_at=_utc_now_iso(),
                )
            else:
                row.width = maze.width
                row.height = maze.height
                row.maze_json = maze_json
                row.seed_packet_json = packet_json
                row.length = length
            session.add(row)
            session.commit()
        return _entry(maze, seed_packet, length)

    def delete_maze(self, name: str) -> bool:
        with Session(self.engine) as session:
            row = session.get(MazeModel, _check_name(name))
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True

    def close(self) -> None:
        self.engine.dispose()


def open_repo(path: str | Path):
    """Return SqliteMazeRepository for .db paths, JsonMazeRepository otherwise."""
    path = Path(path)
    if path.suffix == ".db":
        return SqliteMazeRepository(path)
    return JsonMazeRepository(path)
