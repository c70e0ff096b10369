from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class Settings:
    store_path: str = "mazes"
    log_level: str = "WARNING"
    # Seconds between generator progress lines.
    progress_interval: float = 1.0
    # Optimizer seeds are drawn from [0, seed_ceiling).
    seed_ceiling: int = 1_000_000
    default_iterations: int = 100
    default_divisions: int = 10


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env
    defaults = Settings()
    return Settings(
        store_path=env.get("LONGMAZE_STORE", defaults.store_path),
        log_level=env.get("LONGMAZE_LOG_LEVEL", defaults.log_level).upper(),
    )


SETTINGS = load_settings()
