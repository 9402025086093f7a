from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import math
import os
from pathlib import Path
from typing import Optional

from wuxing.queue import QUEUE_SIZE

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WUXING_CONFIG"


def _repo_root() -> Path:
    here = Path(__file__).resolve()
    # .../implementation/src/wuxing/config.py -> repo root is 3 levels up
    return here.parents[3]


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).resolve()
    return _repo_root() / "implementation" / "config.json"


@dataclass
class GameConfig:
    rows: int = 12
    cols: int = 9

    # Virtual play field (portrait, phone-sized)
    view_width: int = 390
    view_height: int = 844
    top_ui_height: int = 120
    bottom_ui_height: int = 140
    shooter_offset: int = 60

    shot_speed: float = 900.0
    aim_min_deg: float = -160.0
    aim_max_deg: float = -20.0

    # Fractions of the cell size
    collision_threshold: float = 0.42
    wall_inset: float = 0.1
    march_step: float = 0.35
    max_prediction_steps: int = 80

    seed_rows: int = 4
    seed_fill_probability: float = 0.85
    pressure_interval_ms: int = 9000
    pressure_spawn_probability: float = 0.8

    queue_size: int = QUEUE_SIZE
    max_level: int = 3
    ke_points: int = 10
    sheng_points: int = 3
    stick_points: int = 1

    rng_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows < 2 or self.cols < 1:
            raise ValueError(f"grid must be at least 2x1, got {self.rows}x{self.cols}")
        if self.view_width < self.cols:
            raise ValueError("view_width is too small for the column count")
        for name in ("seed_fill_probability", "pressure_spawn_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if not -180.0 < self.aim_min_deg < self.aim_max_deg < 0.0:
            # Every shot must travel upward or it never reaches the top row.
            raise ValueError(
                f"aim cone must satisfy -180 < min < max < 0, got "
                f"[{self.aim_min_deg}, {self.aim_max_deg}]"
            )
        if self.shot_speed <= 0 or self.pressure_interval_ms <= 0:
            raise ValueError("shot_speed and pressure_interval_ms must be positive")
        if self.queue_size != QUEUE_SIZE:
            raise ValueError(f"queue_size must be {QUEUE_SIZE}, got {self.queue_size}")
        if self.max_level < 1:
            raise ValueError("max_level must be at least 1")

    # ── Derived geometry ─────────────────────────────────────────

    @property
    def cell_size(self) -> int:
        return self.view_width // self.cols

    @property
    def grid_width(self) -> int:
        return self.cell_size * self.cols

    @property
    def grid_height(self) -> int:
        return self.cell_size * self.rows

    @property
    def grid_origin(self) -> tuple[float, float]:
        play_height = self.view_height - self.top_ui_height - self.bottom_ui_height
        return (
            (self.view_width - self.grid_width) / 2,
            self.top_ui_height + (play_height - self.grid_height) / 2,
        )

    @property
    def shooter_position(self) -> tuple[float, float]:
        return self.view_width / 2, float(self.view_height - self.shooter_offset)

    @property
    def aim_bounds(self) -> tuple[float, float]:
        return math.radians(self.aim_min_deg), math.radians(self.aim_max_deg)

    @property
    def pressure_interval(self) -> float:
        return self.pressure_interval_ms / 1000.0


def load_config(path: Path | None = None) -> GameConfig:
    if path is None:
        path = default_config_path()
    if not path.exists():
        return GameConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read config %s (%s); using defaults", path, exc)
        return GameConfig()
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object; using defaults", path)
        return GameConfig()
    try:
        return GameConfig(**data)
    except (TypeError, ValueError) as exc:
        logger.warning("Invalid config %s (%s); using defaults", path, exc)
        return GameConfig()
