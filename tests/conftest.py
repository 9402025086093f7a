from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from wuxing.config import GameConfig
from wuxing.grid import Board
from wuxing.simulation import GameSession
from wuxing.types import Resolution


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def config() -> GameConfig:
    return GameConfig(seed_rows=0, rng_seed=7)


@pytest.fixture()
def session(config: GameConfig) -> GameSession:
    return GameSession(config=config)


@pytest.fixture()
def board(config: GameConfig) -> Board:
    origin_x, origin_y = config.grid_origin
    return Board(
        rows=config.rows,
        cols=config.cols,
        cell_size=config.cell_size,
        origin_x=origin_x,
        origin_y=origin_y,
    )


@pytest.fixture()
def run_shot() -> Callable[..., Resolution]:
    def _run(session: GameSession, dt: float = 1 / 60, max_ticks: int = 600) -> Resolution:
        for _ in range(max_ticks):
            resolution = session.advance(dt)
            if resolution is not None:
                return resolution
        raise AssertionError("shot never resolved")

    return _run
