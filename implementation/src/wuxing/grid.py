from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from wuxing.elements import Element, random_element
from wuxing.types import Bubble, Cell


@dataclass
class Board:
    rows: int
    cols: int
    cell_size: float
    origin_x: float = 0.0
    origin_y: float = 0.0
    cells: list[Optional[Bubble]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.cells = [None] * (self.rows * self.cols)

    @property
    def danger_row(self) -> int:
        return self.rows - 1

    @property
    def width(self) -> float:
        return self.cols * self.cell_size

    @property
    def height(self) -> float:
        return self.rows * self.cell_size

    def index(self, r: int, c: int) -> int:
        if not self.in_bounds(r, c):
            raise IndexError(f"Board cell out of bounds: ({r}, {c})")
        return r * self.cols + c

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def get(self, r: int, c: int) -> Optional[Bubble]:
        if not self.in_bounds(r, c):
            return None
        return self.cells[self.index(r, c)]

    def set(self, r: int, c: int, bubble: Optional[Bubble]) -> None:
        self.cells[self.index(r, c)] = bubble

    def clear(self, r: int, c: int) -> Optional[Bubble]:
        existing = self.get(r, c)
        if existing is not None:
            self.set(r, c, None)
        return existing

    def is_empty(self, r: int, c: int) -> bool:
        return self.get(r, c) is None

    def iter_cells(self) -> Iterable[Tuple[int, int, Optional[Bubble]]]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield r, c, self.cells[r * self.cols + c]

    def row(self, r: int) -> list[Optional[Bubble]]:
        start = self.index(r, 0)
        return self.cells[start:start + self.cols]

    def occupied_count(self) -> int:
        return sum(1 for bubble in self.cells if bubble is not None)

    def neighbors4(self, r: int, c: int) -> list[Cell]:
        coords = [(r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)]
        return [(rr, cc) for rr, cc in coords if self.in_bounds(rr, cc)]

    # ── Coordinates ──────────────────────────────────────────────

    def cell_to_world(self, r: int, c: int) -> tuple[float, float]:
        half = self.cell_size / 2
        return (
            self.origin_x + c * self.cell_size + half,
            self.origin_y + r * self.cell_size + half,
        )

    def world_to_cell(self, x: float, y: float) -> Cell:
        """Floor-divide into grid coordinates. The result may be out of bounds."""
        c = math.floor((x - self.origin_x) / self.cell_size)
        r = math.floor((y - self.origin_y) / self.cell_size)
        return r, c

    def clamp_cell(self, r: int, c: int) -> Cell:
        return (
            max(0, min(self.rows - 1, r)),
            max(0, min(self.cols - 1, c)),
        )

    # ── Population ───────────────────────────────────────────────

    def seed(self, num_rows: int, fill_probability: float, rng: random.Random) -> None:
        for r in range(min(num_rows, self.rows)):
            for c in range(self.cols):
                if rng.random() < fill_probability:
                    self.set(r, c, Bubble(random_element(rng)))

    def bottom_row_occupied(self) -> bool:
        return any(bubble is not None for bubble in self.row(self.rows - 1))

    def apply_pressure(self, spawn_probability: float, rng: random.Random) -> bool:
        """Shift every row down by one and spawn a new top row.

        Returns False without touching the board when the bottom row is
        occupied; the caller treats that as game over.
        """
        if self.bottom_row_occupied():
            return False
        for r in range(self.rows - 1, 0, -1):
            for c in range(self.cols):
                self.set(r, c, self.get(r - 1, c))
        for c in range(self.cols):
            if rng.random() < spawn_probability:
                self.set(0, c, Bubble(random_element(rng)))
            else:
                self.set(0, c, None)
        return True

    def is_game_over_row(self, r: int) -> bool:
        return r >= self.danger_row

    # ── Landing searches ─────────────────────────────────────────

    def best_adjacent_empty(self, r: int, c: int, x: float, y: float) -> Optional[Cell]:
        """Empty 4-neighbour of (r, c) whose centre is closest to (x, y)."""
        best: Optional[Cell] = None
        best_d = math.inf
        for rr, cc in self.neighbors4(r, c):
            if not self.is_empty(rr, cc):
                continue
            px, py = self.cell_to_world(rr, cc)
            d = math.hypot(px - x, py - y)
            if d < best_d:
                best_d = d
                best = (rr, cc)
        return best

    def nearest_empty_in_row(self, r: int, c: int) -> Optional[Cell]:
        """Scan outward along row r, left side first at each radius."""
        for radius in range(1, self.cols):
            for cc in (c - radius, c + radius):
                if self.in_bounds(r, cc) and self.is_empty(r, cc):
                    return r, cc
        return None

    def snapshot(self) -> list[list[Optional[tuple[Element, int]]]]:
        grid: list[list[Optional[tuple[Element, int]]]] = []
        for r in range(self.rows):
            grid.append([
                None if bubble is None else (bubble.element, bubble.level)
                for bubble in self.row(r)
            ])
        return grid
