from __future__ import annotations

from dataclasses import dataclass

from wuxing.types import Outcome


@dataclass
class ScoreStore:
    score: int = 0
    last_award: int = 0

    shots_fired: int = 0
    ke_removals: int = 0
    sheng_growths: int = 0
    sticks: int = 0
    swaps: int = 0
    pressure_shifts: int = 0

    def add_points(self, amount: int) -> None:
        if amount <= 0:
            return
        self.score += amount
        self.last_award = amount

    def record(self, outcome: Outcome, points: int) -> None:
        if outcome is Outcome.KE_REMOVAL:
            self.ke_removals += 1
        elif outcome is Outcome.SHENG_GROWTH:
            self.sheng_growths += 1
        else:
            self.sticks += 1
        self.add_points(points)
