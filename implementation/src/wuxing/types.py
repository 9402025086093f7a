from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from wuxing.elements import Element

MAX_LEVEL = 3

Cell = Tuple[int, int]


@dataclass
class Bubble:
    element: Element
    level: int = 1

    def grow(self, max_level: int = MAX_LEVEL) -> bool:
        if self.level >= max_level:
            return False
        self.level += 1
        return True


@dataclass
class ShotState:
    """The projectile between fire and resolution."""
    element: Element
    x: float
    y: float
    vx: float
    vy: float


@dataclass(frozen=True)
class Contact:
    # None means the shot reached the top of the board without touching a bubble.
    target: Optional[Cell] = None


class Outcome(Enum):
    KE_REMOVAL = "ke_removal"
    SHENG_GROWTH = "sheng_growth"
    STICK = "stick"


@dataclass(frozen=True)
class Resolution:
    outcome: Outcome
    element: Element
    target: Optional[Cell] = None
    target_element: Optional[Element] = None
    landing: Optional[Cell] = None
    overwrote: bool = False
    game_over: bool = False
    points: int = 0


class HintKind(Enum):
    NONE = "none"
    KE_REMOVAL = "ke_removal"
    SHENG_GROWTH = "sheng_growth"
    NEUTRAL_STICK = "neutral_stick"


@dataclass(frozen=True)
class Hint:
    kind: HintKind = HintKind.NONE
    element: Optional[Element] = None

    @property
    def text(self) -> str:
        if self.kind is HintKind.NONE or self.element is None:
            return ""
        name = self.element.label
        if self.kind is HintKind.KE_REMOVAL:
            return f"KE -> remove {name}"
        if self.kind is HintKind.SHENG_GROWTH:
            return f"Careful: SHENG -> grows {name}"
        return f"Hit -> stick ({name})"


NO_HINT = Hint()
