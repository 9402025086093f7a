from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from wuxing.elements import Element, draw_fair, random_element

QUEUE_SIZE = 3


@dataclass
class ShotQueue:
    """Upcoming elements, the hold slot and the one-swap-per-shot lock.

    The queue always holds exactly `size` elements. Refills use the fair
    generator seeded with the element leaving the queue plus the two newest
    entries, so a run of the same element becomes progressively less likely.
    """
    rng: random.Random = field(default_factory=random.Random)
    size: int = QUEUE_SIZE
    queue: list[Element] = field(default_factory=list)
    hold: Optional[Element] = None
    current: Element = field(init=False)
    swap_used: bool = False

    def __post_init__(self) -> None:
        if self.size != QUEUE_SIZE:
            raise ValueError(f"queue size must be {QUEUE_SIZE}, got {self.size}")
        if len(self.queue) > self.size:
            raise ValueError(
                f"queue holds {len(self.queue)} elements, more than {self.size}"
            )
        while len(self.queue) < self.size:
            self.queue.append(random_element(self.rng))
        self.current = self.draw_next()

    def draw_next(self) -> Element:
        recent = self.queue[-2:]
        popped = self.queue.pop(0)
        self.queue.append(draw_fair([popped, *recent], self.rng))
        return popped

    def swap(self, in_flight: bool = False) -> bool:
        if in_flight or self.swap_used:
            return False
        if self.hold is None:
            self.hold = self.current
            self.current = self.draw_next()
        else:
            self.current, self.hold = self.hold, self.current
        self.swap_used = True
        return True

    def lock(self) -> None:
        self.swap_used = True

    def load_next(self) -> Element:
        self.current = self.draw_next()
        return self.current

    def reset_swap_lock(self) -> None:
        self.swap_used = False

    @property
    def upcoming(self) -> tuple[Element, ...]:
        return tuple(self.queue)
