"""Five-element relations and the fairness-weighted element generator.

Sheng (growth): Wood -> Fire -> Earth -> Metal -> Water -> Wood
Ke (control):   Wood -> Earth -> Water -> Fire -> Metal -> Wood
"""
from __future__ import annotations

import random
from enum import Enum, IntEnum
from typing import Iterable


class Element(IntEnum):
    WOOD = 0
    FIRE = 1
    EARTH = 2
    METAL = 3
    WATER = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Interaction(Enum):
    KE = "ke"
    SHENG = "sheng"
    NEUTRAL = "neutral"


_GROWS: tuple[Element, ...] = (
    Element.FIRE,
    Element.EARTH,
    Element.METAL,
    Element.WATER,
    Element.WOOD,
)

_CONTROLS: tuple[Element, ...] = (
    Element.EARTH,
    Element.METAL,
    Element.WATER,
    Element.WOOD,
    Element.FIRE,
)

FAIR_WEIGHT_FLOOR = 0.15
FAIR_REPEAT_PENALTY = 0.25


def grows(element: Element) -> Element:
    return _GROWS[element]


def controls(element: Element) -> Element:
    return _CONTROLS[element]


def classify(attacker: Element, target: Element) -> Interaction:
    """Ke is checked before Sheng; the two tables never agree on a target."""
    if target == controls(attacker):
        return Interaction.KE
    if target == grows(attacker):
        return Interaction.SHENG
    return Interaction.NEUTRAL


def random_element(rng: random.Random) -> Element:
    return Element(rng.randrange(len(Element)))


def fair_weights(history: Iterable[Element]) -> list[float]:
    counts = [0] * len(Element)
    for element in history:
        counts[element] += 1
    return [max(FAIR_WEIGHT_FLOOR, 1.0 - FAIR_REPEAT_PENALTY * c) for c in counts]


def draw_fair(history: Iterable[Element], rng: random.Random) -> Element:
    """Weighted draw that discourages (never excludes) recently seen elements."""
    weights = fair_weights(history)
    sample = rng.random() * sum(weights)
    cumulative = 0.0
    for index, weight in enumerate(weights):
        cumulative += weight
        if cumulative >= sample:
            return Element(index)
    # Float rounding left the sample past the last bucket.
    return random_element(rng)
