from __future__ import annotations

import random

import pytest

from wuxing.elements import (
    FAIR_WEIGHT_FLOOR,
    Element,
    Interaction,
    classify,
    controls,
    draw_fair,
    fair_weights,
    grows,
)


class _FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _cycle_length(fn, start: Element) -> int:
    seen = [start]
    current = fn(start)
    while current != start:
        seen.append(current)
        current = fn(current)
    return len(seen)


@pytest.mark.parametrize("relation", [grows, controls])
def test_relation_is_single_fixed_point_free_five_cycle(relation) -> None:
    images = {relation(e) for e in Element}
    assert images == set(Element)
    assert all(relation(e) != e for e in Element)
    assert _cycle_length(relation, Element.WOOD) == 5


def test_grows_and_controls_never_agree() -> None:
    for element in Element:
        assert grows(element) != controls(element)


def test_sheng_order() -> None:
    assert grows(Element.WOOD) is Element.FIRE
    assert grows(Element.FIRE) is Element.EARTH
    assert grows(Element.EARTH) is Element.METAL
    assert grows(Element.METAL) is Element.WATER
    assert grows(Element.WATER) is Element.WOOD


def test_ke_order() -> None:
    assert controls(Element.WOOD) is Element.EARTH
    assert controls(Element.EARTH) is Element.WATER
    assert controls(Element.WATER) is Element.FIRE
    assert controls(Element.FIRE) is Element.METAL
    assert controls(Element.METAL) is Element.WOOD


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        (Element.EARTH, Interaction.KE),
        (Element.FIRE, Interaction.SHENG),
        (Element.METAL, Interaction.NEUTRAL),
        (Element.WATER, Interaction.NEUTRAL),
        (Element.WOOD, Interaction.NEUTRAL),
    ],
)
def test_classify_wood_attacker(target: Element, expected: Interaction) -> None:
    assert classify(Element.WOOD, target) is expected


def test_fair_weights_penalise_repeats_down_to_floor() -> None:
    weights = fair_weights([Element.FIRE, Element.FIRE, Element.WATER])
    assert weights[Element.WOOD] == pytest.approx(1.0)
    assert weights[Element.FIRE] == pytest.approx(0.5)
    assert weights[Element.WATER] == pytest.approx(0.75)

    saturated = fair_weights([Element.METAL] * 10)
    assert saturated[Element.METAL] == pytest.approx(FAIR_WEIGHT_FLOOR)


def test_fair_weights_never_zero() -> None:
    rng = random.Random(99)
    for _ in range(200):
        history = [Element(rng.randrange(5)) for _ in range(rng.randrange(0, 8))]
        assert all(w > 0 for w in fair_weights(history))


def test_draw_fair_picks_first_bucket_reaching_sample() -> None:
    # Empty history: five buckets of weight 1.0, total 5.0.
    assert draw_fair([], _FixedRandom(0.0)) is Element.WOOD
    assert draw_fair([], _FixedRandom(0.39)) is Element.FIRE
    assert draw_fair([], _FixedRandom(0.999)) is Element.WATER


def test_draw_fair_output_always_in_range() -> None:
    rng = random.Random(5)
    for _ in range(500):
        history = [Element(rng.randrange(5)) for _ in range(3)]
        assert draw_fair(history, rng) in Element


def test_draw_fair_discourages_recent_element() -> None:
    rng = random.Random(11)
    history = [Element.WOOD, Element.WOOD, Element.WOOD]
    draws = [draw_fair(history, rng) for _ in range(4000)]
    wood_share = draws.count(Element.WOOD) / len(draws)
    # Wood weight 0.25 out of 4.25 total, roughly 6%.
    assert 0.03 < wood_share < 0.10
