import math

import pytest

from survivor.utils import (
    SequenceRandom,
    angle_delta,
    choice_index,
    circle_collide,
    clamp,
    make_rng,
    normalize,
    turn_towards,
)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_normalize_zero_vector():
    assert normalize(0.0, 0.0) == (0.0, 0.0)
    x, y = normalize(3.0, 4.0)
    assert x == pytest.approx(0.6)
    assert y == pytest.approx(0.8)


def test_circle_collide_is_strict():
    assert circle_collide(0, 0, 5, 9, 0, 5)
    assert not circle_collide(0, 0, 5, 10, 0, 5)


def test_angle_delta_takes_shortest_way():
    assert angle_delta(math.radians(170), math.radians(-170)) == pytest.approx(math.radians(-20))
    assert angle_delta(0.5, 0.25) == pytest.approx(0.25)


def test_turn_towards_caps_rate():
    assert turn_towards(0.0, 1.0, 5.0) == pytest.approx(1.0)
    assert turn_towards(0.0, 1.0, 0.5) == pytest.approx(0.5)


def test_sequence_random_cycles():
    rng = SequenceRandom([0.1, 0.9])
    assert [rng.random() for _ in range(5)] == [0.1, 0.9, 0.1, 0.9, 0.1]


def test_sequence_random_rejects_empty():
    with pytest.raises(ValueError):
        SequenceRandom([])


def test_choice_index_bounds():
    assert choice_index(SequenceRandom([0.0]), 4) == 0
    assert choice_index(SequenceRandom([0.999999]), 4) == 3


def test_make_rng_is_reproducible():
    a, b = make_rng(3), make_rng(3)
    assert [a.random() for _ in range(3)] == [b.random() for _ in range(3)]
