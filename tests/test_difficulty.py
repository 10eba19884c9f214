import pytest

from survivor.difficulty import DifficultyController, difficulty_for, spawn_interval_for


def test_difficulty_steps_every_interval(settings):
    assert difficulty_for(19.9, settings) == 0
    assert difficulty_for(20.0, settings) == 1
    assert difficulty_for(65.0, settings) == 3


def test_spawn_interval_shrinks_with_difficulty(settings):
    intervals = [spawn_interval_for(level, settings) for level in range(20)]
    assert intervals[0] == pytest.approx(1.2)
    assert intervals[1] == pytest.approx(1.2 / 1.1)
    assert all(a >= b for a, b in zip(intervals, intervals[1:]))


def test_level_is_monotonic_over_time(settings, state):
    controller = DifficultyController(settings)
    levels = []
    for _ in range(3010):
        controller.update(state, 1 / 30)
        levels.append(state.difficulty_level)
    assert levels == sorted(levels)
    assert levels[-1] == 5
    assert state.spawn_interval == pytest.approx(1.2 / 1.5)


def test_level_never_drops(settings, state):
    controller = DifficultyController(settings)
    controller.update(state, 61.0)
    assert state.difficulty_level == 3
    state.elapsed = 0.0
    controller.update(state, 0.1)
    assert state.difficulty_level == 3
    assert state.spawn_interval == pytest.approx(1.2 / 1.3)
