import pytest

from survivor.entities import BoostKind, BoostPickup, EnemyKind
from survivor.spawner import Spawner, pick_enemy_kind
from survivor.utils import SequenceRandom, make_rng


@pytest.mark.parametrize("difficulty, roll, kind", [
    (0, 0.99, EnemyKind.GRUNT),
    (1, 0.2, EnemyKind.GRUNT),
    (1, 0.5, EnemyKind.SPRINTER),
    (1, 0.99, EnemyKind.SPRINTER),
    (2, 0.5, EnemyKind.TANK),
    (2, 0.4, EnemyKind.SPRINTER),
    (3, 0.5, EnemyKind.TANK),
    (3, 0.7, EnemyKind.SHOOTER),
    (4, 0.7, EnemyKind.SHOOTER),
    (4, 0.9, EnemyKind.CHARGER),
    (9, 0.1, EnemyKind.GRUNT),
])
def test_pick_enemy_kind(difficulty, roll, kind):
    assert pick_enemy_kind(difficulty, roll) is kind


def test_spawn_on_top_edge(settings, state):
    # edge roll, kind roll, x along the edge, speed jitter
    spawner = Spawner(settings, SequenceRandom([0.0, 0.5, 0.5, 0.5]), SequenceRandom([0.0]))
    e = spawner.spawn_enemy(state)
    assert e.kind is EnemyKind.GRUNT
    assert e.x == pytest.approx(450)
    assert e.y == pytest.approx(-24)
    assert e.speed == pytest.approx(100)
    assert e.health == 60
    assert state.enemies == [e]


def test_spawn_on_right_edge(settings, state):
    spawner = Spawner(settings, SequenceRandom([0.25, 0.0, 0.5, 0.0]), SequenceRandom([0.0]))
    e = spawner.spawn_enemy(state)
    assert e.x == pytest.approx(settings.width + 24)
    assert e.y == pytest.approx(300)
    assert e.speed == pytest.approx(80)


def test_spawned_enemies_start_off_screen(settings, state):
    spawner = Spawner(settings, make_rng(5))
    state.difficulty_level = 6
    for _ in range(200):
        e = spawner.spawn_enemy(state)
        inside_x = e.radius <= e.x <= settings.width - e.radius
        inside_y = e.radius <= e.y <= settings.height - e.radius
        assert not (inside_x and inside_y)
    assert {e.kind for e in state.enemies} == set(EnemyKind)


def test_enemy_speed_scales_with_difficulty(settings):
    spawner = Spawner(settings, SequenceRandom([0.0]))
    easy = spawner.create_enemy(EnemyKind.GRUNT, 0, 0, difficulty=0)
    hard = spawner.create_enemy(EnemyKind.GRUNT, 0, 0, difficulty=5)
    assert hard.speed - easy.speed == pytest.approx(30)


def test_kind_specific_state(settings):
    spawner = Spawner(settings, SequenceRandom([0.0]))
    shooter = spawner.create_enemy(EnemyKind.SHOOTER, 0, 0, 0)
    charger = spawner.create_enemy(EnemyKind.CHARGER, 0, 0, 0)
    tank = spawner.create_enemy(EnemyKind.TANK, 0, 0, 0)
    assert shooter.shoot_cooldown == pytest.approx(1.2)
    assert charger.dash_timer == pytest.approx(2.0)
    assert charger.dash_speed == pytest.approx(240)
    assert tank.radius == 16 and tank.health == 120 and tank.speed == pytest.approx(60)


def test_enemy_timer_spawns_and_resets(settings, state):
    spawner = Spawner(settings, make_rng(1))
    spawner.update(state, 0.5)
    spawner.update(state, 0.5)
    assert state.enemies == []
    spawner.update(state, 0.5)
    assert len(state.enemies) == 1
    assert state.spawn_timer == 0


def test_boost_spawns_inside_margin(settings, state):
    state.spawn_interval = 1e9
    spawner = Spawner(settings, SequenceRandom([0.99]))
    spawner.update(state, 12.0)
    assert len(state.boosts) == 1
    b = state.boosts[0]
    assert b.kind is BoostKind.SHIELD
    assert 50 <= b.x <= settings.width - 50
    assert 50 <= b.y <= settings.height - 50
    assert state.boost_spawn_timer == 0


def test_boost_cap_holds_timer(settings, state):
    state.spawn_interval = 1e9
    state.boosts.extend([BoostPickup(x=100, y=100), BoostPickup(x=200, y=200)])
    spawner = Spawner(settings, make_rng(2))
    spawner.update(state, 15.0)
    assert len(state.boosts) == 2
    assert state.boost_spawn_timer == pytest.approx(15.0)

    state.boosts.pop()
    spawner.update(state, 0.01)
    assert len(state.boosts) == 2
