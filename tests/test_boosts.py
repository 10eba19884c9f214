import pytest

from survivor import boosts
from survivor.entities import BoostKind, Player
from survivor.upgrades import more_defense
from survivor.utils import clamp


@pytest.fixture
def player():
    return Player(x=450, y=300)


@pytest.mark.parametrize("health, amount, defense", [
    (100, 10, 0.0),
    (100, 10, 0.5),
    (50, 80, 0.2),
    (5, 0, 0.6),
    (100, 1000, 0.8),
])
def test_apply_damage_matches_mitigation_formula(player, settings, health, amount, defense):
    player.health = health
    player.defense = defense
    expected = clamp(health - amount * (1 - defense), 0, player.max_health)
    boosts.apply_damage(player, amount, settings)
    assert player.health == pytest.approx(expected)


def test_apply_damage_reports_health_lost(player, settings):
    player.health = 5
    assert boosts.apply_damage(player, 20, settings) == pytest.approx(5)
    assert player.health == 0


def test_shield_adds_transient_defense(player, settings):
    player.defense = 0.3
    assert boosts.defense(player, settings) == pytest.approx(0.3)
    boosts.collect(player, BoostKind.SHIELD, settings)
    assert boosts.defense(player, settings) == pytest.approx(0.55)


def test_defense_never_exceeds_ceiling(player, settings):
    stats = player.stats()
    for _ in range(20):
        stats = more_defense(stats)
    player.apply_stats(stats)
    boosts.collect(player, BoostKind.SHIELD, settings)
    assert player.defense == pytest.approx(0.6)
    assert 0.0 <= boosts.defense(player, settings) <= 0.8
    assert boosts.defense(player, settings) == pytest.approx(0.8)


def test_collect_sets_duration_instead_of_adding(player, settings):
    boosts.collect(player, BoostKind.SPEED, settings)
    boosts.decay(player, 3.0)
    assert player.boost_timers[BoostKind.SPEED] == pytest.approx(7.0)
    boosts.collect(player, BoostKind.SPEED, settings)
    assert player.boost_timers[BoostKind.SPEED] == pytest.approx(settings.boost_duration)


def test_decay_floors_at_zero(player, settings):
    boosts.collect(player, BoostKind.DAMAGE, settings)
    boosts.decay(player, 25.0)
    assert all(v == 0.0 for v in player.boost_timers.values())


def test_speed_and_damage_multipliers(player, settings):
    assert boosts.move_speed(player, settings) == pytest.approx(230)
    assert boosts.bullet_damage(player, settings) == pytest.approx(34)
    boosts.collect(player, BoostKind.SPEED, settings)
    boosts.collect(player, BoostKind.DAMAGE, settings)
    assert boosts.move_speed(player, settings) == pytest.approx(230 * 1.35)
    assert boosts.bullet_damage(player, settings) == pytest.approx(34 * 1.35)
