import pytest

from survivor.entities import PlayerStats
from survivor.errors import UpgradeSelectionError
from survivor.events import GameEvent
from survivor.progression import Progression, next_threshold
from survivor.settings import SimSettings
from survivor.state import Phase
from survivor.upgrades import (
    UPGRADES,
    UPGRADES_BY_KIND,
    UpgradeKind,
    draw_upgrades,
    faster_fire,
    more_defense,
    more_health,
)
from survivor.utils import SequenceRandom, make_rng


@pytest.fixture
def progression(settings, events):
    return Progression(settings, make_rng(11), events)


def test_threshold_grows_geometrically():
    assert next_threshold(100, 1.2) == 120
    assert next_threshold(120, 1.2) == 144
    assert next_threshold(144, 1.2) == 173


def test_large_gain_triggers_consecutive_level_ups(progression, state, events):
    levels = []
    events.subscribe(GameEvent.LEVEL_UP, lambda level, **kw: levels.append(level))
    p = state.player
    p.xp = 100

    gained = progression.gain_xp(state, 250)

    assert gained == 2
    assert levels == [2, 3]
    assert p.level == 3
    assert p.xp == pytest.approx(130)
    assert p.xp_to_level == 144
    assert len(state.pending_upgrades) == 2
    assert state.phase is Phase.PAUSED_FOR_UPGRADE


def test_small_gain_does_not_level(progression, state):
    assert progression.gain_xp(state, 99) == 0
    assert state.phase is Phase.RUNNING
    assert state.pending_upgrades == []


def test_offer_has_three_distinct_upgrades(progression, state):
    progression.gain_xp(state, 100)
    offer = progression.current_offer(state)
    assert len(offer) == 3
    assert len({u.kind for u in offer}) == 3


def test_menus_resolve_one_at_a_time(progression, state):
    progression.gain_xp(state, 100 + 120)
    assert len(state.pending_upgrades) == 2
    second_kinds = list(state.pending_upgrades[1])

    progression.choose(state, 0)
    assert state.phase is Phase.PAUSED_FOR_UPGRADE
    assert [u.kind for u in progression.current_offer(state)] == second_kinds

    progression.choose(state, 2)
    assert state.phase is Phase.RUNNING


def test_choice_applies_effect_exactly_once(settings, events, state):
    # Roll 0.0 keeps catalog order: fire-rate, speed, health
    progression = Progression(settings, SequenceRandom([0.0]), events)
    progression.gain_xp(state, 100)
    assert [u.kind for u in progression.current_offer(state)] == [
        UpgradeKind.FIRE_RATE, UpgradeKind.SPEED, UpgradeKind.HEALTH,
    ]

    upgrade = progression.choose(state, 1)
    assert upgrade.kind is UpgradeKind.SPEED
    assert state.player.speed == 255
    assert state.phase is Phase.RUNNING


def test_choose_without_menu_raises(progression, state):
    with pytest.raises(UpgradeSelectionError):
        progression.choose(state, 0)


def test_out_of_range_choice_keeps_menu_open(progression, state):
    progression.gain_xp(state, 100)
    before = list(state.pending_upgrades)
    with pytest.raises(ValueError):
        progression.choose(state, 3)
    assert state.pending_upgrades == before
    assert state.player.speed == 230


def test_draw_upgrades_without_replacement():
    rng = make_rng(0)
    for _ in range(50):
        drawn = draw_upgrades(rng, 3)
        assert len({u.kind for u in drawn}) == 3
    assert len(draw_upgrades(rng, 10)) == len(UPGRADES)


def _stats(**kw):
    base = dict(speed=230.0, health=100.0, max_health=100.0, damage=34.0, fire_rate=0.35, defense=0.0)
    base.update(kw)
    return PlayerStats(**base)


def test_upgrade_effects_are_pure():
    stats = _stats()
    for upgrade in UPGRADES:
        upgrade.effect(stats)
    assert stats == _stats()


def test_fire_rate_has_floor():
    assert faster_fire(_stats(fire_rate=0.35)).fire_rate == pytest.approx(0.2975)
    assert faster_fire(_stats(fire_rate=0.17)).fire_rate == pytest.approx(0.16)


def test_defense_upgrade_caps():
    stats = _stats(defense=0.55)
    assert more_defense(stats).defense == pytest.approx(0.6)


def test_health_upgrade_raises_current_and_max():
    stats = more_health(_stats(health=50.0))
    assert stats.max_health == 120
    assert stats.health == 70
    assert more_health(_stats()).health == 120


def test_damage_upgrade():
    assert UPGRADES_BY_KIND[UpgradeKind.DAMAGE].effect(_stats()).damage == 42


def test_defense_cap_follows_settings(events, state):
    progression = Progression(SimSettings(max_upgrade_defense=0.3), make_rng(0), events)
    for _ in range(10):
        state.pending_upgrades.append([UpgradeKind.DEFENSE])
        progression.choose(state, 0)
    assert state.player.defense == pytest.approx(0.3)
