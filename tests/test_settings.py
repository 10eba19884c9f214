import pytest

from survivor.configs.survivor_config import SIM_PRESETS
from survivor.settings import SimSettings


def test_defaults():
    s = SimSettings()
    assert (s.width, s.height) == (900, 600)
    assert s.contact_dps == 18
    assert s.max_defense == 0.8


def test_partial_override():
    s = SimSettings.from_dict({"boost_duration": 4.0})
    assert s.boost_duration == 4.0
    assert s.boost_spawn_interval == 12.0


def test_unknown_key_rejected():
    with pytest.raises(ValueError, match="warp_speed"):
        SimSettings.from_dict({"warp_speed": 9})


@pytest.mark.parametrize("name", sorted(SIM_PRESETS))
def test_presets_are_valid(name):
    SimSettings.from_dict(SIM_PRESETS[name])


@pytest.mark.parametrize("key, value", [
    ("difficulty_interval", 0),
    ("base_spawn_interval", -1.0),
    ("shooter_interval", 0.0),
])
def test_non_positive_interval_rejected(key, value):
    with pytest.raises(ValueError, match=key):
        SimSettings.from_dict({key: value})
