import pytest

from survivor.__main__ import main


def test_headless_run_uses_given_step(capsys):
    info = main(["--headless", "--steps", "5", "--dt", "0.05", "--seed", "1"])
    assert info["step"] == 5
    assert info["elapsed"] == pytest.approx(5 * 0.05)
    assert "Episode return" in capsys.readouterr().out


def test_non_positive_step_is_rejected():
    with pytest.raises(SystemExit):
        main(["--headless", "--dt", "0"])
