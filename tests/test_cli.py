import pytest
from rich.console import Console

from pokestack import cli
from pokestack.core.logging import logger
from pokestack.system.settings import Settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(Settings, "_resolve_path", classmethod(lambda cls: tmp_path / "settings.json"))
    monkeypatch.setattr(cli, "console", Console(width=200))
    yield
    logger.set_level("WARN")


def test_spawn(capsys):
    assert cli.run(["--seed", "3", "spawn", "--name", "eevee", "--level", "20", "--count", "2"]) == 0
    out = capsys.readouterr().out
    assert "Eevee" in out


def test_capture(capsys):
    assert cli.run(["--seed", "3", "capture", "--level", "10"]) == 0
    assert "Capture" in capsys.readouterr().out


def test_battle(capsys):
    assert cli.run(["--seed", "9", "battle", "--offense", "2", "--defense", "3"]) == 0
    assert "wins after" in capsys.readouterr().out


def test_battle_with_empty_team_fails(capsys):
    assert cli.run(["battle", "--offense", "0"]) == 1


def test_species_lookup(capsys):
    assert cli.run(["species", "mew"]) == 0
    assert "151" in capsys.readouterr().out


def test_unknown_species_reports_error(capsys):
    assert cli.run(["spawn", "--name", "agumon"]) == 1
