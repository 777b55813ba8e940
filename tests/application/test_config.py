from pathlib import Path

import pytest
from pydantic import ValidationError

from lexis.application.config import AppConfig, resolve_config


def test_defaults(mock_home):
    config = resolve_config()

    assert config.state_file == mock_home / ".local/share/lexis/state.json"
    assert config.weak_ease_threshold == 2.0
    assert config.weak_accuracy_threshold == 60.0
    assert config.session_limit == 20
    assert config.search_limit is None


def test_toml_file(mock_home):
    cfg = mock_home / ".config/lexis/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text('weak_ease_threshold = 1.8\nsession_limit = 5\nstate_file = "~/cards.json"\n')

    config = resolve_config()

    assert config.weak_ease_threshold == 1.8
    assert config.session_limit == 5
    assert config.state_file == mock_home / "cards.json"


def test_env_overrides_file(mock_home, monkeypatch):
    (mock_home / ".lexis.toml").write_text("session_limit = 5\n")
    monkeypatch.setenv("LEXIS_SESSION_LIMIT", "12")

    assert resolve_config().session_limit == 12


def test_cli_overrides_win_and_none_is_ignored(mock_home, monkeypatch, tmp_path):
    monkeypatch.setenv("LEXIS_STATE_FILE", str(tmp_path / "env.json"))

    config = resolve_config({"state_file": tmp_path / "cli.json", "search_limit": None})

    assert config.state_file == tmp_path / "cli.json"
    assert config.search_limit is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"weak_ease_threshold": 3.0},
        {"weak_ease_threshold": 1.0},
        {"weak_accuracy_threshold": 120.0},
        {"session_limit": 0},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        AppConfig(**overrides)


def test_state_file_path_type():
    assert isinstance(resolve_config({"state_file": "x.json"}).state_file, Path)
