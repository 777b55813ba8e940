import json
from unittest.mock import patch

import pytest

from lexis.domain.errors import PersistenceError
from lexis.infrastructure.persistence import JsonStateRepository


def test_missing_file_loads_empty_state(tmp_path):
    repo = JsonStateRepository(tmp_path / "nope" / "state.json")

    state = repo.load()

    assert state.cards == {}
    assert len(state.vocabulary) == 0
    assert not repo.exists()


def test_save_then_load(tmp_path, state, make_card):
    state.cards["vocab_001"] = make_card("vocab_001", repetitions=2, interval=6)
    repo = JsonStateRepository(tmp_path / "deep" / "dir" / "state.json")

    repo.save(state)
    loaded = repo.load()

    assert repo.exists()
    assert loaded.cards == state.cards
    assert len(loaded.vocabulary) == 4
    # Written as readable UTF-8, not ASCII escapes.
    assert "olá" in repo.path.read_text(encoding="utf-8")
    assert list(repo.path.parent.glob("*.tmp")) == []


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{ this is not json", encoding="utf-8")

    with pytest.raises(PersistenceError):
        JsonStateRepository(path).load()


def test_failed_write_keeps_previous_state(tmp_path, state):
    repo = JsonStateRepository(tmp_path / "state.json")
    repo.save(state)
    before = repo.path.read_text(encoding="utf-8")

    with patch(
        "lexis.infrastructure.persistence.repository.os.replace",
        side_effect=OSError("disk full"),
    ):
        with pytest.raises(PersistenceError, match="disk full"):
            repo.save(state)

    assert repo.path.read_text(encoding="utf-8") == before
    assert json.loads(before)["version"] == 1
    assert list(tmp_path.glob("*.tmp")) == []
