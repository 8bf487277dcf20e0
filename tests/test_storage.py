"""Unit tests for JSON persistence and engine config."""

import json

import pytest
from sudoku_engine.config import EngineConfig
from sudoku_engine.game import GameSession, LivesState
from sudoku_engine.storage import JsonFileStore, GameStorage


class TestJsonFileStore:

    def test_missing_file_loads_none(self, tmp_path):
        assert JsonFileStore(str(tmp_path / "absent.json")).load() is None

    def test_save_and_load(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "nested" / "state.json"))
        store.save({"lives": 3, "notes": [1, 2]})
        assert store.load() == {"lives": 3, "notes": [1, 2]}
        assert not (tmp_path / "nested" / "state.json.tmp").exists()

    def test_failed_save_keeps_previous_file(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "state.json"))
        store.save({"lives": 3})

        with pytest.raises(TypeError):
            store.save({"lives": 3, "when": object()})

        assert store.load() == {"lives": 3}
        assert not (tmp_path / "state.json.tmp").exists()

    def test_corrupt_file_loads_none(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        assert JsonFileStore(str(path)).load() is None

    def test_clear(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "state.json"))
        store.save([1])
        store.clear()
        assert store.load() is None
        store.clear()


class TestGameStorage:

    def test_named_stores(self, tmp_path):
        storage = GameStorage(str(tmp_path))
        storage.lives.save(LivesState(lives=2, last_loss_timestamp=10.0).to_dict())
        storage.settings.save({"sound": False})

        assert LivesState.from_dict(storage.lives.load()).lives == 2
        assert (tmp_path / "settings.json").exists()

        storage.clear_all()
        assert storage.lives.load() is None
        assert storage.settings.load() is None

    def test_session_survives_restart(self, tmp_path, puzzle):
        storage = GameStorage(str(tmp_path))
        session = GameSession(puzzle, store=storage.game_state)
        session.place_at(0, 2, 4)
        session.toggle_note_at(0, 3, 6)

        resumed = GameSession.resume_or_new(GameStorage(str(tmp_path)).game_state)
        assert resumed.board == session.board
        assert len(resumed.history) == 2

    def test_corrupt_session_file_starts_fresh(self, tmp_path):
        (tmp_path / "game_state.json").write_text("garbage")
        storage = GameStorage(str(tmp_path))
        session = GameSession.resume_or_new(storage.game_state)
        assert session.values().count_empty() == 45


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert config.history_limit == 50
        assert config.max_lives == 5
        assert config.life_regen_seconds == 1800
        assert config.time_limit_seconds == 600
        assert config.time_extension_seconds == 300

    def test_from_dict_ignores_unknown(self):
        config = EngineConfig.from_dict({"max_lives": "3", "colour": "blue"})
        assert config.max_lives == 3
        assert config.history_limit == 50

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            EngineConfig.from_dict({"history_limit": 0})

    def test_from_file(self, tmp_path):
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"time_limit_seconds": 900}))
        assert EngineConfig.from_file(str(path)).time_limit_seconds == 900

    def test_missing_file_gives_defaults(self, tmp_path):
        assert EngineConfig.from_file(str(tmp_path / "nope.json")) == EngineConfig()
        assert EngineConfig.from_file(None) == EngineConfig()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
