"""Unit tests for saved grid snapshots."""

import json
import os

import pytest
from binairo.core.board import BinairoBoard
from binairo.storage import GameStore


PUZZLE_6 = (
    "1..1.1"
    ".1..1."
    "1.0..0"
    "..1.0."
    "0.1..1"
    ".0.1.0"
)


class TestGameStore:
    """Tests for GameStore."""

    def test_save_and_load(self, tmp_path):
        store = GameStore(str(tmp_path / "saves"))
        board = BinairoBoard.from_string(PUZZLE_6)

        identifier = store.save(board)

        assert identifier.startswith("binairo_6x6_")
        assert identifier.endswith(".json")
        loaded = store.load(identifier)
        assert loaded == board
        assert loaded.get_domain(0, 0) == [1]

    def test_file_contents(self, tmp_path):
        store = GameStore(str(tmp_path))
        identifier = store.save(BinairoBoard.from_string(PUZZLE_6))
        with open(tmp_path / identifier) as f:
            data = json.load(f)
        assert data["size"] == 6
        assert data["grid"] == PUZZLE_6
        assert "saved_at" in data

    def test_identifiers_do_not_collide(self, tmp_path):
        """Saves made within the same second get distinct names."""
        store = GameStore(str(tmp_path))
        first = store.save(BinairoBoard(4))
        second = store.save(BinairoBoard(6))
        third = store.save(BinairoBoard(4))
        assert len({first, second, third}) == 3
        assert sorted(store.list()) == sorted([first, second, third])

    def test_list_missing_directory(self, tmp_path):
        store = GameStore(str(tmp_path / "nowhere"))
        assert store.list() == []

    def test_list_ignores_other_files(self, tmp_path):
        (tmp_path / "notes.txt").write_text("hello")
        store = GameStore(str(tmp_path))
        identifier = store.save(BinairoBoard(4))
        assert store.list() == [identifier]

    def test_load_missing(self, tmp_path):
        store = GameStore(str(tmp_path))
        assert store.load("binairo_4x4_missing.json") is None

    def test_load_malformed(self, tmp_path):
        store = GameStore(str(tmp_path))
        (tmp_path / "binairo_bad.json").write_text("{not json")
        (tmp_path / "binairo_short.json").write_text(json.dumps({"size": 4, "grid": "01"}))
        (tmp_path / "binairo_nogrid.json").write_text(json.dumps({"size": 4}))
        assert store.load("binairo_bad.json") is None
        assert store.load("binairo_short.json") is None
        assert store.load("binairo_nogrid.json") is None

    def test_identifier_cannot_escape_directory(self, tmp_path):
        inner = tmp_path / "saves"
        store = GameStore(str(inner))
        identifier = store.save(BinairoBoard(4))
        os.replace(inner / identifier, tmp_path / identifier)
        assert store.load(os.path.join("..", identifier)) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
