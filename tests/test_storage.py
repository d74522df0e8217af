"""Tests for high-score persistence."""

import json

from lava_runner.config import GameConfig
from lava_runner.engine import RunnerEngine
from lava_runner.storage import JsonHighScoreStore, MemoryHighScoreStore


class TestMemoryStore:
    def test_roundtrip(self):
        store = MemoryHighScoreStore(initial=40)
        assert store.get_high_score() == 40
        store.set_high_score(90)
        assert store.get_high_score() == 90


class TestJsonStore:
    def test_missing_file_reads_zero(self, tmp_path):
        store = JsonHighScoreStore(tmp_path / "scores" / "high.json")
        assert store.get_high_score() == 0
        assert not store.degraded

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "scores" / "high.json"
        JsonHighScoreStore(path).set_high_score(1234)

        assert json.loads(path.read_text()) == {"high_score": 1234}
        assert JsonHighScoreStore(path).get_high_score() == 1234

    def test_corrupt_file_degrades(self, tmp_path, caplog):
        path = tmp_path / "high.json"
        path.write_text("{not json")

        store = JsonHighScoreStore(path)
        assert store.get_high_score() == 0
        assert store.degraded
        assert "Could not read high score" in caplog.text

    def test_degraded_store_keeps_value_in_memory(self, tmp_path):
        path = tmp_path / "high.json"
        path.write_text("[1, 2, 3]")

        store = JsonHighScoreStore(path)
        store.get_high_score()
        store.set_high_score(77)

        assert store.get_high_score() == 77
        # The bad file is left untouched
        assert path.read_text() == "[1, 2, 3]"

    def test_unwritable_path_degrades(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        # Parent "directory" is a regular file
        store = JsonHighScoreStore(blocker / "high.json")

        store.set_high_score(10)

        assert store.degraded
        assert store.get_high_score() == 10
        assert "Could not write high score" in caplog.text

    def test_non_finite_score_degrades(self, tmp_path):
        path = tmp_path / "high.json"
        path.write_text('{"high_score": Infinity}')

        store = JsonHighScoreStore(path)

        assert store.get_high_score() == 0
        assert store.degraded

    def test_engine_starts_with_unreadable_score(self, tmp_path):
        path = tmp_path / "high.json"
        path.write_text('{"high_score": -Infinity}')

        engine = RunnerEngine(GameConfig(), store=JsonHighScoreStore(path), seed=1)

        assert engine.running
        assert engine.state.high_score == 0

    def test_reads_file_once(self, tmp_path):
        path = tmp_path / "high.json"
        path.write_text(json.dumps({"high_score": 5}))
        store = JsonHighScoreStore(path)
        assert store.get_high_score() == 5

        path.write_text(json.dumps({"high_score": 999}))
        assert store.get_high_score() == 5
