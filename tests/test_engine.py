import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from dict_filter import masker
from dict_filter.config import FilterConfig
from dict_filter.engine import FilterEngine
from dict_filter.errors import LoadError


def test_reload_publishes_new_version(dict_dir: Path):
    engine = FilterEngine(FilterConfig(dict_path=str(dict_dir / "*.txt")))
    assert engine.snapshot.version == 0
    assert engine.exists("bad") is False

    assert engine.reload() == 4
    assert engine.snapshot.version == 1
    assert engine.exists("so BAD") is True
    assert engine.validate("so BAD") is False
    assert engine.filter("so BAD") == "so ***"

    engine.reload()
    assert engine.snapshot.version == 2


def test_failed_reload_keeps_previous(dict_dir: Path, tmp_path: Path):
    engine = FilterEngine(FilterConfig(require_files=True))
    engine.reload(str(dict_dir / "*.txt"))
    before = engine.snapshot

    with pytest.raises(LoadError):
        engine.reload(str(tmp_path / "nothing" / "*.txt"))
    with pytest.raises(LoadError):
        engine.reload("bad\x00pattern")

    assert engine.snapshot is before
    assert engine.exists("bad")


def test_lookup_uses_snapshot_it_started_with(tmp_path: Path):
    (tmp_path / "old.txt").write_text("old\n", encoding="utf-8")
    (tmp_path / "new.txt").write_text("new\n", encoding="utf-8")
    engine = FilterEngine()
    engine.reload(str(tmp_path / "old.txt"))

    in_flight = engine.snapshot
    engine.reload(str(tmp_path / "new.txt"))

    assert masker.filter_text(in_flight, "old new") == "*** new"
    assert engine.filter("old new") == "old ***"


def test_concurrent_lookups_during_reloads(tmp_path: Path):
    (tmp_path / "a.txt").write_text("alpha\n", encoding="utf-8")
    (tmp_path / "b.txt").write_text("beta\n", encoding="utf-8")
    engine = FilterEngine()
    engine.reload(str(tmp_path / "a.txt"))
    text = "alpha beta"
    allowed = {"***** beta", "alpha ****"}
    stop = threading.Event()

    def writer():
        i = 0
        while not stop.is_set():
            engine.reload(str(tmp_path / ("b.txt" if i % 2 == 0 else "a.txt")))
            i += 1

    def reader(_):
        return {engine.filter(text) for _ in range(200)}

    t = threading.Thread(target=writer)
    t.start()
    try:
        with ThreadPoolExecutor(max_workers=4) as pool:
            seen = set().union(*pool.map(reader, range(8)))
    finally:
        stop.set()
        t.join()

    assert seen <= allowed


def test_independent_engines():
    a = FilterEngine.from_words(["apple"])
    b = FilterEngine.from_words(["banana"])
    assert a.exists("Apple pie") and not a.exists("banana split")
    assert b.exists("banana split") and not b.exists("Apple pie")


def test_placeholder_from_config():
    engine = FilterEngine.from_words(["bad"], FilterConfig(placeholder="#"))
    assert engine.filter("not bad") == "not ###"


def test_stats(dict_dir: Path, backend):
    engine = FilterEngine(FilterConfig(backend=backend))
    engine.reload(str(dict_dir / "*.txt"))
    stats = engine.stats()
    assert stats["word_count"] == 4
    assert stats["version"] == 1
    assert stats["backend"] == backend
    assert len(stats["sources"]) == 2
    assert stats["warnings"] == []


def test_find_spans():
    engine = FilterEngine.from_words(["ab", "abc"])
    assert [(s.start, s.end, s.word) for s in engine.find("xABCx")] == [(1, 3, "ab"), (1, 4, "abc")]


def test_empty_pattern_does_not_fall_back_to_config(dict_dir: Path):
    engine = FilterEngine(FilterConfig(dict_path=str(dict_dir / "*.txt")))
    with pytest.raises(LoadError):
        engine.reload("")
    assert engine.snapshot.version == 0
    assert engine.exists("bad") is False


def test_initial_snapshot_uses_configured_backend(backend):
    engine = FilterEngine(FilterConfig(backend=backend))
    assert engine.stats()["backend"] == backend
    assert engine.stats()["word_count"] == 0
    assert engine.filter("anything") == "anything"
