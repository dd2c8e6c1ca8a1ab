import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import json
import time

import pytest

import dawg_codec
from dawg import build_dictionary
from dawg_codec import MalformedRecordError
from dict_cache import load_cached, open_dictionary


def write_source(tmp_path, words):
    path = tmp_path / "OWL2.json"
    path.write_text(json.dumps({w: "" for w in words}), encoding="utf-8")
    return str(path)


def test_builds_and_writes_cache(tmp_path):
    source = write_source(tmp_path, ["dog", "cat"])
    cache = str(tmp_path / "cached.dict")
    d = open_dictionary(source, cache_path=cache)
    assert list(d.words()) == ["cat", "dog"]
    assert os.path.exists(cache)
    assert list(dawg_codec.load_path(cache).words()) == ["cat", "dog"]


def test_reads_cache_without_source(tmp_path):
    cache = str(tmp_path / "cached.dict")
    dawg_codec.save_path(build_dictionary(["owl"]), cache)
    d = open_dictionary(None, cache_path=cache)
    assert list(d.words()) == ["owl"]


def test_corrupt_cache_falls_back_to_source(tmp_path, capsys):
    source = write_source(tmp_path, ["cat"])
    cache = tmp_path / "cached.dict"
    cache.write_text("[0] 0:9;", encoding="utf-8")
    d = open_dictionary(source, cache_path=str(cache))
    assert list(d.words()) == ["cat"]
    assert "Ignoring dictionary cache" in capsys.readouterr().out
    assert list(dawg_codec.load_path(str(cache)).words()) == ["cat"]


def test_empty_cache_is_ignored(tmp_path):
    cache = tmp_path / "cached.dict"
    cache.write_text("", encoding="utf-8")
    assert load_cached(str(cache)) is None
    assert load_cached(str(tmp_path / "missing.dict")) is None


def test_stale_cache_is_rebuilt(tmp_path):
    cache = str(tmp_path / "cached.dict")
    dawg_codec.save_path(build_dictionary(["old"]), cache)
    source = write_source(tmp_path, ["new"])
    past = time.time() - 60
    os.utime(cache, (past, past))
    assert list(open_dictionary(source, cache_path=cache).words()) == ["new"]


def test_no_cache_leaves_disk_alone(tmp_path):
    source = write_source(tmp_path, ["cat"])
    cache = str(tmp_path / "cached.dict")
    assert list(open_dictionary(source, cache_path=cache, use_cache=False).words()) == ["cat"]
    assert not os.path.exists(cache)


def test_compiled_source_is_loaded_directly(tmp_path):
    compiled = str(tmp_path / "words.dict")
    dawg_codec.save_path(build_dictionary(["emu"]), compiled)
    assert list(open_dictionary(compiled, cache_path=None).words()) == ["emu"]
    (tmp_path / "bad.dict").write_text("[0", encoding="utf-8")
    with pytest.raises(MalformedRecordError):
        open_dictionary(str(tmp_path / "bad.dict"))
