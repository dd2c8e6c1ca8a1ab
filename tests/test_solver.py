import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import json

import pytest

import dawg_codec
import utils
from solver import run_solver

WORDS = {
    "tenets": "principles",
    "honey": ["sweet stuff", "a term of endearment"],
    "facts": "things known",
    "aabee": "",
    "aebea": "",
    "bebee": "",
}
BOARD = "taeyl\neohak\nyneit\nyteyl\nshaig\n"


@pytest.fixture
def files(tmp_path):
    source = tmp_path / "OWL2.json"
    source.write_text(json.dumps(WORDS), encoding="utf-8")
    board = tmp_path / "board.txt"
    board.write_text(BOARD, encoding="utf-8")
    return tmp_path, str(source), str(board)


@pytest.fixture(autouse=True)
def quiet():
    yield
    utils.VERBOSE = False


def test_boggle_command(files, capsys):
    _, source, board = files
    assert run_solver(["boggle", "--no-cache", "-d", source, "--min-length", "3", "--defs",
                       "--defs-dict", source, board]) == 0
    out = capsys.readouterr().out
    assert "Found 2 words, 5 points" in out
    assert "  3 tenets  principles" in out
    assert "  2 honey  sweet stuff; a term of endearment" in out


def test_boggle_default_min_length_on_5x5(files, capsys):
    _, source, board = files
    assert run_solver(["boggle", "--no-cache", "-d", source, board]) == 0
    assert "Found 2 words" in capsys.readouterr().out


def test_boggle_bad_board(files, capsys):
    tmp_path, source, _ = files
    bad = tmp_path / "bad.txt"
    bad.write_text("abcd\nefgh\n", encoding="utf-8")
    assert run_solver(["boggle", "--no-cache", "-d", source, str(bad)]) == 1
    assert "found 8" in capsys.readouterr().out


def test_wordle_command(files, capsys):
    _, source, _ = files
    exclude = "cdfghijklmnopqrstuvwxyz"
    assert run_solver(["wordle", "--no-cache", "-d", source, "-i", "ea", "-e", exclude, "..b.."]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-2:] == ["aabee", "aebea"]
    assert "2 possible words" in lines[-3]


def test_wordle_guess_notation(files, capsys):
    _, source, _ = files
    assert run_solver(["wordle", "--no-cache", "-d", source, "-g", "(a)[e]xyz"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "aebea"


def test_summarize_command(files, capsys):
    tmp_path, source, board = files
    other = tmp_path / "a_board.txt"
    other.write_text("hone\nxxxy\nxxxx\nxxxx\n", encoding="utf-8")
    assert run_solver(["summarize", "--no-cache", "-d", source, "--sort", "score", board, str(other)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith(board)
    assert "2 words" in lines[0] and "5 points" in lines[0]
    assert lines[1].startswith(str(other))
    assert "1 words" in lines[1] and "2 points" in lines[1]


def test_compile_command(files, capsys):
    tmp_path, source, _ = files
    out = str(tmp_path / "out.dict")
    assert run_solver(["compile", source, out]) == 0
    assert sorted(dawg_codec.load_path(out).words()) == sorted(WORDS)
    assert run_solver(["compile", source, out]) == 1
    assert "already exists" in capsys.readouterr().out
    assert run_solver(["compile", "-f", source, out]) == 0


def test_compiled_dictionary_and_cache(files, capsys):
    tmp_path, source, board = files
    cache = str(tmp_path / "cached.dict")
    assert run_solver(["--verbose", "boggle", "-d", source, "--cache", cache, board]) == 0
    assert os.path.exists(cache)
    assert run_solver(["boggle", "-d", cache, board]) == 0
    assert "Found 2 words" in capsys.readouterr().out


def test_verbose_traces_the_builder(files, capsys):
    _, source, _ = files
    assert run_solver(["--verbose", "wordle", "--no-cache", "-d", source, "-g", "(a)[e]xyz"]) == 0
    out = capsys.readouterr().out
    assert "inserting 'aabee'" in out
    assert "finished: 6 words" in out


def test_missing_source_reports_error(tmp_path, capsys):
    missing = str(tmp_path / "nope.json")
    assert run_solver(["wordle", "--no-cache", "-d", missing]) == 1
    assert "nope.json" in capsys.readouterr().out
