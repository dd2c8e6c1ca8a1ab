import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import pytest

from dawg import build_dictionary
from letters import ALPHABET, Letter, spell, to_letters
from wordle import (
    Clue,
    ClueError,
    ClueKind,
    clues_from_guesses,
    clues_from_pattern,
    excluded,
    fixed,
    included,
    letter_choices,
    solve,
)

WORDS = ["aabee", "abbey", "aebea", "bebee", "crabs", "ebbed", "eebaa"]
ONLY_ABE = "".join(ch for ch in ALPHABET if ch not in "abe")


def test_pattern_include_exclude():
    d = build_dictionary(WORDS)
    clues = clues_from_pattern("--b--", include="ea", exclude=ONLY_ABE)
    assert solve(clues, d) == {"aabee", "aebea", "eebaa"}


def test_no_clues_lists_every_five_letter_word():
    d = build_dictionary(WORDS + ["bee", "abbeys"])
    assert solve([], d) == set(WORDS)


def test_owed_letters_take_over_when_slots_run_out():
    include = to_letters("ea")
    allowed = [True] * 26
    assert len(letter_choices([], None, include, allowed)) == 26
    assert spell(letter_choices(to_letters("bbb"), None, include, allowed)) == "ae"
    assert len(letter_choices(to_letters("bba"), None, include, allowed)) == 26
    assert spell(letter_choices(to_letters("bbab"), None, include, allowed)) == "e"


def test_fixed_letter_wins():
    include = to_letters("ea")
    z = Letter.from_char("z")
    assert letter_choices(to_letters("bbbb"), z, include, [True] * 26) == [z]


def test_excluded_letters_are_skipped():
    allowed = [ch in "abe" for ch in ALPHABET]
    assert spell(letter_choices([], None, [], allowed)) == "abe"


def test_trace_shows_forced_letters():
    d = build_dictionary(WORDS)
    lines = []
    solve(clues_from_pattern("--b--", include="ea", exclude=ONLY_ABE), d, trace=lines.append)
    assert "  bebe: trying a" in lines
    assert "  .: trying abe" in lines


def test_clues_from_pattern():
    assert clues_from_pattern("--b--") == [Clue(ClueKind.FIXED, Letter.from_char("b"), 2)]
    assert clues_from_pattern("..b.?", include="e, a") == [
        fixed("b", 2), included("e"), included("a"),
    ]
    assert clues_from_pattern(None, exclude="xy") == [excluded("x"), excluded("y")]
    with pytest.raises(ClueError):
        clues_from_pattern("--b-")
    with pytest.raises(ClueError):
        clues_from_pattern("--b-1")
    with pytest.raises(ClueError):
        clues_from_pattern(include="e3")
    with pytest.raises(ClueError):
        fixed("a", 5)


def test_clues_from_guess_notation():
    assert clues_from_guesses(["tr[ic]k"]) == [
        fixed("i", 2), fixed("c", 3), excluded("t"), excluded("r"), excluded("k"),
    ]
    with pytest.raises(ClueError):
        clues_from_guesses(["tr[ic]ks"])


def test_unclosed_bracket_in_guess():
    for guess in ("[abcde", "ab(cde"):
        with pytest.raises(ClueError) as exc:
            clues_from_guesses([guess])
        assert "unclosed" in str(exc.value)


def test_gray_letter_seen_elsewhere_is_not_excluded():
    d = build_dictionary(["berth", "hertz", "earth", "other"])
    clues = clues_from_guesses(["g(r)oup", "(r)ails", "(th)[r](e)e"])
    assert excluded("e") not in clues
    assert included("e") in clues
    assert solve(clues, d) == {"berth", "hertz"}
