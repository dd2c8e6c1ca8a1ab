# wordle.py
# Enumerate five-letter answers consistent with Wordle clues by walking the
# dictionary one position at a time.

from collections import namedtuple
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set

from dawg import Dictionary, Node, Trace
from letters import ALPHABET_SIZE, Letter, spell
from utils import WORD_LENGTH

UNKNOWN = "-._?"


class ClueKind(Enum):
    FIXED = "green"      # letter sits at this position
    INCLUDED = "yellow"  # letter is somewhere in the answer
    EXCLUDED = "gray"    # letter is not in the answer


Clue = namedtuple("Clue", ["kind", "letter", "position"])


class ClueError(ValueError):
    pass


def fixed(ch: str, position: int) -> Clue:
    if not 0 <= position < WORD_LENGTH:
        raise ClueError(f"position {position} outside a {WORD_LENGTH}-letter word")
    return Clue(ClueKind.FIXED, _letter(ch), position)


def included(ch: str) -> Clue:
    return Clue(ClueKind.INCLUDED, _letter(ch), None)


def excluded(ch: str) -> Clue:
    return Clue(ClueKind.EXCLUDED, _letter(ch), None)


def _letter(ch) -> Letter:
    if isinstance(ch, Letter):
        return ch
    try:
        return Letter.from_char(ch)
    except ValueError as e:
        raise ClueError(str(e)) from None


# ---------- Clue parsing ----------

def clues_from_pattern(pattern: Optional[str] = None, include: str = "", exclude: str = "") -> List[Clue]:
    """
    Clues from the command-line form: a pattern such as ``--b--`` (``-`` for
    an unknown square, a letter for a green one) plus letters known to be in
    and out of the answer.
    """
    clues = []
    if pattern:
        if len(pattern) != WORD_LENGTH:
            raise ClueError(f"pattern must be {WORD_LENGTH} characters long, got {pattern!r}")
        for i, ch in enumerate(pattern):
            if ch not in UNKNOWN:
                clues.append(fixed(ch, i))
    clues.extend(included(ch) for ch in include if not ch.isspace() and ch != ",")
    clues.extend(excluded(ch) for ch in exclude if not ch.isspace() and ch != ",")
    return clues


def clues_from_guesses(guesses: Iterable[str]) -> List[Clue]:
    """
    Clues from previous guesses written as ``[x]`` for a letter in the right
    spot, ``(x)`` for a letter in the word but elsewhere, and a bare letter
    for one not in the word, e.g. ``"bl[i]nd"`` or ``"(th)[r](e)e"``.

    A letter marked absent is only excluded if no other square shows it in
    the word (a repeated guess letter can be gray once and yellow elsewhere).
    """
    clues = []
    present: Set[Letter] = set()
    absent: List[Letter] = []
    for guess in guesses:
        kind = ClueKind.EXCLUDED
        position = 0
        for ch in guess:
            if ch in "[(":
                if kind is not ClueKind.EXCLUDED:
                    raise ClueError(f"nested bracket in guess {guess!r}")
                kind = ClueKind.FIXED if ch == "[" else ClueKind.INCLUDED
                continue
            if ch in "])":
                kind = ClueKind.EXCLUDED
                continue
            letter = _letter(ch)
            if kind is ClueKind.FIXED:
                clues.append(fixed(letter, position))
                present.add(letter)
            elif kind is ClueKind.INCLUDED:
                clues.append(included(letter))
                present.add(letter)
            else:
                absent.append(letter)
            position += 1
        if kind is not ClueKind.EXCLUDED:
            raise ClueError(f"unclosed bracket in guess {guess!r}")
        if position != WORD_LENGTH:
            raise ClueError(f"guess {guess!r} does not have {WORD_LENGTH} letters")
    seen = set()
    for letter in absent:
        if letter not in present and letter not in seen:
            seen.add(letter)
            clues.append(excluded(letter))
    return clues


# ---------- Search ----------

def letter_choices(placed: Sequence[Letter], known: Optional[Letter],
                   include: Iterable[Letter], allowed: Sequence[bool]) -> List[Letter]:
    """Letters worth trying at position ``len(placed)``."""
    if known is not None:
        return [known]

    # Once the letters still owed fill every remaining square, nothing else fits.
    owed = set(include).difference(placed)
    if len(owed) >= WORD_LENGTH - len(placed):
        return sorted(owed)

    return [Letter(pos) for pos, ok in enumerate(allowed) if ok]


def solve(clues: Iterable[Clue], dictionary: Dictionary, trace: Trace = None) -> Set[str]:
    known: List[Optional[Letter]] = [None] * WORD_LENGTH
    include: List[Letter] = []
    allowed = [True] * ALPHABET_SIZE
    for clue in clues:
        if clue.kind is ClueKind.EXCLUDED:
            allowed[clue.letter] = False
        elif clue.kind is ClueKind.INCLUDED:
            include.append(clue.letter)
        else:
            known[clue.position] = clue.letter

    found = set()
    work: List[Letter] = []

    def search(node: Node):
        if len(work) == WORD_LENGTH:
            if node.terminal:
                found.add(tuple(work))
            return
        choices = letter_choices(work, known[len(work)], include, allowed)
        if trace:
            trace(f"  {spell(work) or '.'}: trying {spell(choices)}")
        for letter in choices:
            child = node.children[letter]
            if child is not None:
                work.append(letter)
                search(child)
                work.pop()

    search(dictionary.root)
    return {spell(seq) for seq in found}
