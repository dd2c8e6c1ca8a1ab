# boggle.py
# Word search on a Boggle grid, walking the board and the dictionary together.

from collections import namedtuple
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from colorama import Fore, Style

from dawg import Dictionary, Node, Trace
from letters import Q, U, Letter, spell
from utils import BEST_WORDS_DEFAULT, PRINT_LOCK

# letter count -> (side length, default minimum word length)
BOARD_SIZES = {16: (4, 3), 25: (5, 4)}
DEFAULT_MIN_LENGTH = 3

NEIGHBOURS = [
    (-1, -1), (-1, 0), (-1, 1),
    ( 0, -1),          ( 0, 1),
    ( 1, -1), ( 1, 0), ( 1, 1),
]

# word length -> points; anything longer scores like the last entry
SCORES = [0, 0, 0, 1, 1, 2, 3, 5, 11]

SORT_ORDERS = ("none", "name", "words", "score")

BoardSummary = namedtuple("BoardSummary", ["name", "words", "score"])


class BoardError(ValueError):
    pass


class Board:
    """
    Grid of Letters. Rows may differ in length; cell (r, c) owns bit
    ``offsets[r] + c`` of the visited mask used during search.
    """

    __slots__ = ("rows", "offsets", "cells", "min_word_length")

    def __init__(self, rows: Sequence[Sequence[Letter]], min_word_length: int = DEFAULT_MIN_LENGTH):
        self.rows: Tuple[Tuple[Letter, ...], ...] = tuple(tuple(row) for row in rows)
        offsets = []
        total = 0
        for r, row in enumerate(self.rows):
            for c, cell in enumerate(row):
                if cell.is_empty:
                    raise BoardError(f"board cell ({r}, {c}) is empty")
            offsets.append(total)
            total += len(row)
        if total == 0:
            raise BoardError("board has no letters")
        self.offsets = tuple(offsets)
        self.cells = total
        self.min_word_length = min_word_length

    @classmethod
    def from_rows(cls, rows: Iterable[str], min_word_length: int = DEFAULT_MIN_LENGTH) -> "Board":
        try:
            letters = [[Letter.from_char(ch) for ch in row] for row in rows]
        except ValueError as e:
            raise BoardError(str(e)) from e
        return cls(letters, min_word_length)

    def bit(self, r: int, c: int) -> int:
        return 1 << (self.offsets[r] + c)

    def neighbours(self, r: int, c: int):
        rows = self.rows
        for dr, dc in NEIGHBOURS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < len(rows) and 0 <= nc < len(rows[nr]):
                yield nr, nc

    def __repr__(self):
        return f"<Board {'/'.join(spell(row) for row in self.rows)}>"


def boggled(text: str) -> Board:
    """Parse board text (letters row by row, whitespace ignored) into a 4x4 or 5x5 Board."""
    letters: List[Letter] = []
    for ch in text:
        if ch.isspace():
            continue
        try:
            letters.append(Letter.from_char(ch))
        except ValueError:
            raise BoardError(f"illegal character in board: {ch!r}") from None
    if len(letters) not in BOARD_SIZES:
        raise BoardError(f"a board needs 16 or 25 letters, found {len(letters)}")
    side, min_length = BOARD_SIZES[len(letters)]
    rows = [letters[i:i + side] for i in range(0, len(letters), side)]
    return Board(rows, min_word_length=min_length)


# ---------- Search ----------

def word_text(letters: Iterable[Letter]) -> str:
    """Spell a board path, expanding each Q cell to 'qu'."""
    return "".join("qu" if l == Q else l.char for l in letters)


def find_words(dictionary: Dictionary, board: Board, min_length: Optional[int] = None,
               trace: Trace = None) -> Dict[str, int]:
    """
    Every dictionary word that can be traced through adjacent, unused cells of
    ``board``, mapped to its score. ``min_length`` overrides the board's default.
    """
    if min_length is None:
        min_length = board.min_word_length
    found = set()
    path: List[Letter] = []
    rows = board.rows

    def visit(r: int, c: int, node: Node, visited: int, length: int):
        letter = rows[r][c]
        node = node.children[letter]
        if node is None:
            return
        if letter == Q:
            node = node.children[U]
            if node is None:
                return
            length += 1
        length += 1
        visited |= board.bit(r, c)
        path.append(letter)
        if node.terminal and length >= min_length:
            found.add(tuple(path))
        for nr, nc in board.neighbours(r, c):
            if not visited & board.bit(nr, nc):
                visit(nr, nc, node, visited, length)
        path.pop()

    for r, row in enumerate(rows):
        for c in range(len(row)):
            visit(r, c, dictionary.root, 0, 0)

    words = {}
    for seq in found:
        word = word_text(seq)
        words[word] = score(word)
    if trace:
        trace(f"find_words: {len(words)} words on {board!r} (min length {min_length})")
    return words


# ---------- Scoring ----------

def score(word: str) -> int:
    return SCORES[min(len(word), len(SCORES) - 1)]


def total_score(words) -> int:
    """Sum of scores over distinct words (a dict from find_words or any iterable of words)."""
    if isinstance(words, dict):
        return sum(words.values())
    return sum(score(w) for w in set(words))


def best_words(words, count: Optional[int] = BEST_WORDS_DEFAULT) -> List[Tuple[str, int]]:
    """(word, score) pairs, highest score first, longer words first on ties."""
    scored = words.items() if isinstance(words, dict) else ((w, score(w)) for w in set(words))
    ranked = sorted(scored, key=lambda ws: (-ws[1], -len(ws[0]), ws[0]))
    return ranked if count is None else ranked[:count]


# ---------- Reports ----------

def solve(dictionary: Dictionary, text: str, best_words_count: Optional[int] = BEST_WORDS_DEFAULT,
          definitions=None, min_length: Optional[int] = None) -> dict:
    """Parse ``text``, search it and summarise the result as a JSON-ready dict."""
    board = boggled(text.strip())
    words = find_words(dictionary, board, min_length)
    definitions = definitions or {}
    return {
        "total_words": len(words),
        "total_score": total_score(words),
        "best_words": [
            {"word": w, "score": s, "def": definitions.get(w)}
            for w, s in best_words(words, best_words_count)
        ],
    }


def summarize(dictionary: Dictionary, boards, sort: str = "none",
              min_length: Optional[int] = None) -> List[BoardSummary]:
    """
    One BoardSummary per ``(name, board)`` pair. ``sort`` is one of
    none (given order), name, words or score (largest first).
    """
    if sort not in SORT_ORDERS:
        raise ValueError(f"unknown sort order {sort!r}, expected one of {', '.join(SORT_ORDERS)}")
    summaries = []
    for name, board in boards:
        words = find_words(dictionary, board, min_length)
        summaries.append(BoardSummary(name, len(words), total_score(words)))
    if sort == "name":
        summaries.sort(key=lambda s: s.name)
    elif sort == "words":
        summaries.sort(key=lambda s: s.words, reverse=True)
    elif sort == "score":
        summaries.sort(key=lambda s: s.score, reverse=True)
    return summaries


def format_board(board: Board) -> str:
    return "\n".join(" ".join("Qu" if l == Q else l.char.upper() for l in row)
                     for row in board.rows)


def print_board(board: Board):
    """Thread-safe coloured printing of a board."""
    with PRINT_LOCK:
        for row in board.rows:
            cells = [Fore.GREEN + ("Qu" if l == Q else f"{l.char.upper()} ") + Style.RESET_ALL
                     for l in row]
            print(" ".join(cells), flush=True)
        print(flush=True)
