# letters.py
# The 26-letter alphabet used to label every edge of the word graph.

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
ALPHABET_SIZE = len(ALPHABET)

_A = ord("a")


class Letter(int):
    """
    A letter as a dense index in [0, 26). Being an ``int`` it can index the
    children array of a node directly.

      Letter(2)              -> c
      Letter.from_char("Q")  -> q
      Letter.empty()         -> the unset sentinel (not a real letter)
    """

    __slots__ = ()

    def __new__(cls, pos: int) -> "Letter":
        if not 0 <= pos < ALPHABET_SIZE:
            raise ValueError(f"letter position out of range: {pos!r}")
        return super().__new__(cls, pos)

    @classmethod
    def from_char(cls, ch: str) -> "Letter":
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        # Only ASCII maps; some other characters lower-case into a-z.
        pos = ord(ch.lower()) - _A if ch.isascii() else -1
        if not 0 <= pos < ALPHABET_SIZE:
            raise ValueError(f"not a letter: {ch!r}")
        return super().__new__(cls, pos)

    @classmethod
    def empty(cls) -> "Letter":
        return _EMPTY

    @property
    def is_empty(self) -> bool:
        return int(self) == ALPHABET_SIZE

    @property
    def char(self) -> str:
        if self.is_empty:
            raise ValueError("the empty letter has no character")
        return ALPHABET[self]

    def __str__(self) -> str:
        return "" if self.is_empty else ALPHABET[self]

    def __repr__(self) -> str:
        return "Letter(empty)" if self.is_empty else f"Letter({ALPHABET[self]!r})"


# Sits just past the alphabet so it can never be mistaken for a real letter.
_EMPTY = int.__new__(Letter, ALPHABET_SIZE)

Q = Letter.from_char("q")
U = Letter.from_char("u")


def letter_pos(ch: str) -> Letter:
    return Letter.from_char(ch)


def letter_for_pos(pos: int) -> str:
    return Letter(pos).char


def to_letters(word: str):
    """Map every character of ``word`` to a Letter (ValueError on non-letters)."""
    return [Letter.from_char(ch) for ch in word]


def spell(letters) -> str:
    return "".join(ALPHABET[l] for l in letters)
