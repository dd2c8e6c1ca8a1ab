# dawg.py
# Minimized word graph (DAWG). Words go into DictionaryBuilder in sorted order;
# finish() hands back an immutable Dictionary whose nodes share common suffixes.

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from letters import ALPHABET_SIZE, Letter, letter_for_pos, spell, to_letters

Trace = Optional[Callable[[str], None]]


class WordOrderError(ValueError):
    """A word was inserted before the word inserted just ahead of it."""


class Node:
    """
    One node of a finished Dictionary.
      terminal  -> the path from the root to here spells a word
      id        -> stable integer, only used to persist and de-duplicate nodes
      children  -> 26 slots, None or a (possibly shared) Node
    Nodes never change after construction.
    """

    __slots__ = ("terminal", "id", "children")

    def __init__(self, terminal: bool, id: int, children: Iterable[Optional["Node"]]):
        children = tuple(children)
        if len(children) != ALPHABET_SIZE:
            raise ValueError(f"a node needs {ALPHABET_SIZE} child slots, got {len(children)}")
        object.__setattr__(self, "terminal", bool(terminal))
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "children", children)

    def __setattr__(self, name, value):
        raise AttributeError("Node is immutable")

    def lookup(self, letter) -> Optional["Node"]:
        """Child reached by ``letter`` (a Letter, int or single character)."""
        if isinstance(letter, str):
            letter = Letter.from_char(letter)
        if not 0 <= letter < ALPHABET_SIZE:
            return None
        return self.children[letter]

    def edges(self) -> Iterator[Tuple[Letter, "Node"]]:
        for pos, child in enumerate(self.children):
            if child is not None:
                yield Letter(pos), child

    def next_letters(self) -> List[str]:
        return [letter_for_pos(pos) for pos, child in enumerate(self.children) if child is not None]

    def __repr__(self):
        flag = " (terminal)" if self.terminal else ""
        return f"<Node:{self.id}{flag} {''.join(self.next_letters())}>"


class Dictionary:
    """
    Read-only word set backed by a DAWG root.
      word in d            -> membership
      d.walk(prefix)       -> Node after consuming prefix, or None
      d.words()            -> every word, alphabetically
      d.node_count()       -> distinct reachable nodes
    Safe to share between any number of concurrent readers.
    """

    __slots__ = ("root",)

    def __init__(self, root: Node):
        self.root = root

    def __repr__(self):
        return f"<Dictionary:root={self.root.id}>"

    def __contains__(self, word) -> bool:
        node = self.walk(word) if isinstance(word, str) and word else None
        return node is not None and node.terminal

    def lookup(self, letter) -> Optional[Node]:
        return self.root.lookup(letter)

    def walk(self, prefix: str) -> Optional[Node]:
        node = self.root
        for ch in prefix:
            try:
                node = node.lookup(ch)
            except ValueError:
                return None
            if node is None:
                return None
        return node

    def has_prefix(self, prefix: str) -> bool:
        return self.walk(prefix) is not None

    def words(self) -> Iterator[str]:
        path: List[Letter] = []

        def visit(node: Node):
            if node.terminal:
                yield spell(path)
            for letter, child in node.edges():
                path.append(letter)
                yield from visit(child)
                path.pop()

        return visit(self.root)

    def example_words(self, n: int = 10) -> List[str]:
        out = []
        for word in self.words():
            if len(out) >= n:
                break
            out.append(word)
        return out

    def nodes(self) -> Iterator[Node]:
        """Each reachable node once, children always before their parents."""
        seen = set()

        def visit(node: Node):
            seen.add(node.id)
            for _, child in node.edges():
                if child.id not in seen:
                    yield from visit(child)
            yield node

        return visit(self.root)

    def node_count(self) -> int:
        return sum(1 for _ in self.nodes())


# ---------- Builder ----------

class NodeBuilder:
    """Mutable node addressed by index. Equal shapes are merged during minimization."""

    __slots__ = ("terminal", "children")

    def __init__(self):
        self.terminal = False
        self.children: List[Optional[int]] = [None] * ALPHABET_SIZE

    def key(self) -> Tuple[bool, Tuple[Optional[int], ...]]:
        return self.terminal, tuple(self.children)

    def __eq__(self, other):
        if not isinstance(other, NodeBuilder):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())


class DictionaryBuilder:
    """
    Online DAWG construction (Daciuk et al.). Words must arrive in
    non-decreasing order; each new word closes off the part of the previous
    word past their common prefix, and those nodes are merged into already
    canonical nodes of the same shape.

    ``trace`` receives debug lines when given (e.g. utils.vlog).
    """

    def __init__(self, trace: Trace = None):
        self._trace = trace
        self._previous: Optional[List[Letter]] = None
        self._nodes: List[NodeBuilder] = [NodeBuilder()]
        # (parent index, letter, child index) along the previous word, not yet minimized
        self._unchecked: List[Tuple[int, Letter, int]] = []
        self._minimized: Dict[Tuple, int] = {}
        self._finished = False
        self.word_count = 0

    # ---------- Public API ----------
    def insert(self, word: str) -> None:
        if self._finished:
            raise RuntimeError("insert() called on a finished DictionaryBuilder")
        if not word:
            raise ValueError("cannot insert an empty word")
        letters = to_letters(word)
        if self._previous is not None and letters < self._previous:
            raise WordOrderError(
                f"words must be inserted in sorted order: {word!r} after {spell(self._previous)!r}"
            )
        if self._trace:
            self._trace(f"inserting {word!r}")

        common = self._common_prefix(letters)
        if self._trace:
            self._trace(f"  common prefix: {common}")
        self._minimize(common)

        node_idx = self._unchecked[-1][2] if self._unchecked else 0
        for letter in letters[common:]:
            next_idx = len(self._nodes)
            self._nodes.append(NodeBuilder())
            self._nodes[node_idx].children[letter] = next_idx
            self._unchecked.append((node_idx, letter, next_idx))
            node_idx = next_idx

        if not self._nodes[node_idx].terminal:
            self._nodes[node_idx].terminal = True
            self.word_count += 1
        self._previous = letters

    def finish(self) -> Dictionary:
        if self._finished:
            raise RuntimeError("finish() called twice on a DictionaryBuilder")
        self._minimize(0)
        self._finished = True
        memo: Dict[int, Node] = {}
        root = self._materialize(0, memo)
        if self._trace:
            self._trace(f"finished: {self.word_count} words, {len(memo)} nodes "
                        f"({len(self._nodes)} before minimization)")
        return Dictionary(root)

    # ---------- Helpers ----------
    def _common_prefix(self, letters: List[Letter]) -> int:
        if self._previous is None:
            return 0
        n = 0
        for a, b in zip(letters, self._previous):
            if a != b:
                break
            n += 1
        return n

    def _minimize(self, down_to: int) -> None:
        while len(self._unchecked) > down_to:
            parent_idx, letter, child_idx = self._unchecked.pop()
            key = self._nodes[child_idx].key()
            canonical = self._minimized.get(key)
            if canonical is not None:
                if self._trace:
                    self._trace(f"  - minimizing '{letter_for_pos(letter)}': {child_idx} {self._describe(child_idx)}"
                                f" => {canonical}")
                self._nodes[parent_idx].children[letter] = canonical
            else:
                if self._trace:
                    self._trace(f"  - '{letter_for_pos(letter)}' ({child_idx} {self._describe(child_idx)}) is canonical")
                self._minimized[key] = child_idx

    def _materialize(self, idx: int, memo: Dict[int, Node]) -> Node:
        node = memo.get(idx)
        if node is None:
            nb = self._nodes[idx]
            children = [
                None if child_idx is None else self._materialize(child_idx, memo)
                for child_idx in nb.children
            ]
            node = Node(nb.terminal, idx, children)
            memo[idx] = node
        return node

    def _describe(self, idx: int) -> str:
        nb = self._nodes[idx]
        letters = "".join(letter_for_pos(pos) for pos, c in enumerate(nb.children) if c is not None)
        return f"[{'!' if nb.terminal else ''}{letters}]"


def build_dictionary(words: Iterable[str], trace: Trace = None) -> Dictionary:
    """Lower-case, de-duplicate and sort ``words``, then build a Dictionary from them."""
    builder = DictionaryBuilder(trace=trace)
    for word in sorted({w.strip().lower() for w in words if w and w.strip()}):
        builder.insert(word)
    return builder.finish()
