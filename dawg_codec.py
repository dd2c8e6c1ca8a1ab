# dawg_codec.py
# Text encoding of a finished Dictionary, one record per node:
#
#   [<id>] <pos>:<child> <pos>:<child>;   node with two edges
#   [<id>!];                              terminal node without edges
#
# Children are always written before their parents, so the last record is the
# root and every child reference points at an id already read.

import io
import re
from typing import Dict, Iterator, List, Optional, TextIO

from dawg import Dictionary, Node
from letters import ALPHABET_SIZE

TERMINATOR = ";"
CHUNK_SIZE = 64 * 1024

_RECORD_RE = re.compile(r"\[([0-9]+)(!?)\](?: ([0-9]+:[0-9]+(?: [0-9]+:[0-9]+)*))?")


class DictionaryFormatError(ValueError):
    """The persisted dictionary could not be decoded."""


class EmptyDictionaryError(DictionaryFormatError):
    pass


class MalformedRecordError(DictionaryFormatError):
    def __init__(self, record: str, reason: str = "bad node"):
        super().__init__(f"{reason}: {record!r}")
        self.record = record


class DanglingReferenceError(DictionaryFormatError):
    def __init__(self, child_id: int, record: str):
        super().__init__(f"node references unknown child id {child_id}: {record!r}")
        self.child_id = child_id
        self.record = record


# ---------- Encoding ----------

def encode_node(node: Node) -> str:
    head = f"[{node.id}{'!' if node.terminal else ''}]"
    edges = " ".join(f"{int(pos)}:{child.id}" for pos, child in node.edges())
    return f"{head} {edges}{TERMINATOR}" if edges else head + TERMINATOR


def save(dictionary: Dictionary, writer: TextIO) -> int:
    """Write every reachable node exactly once. Returns the number of records."""
    n = 0
    for node in dictionary.nodes():
        writer.write(encode_node(node))
        n += 1
    return n


def dumps(dictionary: Dictionary) -> str:
    buf = io.StringIO()
    save(dictionary, buf)
    return buf.getvalue()


def save_path(dictionary: Dictionary, path: str) -> int:
    with open(path, "w", encoding="utf-8") as f:
        return save(dictionary, f)


# ---------- Decoding ----------

def _records(reader: TextIO) -> Iterator[str]:
    """Yield ``;``-terminated records (without the terminator) as they are read."""
    pending = ""
    while True:
        chunk = reader.read(CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        *complete, pending = pending.split(TERMINATOR)
        for record in complete:
            yield record.strip()
    if pending.strip():
        raise MalformedRecordError(pending.strip(), "unterminated node")


def decode_node(record: str, nodes: Dict[int, Node]) -> Node:
    m = _RECORD_RE.fullmatch(record)
    if m is None:
        raise MalformedRecordError(record)
    node_id = int(m.group(1))
    terminal = m.group(2) == "!"
    children: List[Optional[Node]] = [None] * ALPHABET_SIZE
    if m.group(3):
        for edge in m.group(3).split(" "):
            pos, child_id = (int(x) for x in edge.split(":"))
            if pos >= ALPHABET_SIZE:
                raise MalformedRecordError(record, f"letter position {pos} out of range")
            child = nodes.get(child_id)
            if child is None:
                raise DanglingReferenceError(child_id, record)
            children[pos] = child
    return Node(terminal, node_id, children)


def load(reader: TextIO) -> Dictionary:
    nodes: Dict[int, Node] = {}
    root = None
    for record in _records(reader):
        root = decode_node(record, nodes)
        nodes[root.id] = root
    if root is None:
        raise EmptyDictionaryError("no nodes found in dictionary data")
    return Dictionary(root)


def loads(data: str) -> Dictionary:
    return load(io.StringIO(data))


def load_path(path: str) -> Dictionary:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return load(f)
