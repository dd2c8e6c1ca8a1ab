# word_source.py
# The source word list: a JSON object mapping each word to its definition
# (a string or a list of strings), read from disk or downloaded.

import json
import time

import requests

from dawg import Dictionary, DictionaryBuilder, Trace
from letters import ALPHABET
from utils import HTTP_TIMEOUT, log_with_time, vlog

_LETTERS = frozenset(ALPHABET)


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_word_source(location: str) -> dict:
    """Read the word -> definition mapping from a local path or an http(s) URL."""
    t0 = time.time()
    if is_url(location):
        log_with_time(f"⟳ Downloading word list from {location}…")
        resp = requests.get(location, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    else:
        with open(location, "r", encoding="utf-8") as f:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{location}: expected a JSON object of word definitions")
    vlog(f"Word source {location} read ({len(data)} entries)", t0)
    return data


def normalize_definition(value) -> str:
    if isinstance(value, (list, tuple)):
        return "; ".join(str(v) for v in value)
    return "" if value is None else str(value)


class Definitions(dict):
    """word -> display string, keyed by lower-case word."""

    @classmethod
    def from_source(cls, source: dict) -> "Definitions":
        return cls((word.lower(), normalize_definition(value)) for word, value in source.items())

    @classmethod
    def open(cls, location: str) -> "Definitions":
        return cls.from_source(load_word_source(location))

    def get(self, word, default=None):
        return super().get(word.lower(), default)


def sorted_words(source) -> list:
    """Lower-cased a-z keys of ``source`` in builder order; anything else is skipped."""
    words = set()
    skipped = 0
    for word in source:
        w = word.strip().lower()
        if w and _LETTERS.issuperset(w):
            words.add(w)
        else:
            skipped += 1
    if skipped:
        vlog(f"Skipped {skipped} entries that are not plain a-z words")
    return sorted(words)


def build_from_source(source, trace: Trace = None) -> Dictionary:
    t0 = time.time()
    builder = DictionaryBuilder(trace=trace)
    for word in sorted_words(source):
        builder.insert(word)
    dictionary = builder.finish()
    vlog(f"Dictionary built ({builder.word_count} words)", t0)
    return dictionary
