# dict_cache.py
# Load the compiled dictionary cache when it is usable, otherwise rebuild it
# from the source word list and write it back.

import os
import time

from colorama import Fore

import dawg_codec
from dawg import Dictionary, Trace
from dawg_codec import DictionaryFormatError
from utils import DEFAULT_CACHE, DEFAULT_SOURCE, log_with_time, vlog, warn
from word_source import build_from_source, is_url, load_word_source

COMPILED_SUFFIX = ".dict"


def is_compiled(location: str) -> bool:
    return location.endswith(COMPILED_SUFFIX) and not is_url(location)


def load_cached(cache_path: str):
    """The cached Dictionary, or None when the cache is missing or unreadable."""
    if not cache_path or not os.path.exists(cache_path):
        return None
    t0 = time.time()
    try:
        dictionary = dawg_codec.load_path(cache_path)
    except (OSError, DictionaryFormatError) as e:
        warn(f"Ignoring dictionary cache {cache_path}: {e}")
        return None
    vlog(f"Loaded dictionary cache {cache_path}", t0)
    return dictionary


def _is_stale(cache_path: str, source: str) -> bool:
    """True when a local source file is newer than the cache built from it."""
    if not source or not cache_path or is_url(source):
        return False
    if not os.path.exists(source) or not os.path.exists(cache_path):
        return False
    if os.path.getmtime(source) > os.path.getmtime(cache_path):
        vlog(f"Dictionary cache {cache_path} is older than {source}, rebuilding")
        return True
    return False


def write_cache(dictionary: Dictionary, cache_path: str) -> bool:
    t0 = time.time()
    try:
        n = dawg_codec.save_path(dictionary, cache_path)
    except OSError as e:
        warn(f"Could not write dictionary cache {cache_path}: {e}")
        return False
    vlog(f"Wrote {n} nodes to {cache_path}", t0)
    return True


def open_dictionary(source: str = None, cache_path: str = DEFAULT_CACHE, use_cache: bool = True,
                    trace: Trace = None) -> Dictionary:
    """
    Resolve the dictionary the way the command line does:
      - ``source`` ending in .dict  -> load that compiled file (errors propagate)
      - otherwise try ``cache_path`` first, then build from ``source``
        (a JSON word list, path or URL) and refresh the cache
    """
    if source and is_compiled(source):
        return dawg_codec.load_path(source)

    if use_cache and not _is_stale(cache_path, source):
        dictionary = load_cached(cache_path)
        if dictionary is not None:
            return dictionary

    source = source or DEFAULT_SOURCE
    dictionary = build_from_source(load_word_source(source), trace=trace)
    if use_cache and cache_path:
        if write_cache(dictionary, cache_path):
            log_with_time(f"Cached dictionary in {cache_path}", color=Fore.GREEN)
    return dictionary
