import argparse
import os
import time

import requests
from colorama import Fore

import dawg_codec
import utils
from boggle import SORT_ORDERS, Board, boggled, find_words, best_words, print_board, summarize, total_score
from dict_cache import open_dictionary
from utils import BEST_WORDS_DEFAULT, DEFAULT_CACHE, DEFAULT_DEFS, log_with_time, vlog, error
from word_source import Definitions, build_from_source, load_word_source
from wordle import clues_from_guesses, clues_from_pattern, solve


def _add_dict_options(parser):
    parser.add_argument(
        "-d", "--dict", default=None,
        help="JSON word list (path or URL) or compiled .dict file (default: cached.dict, else OWL2.json)",
    )
    parser.add_argument("--cache", default=DEFAULT_CACHE, help=f"Compiled dictionary cache (default: {DEFAULT_CACHE})")
    parser.add_argument("--no-cache", action="store_true", help="Neither read nor write the dictionary cache")


def build_parser():
    parser = argparse.ArgumentParser(description="Boggle and Wordle word finder")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("boggle", help="Find words in a 4x4 or 5x5 Boggle board")
    _add_dict_options(p)
    p.add_argument("--defs-dict", default=DEFAULT_DEFS, help=f"JSON dictionary with definitions (default: {DEFAULT_DEFS})")
    p.add_argument("--defs", action="store_true", help="Show definitions for the best words")
    p.add_argument("--show-all", action="store_true", help=f"Show all matches, not just the first {BEST_WORDS_DEFAULT}")
    p.add_argument("--min-length", type=int, default=None, help="Override the minimum word length (default: 3 on 4x4, 4 on 5x5)")
    p.add_argument("board", help="The board as a text file, one line per row")

    p = sub.add_parser("wordle", help="Show possible Wordle answers")
    _add_dict_options(p)
    p.add_argument("-i", "--include", default="", help="Letters known to be in the answer")
    p.add_argument("-e", "--exclude", default="", help="Letters known not to be in the answer")
    p.add_argument("-g", "--guess", action="append", default=[],
                   help='A previous guess, e.g. "bl[i]nd" or "(c)h[i]ps" (repeatable)')
    p.add_argument("pattern", nargs="?", default=None, help='The answer with green letters filled in, e.g. "--b--"')

    p = sub.add_parser("summarize", help="Summarize words in one or more Boggle boards")
    _add_dict_options(p)
    p.add_argument("-s", "--sort", choices=SORT_ORDERS, default="none", help="Sort order (default: none)")
    p.add_argument("--min-length", type=int, default=None, help="Override the minimum word length")
    p.add_argument("boards", nargs="+", help="Board text files, one line per row")

    p = sub.add_parser("compile", help="Compile a JSON word list into a .dict file")
    p.add_argument("-f", "--overwrite", action="store_true", help="Replace an existing output file")
    p.add_argument("input", help="The input JSON file (path or URL)")
    p.add_argument("output", help="The compiled output file")
    return parser


def _open(args):
    trace = vlog if utils.VERBOSE else None
    dictionary = open_dictionary(args.dict, cache_path=args.cache, use_cache=not args.no_cache, trace=trace)
    if utils.VERBOSE:
        vlog(f"Example words: {', '.join(dictionary.example_words(10))}")
    return dictionary


def read_board(path) -> Board:
    with open(path, "r", encoding="utf-8") as f:
        return boggled(f.read())


def run_boggle(args):
    dictionary = _open(args)
    board = read_board(args.board)
    print_board(board)

    t0 = time.time()
    words = find_words(dictionary, board, args.min_length, trace=utils.vlog if utils.VERBOSE else None)
    vlog("Board searched", t0)
    log_with_time(f"Found {len(words)} words, {total_score(words)} points", color=Fore.GREEN)

    definitions = Definitions.open(args.defs_dict) if args.defs else {}
    count = None if args.show_all else BEST_WORDS_DEFAULT
    for word, score in best_words(words, count):
        line = f"{score:3} {word}"
        definition = definitions.get(word)
        if definition:
            line += f"  {definition}"
        print(line)
    return 0


def run_wordle(args):
    clues = clues_from_pattern(args.pattern, args.include, args.exclude)
    clues += clues_from_guesses(args.guess)
    dictionary = _open(args)
    t0 = time.time()
    candidates = sorted(solve(clues, dictionary, trace=utils.vlog if utils.VERBOSE else None))
    vlog("Candidates enumerated", t0)
    log_with_time(f"{len(candidates)} possible words", color=Fore.GREEN)
    for word in candidates:
        print(word)
    return 0


def run_summarize(args):
    dictionary = _open(args)
    boards = [(path, read_board(path)) for path in args.boards]
    summaries = summarize(dictionary, boards, sort=args.sort, min_length=args.min_length)
    width = max(len(s.name) for s in summaries)
    for s in summaries:
        print(f"{s.name:<{width}}  {s.words:5} words  {s.score:5} points")
    return 0


def run_compile(args):
    if os.path.exists(args.output) and not args.overwrite:
        error(f"{args.output} already exists (use -f to overwrite)")
        return 1
    t0 = time.time()
    dictionary = build_from_source(load_word_source(args.input))
    n = dawg_codec.save_path(dictionary, args.output)
    log_with_time(f"✅ Wrote {n} nodes to {args.output}", color=Fore.GREEN)
    vlog("Compiled", t0)
    return 0


COMMANDS = {
    "boggle": run_boggle,
    "wordle": run_wordle,
    "summarize": run_summarize,
    "compile": run_compile,
}


def run_solver(argv=None):
    args = build_parser().parse_args(argv)
    utils.start_time = time.time()
    utils.VERBOSE = args.verbose
    try:
        return COMMANDS[args.command](args)
    except (ValueError, OSError, requests.RequestException) as e:
        error(f"{args.command}: {e}")
        return 1
    finally:
        vlog("Done", utils.start_time)
