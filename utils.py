# --- utils.py ---

import time
import threading
from colorama import Fore, Style, init

init()

# Default file locations (overridable from the command line)
DEFAULT_SOURCE = "OWL2.json"
DEFAULT_CACHE = "cached.dict"
DEFAULT_DEFS = "DICT.json"

# Seconds to wait when the word source is a URL
HTTP_TIMEOUT = 30

# Number of best words shown unless --show-all is given
BEST_WORDS_DEFAULT = 20

# Wordle answers are always this long
WORD_LENGTH = 5

VERBOSE = False
start_time = time.time()

# Lock used for synchronized printing across threads
PRINT_LOCK = threading.Lock()


def log_with_time(msg, color=Fore.LIGHTBLUE_EX):
    """Print ``msg`` with a timestamp."""
    elapsed = time.time() - start_time
    mins = int(elapsed // 60)
    secs = elapsed % 60
    timestamp = Style.DIM + f"[{mins:02}:{secs:06.3f}]" + Style.RESET_ALL
    with PRINT_LOCK:
        print(f"{timestamp} {color}{msg}{Style.RESET_ALL}", flush=True)


def vlog(msg, t0=None):
    if VERBOSE:
        if t0 is not None:
            elapsed = time.time() - t0
            log_with_time(f"{msg} (took {elapsed:.3f}s)")
        else:
            log_with_time(msg)


def warn(msg):
    log_with_time(msg, color=Fore.YELLOW)


def error(msg):
    log_with_time(msg, color=Fore.RED)
