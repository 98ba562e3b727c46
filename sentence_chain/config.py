import logging
import os
from multiprocessing import cpu_count

logger = logging.getLogger(__name__)


def _int_from_env(name, default, minimum=0):
    """Reads an integer setting from the environment, falling back to the default."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Could not parse {name}={raw!r} as an integer. Using default of {default}.")
        return default
    if value < minimum:
        logger.warning(f"{name}={value} is below the minimum of {minimum}. Using default of {default}.")
        return default
    return value


# --- Tokenizer Configuration ---
# Any of these characters ends a sentence. Consecutive delimiters produce
# empty fragments, which tokenize to nothing.
SENTENCE_DELIMITERS = ".?!\n"

# --- Chain Configuration ---
# Number of tokens captured by each forward link.
DEFAULT_WORD_LENGTH = _int_from_env('CHAIN_WORD_LENGTH', 1, minimum=1)

# --- Generation Configuration ---
# Workers used in parallel mode. Sequential mode always uses one.
NUM_WORKERS = _int_from_env('CHAIN_NUM_WORKERS', cpu_count(), minimum=1)

# Generation attempts allowed per collection when filtering on required words.
# Without a cap an unsatisfiable set of required words never terminates.
# Setting this to 0 restores the unbounded behaviour.
MAX_ATTEMPTS = _int_from_env('CHAIN_MAX_ATTEMPTS', 1_000_000)

# Optional cap on the number of tokens in one sentence. 0 disables it.
MAX_WORDS = _int_from_env('CHAIN_MAX_WORDS', 0) or None
