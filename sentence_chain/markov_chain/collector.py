import itertools
import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from .. import config
from .generate import SentenceGenerator, sentence_words
from .markov_chain import EmptyModelError

logger = logging.getLogger(__name__)


class NoMatchFoundError(RuntimeError):
    """Raised when the attempt budget runs out before enough sentences contain the required words."""

    def __init__(self, required_words, attempts, found, count):
        self.required_words = required_words
        self.attempts = attempts
        self.found = found
        self.count = count
        super().__init__(
            f"Found only {found} of {count} sentences containing all of "
            f"{sorted(required_words)} after {attempts} attempts."
        )


class ConcurrentCollector:
    """
    Races one or more workers to fill a shared pool with generated sentences.

    Each worker loops generate -> filter -> append until the pool holds the
    requested number of sentences. Generation runs without locks since the
    model is read-only; only appending to the pool is synchronized. Workers
    check a shared stop event between sentences and are never interrupted
    while appending.

    With more than one worker the pool's append order depends on thread
    scheduling, so results are not reproducible even with a seeded rng.
    """

    def __init__(self, model, workers=1, rng=None, max_attempts=None, max_words=None, progress=False):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.model = model
        self.workers = workers
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts or None
        self.max_words = max_words or None
        self.progress = progress

    def collect(self, count, required_words=()):
        """
        Returns the last `count` sentences appended to the pool, in append order.

        max_attempts only applies when required_words is non-empty: without a
        filter every attempt is accepted.
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        if count == 0:
            return []
        if self.model.is_empty:
            raise EmptyModelError()

        required = {word.lower() for word in required_words}
        budget = self.max_attempts if required else None

        pool = []
        pool_lock = threading.Lock()
        stop = threading.Event()
        # next() on a shared count is atomic, so the budget needs no lock.
        attempt_counter = itertools.count(1)

        # Seed every worker from the collector's source so a seeded
        # sequential run always yields the same sentences.
        worker_rngs = [random.Random(self.rng.getrandbits(64)) for _ in range(self.workers)]

        logger.info(f"Generating {count} sentence(s) with {self.workers} worker(s)...")
        if required:
            logger.info(f"Keeping only sentences containing: {', '.join(sorted(required))}")

        with tqdm(total=count, desc="Generating sentences", unit="sentence", disable=not self.progress) as pbar:

            def work(rng):
                generator = SentenceGenerator(self.model, rng=rng, max_words=self.max_words)
                attempts = 0
                try:
                    while not stop.is_set():
                        sentence = generator.generate()
                        attempts += 1
                        attempt = next(attempt_counter)

                        if required and not required <= sentence_words(sentence):
                            if budget is not None and attempt >= budget:
                                stop.set()
                            continue

                        with pool_lock:
                            pool.append(sentence)
                            pbar.update(1)
                            if len(pool) >= count:
                                stop.set()
                except BaseException:
                    stop.set()
                    raise
                return attempts

            if self.workers == 1:
                total_attempts = work(worker_rngs[0])
            else:
                total_attempts = 0
                with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="chain-worker") as executor:
                    futures = [executor.submit(work, rng) for rng in worker_rngs]
                    try:
                        for future in as_completed(futures):
                            total_attempts += future.result()
                    except BaseException:
                        # Workers only exit once stop is set; the executor waits for them.
                        stop.set()
                        raise

        logger.debug(f"Collected {len(pool)} sentence(s) in {total_attempts} attempts.")

        if len(pool) < count:
            raise NoMatchFoundError(required, total_attempts, len(pool), count)
        return pool[-count:]


def generate_sentences(model, count=1, required_words=(), parallel=False, rng=None,
                       max_attempts=config.MAX_ATTEMPTS, max_words=config.MAX_WORDS,
                       progress=False):
    """
    Generates exactly `count` sentences from the model, each ending in a period.

    If required_words is given, only sentences containing all of them
    (case-insensitive, in any order) are returned. parallel=True races
    config.NUM_WORKERS workers instead of one.

    Raises EmptyModelError if the model has no starting words and
    NoMatchFoundError if max_attempts runs out first.
    """
    workers = config.NUM_WORKERS if parallel else 1
    collector = ConcurrentCollector(
        model,
        workers=workers,
        rng=rng,
        max_attempts=max_attempts,
        max_words=max_words,
        progress=progress,
    )
    return collector.collect(count, required_words)
