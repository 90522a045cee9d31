from __future__ import annotations
import logging
import random
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import List, Optional

from .config import Config
from .decoder import CancelToken, generate_sentence
from .errors import UntrainedModelError
from .log import get_logger

PROGRESS_EVERY = 100

def generate_sentences(
    model,
    num_sentences: int,
    cfg: Optional[Config] = None,
    *,
    rng: Optional[random.Random] = None,
    max_workers: int = 1,
    cancel: Optional[CancelToken] = None,
    logger: Optional[logging.Logger] = None,
) -> List[str]:
    """
    Generates a batch of sentences from a trained model.

    Each sentence is decoded as an independent task on a thread pool; the
    model is only read. Every task gets its own `random.Random` seeded from
    `rng`, so a seeded batch yields the same sentences for any worker count.
    Results are returned in invocation order.

    The batch is all-or-nothing: the first failing task cancels the tasks
    that have not started and its exception propagates.

    Args:
        model: A trained classifier, or None.
        num_sentences: How many sentences to generate. Zero or fewer returns
                       an empty list without querying the model.
        cfg: Decoding configuration; defaults to `Config()`.
        rng: Source used to seed each sentence's generator.
        max_workers: Size of the thread pool.
        cancel: Optional cancellation token shared by every task.
        logger: Logger for progress messages.

    Returns:
        The generated sentences.

    Raises:
        UntrainedModelError: If `model` is None.
        GenerationCancelledError: If `cancel` is set while decoding.
    """
    if model is None:
        raise UntrainedModelError()
    if num_sentences <= 0:
        return []

    cfg = cfg or Config()
    rng = rng if rng is not None else random.Random()
    log = get_logger(logger, __name__)
    log.info("Generating %d sentences...", num_sentences)

    seeds = [rng.getrandbits(64) for _ in range(num_sentences)]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [
            pool.submit(generate_sentence, model, cfg, rng=random.Random(seed), cancel=cancel, logger=logger)
            for seed in seeds
        ]

        pending = set(futures)
        completed = 0
        while pending:
            done, pending = wait(pending, return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    for other in pending:
                        other.cancel()
                    raise error
                completed += 1
                if completed % PROGRESS_EVERY == 0:
                    log.info("%d / %d sentences generated.", completed, num_sentences)

    return [future.result() for future in futures]
