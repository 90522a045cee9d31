"""Sentence decoding on top of a trained next-token classifier.

A sentence starts as the lone start-of-sentence token. At every step the
decoder asks the model to rank candidate next tokens given the trailing
context, keeps only the top few, and picks one of them uniformly at random.
The pool is wider for the opening word so that sentences do not all begin
the same way, and narrower afterwards to keep the continuation coherent.

An end-of-sentence draw only ends the sentence once it is long enough;
earlier draws are rejected and the step is retried with the sentence
unchanged. The loop is iterative and is bounded by `max_sent_length`
content tokens and a total step budget, and it checks an optional
cancellation token on every step.
"""
from __future__ import annotations
import enum
import logging
import random
from typing import List, Optional, Protocol, Sequence

from .config import Config
from .errors import GenerationCancelledError, UntrainedModelError
from .log import get_logger
from .types import Candidate, EOS_TOKEN, SOS_TOKEN, Token

# Rejected EOS draws do not grow the sentence, so the step budget is a
# multiple of the length cap.
MAX_STEPS_PER_TOKEN = 20

class CancelToken(Protocol):
    def is_set(self) -> bool: ...

class DecodeState(enum.Enum):
    START = "start"
    EXTENDING = "extending"
    DONE = "done"

def top_candidates(candidates: Sequence[Candidate], pool_size: int) -> List[Candidate]:
    """Truncates a ranked candidate list to its first `pool_size` entries."""
    return list(candidates[: min(len(candidates), pool_size)])

def strip_sentinels(sentence: Sequence[Token]) -> List[Token]:
    """Drops a leading SOS and a trailing EOS, if present."""
    tokens = list(sentence)
    if tokens and tokens[0] == SOS_TOKEN:
        tokens = tokens[1:]
    if tokens and tokens[-1] == EOS_TOKEN:
        tokens = tokens[:-1]
    return tokens

class SentenceDecoder:
    """Stateful driver for producing one sentence from a trained model.

    Attributes
    ----------
    model:
        Any object exposing ``get_classifications(context)`` that returns
        :class:`~sentgen.types.Candidate` objects ordered by descending score.
    cfg:
        The :class:`~sentgen.config.Config` supplying the context width, pool
        sizes and length limits.
    rng:
        Source of randomness for the uniform draw from the candidate pool.
    cancel:
        Optional token; decoding raises
        :class:`~sentgen.errors.GenerationCancelledError` once it is set.
    state:
        The current :class:`DecodeState`.
    sentence:
        The tokens produced so far, starting with SOS.
    steps:
        Number of model queries made so far.
    """
    def __init__(
        self,
        model,
        cfg: Config,
        rng: Optional[random.Random] = None,
        cancel: Optional[CancelToken] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.model = model
        self.cfg = cfg
        self.rng = rng if rng is not None else random.Random()
        self.cancel = cancel
        self.log = get_logger(logger, __name__)
        self.state = DecodeState.START
        self.sentence: List[Token] = []
        self.steps = 0
        self.max_steps = cfg.max_sent_length * MAX_STEPS_PER_TOKEN

    def _context(self) -> List[Token]:
        width = min(self.cfg.ngram_n, len(self.sentence))
        return self.sentence[len(self.sentence) - width :]

    def _pool_size(self) -> int:
        if len(self.sentence) == 1:
            return self.cfg.top_n_options_start
        return self.cfg.top_n_options

    def _content_length(self) -> int:
        return len(self.sentence) - 1

    def step(self) -> DecodeState:
        """Runs a single decoding step and returns the resulting state."""
        if self.state is DecodeState.START:
            if self.model is None:
                raise UntrainedModelError()
            self.sentence = [SOS_TOKEN]
            self.state = DecodeState.EXTENDING
            return self.state

        if self.state is DecodeState.DONE:
            return self.state

        if self.cancel is not None and self.cancel.is_set():
            raise GenerationCancelledError("Sentence generation was cancelled.")

        if self._content_length() >= self.cfg.max_sent_length or self.steps >= self.max_steps:
            self.state = DecodeState.DONE
            return self.state

        self.steps += 1
        candidates = self.model.get_classifications(self._context())
        pool = top_candidates(candidates, self._pool_size())
        if not pool:
            self.state = DecodeState.DONE
            return self.state

        choice = self.rng.choice(pool)
        if choice.label == EOS_TOKEN:
            # Too-short sentences ignore the EOS draw and try again.
            if len(self.sentence) > self.cfg.min_sent_length:
                self.state = DecodeState.DONE
        else:
            self.sentence.append(choice.label)
        return self.state

    def run(self) -> str:
        """
        Decodes until the sentence is complete.

        Returns:
            The generated tokens without sentinels, joined by single spaces.

        Raises:
            UntrainedModelError: If the model is None.
            GenerationCancelledError: If the cancellation token is set.
        """
        while self.step() is not DecodeState.DONE:
            pass

        text = " ".join(strip_sentinels(self.sentence))
        self.log.debug(text)
        return text

def generate_sentence(
    model,
    cfg: Optional[Config] = None,
    *,
    rng: Optional[random.Random] = None,
    cancel: Optional[CancelToken] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Generate one sentence from `model`. See :class:`SentenceDecoder`."""
    return SentenceDecoder(model, cfg or Config(), rng=rng, cancel=cancel, logger=logger).run()
