from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

__all__ = ["Token", "SOS_TOKEN", "EOS_TOKEN", "TrainingExample", "Candidate"]

Token = str

SOS_TOKEN: Token = "<SOS>"
EOS_TOKEN: Token = "<EOS>"

@dataclass(frozen=True)
class TrainingExample:
    """
    A single (context, target) pair cut from a tokenized sentence.

    Training examples are produced by sliding a window of width `N + 1` over
    each tokenized sentence. The first `N` tokens of the window form the
    context (the "document" handed to the classifier) and the final token is
    the label the classifier learns to predict.

    Attributes:
        context: The preceding tokens, always exactly `N` long.
        target: The token that followed the context in the corpus.
    """
    context: Tuple[Token, ...]
    target: Token

    @classmethod
    def from_window(cls, window: List[Token]) -> "TrainingExample":
        """Splits a window into its leading context and final target token."""
        return cls(context=tuple(window[:-1]), target=window[-1])

@dataclass(frozen=True)
class Candidate:
    """A next-token candidate together with the classifier's score for it."""

    label: Token
    score: float
