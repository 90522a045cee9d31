"""Core logic for turning a tokenized corpus into a trained classifier.

The training process has two steps:

1.  **N-gram Extraction**: `extract_examples` slides a window of width
    `N + 1` across every tokenized sentence with a stride of one. Each full
    window is split into a context (the first `N` tokens) and a target (the
    last token), producing one `TrainingExample` per window.
2.  **Classifier Training**: `train_classifier` registers every example with
    the classifier as a labelled document, fits it, and optionally persists
    the result to disk through `io_utils.save_model`.
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Sequence
from tqdm import tqdm

from .classifier import BayesClassifier, Classifier
from .io_utils import save_model
from .log import get_logger
from .types import Token, TrainingExample

PROGRESS_EVERY = 1000

def ngrams(tokens: Sequence[Token], n: int) -> List[List[Token]]:
    """Returns every run of `n` consecutive tokens, stride one."""
    return [list(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]

def extract_examples(sentences: Iterable[Sequence[Token]], context_width: int = 1) -> List[TrainingExample]:
    """
    Converts tokenized sentences into (context, target) training pairs.

    A sentence of length `L >= N + 1` yields exactly `L - N` examples.
    Windows that would run past the end of a sentence are never produced, so
    shorter sentences contribute nothing.

    Args:
        sentences: Tokenized sentences, each wrapped in SOS/EOS sentinels.
        context_width: The number of preceding tokens per context (`N`).

    Returns:
        A list of `TrainingExample` objects in corpus order.

    Raises:
        ValueError: If `context_width` is less than 1.
    """
    if context_width < 1:
        raise ValueError(f"context_width must be at least 1, got {context_width}")

    examples = []
    for sentence in sentences:
        for window in ngrams(sentence, context_width + 1):
            examples.append(TrainingExample.from_window(window))
    return examples

def train_classifier(
    examples: Sequence[TrainingExample],
    model_path: Optional[str] = None,
    *,
    classifier: Optional[Classifier] = None,
    smoothing: float = 1.0,
    logger: Optional[logging.Logger] = None,
) -> Classifier:
    """
    Fits a classifier over n-gram training examples.

    Every example is registered as a document whose features are the context
    tokens and whose label is the target token. Progress is logged every
    1000 documents while the classifier counts them; the log output is purely
    observational.

    Args:
        examples: The training pairs from `extract_examples`.
        model_path: Where to save the trained model. When None, nothing is
                    saved and that is not an error.
        classifier: An untrained classifier to fit. Defaults to a fresh
                    `BayesClassifier`.
        smoothing: Smoothing for the default `BayesClassifier`.
        logger: Logger for progress messages; defaults to this module's logger.

    Returns:
        The trained classifier.

    Raises:
        PersistenceError: If `model_path` is given and the model cannot be saved.
    """
    log = get_logger(logger, __name__)
    if classifier is None:
        classifier = BayesClassifier(smoothing=smoothing)

    for example in tqdm(examples, desc="Registering n-grams", disable=None):
        classifier.add_document(example.context, example.target)

    def report(index: int, total: int) -> None:
        if index % PROGRESS_EVERY == 0:
            log.info("%d / %d n-grams processed.", index, total)

    log.info("Training classifier...")
    classifier.train(on_document=report)
    log.info("Training complete.")

    if model_path:
        save_model(model_path, classifier)
        log.info("Saved classifier to %s.", model_path)

    return classifier
