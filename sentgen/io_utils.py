"""Provides utility functions for reading corpora and persisting results.

This module owns every file the generator touches:

-   `read_file_tokens` reads a newline-delimited corpus and tokenizes it,
    honouring the per-file line cap.
-   `save_model` / `load_model` round-trip a trained classifier through a
    human-readable JSON document.
-   `write_sentences` writes generated sentences, one per line.

Failures are re-raised as the package's own error types so callers can tell
a bad corpus from a bad model file or an unwritable output location.
"""
import json
from pathlib import Path
from typing import List, Optional, Sequence

from .classifier import BayesClassifier, Classifier
from .errors import CorpusReadError, OutputWriteError, PersistenceError
from .tokenizer import tokenize
from .types import Token

MAX_TRAINING_LINES_PER_FILE = 10000

def read_lines(path: str, max_lines: Optional[int] = MAX_TRAINING_LINES_PER_FILE) -> List[str]:
    """
    Reads at most `max_lines` lines from a UTF-8 text file.

    Raises:
        CorpusReadError: If the file is missing, unreadable or not UTF-8.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusReadError(f"Could not read training file {path}: {e}") from e

    lines = text.split("\n")
    if max_lines is not None:
        lines = lines[:max_lines]
    return lines

def read_file_tokens(path: str, max_lines: Optional[int] = MAX_TRAINING_LINES_PER_FILE) -> List[List[Token]]:
    """
    Loads and tokenizes the sentences of a corpus file.

    Only the first `max_lines` lines are considered. Lines that tokenize to
    nothing (commands, or lines without any alphabetic word) are skipped
    silently.

    Args:
        path: The path to the corpus text file.
        max_lines: The line cap, or None to read the whole file.

    Returns:
        A list of tokenized sentences, each wrapped in SOS/EOS sentinels.

    Raises:
        CorpusReadError: If the file cannot be read.
    """
    sentences = []
    for line in read_lines(path, max_lines):
        tokens = tokenize(line.rstrip("\r"))
        if tokens:
            sentences.append(tokens)
    return sentences

def save_model(path: str, model: Classifier) -> None:
    """
    Saves a trained classifier to a JSON file.

    The parent directory is created if needed. The file handle is closed on
    both the success and the failure path.

    Args:
        path: The destination path for the model file.
        model: A trained classifier exposing `to_dict()`.

    Raises:
        PersistenceError: If the model cannot be serialized or written.
    """
    try:
        data = model.to_dict()
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(f"Could not save model to {path}: {e}") from e

def load_model(path: str) -> BayesClassifier:
    """
    Loads a classifier previously written by `save_model`.

    Args:
        path: The path to the model JSON file.

    Returns:
        A trained `BayesClassifier`.

    Raises:
        PersistenceError: If the file is missing, is not valid JSON, or does
                          not describe a classifier.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise PersistenceError(f"Model file not found at: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(f"Could not read model file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Error decoding JSON from {path}: {e}") from e

    if not isinstance(data, dict):
        raise PersistenceError(f"Expected a JSON object describing a classifier in {path}")

    try:
        return BayesClassifier.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"Malformed classifier in {path}: {e}") from e

def write_sentences(sentences: Sequence[str], path: str) -> None:
    """
    Writes generated sentences to a text file, one sentence per line.

    Args:
        sentences: The sentences to write.
        path: The destination path. Parent directories are created.

    Raises:
        OutputWriteError: If the destination cannot be written.
    """
    try:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8") as f:
            for sentence in sentences:
                f.write(sentence + "\n")
    except OSError as e:
        raise OutputWriteError(f"Could not write sentences to {path}: {e}") from e
