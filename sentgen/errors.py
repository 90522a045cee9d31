"""Exception types raised by the sentence generator.

Every failure the package reports is a subclass of `SentgenError`, so the CLI
entry points can catch the whole family in one place. Lines that simply
produce no tokens are not errors and never raise.
"""
from __future__ import annotations

__all__ = [
    "SentgenError",
    "CorpusReadError",
    "UntrainedModelError",
    "PersistenceError",
    "OutputWriteError",
    "GenerationCancelledError",
]

class SentgenError(Exception):
    """Base class for all sentence generator errors."""

class CorpusReadError(SentgenError):
    """The training file could not be read."""

class UntrainedModelError(SentgenError):
    """Generation was attempted before a model was trained or loaded."""

    def __init__(self, message: str = "Classifier has not been trained and cannot yet generate a sentence."):
        super().__init__(message)

class PersistenceError(SentgenError):
    """A model could not be serialized to, or deserialized from, disk."""

class OutputWriteError(SentgenError):
    """Generated sentences could not be written to their destination."""

class GenerationCancelledError(SentgenError):
    """Decoding was stopped because the caller set the cancellation token."""
