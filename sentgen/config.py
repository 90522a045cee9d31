"""Manages the loading and validation of application configuration.

This module defines the `Config` dataclass, which serves as a centralized,
type-safe container for all generator settings. It also provides the
`load_config` function, which reads the `config.yaml` file, fills in defaults
for every missing key and resolves relative paths against the directory the
configuration file lives in.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml

DEFAULT_PATHS = {
    "training": "data/train/corpus.txt",
    "output": "data/output/output.txt",
    "model": "data/asset/classifier.json",
}

@dataclass
class Config:
    """
    A typed configuration object that holds all settings for the generator.

    Every field has a default, so `Config()` is a usable configuration for
    tests and library callers. The CLIs build one through `load_config`.

    Attributes:
        paths: Locations of the training corpus, the output file and the
               persisted model, keyed by "training", "output" and "model".
        num_sentences: How many sentences a batch produces by default.
        ngram_n: The context width N. A width of 1 conditions each prediction
                 on the single preceding word, which generalizes best.
        top_n_options: Pool size sampled from once the sentence has content.
        top_n_options_start: Pool size sampled from for the opening word. It
                             is wider so sentences do not all start alike.
        min_sent_length: An end-of-sentence draw is only accepted when the
                         sentence (counting the start token) is longer than this.
        max_sent_length: Hard cap on content tokens per generated sentence.
        max_training_lines_per_file: Lines read from a corpus file; the rest
                                     are ignored.
        smoothing: Additive smoothing used by the Bayes classifier.
        seed: Optional seed for reproducible generation.
        workers: Number of threads used when generating a batch.
    """
    paths: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PATHS))
    num_sentences: int = 100
    ngram_n: int = 1
    top_n_options: int = 5
    top_n_options_start: int = 30
    min_sent_length: int = 6
    max_sent_length: int = 100
    max_training_lines_per_file: int = 10000
    smoothing: float = 1.0
    seed: Optional[int] = None
    workers: int = 1

    def __post_init__(self) -> None:
        for name in ("ngram_n", "top_n_options", "top_n_options_start", "max_sent_length", "workers"):
            if getattr(self, name) < 1:
                raise ValueError(f"Configuration value '{name}' must be at least 1, got {getattr(self, name)}.")
        if self.min_sent_length < 0:
            raise ValueError(f"Configuration value 'min_sent_length' cannot be negative, got {self.min_sent_length}.")
        if self.max_sent_length < self.min_sent_length:
            raise ValueError(
                f"max_sent_length ({self.max_sent_length}) cannot be smaller than "
                f"min_sent_length ({self.min_sent_length})."
            )
        if self.max_training_lines_per_file < 0:
            raise ValueError("Configuration value 'max_training_lines_per_file' cannot be negative.")
        if self.smoothing <= 0:
            raise ValueError(f"Configuration value 'smoothing' must be positive, got {self.smoothing}.")

def load_config(path: str = "config.yaml") -> Config:
    """
    Loads and validates a configuration file into a single Config object.

    Any key missing from the YAML, and any `paths` entry set to null, falls
    back to the `Config` default. Entries under `paths` that are relative are
    resolved against the directory that contains the configuration file, so
    the CLIs behave the same no matter which working directory they are
    launched from.

    Args:
        path: The path to the main `config.yaml` file.

    Returns:
        A fully populated and validated `Config` object.

    Raises:
        FileNotFoundError: If the specified `config.yaml` file cannot be found.
        ValueError: If there is an error parsing the YAML file, or a value is
                    out of range.
        TypeError: If the root of the YAML file (or its `paths` entry) is not
                   a dictionary.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file at {path}: {e}")

    # An empty file parses to None; treat it as "all defaults".
    if y is None:
        y = {}
    if not isinstance(y, dict):
        raise TypeError(f"Configuration file {path} must be a dictionary.")

    paths_yaml = y.get("paths") or {}
    if not isinstance(paths_yaml, dict):
        raise TypeError(f"The 'paths' entry in {path} must be a dictionary.")

    base_dir = Path(path).parent
    paths = {}
    overrides = {k: v for k, v in paths_yaml.items() if v is not None}
    for key, value in {**DEFAULT_PATHS, **overrides}.items():
        p = Path(str(value))
        paths[key] = str(p if p.is_absolute() else base_dir / p)

    seed = y.get("seed")

    return Config(
        paths=paths,
        num_sentences=int(y.get("num_sentences", 100)),
        ngram_n=int(y.get("ngram_n", 1)),
        top_n_options=int(y.get("top_n_options", 5)),
        top_n_options_start=int(y.get("top_n_options_start", 30)),
        min_sent_length=int(y.get("min_sent_length", 6)),
        max_sent_length=int(y.get("max_sent_length", 100)),
        max_training_lines_per_file=int(y.get("max_training_lines_per_file", 10000)),
        smoothing=float(y.get("smoothing", 1.0)),
        seed=int(seed) if seed is not None else None,
        workers=int(y.get("workers", 1)),
    )
