from __future__ import annotations
import logging
import random
from typing import List, Optional

from .batch import generate_sentences
from .config import Config
from .io_utils import load_model, read_file_tokens, write_sentences
from .log import get_logger
from .model_builder import extract_examples, train_classifier

class SentenceGenerator:
    """
    A simple sentence generator tying the training and generation steps together.

    The generator starts without a classifier. Call `learn()` to train one
    from the configured corpus (which also saves it), or `load_pretrained()`
    to reuse a saved one, then `generate()` to write sentences to disk.

    Attributes:
        cfg: The active `Config`.
        classifier: The trained classifier, or None until learned or loaded.
    """
    def __init__(self, cfg: Optional[Config] = None, logger: Optional[logging.Logger] = None):
        self.cfg = cfg or Config()
        self.classifier = None
        self.log = get_logger(logger, __name__)
        self.rng = random.Random(self.cfg.seed)

    def load_pretrained(self, path: Optional[str] = None) -> None:
        """
        Loads a saved classifier.

        Raises:
            PersistenceError: If the model file cannot be loaded.
        """
        path = path or self.cfg.paths["model"]
        self.classifier = load_model(path)
        self.log.info("Loaded model from %s.", path)

    def learn(self, training_path: Optional[str] = None, model_path: Optional[str] = None) -> None:
        """
        Trains a classifier on a corpus file and saves it.

        Args:
            training_path: Corpus to read; defaults to `paths.training`.
            model_path: Where to save the model; defaults to `paths.model`.
                        Pass an empty string to skip saving.

        Raises:
            CorpusReadError: If the corpus cannot be read.
            PersistenceError: If the trained model cannot be saved.
        """
        training_path = training_path or self.cfg.paths["training"]
        if model_path is None:
            model_path = self.cfg.paths["model"]

        sentences = read_file_tokens(training_path, self.cfg.max_training_lines_per_file)
        self.log.info("Read %d sentences from %s.", len(sentences), training_path)
        examples = extract_examples(sentences, self.cfg.ngram_n)
        self.classifier = train_classifier(
            examples,
            model_path or None,
            smoothing=self.cfg.smoothing,
            logger=self.log,
        )
        self.log.info("Model trained on file %s.", training_path)

    def generate(self, num_sentences: Optional[int] = None, output_path: Optional[str] = None) -> List[str]:
        """
        Generates sentences with the current classifier and writes them to a file.

        Nothing is written if generation fails.

        Returns:
            The generated sentences.

        Raises:
            UntrainedModelError: If no classifier has been learned or loaded.
            OutputWriteError: If the output file cannot be written.
        """
        if num_sentences is None:
            num_sentences = self.cfg.num_sentences
        output_path = output_path or self.cfg.paths["output"]

        sentences = generate_sentences(
            self.classifier,
            num_sentences,
            self.cfg,
            rng=self.rng,
            max_workers=self.cfg.workers,
            logger=self.log,
        )
        self.log.info("Saving sentences to file %s...", output_path)
        write_sentences(sentences, output_path)
        self.log.info("All done.")
        return sentences
