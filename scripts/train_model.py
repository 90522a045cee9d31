import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sentgen.config import load_config
from sentgen.errors import SentgenError
from sentgen.io_utils import read_file_tokens
from sentgen.log import setup_logging
from sentgen.model_builder import extract_examples, train_classifier

def build_model(corpus: str, model_path: str, ngram_n: int = 1, max_lines: int = 10000, smoothing: float = 1.0):
    """
    Trains a classifier on one corpus file and saves it.

    Args:
        corpus: Path to the newline-delimited training text.
        model_path: Output path for the classifier JSON.
        ngram_n: Context width used for the n-gram examples.
        max_lines: Number of corpus lines to read.
        smoothing: Additive smoothing for the Bayes classifier.

    Returns:
        A tuple of the trained classifier and the number of training examples.

    Raises:
        CorpusReadError: If the corpus cannot be read.
        PersistenceError: If the classifier cannot be saved.
        ValueError: If the corpus yields no training examples.
    """
    sentences = read_file_tokens(corpus, max_lines)
    print(f"Found {len(sentences)} usable sentences in {corpus}.")

    examples = extract_examples(sentences, ngram_n)
    if not examples:
        raise ValueError(f"No training examples could be built from {corpus}.")

    print(f"Built {len(examples)} n-gram examples (n={ngram_n}).")
    classifier = train_classifier(examples, model_path, smoothing=smoothing)
    return classifier, len(examples)

def main():
    """
    Main entry point for the command-line model training script.

    Reads the corpus named by the configuration (or `--corpus`), builds the
    n-gram training examples, fits the classifier and saves it to
    `paths.model` (or `--model`).
    """
    parser = argparse.ArgumentParser(
        description="Train the next-word classifier used for sentence generation.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--config", default="config.yaml", help="Path to the configuration YAML file.")
    parser.add_argument("--corpus", type=str, default=None, help="Training text file. Overrides paths.training.")
    parser.add_argument("--model", type=str, default=None, help="Output path for the classifier. Overrides paths.model.")
    args = parser.parse_args()

    setup_logging()

    try:
        cfg = load_config(args.config)
        corpus = args.corpus or cfg.paths["training"]
        model_path = args.model or cfg.paths["model"]

        build_model(
            corpus,
            model_path,
            ngram_n=cfg.ngram_n,
            max_lines=cfg.max_training_lines_per_file,
            smoothing=cfg.smoothing,
        )
    except (SentgenError, FileNotFoundError, ValueError, TypeError) as e:
        print(f"\n[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Successfully saved classifier to {model_path}")

if __name__ == "__main__":
    main()
