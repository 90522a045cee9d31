import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for robust execution
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sentgen.config import load_config
from sentgen.errors import SentgenError
from sentgen.generator import SentenceGenerator
from sentgen.log import setup_logging

def main():
    """
    Main command-line interface for the sentence generator.

    This script orchestrates generation from start to finish:
    1.  Loads the configuration file (`config.yaml`) and applies any
        command-line overrides.
    2.  Either trains a fresh classifier from the configured corpus
        (`--train`) or loads the previously saved one.
    3.  Generates the requested number of sentences.
    4.  Writes them, one per line, to the output file.
    """
    parser = argparse.ArgumentParser(
        description="Generate synthetic sentences from an n-gram conditioned classifier.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Path to write the generated sentences to. Overrides paths.output."
    )
    parser.add_argument(
        "--num-sentences",
        type=int,
        default=None,
        help="Number of sentences to generate. Overrides num_sentences."
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible generation. Overrides seed."
    )
    parser.add_argument(
        "--train",
        action="store_true",
        help="Train a new classifier from paths.training instead of loading paths.model."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every generated sentence."
    )
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        print(f"Loading configuration from {args.config}...")
        cfg = load_config(args.config)
        if args.seed is not None:
            cfg.seed = args.seed

        generator = SentenceGenerator(cfg)
        if args.train:
            generator.learn()
        else:
            generator.load_pretrained()

        sentences = generator.generate(args.num_sentences, args.output)
        print(f"\nSuccessfully wrote {len(sentences)} sentences to {args.output or cfg.paths['output']}")

    except (SentgenError, FileNotFoundError, ValueError, TypeError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
