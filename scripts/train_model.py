# scripts/train_model.py

import argparse
import json
import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

# Add project root to path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from aptag.config import Config, load_config
from aptag.evaluate import compare_tags
from aptag.io_utils import load_tagged_sentences, save_model
from aptag.tagger import AveragedPerceptronTagger

CORPUS_SUFFIXES = (".json", ".txt")


def collect_corpus_files(corpus: Path) -> List[Path]:
    """Returns the corpus file itself, or every corpus file inside a directory."""
    if corpus.is_dir():
        return sorted(p for p in corpus.iterdir() if p.is_file() and p.suffix.lower() in CORPUS_SUFFIXES)
    return [corpus]


def load_corpus(corpus: Path) -> list:
    """
    Loads every tagged sentence from a corpus file or directory.

    Args:
        corpus: A tagged corpus file, or a directory of `.json`/`.txt` files
                which are read in name order.

    Returns:
        A single list holding the sentences of all files.
    """
    paths = collect_corpus_files(corpus)
    if not paths:
        raise FileNotFoundError(f"No corpus files found in {corpus}.")

    sentences = []
    for path in tqdm(paths, desc="Loading corpus"):
        sentences.extend(load_tagged_sentences(str(path)))
    return sentences


def main():
    """
    Main entry point for the command-line model training script.

    This script orchestrates the training process:
    1.  Parsing command-line arguments for corpus path, output path and
        training parameters.
    2.  Loading the configuration, with command-line overrides applied.
    3.  Loading the tagged training corpus.
    4.  Training the averaged perceptron tagger.
    5.  Saving the trained model to JSON.
    6.  Optionally reporting accuracy on a held-out development corpus.
    """
    parser = argparse.ArgumentParser(
        description="Train an averaged perceptron tagger on a tagged corpus.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--corpus", type=str, required=True, help="Path to a tagged corpus file or directory.")
    parser.add_argument("--model", type=str, required=True, help="Output path for the model JSON.")
    parser.add_argument("--config", default=None, help="Optional path to the configuration YAML file.")
    parser.add_argument("--iterations", type=int, default=None, help="Override the number of training epochs.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for shuffling sentences between epochs.")
    parser.add_argument("--dev", type=str, default=None, help="Optional tagged corpus to report accuracy on.")
    args = parser.parse_args()

    try:
        cfg = load_config(args.config) if args.config else Config()
        if args.iterations is not None:
            cfg.iterations = args.iterations
        if args.seed is not None:
            cfg.seed = args.seed

        sentences = load_corpus(Path(args.corpus))
        print(f"Loaded {len(sentences)} training sentences.")

        print(f"\n--- Training for {cfg.iterations} epochs ---")
        tagger = AveragedPerceptronTagger(cfg).train(sentences)
        print(
            f"Learned {len(tagger.classes)} tags, {len(tagger.tags)} dictionary words"
            f" and {len(tagger.weights)} weighted features."
        )

        save_model(args.model, tagger)
        print(f"Successfully saved model to {args.model}")

        if args.dev:
            print("\n--- Evaluating on development corpus ---")
            reference = load_corpus(Path(args.dev))
            generated = tagger.tag_sents([[word for word, _ in sentence] for sentence in reference])
            report = compare_tags(generated, reference)
            print(f"Development accuracy: {report['accuracy']:.2%}")
            print(json.dumps(report["scores"], indent=2))

    except (FileNotFoundError, ValueError, TypeError, KeyError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
