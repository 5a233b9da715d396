# main.py

import argparse
import sys
from pathlib import Path

# Add project root to path for robust execution
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from aptag.config import load_config
from aptag.io_utils import load_model, load_sentences, save_tagged_sentences

def main():
    """
    Main command-line interface for tagging tokenized text.

    This script performs the following steps:
    1.  Loads the configuration file (`config.yaml`) to locate the model.
    2.  Loads the trained tagger model from its JSON file.
    3.  Loads the already tokenized input sentences (JSON or plain text).
    4.  Tags every sentence with greedy left-to-right decoding.
    5.  Writes the tagged sentences to the output JSON file.
    """
    parser = argparse.ArgumentParser(
        description="Tag tokenized sentences with a trained averaged perceptron model.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to the tokenized input: a .json file or one sentence per line."
    )
    parser.add_argument(
        "--output",
        required=True,
        help="Path to write the tagged JSON output."
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Path to the model JSON. Defaults to paths.model in the config."
    )
    args = parser.parse_args()

    try:
        # 1. Load configuration
        print(f"Loading configuration from {args.config}...")
        cfg = load_config(args.config)

        # 2. Load the trained model
        if args.model:
            model_path = Path(args.model)
        else:
            model_path = Path(args.config).parent / cfg.paths["model"]
        print(f"Loading model from {model_path}...")
        tagger = load_model(str(model_path), cfg)

        # 3. Load input data
        print(f"Loading sentences from {args.input}...")
        sentences = load_sentences(args.input)

        # 4. Tag
        print(f"Tagging {len(sentences)} sentences...")
        tagged = tagger.tag_sents(sentences)

        # 5. Write output
        save_tagged_sentences(args.output, tagged)
        print(f"\nSuccessfully wrote tagged output to {args.output}")

    except (FileNotFoundError, ValueError, TypeError, KeyError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
