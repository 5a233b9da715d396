# scripts/evaluate_model.py
"""Command-line script for evaluating the output of a trained tagger.

It compares a generated (tagged by the model) corpus against a ground-truth,
human-labeled reference corpus and prints overall token accuracy together with
precision, recall and F1 per tag. It can also write a CSV of every point of
disagreement, which is invaluable for error analysis.
"""
import argparse
import csv
import json
import sys
from pathlib import Path

# Add project root to path to allow for package imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from aptag.evaluate import COLUMNS, compare_tags
from aptag.io_utils import load_tagged_sentences

def main():
    """Main entry point for the command-line evaluation script."""
    parser = argparse.ArgumentParser(
        description="Evaluate tagging accuracy against a reference corpus.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--generated", required=True, help="Path to the tagged corpus produced by the model.")
    parser.add_argument("--reference", required=True, help="Path to the ground-truth tagged corpus.")
    parser.add_argument("--disagreements-out", help="Optional: Path to write a detailed disagreements CSV file.")
    args = parser.parse_args()

    try:
        print("Loading files...")
        generated = load_tagged_sentences(args.generated)
        reference = load_tagged_sentences(args.reference)

        report = compare_tags(generated, reference)
        print(f"\nAccuracy: {report['accuracy']:.2%}")
        print("\n--- Per-tag Scores ---")
        print(json.dumps(report["scores"], indent=2))

        if args.disagreements_out and report["disagreements"]:
            Path(args.disagreements_out).parent.mkdir(parents=True, exist_ok=True)
            print(f"\nWriting {len(report['disagreements'])} disagreements to {args.disagreements_out}...")
            with open(args.disagreements_out, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=COLUMNS)
                writer.writeheader()
                writer.writerows(report["disagreements"])

    except (FileNotFoundError, ValueError, TypeError, KeyError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
