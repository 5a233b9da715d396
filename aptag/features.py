# aptag/features.py
"""Turns words in context into the sparse features consumed by the scorer.

1.  **Normalization**: `normalize` maps a raw word to a reduced-sparsity form
    (hyphenated words, years and numbers collapse into class tokens).
2.  **Context**: `create_context` pads a sentence's normalized words with
    start and end sentinels so neighbours can be read without bounds checks.
3.  **Feature Extraction**: `extract_features` emits the fixed set of
    presence features for one position. Training and tagging share this
    function, so the feature keys always line up with the learned weights.
"""
from __future__ import annotations
import re
from typing import List, Sequence

from .types import END, START, Features

HYPHEN_TOKEN = "!HYPHEN"
YEAR_TOKEN = "!YEAR"
DIGITS_TOKEN = "!DIGITS"

YEAR_REGEX = re.compile(r"\d{4}", re.ASCII)
DIGIT_REGEX = re.compile(r"\d", re.ASCII)


# --- Normalizer ---
def normalize(word: str) -> str:
    """Normalizes the given word before its pass through the perceptron."""
    if "-" in word and word[0] != "-":
        return HYPHEN_TOKEN
    if YEAR_REGEX.search(word):
        return YEAR_TOKEN
    if DIGIT_REGEX.match(word):
        return DIGITS_TOKEN
    return word.lower()


# --- Context Builder ---
def create_context(words: Sequence[str]) -> List[str]:
    """
    Builds the padded, normalized context of a tokenized sentence.

    Args:
        words: The words of the sentence, in order.

    Returns:
        A list of length `len(words) + 4` where the normalized form of
        `words[i]` sits at index `i + 2`.
    """
    return [*START, *(normalize(word) for word in words), *END]


# --- Feature Extractor ---
def extract_features(index: int, word: str, context: Sequence[str], previous: str, previous2: str) -> Features:
    """
    Creates the presence features for the word at `index`.

    Args:
        index: The position of the word in the sentence.
        word: The raw word.
        context: The sentence context built by `create_context`.
        previous: The label predicted for the previous word.
        previous2: The label predicted two words back.

    Returns:
        A dictionary mapping every feature name to 1.
    """
    i = index + 2

    def add(name: str, *args: str) -> None:
        features[" ".join((name,) + args)] = 1

    features: Features = {"bias": 1}
    add("i suffix", word[-3:])
    add("i pref1", word[0])
    add("i-1 tag", previous)
    add("i-2 tag", previous2)
    add("i tag+i-2 tag", previous, previous2)
    add("i word", context[i])
    add("i-1 tag+i word", previous, context[i])
    add("i-1 word", context[i - 1])
    add("i-1 suffix", context[i - 1][-3:])
    add("i-2 word", context[i - 2])
    add("i+1 word", context[i + 1])
    add("i+1 suffix", context[i + 1][-3:])
    add("i+2 word", context[i + 2])
    return features
