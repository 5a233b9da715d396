# aptag/scorer.py

from __future__ import annotations
from typing import Dict, Mapping, Sequence

from .types import Features, Weights

# Compares lower than any real label
LOWEST_STRING = "\0"


def best_label(scores: Mapping[str, float], classes: Sequence[str]) -> str:
    """
    Picks the best label from a set of scores.

    Labels are scanned in `classes` order and a label without a score counts
    as 0. A strictly higher score replaces the current best; on an exact tie
    the lexicographically greater label is kept.

    Args:
        scores: Label -> score, possibly missing some labels.
        classes: The ordered label vocabulary.

    Returns:
        The selected label.
    """
    best, best_score = LOWEST_STRING, float("-inf")
    for label in classes:
        score = scores.get(label, 0.0)
        if score > best_score:
            best, best_score = label, score
        elif score == best_score and label > best:
            best = label
    return best


class Scorer:
    """
    Scores candidate labels as the dot product of features and weights.

    The scorer holds a reference to the weight table rather than a copy, so
    during training it always sees the perceptron's latest weights.

    Attributes:
        w: The feature -> label -> weight table.
        classes: The ordered label vocabulary.
    """
    def __init__(self, weights: Weights, classes: Sequence[str]):
        self.w = weights
        self.classes = classes

    def score(self, features: Features) -> Dict[str, float]:
        """
        Calculates the score of every label carried by the active features.

        Args:
            features: Feature name -> value.

        Returns:
            Label -> score for the labels that appear in the weight table.
        """
        scores: Dict[str, float] = {}
        for feature, value in features.items():
            if not value or feature not in self.w:
                continue
            for label, weight in self.w[feature].items():
                scores[label] = scores.get(label, 0.0) + value * weight
        return scores

    def predict(self, features: Features) -> str:
        """Returns the best label for the given features."""
        return best_label(self.score(features), self.classes)
