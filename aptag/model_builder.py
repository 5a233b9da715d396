# aptag/model_builder.py
"""Core logic for training the averaged perceptron model.

This module provides the two training-time building blocks of the tagger:

1.  **Tag Dictionary**: The `analyze_sentences` function scans the training
    corpus once to collect the label vocabulary and a fast-path dictionary of
    frequent words that almost always carry the same label.
2.  **Online Training**: The `PerceptronTrainer` owns the growing weight table
    and updates it whenever a prediction disagrees with the gold label. It
    averages the weights lazily: each (feature, label) pair remembers when its
    weight last changed, so the time-integrated total is only brought up to
    date when the weight is touched again. `average_weights` performs the final
    flush and returns the averaged, pruned table.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from .types import Features, TagDictionary, TaggedSentence, Weights


def analyze_sentences(
    sentences: Iterable[TaggedSentence],
    frequency_threshold: int = 20,
    ambiguity_threshold: float = 0.97,
) -> TagDictionary:
    """
    Collects the label vocabulary and the tag dictionary from a corpus.

    A word enters the dictionary when it occurs at least `frequency_threshold`
    times and its most frequent label accounts for at least
    `ambiguity_threshold` of those occurrences. When two labels share the
    maximum count, the label first seen with that word wins.

    Args:
        sentences: Sentences made of `(word, tag)` pairs.
        frequency_threshold: Minimum total occurrences of a word.
        ambiguity_threshold: Minimum share of the dominant label.

    Returns:
        A `TagDictionary` holding the ordered classes and the word -> tag map.
    """
    classes: Dict[str, None] = {}
    counts: Dict[str, Dict[str, int]] = {}

    for sentence in sentences:
        for word, tag in sentence:
            classes.setdefault(tag, None)
            tag_counts = counts.setdefault(word, {})
            tag_counts[tag] = tag_counts.get(tag, 0) + 1

    tags: Dict[str, str] = {}
    for word, tag_counts in counts.items():
        max_count, max_tag, total = 0, None, 0
        for tag, count in tag_counts.items():
            if count > max_count:
                max_tag, max_count = tag, count
            total += count

        # Rare words stay out of the dictionary, as do ambiguous ones
        if total >= frequency_threshold and max_count / total >= ambiguity_threshold:
            tags[word] = max_tag

    return TagDictionary(classes=list(classes), tags=tags)


@dataclass
class PerceptronTrainer:
    """
    Mutable state of the perceptron while it is being trained.

    Attributes:
        weights: Feature -> label -> current (non-averaged) weight.
        totals: Time-integrated weight of every (feature, label) pair, flushed
                up to the pair's timestamp.
        timestamps: The value of `seen_instances` when each pair's weight last
                    changed.
        seen_instances: Number of updates performed, correct guesses included.
    """
    weights: Weights = field(default_factory=dict)
    totals: Dict[Tuple[str, str], float] = field(default_factory=dict)
    timestamps: Dict[Tuple[str, str], int] = field(default_factory=dict)
    seen_instances: int = 0

    def _update_feature(self, feature: str, label: str, weights: Dict[str, float], delta: float) -> None:
        key = (feature, label)
        weight = weights.get(label, 0.0)
        self.totals[key] = self.totals.get(key, 0.0) + (self.seen_instances - self.timestamps.get(key, 0)) * weight
        self.timestamps[key] = self.seen_instances
        weights[label] = weight + delta

    def update(self, truth: str, guess: str, features: Features) -> None:
        """
        Updates the weights after a prediction.

        The step counter advances even when the guess is correct, in which
        case the weights are left untouched.

        Args:
            truth: The gold label.
            guess: The predicted label.
            features: The features the prediction was made from.
        """
        self.seen_instances += 1

        if truth == guess:
            return

        for feature in features:
            weights = self.weights.setdefault(feature, {})
            self._update_feature(feature, truth, weights, 1.0)
            self._update_feature(feature, guess, weights, -1.0)

    def average_weights(self) -> Weights:
        """
        Computes the time-averaged weights over the whole training run.

        Every pair receives a final flush up to the current step before its
        total is divided by the number of steps. Averages of exactly zero are
        dropped, as are features left without any label.

        Returns:
            The finalized feature -> label -> weight table.
        """
        averaged: Weights = {}
        for feature, weights in self.weights.items():
            updated: Dict[str, float] = {}
            for label, weight in weights.items():
                key = (feature, label)
                total = self.totals[key] + (self.seen_instances - self.timestamps[key]) * weight
                value = total / self.seen_instances
                if value:
                    updated[label] = value
            if updated:
                averaged[feature] = updated
        return averaged
