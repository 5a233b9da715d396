# aptag/tagger.py
"""Greedy left-to-right tagging with an averaged perceptron.

The `AveragedPerceptronTagger` ties the other modules together. Training runs
several epochs over the corpus; within an epoch every sentence is decoded left
to right exactly as it will be at inference time, and the perceptron is
updated from its own (possibly wrong) predictions. Words found in the tag
dictionary skip the model entirely, in training and in tagging alike.

Once trained, a tagger is read-only: it can tag any number of sentences and be
exported with `to_dict` and restored with `from_dict`.
"""
from __future__ import annotations
import random
from typing import Any, Dict, List, Optional, Sequence

from tqdm import tqdm

from .config import Config
from .data_validation import check_tagged_corpus, check_words
from .errors import AlreadyTrainedError, ConfigurationError, NotTrainedError
from .features import create_context, extract_features
from .model_builder import PerceptronTrainer, analyze_sentences
from .scorer import Scorer
from .types import START, TaggedSentence, TaggedWord, TaggerState, Weights


class AveragedPerceptronTagger:
    """
    A part-of-speech style sequence tagger trained with an averaged perceptron.

    Attributes:
        cfg: The validated `Config` holding epochs and dictionary thresholds.
        rng: The random source used to shuffle sentences between epochs. Any
             object with a `shuffle(list)` method is accepted.
        classes: The label vocabulary, in first-observed order.
        tags: The tag dictionary used as a fast path for frequent words.
        weights: The finalized, averaged weight table.
    """
    def __init__(self, cfg: Optional[Config] = None, rng: Any = None):
        self.cfg = (cfg or Config()).validate()

        if rng is None:
            rng = random.Random(self.cfg.seed)
        elif not callable(getattr(rng, "shuffle", None)):
            raise ConfigurationError(f"rng must provide a callable 'shuffle' method, got {type(rng).__name__}.")
        self.rng = rng

        self.trained = False
        self.classes: List[str] = []
        self.tags: Dict[str, str] = {}
        self.weights: Weights = {}
        self._trainer: Optional[PerceptronTrainer] = None

    @property
    def state(self) -> TaggerState:
        return "trained" if self.trained else "untrained"

    def train(self, sentences: Sequence[TaggedSentence]) -> "AveragedPerceptronTagger":
        """
        Trains the tagger on the given sentences.

        The corpus is validated in full before anything is modified, so a bad
        corpus leaves the tagger untouched and still trainable.

        Args:
            sentences: Sentences made of `(word, tag)` pairs.

        Returns:
            The tagger itself, now trained.

        Raises:
            AlreadyTrainedError: If the tagger has already been trained.
            InputContractError: If the corpus is empty or malformed.
        """
        if self.trained:
            raise AlreadyTrainedError("This tagger has already been trained.")

        check_tagged_corpus(sentences)

        tag_dictionary = analyze_sentences(
            sentences,
            frequency_threshold=self.cfg.frequency_threshold,
            ambiguity_threshold=self.cfg.ambiguity_threshold,
        )
        self.classes = tag_dictionary.classes
        self.tags = tag_dictionary.tags
        self._trainer = PerceptronTrainer()

        # Shuffling happens on a private copy, never on the caller's list
        sentences = list(sentences)
        iterations = self.cfg.iterations
        for i in tqdm(range(iterations), desc="Training epochs", disable=not self.cfg.show_progress):
            self.iterate(sentences)
            if i != iterations - 1:
                self.rng.shuffle(sentences)

        self.weights = self._trainer.average_weights()
        self._trainer = None
        self.trained = True
        return self

    def iterate(self, sentences: Sequence[TaggedSentence]) -> None:
        """
        Performs a single training epoch over the given sentences.

        Args:
            sentences: Sentences made of `(word, tag)` pairs.
        """
        if self._trainer is None:
            raise RuntimeError("iterate() can only run while the tagger is training.")

        scorer = Scorer(self._trainer.weights, self.classes)
        for sentence in sentences:
            previous, previous2 = START
            context = create_context([word for word, _ in sentence])

            for i, (word, tag) in enumerate(sentence):
                guess = self.tags.get(word)

                if guess is None:
                    features = extract_features(i, word, context, previous, previous2)
                    guess = scorer.predict(features)
                    self._trainer.update(tag, guess, features)

                previous2, previous = previous, guess

    def tag(self, sentence: Sequence[str]) -> List[TaggedWord]:
        """
        Tags a tokenized sentence.

        Args:
            sentence: The words to tag, in order.

        Returns:
            A list of `(word, tag)` tuples, one per input word.

        Raises:
            NotTrainedError: If the tagger has not been trained yet.
            InputContractError: If a word is not a non-empty string.
        """
        if not self.trained:
            raise NotTrainedError("This tagger hasn't been trained yet.")

        check_words(sentence)

        scorer = Scorer(self.weights, self.classes)
        context = create_context(sentence)
        previous, previous2 = START
        output: List[TaggedWord] = []

        for i, word in enumerate(sentence):
            tag = self.tags.get(word)
            if tag is None:
                features = extract_features(i, word, context, previous, previous2)
                tag = scorer.predict(features)

            output.append((word, tag))
            previous2, previous = previous, tag

        return output

    def tag_sents(self, sentences: Sequence[Sequence[str]]) -> List[List[TaggedWord]]:
        """Tags every sentence in order."""
        return [self.tag(sentence) for sentence in sentences]

    def to_dict(self) -> Dict[str, Any]:
        """
        Exports the trained model as plain, JSON-serializable data.

        Returns:
            A dictionary with the ordered `classes`, the `tags` dictionary and
            the averaged `weights` table.

        Raises:
            NotTrainedError: If the tagger has not been trained yet.
        """
        if not self.trained:
            raise NotTrainedError("This tagger hasn't been trained yet.")

        return {
            "classes": list(self.classes),
            "tags": dict(self.tags),
            "weights": {feature: dict(labels) for feature, labels in self.weights.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], cfg: Optional[Config] = None) -> "AveragedPerceptronTagger":
        """
        Restores a trained tagger from the output of `to_dict`.

        Args:
            data: The exported model.
            cfg: Optional configuration for the new instance.

        Returns:
            A trained tagger that tags exactly like the exporting instance.

        Raises:
            TypeError: If the payload does not have the exported shape.
        """
        if not isinstance(data, dict):
            raise TypeError("A tagger model must be a dictionary.")

        classes = data.get("classes")
        tags = data.get("tags")
        weights = data.get("weights")

        if not isinstance(classes, list) or not all(isinstance(c, str) for c in classes):
            raise TypeError("Expected 'classes' to be a list of strings.")
        if not isinstance(tags, dict) or not all(isinstance(t, str) for t in tags.values()):
            raise TypeError("Expected 'tags' to map words to tag strings.")
        if not isinstance(weights, dict):
            raise TypeError("Expected 'weights' to map features to label weights.")
        for feature, labels in weights.items():
            if not isinstance(labels, dict) or not all(
                isinstance(w, (int, float)) and not isinstance(w, bool) for w in labels.values()
            ):
                raise TypeError(f"Weights of feature {feature!r} must map labels to numbers.")

        tagger = cls(cfg)
        tagger.classes = list(classes)
        tagger.tags = dict(tags)
        tagger.weights = {feature: dict(labels) for feature, labels in weights.items()}
        tagger.trained = True
        return tagger

