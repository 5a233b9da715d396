import json
import random

import pytest

from aptag.config import Config
from aptag.errors import (
    AlreadyTrainedError,
    ConfigurationError,
    InputContractError,
    NotTrainedError,
)
from aptag.model_builder import PerceptronTrainer
from aptag.tagger import AveragedPerceptronTagger


class CountingShuffle:
    def __init__(self):
        self.calls = 0

    def shuffle(self, items):
        self.calls += 1
        items.reverse()


def test_new_tagger_is_untrained(quiet_cfg):
    tagger = AveragedPerceptronTagger(quiet_cfg)

    assert tagger.state == "untrained"
    with pytest.raises(NotTrainedError):
        tagger.tag(["The", "dog"])
    with pytest.raises(NotTrainedError):
        tagger.to_dict()


def test_train_twice_fails(quiet_cfg, small_corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg).train(small_corpus)
    assert tagger.state == "trained"

    with pytest.raises(AlreadyTrainedError):
        tagger.train(small_corpus)


@pytest.mark.parametrize(
    "overrides",
    [
        {"iterations": 0},
        {"iterations": 2.5},
        {"iterations": True},
        {"frequency_threshold": 0},
        {"ambiguity_threshold": 0.0},
        {"ambiguity_threshold": 1.5},
        {"seed": "abc"},
    ],
)
def test_invalid_configuration_fails_at_construction(overrides):
    with pytest.raises(ConfigurationError):
        AveragedPerceptronTagger(Config(show_progress=False, **overrides))


def test_rng_without_shuffle_is_rejected(quiet_cfg):
    with pytest.raises(ConfigurationError):
        AveragedPerceptronTagger(quiet_cfg, rng=object())


@pytest.mark.parametrize(
    "corpus",
    [
        [],
        [[]],
        [[("dog", "NN")], []],
        [[("dog",)]],
        [[("dog", "NN", "extra")]],
        [[("", "NN")]],
        [[("dog", "")]],
        [[("dog", None)]],
        "dog/NN",
    ],
)
def test_malformed_corpus_is_rejected_before_training(quiet_cfg, corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg)

    with pytest.raises(InputContractError):
        tagger.train(corpus)

    assert tagger.state == "untrained"
    assert tagger.classes == []
    assert tagger.weights == {}


def test_malformed_words_are_rejected_when_tagging(quiet_cfg, small_corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg).train(small_corpus)

    with pytest.raises(InputContractError):
        tagger.tag(["dog", ""])
    with pytest.raises(InputContractError):
        tagger.tag(["dog", 3])


def test_tag_empty_sentence(quiet_cfg, small_corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg).train(small_corpus)

    assert tagger.tag([]) == []


def test_training_is_deterministic_without_shuffling(quiet_cfg, small_corpus, no_shuffle):
    first = AveragedPerceptronTagger(quiet_cfg, rng=no_shuffle).train(small_corpus)
    second = AveragedPerceptronTagger(quiet_cfg, rng=no_shuffle).train(small_corpus)

    assert first.weights == second.weights
    assert first.to_dict() == second.to_dict()


def test_training_is_deterministic_with_seed(small_corpus):
    cfg = Config(seed=13, show_progress=False)

    first = AveragedPerceptronTagger(cfg).train(small_corpus)
    second = AveragedPerceptronTagger(cfg, rng=random.Random(13)).train(small_corpus)

    assert first.weights == second.weights


def test_shuffles_between_epochs_only(small_corpus):
    rng = CountingShuffle()
    original = list(small_corpus)

    AveragedPerceptronTagger(Config(iterations=3, show_progress=False), rng=rng).train(small_corpus)

    assert rng.calls == 2
    assert small_corpus == original


def test_dictionary_words_bypass_the_model(quiet_cfg):
    corpus = [[("the", "DT"), ("dog", "NN")] for _ in range(20)]

    tagger = AveragedPerceptronTagger(quiet_cfg).train(corpus)
    assert tagger.tags == {"the": "DT", "dog": "NN"}
    assert tagger.weights == {}

    # Whatever the weights say, dictionary words keep their label
    tagger.weights = {"bias": {"NN": 100.0}}

    assert tagger.tag(["the", "the", "the"]) == [("the", "DT"), ("the", "DT"), ("the", "DT")]


def test_dictionary_shortcut_does_not_advance_step_counter(quiet_cfg):
    tagger = AveragedPerceptronTagger(quiet_cfg)
    tagger.classes = ["DT", "NN"]
    tagger.tags = {"the": "DT"}
    tagger._trainer = PerceptronTrainer()

    tagger.iterate([[("the", "DT"), ("dog", "NN"), ("the", "DT")]])

    assert tagger._trainer.seen_instances == 1


def test_guesses_feed_forward_as_previous_tag(quiet_cfg):
    tagger = AveragedPerceptronTagger(quiet_cfg)
    tagger.classes = ["DT", "NN"]
    tagger.tags = {"the": "XX"}
    tagger._trainer = PerceptronTrainer()

    # An empty model guesses NN for "dog", so the gold DT forces an update
    tagger.iterate([[("the", "DT"), ("dog", "DT")]])

    # The dictionary guess, not the gold DT, is the context of "dog"
    assert "i-1 tag XX" in tagger._trainer.weights
    assert "i-1 tag DT" not in tagger._trainer.weights


def test_learns_simple_patterns(quiet_cfg, no_shuffle):
    corpus = [[("the", "DT"), ("dog", "NN")], [("a", "DT"), ("cat", "NN")]] * 5

    tagger = AveragedPerceptronTagger(quiet_cfg, rng=no_shuffle).train(corpus)

    assert tagger.tags == {}
    assert tagger.tag(["the", "dog"]) == [("the", "DT"), ("dog", "NN")]
    assert tagger.tag(["a", "cat"]) == [("a", "DT"), ("cat", "NN")]


def test_tag_preserves_words_and_order(quiet_cfg, small_corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg).train(small_corpus)
    words = ["A", "zebra", "runs", "in", "2024", "."]

    tagged = tagger.tag(words)

    assert [word for word, _ in tagged] == words
    assert all(tag in tagger.classes for _, tag in tagged)


def test_tag_sents_tags_each_sentence(quiet_cfg, small_corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg).train(small_corpus)
    sentences = [["The", "dog"], ["A", "cat", "."]]

    assert tagger.tag_sents(sentences) == [tagger.tag(s) for s in sentences]


def test_export_import_reproduces_tagging(quiet_cfg, small_corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg).train(small_corpus)

    payload = json.loads(json.dumps(tagger.to_dict()))
    restored = AveragedPerceptronTagger.from_dict(payload, quiet_cfg)

    assert restored.state == "trained"
    assert restored.classes == tagger.classes
    assert restored.weights == tagger.weights
    for sentence in (["The", "cat", "barks", "."], ["Dogs", "saw", "a", "well-known", "cat", "in", "1999"]):
        assert restored.tag(sentence) == tagger.tag(sentence)


def test_restored_tagger_cannot_be_retrained(quiet_cfg, small_corpus):
    tagger = AveragedPerceptronTagger(quiet_cfg).train(small_corpus)
    restored = AveragedPerceptronTagger.from_dict(tagger.to_dict(), quiet_cfg)

    with pytest.raises(AlreadyTrainedError):
        restored.train(small_corpus)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"tags": {}, "weights": {}},
        {"classes": ["NN", 1], "tags": {}, "weights": {}},
        {"classes": ["NN"], "tags": {"dog": 1}, "weights": {}},
        {"classes": ["NN"], "tags": {}, "weights": []},
        {"classes": ["NN"], "tags": {}, "weights": {"bias": {"NN": "high"}}},
    ],
)
def test_from_dict_rejects_malformed_payload(payload):
    with pytest.raises(TypeError):
        AveragedPerceptronTagger.from_dict(payload)
