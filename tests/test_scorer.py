import pytest

from aptag.scorer import LOWEST_STRING, Scorer, best_label


def test_score_sums_weights_of_active_features():
    weights = {
        "bias": {"NN": 0.5, "VB": -0.25},
        "i word dog": {"NN": 2.0},
        "i-1 tag DT": {"VB": 1.0, "JJ": 0.75},
    }
    scorer = Scorer(weights, ["NN", "VB", "JJ"])

    scores = scorer.score({"bias": 1, "i word dog": 1, "i-1 tag DT": 1, "unknown": 1})

    assert scores == {"NN": pytest.approx(2.5), "VB": pytest.approx(0.75), "JJ": pytest.approx(0.75)}


def test_score_skips_zero_valued_features():
    scorer = Scorer({"bias": {"NN": 1.0}, "off": {"VB": 10.0}}, ["NN", "VB"])

    assert scorer.score({"bias": 1, "off": 0}) == {"NN": 1.0}


def test_predict_takes_strictly_highest_score():
    scorer = Scorer({"bias": {"NN": 1.0, "VB": 2.0}}, ["NN", "VB", "JJ"])

    assert scorer.predict({"bias": 1}) == "VB"


@pytest.mark.parametrize("classes", [["NN", "VB"], ["VB", "NN"]])
def test_tie_goes_to_lexicographically_greater_label(classes):
    scorer = Scorer({"bias": {"NN": 1.0, "VB": 1.0}}, classes)

    assert scorer.predict({"bias": 1}) == "VB"


def test_missing_label_scores_zero():
    scorer = Scorer({"bias": {"NN": -1.0}}, ["NN", "DT"])

    assert scorer.predict({"bias": 1}) == "DT"


def test_untrained_weights_pick_greatest_label():
    scorer = Scorer({}, ["DT", "VB", "NN"])

    assert scorer.predict({"bias": 1}) == "VB"


def test_scorer_sees_weight_updates():
    weights = {}
    scorer = Scorer(weights, ["A", "B"])
    assert scorer.predict({"f": 1}) == "B"

    weights["f"] = {"A": 1.0}

    assert scorer.predict({"f": 1}) == "A"


def test_best_label_with_no_classes_returns_sentinel():
    assert best_label({"NN": 1.0}, []) == LOWEST_STRING


def test_best_label_ignores_scores_outside_vocabulary():
    assert best_label({"ZZ": 5.0, "NN": 1.0}, ["NN", "DT"]) == "NN"
