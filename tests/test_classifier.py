import math

import pytest

from sentgen.classifier import BayesClassifier
from sentgen.config import Config
from sentgen.decoder import top_candidates
from sentgen.errors import UntrainedModelError
from sentgen.model_builder import extract_examples, train_classifier
from sentgen.tokenizer import tokenize


def _trained() -> BayesClassifier:
    clf = BayesClassifier()
    for _ in range(3):
        clf.add_document(["a"], "b")
    clf.add_document(["a"], "c")
    for _ in range(2):
        clf.add_document(["b"], "c")
    clf.train()
    return clf


def test_get_classifications_ranks_most_likely_follower_first():
    clf = _trained()

    after_a = clf.get_classifications(["a"])
    after_b = clf.get_classifications(["b"])

    assert [c.label for c in after_a] == ["b", "c"]
    assert [c.label for c in after_b] == ["c", "b"]


def test_scores_are_smoothed_log_posteriors():
    clf = _trained()

    scores = {c.label: c.score for c in clf.get_classifications(["a"])}

    # Six documents, smoothing 1: a single context token scores (n + 1) / 6.
    assert scores["b"] == pytest.approx(math.log(4 / 6))
    assert scores["c"] == pytest.approx(math.log(2 / 6))


def test_scores_combine_prior_with_each_context_token():
    clf = _trained()

    scores = {c.label: c.score for c in clf.get_classifications(["a", "b"])}

    # prior 3/6, then (n_a + 1) / 3 and (n_b + 1) / 3 per label.
    assert scores["b"] == pytest.approx(math.log(3 / 6) + math.log(4 / 3) + math.log(1 / 3))
    assert scores["c"] == pytest.approx(math.log(3 / 6) + math.log(2 / 3) + math.log(3 / 3))


def test_unknown_context_falls_back_to_priors_in_label_order():
    clf = _trained()

    ranked = clf.get_classifications(["zebra"])

    assert [c.label for c in ranked] == ["b", "c"]
    assert ranked[0].score == pytest.approx(ranked[1].score)


def test_untrained_classifier_refuses_to_classify():
    clf = BayesClassifier()
    clf.add_document(["a"], "b")

    with pytest.raises(UntrainedModelError):
        clf.get_classifications(["a"])

    with pytest.raises(UntrainedModelError):
        clf.to_dict()


def test_training_without_documents_yields_no_candidates():
    clf = BayesClassifier()
    clf.train()

    assert clf.is_trained
    assert clf.get_classifications(["a"]) == []


def test_train_reports_each_document():
    clf = BayesClassifier()
    for label in ["x", "y", "z"]:
        clf.add_document(["a"], label)

    seen = []
    clf.train(on_document=lambda index, total: seen.append((index, total)))

    assert seen == [(0, 3), (1, 3), (2, 3)]


def test_dict_round_trip_preserves_rankings():
    clf = _trained()

    restored = BayesClassifier.from_dict(clf.to_dict())

    for context in (["a"], ["b"], ["unseen"]):
        original = clf.get_classifications(context)
        again = restored.get_classifications(context)
        assert [c.label for c in again] == [c.label for c in original]
        assert [c.score for c in again] == pytest.approx([c.score for c in original])


def test_from_dict_rejects_other_classifier_kinds():
    with pytest.raises(ValueError):
        BayesClassifier.from_dict({"classifier": "logistic", "labels": [], "label_docs": [], "features": {}})


def test_smoothing_must_be_positive():
    with pytest.raises(ValueError):
        BayesClassifier(smoothing=0)


FILLERS = [
    "motor", "belt", "pump", "valve", "fan", "gear", "shaft", "seal", "brake", "cable",
    "drum", "chute", "idler", "boom", "track", "filter", "hose", "relay", "switch", "sensor",
]


def _train_on_lines(lines):
    sentences = [tokens for tokens in (tokenize(line) for line in lines) if tokens]
    return train_classifier(extract_examples(sentences, 1))


def test_rare_context_ranks_its_observed_follower_first():
    lines = [f"the {word} went to the {word} way" for word in FILLERS * 3]
    lines.append("bucket wheel stalled")

    clf = _train_on_lines(lines)
    ranked = [c.label for c in clf.get_classifications(["bucket"])]

    assert ranked[0] == "wheel"
    assert "wheel" in [c.label for c in top_candidates(clf.get_classifications(["bucket"]), Config().top_n_options)]
    assert clf.get_classifications(["wheel"])[0].label == "stalled"


def test_observed_follower_beats_frequent_labels():
    clf = _train_on_lines(
        [
            "the conveyor belt tears when the idler bearing seizes",
            "operator reports excessive vibration on the bucket wheel boom",
            "hydraulic pump fails to build pressure after a seal leak",
            "!reset",
            "the slew drive gearbox loses oil through a cracked housing",
            "cutting teeth wear rapidly when digging abrasive material",
        ]
    )

    assert clf.get_classifications(["hydraulic"])[0].label == "pump"
    assert clf.get_classifications(["abrasive"])[0].label == "material"
