from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple
import numpy as np
import pandas as pd

from .errors import UntrainedModelError
from .types import Candidate, Token

ProgressCallback = Callable[[int, int], None]

class Classifier(Protocol):
    """The surface the trainer, decoder and persistence layer rely on."""

    def add_document(self, tokens: Sequence[Token], label: Token) -> None: ...

    def train(self, on_document: Optional[ProgressCallback] = None) -> None: ...

    def get_classifications(self, context: Sequence[Token]) -> List[Candidate]: ...

    def to_dict(self) -> Dict[str, Any]: ...

class BayesClassifier:
    """
    A multinomial naive Bayes classifier over token "documents".

    Each registered document is a short sequence of context tokens labelled
    with the token that followed them. Training counts how often every
    feature token occurs with every label; prediction ranks all labels by
    their smoothed log posterior given the context:

        log(docs_c / N) + sum over context tokens f of log((n_fc + s) / docs_c)

    where `docs_c` is the number of documents labelled `c`, `N` the total
    document count, `n_fc` the co-occurrence count and `s` the smoothing.
    With one context token this is log((n_fc + s) / N): the smoothed
    transition count decides the ranking.

    The count table is a pandas DataFrame with one row per feature token and
    one column per label, built with a groupby/unstack over (feature, label)
    pairs.

    Attributes:
        smoothing: Additive (Laplace) smoothing applied to every count.
        feature_counts: Feature x label occurrence counts; None until trained.
        label_docs: Number of training documents per label; None until trained.
    """
    KIND = "bayes"

    def __init__(self, smoothing: float = 1.0):
        if smoothing <= 0:
            raise ValueError(f"smoothing must be positive, got {smoothing}")
        self.smoothing = float(smoothing)
        self.docs: List[Tuple[Tuple[Token, ...], Token]] = []
        self.feature_counts: Optional[pd.DataFrame] = None
        self.label_docs: Optional[pd.Series] = None
        self._log_prior: Optional[np.ndarray] = None
        self._log_likelihood: Optional[pd.DataFrame] = None

    @property
    def is_trained(self) -> bool:
        return self.feature_counts is not None

    @property
    def labels(self) -> List[Token]:
        if self.feature_counts is None:
            return []
        return list(self.feature_counts.columns)

    def add_document(self, tokens: Sequence[Token], label: Token) -> None:
        """Registers one labelled document. Takes effect on the next `train()`."""
        self.docs.append((tuple(tokens), label))

    def train(self, on_document: Optional[ProgressCallback] = None) -> None:
        """
        Fits the count tables from every registered document.

        Args:
            on_document: Optional observer called as `on_document(index, total)`
                         once per document as it is counted. It has no effect
                         on the resulting model.
        """
        total = len(self.docs)
        rows = []
        label_order: Dict[Token, None] = {}
        for index, (tokens, label) in enumerate(self.docs):
            label_order.setdefault(label, None)
            for tok in tokens:
                rows.append({"feature": tok, "label": label})
            if on_document is not None:
                on_document(index, total)

        labels = list(label_order)
        doc_labels = pd.Series([label for _, label in self.docs], dtype=object)
        label_docs = doc_labels.value_counts().reindex(labels, fill_value=0)

        if rows:
            df = pd.DataFrame(rows, columns=["feature", "label"])
            counts = df.groupby(["feature", "label"], sort=False).size().unstack(fill_value=0)
            counts = counts.reindex(columns=labels, fill_value=0)
        else:
            counts = pd.DataFrame(columns=labels, dtype=float)

        self._set_tables(counts.astype(float), label_docs.astype(float))

    def _set_tables(self, counts: pd.DataFrame, label_docs: pd.Series) -> None:
        self.feature_counts = counts
        self.label_docs = label_docs

        if len(label_docs) == 0:
            self._log_prior = np.zeros(0)
            self._log_likelihood = counts
            return

        self._log_likelihood = np.log((counts + self.smoothing).div(label_docs, axis=1))
        self._log_prior = np.log(label_docs.to_numpy() / label_docs.sum())

    def get_classifications(self, context: Sequence[Token]) -> List[Candidate]:
        """
        Ranks every known label for the given context.

        Context tokens never seen during training carry no evidence and are
        ignored; a context with no known tokens is ranked by the label priors
        alone.

        Args:
            context: The preceding tokens to condition on.

        Returns:
            One `Candidate` per label, ordered by descending score. Ties keep
            the order in which labels were first seen during training.

        Raises:
            UntrainedModelError: If `train()` has not been called.
        """
        if not self.is_trained:
            raise UntrainedModelError("Classifier must be trained before it can classify.")

        labels = self.labels
        if not labels:
            return []

        scores = self._log_prior.copy()
        known = [tok for tok in context if tok in self._log_likelihood.index]
        if known:
            scores = scores + self._log_likelihood.loc[known].to_numpy().sum(axis=0)

        order = np.argsort(-scores, kind="stable")
        return [Candidate(label=labels[i], score=float(scores[i])) for i in order]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializes the trained tables to a JSON-compatible dictionary.

        Only non-zero counts are stored. Registered-but-untrained documents
        are not part of the persisted form.

        Raises:
            UntrainedModelError: If `train()` has not been called.
        """
        if not self.is_trained:
            raise UntrainedModelError("Only a trained classifier can be serialized.")

        features: Dict[str, Dict[str, int]] = {}
        for feature, row in self.feature_counts.iterrows():
            nonzero = {label: int(count) for label, count in row.items() if count}
            if nonzero:
                features[feature] = nonzero

        return {
            "classifier": self.KIND,
            "smoothing": self.smoothing,
            "labels": self.labels,
            "label_docs": [int(n) for n in self.label_docs.to_numpy()],
            "features": features,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BayesClassifier":
        """
        Rebuilds a trained classifier from `to_dict()` output.

        Raises:
            ValueError: If the dictionary does not describe a Bayes classifier.
            KeyError: If a required key is missing.
        """
        if data.get("classifier") != cls.KIND:
            raise ValueError(f"Expected a '{cls.KIND}' classifier, found {data.get('classifier')!r}.")

        labels = list(data["labels"])
        label_docs = pd.Series(data["label_docs"], index=labels, dtype=float)

        features: Dict[str, Dict[str, int]] = data["features"]
        counts = pd.DataFrame.from_dict(features, orient="index", dtype=float)
        counts = counts.reindex(columns=labels, fill_value=0.0).fillna(0.0)

        clf = cls(smoothing=float(data.get("smoothing", 1.0)))
        clf._set_tables(counts, label_docs)
        return clf
