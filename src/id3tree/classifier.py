# -*- coding: utf-8 -*-
"""
id3tree.classifier
==================

A scikit-learn style estimator around ID3 induction and reduced-error
pruning.

``ID3Classifier`` accepts 2-D arrays of discrete feature values (strings,
integers, booleans, anything hashable and sortable) and 1-D label arrays.
The label and feature-value domains are inferred from the training data
unless given explicitly.  Fitting builds a tree on the training split and
prunes it against a tuning split selected by stride or by size (see
:func:`id3tree.evaluation.build_tuned_tree`).

Only discrete features are supported; numeric columns are treated as
categories like any other value.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin

from .evaluation import build_tuned_tree, cross_validate
from .records import DEFAULT_LABEL, Record, RecordDataset
from .tree import TreeNode
from .tree import export_graphviz as _export_graphviz
from .tree import export_rules as _export_rules
from .tree import format_tree


class ID3Classifier(ClassifierMixin, BaseEstimator):
    """
    ID3 decision tree classifier with reduced-error pruning.

    Parameters
    ----------
    tuning : {"none", "stride", "size"}, default="stride"
        How the tuning subset used for pruning is selected.  ``"none"``
        disables pruning and trains on all data.
    tuning_param : int, default=4
        Stride (``tuning="stride"``) or approximate tuning-set size
        (``tuning="size"``).  With the default stride of 4, every fourth
        example is held out for pruning.
    labels : sequence or None, default=None
        Label domain.  Inferred from ``y`` when ``None``.
    feature_values : sequence or None, default=None
        Feature-value domain shared by all features.  Inferred from ``X``
        when ``None``.  Pass it explicitly when some values may be absent
        from the training data.
    default_label : optional, default="E"
        Sentinel label, returned only where no label can be determined.
    feature_names : list[str] or None, default=None
        Names used by :meth:`print_tree`, :meth:`export_rules` and
        :meth:`export_graphviz`.

    Attributes
    ----------
    tree_ : TreeNode
        Root of the fitted (pruned) tree.
    classes_ : ndarray
        The label domain used during fitting.
    feature_values_ : tuple
        The feature-value domain used during fitting.
    n_features_ : int
        Number of features seen during fitting.
    """

    def __init__(
        self,
        *,
        tuning: str = "stride",
        tuning_param: int = 4,
        labels: Sequence | None = None,
        feature_values: Sequence | None = None,
        default_label: Any = DEFAULT_LABEL,
        feature_names: list[str] | None = None,
    ):
        self.tuning = tuning
        self.tuning_param = tuning_param
        self.labels = labels
        self.feature_values = feature_values
        self.default_label = default_label
        self.feature_names = feature_names

    def _make_dataset(self, X, y) -> RecordDataset:
        return RecordDataset.from_arrays(
            X, y,
            labels=self.labels,
            feature_values=self.feature_values,
            default_label=self.default_label,
        )

    def fit(self, X, y):
        dataset = self._make_dataset(X, y)
        self.classes_ = np.array(dataset.labels)
        self.feature_values_ = dataset.feature_values
        self.n_features_ = dataset.n_features
        self.tree_ = build_tuned_tree(dataset, self.tuning, self.tuning_param)
        return self

    def _check_fitted(self) -> TreeNode:
        tree = getattr(self, "tree_", None)
        if tree is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")
        return tree

    def predict(self, X):
        """
        Predict labels for the provided samples.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Discrete feature values.

        Returns
        -------
        ndarray of shape (n_samples,)
            Predicted labels.

        Raises
        ------
        ValueError
            If the estimator has not been fitted.
        """
        tree = self._check_fitted()
        X = np.asarray(X, dtype=object)
        preds = [tree.classify(Record(str(i), None, tuple(row))) for i, row in enumerate(X)]
        return np.array(preds)

    def cross_validate(self, X, y, fold_size: int = 1) -> float:
        """
        Estimate accuracy by contiguous-fold cross-validation.

        Uses this estimator's tuning configuration for every fold.  The
        estimator itself is left unfitted (or as it was).

        Returns
        -------
        float
            Mean held-out accuracy over all folds.
        """
        dataset = self._make_dataset(X, y)
        return cross_validate(dataset, fold_size, self.tuning, self.tuning_param)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    def print_tree(self, feature_names=None):
        """Pretty-print the fitted tree to ``stdout``."""
        print(format_tree(self._check_fitted(), feature_names or self.feature_names))

    def export_rules(self, *, feature_names=None) -> list[str]:
        """
        Export one ``<antecedent> => <label>`` rule per leaf of the fitted tree.
        """
        return _export_rules(self._check_fitted(), feature_names or self.feature_names)

    def export_graphviz(self, filename: str | None = None, *, feature_names=None, format: str = "png") -> str:
        """
        Export the tree structure in Graphviz format.

        Parameters
        ----------
        filename : str or None, default=None
            Basename of the output file.  If None, the DOT source is returned
            and no file is written.
        feature_names : list[str], optional
            Custom names for the input features.
        format : str, default="png"
            Output format.  ``'dot'`` writes the DOT source directly and does
            not require the external ``dot`` binary.

        Returns
        -------
        str
            Path to the written file, or the DOT source if filename is None.
        """
        dot = _export_graphviz(self._check_fitted(), feature_names or self.feature_names)
        if filename is None:
            return dot.source
        if format.lower() == "dot":
            path = f"{filename}.dot"
            dot.save(path)
            return path
        dot.format = format
        return dot.render(filename, cleanup=True)
