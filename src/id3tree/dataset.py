# -*- coding: utf-8 -*-
"""
id3tree.dataset
===============

The labeled-dataset model used for tree induction.

A dataset bundles three things: an ordered sequence of examples, the full
label domain and the full feature-value domain.  The two domains are fixed
once, from the complete (unsplit) data, and are handed unchanged to every
subset spawned from it.  A node deep in the tree therefore still knows about
feature values that none of its own examples carry, which is what allows
classification to stay total over the original domain.

Datasets are never mutated.  Every partitioning or subsetting operation
spawns a new dataset through ``spawn_subset`` with its own example list.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Hashable, Protocol, Sequence, TypeVar

import numpy as np
from loguru import logger

from .exceptions import DatasetRangeError, DomainError

L = TypeVar("L", bound=Hashable)
K = TypeVar("K", bound=Hashable)
L_co = TypeVar("L_co", covariant=True)
K_co = TypeVar("K_co", covariant=True)


class LabeledExample(Protocol[L_co, K_co]):
    """Capabilities the induction core needs from a single example."""

    @property
    def label(self) -> L_co: ...

    @property
    def n_features(self) -> int: ...

    def feature(self, i: int) -> K_co: ...


D = TypeVar("D", bound="LabeledDataset")


class LabeledDataset(ABC, Generic[L, K]):
    """Abstract labeled dataset with fixed label and feature-value domains.

    Subclasses provide storage (``data``, ``labels``, ``feature_values``,
    ``default_label``) and a factory (``spawn_subset``).  Everything the
    induction, pruning and evaluation code needs is built on top of those.
    """

    # ------------------------------------------------------------------
    # Abstract contract
    # ------------------------------------------------------------------
    @property
    @abstractmethod
    def data(self) -> Sequence[LabeledExample[L, K]]:
        """The examples in this dataset, in order."""

    @property
    @abstractmethod
    def labels(self) -> tuple[L, ...]:
        """The full label domain."""

    @property
    @abstractmethod
    def feature_values(self) -> tuple[K, ...]:
        """The full feature-value domain."""

    @property
    @abstractmethod
    def default_label(self) -> L:
        """Sentinel label used when no label can be determined otherwise."""

    @abstractmethod
    def spawn_subset(
        self: D,
        examples: list[LabeledExample[L, K]],
        labels: tuple[L, ...],
        feature_values: tuple[K, ...],
    ) -> D:
        """Create a new dataset of the same concrete type over ``examples``."""

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------
    def size(self) -> int:
        return len(self.data)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def n_features(self) -> int:
        """Feature-vector length shared by all examples (0 when empty)."""
        return self.data[0].n_features if len(self.data) else 0

    def _spawn(self: D, examples: list[LabeledExample[L, K]]) -> D:
        return self.spawn_subset(examples, self.labels, self.feature_values)

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------
    def partition_by_feature(self: D, i: int) -> dict[K, D]:
        """
        Partition the examples by the value of feature ``i``.

        Every value of the feature-value domain is a key of the result, in
        domain order.  Values that no example carries map to an empty
        dataset so that induction always considers the whole domain.

        Parameters
        ----------
        i : int
            Index of the feature to partition on.

        Returns
        -------
        dict
            Mapping ``{feature value: dataset}``.

        Raises
        ------
        DomainError
            If an example's value at ``i`` is not in the feature-value domain.
        """
        buckets: dict[K, list] = {value: [] for value in self.feature_values}
        for example in self.data:
            value = example.feature(i)
            bucket = buckets.get(value)
            if bucket is None:
                raise DomainError(value, kind="feature value", domain=self.feature_values)
            bucket.append(example)
        logger.trace(
            "Partitioned {} examples on feature {}: {}",
            len(self.data), i, {value: len(bucket) for value, bucket in buckets.items()},
        )
        return {value: self._spawn(bucket) for value, bucket in buckets.items()}

    def group_by_label(self) -> dict[L, list[LabeledExample[L, K]]]:
        """
        Group the examples by label.

        Returns
        -------
        dict
            Mapping ``{label: [examples]}`` over the whole label domain in
            declared order.  Labels with no examples map to an empty list.

        Raises
        ------
        DomainError
            If an example's label is not in the label domain.
        """
        groups: dict[L, list] = {label: [] for label in self.labels}
        for example in self.data:
            group = groups.get(example.label)
            if group is None:
                raise DomainError(example.label, kind="label", domain=self.labels)
            group.append(example)
        return groups

    def _label_counts(self) -> np.ndarray:
        groups = self.group_by_label()
        return np.array([len(groups[label]) for label in self.labels], dtype=float)

    # ------------------------------------------------------------------
    # Subsetting
    # ------------------------------------------------------------------
    def split_by_stride(self: D, stride: int) -> tuple[D, D]:
        """
        Split into ``(tuning, training)`` by position.

        Examples whose index is a multiple of ``stride`` go to the first
        (tuning) dataset; all others go to the second (training) dataset.

        Parameters
        ----------
        stride : int
            Step between tuning examples.  Must be at least 1.

        Returns
        -------
        tuple
            ``(tuning, training)``.
        """
        if stride < 1:
            raise ValueError(f"stride must be >= 1, got {stride}")
        tuning, training = [], []
        for index, example in enumerate(self.data):
            (tuning if index % stride == 0 else training).append(example)
        return self._spawn(tuning), self._spawn(training)

    def _check_range(self, lower: int, upper: int) -> None:
        if not (0 <= lower <= upper <= len(self.data)):
            raise DatasetRangeError(lower, upper, len(self.data))

    def excluding_range(self: D, lower: int, upper: int) -> D:
        """Dataset of every example outside the half-open range ``[lower, upper)``."""
        self._check_range(lower, upper)
        data = list(self.data)
        return self._spawn(data[:lower] + data[upper:])

    def from_range(self: D, lower: int, upper: int) -> D:
        """Dataset of the examples inside the half-open range ``[lower, upper)``."""
        self._check_range(lower, upper)
        return self._spawn(list(self.data[lower:upper]))

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def entropy(self) -> float:
        """
        Shannon entropy (base 2) of the label distribution.

        Categories are the declared label domain; labels with no examples
        contribute nothing (``0 * log2(0) := 0``).  An empty dataset has
        entropy ``0.0``.
        """
        if not len(self.data):
            return 0.0
        counts = self._label_counts()
        p = counts / counts.sum()
        p = p[p > 0]
        return float(-np.sum(p * np.log2(p)))

    def majority_labels(self) -> list[L]:
        """Labels sharing the largest count, in declared domain order."""
        counts = self._label_counts()
        if not counts.size or counts.max() <= 0:
            return [self.default_label]
        top = counts.max()
        return [label for label, count in zip(self.labels, counts) if count == top]

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(size={len(self.data)}, labels={self.labels!r}, "
                f"feature_values={self.feature_values!r})")
