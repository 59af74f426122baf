# -*- coding: utf-8 -*-
"""
id3tree.records
===============

Concrete record and dataset types, plus a parser for tab-delimited record
files.

Each line of a record file describes one example::

    <identifier>\\t<label>\\t<features>

Only the first character of the label token is used.  Every character of the
features token is one discrete feature value, so ``"yn?y"`` is a record with
four features.  This is the layout of the classic congressional voting
records, where the label is the party and each feature a recorded vote.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

import numpy as np

from .dataset import LabeledDataset
from .exceptions import RecordParseError

# "E" for error: returned only where no label can be determined at all.
DEFAULT_LABEL = "E"


@dataclass(frozen=True)
class Record:
    """A labeled example with a fixed tuple of discrete feature values."""

    identifier: str
    label: Any
    features: tuple

    @property
    def n_features(self) -> int:
        return len(self.features)

    def feature(self, i: int):
        return self.features[i]


class RecordDataset(LabeledDataset):
    """
    Dataset over a list of :class:`Record` objects.

    Parameters
    ----------
    records : sequence of Record
        The examples.  The sequence is copied, so later changes by the caller
        do not leak into the dataset.
    labels : sequence
        Label domain.
    feature_values : sequence
        Feature-value domain.
    default_label : optional
        Sentinel label, ``"E"`` by default.
    """

    def __init__(self, records: Sequence[Record], labels: Sequence, feature_values: Sequence,
                 default_label: Any = DEFAULT_LABEL):
        self._records = tuple(records)
        self._labels = tuple(labels)
        self._feature_values = tuple(feature_values)
        self._default_label = default_label

    @property
    def data(self) -> tuple[Record, ...]:
        return self._records

    @property
    def labels(self) -> tuple:
        return self._labels

    @property
    def feature_values(self) -> tuple:
        return self._feature_values

    @property
    def default_label(self):
        return self._default_label

    def spawn_subset(self, examples, labels, feature_values) -> RecordDataset:
        return RecordDataset(examples, labels, feature_values, default_label=self._default_label)

    @classmethod
    def from_arrays(cls, X, y, *, labels: Sequence | None = None, feature_values: Sequence | None = None,
                    default_label: Any = DEFAULT_LABEL, identifiers: Sequence[str] | None = None) -> RecordDataset:
        """
        Build a dataset from a 2-D feature array and a 1-D label array.

        Domains that are not given explicitly are inferred as the sorted
        unique values of ``y`` and of ``X`` respectively.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Discrete feature values.
        y : array-like of shape (n_samples,)
            Labels.
        labels, feature_values : sequence, optional
            Explicit label and feature-value domains.
        default_label : optional
            Sentinel label.
        identifiers : sequence of str, optional
            One identifier per row; row indices are used when omitted.

        Returns
        -------
        RecordDataset
        """
        X = np.asarray(X, dtype=object)
        y = np.asarray(y, dtype=object)
        if X.ndim != 2:
            raise ValueError(f"X must be 2-dimensional, got shape {X.shape}")
        if len(X) != len(y):
            raise ValueError("X and y must have the same number of rows")
        if identifiers is None:
            identifiers = [str(i) for i in range(len(X))]
        elif len(identifiers) != len(X):
            raise ValueError("identifiers must have one entry per row of X")
        if labels is None:
            labels = _sorted_unique(y)
        if feature_values is None:
            feature_values = _sorted_unique(X.ravel())
        records = [
            Record(str(ident), _item(label), tuple(_item(v) for v in row))
            for ident, row, label in zip(identifiers, X, y)
        ]
        return cls(records, labels, feature_values, default_label=default_label)


def _item(value):
    # numpy scalars -> builtin Python values, so domain lookups hash consistently
    return value.item() if isinstance(value, np.generic) else value


def _sorted_unique(values: np.ndarray) -> tuple:
    return tuple(_item(v) for v in np.unique(values))


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------
def parse_records(lines: Iterable[str], *, default_label: Any = DEFAULT_LABEL) -> RecordDataset:
    """
    Parse tab-delimited record lines into a :class:`RecordDataset`.

    The label and feature-value domains are the sorted sets of every label and
    feature value seen in the input.

    Raises
    ------
    RecordParseError
        If a label is empty, if lines disagree on their number of tokens or
        features, or if there are no records at all.
    """
    records: list[Record] = []
    label_set: set[str] = set()
    feature_set: set[str] = set()
    expected_tokens = expected_features = None

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        tokens = line.split("\t")
        if expected_tokens is not None and len(tokens) != expected_tokens:
            raise RecordParseError(
                f"expected {expected_tokens} tab-separated tokens, found {len(tokens)}", line_number)
        expected_tokens = len(tokens)
        if len(tokens) < 2 or not tokens[1]:
            raise RecordParseError("a label was empty", line_number)

        identifier, label = tokens[0], tokens[1][0]
        features = tuple(tokens[2]) if len(tokens) > 2 else ()
        if expected_features is not None and len(features) != expected_features:
            raise RecordParseError("the records do not all have the same number of features", line_number)
        expected_features = len(features)

        label_set.add(label)
        feature_set.update(features)
        records.append(Record(identifier, label, features))

    if not records:
        raise RecordParseError("no records found")
    return RecordDataset(records, sorted(label_set), sorted(feature_set), default_label=default_label)


def load_records(path: str | Path, *, default_label: Any = DEFAULT_LABEL) -> RecordDataset:
    """Read and parse a tab-delimited records file (see :func:`parse_records`)."""
    with open(path, encoding="utf-8") as fh:
        return parse_records(fh, default_label=default_label)
