"""Exceptions raised by id3tree.

Every error here signals a contract violation by the caller (data outside the
declared domains, an impossible tree or fold configuration, bad subset bounds
or a malformed records file). None of them are retried internally.

- ID3Error: Base class. Catch this to handle any id3tree failure.
- DomainError: A label or feature value lies outside the declared domain.
- EmptyDatasetError: A root node was built from an empty dataset.
- FoldSizeError: Cross-validation could not evaluate a single fold.
- DatasetRangeError: Range-based subsetting received invalid bounds.
- RecordParseError: A tab-delimited records file is malformed.
"""

from __future__ import annotations

from typing import Any


class ID3Error(Exception):
    """Base exception for all id3tree errors."""


class DomainError(ID3Error, ValueError):
    """Raised when an example carries a value outside the declared domain.

    Attributes
    ----------
    value : Any
        The offending label or feature value.
    kind : str
        ``"label"`` or ``"feature value"``.
    domain : tuple
        The declared domain the value was checked against.

    Examples
    --------
    >>> err = DomainError("z", kind="feature value", domain=("y", "n"))
    >>> err.value
    'z'
    """

    def __init__(self, value: Any, *, kind: str, domain: tuple) -> None:
        super().__init__(f"An example carries the {kind} {value!r}, which is not in the declared domain {domain!r}")
        self.value = value
        self.kind = kind
        self.domain = domain


class EmptyDatasetError(ID3Error, ValueError):
    """Raised when the root of a tree is built from a dataset with no examples."""

    def __init__(self) -> None:
        super().__init__("Cannot compute the label of a root node with an empty dataset")


class FoldSizeError(ID3Error, ValueError):
    """Raised when cross-validation would evaluate zero folds.

    Attributes
    ----------
    fold_size : int
        The requested fold size.
    size : int
        Number of examples in the dataset.
    """

    def __init__(self, fold_size: int, size: int) -> None:
        super().__init__(
            f"fold_size must be between 1 and {size - 1} for a dataset of {size} examples, got {fold_size}"
        )
        self.fold_size = fold_size
        self.size = size


class DatasetRangeError(ID3Error, IndexError):
    """Raised when a half-open index range does not fit the dataset.

    Attributes
    ----------
    lower, upper : int
        Inclusive lower and exclusive upper bound.
    size : int
        Number of examples in the dataset.
    """

    def __init__(self, lower: int, upper: int, size: int) -> None:
        super().__init__(f"Range [{lower}, {upper}) is out of bounds for a dataset of {size} examples")
        self.lower = lower
        self.upper = upper
        self.size = size


class RecordParseError(ID3Error, ValueError):
    """Raised when a records file cannot be parsed.

    Attributes
    ----------
    line_number : int or None
        1-indexed line where parsing failed, or ``None`` when the failure
        concerns the file as a whole.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        prefix = f"line {line_number}: " if line_number is not None else ""
        super().__init__(prefix + message)
        self.line_number = line_number
