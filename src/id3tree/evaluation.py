# -*- coding: utf-8 -*-
"""
id3tree.evaluation
==================

Orchestration of induction and pruning: building tuned trees and estimating
their accuracy by cross-validation over contiguous folds.
"""

from __future__ import annotations

from enum import Enum

from loguru import logger

from .dataset import LabeledDataset
from .exceptions import FoldSizeError
from .pruning import prune_tree
from .tree import TreeNode, build_tree, score

__all__ = ["TuningMethod", "build_tuned_tree", "cross_validate", "score"]


class TuningMethod(str, Enum):
    """How a tuning subset is carved out of the training data."""

    NONE = "none"
    STRIDE = "stride"
    SIZE = "size"


def build_tuned_tree(dataset: LabeledDataset, method: TuningMethod | str = TuningMethod.NONE,
                     size_or_stride: int = 0) -> TreeNode:
    """
    Build a tree from ``dataset``, optionally pruned against a tuning subset.

    Parameters
    ----------
    dataset : LabeledDataset
        All available training data.
    method : TuningMethod or str, default="none"
        ``"none"`` builds on the whole dataset without pruning.  ``"stride"``
        holds out every ``size_or_stride``-th example (starting with the first)
        for tuning and trains on the rest.  ``"size"`` does the same with a
        stride of ``len(dataset) // size_or_stride``, i.e. it holds out roughly
        ``size_or_stride`` examples.
    size_or_stride : int
        Stride or tuning-set size, depending on ``method``.  Ignored for
        ``"none"``.

    Returns
    -------
    TreeNode
        Root of the (pruned) tree.
    """
    method = TuningMethod(method)
    if method is TuningMethod.NONE:
        return build_tree(dataset)

    if size_or_stride < 1:
        raise ValueError(f"size_or_stride must be >= 1 for tuning method {method.value!r}, got {size_or_stride}")
    stride = size_or_stride
    if method is TuningMethod.SIZE:
        stride = dataset.size() // size_or_stride
    tuning, training = dataset.split_by_stride(stride)
    logger.debug("Tuning by {} (stride={}): {} training, {} tuning examples",
                 method.value, stride, training.size(), tuning.size())

    tree = build_tree(training)
    prune_tree(tree, tuning)
    return tree


def cross_validate(dataset: LabeledDataset, fold_size: int, method: TuningMethod | str = TuningMethod.NONE,
                   size_or_stride: int = 0) -> float:
    """
    Estimate accuracy by holding out each contiguous fold of ``fold_size``.

    Folds start at every offset ``i`` with ``i + fold_size <= len(dataset)``;
    consecutive folds overlap unless ``fold_size == 1``.  For each fold a
    tree is built and tuned on the remaining examples with
    :func:`build_tuned_tree` and scored on the fold.

    Returns
    -------
    float
        Mean score over all folds.

    Raises
    ------
    FoldSizeError
        If ``fold_size`` leaves no fold with a non-empty training set.
    """
    size = dataset.size()
    if fold_size < 1 or fold_size >= size:
        raise FoldSizeError(fold_size, size)

    scores = []
    for i in range(size - fold_size + 1):
        training = dataset.excluding_range(i, i + fold_size)
        testing = dataset.from_range(i, i + fold_size)
        tree = build_tuned_tree(training, method, size_or_stride)
        scores.append(score(tree, testing))
        logger.info("Fold {}/{} [{}, {}): score {:.4f}",
                    i + 1, size - fold_size + 1, i, i + fold_size, scores[-1])
    return sum(scores) / len(scores)
