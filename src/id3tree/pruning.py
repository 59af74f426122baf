# -*- coding: utf-8 -*-
"""
id3tree.pruning
===============

Reduced-error pruning against a held-out tuning dataset.

Each round tries every internal, un-pruned node in post-order.  A node is
tried by forcing it to act as a leaf, re-scoring the whole tree on the
tuning data and restoring the flag.  The node whose trial scored best is
then pruned for good; ties go to the node tried last, and a trial that only
matches the current accuracy still counts because the smaller tree is
preferred.  Rounds repeat until no single prune keeps the accuracy.
"""

from __future__ import annotations

from typing import Iterator

from loguru import logger

from .dataset import LabeledDataset
from .tree import TreeNode, score


def prune_tree(tree: TreeNode, tuning: LabeledDataset) -> int:
    """
    Prune ``tree`` in place until no single prune keeps tuning accuracy.

    Parameters
    ----------
    tree : TreeNode
        Root of an induced tree.
    tuning : LabeledDataset
        Held-out examples, disjoint from the training data.

    Returns
    -------
    int
        Number of nodes that were pruned.
    """
    n_pruned = 0
    while True:
        candidate, accuracy = _best_prune(tree, tuning)
        if candidate is None:
            break
        candidate.pruned = True
        n_pruned += 1
        logger.debug("Prune round {}: pruned {!r} (tuning accuracy {:.4f}, {} nodes left)",
                     n_pruned, candidate, accuracy, tree.node_count())
    logger.debug("Pruning finished after {} prunes", n_pruned)
    return n_pruned


def _best_prune(tree: TreeNode, tuning: LabeledDataset) -> tuple[TreeNode | None, float]:
    best_accuracy = score(tree, tuning)
    best_node = None
    for node in _internal_nodes_post_order(tree):
        node.pruned = True
        try:
            accuracy = score(tree, tuning)
        finally:
            node.pruned = False
        logger.trace("Trial prune of {!r}: tuning accuracy {:.4f}", node, accuracy)
        if accuracy >= best_accuracy:
            best_accuracy, best_node = accuracy, node
    return best_node, best_accuracy


def _internal_nodes_post_order(root: TreeNode) -> Iterator[TreeNode]:
    """Yield internal, un-pruned nodes so that every node follows its children."""
    if root.acts_as_leaf:
        return
    stack: list[tuple[TreeNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(list(node.children.values())):
            if not child.acts_as_leaf:
                stack.append((child, False))
