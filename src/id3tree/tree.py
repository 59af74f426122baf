# -*- coding: utf-8 -*-
"""
id3tree.tree
============

ID3 tree induction over a :class:`~id3tree.dataset.LabeledDataset`.

Every node is built from the slice of the training data that reaches it.
The node always stores a resolved label, including internal nodes.  Pruning
can therefore turn any internal node into a usable leaf by flipping its
``pruned`` flag, without rebuilding anything and without discarding the
subtree underneath.

Splits are chosen greedily by information gain.  A split on a discrete
feature creates one child for every value of the feature-value domain.
Values that no training example reached yield children built from an empty
dataset; those inherit their parent's label.

The module also contains rendering helpers (indented text, rule export and
Graphviz export) used by :class:`~id3tree.classifier.ID3Classifier` and the
command-line entry point.
"""

from __future__ import annotations

import weakref
from typing import Any, Iterator, Sequence

from loguru import logger

from .dataset import LabeledDataset, LabeledExample
from .exceptions import EmptyDatasetError


# -----------------------------------------------------------------------------
# Node
# -----------------------------------------------------------------------------
class TreeNode:
    """A node of an induced classification tree.

    Attributes
    ----------
    children : dict
        Mapping ``{feature value: TreeNode}``.  Empty for leaves.
    feature_index : int or None
        Index of the feature this node splits on; ``None`` for leaves.
    label
        Resolved label of this node.  Present on every node.
    pruned : bool
        When set, the node behaves as a leaf for classification and
        traversal while keeping its children.
    """

    def __init__(self, label: Any, parent: TreeNode | None = None):
        self._parent = weakref.ref(parent) if parent is not None else None
        self.children: dict[Any, TreeNode] = {}
        self.feature_index: int | None = None
        self.label = label
        self.pruned: bool = False

    @property
    def parent(self) -> TreeNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_pruned(self) -> bool:
        return self.pruned

    @property
    def acts_as_leaf(self) -> bool:
        """True for structural leaves and for pruned internal nodes."""
        return self.pruned or not self.children

    def classify(self, example: LabeledExample) -> Any:
        """
        Return the label predicted for ``example``.

        Classification never fails for a value the node has no child for
        (e.g. a value outside the original domain).  It stops at the deepest
        node reached and returns that node's label instead.
        """
        node = self
        while not node.acts_as_leaf:
            value = example.feature(node.feature_index)
            child = node.children.get(value)
            if child is None:
                logger.debug("No child for value {!r} of feature {}; using label {!r}",
                             value, node.feature_index, node.label)
                break
            node = child
        return node.label

    def iter_nodes(self, *, respect_pruning: bool = False) -> Iterator[TreeNode]:
        """Pre-order iterator over this subtree.

        With ``respect_pruning=True`` the descendants of pruned nodes are
        skipped, i.e. only the nodes of the effective tree are produced.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if respect_pruning and node.pruned:
                continue
            stack.extend(reversed(list(node.children.values())))

    def node_count(self) -> int:
        """Number of nodes in the effective (pruning-aware) tree."""
        return sum(1 for _ in self.iter_nodes(respect_pruning=True))

    def depth(self) -> int:
        """Depth of the effective tree; a lone leaf has depth 0."""
        if self.acts_as_leaf:
            return 0
        return 1 + max(child.depth() for child in self.children.values())

    def reset_pruning(self) -> None:
        """Clear the pruned flag on every node of this subtree."""
        for node in self.iter_nodes():
            node.pruned = False

    def __repr__(self):
        if self.acts_as_leaf:
            state = "Pruned" if self.pruned else "Leaf"
            return f"TreeNode({state}, label={self.label!r})"
        return f"TreeNode(Split, feature={self.feature_index}, label={self.label!r}, children={len(self.children)})"


# -----------------------------------------------------------------------------
# Induction
# -----------------------------------------------------------------------------
def build_tree(dataset: LabeledDataset, parent: TreeNode | None = None) -> TreeNode:
    """
    Recursively induce a tree (or subtree) from ``dataset``.

    Parameters
    ----------
    dataset : LabeledDataset
        Training examples reaching this node.
    parent : TreeNode, optional
        Parent node, used for label inheritance.  ``None`` for the root.

    Returns
    -------
    TreeNode
        The root of the induced (sub)tree.

    Raises
    ------
    EmptyDatasetError
        If ``dataset`` is empty and there is no parent to inherit a label from.
    """
    node = TreeNode(_resolve_label(dataset, parent), parent)
    feature, partitions = _best_split(dataset)
    if feature is None:
        return node
    node.feature_index = feature
    for value, subset in partitions.items():
        node.children[value] = build_tree(subset, node)
    return node


def _resolve_label(dataset: LabeledDataset, parent: TreeNode | None):
    size = dataset.size()
    if size == 1:
        return dataset.data[0].label
    if size == 0:
        if parent is None:
            raise EmptyDatasetError()
        return parent.label
    winners = dataset.majority_labels()
    if len(winners) > 1 and parent is not None:
        return parent.label
    # Root ties resolve to the first tied label in declared domain order.
    return winners[0]


def _best_split(dataset: LabeledDataset):
    size = dataset.size()
    if size <= 1:
        return None, None
    initial_entropy = dataset.entropy()
    if initial_entropy == 0.0:
        return None, None

    best_gain, best_feat, best_partitions = 0.0, None, None
    for i in range(dataset.n_features):
        partitions = dataset.partition_by_feature(i)
        weighted = sum(sub.size() / size * sub.entropy() for sub in partitions.values())
        gain = initial_entropy - weighted
        if gain > best_gain:
            best_gain, best_feat, best_partitions = gain, i, partitions

    if best_feat is None:
        logger.debug("No feature improves entropy {:.4f} of {} examples; leaf", initial_entropy, size)
        return None, None
    logger.debug("Split {} examples on feature {} (gain={:.4f})", size, best_feat, best_gain)
    return best_feat, best_partitions


def score(tree: TreeNode, dataset: LabeledDataset) -> float:
    """
    Fraction of examples in ``dataset`` that ``tree`` classifies correctly.

    An empty dataset scores ``0.0``.
    """
    size = dataset.size()
    if size == 0:
        return 0.0
    correct = sum(1 for example in dataset.data if tree.classify(example) == example.label)
    return correct / size


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------
def _feature_name(index: int, feature_names: Sequence[str] | None) -> str:
    if feature_names is not None and 0 <= index < len(feature_names):
        return str(feature_names[index])
    return f"X[{index}]"


def format_tree(node: TreeNode, feature_names: Sequence[str] | None = None) -> str:
    """
    Render the effective tree as indented text.

    Internal nodes print as ``<feature>:`` followed by one line per child,
    prefixed with the feature value.  Leaves and pruned nodes print their label.
    """
    lines: list[str] = []
    _format_node(node, feature_names, "", lines)
    return "\n".join(lines)


def _format_node(node: TreeNode, fn, indent: str, lines: list[str]) -> None:
    if node.acts_as_leaf:
        lines.append(f"{indent}{node.label}")
        return
    lines.append(f"{indent}{_feature_name(node.feature_index, fn)}:")
    for value, child in node.children.items():
        if child.acts_as_leaf:
            lines.append(f"{indent}  {value} -> {child.label}")
        else:
            lines.append(f"{indent}  {value} ->")
            _format_node(child, fn, indent + "  |   ", lines)


def export_rules(node: TreeNode, feature_names: Sequence[str] | None = None) -> list[str]:
    """One ``<antecedent> => <label>`` string per leaf of the effective tree."""
    rules: list[str] = []
    _collect_rules(node, [], rules, feature_names)
    return rules


def _collect_rules(node: TreeNode, parts: list[str], rules: list[str], fn) -> None:
    if node.acts_as_leaf:
        body = " AND ".join(parts) if parts else "<root>"
        rules.append(f"{body} => {node.label}")
        return
    name = _feature_name(node.feature_index, fn)
    for value, child in node.children.items():
        _collect_rules(child, parts + [f"{name} = {value}"], rules, fn)


def export_graphviz(node: TreeNode, feature_names: Sequence[str] | None = None):
    """
    Build a ``graphviz.Digraph`` of the effective tree.

    Raises
    ------
    RuntimeError
        If the optional ``graphviz`` package is not installed.
    """
    try:
        import graphviz
    except ImportError as e:
        raise RuntimeError("Graphviz is required for export_graphviz but not installed.") from e
    dot = graphviz.Digraph()
    _add_graph_nodes(dot, node, "0", feature_names)
    return dot


def _add_graph_nodes(dot, node: TreeNode, name: str, fn) -> None:
    if node.acts_as_leaf:
        style = "dashed,filled" if node.pruned else "filled"
        dot.node(name, f"class={node.label}", shape="box", style=style, color="lightgrey")
        return
    dot.node(name, _feature_name(node.feature_index, fn), shape="ellipse", style="filled", color="lightblue")
    for i, (value, child) in enumerate(node.children.items()):
        child_name = f"{name}.{i}"
        _add_graph_nodes(dot, child, child_name, fn)
        dot.edge(name, child_name, label=str(value))
