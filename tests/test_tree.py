import pytest
from id3tree import EmptyDatasetError, Record, RecordDataset, build_tree, export_rules, format_tree, score


def _dataset(rows, labels=("X", "Y"), values=None):
    records = [Record(str(i), label, tuple(feats)) for i, (feats, label) in enumerate(rows)]
    if values is None:
        values = sorted({v for feats, _ in rows for v in feats})
    return RecordDataset(records, labels, values)


def _shape(node):
    """Nested, comparable description of a tree."""
    return (node.label, node.feature_index, node.pruned,
            tuple((value, _shape(child)) for value, child in node.children.items()))


def test_binary_feature_scenario():
    ds = _dataset([("0", "X"), ("0", "X"), ("1", "Y"), ("1", "Y")])
    assert ds.entropy() == pytest.approx(1.0)
    tree = build_tree(ds)
    assert tree.feature_index == 0
    assert list(tree.children) == ["0", "1"]
    assert tree.children["0"].is_leaf and tree.children["0"].label == "X"
    assert tree.children["1"].is_leaf and tree.children["1"].label == "Y"
    assert tree.children["0"].parent is tree


def test_single_example_is_a_leaf():
    tree = build_tree(_dataset([("ab", "Y")]))
    assert tree.is_leaf
    assert tree.children == {}
    assert tree.feature_index is None
    assert tree.label == "Y"
    assert tree.is_root


def test_empty_root_raises():
    with pytest.raises(EmptyDatasetError):
        build_tree(_dataset([], values=("a",)))


def test_pure_dataset_is_a_leaf():
    tree = build_tree(_dataset([("ab", "X"), ("ba", "X"), ("bb", "X")]))
    assert tree.is_leaf
    assert tree.label == "X"


def test_root_tie_uses_label_domain_order():
    rows = [("a", "Y"), ("b", "X")]
    assert build_tree(_dataset(rows, labels=("X", "Y"))).label == "X"
    assert build_tree(_dataset(rows, labels=("Y", "X"))).label == "Y"


def test_unseen_value_child_inherits_parent_label():
    ds = _dataset([("0", "X"), ("0", "X"), ("1", "Y"), ("1", "Y")], values=("0", "1", "2"))
    tree = build_tree(ds)
    assert list(tree.children) == ["0", "1", "2"]
    unseen = tree.children["2"]
    assert unseen.is_leaf
    assert unseen.label == tree.label == "X"


def test_child_tie_inherits_parent_label():
    ds = _dataset([("a", "X"), ("a", "Y"), ("b", "Y"), ("b", "Y"), ("b", "Y")])
    tree = build_tree(ds)
    assert tree.label == "Y"
    tied = tree.children["a"]
    # X and Y are tied here; the parent's label wins over domain order
    assert tied.label == "Y"
    assert tied.is_leaf


def test_gain_ties_keep_lowest_feature_index():
    ds = _dataset([("aa", "X"), ("bb", "Y")])
    assert build_tree(ds).feature_index == 0


def test_splits_on_informative_feature():
    ds = _dataset([("ab", "X"), ("bb", "X"), ("aa", "Y"), ("ba", "Y")])
    tree = build_tree(ds)
    assert tree.feature_index == 1
    assert tree.children["a"].label == "Y"
    assert tree.children["b"].label == "X"


def test_induction_is_deterministic():
    rows = [("aab", "X"), ("abb", "Y"), ("bab", "Y"), ("bba", "X"), ("aaa", "X"), ("bbb", "Y"), ("aba", "Y")]
    assert _shape(build_tree(_dataset(rows))) == _shape(build_tree(_dataset(rows)))


def test_classify_follows_children():
    ds = _dataset([("ab", "X"), ("bb", "X"), ("aa", "Y"), ("ba", "Y")])
    tree = build_tree(ds)
    for r in ds.data:
        assert tree.classify(r) == r.label


def test_classify_falls_back_for_unknown_value():
    tree = build_tree(_dataset([("0", "X"), ("0", "X"), ("1", "Y")]))
    assert tree.classify(Record("q", None, ("9",))) == tree.label == "X"


def test_classify_respects_pruned_flag():
    tree = build_tree(_dataset([("0", "X"), ("0", "X"), ("1", "Y")]))
    example = Record("q", None, ("1",))
    assert tree.classify(example) == "Y"
    tree.pruned = True
    assert tree.is_pruned and tree.acts_as_leaf and not tree.is_leaf
    assert tree.classify(example) == "X"
    tree.reset_pruning()
    assert tree.classify(example) == "Y"


def test_classify_is_total_over_domain():
    ds = _dataset([("ab", "X"), ("bb", "X"), ("aa", "Y"), ("ba", "Y"), ("ca", "X")], labels=("X", "Y"))
    tree = build_tree(ds)
    for f0 in "abc":
        for f1 in "abc":
            assert tree.classify(Record("q", None, (f0, f1))) in ds.labels


def test_node_count_and_depth():
    ds = _dataset([("ab", "X"), ("bb", "X"), ("aa", "Y"), ("ba", "Y")])
    tree = build_tree(ds)
    assert tree.node_count() == 3
    assert tree.depth() == 1
    tree.pruned = True
    assert tree.node_count() == 1
    assert tree.depth() == 0
    # the structure survives pruning
    assert len(list(tree.iter_nodes())) == 3


def test_score():
    ds = _dataset([("0", "X"), ("0", "X"), ("1", "Y"), ("1", "Y")])
    tree = build_tree(ds)
    assert score(tree, ds) == 1.0
    flipped = _dataset([("0", "Y"), ("1", "Y")], values=("0", "1"))
    assert score(tree, flipped) == 0.5
    assert score(tree, _dataset([], values=("0", "1"))) == 0.0


def test_format_tree_and_rules():
    ds = _dataset([("0", "X"), ("0", "X"), ("1", "Y"), ("1", "Y")])
    tree = build_tree(ds)
    text = format_tree(tree, ["vote"])
    assert text.splitlines()[0] == "vote:"
    assert "0 -> X" in text and "1 -> Y" in text
    assert export_rules(tree) == ["X[0] = 0 => X", "X[0] = 1 => Y"]
    tree.pruned = True
    assert export_rules(tree) == ["<root> => X"]
    assert format_tree(tree) == "X"


def test_export_graphviz_source():
    pytest.importorskip("graphviz")
    from id3tree.tree import export_graphviz

    tree = build_tree(_dataset([("0", "X"), ("1", "Y")]))
    source = export_graphviz(tree, ["vote"]).source
    assert "vote" in source
    assert "class=X" in source and "class=Y" in source
