import numpy as np
import pytest
from id3tree import Record, RecordDataset, RecordParseError, load_records, parse_records


def _lines(*rows):
    return ["\t".join(row) + "\n" for row in rows]


def test_parse_records():
    ds = parse_records(_lines(("rep-1", "D", "yn?y"), ("rep-2", "Republican", "nnyy")))
    assert ds.size() == 2
    assert ds.labels == ("D", "R")
    assert ds.feature_values == ("?", "n", "y")
    assert ds.default_label == "E"
    first = ds.data[0]
    assert first.identifier == "rep-1"
    assert first.label == "D"
    assert first.n_features == 4
    assert first.feature(2) == "?"


def test_parse_skips_blank_lines():
    ds = parse_records(["\n"] + _lines(("a", "X", "yy")) + ["   \n"] + _lines(("b", "Y", "nn")))
    assert ds.size() == 2


def test_parse_rejects_empty_label():
    with pytest.raises(RecordParseError) as exc:
        parse_records(_lines(("a", "X", "yy"), ("b", "", "nn")))
    assert exc.value.line_number == 2


def test_parse_rejects_inconsistent_token_counts():
    with pytest.raises(RecordParseError):
        parse_records(_lines(("a", "X", "yy"), ("b", "Y", "nn", "extra")))


def test_parse_rejects_inconsistent_feature_counts():
    with pytest.raises(RecordParseError) as exc:
        parse_records(_lines(("a", "X", "yy"), ("b", "Y", "nnn")))
    assert "same number of features" in str(exc.value)


def test_parse_rejects_empty_input():
    with pytest.raises(RecordParseError):
        parse_records([])


def test_load_records(tmp_path):
    path = tmp_path / "votes.tsv"
    path.write_text("".join(_lines(("a", "D", "yn"), ("b", "R", "ny"))), encoding="utf-8")
    ds = load_records(path, default_label="?")
    assert isinstance(ds, RecordDataset)
    assert ds.size() == 2
    assert ds.default_label == "?"


def test_load_records_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "nope.tsv")


def test_from_arrays_infers_sorted_domains():
    X = np.array([[2, 1], [1, 3]])
    y = np.array(["b", "a"])
    ds = RecordDataset.from_arrays(X, y)
    assert ds.labels == ("a", "b")
    assert ds.feature_values == (1, 2, 3)
    assert ds.data[0] == Record("0", "b", (2, 1))
    assert type(ds.data[0].features[0]) is int


def test_from_arrays_explicit_domains_and_identifiers():
    ds = RecordDataset.from_arrays([["y"]], ["D"], labels=("R", "D"), feature_values=("n", "y"),
                                   identifiers=["rep-9"])
    assert ds.labels == ("R", "D")
    assert ds.feature_values == ("n", "y")
    assert ds.data[0].identifier == "rep-9"


def test_from_arrays_validates_shapes():
    with pytest.raises(ValueError):
        RecordDataset.from_arrays([1, 2], [1, 2])
    with pytest.raises(ValueError):
        RecordDataset.from_arrays([[1], [2]], [1])
