"""Command-line entry point: induce, tune and cross-validate a tree from a records file."""

from __future__ import annotations

import argparse
import contextlib
import string
import sys

from .evaluation import TuningMethod, build_tuned_tree, cross_validate
from .exceptions import ID3Error
from .logging import enable_logging
from .records import load_records
from .tree import format_tree

CONSOLE_WIDTH = 80
DEFAULT_TUNING = TuningMethod.STRIDE.value
DEFAULT_TUNING_PARAM = 4
DEFAULT_FOLD_SIZE = 1


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="id3tree",
        description="Induce an ID3 decision tree from tab-delimited records and estimate its accuracy.",
    )
    p.add_argument("path", help="Records file: identifier<TAB>label<TAB>features, one record per line.")
    p.add_argument("--tuning", choices=[m.value for m in TuningMethod], default=DEFAULT_TUNING,
                   help="How the pruning subset is selected.")
    p.add_argument("--tuning-param", type=int, default=DEFAULT_TUNING_PARAM,
                   help="Stride or tuning-set size, depending on --tuning.")
    p.add_argument("--fold-size", type=int, default=DEFAULT_FOLD_SIZE,
                   help="Size of each held-out cross-validation fold.")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Log split and pruning decisions to stderr.")
    return p


def _feature_names(n_features: int) -> list[str]:
    # Features are lettered A, B, C, ... and fall back to numbers past Z.
    letters = string.ascii_uppercase
    return [f"Feature {letters[i]}" if i < len(letters) else f"Feature {i}" for i in range(n_features)]


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    rule = "-" * CONSOLE_WIDTH

    with enable_logging(level="DEBUG") if args.verbose else contextlib.nullcontext():
        try:
            dataset = load_records(args.path)
            print(f"Labels found in the dataset: {list(dataset.labels)}")
            print(f"Feature values found in the dataset: {list(dataset.feature_values)}\n")

            tree = build_tuned_tree(dataset, args.tuning, args.tuning_param)
            accuracy = cross_validate(dataset, args.fold_size, args.tuning, args.tuning_param)
        except FileNotFoundError:
            print(f"The file {args.path!r} could not be found.", file=sys.stderr)
            return 1
        except (ID3Error, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    print("Induced tree:")
    print(rule)
    print(format_tree(tree, _feature_names(dataset.n_features)))
    print(rule)
    print(f"Estimated accuracy: {accuracy:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
