# id3tree/__init__.py
"""
id3tree: ID3 decision trees with reduced-error pruning over discrete features.

Exports:
    - ID3Classifier
    - LabeledDataset, RecordDataset, Record
    - build_tree, build_tuned_tree, prune_tree, cross_validate, score
    - TreeNode, TuningMethod
    - enable_logging
"""
from loguru import logger

from .classifier import ID3Classifier
from .dataset import LabeledDataset, LabeledExample
from .evaluation import TuningMethod, build_tuned_tree, cross_validate
from .exceptions import (
    DatasetRangeError,
    DomainError,
    EmptyDatasetError,
    FoldSizeError,
    ID3Error,
    RecordParseError,
)
from .logging import enable_logging
from .pruning import prune_tree
from .records import Record, RecordDataset, load_records, parse_records
from .tree import TreeNode, build_tree, export_rules, format_tree, score

# Silent unless enable_logging() (or logger.enable("id3tree")) is called.
logger.disable(__name__)

__all__ = [
    "ID3Classifier",
    "LabeledDataset",
    "LabeledExample",
    "Record",
    "RecordDataset",
    "TreeNode",
    "TuningMethod",
    "build_tree",
    "build_tuned_tree",
    "cross_validate",
    "enable_logging",
    "export_rules",
    "format_tree",
    "load_records",
    "parse_records",
    "prune_tree",
    "score",
    "DatasetRangeError",
    "DomainError",
    "EmptyDatasetError",
    "FoldSizeError",
    "ID3Error",
    "RecordParseError",
]
__version__ = "0.1.0"
