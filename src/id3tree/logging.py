"""Opt-in loguru logging for id3tree.

The package disables its own loguru records on import, so training and
pruning stay silent unless a caller asks otherwise. ``enable_logging`` adds a
filtered stderr handler and returns a handle that removes it again, either
explicitly or as a context manager.
"""

from __future__ import annotations

import contextlib
import sys
from typing import TYPE_CHECKING, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME = __name__.split(".")[0]

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["short", "full"]

_FORMATS = {
    "short": (
        "<green>{time:HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{function}</cyan> - "
        "<level>{message}</level>"
    ),
    "full": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    ),
}


class LoggingHandle:
    """Handle owning one loguru handler added by ``enable_logging``.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     build_tuned_tree(dataset, "stride", 4)
    """

    _active = 0

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        LoggingHandle._active += 1

    def disable(self) -> None:
        """Remove the handler. Disables id3tree records once no handle is left."""
        if self.handler_id is None:
            return
        with contextlib.suppress(ValueError):
            logger.remove(self.handler_id)
        self.handler_id = None
        LoggingHandle._active -= 1
        if LoggingHandle._active == 0:
            logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def enable_logging(*, level: LogLevel = "DEBUG", log_format: LogFormat = "short", sink=None) -> LoggingHandle:
    """Route id3tree log records to ``sink`` (stderr by default).

    Args:
        level (LogLevel): Minimum level to emit. ``"DEBUG"`` shows split and
            pruning decisions, ``"TRACE"`` adds per-partition detail and
            ``"INFO"`` keeps only cross-validation fold scores.
        log_format (LogFormat): ``"short"`` shows the function name only,
            ``"full"`` adds module and line number.
        sink: Any loguru sink. Defaults to ``sys.stderr``.

    Returns:
        LoggingHandle: Handle that removes the handler on ``disable()`` or on
            leaving a ``with`` block.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sink if sink is not None else sys.stderr,
        level=level,
        filter=_is_id3tree_record,
        format=_FORMATS[log_format],
    )
    return LoggingHandle(handler_id)


def _is_id3tree_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
