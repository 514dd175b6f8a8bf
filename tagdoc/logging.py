"""Logging utilities and the warning collaborator for tagdoc runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .models import SourceFileRef

_LOGGER_NAME = "tagdoc"

WARNING_CATEGORIES = {
    "tag": "Unsupported or misplaced @tag",
    "tag_repeated": "Non-repeatable @tag used more than once",
    "tag_syntax": "Malformed @tag syntax",
    "extend": "Reference to a class that does not exist",
    "override": "Override class that cannot be applied",
    "nodoc": "Class or member without documentation",
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the tagdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the tagdoc logger with console output and optional file sink.

    ``quiet`` limits the console to documentation warnings; the log file
    still receives progress messages.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when configured multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.WARNING if quiet else level)
    stream_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


@dataclass(frozen=True)
class DocWarning:
    """A single non-fatal diagnostic recorded against a source position."""

    category: str
    message: str
    position: Optional[SourceFileRef] = None

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.position}: {self.message}"


class WarningLog:
    """Collects documentation warnings and forwards them to the logger.

    Nothing reported here aborts a run. Categories can be switched off
    individually, in which case matching warnings are dropped.
    """

    def __init__(self, disabled: Iterable[str] = ()) -> None:
        self.logger = get_logger("warnings")
        self.records: List[DocWarning] = []
        self._disabled: Set[str] = set()
        for category in disabled:
            self.disable(category)

    def disable(self, category: str) -> None:
        self._check_category(category)
        self._disabled.add(category)

    def enable(self, category: str) -> None:
        self._check_category(category)
        self._disabled.discard(category)

    def enabled(self, category: str) -> bool:
        self._check_category(category)
        return category not in self._disabled

    def warn(
        self,
        category: str,
        message: str,
        position: Optional[SourceFileRef] = None,
    ) -> None:
        if not self.enabled(category):
            return
        record = DocWarning(category=category, message=message, position=position)
        self.records.append(record)
        self.logger.warning("%s", record)

    def by_category(self, category: str) -> List[DocWarning]:
        return [record for record in self.records if record.category == category]

    @staticmethod
    def _check_category(category: str) -> None:
        if category not in WARNING_CATEGORIES:
            raise ValueError(f"Unknown warning category: {category}")


__all__ = [
    "DocWarning",
    "WARNING_CATEGORIES",
    "WarningLog",
    "configure_logging",
    "get_logger",
]
