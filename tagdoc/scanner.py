"""Cursor over the text of a single @tag used by tag parse hooks."""

from __future__ import annotations

import re
from typing import Optional, Union

from .logging import WarningLog
from .models import SourceFileRef

_HW = re.compile(r"[ \t]*")
_IDENT = re.compile(r"[$\w-]+")
_IDENT_CHAIN = re.compile(r"[$\w-]+(?:\.[$\w-]+)*")
_VERSION = re.compile(r"[\w.-]+")

PatternLike = Union[str, re.Pattern[str]]


class DocScanner:
    """Scans the text that follows one "@pattern" marker.

    Tag plugins consume as much as they understand; whatever remains is
    treated as documentation by the parser.
    """

    def __init__(
        self,
        text: str,
        *,
        position: Optional[SourceFileRef] = None,
        warnings: Optional[WarningLog] = None,
    ) -> None:
        self.text = text
        self.index = 0
        self.position = position
        self._warnings = warnings

    @property
    def rest(self) -> str:
        return self.text[self.index :]

    def eos(self) -> bool:
        return self.index >= len(self.text)

    def look(self, pattern: PatternLike) -> bool:
        return _compile(pattern).match(self.text, self.index) is not None

    def match(self, pattern: PatternLike) -> Optional[str]:
        found = _compile(pattern).match(self.text, self.index)
        if found is None:
            return None
        self.index = found.end()
        return found.group(0)

    def hw(self) -> None:
        """Skip horizontal whitespace."""
        self.match(_HW)

    def ident(self) -> Optional[str]:
        return self.match(_IDENT)

    def ident_chain(self) -> Optional[str]:
        return self.match(_IDENT_CHAIN)

    def version(self) -> Optional[str]:
        return self.match(_VERSION)

    def typedef(self) -> Optional[str]:
        """Parse a ``{Type}`` expression, returning the type text.

        Braces may nest. An unterminated expression is reported as a
        syntax warning and consumes the rest of the text.
        """
        if not self.look(r"\{"):
            return None
        depth = 0
        start = self.index + 1
        for offset, char in enumerate(self.text[self.index :]):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    end = self.index + offset
                    self.index = end + 1
                    return self.text[start:end].strip()
        self.warn("tag_syntax", "Unterminated type definition")
        value = self.text[start:].strip()
        self.index = len(self.text)
        return value

    def rest_of_line(self) -> str:
        line = self.match(r"[^\n]*") or ""
        return line.strip()

    def warn(self, category: str, message: str) -> None:
        if self._warnings is not None:
            self._warnings.warn(category, message, self.position)


def _compile(pattern: PatternLike) -> re.Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


__all__ = ["DocScanner"]
