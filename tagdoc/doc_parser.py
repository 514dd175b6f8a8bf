"""Splits doc-comments into @tag records using the tag registry."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from .logging import WarningLog, get_logger
from .models import SourceFileRef, TagOccurrences
from .scanner import DocScanner
from .tags.base import MULTILINE, as_records
from .tags.registry import TagRegistry

# An @tag starts a line or follows whitespace, so e-mail addresses are left alone.
_TAG_MARKER = re.compile(r"(?:(?<=\s)|^)@([A-Za-z][\w-]*)", re.MULTILINE)
_COMMENT_DECORATION = re.compile(r"^[ \t]*\*(?![*/]) ?", re.MULTILINE)


@dataclass
class ParsedComment:
    """Main documentation text plus doc-side tag records."""

    doc: str
    occurrences: TagOccurrences = field(default_factory=TagOccurrences)


class DocParser:
    """Turns a doc-comment body into a :class:`ParsedComment`.

    Tags are dispatched to plugins found by pattern. Unknown tags are
    reported and left in the documentation text.
    """

    def __init__(self, registry: TagRegistry, warnings: WarningLog) -> None:
        self.registry = registry
        self.warnings = warnings
        self.logger = get_logger("doc_parser")

    def parse(self, comment: str, position: Optional[SourceFileRef] = None) -> ParsedComment:
        text = strip_comment(comment)
        markers = list(_TAG_MARKER.finditer(text))
        doc_parts: List[str] = []
        occurrences = TagOccurrences()

        head_end = markers[0].start() if markers else len(text)
        doc_parts.append(text[:head_end])

        for index, marker in enumerate(markers):
            end = markers[index + 1].start() if index + 1 < len(markers) else len(text)
            pattern = marker.group(1)
            body = text[marker.end() : end]
            tag = self.registry.find_by_pattern(pattern)
            if tag is None:
                self.warnings.warn("tag", f"Unsupported tag: @{pattern}", position)
                doc_parts.append(text[marker.start() : end])
                continue

            scanner = DocScanner(body, position=position, warnings=self.warnings)
            result = tag.parse_doc(scanner, position)
            records = as_records(result)
            if not records:
                doc_parts.append(scanner.rest)
                continue

            trailing = scanner.rest.strip()
            attached = False
            for record in records:
                if "tagname" not in record:
                    raise TypeError(f"@{pattern} produced a record without a tagname")
                if record.get("doc") == MULTILINE:
                    record["doc"] = "" if attached else trailing
                    attached = True
                occurrences.add_doc(record)
            if not attached:
                doc_parts.append(scanner.rest)

        doc = "\n".join(part.strip("\n") for part in doc_parts if part.strip()).strip()
        self.logger.debug("Parsed %d tag records", sum(len(v) for v in occurrences.doc.values()))
        return ParsedComment(doc=doc, occurrences=occurrences)


def strip_comment(comment: str) -> str:
    """Remove ``/** ... */`` delimiters and leading ``*`` decoration."""
    text = comment.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]
    return _COMMENT_DECORATION.sub("", text).strip()


__all__ = ["DocParser", "ParsedComment", "strip_comment"]
