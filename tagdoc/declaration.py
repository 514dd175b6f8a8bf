"""Code-side tag records inferred from structured class declarations."""

from __future__ import annotations

from typing import Any, Mapping

from .logging import get_logger
from .models import ClassEntity
from .tags.base import as_records
from .tags.registry import TagRegistry


class DeclarationParser:
    """Feeds a class declaration to the tags that understand its keys.

    A declaration is the mapping of config keys to plain values that the
    source walker extracts from a class-definition call, e.g.
    ``{"extend": "Ext.Panel", "mixins": ["Ext.util.Observable"]}``.
    """

    def __init__(self, registry: TagRegistry) -> None:
        self.registry = registry
        self.logger = get_logger("declaration")

    def parse(self, cls: ClassEntity, declaration: Mapping[str, Any]) -> ClassEntity:
        for tag in self.registry.declaration_tags():
            key = tag.declaration_pattern
            if key in declaration:
                records = as_records(tag.parse_from_declaration(cls, declaration[key]))
            elif tag.declaration_default is not None:
                records = [dict(tag.declaration_default)]
            else:
                records = []
            for record in records:
                cls.raw.add_code(record)
        self.logger.debug("Parsed declaration of %s", cls.name)
        return cls


__all__ = ["DeclarationParser"]
