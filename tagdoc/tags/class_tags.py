"""Class-level tags whose values can also come from class declarations."""

from __future__ import annotations

from typing import List, Mapping

from .base import MergeScope, Tag, first_of


class ExtendsTag(Tag):
    pattern = ("extends", "extend")
    tagname = "extends"
    merge_scope = (MergeScope.CLASS,)
    declaration_pattern = "extend"
    declaration_default = {"tagname": "extends", "name": "Ext.Base"}

    def parse_doc(self, scanner, position):
        scanner.hw()
        name = scanner.ident_chain()
        if not name:
            scanner.warn("tag_syntax", "@extends is missing a class name")
            return None
        return {"tagname": self.tagname, "name": name}

    def parse_from_declaration(self, cls, value):
        if isinstance(value, str) and value:
            return {"tagname": self.tagname, "name": value}
        return None

    def merge(self, entity, docs, code):
        record = first_of(docs, code)
        return record["name"] if record else None


class MixinsTag(Tag):
    """Mixins listed in docs and in the declaration, doc order first."""

    pattern = "mixins"
    tagname = "mixins"
    repeatable = True
    merge_scope = (MergeScope.CLASS,)
    declaration_pattern = "mixins"

    def parse_doc(self, scanner, position):
        records = []
        scanner.hw()
        name = scanner.ident_chain()
        while name:
            records.append({"tagname": self.tagname, "name": name})
            scanner.hw()
            name = scanner.ident_chain()
        return records or None

    def parse_from_declaration(self, cls, value):
        if isinstance(value, str):
            names: List[str] = [value]
        elif isinstance(value, Mapping):
            names = [item for item in value.values() if isinstance(item, str)]
        elif isinstance(value, (list, tuple)):
            names = [item for item in value if isinstance(item, str)]
        else:
            return None
        return [{"tagname": self.tagname, "name": name} for name in names]

    def merge(self, entity, docs, code):
        names: List[str] = []
        for record in docs + code:
            if record["name"] not in names:
                names.append(record["name"])
        return names or None


class OverrideTag(Tag):
    """Turns a class into an override of the named target class."""

    pattern = "override"
    tagname = "override"
    merge_scope = (MergeScope.CLASS,)
    declaration_pattern = "override"

    def parse_doc(self, scanner, position):
        scanner.hw()
        name = scanner.ident_chain()
        if not name:
            scanner.warn("tag_syntax", "@override is missing the target class name")
            return None
        return {"tagname": self.tagname, "name": name}

    def parse_from_declaration(self, cls, value):
        if isinstance(value, str) and value:
            return {"tagname": self.tagname, "name": value}
        return None

    def merge(self, entity, docs, code):
        record = first_of(docs, code)
        return record["name"] if record else None

    def process_doc(self, entity, occurrences, position):
        target = entity.attributes.get(self.tagname)
        if target:
            entity.is_override = True
            entity.override_target = target


__all__ = ["ExtendsTag", "MixinsTag", "OverrideTag"]
