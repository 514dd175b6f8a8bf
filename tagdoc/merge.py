"""Folds raw tag records into the final attributes of classes and members."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .logging import WarningLog, get_logger
from .models import ClassEntity, MemberEntity, SourceFileRef
from .tags.base import Tag
from .tags.registry import TagRegistry

Entity = Union[ClassEntity, MemberEntity]


class MergeEngine:
    """Dispatches each tagname of an entity to the plugin that owns it.

    After all present tagnames are merged, ``process_doc`` runs for every
    plugin in scope, so plugins can derive attributes from a missing tag.
    """

    def __init__(self, registry: TagRegistry, warnings: WarningLog) -> None:
        self.registry = registry
        self.warnings = warnings
        self.logger = get_logger("merge")

    def merge_class(self, cls: ClassEntity) -> ClassEntity:
        self._merge(cls)
        for member in cls.members:
            self._merge(member)
        return cls

    def merge_member(self, member: MemberEntity) -> MemberEntity:
        self._merge(member)
        return member

    def _merge(self, entity: Entity) -> None:
        kind = entity.scope_kind
        position = entity.files[0] if entity.files else None
        selected: Dict[str, List[Dict[str, Any]]] = {}

        for tagname in entity.raw.tagnames():
            tag = self.registry.find_by_tagname(tagname)
            if tag is None:
                self.warnings.warn("tag", f"No tag handles '{tagname}' on {entity.name}", position)
                continue
            if not tag.applies_to(kind):
                self.warnings.warn("tag", f"{tag.label} is not allowed on a {kind}", position)
                continue
            docs = self._select(tag, entity.raw.doc.get(tagname, []), entity, position)
            code = list(entity.raw.code.get(tagname, []))
            selected[tagname] = docs
            value = tag.merge(entity, docs, code)
            if value is not None:
                entity.attributes[tagname] = value

        for tag in self.registry.plugins_for_merge_scope(kind):
            tag.process_doc(entity, selected.get(tag.tagname or "", []), position)

    def _select(
        self,
        tag: Tag,
        docs: List[Dict[str, Any]],
        entity: Entity,
        position: Optional[SourceFileRef],
    ) -> List[Dict[str, Any]]:
        if tag.repeatable or len(docs) <= 1:
            return list(docs)
        self.warnings.warn(
            "tag_repeated",
            f"Only one {tag.label} allowed per doc-comment of {entity.name}",
            position,
        )
        return [docs[-1]] if tag.repeat_policy == "last" else [docs[0]]


__all__ = ["MergeEngine"]
