"""Lookup indices over the set of tag plugins."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .base import MemberTypeSpec, Tag

_UNPOSITIONED = float("inf")


class TagRegistryError(ValueError):
    """Raised when the plugin set is inconsistent."""


class TagRegistry:
    """Indexes tag plugins by pattern, tagname, and declaration key.

    Plugin order is the registration order. Render-ordered views sort by
    ``html_position`` and keep registration order for ties; plugins
    without a position come last.
    """

    def __init__(self, tags: Iterable[Tag]) -> None:
        self._tags: List[Tag] = []
        self._by_pattern: Dict[str, Tag] = {}
        self._by_tagname: Dict[str, Tag] = {}
        self._by_declaration: Dict[str, Tag] = {}
        self._member_types: Dict[str, MemberTypeSpec] = {}
        for tag in tags:
            self._register(tag)

    @classmethod
    def default(cls, enabled: Optional[Iterable[str]] = None) -> "TagRegistry":
        from . import discover_tags

        return cls(discover_tags(list(enabled) if enabled is not None else None))

    def _register(self, tag: Tag) -> None:
        for pattern in tag.patterns:
            if pattern in self._by_pattern:
                raise TagRegistryError(f"Pattern @{pattern} is claimed by more than one tag")
            self._by_pattern[pattern] = tag
        if tag.tagname:
            if tag.tagname in self._by_tagname:
                raise TagRegistryError(f"Tagname '{tag.tagname}' is claimed by more than one tag")
            self._by_tagname[tag.tagname] = tag
        if tag.declaration_pattern:
            if tag.declaration_pattern in self._by_declaration:
                raise TagRegistryError(
                    f"Declaration key '{tag.declaration_pattern}' is claimed by more than one tag"
                )
            self._by_declaration[tag.declaration_pattern] = tag
        if tag.member_type is not None:
            self._member_types[tag.member_type.name] = tag.member_type
        tag.scope_kinds()  # rejects unknown merge scopes at registration time
        self._tags.append(tag)

    @property
    def tags(self) -> List[Tag]:
        return list(self._tags)

    def find_by_pattern(self, pattern: str) -> Optional[Tag]:
        return self._by_pattern.get(pattern)

    def find_by_tagname(self, tagname: str) -> Optional[Tag]:
        return self._by_tagname.get(tagname)

    def find_by_declaration(self, key: str) -> Optional[Tag]:
        return self._by_declaration.get(key)

    def declaration_tags(self) -> List[Tag]:
        return list(self._by_declaration.values())

    def plugins_for_merge_scope(self, kind: str) -> List[Tag]:
        """Plugins whose merge scope covers ``kind``, in render order."""
        return self._render_sorted(tag for tag in self._tags if tag.applies_to(kind))

    def render_order(self, kind: str) -> List[Tag]:
        """Plugins producing HTML for entities of ``kind``, in render order."""
        return [tag for tag in self.plugins_for_merge_scope(kind) if tag.html_position is not None]

    def member_type_specs(self) -> List[MemberTypeSpec]:
        return sorted(self._member_types.values(), key=lambda spec: spec.position)

    def member_type(self, name: str) -> Optional[MemberTypeSpec]:
        return self._member_types.get(name)

    def css(self) -> str:
        return "\n".join(tag.css for tag in self._tags if tag.css)

    def _render_sorted(self, tags: Iterable[Tag]) -> List[Tag]:
        indexed = list(enumerate(tags))
        indexed.sort(
            key=lambda item: (
                item[1].html_position if item[1].html_position is not None else _UNPOSITIONED,
                item[0],
            )
        )
        return [tag for _, tag in indexed]


__all__ = ["TagRegistry", "TagRegistryError"]
