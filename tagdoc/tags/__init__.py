"""Tag plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .access import PrivateTag, ProtectedTag, StaticTag
from .base import BooleanTag, MemberTypeSpec, MergeScope, Subsection, Tag
from .class_tags import ExtendsTag, MixinsTag, OverrideTag
from .member_types import CfgTag, CssMixinTag, CssVarTag, EventTag, MethodTag, PropertyTag
from .params import ChainableTag, ParamTag, ReturnTag, ThrowsTag
from .registry import TagRegistry, TagRegistryError
from .versioning import DeprecatedTag, SinceTag

_ENTRY_POINT_GROUP = "tagdoc.tags"

_BUILTIN_FACTORIES: List[Callable[[], Tag]] = [
    CfgTag,
    PropertyTag,
    MethodTag,
    EventTag,
    CssVarTag,
    CssMixinTag,
    PrivateTag,
    ProtectedTag,
    StaticTag,
    SinceTag,
    DeprecatedTag,
    ParamTag,
    ReturnTag,
    ThrowsTag,
    ChainableTag,
    ExtendsTag,
    MixinsTag,
    OverrideTag,
]


def builtin_tags() -> List[Tag]:
    """Return fresh instances of every built-in tag."""
    return [factory() for factory in _BUILTIN_FACTORIES]


def discover_tags(enabled: Sequence[str] | None = None) -> List[Tag]:
    """Return built-in and entry-point tags, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    tags: List[Tag] = []
    seen: Set[str] = set()

    def _add(instance: Tag) -> None:
        key = instance.name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        tags.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for instance in builtin_tags():
        _add(instance)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load tag entry point '{entry.name}': {exc}") from exc
        _add(_coerce_tag(loaded))

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise TagRegistryError(f"Unknown tags requested: {missing}")

    return tags


def _coerce_tag(obj: object) -> Tag:
    if isinstance(obj, Tag):
        return obj
    if isinstance(obj, type) and issubclass(obj, Tag):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Tag):
            return instance
    raise TypeError("Tag entry point must be a Tag subclass, instance, or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BooleanTag",
    "MemberTypeSpec",
    "MergeScope",
    "Subsection",
    "Tag",
    "TagRegistry",
    "TagRegistryError",
    "builtin_tags",
    "discover_tags",
]
