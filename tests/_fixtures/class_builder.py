"""Helper utilities for assembling class tables in tests."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from tagdoc.models import ClassEntity, ClassTable, MemberEntity, MemberKind, SourceFileRef


class ClassTableBuilder:
    """Builds the class table the source walker would hand to the pipeline."""

    def __init__(self) -> None:
        self.table: ClassTable = {}

    def add_class(
        self,
        name: str,
        *,
        doc: str = "",
        files: Iterable[str] = (),
        override: Optional[str] = None,
        key: Optional[str] = None,
    ) -> ClassEntity:
        """Add a class; ``key`` defaults to the class name."""
        cls = ClassEntity(
            name=name,
            doc=doc,
            files=[_ref(spec) for spec in files],
            is_override=override is not None,
            override_target=override,
        )
        self.table[key if key is not None else name] = cls
        return cls

    def add_member(
        self,
        cls: ClassEntity,
        member_id: str,
        *,
        kind: MemberKind = MemberKind.METHOD,
        doc: str = "",
        files: Iterable[str] = (),
        attributes: Optional[Dict[str, Any]] = None,
    ) -> MemberEntity:
        member = MemberEntity(
            id=member_id,
            owner=cls.name,
            kind=kind,
            doc=doc,
            files=[_ref(spec) for spec in files],
            attributes=dict(attributes or {}),
        )
        cls.add_member(member)
        return member


def _ref(spec: str) -> SourceFileRef:
    """Turn ``"path.js:12"`` into a file reference."""
    filename, _, line = spec.partition(":")
    return SourceFileRef(filename=filename, linenr=int(line) if line else 1)


__all__ = ["ClassTableBuilder"]
