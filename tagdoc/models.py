"""Core data models shared across tagdoc components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class MemberKind(str, Enum):
    """The fixed set of member types a class can carry."""

    CFG = "cfg"
    PROPERTY = "property"
    METHOD = "method"
    EVENT = "event"
    CSS_VAR = "css_var"
    CSS_MIXIN = "css_mixin"


METHOD_LIKE = frozenset({MemberKind.METHOD, MemberKind.EVENT, MemberKind.CSS_MIXIN})
PROPERTY_LIKE = frozenset({MemberKind.CFG, MemberKind.PROPERTY, MemberKind.CSS_VAR})


@dataclass(frozen=True)
class SourceFileRef:
    """Where a class or member was declared. Provenance only."""

    filename: str
    linenr: int = 0

    def __str__(self) -> str:
        return f"{self.filename}:{self.linenr}"


@dataclass
class TagOccurrences:
    """Raw per-tagname records collected before merging.

    ``doc`` holds records produced by @tag parsing, ``code`` holds records
    inferred from structured class declarations.
    """

    doc: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    code: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    def add_doc(self, record: Dict[str, Any]) -> None:
        self.doc.setdefault(record["tagname"], []).append(record)

    def add_code(self, record: Dict[str, Any]) -> None:
        self.code.setdefault(record["tagname"], []).append(record)

    def tagnames(self) -> List[str]:
        names = list(self.doc)
        names.extend(name for name in self.code if name not in self.doc)
        return names


@dataclass
class MemberEntity:
    """A documented member (config, property, method, ...) of a class."""

    id: str
    owner: str
    kind: MemberKind
    name: str = ""
    files: List[SourceFileRef] = field(default_factory=list)
    doc: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)
    raw: TagOccurrences = field(default_factory=TagOccurrences)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id

    @property
    def scope_kind(self) -> str:
        return self.kind.value


@dataclass
class ClassEntity:
    """A documented class, including synthetic override classes."""

    name: str
    files: List[SourceFileRef] = field(default_factory=list)
    members: List[MemberEntity] = field(default_factory=list)
    doc: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)
    raw: TagOccurrences = field(default_factory=TagOccurrences)
    is_override: bool = False
    override_target: Optional[str] = None

    @property
    def scope_kind(self) -> str:
        return "class"

    def member(self, member_id: str) -> Optional[MemberEntity]:
        for member in self.members:
            if member.id == member_id:
                return member
        return None

    def add_member(self, member: MemberEntity) -> None:
        if self.member(member.id) is not None:
            raise ValueError(f"Class {self.name} already has a member '{member.id}'")
        self.members.append(member)


ClassTable = Dict[str, ClassEntity]
