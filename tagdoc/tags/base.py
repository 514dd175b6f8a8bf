"""Base class and shared constants for @tag plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

from ..models import METHOD_LIKE as METHOD_LIKE_KINDS
from ..models import PROPERTY_LIKE as PROPERTY_LIKE_KINDS
from ..models import MemberKind

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..models import ClassEntity, MemberEntity, SourceFileRef
    from ..render import DocFormatter
    from ..scanner import DocScanner

    Entity = Union[ClassEntity, MemberEntity]

Record = Dict[str, Any]

# Value of a record's "doc" field asking the parser to attach the text
# following the tag up to the next @tag.
MULTILINE = "multiline"

# Positions of tag output in the rendered page. User-defined tags should
# position themselves relative to these, e.g. ``POS_RETURN + 0.1``.
POS_ASIDE = 1
POS_PRIVATE = 2
POS_DOC = 3
POS_LOCALDOC = 4
POS_DEFAULT = 5
POS_SINCE = 6
POS_DEPRECATED = 7
POS_ENUM = 8
POS_TEMPLATE = 9
POS_PREVENTABLE = 10
POS_PARAM = 11
POS_SUBPROPERTIES = 12
POS_RETURN = 13
POS_THROWS = 14
POS_OVERRIDES = 15

# Ordering of member sections on a class page.
MEMBER_POS_CFG = 1
MEMBER_POS_PROPERTY = 2
MEMBER_POS_METHOD = 3
MEMBER_POS_EVENT = 4
MEMBER_POS_CSS_VAR = 5
MEMBER_POS_CSS_MIXIN = 6


class MergeScope:
    """Scope tokens a tag can register its merge and post-process hooks for."""

    CLASS = "class"
    MEMBER = "member"
    METHOD_LIKE = "method_like"
    PROPERTY_LIKE = "property_like"
    ALL = "all"

    _GROUPS: Mapping[str, FrozenSet[str]] = {
        CLASS: frozenset({"class"}),
        MEMBER: frozenset(kind.value for kind in MemberKind),
        METHOD_LIKE: frozenset(kind.value for kind in METHOD_LIKE_KINDS),
        PROPERTY_LIKE: frozenset(kind.value for kind in PROPERTY_LIKE_KINDS),
        ALL: frozenset({"class"}) | frozenset(kind.value for kind in MemberKind),
    }

    @classmethod
    def expand(cls, token: str) -> FrozenSet[str]:
        """Return the entity kinds a scope token stands for."""
        if token in cls._GROUPS:
            return cls._GROUPS[token]
        try:
            return frozenset({MemberKind(token).value})
        except ValueError:
            raise ValueError(f"Unknown merge scope: {token}") from None


@dataclass(frozen=True)
class Subsection:
    """A slice of a member section, e.g. static methods.

    ``filter`` maps attribute names to the truthiness a member must have
    to land here. A ``default`` subsection hides its title when every
    member of the section ends up in it.
    """

    title: str
    filter: Mapping[str, bool]
    default: bool = False

    def matches(self, attributes: Mapping[str, Any]) -> bool:
        return all(bool(attributes.get(key)) == wanted for key, wanted in self.filter.items())


@dataclass(frozen=True)
class MemberTypeSpec:
    """Registration of a member kind and its section on class pages."""

    name: str
    category: str
    title: str
    position: float
    toolbar_title: Optional[str] = None
    subsections: Tuple[Subsection, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.category not in (MergeScope.METHOD_LIKE, MergeScope.PROPERTY_LIKE):
            raise ValueError("Member type category must be method_like or property_like")


class Tag:
    """Base class for all tag plugins.

    Every hook is optional; the defaults do nothing. Subclasses set the
    class attributes they need:

    - ``pattern``: name(s) of the @tag without the "@" sign.
    - ``tagname``: key under which merged data is stored on the entity.
    - ``repeatable``: whether the tag may occur several times in one
      doc-comment. Repeating a non-repeatable tag produces a warning and
      only one occurrence is kept, chosen by ``repeat_policy``
      (``"first"`` or ``"last"``).
    - ``merge_scope``: scope tokens (see :class:`MergeScope`) for which
      ``merge`` and ``process_doc`` are invoked.
    - ``html_position``: render order of ``to_html`` output.
    - ``member_type``: registers a member kind section.
    - ``declaration_pattern``/``declaration_default``: key in a
      structured class declaration handled by ``parse_from_declaration``
      and the record to use when that key is absent.
    """

    pattern: Union[str, Sequence[str], None] = None
    tagname: Optional[str] = None
    repeatable: bool = False
    repeat_policy: str = "first"
    merge_scope: Tuple[str, ...] = ()
    html_position: Optional[float] = None
    member_type: Optional[MemberTypeSpec] = None
    declaration_pattern: Optional[str] = None
    declaration_default: Optional[Record] = None
    css: Optional[str] = None

    @property
    def name(self) -> str:
        """Identity used for enabling plugins in configuration."""
        return self.tagname or self.patterns[0]

    @property
    def label(self) -> str:
        return f"@{self.patterns[0]}" if self.patterns else self.tagname or type(self).__name__

    @property
    def patterns(self) -> Tuple[str, ...]:
        if self.pattern is None:
            return ()
        if isinstance(self.pattern, str):
            return (self.pattern,)
        return tuple(self.pattern)

    def scope_kinds(self) -> FrozenSet[str]:
        kinds: FrozenSet[str] = frozenset()
        for token in self.merge_scope:
            kinds = kinds | MergeScope.expand(token)
        return kinds

    def applies_to(self, kind: str) -> bool:
        return kind in self.scope_kinds()

    def parse_doc(
        self, scanner: "DocScanner", position: Optional["SourceFileRef"]
    ) -> Union[Record, List[Record], None]:
        """Parse the tag from a doc-comment, starting right after "@pattern".

        Returns one or more records, each carrying a "tagname" key. A
        record with ``"doc": MULTILINE`` receives the text that follows
        the tag.
        """
        return None

    def process_doc(
        self,
        entity: "Entity",
        occurrences: List[Record],
        position: Optional["SourceFileRef"],
    ) -> None:
        """Post-process an entity once its tags have been merged."""

    def merge(self, entity: "Entity", docs: List[Record], code: List[Record]) -> Any:
        """Reconcile doc-side and code-side records into one attribute value.

        Returning ``None`` leaves the entity's attributes untouched.
        """
        return None

    def parse_from_declaration(self, cls: "ClassEntity", value: Any) -> Union[Record, List[Record], None]:
        """Infer code-side records from a structured class declaration."""
        return None

    def format(self, entity: "Entity", formatter: "DocFormatter") -> None:
        """Convert Markdown held in the entity's attributes before rendering."""

    def to_html(self, entity: "Entity") -> Optional[str]:
        """Return the HTML fragment for this tag, or None to skip."""
        return None


class BooleanTag(Tag):
    """A tag whose mere presence sets its attribute to True."""

    html_label: Optional[str] = None

    def parse_doc(self, scanner, position):
        return {"tagname": self.tagname}

    def merge(self, entity, docs, code):
        if docs or code:
            return True
        return None

    def to_html(self, entity):
        if not entity.attributes.get(self.tagname) or not self.html_label:
            return None
        return f'<span class="signature {self.tagname}">{self.html_label}</span>'


def as_records(result: Union[Record, List[Record], None]) -> List[Record]:
    """Normalise a hook result to a list of records."""
    if result is None:
        return []
    if isinstance(result, dict):
        return [result]
    return list(result)


def first_of(docs: List[Record], code: List[Record]) -> Optional[Record]:
    """Prefer the doc-side record, falling back to the code-side one."""
    if docs:
        return docs[0]
    if code:
        return code[0]
    return None


__all__ = [
    "BooleanTag",
    "MULTILINE",
    "MemberTypeSpec",
    "MergeScope",
    "Record",
    "Subsection",
    "Tag",
    "as_records",
    "first_of",
]
