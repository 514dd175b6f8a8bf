"""Tags that declare members and register their page sections."""

from __future__ import annotations

from markupsafe import escape

from .base import (
    MEMBER_POS_CFG,
    MEMBER_POS_CSS_MIXIN,
    MEMBER_POS_CSS_VAR,
    MEMBER_POS_EVENT,
    MEMBER_POS_METHOD,
    MEMBER_POS_PROPERTY,
    POS_DEFAULT,
    MemberTypeSpec,
    MergeScope,
    Subsection,
    Tag,
    first_of,
)

_STATIC_SUBSECTIONS = (
    Subsection(title="Instance {kind}", filter={"static": False}, default=True),
    Subsection(title="Static {kind}", filter={"static": True}),
)


def _static_split(kind: str) -> tuple[Subsection, ...]:
    return tuple(
        Subsection(title=sub.title.format(kind=kind), filter=sub.filter, default=sub.default)
        for sub in _STATIC_SUBSECTIONS
    )


class MemberTypeTag(Tag):
    """Shared parsing for ``@cfg {Type} name``-style member declarations."""

    has_default = False

    def __init__(self) -> None:
        self.merge_scope = (self.tagname,)

    def parse_doc(self, scanner, position):
        scanner.hw()
        record = {"tagname": self.tagname, "type": scanner.typedef()}
        scanner.hw()
        if self.has_default and scanner.match(r"\["):
            scanner.hw()
            record["name"] = scanner.ident_chain()
            scanner.hw()
            if scanner.match(r"="):
                scanner.hw()
                record["default"] = (scanner.match(r"[^\]]*") or "").strip()
            if not scanner.match(r"\]"):
                scanner.warn("tag_syntax", f"Unclosed [ in @{self.tagname} name")
            record["optional"] = True
        else:
            record["name"] = scanner.ident_chain()
        return record

    def merge(self, entity, docs, code):
        record = first_of(docs, code)
        if record is None:
            return None
        fallback = code[0] if docs and code else {}
        merged = {
            "name": record.get("name") or fallback.get("name") or entity.name,
            "type": record.get("type") or fallback.get("type") or "Object",
        }
        if self.has_default:
            default = record.get("default", fallback.get("default"))
            if default is not None:
                merged["default"] = default
        return merged

    def to_html(self, entity):
        if not self.has_default:
            return None
        value = entity.attributes.get(self.tagname) or {}
        if "default" not in value:
            return None
        return f"<p>Defaults to: <code>{escape(value['default'])}</code></p>"


class CfgTag(MemberTypeTag):
    pattern = "cfg"
    tagname = "cfg"
    has_default = True
    html_position = POS_DEFAULT
    member_type = MemberTypeSpec(
        name="cfg",
        category=MergeScope.PROPERTY_LIKE,
        title="Config options",
        toolbar_title="Configs",
        position=MEMBER_POS_CFG,
        subsections=(
            Subsection(title="Required config options", filter={"required": True}),
            Subsection(title="Optional config options", filter={"required": False}, default=True),
        ),
    )

    def parse_doc(self, scanner, position):
        record = super().parse_doc(scanner, position)
        scanner.hw()
        if scanner.match(r"\(required\)"):
            record["required"] = True
        return record

    def merge(self, entity, docs, code):
        merged = super().merge(entity, docs, code)
        if merged is not None:
            merged["required"] = any(record.get("required") for record in docs + code)
        return merged

    def process_doc(self, entity, occurrences, position):
        cfg = entity.attributes.get("cfg") or {}
        entity.attributes["required"] = bool(cfg.get("required"))


class PropertyTag(MemberTypeTag):
    pattern = "property"
    tagname = "property"
    has_default = True
    html_position = POS_DEFAULT
    member_type = MemberTypeSpec(
        name="property",
        category=MergeScope.PROPERTY_LIKE,
        title="Properties",
        position=MEMBER_POS_PROPERTY,
        subsections=_static_split("properties"),
    )


class MethodTag(MemberTypeTag):
    pattern = "method"
    tagname = "method"
    member_type = MemberTypeSpec(
        name="method",
        category=MergeScope.METHOD_LIKE,
        title="Methods",
        position=MEMBER_POS_METHOD,
        subsections=_static_split("methods"),
    )


class EventTag(MemberTypeTag):
    pattern = "event"
    tagname = "event"
    member_type = MemberTypeSpec(
        name="event",
        category=MergeScope.METHOD_LIKE,
        title="Events",
        position=MEMBER_POS_EVENT,
    )


class CssVarTag(MemberTypeTag):
    pattern = "var"
    tagname = "css_var"
    has_default = True
    html_position = POS_DEFAULT
    member_type = MemberTypeSpec(
        name="css_var",
        category=MergeScope.PROPERTY_LIKE,
        title="CSS Variables",
        toolbar_title="CSS Vars",
        position=MEMBER_POS_CSS_VAR,
    )


class CssMixinTag(MemberTypeTag):
    pattern = "mixin"
    tagname = "css_mixin"
    member_type = MemberTypeSpec(
        name="css_mixin",
        category=MergeScope.METHOD_LIKE,
        title="CSS Mixins",
        position=MEMBER_POS_CSS_MIXIN,
    )


__all__ = [
    "CfgTag",
    "CssMixinTag",
    "CssVarTag",
    "EventTag",
    "MemberTypeTag",
    "MethodTag",
    "PropertyTag",
]
