"""Signature tags for method-like members: params, return value, throws."""

from __future__ import annotations

from typing import Any, Dict, List

from markupsafe import escape

from .base import (
    MULTILINE,
    POS_PARAM,
    POS_PRIVATE,
    POS_RETURN,
    POS_THROWS,
    BooleanTag,
    MergeScope,
    Tag,
    first_of,
)


class ParamTag(Tag):
    """``@param {Type} [name=default] description``."""

    pattern = "param"
    tagname = "params"
    repeatable = True
    merge_scope = (MergeScope.METHOD_LIKE,)
    html_position = POS_PARAM

    def parse_doc(self, scanner, position):
        scanner.hw()
        record: Dict[str, Any] = {"tagname": self.tagname, "type": scanner.typedef()}
        scanner.hw()
        record["optional"] = False
        if scanner.match(r"\["):
            record["optional"] = True
            scanner.hw()
            record["name"] = scanner.ident_chain()
            scanner.hw()
            if scanner.match(r"="):
                scanner.hw()
                record["default"] = (scanner.match(r"[^\]]*") or "").strip()
            if not scanner.match(r"\]"):
                scanner.warn("tag_syntax", "Unclosed [ in @param name")
        else:
            record["name"] = scanner.ident_chain()
        if not record["name"]:
            scanner.warn("tag_syntax", "@param is missing a parameter name")
        record["doc"] = MULTILINE
        return record

    def merge(self, entity, docs, code):
        """Documented params win; undocumented types are taken from code."""
        if not docs:
            return [self._clean(record) for record in code] or None
        code_by_name = {record.get("name"): record for record in code}
        merged: List[Dict[str, Any]] = []
        for record in docs:
            param = self._clean(record)
            declared = code_by_name.get(param["name"])
            if not param["type"] and declared is not None:
                param["type"] = declared.get("type")
            merged.append(param)
        return merged

    def format(self, entity, formatter):
        for param in entity.attributes.get(self.tagname) or []:
            param["html"] = formatter.format(param["doc"]) if param["doc"] else ""

    def to_html(self, entity):
        params = entity.attributes.get(self.tagname)
        if not params:
            return None
        items = []
        for param in params:
            optional = " (optional)" if param["optional"] else ""
            default = ""
            if param.get("default") is not None:
                default = f" Defaults to: <code>{escape(param['default'])}</code>"
            items.append(
                f'<li><span class="pre">{escape(param["name"] or "")}</span> : '
                f"{escape(param['type'] or 'Object')}{optional}"
                f'<div class="sub-desc">{param.get("html", "")}{default}</div></li>'
            )
        return '<h3 class="pa">Parameters</h3><ul>' + "".join(items) + "</ul>"

    @staticmethod
    def _clean(record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "name": record.get("name"),
            "type": record.get("type"),
            "optional": bool(record.get("optional")),
            "default": record.get("default"),
            "doc": record.get("doc") or "",
        }


class ReturnTag(Tag):
    pattern = ("return", "returns")
    tagname = "return"
    merge_scope = (MergeScope.METHOD_LIKE,)
    html_position = POS_RETURN

    def parse_doc(self, scanner, position):
        scanner.hw()
        return_type = scanner.typedef() or "Object"
        scanner.hw()
        scanner.match(r"return\.?")
        return {"tagname": self.tagname, "type": return_type, "doc": MULTILINE}

    def merge(self, entity, docs, code):
        record = first_of(docs, code)
        if record is None:
            return None
        return {"type": record.get("type") or "Object", "doc": record.get("doc") or ""}

    def format(self, entity, formatter):
        value = entity.attributes.get(self.tagname)
        if value:
            value["html"] = formatter.format(value["doc"]) if value["doc"] else ""

    def to_html(self, entity):
        value = entity.attributes.get(self.tagname)
        if not value or value["type"] == "undefined":
            return None
        return (
            '<h3 class="pa">Returns</h3><ul><li>'
            f'<span class="pre">{escape(value["type"])}</span>'
            f'<div class="sub-desc">{value.get("html", "")}</div></li></ul>'
        )


class ThrowsTag(Tag):
    pattern = "throws"
    tagname = "throws"
    repeatable = True
    merge_scope = (MergeScope.METHOD_LIKE,)
    html_position = POS_THROWS

    def parse_doc(self, scanner, position):
        scanner.hw()
        return {"tagname": self.tagname, "type": scanner.typedef() or "Object", "doc": MULTILINE}

    def merge(self, entity, docs, code):
        if not docs:
            return None
        return [{"type": record["type"], "doc": record.get("doc") or ""} for record in docs]

    def format(self, entity, formatter):
        for item in entity.attributes.get(self.tagname) or []:
            item["html"] = formatter.format(item["doc"]) if item["doc"] else ""

    def to_html(self, entity):
        items = entity.attributes.get(self.tagname)
        if not items:
            return None
        rendered = "".join(
            f'<li>{escape(item["type"])}<div class="sub-desc">{item.get("html", "")}</div></li>'
            for item in items
        )
        return f'<h3 class="pa">Throws</h3><ul>{rendered}</ul>'


class ChainableTag(BooleanTag):
    """Methods returning ``this`` are chainable even without the tag."""

    pattern = "chainable"
    tagname = "chainable"
    merge_scope = ("method",)
    html_position = POS_PRIVATE + 0.1
    html_label = "chainable"

    def process_doc(self, entity, occurrences, position):
        if self.tagname in entity.attributes:
            return
        returned = entity.attributes.get("return") or {}
        entity.attributes[self.tagname] = returned.get("type") == "this"


__all__ = ["ChainableTag", "ParamTag", "ReturnTag", "ThrowsTag"]
