"""@since and @deprecated."""

from __future__ import annotations

from markupsafe import escape

from .base import MULTILINE, POS_DEPRECATED, POS_SINCE, MergeScope, Tag


class SinceTag(Tag):
    pattern = "since"
    tagname = "since"
    merge_scope = (MergeScope.ALL,)
    html_position = POS_SINCE

    def parse_doc(self, scanner, position):
        scanner.hw()
        return {"tagname": self.tagname, "version": scanner.rest_of_line()}

    def merge(self, entity, docs, code):
        if not docs:
            return None
        return docs[0]["version"] or None

    def to_html(self, entity):
        version = entity.attributes.get(self.tagname)
        if not version:
            return None
        return f"<p>Available since: <b>{escape(version)}</b></p>"


class DeprecatedTag(Tag):
    """``@deprecated [version] message`` with a Markdown message."""

    pattern = "deprecated"
    tagname = "deprecated"
    merge_scope = (MergeScope.ALL,)
    html_position = POS_DEPRECATED

    def parse_doc(self, scanner, position):
        scanner.hw()
        version = scanner.version() if scanner.look(r"\d") else None
        return {"tagname": self.tagname, "version": version, "doc": MULTILINE}

    def merge(self, entity, docs, code):
        if not docs:
            return None
        record = docs[0]
        return {"version": record.get("version"), "text": record.get("doc") or ""}

    def format(self, entity, formatter):
        value = entity.attributes.get(self.tagname)
        if value and value["text"]:
            value["html"] = formatter.format(value["text"])

    def to_html(self, entity):
        value = entity.attributes.get(self.tagname)
        if not value:
            return None
        kind = "class" if entity.scope_kind == "class" else "member"
        since = f" since {escape(value['version'])}" if value.get("version") else ""
        return (
            '<div class="signature-box deprecated">'
            f"<p>This {kind} has been <strong>deprecated</strong>{since}</p>"
            f"{value.get('html', '')}"
            "</div>"
        )


__all__ = ["DeprecatedTag", "SinceTag"]
