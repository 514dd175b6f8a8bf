"""Visibility and static-ness flags."""

from __future__ import annotations

from .base import POS_PRIVATE, BooleanTag, MergeScope


class PrivateTag(BooleanTag):
    pattern = "private"
    tagname = "private"
    merge_scope = (MergeScope.ALL,)
    html_position = POS_PRIVATE
    html_label = "private"


class ProtectedTag(BooleanTag):
    pattern = "protected"
    tagname = "protected"
    merge_scope = (MergeScope.ALL,)
    html_position = POS_PRIVATE
    html_label = "protected"


class StaticTag(BooleanTag):
    """Marks static members; members without the tag become instance members."""

    pattern = "static"
    tagname = "static"
    merge_scope = (MergeScope.MEMBER,)
    html_position = POS_PRIVATE
    html_label = "static"

    def process_doc(self, entity, occurrences, position):
        entity.attributes.setdefault(self.tagname, False)


__all__ = ["PrivateTag", "ProtectedTag", "StaticTag"]
