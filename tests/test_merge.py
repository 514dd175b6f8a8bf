"""Tests for tagdoc.merge."""

from __future__ import annotations

from tagdoc.logging import WarningLog
from tagdoc.merge import MergeEngine
from tagdoc.models import ClassEntity, MemberEntity, MemberKind, SourceFileRef
from tagdoc.tags import TagRegistry
from tagdoc.tags.base import MergeScope, Tag


class _Recording(Tag):
    """Captures the arguments its hooks receive."""

    pattern = "rec"
    tagname = "rec"
    merge_scope = (MergeScope.ALL,)

    def __init__(self, repeat_policy: str = "first", repeatable: bool = False) -> None:
        self.repeat_policy = repeat_policy
        self.repeatable = repeatable
        self.merged = []
        self.processed = []

    def merge(self, entity, docs, code):
        self.merged.append((entity.name, list(docs), list(code)))
        return [record["value"] for record in docs + code]

    def process_doc(self, entity, occurrences, position):
        self.processed.append((entity.name, list(occurrences), position))


def _member(member_id: str, kind: MemberKind = MemberKind.METHOD) -> MemberEntity:
    return MemberEntity(id=member_id, owner="Cls", kind=kind, files=[SourceFileRef("cls.js", 4)])


def test_merge_passes_doc_and_code_records() -> None:
    tag = _Recording(repeatable=True)
    engine = MergeEngine(TagRegistry([tag]), WarningLog())
    cls = ClassEntity(name="Cls")
    cls.raw.add_doc({"tagname": "rec", "value": 1})
    cls.raw.add_doc({"tagname": "rec", "value": 2})
    cls.raw.add_code({"tagname": "rec", "value": 3})

    engine.merge_class(cls)

    assert cls.attributes["rec"] == [1, 2, 3]
    assert tag.merged[0][0] == "Cls"


def test_non_repeatable_keeps_first_and_warns() -> None:
    log = WarningLog()
    tag = _Recording()
    engine = MergeEngine(TagRegistry([tag]), log)
    member = _member("go")
    member.raw.add_doc({"tagname": "rec", "value": "a"})
    member.raw.add_doc({"tagname": "rec", "value": "b"})

    engine.merge_member(member)

    assert member.attributes["rec"] == ["a"]
    [warning] = log.records
    assert warning.category == "tag_repeated"
    assert warning.position == SourceFileRef("cls.js", 4)


def test_non_repeatable_can_keep_last() -> None:
    tag = _Recording(repeat_policy="last")
    engine = MergeEngine(TagRegistry([tag]), WarningLog())
    member = _member("go")
    member.raw.add_doc({"tagname": "rec", "value": "a"})
    member.raw.add_doc({"tagname": "rec", "value": "b"})

    engine.merge_member(member)

    assert member.attributes["rec"] == ["b"]


def test_process_doc_runs_even_when_tag_is_absent() -> None:
    tag = _Recording()
    engine = MergeEngine(TagRegistry([tag]), WarningLog())
    member = _member("quiet")

    engine.merge_member(member)

    assert tag.merged == []
    assert tag.processed == [("quiet", [], SourceFileRef("cls.js", 4))]


def test_static_is_derived_from_absence(registry, warnings) -> None:
    engine = MergeEngine(registry, warnings)
    instance = _member("run")
    static = _member("create")
    static.raw.add_doc({"tagname": "static"})

    engine.merge_member(instance)
    engine.merge_member(static)

    assert instance.attributes["static"] is False
    assert static.attributes["static"] is True


def test_tag_outside_its_scope_is_dropped_with_warning(registry, warnings) -> None:
    engine = MergeEngine(registry, warnings)
    cfg = _member("width", kind=MemberKind.CFG)
    cfg.raw.add_doc({"tagname": "return", "type": "Number", "doc": ""})

    engine.merge_member(cfg)

    assert "return" not in cfg.attributes
    assert [w.category for w in warnings.records] == ["tag"]


def test_unknown_tagname_is_reported(registry, warnings) -> None:
    engine = MergeEngine(registry, warnings)
    cls = ClassEntity(name="Cls", files=[SourceFileRef("cls.js", 1)])
    cls.raw.add_doc({"tagname": "mystery"})

    engine.merge_class(cls)

    assert "mystery" not in cls.attributes
    assert warnings.records[0].category == "tag"


def test_merge_class_merges_its_members(registry, warnings) -> None:
    engine = MergeEngine(registry, warnings)
    cls = ClassEntity(name="Cls")
    member = _member("close")
    member.raw.add_doc({"tagname": "return", "type": "this", "doc": ""})
    cls.add_member(member)

    engine.merge_class(cls)

    assert member.attributes["return"]["type"] == "this"
    assert member.attributes["chainable"] is True


def test_override_tag_marks_class_as_override(registry, warnings) -> None:
    engine = MergeEngine(registry, warnings)
    cls = ClassEntity(name="Patch")
    cls.raw.add_code({"tagname": "override", "name": "Ext.Panel"})

    engine.merge_class(cls)

    assert cls.is_override is True
    assert cls.override_target == "Ext.Panel"
