"""Tests for tagdoc.declaration."""

from __future__ import annotations

from tagdoc.declaration import DeclarationParser
from tagdoc.merge import MergeEngine
from tagdoc.models import ClassEntity


def test_declaration_fills_code_side_records(registry) -> None:
    cls = ClassEntity(name="My.Panel")

    DeclarationParser(registry).parse(
        cls,
        {"extend": "Ext.Panel", "mixins": {"observable": "Ext.util.Observable"}},
    )

    assert cls.raw.code["extends"] == [{"tagname": "extends", "name": "Ext.Panel"}]
    assert cls.raw.code["mixins"] == [{"tagname": "mixins", "name": "Ext.util.Observable"}]
    assert "override" not in cls.raw.code


def test_missing_extend_uses_default(registry) -> None:
    cls = ClassEntity(name="My.Thing")

    DeclarationParser(registry).parse(cls, {})

    assert cls.raw.code["extends"] == [{"tagname": "extends", "name": "Ext.Base"}]


def test_declared_override_makes_an_override_class(registry, warnings) -> None:
    cls = ClassEntity(name="My.ButtonPatch")
    DeclarationParser(registry).parse(cls, {"override": "Ext.Button", "mixins": ["A", "B"]})

    MergeEngine(registry, warnings).merge_class(cls)

    assert cls.is_override is True
    assert cls.override_target == "Ext.Button"
    assert cls.attributes["mixins"] == ["A", "B"]


def test_unusable_declaration_values_are_ignored(registry) -> None:
    cls = ClassEntity(name="Odd")

    DeclarationParser(registry).parse(cls, {"extend": 42, "mixins": 7, "override": ""})

    assert cls.raw.code == {}
