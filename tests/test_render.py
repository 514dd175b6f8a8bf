"""Tests for tagdoc.render."""

from __future__ import annotations

from tagdoc.doc_parser import DocParser
from tagdoc.merge import MergeEngine
from tagdoc.models import ClassEntity, MemberEntity, MemberKind
from tagdoc.render import DocFormatter, DocRenderer


def _method(registry, warnings, member_id, comment):
    parsed = DocParser(registry, warnings).parse(comment)
    member = MemberEntity(
        id=member_id, owner="Cls", kind=MemberKind.METHOD, doc=parsed.doc, raw=parsed.occurrences
    )
    return MergeEngine(registry, warnings).merge_member(member)


def test_formatter_converts_markdown() -> None:
    formatter = DocFormatter()

    assert formatter.format("Some *emphasis*.") == "<p>Some <em>emphasis</em>.</p>"
    assert formatter.format("") == ""


def test_render_follows_registry_order(registry, warnings) -> None:
    member = _method(
        registry,
        warnings,
        "setTitle",
        "Sets it.\n@param {String} title The *new* title.\n@return {this}\n@deprecated 2.0 Gone.\n@private",
    )

    html = DocRenderer(registry).render(member)

    private_at = html.index('class="signature private"')
    deprecated_at = html.index("deprecated</strong> since 2.0")
    params_at = html.index("Parameters")
    return_at = html.index("Returns")
    assert private_at < deprecated_at < params_at < return_at
    assert "<em>new</em>" in html
    assert "<p>Gone.</p>" in html


def test_render_escapes_plain_values(registry, warnings) -> None:
    member = _method(registry, warnings, "get", "@return {Array<String>}")

    html = DocRenderer(registry).render(member)

    assert "Array&lt;String&gt;" in html


def test_member_sections_hide_default_subsection_title(registry, warnings) -> None:
    cls = ClassEntity(name="Cls")
    cls.add_member(_method(registry, warnings, "a", "A."))
    cls.add_member(_method(registry, warnings, "b", "B."))

    [section] = DocRenderer(registry).member_sections(cls)

    assert section.spec.name == "method"
    [view] = section.subsections
    assert view.title == "Instance methods"
    assert view.show_title is False


def test_member_sections_split_static_members(registry, warnings) -> None:
    cls = ClassEntity(name="Cls")
    cls.add_member(_method(registry, warnings, "run", "Runs."))
    cls.add_member(_method(registry, warnings, "create", "Creates.\n@static"))

    [section] = DocRenderer(registry).member_sections(cls)

    assert [(view.title, view.show_title) for view in section.subsections] == [
        ("Instance methods", True),
        ("Static methods", True),
    ]
    assert [member.id for member in section.members] == ["run", "create"]


def test_member_sections_follow_member_type_order(registry, warnings) -> None:
    cls = ClassEntity(name="Cls")
    cls.add_member(MemberEntity(id="click", owner="Cls", kind=MemberKind.EVENT))
    cls.add_member(MemberEntity(id="width", owner="Cls", kind=MemberKind.CFG))

    sections = DocRenderer(registry).member_sections(cls)

    assert [section.spec.name for section in sections] == ["cfg", "event"]
    assert sections[1].subsections[0].show_title is False


def test_render_class_uses_template(registry, warnings) -> None:
    cls = ClassEntity(name="My<Panel>", doc="A **panel**.")
    cls.add_member(_method(registry, warnings, "show", "Shows it."))

    html = DocRenderer(registry).render_class(cls)

    assert "<h1>My&lt;Panel&gt;</h1>" in html
    assert "<strong>panel</strong>" in html
    assert 'id="method-show"' in html
    assert "<p>Shows it.</p>" in html
    assert "Instance methods" not in html
