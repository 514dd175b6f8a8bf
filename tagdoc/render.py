"""Thin HTML rendering of merged classes and members."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import markdown
from jinja2 import Environment, FileSystemLoader

from .logging import get_logger
from .models import ClassEntity, MemberEntity
from .tags.base import MemberTypeSpec, Subsection
from .tags.registry import TagRegistry

Entity = Union[ClassEntity, MemberEntity]


class DocFormatter:
    """Converts Markdown documentation to HTML."""

    def __init__(self, extensions: Optional[Iterable[str]] = None) -> None:
        self._markdown = markdown.Markdown(
            extensions=list(extensions) if extensions is not None else ["extra"]
        )

    def format(self, text: str) -> str:
        if not text:
            return ""
        # Extensions such as footnotes keep state between conversions.
        self._markdown.reset()
        return self._markdown.convert(text)


@dataclass
class SubsectionView:
    """Members of one subsection as laid out on the page."""

    title: str
    members: List[MemberEntity]
    show_title: bool = True
    subsection: Optional[Subsection] = None


@dataclass
class MemberSection:
    """All members of one member kind on a class page."""

    spec: MemberTypeSpec
    subsections: List[SubsectionView] = field(default_factory=list)

    @property
    def members(self) -> List[MemberEntity]:
        return [member for view in self.subsections for member in view.members]


class DocRenderer:
    """Renders entities by walking tag plugins in render order."""

    def __init__(
        self,
        registry: TagRegistry,
        formatter: Optional[DocFormatter] = None,
        templates_dir: Optional[Path] = None,
    ) -> None:
        self.registry = registry
        self.formatter = formatter or DocFormatter()
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.logger = get_logger("render")

    def render(self, entity: Entity) -> str:
        """Return the concatenated tag HTML for an entity."""
        tags = self.registry.render_order(entity.scope_kind)
        for tag in tags:
            tag.format(entity, self.formatter)
        parts: List[str] = []
        for tag in tags:
            html = tag.to_html(entity)
            if html:
                parts.append(html)
        return "\n".join(parts)

    def member_sections(self, cls: ClassEntity) -> List[MemberSection]:
        sections: List[MemberSection] = []
        for spec in self.registry.member_type_specs():
            members = [member for member in cls.members if member.kind.value == spec.name]
            if not members:
                continue
            sections.append(MemberSection(spec=spec, subsections=self._split(spec, members)))
        return sections

    def render_class(self, cls: ClassEntity) -> str:
        rendered: Dict[str, str] = {}
        member_docs: Dict[str, str] = {}
        for member in cls.members:
            rendered[member.id] = self.render(member)
            member_docs[member.id] = self.formatter.format(member.doc)
        template = self._env.get_template("class.html.j2")
        html = template.render(
            cls=cls,
            doc_html=self.formatter.format(cls.doc),
            tag_html=self.render(cls),
            sections=self.member_sections(cls),
            rendered=rendered,
            member_docs=member_docs,
        )
        self.logger.debug("Rendered class %s", cls.name)
        return html

    @staticmethod
    def _split(spec: MemberTypeSpec, members: List[MemberEntity]) -> List[SubsectionView]:
        if not spec.subsections:
            return [SubsectionView(title=spec.title, members=members, show_title=False)]
        views: List[SubsectionView] = []
        for subsection in spec.subsections:
            matched = [member for member in members if subsection.matches(member.attributes)]
            if matched:
                views.append(
                    SubsectionView(title=subsection.title, members=matched, subsection=subsection)
                )
        if len(views) == 1 and views[0].subsection is not None and views[0].subsection.default:
            if len(views[0].members) == len(members):
                views[0].show_title = False
        return views


__all__ = ["DocFormatter", "DocRenderer", "MemberSection", "SubsectionView"]
