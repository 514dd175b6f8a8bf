"""Folds override classes into the classes they patch."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict

from ..config import TagdocConfig
from ..logging import WarningLog, get_logger
from ..models import ClassEntity, ClassTable, MemberEntity


class OverrideApplier:
    """Applies every override class to its target class.

    Overrides are processed in table order. Each one contributes its
    documentation, file references and members to the target; afterwards
    all override classes are removed from the table and their names are
    recorded in ``config.external_classes`` so references to them still
    resolve.

    An override whose target is missing, or whose target is itself an
    override, is reported and skipped. It is still removed like every
    other override class.
    """

    def __init__(self, classes: ClassTable, config: TagdocConfig, warnings: WarningLog) -> None:
        self.classes = classes
        self.config = config
        self.warnings = warnings
        self.logger = get_logger("overrides")

    def process_all(self) -> ClassTable:
        overrides = [(key, cls) for key, cls in self.classes.items() if cls.is_override]

        for _, override in overrides:
            self.process(override)

        for key, _ in overrides:
            del self.classes[key]
            if key not in self.config.external_classes:
                self.config.external_classes.append(key)

        self.logger.debug("Applied %d override classes", len(overrides))
        return self.classes

    def process(self, override: ClassEntity) -> bool:
        """Apply a single override. Returns False when it was skipped."""
        position = override.files[0] if override.files else None
        if not override.override_target:
            self.warnings.warn("override", f"Override {override.name} names no target class", position)
            return False
        target = self.classes.get(override.override_target)
        if target is None:
            self.warnings.warn("extend", f"Class {override.override_target} not found", position)
            return False
        if target.is_override:
            self.warnings.warn(
                "override",
                f"Override {override.name} targets override class {target.name}; overrides cannot be chained",
                position,
            )
            return False

        name = display_name(override)
        if override.doc:
            target.doc = add_doc(target.doc, f"**From override {name}:** {override.doc}")
        target.files.extend(override.files)

        existing: Dict[str, MemberEntity] = {member.id: member for member in target.members}
        for member in override.members:
            match = existing.get(member.id)
            if match is not None:
                if member.doc:
                    match.doc = add_doc(match.doc, f"**From override {name}:** {member.doc}")
                else:
                    match.doc = add_doc(match.doc, f"**Overridden in {name}.**")
                match.files.extend(member.files)
            else:
                target.members.append(member)
                existing[member.id] = member
                member.doc = add_doc(member.doc, f"**Defined in override {name}.**")
                member.owner = target.name
        return True


def display_name(override: ClassEntity) -> str:
    """The override's own name, or the basename of the file it was declared in."""
    if override.name:
        return override.name
    if override.files:
        return PurePosixPath(override.files[0].filename.replace("\\", "/")).name
    return ""


def add_doc(doc: str, addition: str) -> str:
    """Append a documentation block separated by a blank line."""
    return (doc + "\n\n" + addition).strip()


__all__ = ["OverrideApplier", "add_doc", "display_name"]
