"""Tag-driven API documentation: plugin registry, merging and overrides."""

from .models import ClassEntity, ClassTable, MemberEntity, MemberKind, SourceFileRef
from .pipeline import Pipeline

__all__ = [
    "ClassEntity",
    "ClassTable",
    "MemberEntity",
    "MemberKind",
    "Pipeline",
    "SourceFileRef",
]
