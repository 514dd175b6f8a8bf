from __future__ import annotations

from pathlib import Path

import pytest

from tagdoc.config import TagdocConfig
from tagdoc.logging import WarningLog
from tagdoc.tags import TagRegistry, builtin_tags
from tests._fixtures.class_builder import ClassTableBuilder


@pytest.fixture
def builder() -> ClassTableBuilder:
    """Provide an empty class table builder."""
    return ClassTableBuilder()


@pytest.fixture
def registry() -> TagRegistry:
    """Registry holding only the built-in tags, independent of installed plugins."""
    return TagRegistry(builtin_tags())


@pytest.fixture
def warnings() -> WarningLog:
    return WarningLog()


@pytest.fixture
def config(tmp_path: Path) -> TagdocConfig:
    return TagdocConfig(root=tmp_path)
