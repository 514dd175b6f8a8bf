"""Runs merging and override processing over a parsed class table."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import TagdocConfig, load_config
from .logging import WarningLog, configure_logging, get_logger
from .merge import MergeEngine
from .models import ClassTable
from .process.overrides import OverrideApplier
from .render import DocFormatter, DocRenderer
from .tags.registry import TagRegistry


class Pipeline:
    """Coordinates the in-memory stages between parsing and rendering.

    Every class and member is merged before any override is applied.
    The table is mutated in place and returned.
    """

    def __init__(
        self,
        config: TagdocConfig,
        registry: TagRegistry | None = None,
        warnings: WarningLog | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or TagRegistry.default(config.tags.enabled)
        self.warnings = warnings or WarningLog(config.warnings.disabled)
        self.merger = MergeEngine(self.registry, self.warnings)
        self.logger = get_logger("pipeline")

    @classmethod
    def from_path(cls, path: Path, registry: Optional[TagRegistry] = None) -> "Pipeline":
        """Build a pipeline from ``.tagdoc.yml``.

        A ``logging`` section in the file also configures the ``tagdoc``
        logger; without one, log handling is left to the host application.
        """
        config = load_config(path)
        if config.logging is not None:
            configure_logging(
                verbose=config.logging.verbose,
                quiet=config.logging.quiet,
                log_file=config.logging.file,
            )
        return cls(config, registry=registry)

    def run(self, classes: ClassTable) -> ClassTable:
        self.logger.info("Merging %d classes", len(classes))
        for cls in classes.values():
            self.merger.merge_class(cls)

        OverrideApplier(classes, self.config, self.warnings).process_all()

        # Overrides may contribute the only documentation a class has.
        for cls in classes.values():
            if not cls.doc:
                position = cls.files[0] if cls.files else None
                self.warnings.warn("nodoc", f"No documentation for {cls.name}", position)
        self.logger.info(
            "Finished with %d classes, %d warnings", len(classes), len(self.warnings.records)
        )
        return classes

    def renderer(self) -> DocRenderer:
        """Renderer sharing this pipeline's tags and Markdown settings."""
        return DocRenderer(self.registry, DocFormatter(self.config.markdown_extensions))


__all__ = ["Pipeline"]
