"""Whole-table processing steps run after merging."""

from .overrides import OverrideApplier

__all__ = ["OverrideApplier"]
