"""Semantic facts about parsed Cairo files."""
from __future__ import annotations

from cairo_lint.semantic.model import SemanticModel, module_items

__all__ = ["SemanticModel", "module_items"]
