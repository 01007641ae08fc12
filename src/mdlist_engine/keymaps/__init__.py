"""Declarative key bindings for the list keystrokes."""

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import (
    DEFAULT_BINDINGS,
    EDITOR_CONTEXT,
    MARKDOWN_SCOPE,
    load_default_keymaps,
)

__all__ = [
    "ActionRef",
    "Binding",
    "DEFAULT_BINDINGS",
    "EDITOR_CONTEXT",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "MARKDOWN_SCOPE",
    "RegistryStats",
    "ResolutionMatch",
    "ResolutionResult",
    "WhenClause",
    "load_default_keymaps",
]
