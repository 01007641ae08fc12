"""Textual adapter for the list editing engine."""

from .controller import TextAreaHost, TextualListAdapter, TextualUIHooks

__all__ = ["TextAreaHost", "TextualListAdapter", "TextualUIHooks"]
