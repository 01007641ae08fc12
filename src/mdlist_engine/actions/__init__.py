"""Keystroke actions wired to the default key bindings."""

from .editing import (
    backspace,
    ctrl_enter,
    enter,
    indent,
    outdent,
    shift_enter,
    toggle_list,
    toggle_task,
)

__all__ = [
    "backspace",
    "ctrl_enter",
    "enter",
    "indent",
    "outdent",
    "shift_enter",
    "toggle_list",
    "toggle_task",
]
