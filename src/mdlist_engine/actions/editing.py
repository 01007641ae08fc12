"""Keystroke actions bound to the list engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdlist_engine.listedit import HandlerResult, ListEditingEngine

if TYPE_CHECKING:  # pragma: no cover
    from mdlist_engine.keymaps import ResolutionMatch


def enter(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.enter()


def shift_enter(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.enter("shift")


def ctrl_enter(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.enter("ctrl")


def indent(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.tab()


def outdent(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.shift_tab()


def backspace(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.backspace()


def toggle_list(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.toggle_list()


def toggle_task(engine: ListEditingEngine, match: "ResolutionMatch") -> HandlerResult:
    del match
    return engine.toggle_task()


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
