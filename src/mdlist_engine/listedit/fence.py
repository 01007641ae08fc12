"""Fenced code block detection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from mdlist_engine.host import TextHost

FENCE_RE = re.compile(r"^(?: {0,3}|\t)(`{3,}|~{3,})(.*)$")


@dataclass(frozen=True, slots=True)
class Fence:
    char: str
    length: int


def opening_fence(text: str) -> Optional[Fence]:
    match = FENCE_RE.match(text)
    if match is None:
        return None
    run, info = match.groups()
    # An info string may not contain backticks for backtick fences.
    if run[0] == "`" and "`" in info:
        return None
    return Fence(char=run[0], length=len(run))


def closes(fence: Fence, text: str) -> bool:
    """Return ``True`` when ``text`` closes ``fence`` (same char, at least as long)."""

    match = FENCE_RE.match(text)
    if match is None:
        return False
    run, rest = match.groups()
    return run[0] == fence.char and len(run) >= fence.length and not rest.strip()


def is_inside_fence(host: TextHost, line: int) -> bool:
    """Whether ``line`` lies inside a fenced code block.

    Lines ``0 .. line - 1`` are scanned from the top. An opening fence line is
    outside the block, its closing fence line is inside it.
    """

    current: Optional[Fence] = None
    for row in range(min(line, host.get_line_count())):
        text = host.get_line_text(row)
        if current is None:
            current = opening_fence(text)
        elif closes(current, text):
            current = None
    return current is not None


__all__ = ["Fence", "closes", "is_inside_fence", "opening_fence"]
