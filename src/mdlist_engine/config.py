"""Read-only list editing configuration supplied by the host."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal, Mapping, Optional, Union

from mdlist_engine.runtime import telemetry

MarkerMode = Literal["ordered", "one"]
IndentationSize = Union[Literal["adaptive"], int]

MARKER_MODES: tuple[str, ...] = ("ordered", "one")

_MARKER_KEYS = (
    "ordered_list_marker_mode",
    "orderedListMarkerMode",
    "markdown.extension.orderedList.marker",
)
_INDENT_KEYS = (
    "indentation_size",
    "indentationSize",
    "markdown.extension.list.indentationSize",
)


class ConfigError(ValueError):
    """Raised when a configuration value is outside the supported set."""

    def __init__(self, key: str, value: object) -> None:
        super().__init__(f"Invalid value {value!r} for '{key}'")
        self.key = key
        self.value = value


@dataclass(frozen=True, slots=True)
class ListEditingConfig:
    """How ordered markers are numbered and how wide an indent step is.

    ``ordered_list_marker_mode``
        ``"ordered"`` numbers new items ``previous + 1``; ``"one"`` writes
        ``1`` for every item.
    ``indentation_size``
        ``"adaptive"`` sizes an indent step to the previous sibling's
        marker width, an integer uses that many spaces.
    """

    ordered_list_marker_mode: MarkerMode = "ordered"
    indentation_size: IndentationSize = "adaptive"

    def __post_init__(self) -> None:
        if self.ordered_list_marker_mode not in MARKER_MODES:
            raise ConfigError("ordered_list_marker_mode", self.ordered_list_marker_mode)
        size = self.indentation_size
        if size == "adaptive":
            return
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ConfigError("indentation_size", size)

    @property
    def adaptive(self) -> bool:
        return self.indentation_size == "adaptive"

    @property
    def increments_markers(self) -> bool:
        return self.ordered_list_marker_mode == "ordered"

    def with_overrides(self, **changes: Any) -> "ListEditingConfig":
        """Copy with the given fields replaced; ``None`` leaves a field as is."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ListEditingConfig":
        """Build a config from host settings, ignoring unrelated keys."""

        marker = _first_present(data, _MARKER_KEYS)
        size = _first_present(data, _INDENT_KEYS)
        changes: dict[str, Any] = {}
        if marker is not None:
            changes["ordered_list_marker_mode"] = str(marker).strip().lower()
        if size is not None:
            changes["indentation_size"] = _coerce_size(size)
        return cls(**changes)

    @classmethod
    def from_env(cls) -> "ListEditingConfig":
        data = {
            "ordered_list_marker_mode": telemetry.env("ORDERED_MARKER"),
            "indentation_size": telemetry.env("INDENTATION_SIZE"),
        }
        return cls.from_mapping({k: v for k, v in data.items() if v})


def _first_present(data: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[Any]:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


def _coerce_size(value: Any) -> IndentationSize:
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned == "adaptive":
            return "adaptive"
        if cleaned.isdigit():
            return int(cleaned)
        raise ConfigError("indentation_size", value)
    return value


__all__ = [
    "ConfigError",
    "IndentationSize",
    "ListEditingConfig",
    "MARKER_MODES",
    "MarkerMode",
]
