"""Executable Textual app that edits a Markdown file with list assistance."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mdlist_engine.adapters.textual.app"
    ) from exc

from mdlist_engine.config import ListEditingConfig
from mdlist_engine.dispatch import KeyDispatcher
from mdlist_engine.listedit import ListEditingEngine
from mdlist_engine.runtime import telemetry

from .controller import TextAreaHost, TextualListAdapter, TextualUIHooks

# Keys the list engine may claim before TextArea sees them.
ROUTED_KEYS = frozenset(
    {"enter", "shift+enter", "ctrl+enter", "tab", "shift+tab", "ctrl+l", "alt+c"}
)


class ListTextArea(TextArea):
    """TextArea whose list keys go through the list engine first."""

    adapter: TextualListAdapter | None = None

    def __init__(self, text: str = "", **kwargs) -> None:
        super().__init__(text, language="markdown", tab_behavior="indent", **kwargs)

    def builtin_delete_left(self) -> None:
        TextArea.action_delete_left(self)

    async def _on_key(self, event: events.Key) -> None:
        if self.adapter is not None and event.key in ROUTED_KEYS:
            result = self.adapter.handle_textual_key(
                event.key, flags={"read_only": self.read_only}
            )
            if result.status != "unbound":
                event.stop()
                event.prevent_default()
                return
        await super()._on_key(event)

    def action_delete_left(self) -> None:
        if self.adapter is not None:
            result = self.adapter.handle_textual_key(
                "backspace", flags={"read_only": self.read_only}
            )
            if result.status != "unbound":
                return
        self.builtin_delete_left()


class ListEditorApp(App[None]):
    """Single-file Markdown editor hosting the list engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+s", "save", "Save"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        config: Optional[ListEditingConfig] = None,
    ) -> None:
        super().__init__()
        self.path = path
        self.config = config or ListEditingConfig.from_env()
        self.adapter: TextualListAdapter | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        text = ""
        if self.path is not None and self.path.exists():
            text = self.path.read_text(encoding="utf-8")
        yield Header(show_clock=True)
        yield ListTextArea(text, id="editor")
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        area = self.query_one("#editor", ListTextArea)
        host = TextAreaHost(area, delete_left=area.builtin_delete_left)
        engine = ListEditingEngine(host, self.config, name="textual")
        hooks = TextualUIHooks(update_status=self._update_status)
        self.adapter = TextualListAdapter(KeyDispatcher(engine), hooks)
        area.adapter = self.adapter
        area.focus()
        self._update_status(
            f"markers={self.config.ordered_list_marker_mode} "
            f"indent={self.config.indentation_size}"
        )

    def action_save(self) -> None:
        if self.path is None:
            self._update_status("no file to save to")
            return
        area = self.query_one("#editor", ListTextArea)
        self.path.write_text(area.text, encoding="utf-8")
        self._update_status(f"saved {self.path}")

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _indent_size(value: str) -> str | int:
    return value if value == "adaptive" else int(value)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit a Markdown file with list continuation and renumbering."
    )
    parser.add_argument("file", nargs="?", type=Path, help="Markdown file to edit")
    parser.add_argument(
        "--marker-mode",
        choices=("ordered", "one"),
        default=None,
        help="Ordered list numbering style (default: ordered)",
    )
    parser.add_argument(
        "--indent-size",
        type=_indent_size,
        default=None,
        help="'adaptive' or a fixed number of spaces (default: adaptive)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="quiet")
    config = ListEditingConfig.from_env().with_overrides(
        ordered_list_marker_mode=args.marker_mode,
        indentation_size=args.indent_size,
    )
    ListEditorApp(args.file, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
