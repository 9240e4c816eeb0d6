"""Executable Textual app demonstrating the highlight engine on a file."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use luminol.adapters.textual.app"
    ) from exc

from luminol.buffer import Buffer, BufferMirror
from luminol.commands import CommandRegistry, load_default_commands
from luminol.config import HighlightConfig
from luminol.highlight import HighlightEngine
from luminol.runtime import telemetry
from luminol.view import MemoryEditorView

from .controller import TextualHighlightAdapter, TextualUIHooks

SAMPLE_TEXT = """\
def scan(text, pattern):
    matches = []
    for match in pattern.finditer(text):
        matches.append(match)
    return matches
"""


def create_engine(
    text: str, *, config: HighlightConfig, visible_lines: Optional[int] = None
) -> tuple[HighlightEngine, CommandRegistry]:
    """Build a view, an engine over it and the default command registry."""

    view = MemoryEditorView(Buffer.from_text(text), visible_lines=visible_lines)
    engine = HighlightEngine(view, config=config)
    registry = CommandRegistry()
    load_default_commands(registry)
    return engine, registry


@dataclass
class UIState:
    status_text: str = ""
    last_key: str = ""


class HighlightApp(App[None]):
    """Minimal Textual UI embedding the highlight engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str, config: HighlightConfig) -> None:
        super().__init__()
        self._text = text
        self._config = config
        self._state = UIState()
        self.adapter: TextualHighlightAdapter | None = None
        self._document_widget: Static | None = None
        self._status_widget: Static | None = None
        self._scroll: VerticalScroll | None = None
        self.logger = telemetry.get_logger("luminol.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self._scroll = VerticalScroll(id="document")
        with self._scroll:
            self._document_widget = Static("", id="document-text")
            yield self._document_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        engine, registry = create_engine(self._text, config=self._config)
        hooks = TextualUIHooks(
            update_document=self._update_document,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualHighlightAdapter(engine, registry, hooks)
        self.call_after_refresh(self._sync_viewport)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._sync_viewport()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        self._state.last_key = event.key
        self._sync_viewport()
        if self.adapter.handle_textual_key(event.key) is not None:
            event.stop()

    def _update_document(self, mirror: BufferMirror) -> None:
        del mirror
        if self._document_widget and self.adapter:
            self._document_widget.update(self.adapter.render())
        if self._scroll and self.adapter:
            top = self.adapter.view.first_visible_line
            if top != int(self._scroll.scroll_y):
                self.call_after_refresh(self._scroll.scroll_to, y=top, animate=False)

    def _sync_viewport(self) -> None:
        # The view decides when to reveal; it needs the rows actually on screen.
        if not self._scroll or not self.adapter:
            return
        height = self._scroll.scrollable_content_region.height
        if height <= 0:
            return
        self.adapter.set_viewport(height, int(self._scroll.scroll_y))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the luminol Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        help="File to open (default: a built-in sample)",
    )
    parser.add_argument(
        "--select-matching",
        action="store_true",
        default=None,
        help="Select every occurrence when highlighting starts",
    )
    parser.add_argument(
        "--dim-opacity",
        type=float,
        default=None,
        help="Weight of non-matching text, 0..1",
    )
    parser.add_argument(
        "--no-overview",
        action="store_true",
        help="Hide the per-occurrence gutter markers",
    )
    parser.add_argument(
        "--telemetry-preset",
        default=os.environ.get("LUMINOL_TELEMETRY_PRESET"),
        choices=("development", "production", "performance"),
        help="Telemetry preset (default: environment-driven)",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> HighlightConfig:
    overrides: dict[str, object] = {}
    if args.select_matching is not None:
        overrides["select_matching"] = args.select_matching
    if args.dim_opacity is not None:
        overrides["dim_opacity"] = args.dim_opacity
    if args.no_overview:
        overrides["overview_markers"] = False
    return HighlightConfig.from_env().with_overrides(**overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.telemetry_preset:
        telemetry.configure(preset=args.telemetry_preset)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else SAMPLE_TEXT
    app = HighlightApp(text=text, config=build_config(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
