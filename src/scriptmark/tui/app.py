"""Textual preview app: one scrollable FormattedContent."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Footer

from scriptmark.formatting import CONTENT_PROFILE, FormatProfile
from scriptmark.sandbox.config import SandboxConfig
from scriptmark.tui.widgets import FormattedContent


class PreviewApp(App):
    TITLE = "scriptmark"
    BINDINGS = [("q", "quit", "Quit")]
    CSS = """
    #preview {
        padding: 0 1;
    }
    """

    def __init__(
        self,
        source: str,
        profile: FormatProfile = CONTENT_PROFILE,
        config: SandboxConfig | None = None,
    ):
        super().__init__()
        self._source = source
        self._profile = profile
        self._config = config

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="preview"):
            yield FormattedContent(self._source, profile=self._profile, config=self._config, id="content")
        yield Footer()
