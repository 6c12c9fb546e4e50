"""FormattedContent widget tests using the Textual in-process harness."""

import pytest

from scriptmark.core.router import RenderPath
from scriptmark.formatting import SCRIPT_PROFILE
from scriptmark.sandbox.channel import MessageBus
from scriptmark.sandbox.config import SandboxConfig
from scriptmark.sandbox.messages import resize_message
from scriptmark.sandbox.scheduler import TextualScheduler
from scriptmark.sandbox.surface import SurfaceHandle
from tests.harness import run_preview

pytestmark = pytest.mark.textual


async def test_marker_text_uses_tokenizer_path():
    async with run_preview("OPENING:\n**Hello** world") as (pilot, app, widget):
        assert widget.active_path is RenderPath.TOKENIZER
        assert widget.frame is None
        assert [fl.line.text for fl in widget.document.lines] == ["OPENING", "**Hello** world"]


async def test_script_profile_is_applied():
    async with run_preview("# Intro", profile=SCRIPT_PROFILE) as (pilot, app, widget):
        assert widget.document.profile == "script"
        assert widget.document.lines[0].line.level == 3


async def test_rich_content_negotiates_height():
    config = SandboxConfig(line_height=20)
    async with run_preview("<p>Hello</p><p>World</p>", config=config) as (pilot, app, widget):
        assert widget.active_path is RenderPath.SANDBOX
        await pilot.pause(1.0)
        assert widget.frame.height == 40
        assert widget.styles.height.value == 2


async def test_switching_back_to_markers_closes_frame():
    async with run_preview("<p>Hello</p>") as (pilot, app, widget):
        frame = widget.frame
        widget.set_source("plain **text**")
        await pilot.pause()
        assert widget.frame is None
        assert frame.closed
        assert widget.active_path is RenderPath.TOKENIZER


async def test_zero_delay_bus_post_is_delivered():
    async with run_preview("plain") as (pilot, app, widget):
        bus = MessageBus(TextualScheduler(app))
        delivered = []
        bus.subscribe(delivered.append)
        source = SurfaceHandle("surface")
        bus.post(resize_message(40), source=source)
        bus.post(resize_message(60), source=source)
        await pilot.pause(0.2)
        assert [event.data["h"] for event in delivered] == [40, 60]
        assert all(event.source is source for event in delivered)
