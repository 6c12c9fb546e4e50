"""Tests for HeightChannel: trust boundary, noise rejection, debounce, scroll suppression."""

import dataclasses

import pytest

from scriptmark.sandbox.channel import ChannelPhase, HeightChannel, MessageBus
from scriptmark.sandbox.config import SandboxConfig
from scriptmark.sandbox.messages import MessageEvent, parse_resize_message, resize_message
from scriptmark.sandbox.surface import SurfaceHandle


@pytest.fixture
def handle():
    return SurfaceHandle("mine")


@pytest.fixture
def applied():
    return []


@pytest.fixture
def channel(handle, scheduler, applied):
    return HeightChannel(handle, scheduler, on_apply=applied.append, config=SandboxConfig())


def report(channel, source, h):
    channel.on_message(MessageEvent(source=source, data=resize_message(h)))


# ─── Debounce ────────────────────────────────────────────────────────────────


def test_burst_applies_last_height_once(channel, handle, scheduler, applied):
    report(channel, handle, 610)
    scheduler.advance(0.03)
    report(channel, handle, 640)
    scheduler.advance(0.03)
    report(channel, handle, 655)
    assert channel.phase is ChannelPhase.DEBOUNCE_PENDING
    assert applied == []
    scheduler.advance(0.2)
    assert applied == [655]
    assert channel.height == 655
    assert channel.state.pending_height is None
    assert channel.phase is ChannelPhase.IDLE


def test_reports_in_separate_windows_each_apply(channel, handle, scheduler, applied):
    report(channel, handle, 300)
    scheduler.advance(0.2)
    report(channel, handle, 400)
    scheduler.advance(0.2)
    assert applied == [300, 400]


def test_initial_height_is_fallback(channel):
    assert channel.height == 600
    assert channel.phase is ChannelPhase.IDLE


# ─── Noise ───────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("h", [598, 599, 600, 601, 602])
def test_noise_is_dropped_without_state_change(channel, handle, scheduler, applied, h):
    before = dataclasses.replace(channel.state)
    report(channel, handle, h)
    assert channel.state == before
    assert channel.phase is ChannelPhase.IDLE
    scheduler.advance(1.0)
    assert applied == []


def test_just_outside_noise_is_accepted(channel, handle, scheduler, applied):
    report(channel, handle, 603)
    scheduler.advance(0.2)
    assert applied == [603]


# ─── Trust boundary ──────────────────────────────────────────────────────────


@pytest.mark.parametrize("source", [None, "mine", SurfaceHandle("mine"), object()])
def test_foreign_source_never_updates_state(channel, scheduler, applied, source):
    before = dataclasses.replace(channel.state)
    report(channel, source, 900)
    scheduler.advance(1.0)
    assert channel.state == before
    assert applied == []


def test_foreign_surface_on_shared_bus_is_ignored(handle, scheduler, applied):
    bus = MessageBus(scheduler)
    channel = HeightChannel(handle, scheduler, on_apply=applied.append)
    bus.subscribe(channel.on_message)
    intruder = bus.port(SurfaceHandle("intruder"))
    mine = bus.port(handle)

    intruder(resize_message(900))
    scheduler.advance(0.5)
    assert applied == []

    mine(resize_message(250))
    scheduler.advance(0.5)
    assert applied == [250]


# ─── Wire format ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "data",
    [
        None,
        "HTML_FRAME_RESIZE",
        {"type": "RESIZE", "h": 900},
        {"type": "HTML_FRAME_RESIZE"},
        {"type": "HTML_FRAME_RESIZE", "h": "900"},
        {"type": "HTML_FRAME_RESIZE", "h": True},
        {"type": "HTML_FRAME_RESIZE", "h": float("nan")},
        ["HTML_FRAME_RESIZE", 900],
    ],
)
def test_unrecognized_shapes_are_ignored(channel, handle, scheduler, applied, data):
    assert parse_resize_message(data) is None
    channel.on_message(MessageEvent(source=handle, data=data))
    scheduler.advance(1.0)
    assert applied == []


def test_float_heights_are_accepted():
    assert parse_resize_message({"type": "HTML_FRAME_RESIZE", "h": 12.5}) == 12.5


# ─── Host scrolling ──────────────────────────────────────────────────────────


def test_reports_dropped_while_host_scrolls(channel, handle, scheduler, applied):
    channel.on_host_scroll()
    assert channel.phase is ChannelPhase.SCROLLING
    report(channel, handle, 800)
    scheduler.advance(0.1)
    channel.on_host_scroll()
    report(channel, handle, 820)
    scheduler.advance(0.2)
    assert channel.phase is ChannelPhase.IDLE
    assert applied == []

    report(channel, handle, 830)
    scheduler.advance(0.2)
    assert applied == [830]


def test_accepted_report_survives_later_scroll(channel, handle, scheduler, applied):
    report(channel, handle, 700)
    channel.on_host_scroll()
    scheduler.advance(0.2)
    assert applied == [700]


# ─── Lifecycle ───────────────────────────────────────────────────────────────


def test_reset_cancels_pending_apply(channel, handle, scheduler, applied):
    report(channel, handle, 700)
    channel.reset("abc")
    assert channel.state.pending_height is None
    assert channel.state.content_fingerprint == "abc"
    scheduler.advance(1.0)
    assert applied == []
    assert channel.height == 600


def test_reset_keeps_host_scroll_in_progress(channel, handle, scheduler, applied):
    channel.on_host_scroll()
    scheduler.advance(0.05)
    channel.reset("abc")
    assert channel.state.is_scrolling
    report(channel, handle, 700)  # mid-gesture
    scheduler.advance(0.2)
    assert channel.phase is ChannelPhase.IDLE
    assert applied == []

    report(channel, handle, 720)
    scheduler.advance(0.2)
    assert applied == [720]


def test_teardown_prevents_late_apply(channel, handle, scheduler, applied):
    report(channel, handle, 700)
    channel.teardown()
    scheduler.advance(1.0)
    report(channel, handle, 800)
    scheduler.advance(1.0)
    assert applied == []
    assert scheduler.pending_count() == 0
