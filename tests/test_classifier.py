"""Tests for scriptmark.core.classifier: line roles for both call sites."""

import pytest

from scriptmark.core.classifier import (
    SCRIPT_LINE_RULES,
    Line,
    LineRole,
    classify,
)


CONTENT_CASES = [
    pytest.param("1. Introduce yourself", LineRole.HEADING, 3, "1. Introduce yourself", id="numbered"),
    pytest.param("OPENING:", LineRole.HEADING, 3, "OPENING", id="caps-colon"),
    pytest.param("## KEY POINTS", LineRole.HEADING, 3, "KEY POINTS", id="marked-caps"),
    pytest.param("**BIG TITLE**", LineRole.HEADING, 3, "BIG TITLE**", id="marked-caps-keeps-trailing"),
    pytest.param("Stage 2: Discovery", LineRole.STEP_LABEL, 4, "Stage 2: Discovery", id="stage"),
    pytest.param("step 3 - wrap up", LineRole.STEP_LABEL, 4, "step 3 - wrap up", id="step-lower"),
    pytest.param("Phase 10 rollout", LineRole.STEP_LABEL, 4, "Phase 10 rollout", id="phase"),
    pytest.param("**Objections**", LineRole.HEADING, 5, "Objections", id="bold-line"),
    pytest.param("Next steps:", LineRole.HEADING, 5, "Next steps", id="short-colon"),
    pytest.param("", LineRole.SPACER, 0, "", id="empty"),
    pytest.param("   ", LineRole.SPACER, 0, "", id="whitespace"),
    pytest.param("Hello there", LineRole.PARAGRAPH, 0, "Hello there", id="paragraph"),
]


@pytest.mark.parametrize("raw, role, level, text", CONTENT_CASES)
def test_content_classification(raw, role, level, text):
    line = classify(raw)
    assert line.raw == raw
    assert (line.role, line.level, line.text) == (role, level, text)


def test_shouted_stage_is_not_a_step_label():
    line = classify("STAGE 2: DISCOVERY")
    assert line.role is not LineRole.STEP_LABEL
    assert line.role is LineRole.PARAGRAPH


def test_numbered_item_needs_capital():
    assert classify("1. call back later").role is LineRole.PARAGRAPH


@pytest.mark.parametrize(
    "raw",
    [
        pytest.param("١. Hello", id="arabic-indic-digit"),
        pytest.param("ſtep 1 x", id="long-s"),
        pytest.param("Step ٣ wrap up", id="non-ascii-step-number"),
    ],
)
def test_structural_cues_are_ascii_only(raw):
    assert classify(raw).role is LineRole.PARAGRAPH


def test_colon_line_with_period_is_paragraph():
    assert classify("Note: call back at 5 p.m.:").role is LineRole.PARAGRAPH


def test_long_colon_line_is_paragraph():
    raw = "This is a rather long lead-in sentence that keeps going on and on:"
    assert len(raw) >= 60
    assert classify(raw).role is LineRole.PARAGRAPH


def test_numbered_item_wins_over_short_colon():
    line = classify("2. Ask about budget:")
    assert (line.role, line.level, line.text) == (LineRole.HEADING, 3, "2. Ask about budget:")


# ─── Script call site ────────────────────────────────────────────────────────


SCRIPT_CASES = [
    pytest.param("**Welcome**", Line("**Welcome**", LineRole.HEADING, 2, "Welcome"), id="title"),
    pytest.param("# Intro", Line("# Intro", LineRole.HEADING, 3, "Intro"), id="section"),
    pytest.param("", Line("", LineRole.SPACER), id="spacer"),
    pytest.param("OPENING:", Line("OPENING:", LineRole.PARAGRAPH, 0, "OPENING:"), id="caps-is-paragraph"),
    pytest.param("#Intro", Line("#Intro", LineRole.PARAGRAPH, 0, "#Intro"), id="hash-needs-space"),
]


@pytest.mark.parametrize("raw, expected", SCRIPT_CASES)
def test_script_classification(raw, expected):
    assert classify(raw, SCRIPT_LINE_RULES) == expected
