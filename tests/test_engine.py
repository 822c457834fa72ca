"""Tests for the DialogueEngine transitions and free-text rules."""

import pytest

from smarthome_support.data.troubleshooting_steps import (
    ESCALATION_MESSAGE,
    FALLBACK_MESSAGE,
    RESOLVED_MESSAGE,
)
from smarthome_support.domain.models import ESCALATE, RESOLVE, FreeTextRule, Option
from smarthome_support.execution.engine import DialogueEngine, UnknownStepError

ALL_STATES = [None] + list(range(1, 13))


# ── start ────────────────────────────────────────────────


def test_start_offers_root_step(engine, catalog):
    turn = engine.start()
    assert turn.message == catalog.root.text
    assert turn.options == catalog.root.options
    assert turn.next_step_id == 1
    assert turn.escalate is False


# ── advance: numeric outcomes ────────────────────────────


def test_advance_to_step(engine, catalog):
    turn = engine.advance(1, 2)
    assert turn.message == catalog.get(2).text
    assert turn.options == catalog.get(2).options
    assert turn.next_step_id == 2
    assert turn.escalate is False


def test_advance_follows_declared_outcome_from_deep_step(engine, catalog):
    # Step 9 "That didn't solve the issue" leads to step 8
    outcome = catalog.get(9).options[1].outcome
    turn = engine.advance(9, outcome)
    assert turn.next_step_id == 8
    assert turn.message.startswith("If you've already restarted the hub")


def test_advance_unknown_step_raises(engine):
    with pytest.raises(UnknownStepError) as excinfo:
        engine.advance(1, 99)
    assert excinfo.value.step_id == 99


def test_advance_unknown_sentinel_raises(engine):
    with pytest.raises(UnknownStepError):
        engine.advance(1, "restart")


def test_advance_rejects_bool(engine):
    with pytest.raises(UnknownStepError):
        engine.advance(1, True)


# ── advance: universal transitions ───────────────────────


@pytest.mark.parametrize("current", ALL_STATES)
def test_resolve_always_returns_to_root(engine, catalog, current):
    turn = engine.advance(current, RESOLVE)
    assert turn.message == RESOLVED_MESSAGE
    assert turn.next_step_id == catalog.root_step_id
    assert turn.options == catalog.root.options
    assert turn.escalate is False


@pytest.mark.parametrize("current", ALL_STATES)
def test_escalate_always_terminates(engine, current):
    turn = engine.advance(current, ESCALATE)
    assert turn.escalate is True
    assert turn.next_step_id is None
    assert turn.options is None
    assert turn.message == ESCALATION_MESSAGE


# ── free_text ────────────────────────────────────────────


def test_free_text_wifi(engine):
    turn = engine.free_text("my wifi is broken")
    assert turn.message == "I see you're having Wi-Fi issues. Let's troubleshoot that."
    assert "My hub won't connect to Wi-Fi" in [opt.text for opt in turn.options]
    assert turn.next_step_id == 2


def test_free_text_keyword_is_case_insensitive(engine):
    turn = engine.free_text("The Wi-Fi light keeps BLINKING")
    assert turn.next_step_id == 2


def test_free_text_device(engine):
    turn = engine.free_text("My new device won't pair")
    assert turn.message.startswith("I understand you're having issues with your devices")
    assert [opt.outcome for opt in turn.options] == [4, 10, 11]
    assert turn.next_step_id == 4


def test_free_text_unresponsive_hub(engine):
    turn = engine.free_text("the hub is frozen")
    assert turn.next_step_id == 3


def test_free_text_first_rule_wins(engine):
    # Both "device" and "wifi" appear; the wifi rule is listed first
    turn = engine.free_text("my device dropped off wifi")
    assert turn.next_step_id == 2


def test_free_text_fallback(engine, catalog):
    turn = engine.free_text("hello?")
    assert turn.message == FALLBACK_MESSAGE
    assert turn.options == catalog.root.options
    assert turn.next_step_id == 1


def test_free_text_never_escalates(engine):
    assert engine.free_text("I want a human").escalate is False


def test_custom_rule_table(catalog):
    rules = [
        FreeTextRule(
            keywords=("factory",),
            response="Let's talk about a factory reset.",
            options=(Option(text="Go ahead", outcome=12),),
            anchor_step_id=12,
        ),
    ]
    custom = DialogueEngine(catalog, free_text_rules=rules)
    assert custom.free_text("How do I factory reset?").next_step_id == 12
    # The default wifi rule is gone
    assert custom.free_text("wifi").message == FALLBACK_MESSAGE


def test_rule_pointing_outside_catalog_rejected(catalog):
    rules = [
        FreeTextRule(
            keywords=("x",),
            response="x",
            options=(Option(text="x", outcome=50),),
            anchor_step_id=1,
        ),
    ]
    with pytest.raises(ValueError, match="missing step 50"):
        DialogueEngine(catalog, free_text_rules=rules)
