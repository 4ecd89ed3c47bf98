"""
Tests for the TutorialWizard reference state machine.
"""

import pytest

from mountflow.models import WizardEvent
from mountflow.services.wizard.tutorial_wizard import FEATURE_TRANSITIONS, TutorialWizard


def test_starts_idle():
    wizard = TutorialWizard("secrets")
    assert wizard.feature == "secrets"
    assert wizard.feature_state == "idle"


def test_unknown_feature_is_rejected():
    with pytest.raises(ValueError):
        TutorialWizard("plugins")


def test_authentication_walkthrough():
    wizard = TutorialWizard("authentication")
    for expected in ["enable", "config", "details", "complete"]:
        wizard.transition_feature_machine(wizard.feature_state, WizardEvent.CONTINUE, "github")
        assert wizard.feature_state == expected
    assert wizard.extended_state == "github"
    assert len(wizard.history) == 4


def test_reset_returns_to_idle():
    wizard = TutorialWizard("authentication")
    wizard.transition_feature_machine("idle", WizardEvent.CONTINUE, "aws")
    wizard.transition_feature_machine(wizard.feature_state, WizardEvent.RESET, "aws")
    assert wizard.feature_state == "idle"


def test_event_without_transition_is_ignored():
    wizard = TutorialWizard("authentication")
    wizard.transition_feature_machine("idle", WizardEvent.RESET, "aws")
    assert wizard.feature_state == "idle"
    assert wizard.history == []


def test_unknown_event_string_is_ignored():
    wizard = TutorialWizard("secrets")
    wizard.transition_feature_machine("idle", "JUMP", "kv")
    assert wizard.feature_state == "idle"


def test_replication_uses_enable_event():
    wizard = TutorialWizard("replication")
    wizard.transition_feature_machine("idle", "CONTINUE")
    wizard.transition_feature_machine(wizard.feature_state, WizardEvent.ENABLEREPLICATION)
    assert wizard.feature_state == "details"


def test_start_feature_resets_state():
    wizard = TutorialWizard("secrets")
    wizard.transition_feature_machine("idle", WizardEvent.CONTINUE, "kv")
    wizard.start_feature("authentication")
    assert wizard.feature_state == "idle"
    assert wizard.extended_state is None


def test_complete_is_terminal():
    for feature, states in FEATURE_TRANSITIONS.items():
        assert states["complete"] == {}, feature
