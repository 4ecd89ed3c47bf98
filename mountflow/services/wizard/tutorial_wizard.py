import logging
from typing import Any, Dict, List, Optional, Tuple

from ...models import WizardEvent
from .base_wizard import WizardMachine

C = WizardEvent.CONTINUE
R = WizardEvent.RESET

FEATURE_TRANSITIONS: Dict[str, Dict[str, Dict[WizardEvent, str]]] = {
    "secrets": {
        "idle": {C: "enable"},
        "enable": {C: "details", R: "idle"},
        "details": {C: "list", R: "idle"},
        "list": {C: "display", R: "idle"},
        "display": {C: "complete", R: "idle"},
        "complete": {},
    },
    "authentication": {
        "idle": {C: "enable"},
        "enable": {C: "config", R: "idle"},
        "config": {C: "details", R: "idle"},
        "details": {C: "complete", R: "idle"},
        "complete": {},
    },
    "replication": {
        "idle": {C: "setup"},
        "setup": {WizardEvent.ENABLEREPLICATION: "details", R: "idle"},
        "details": {C: "complete", R: "idle"},
        "complete": {},
    },
}

INITIAL_STATE = "idle"


class TutorialWizard(WizardMachine):
    """
    Reference wizard driving one feature tutorial at a time.

    Events that have no transition from the current state are ignored, the
    same way the tutorial UI ignores them.
    """

    def __init__(self, feature: str = "authentication"):
        self.feature: Optional[str] = None
        self.feature_state: Optional[str] = None
        self.component_state: Any = None
        self.extended_state: Any = None
        self.history: List[Tuple[str, WizardEvent, str, Any]] = []
        self.start_feature(feature)

    def start_feature(self, feature: str) -> None:
        if feature not in FEATURE_TRANSITIONS:
            raise ValueError(f"Unknown wizard feature '{feature}'")
        self.feature = feature
        self.feature_state = INITIAL_STATE
        self.extended_state = None
        logging.info(
            "TutorialWizard feature %s started with %s states",
            feature,
            len(FEATURE_TRANSITIONS[feature]),
        )

    def transition_feature_machine(
        self, current_state: Optional[str], event: WizardEvent, extended_state: Any = None
    ) -> None:
        try:
            event = WizardEvent(event)
        except ValueError:
            logging.warning(f"Wizard ignored unknown event {event!r}")
            return

        transitions = FEATURE_TRANSITIONS[self.feature]
        next_state = transitions.get(current_state or INITIAL_STATE, {}).get(event)
        if next_state is None:
            logging.debug(f"Wizard {self.feature}: no transition for {event.value} from {current_state}")
            return

        logging.info(f"Wizard {self.feature}: {current_state} -> {next_state} ({event.value}, {extended_state})")
        self.history.append((current_state, event, next_state, extended_state))
        self.feature_state = next_state
        self.extended_state = extended_state
