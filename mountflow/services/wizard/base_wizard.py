"""Abstract wizard interface the mount workflow reports progress to."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ...models import WizardEvent


class WizardMachine(ABC):
    """
    Guided-tutorial state machine.

    The workflow only reports events; the machine owns its transition table.
    """

    feature_state: Optional[str] = None
    component_state: Any = None

    @abstractmethod
    def transition_feature_machine(
        self, current_state: Optional[str], event: WizardEvent, extended_state: Any = None
    ) -> None:
        """Fire-and-forget transition of the active feature machine."""
        pass
