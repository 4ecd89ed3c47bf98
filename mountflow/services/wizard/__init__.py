from .base_wizard import WizardMachine
from .tutorial_wizard import TutorialWizard, FEATURE_TRANSITIONS

__all__ = ["WizardMachine", "TutorialWizard", "FEATURE_TRANSITIONS"]
