from .controller import MountWorkflowController

__all__ = ["MountWorkflowController"]
