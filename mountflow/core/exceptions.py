# mountflow/core/exceptions.py

from typing import List, NamedTuple


class FieldError(NamedTuple):
    field: str
    message: str


class ValidationError(Exception):
    """Raised by a resource adapter when a record fails server-side validation."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]


class UnknownCategoryError(ValueError):
    """Raised when a mount category is neither 'auth' nor 'secret'."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown mount category '{category}'. Expected 'auth' or 'secret'.")


class InvalidFieldError(ValueError):
    """Raised when a workflow field cannot be written."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Cannot change field '{field}': {reason}")


class WorkflowNotFoundError(KeyError):
    """Raised when a workflow session id is not registered."""

    def __init__(self, workflow_id: str):
        self.workflow_id = workflow_id
        super().__init__(f"Workflow {workflow_id} not found")

    def __str__(self) -> str:
        return f"Workflow {self.workflow_id} not found"
