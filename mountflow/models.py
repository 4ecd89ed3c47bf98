from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MountCategory(str, Enum):
    """Whether a mount is an auth method or a secret engine."""

    AUTH = "auth"
    SECRET = "secret"

    @property
    def model_name(self) -> str:
        """Resource model used for a mount of this category."""
        return "secret-engine" if self is MountCategory.SECRET else "auth-method"


class WizardEvent(str, Enum):
    """Events the mount workflow reports to the tutorial wizard"""

    CONTINUE = "CONTINUE"
    RESET = "RESET"
    ENABLEREPLICATION = "ENABLEREPLICATION"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    DANGER = "danger"


class BackendGroup(str, Enum):
    GENERIC = "generic"
    CLOUD = "cloud"
    INFRA = "infra"


class BackendTypeInfo(BaseModel):
    """Catalog entry for a mountable secret engine or auth method."""

    type: str = Field(..., description="Backend type identifier, e.g. 'kv' or 'aws'")
    display_name: str = Field(..., description="Human readable name")
    category: MountCategory = Field(..., description="auth or secret")
    group: BackendGroup = Field(default=BackendGroup.GENERIC, description="Grouping in the catalog")


class Notification(BaseModel):
    level: NotificationLevel
    message: str
    created_at: datetime = Field(default_factory=datetime.now)


class WorkflowOutcome(BaseModel):
    """
    Result of a mount/configure sequence.

    Never persisted. Callers use it to decide what to show next; a mount can be
    persisted while its configuration failed (partial success).
    """

    succeeded: bool = Field(default=False)
    mount_persisted: bool = Field(default=False)
    config_persisted: bool = Field(default=False)
    errors: List[str] = Field(default_factory=list)


# HTTP request/response bodies


class WorkflowCreateRequest(BaseModel):
    category: Optional[MountCategory] = Field(
        default=None, description="Defaults to Settings.default_mount_category"
    )


class FieldChangeRequest(BaseModel):
    field: str = Field(..., description="Mount field name, e.g. 'type' or 'path'")
    value: Any = None


class ConfigUpdateRequest(BaseModel):
    attributes: Dict[str, Any] = Field(default_factory=dict)


class ConfigPanelRequest(BaseModel):
    visible: bool


class WorkflowState(BaseModel):
    """Snapshot of a live workflow session."""

    id: str
    category: MountCategory
    type: Optional[str] = None
    path: str = ""
    mount_id: Optional[str] = None
    mount_is_new: bool = True
    mount_errors: List[str] = Field(default_factory=list)
    config_type: Optional[str] = None
    config_attributes: Dict[str, Any] = Field(default_factory=dict)
    show_config_panel: bool = False
    mount_phase_in_flight: bool = False
    config_phase_in_flight: bool = False
    last_outcome: Optional[WorkflowOutcome] = None
    next_location: Optional[str] = None
