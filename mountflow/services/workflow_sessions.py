"""
Workflow Session Registry - hosts live mount workflows for the HTTP layer.

Each session owns one MountWorkflowController. The registry supplies the
controller's success/error callbacks and tears the controller down when the
session is closed.
"""

import asyncio
import uuid
from functools import partial
from typing import Dict, Optional, Union

from ..catalog.backend_catalog import BackendCatalog
from ..config import Settings
from ..core.exceptions import UnknownCategoryError, WorkflowNotFoundError
from ..core.resource_store import ResourceStore
from ..logging_config import get_app_logger
from ..models import MountCategory, WorkflowState
from .mount_workflow.controller import MountWorkflowController
from .notifications.base_sink import NotificationSink
from .wizard.base_wizard import WizardMachine


class WorkflowSessionRegistry:
    def __init__(
        self,
        settings: Settings,
        store: ResourceStore,
        wizard: WizardMachine,
        notifications: NotificationSink,
        catalog: BackendCatalog,
    ):
        self._logger = get_app_logger()
        self._settings = settings
        self._store = store
        self._wizard = wizard
        self._notifications = notifications
        self._catalog = catalog
        self._sessions: Dict[str, MountWorkflowController] = {}
        self._next_locations: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def open(self, category: Optional[Union[MountCategory, str]] = None) -> str:
        """Start a workflow session and return its id."""
        requested = category or self._settings.default_mount_category
        try:
            category = MountCategory(requested)
        except ValueError:
            raise UnknownCategoryError(str(requested))
        workflow_id = str(uuid.uuid4())
        controller = MountWorkflowController(
            store=self._store,
            wizard=self._wizard,
            notifications=self._notifications,
            catalog=self._catalog,
            category=category,
            on_mount_success=partial(self._handle_mount_success, workflow_id, category),
            on_config_error=partial(self._handle_config_error, workflow_id),
        )
        async with self._lock:
            self._sessions[workflow_id] = controller
        self._logger.info(f"Workflow {workflow_id} opened for {controller.category.value}")
        return workflow_id

    async def get(self, workflow_id: str) -> MountWorkflowController:
        async with self._lock:
            controller = self._sessions.get(workflow_id)
        if controller is None:
            raise WorkflowNotFoundError(workflow_id)
        return controller

    async def close(self, workflow_id: str) -> None:
        async with self._lock:
            controller = self._sessions.pop(workflow_id, None)
            self._next_locations.pop(workflow_id, None)
        if controller is None:
            raise WorkflowNotFoundError(workflow_id)
        controller.destroy()
        self._logger.info(f"Workflow {workflow_id} closed")

    async def close_all(self) -> int:
        async with self._lock:
            workflow_ids = list(self._sessions.keys())
        for workflow_id in workflow_ids:
            await self.close(workflow_id)
        return len(workflow_ids)

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)

    def snapshot(self, workflow_id: str, controller: MountWorkflowController) -> WorkflowState:
        mount = controller.mount
        config = controller.config
        return WorkflowState(
            id=workflow_id,
            category=controller.category,
            type=mount.get("type"),
            path=mount.get("path") or "",
            mount_id=mount.id,
            mount_is_new=mount.is_new,
            mount_errors=[e.message for e in mount.errors],
            config_type=config.model_name if config is not None else None,
            config_attributes=config.attributes if config is not None else {},
            show_config_panel=controller.show_config_panel,
            mount_phase_in_flight=controller.mount_phase_in_flight,
            config_phase_in_flight=controller.config_phase_in_flight,
            last_outcome=controller.last_outcome,
            next_location=self._next_locations.get(workflow_id),
        )

    async def _set_next_location(self, workflow_id: str, location: str) -> bool:
        async with self._lock:
            # A save can settle after its session was closed
            if workflow_id not in self._sessions:
                return False
            self._next_locations[workflow_id] = location
        return True

    async def _handle_mount_success(
        self, workflow_id: str, category: MountCategory, mount_type: str, path: str
    ) -> None:
        section = "secrets" if category == MountCategory.SECRET else "access"
        if await self._set_next_location(workflow_id, f"/vault/{section}/{path.strip('/')}"):
            self._logger.info(f"Workflow {workflow_id} mounted {mount_type} at {path}")

    async def _handle_config_error(self, workflow_id: str, mount_id: Optional[str]) -> None:
        if await self._set_next_location(workflow_id, f"/vault/settings/auth/configure/{mount_id}"):
            self._logger.warning(f"Workflow {workflow_id} mounted {mount_id} but its configuration failed")
