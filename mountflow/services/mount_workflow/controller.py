"""
Mount Workflow Controller - mount-and-configure orchestration.

Owns one mount record for its whole lifetime. Type changes rebuild the
attached config record; ``mount_backend`` persists the mount and, for auth
methods, continues into ``configure_backend``. Each phase is a single-flight
task: overlapping calls are dropped, never queued.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ...catalog.backend_catalog import BackendCatalog
from ...core.config_resolver import resolve_config_type
from ...core.exceptions import InvalidFieldError, UnknownCategoryError, ValidationError
from ...core.resource_store import Record, ResourceStore
from ...core.single_flight import DropTask
from ...models import MountCategory, WizardEvent, WorkflowOutcome
from ..notifications.base_sink import NotificationSink
from ..wizard.base_wizard import WizardMachine

Callback = Callable[..., Union[None, Awaitable[None]]]

WIZARD_IDLE = "idle"


def _error_messages(error: Exception) -> List[str]:
    if isinstance(error, ValidationError):
        return error.messages
    return [str(error)]


class MountWorkflowController:
    def __init__(
        self,
        store: ResourceStore,
        wizard: WizardMachine,
        notifications: NotificationSink,
        catalog: BackendCatalog,
        category: Union[MountCategory, str] = MountCategory.AUTH,
        on_mount_success: Optional[Callback] = None,
        on_config_error: Optional[Callback] = None,
    ):
        try:
            self.category = MountCategory(category)
        except ValueError:
            raise UnknownCategoryError(str(category))

        self._store = store
        self._wizard = wizard
        self._notifications = notifications
        self._catalog = catalog
        self.on_mount_success = on_mount_success
        self.on_config_error = on_config_error

        self.selected_type: Optional[str] = None
        self.show_config_panel = False
        self.last_outcome: Optional[WorkflowOutcome] = None
        self.is_destroyed = False

        self._mount_task = DropTask("mount_backend")
        self._config_task = DropTask("configure_backend")
        self._mount: Optional[Record] = None
        self.initialize(self.category)

    def initialize(self, category: MountCategory) -> None:
        """Allocate the unsaved mount record. Runs once per controller."""
        if self._mount is not None:
            raise RuntimeError("Mount record is already initialized for this workflow")
        self._mount = self._store.create_record(
            category.model_name, type=None, path="", category=category.value
        )
        logging.debug(f"Mount workflow initialized for {category.value} ({category.model_name})")

    @property
    def mount(self) -> Record:
        return self._mount

    @property
    def config(self) -> Optional[Record]:
        """The config record currently attached to the mount."""
        return self._mount.config

    @property
    def mount_phase_in_flight(self) -> bool:
        return self._mount_task.is_running

    @property
    def config_phase_in_flight(self) -> bool:
        return self._config_task.is_running

    # Field changes

    def on_field_changed(self, field: str, value: Any) -> None:
        """Write a mount field; only a change of 'type' triggers reconciliation."""
        if field == "category":
            raise InvalidFieldError(field, "the category is fixed for the lifetime of a workflow")
        if field == "type" and value is not None and not isinstance(value, str):
            raise InvalidFieldError(field, f"expected a string or null, got {type(value).__name__}")
        if field == "path" and not isinstance(value, str):
            raise InvalidFieldError(field, f"expected a string, got {type(value).__name__}")
        self._mount.set(field, value)
        if field == "type":
            self.on_type_changed(value)

    def on_type_changed(self, new_type: Optional[str]) -> None:
        if self._mount.get("type") != new_type:
            self._mount.set("type", new_type)
        self.selected_type = new_type
        self._wizard.component_state = new_type
        self._change_config_model(new_type)
        self._check_path_change(new_type)

    def _change_config_model(self, method_type: Optional[str]) -> None:
        if self.category == MountCategory.SECRET:
            return

        current = self._mount.config
        if current is not None:
            current.rollback_attributes()
            current.unload_record()

        config_type = resolve_config_type(self.category, method_type)
        if config_type is None:
            logging.debug(f"No config required for {self.category.value} type {method_type}")
            return
        self._store.create_record(config_type, backend=self._mount)

    def _check_path_change(self, new_type: Optional[str]) -> None:
        if not new_type:
            return
        current_path = self._mount.get("path")
        # A path equal to a catalog type was auto-filled earlier, not typed by the user
        if not current_path or self._catalog.is_catalog_type(self.category, current_path):
            self._mount.set("path", new_type)

    def update_config(self, attributes: Dict[str, Any]) -> Record:
        """Edit the attached config record."""
        config = self._mount.config
        if config is None:
            raise InvalidFieldError("config", f"type {self._mount.get('type')!r} has no configuration")
        config.update(**attributes)
        return config

    def toggle_config_panel(self, visible: bool) -> None:
        self.show_config_panel = visible
        mount_type = self._mount.get("type")
        if visible and self._wizard.feature_state == WIZARD_IDLE:
            event = WizardEvent.CONTINUE
        else:
            event = WizardEvent.RESET
        self._wizard.transition_feature_machine(self._wizard.feature_state, event, mount_type)

    # Tasks

    async def mount_backend(self) -> Optional[WorkflowOutcome]:
        """
        Persist the mount, then run the config phase for auth methods.

        Returns:
            The outcome, or None when a previous call has not settled yet.
        """
        outcome = await self._mount_task.perform(self._mount_backend)
        if outcome is not None:
            self.last_outcome = outcome
        return outcome

    async def _mount_backend(self) -> WorkflowOutcome:
        mount = self._mount
        mount_type = mount.get("type")
        path = mount.get("path")

        try:
            await mount.save()
        except ValidationError as e:
            # Field errors stay on mount.errors for the form to show
            logging.info(
                f"Mount of {mount_type} at {path} rejected: {e}",
                extra={"operation": "mount_backend", "category": self.category.value},
            )
            return WorkflowOutcome(errors=e.messages)
        except Exception as e:
            logging.error(f"Unexpected error mounting {mount_type} at {path}: {e}", exc_info=True)
            return WorkflowOutcome(errors=[str(e)])

        self._notifications.success(
            f"Successfully mounted {mount_type} {self.category.value} method at {path}."
        )

        if self.category == MountCategory.SECRET:
            callback_errors = await self._invoke_callback(self.on_mount_success, mount_type, path)
            return WorkflowOutcome(succeeded=True, mount_persisted=True, errors=callback_errors)

        outcome = await self.configure_backend(mount)
        if outcome is None:
            logging.warning(f"Config phase for {path} already running, mount saved without it")
            return WorkflowOutcome(mount_persisted=True)
        return outcome

    async def configure_backend(self, mount: Record) -> Optional[WorkflowOutcome]:
        """
        Persist the mount's config record when it has changes.

        Returns:
            The outcome, or None when a previous call has not settled yet.
        """
        return await self._config_task.perform(self._configure_backend, mount)

    async def _configure_backend(self, mount: Record) -> WorkflowOutcome:
        config = mount.config
        mount_type = mount.get("type")
        path = mount.get("path")
        config_persisted = False

        if config is not None and config.changed_attributes():
            try:
                await config.save()
            except Exception as e:
                messages = _error_messages(e)
                logging.warning(
                    f"Config save for {mount_type} at {path} failed: {messages}",
                    exc_info=not isinstance(e, ValidationError),
                )
                self._notifications.danger(
                    f"There was an error saving the configuration for {mount_type} {self.category.value} method at {path}. "
                    f"{' '.join(messages)}"
                )
                callback_errors = await self._invoke_callback(self.on_config_error, mount.id)
                # The mount already exists server-side and is kept
                return WorkflowOutcome(
                    mount_persisted=not mount.is_new,
                    errors=messages + callback_errors,
                )

            config_persisted = True
            self._wizard.transition_feature_machine(
                self._wizard.feature_state, WizardEvent.CONTINUE, mount_type
            )
            self._notifications.success(
                f"The config for {mount_type} {self.category.value} method at {path} was saved successfully."
            )
        else:
            logging.debug(f"No config changes for {mount_type} at {path}, skipping save")

        callback_errors = await self._invoke_callback(self.on_mount_success, mount_type, path)
        return WorkflowOutcome(
            succeeded=True,
            mount_persisted=not mount.is_new,
            config_persisted=config_persisted,
            errors=callback_errors,
        )

    async def _invoke_callback(self, callback: Optional[Callback], *args: Any) -> List[str]:
        if callback is None:
            return []
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            name = getattr(callback, "__name__", repr(callback))
            logging.error(f"Workflow callback {name} failed: {e}", exc_info=True)
            return [str(e)]
        return []

    # Teardown

    def destroy(self) -> None:
        """Roll back unsaved mount edits; a never-saved mount leaves the store."""
        if self.is_destroyed:
            return
        config = self._mount.config
        self._mount.rollback_attributes()
        if config is not None and config.is_new:
            config.rollback_attributes()
        self.is_destroyed = True
        logging.debug(f"Mount workflow for {self._mount.get('path')!r} torn down")
