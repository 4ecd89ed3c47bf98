from functools import lru_cache
from typing import Any, Dict

from .catalog.backend_catalog import BackendCatalog
from .config import Settings
from .core.in_memory_adapter import InMemoryAdapter
from .core.resource_store import ResourceAdapter, ResourceStore
from .services.notifications.flash_messages import FlashMessageService
from .services.wizard.tutorial_wizard import TutorialWizard
from .services.workflow_sessions import WorkflowSessionRegistry

# Global singleton instances
_singletons: Dict[str, Any] = {}


@lru_cache
def get_settings() -> Settings:
    """Return the Settings singleton."""
    return Settings()


def get_resource_adapter() -> ResourceAdapter:
    if "resource_adapter" not in _singletons:
        _singletons["resource_adapter"] = InMemoryAdapter(
            seed_default_mounts=get_settings().seed_default_mounts
        )
    return _singletons["resource_adapter"]


def get_resource_store() -> ResourceStore:
    if "resource_store" not in _singletons:
        _singletons["resource_store"] = ResourceStore(get_resource_adapter())
    return _singletons["resource_store"]


def get_backend_catalog() -> BackendCatalog:
    if "backend_catalog" not in _singletons:
        _singletons["backend_catalog"] = BackendCatalog()
    return _singletons["backend_catalog"]


def get_wizard() -> TutorialWizard:
    if "wizard" not in _singletons:
        _singletons["wizard"] = TutorialWizard(feature=get_settings().wizard_feature)
    return _singletons["wizard"]


def get_flash_messages() -> FlashMessageService:
    if "flash_messages" not in _singletons:
        _singletons["flash_messages"] = FlashMessageService(
            max_notifications=get_settings().max_notifications
        )
    return _singletons["flash_messages"]


def get_workflow_registry() -> WorkflowSessionRegistry:
    if "workflow_registry" not in _singletons:
        _singletons["workflow_registry"] = WorkflowSessionRegistry(
            settings=get_settings(),
            store=get_resource_store(),
            wizard=get_wizard(),
            notifications=get_flash_messages(),
            catalog=get_backend_catalog(),
        )
    return _singletons["workflow_registry"]


def reset_singletons() -> None:
    _singletons.clear()
