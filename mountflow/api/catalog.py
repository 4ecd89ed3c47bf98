from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from ..catalog.backend_catalog import BackendCatalog
from ..core.resource_store import ResourceStore
from ..dependencies import get_backend_catalog, get_flash_messages, get_resource_store
from ..models import BackendTypeInfo, MountCategory, Notification, NotificationLevel
from ..services.notifications.flash_messages import FlashMessageService

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/catalog/{category}", response_model=List[BackendTypeInfo])
async def list_backend_types(
    category: MountCategory,
    catalog: BackendCatalog = Depends(get_backend_catalog),
) -> List[BackendTypeInfo]:
    """Mountable backend types for a category."""
    return catalog.types_for(category)


@router.get("/mounts/{category}")
async def list_mounts(
    category: MountCategory,
    store: ResourceStore = Depends(get_resource_store),
) -> List[Dict[str, Any]]:
    """Mounts that have been persisted for a category."""
    return await store.find_all(category.model_name)


@router.get("/notifications", response_model=List[Notification])
async def list_notifications(
    level: Optional[NotificationLevel] = None,
    flash_messages: FlashMessageService = Depends(get_flash_messages),
) -> List[Notification]:
    return flash_messages.get_recent(level)
