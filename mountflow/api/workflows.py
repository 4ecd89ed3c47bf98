import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.exceptions import InvalidFieldError, UnknownCategoryError, WorkflowNotFoundError
from ..dependencies import get_workflow_registry
from ..models import (
    ConfigPanelRequest,
    ConfigUpdateRequest,
    FieldChangeRequest,
    WorkflowCreateRequest,
    WorkflowOutcome,
    WorkflowState,
)
from ..services.mount_workflow.controller import MountWorkflowController
from ..services.workflow_sessions import WorkflowSessionRegistry

router = APIRouter(prefix="/api/workflows", tags=["workflows"])


async def _controller(registry: WorkflowSessionRegistry, workflow_id: str) -> MountWorkflowController:
    try:
        return await registry.get(workflow_id)
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=WorkflowState, status_code=status.HTTP_201_CREATED)
async def open_workflow(
    request: WorkflowCreateRequest,
    registry: WorkflowSessionRegistry = Depends(get_workflow_registry),
) -> WorkflowState:
    """Open a mount workflow with a fresh, unsaved mount."""
    try:
        workflow_id = await registry.open(request.category)
    except UnknownCategoryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    controller = await registry.get(workflow_id)
    return registry.snapshot(workflow_id, controller)


@router.get("/{workflow_id}", response_model=WorkflowState)
async def get_workflow(
    workflow_id: str,
    registry: WorkflowSessionRegistry = Depends(get_workflow_registry),
) -> WorkflowState:
    controller = await _controller(registry, workflow_id)
    return registry.snapshot(workflow_id, controller)


@router.patch("/{workflow_id}/fields", response_model=WorkflowState)
async def change_field(
    workflow_id: str,
    request: FieldChangeRequest,
    registry: WorkflowSessionRegistry = Depends(get_workflow_registry),
) -> WorkflowState:
    """Write a mount field. Changing 'type' rebuilds the config and may refill the path."""
    controller = await _controller(registry, workflow_id)
    try:
        controller.on_field_changed(request.field, request.value)
    except InvalidFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return registry.snapshot(workflow_id, controller)


@router.patch("/{workflow_id}/config", response_model=WorkflowState)
async def update_config(
    workflow_id: str,
    request: ConfigUpdateRequest,
    registry: WorkflowSessionRegistry = Depends(get_workflow_registry),
) -> WorkflowState:
    controller = await _controller(registry, workflow_id)
    try:
        controller.update_config(request.attributes)
    except InvalidFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return registry.snapshot(workflow_id, controller)


@router.put("/{workflow_id}/config-panel", response_model=WorkflowState)
async def toggle_config_panel(
    workflow_id: str,
    request: ConfigPanelRequest,
    registry: WorkflowSessionRegistry = Depends(get_workflow_registry),
) -> WorkflowState:
    controller = await _controller(registry, workflow_id)
    controller.toggle_config_panel(request.visible)
    return registry.snapshot(workflow_id, controller)


@router.post("/{workflow_id}/mount", response_model=WorkflowOutcome)
async def mount_backend(
    workflow_id: str,
    registry: WorkflowSessionRegistry = Depends(get_workflow_registry),
) -> WorkflowOutcome:
    """
    Persist the mount and, for auth methods, its configuration.

    HTTP Status Codes:
        200: Sequence ran; check the outcome for partial success
        404: Unknown workflow
        409: A mount for this workflow is already in progress
    """
    controller = await _controller(registry, workflow_id)
    outcome = await controller.mount_backend()
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Mount for workflow {workflow_id} is already in progress",
        )
    logging.info(
        f"Workflow {workflow_id} mount finished: succeeded={outcome.succeeded}",
        extra={"operation": "api_mount", "workflow_id": workflow_id},
    )
    return outcome


@router.delete("/{workflow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_workflow(
    workflow_id: str,
    registry: WorkflowSessionRegistry = Depends(get_workflow_registry),
) -> Response:
    """Tear the workflow down, discarding a mount that was never saved."""
    try:
        await registry.close(workflow_id)
    except WorkflowNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
