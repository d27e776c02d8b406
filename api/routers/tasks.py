"""API router for monitoring tasks."""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_watch_service
from core.log import get_logger
from core.models.api.requests import TaskConfigRequest
from core.models.api.responses import (
    TaskActionResponse,
    TaskListResponse,
    TaskResponse,
)
from core.models.domain.task import TaskConfig
from core.services.watch_service import WatchService

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/tasks", tags=["tasks"])


def _to_config(request: TaskConfigRequest) -> TaskConfig:
    return TaskConfig.model_validate(request.model_dump())


def _task_response(service: WatchService, index: int) -> TaskResponse:
    supervisor = service.supervisor
    task_status = supervisor.state(index)
    if task_status is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {index} not found",
        )
    return TaskResponse(
        index=index,
        config=supervisor.configs[index],
        status=task_status,
        running=supervisor.is_running(index),
        stats=supervisor.stats(index),
    )


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    service: WatchService = Depends(get_watch_service),
) -> TaskListResponse:
    """List every task with its status."""
    tasks = [
        _task_response(service, index) for index in range(len(service.supervisor))
    ]
    return TaskListResponse(tasks=tasks, total_count=len(tasks))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    request: TaskConfigRequest,
    service: WatchService = Depends(get_watch_service),
) -> TaskResponse:
    """Add a task. New tasks start stopped."""
    index = await service.add_task(_to_config(request))
    logger.info(f"Created task #{index + 1}: {request.name}")
    return _task_response(service, index)


@router.delete("/run", response_model=TaskActionResponse)
async def stop_all_tasks(
    service: WatchService = Depends(get_watch_service),
) -> TaskActionResponse:
    """Stop every running task."""
    await service.stop_all()
    return TaskActionResponse(message="All tasks stopped")


@router.get("/{index}", response_model=TaskResponse)
async def get_task(
    index: int,
    service: WatchService = Depends(get_watch_service),
) -> TaskResponse:
    """Get one task."""
    return _task_response(service, index)


@router.put("/{index}", response_model=TaskResponse)
async def update_task(
    index: int,
    request: TaskConfigRequest,
    service: WatchService = Depends(get_watch_service),
) -> TaskResponse:
    """Replace a task's configuration. A running task is stopped first."""
    if not await service.update_task(index, _to_config(request)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {index} not found",
        )
    return _task_response(service, index)


@router.delete("/{index}", response_model=TaskActionResponse)
async def delete_task(
    index: int,
    service: WatchService = Depends(get_watch_service),
) -> TaskActionResponse:
    """Delete a task. Later tasks move up by one index."""
    if not await service.delete_task(index):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {index} not found",
        )
    return TaskActionResponse(index=index, message=f"Task {index} deleted")


@router.put("/{index}/run", response_model=TaskActionResponse)
async def start_task(
    index: int,
    service: WatchService = Depends(get_watch_service),
) -> TaskActionResponse:
    """Start a task, restarting it if it is running."""
    if service.supervisor.state(index) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {index} not found",
        )

    if not await service.start_task(index):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Task {index} could not be started",
        )
    return TaskActionResponse(
        index=index,
        status=service.supervisor.state(index),
        message=f"Task {index} started",
    )


@router.delete("/{index}/run", response_model=TaskActionResponse)
async def stop_task(
    index: int,
    service: WatchService = Depends(get_watch_service),
) -> TaskActionResponse:
    """Stop a task. Stopping a stopped task changes nothing."""
    if service.supervisor.state(index) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {index} not found",
        )

    if await service.stop_task(index):
        message = f"Task {index} stopped"
    else:
        message = f"Task {index} was not running"
    return TaskActionResponse(
        index=index,
        status=service.supervisor.state(index),
        message=message,
    )
