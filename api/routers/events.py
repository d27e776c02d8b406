"""API router for recent events."""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_event_recorder
from core.models.api.responses import EventListResponse
from core.services.event_recorder import EventRecorder

router = APIRouter(prefix="/v1/events", tags=["events"])


@router.get("", response_model=EventListResponse)
async def list_events(
    limit: int = Query(default=100, ge=1, le=1000, description="Most recent events"),
    recorder: EventRecorder = Depends(get_event_recorder),
) -> EventListResponse:
    """Get recent log, status and change events, oldest first."""
    return EventListResponse(
        events=recorder.snapshot(limit),
        dropped=recorder.event_bus.dropped,
    )
