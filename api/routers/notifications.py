"""API router for notification settings."""

from fastapi import APIRouter, Depends

from api.dependencies import get_watch_service
from core.log import get_logger
from core.models.api.requests import NotificationSettingsRequest
from core.models.api.responses import NotificationSettingsResponse
from core.models.domain.app_config import NotificationConfig
from core.services.watch_service import WatchService
from core.utils import mask_key

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/notifications", tags=["notifications"])


def _settings_response(
    notification: NotificationConfig,
) -> NotificationSettingsResponse:
    return NotificationSettingsResponse(
        enable_server_chan=notification.enable_server_chan,
        server_chan_keys=[mask_key(key) for key in notification.server_chan_keys],
        key_count=len(notification.server_chan_keys),
    )


@router.get("", response_model=NotificationSettingsResponse)
async def get_notification_settings(
    service: WatchService = Depends(get_watch_service),
) -> NotificationSettingsResponse:
    """Get notification settings. Keys are masked."""
    return _settings_response(service.notification)


@router.put("", response_model=NotificationSettingsResponse)
async def update_notification_settings(
    request: NotificationSettingsRequest,
    service: WatchService = Depends(get_watch_service),
) -> NotificationSettingsResponse:
    """Replace notification settings."""
    keys: list[str] = []
    for key in request.server_chan_keys:
        if key.strip() and key.strip() not in keys:
            keys.append(key.strip())

    service.update_notification(
        NotificationConfig(
            enable_server_chan=request.enable_server_chan,
            server_chan_keys=keys,
        )
    )
    return _settings_response(service.notification)
