"""Persisted application configuration."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from core.models.domain.task import TaskConfig


class NotificationConfig(BaseModel):
    """Push notification settings."""

    enable_server_chan: bool = False
    server_chan_keys: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _upgrade_single_key(cls, data: Any) -> Any:
        # Earlier releases stored exactly one key under server_chan_key
        if isinstance(data, dict) and "server_chan_key" in data:
            upgraded = dict(data)
            key = str(upgraded.pop("server_chan_key") or "").strip()
            keys = list(upgraded.get("server_chan_keys") or [])
            if key and key not in keys:
                keys.insert(0, key)
            upgraded["server_chan_keys"] = keys
            return upgraded
        return data

    @property
    def active_keys(self) -> list[str]:
        """Keys to deliver to, empty when ServerChan is disabled."""
        if not self.enable_server_chan:
            return []
        return [key.strip() for key in self.server_chan_keys if key.strip()]


class AppConfig(BaseModel):
    """Notification settings plus the ordered list of tasks."""

    notification: NotificationConfig = Field(default_factory=NotificationConfig)
    tasks: list[TaskConfig] = Field(default_factory=list)
