"""Tests for task and configuration models."""

import pytest
from pydantic import ValidationError

from core.models.domain.app_config import AppConfig, NotificationConfig
from core.models.domain.task import TaskConfig, TaskStatus
from core.types import SourceKind, TaskState


class TestTaskConfig:
    """Test TaskConfig validation."""

    def test_defaults(self):
        """Test default values."""
        config = TaskConfig(source_kind="web_page", endpoint="https://example.com")

        assert config.name == "New Task"
        assert config.extraction_rule == ""
        assert config.interval_seconds == 60
        assert config.enabled is False
        assert config.watch_spot is True
        assert config.watch_derivatives is True

    def test_is_immutable(self):
        """Test that configs cannot be mutated."""
        config = TaskConfig(source_kind="web_page", endpoint="https://example.com")

        with pytest.raises(ValidationError):
            config.endpoint = "https://other.example.com"

    def test_unknown_source_kind_rejected(self):
        """Test that an unknown kind fails at load time."""
        with pytest.raises(ValidationError):
            TaskConfig(source_kind="JsMonitor", endpoint="https://example.com")

    def test_interval_must_be_positive(self):
        """Test interval lower bound."""
        with pytest.raises(ValidationError):
            TaskConfig(
                source_kind="api_json",
                endpoint="https://example.com",
                interval_seconds=0,
            )

    def test_empty_endpoint_rejected(self):
        """Test endpoint is required."""
        with pytest.raises(ValidationError):
            TaskConfig(source_kind="api_json", endpoint="")

    def test_alert_prefix_falls_back_to_endpoint(self):
        """Test notes default to the endpoint."""
        config = TaskConfig(source_kind="web_page", endpoint=" https://example.com ")

        assert config.endpoint == "https://example.com"
        assert config.alert_prefix == "https://example.com"

        noted = config.model_copy(update={"notes": "  Shop  "})
        assert noted.alert_prefix == "Shop"

    def test_legacy_web_task(self):
        """Test upgrading a task written by an earlier release."""
        config = TaskConfig.model_validate(
            {
                "name": "Price page",
                "task_type": "StaticMonitor",
                "url": "https://example.com/price",
                "selector": "#price",
                "address": "",
                "monitor_spot": True,
                "monitor_contract": False,
                "interval_secs": 120,
                "enabled": True,
            }
        )

        assert config.source_kind == SourceKind.WEB_PAGE
        assert config.endpoint == "https://example.com/price"
        assert config.extraction_rule == "#price"
        assert config.interval_seconds == 120
        assert config.watch_derivatives is False
        assert config.enabled is True

    def test_legacy_exchange_task_uses_address(self):
        """Test that exchange tasks take their endpoint from the address."""
        config = TaskConfig.model_validate(
            {
                "task_type": "HyperliquidMonitor",
                "url": "",
                "address": "0xabc",
                "interval_secs": 60,
            }
        )

        assert config.source_kind == SourceKind.EXCHANGE_ACCOUNT
        assert config.endpoint == "0xabc"

    def test_serializes_kind_as_value(self):
        """Test kinds round through JSON by value."""
        config = TaskConfig(source_kind=SourceKind.API_JSON, endpoint="https://a.b")

        assert config.model_dump(mode="json")["source_kind"] == "api_json"


class TestTaskStatus:
    """Test TaskStatus helpers."""

    def test_constructors(self):
        """Test the state constructors."""
        assert TaskStatus.idle().state == TaskState.IDLE
        assert TaskStatus.running().state == TaskState.RUNNING

        error = TaskStatus.error("timeout")
        assert error.state == TaskState.ERROR
        assert error.reason == "timeout"

    def test_str(self):
        """Test string rendering."""
        assert str(TaskStatus.running()) == "running"
        assert str(TaskStatus.error("boom")) == "error: boom"


class TestAppConfig:
    """Test AppConfig and NotificationConfig."""

    def test_defaults(self):
        """Test an empty config."""
        config = AppConfig()

        assert config.tasks == []
        assert config.notification.enable_server_chan is False
        assert config.notification.server_chan_keys == []

    def test_legacy_single_key(self):
        """Test upgrading the single server_chan_key field."""
        notification = NotificationConfig.model_validate(
            {"enable_server_chan": True, "server_chan_key": "SCT123"}
        )

        assert notification.server_chan_keys == ["SCT123"]

    def test_active_keys(self):
        """Test that disabled notifications have no active keys."""
        enabled = NotificationConfig(
            enable_server_chan=True, server_chan_keys=["a", " ", "b "]
        )
        disabled = NotificationConfig(enable_server_chan=False, server_chan_keys=["a"])

        assert enabled.active_keys == ["a", "b"]
        assert disabled.active_keys == []
