"""Tests for the command line entry point."""

import asyncio

import pytest

from core.types import SourceKind
from main import _build_parser, _task_from_args, watch


class TestCommandLine:
    """Test argument parsing into task configurations."""

    @pytest.fixture
    def parser(self):
        """Create the argument parser."""
        return _build_parser()

    def test_web_task(self, parser):
        """Test a web page watch."""
        args = parser.parse_args(
            ["watch", "web", "-u", "https://example.com", "-s", "#price", "-n", "Shop"]
        )
        config = _task_from_args(args)

        assert config.source_kind == SourceKind.WEB_PAGE
        assert config.endpoint == "https://example.com"
        assert config.extraction_rule == "#price"
        assert config.interval_seconds == 300
        assert config.alert_prefix == "Shop"

    def test_api_task(self, parser):
        """Test a JSON API watch."""
        args = parser.parse_args(
            ["watch", "api", "-u", "https://example.com/api", "-i", "15"]
        )
        config = _task_from_args(args)

        assert config.source_kind == SourceKind.API_JSON
        assert config.interval_seconds == 15
        assert config.alert_prefix == "https://example.com/api"

    def test_exchange_task(self, parser):
        """Test an exchange account watch."""
        args = parser.parse_args(["watch", "exchange", "-a", "0xabc", "--no-spot"])
        config = _task_from_args(args)

        assert config.source_kind == SourceKind.EXCHANGE_ACCOUNT
        assert config.endpoint == "0xabc"
        assert config.watch_spot is False
        assert config.watch_derivatives is True

    def test_serve_defaults(self, parser):
        """Test the serve command defaults."""
        args = parser.parse_args(["-c", "my.json", "serve"])

        assert args.command == "serve"
        assert args.host == "127.0.0.1"
        assert args.port == 8000
        assert str(args.config) == "my.json"

    def test_watch_requires_source(self, parser):
        """Test watch without a source kind is rejected."""
        with pytest.raises(SystemExit):
            parser.parse_args(["watch"])


@pytest.mark.asyncio
async def test_watch_runs_until_cancelled(httpserver, test_settings):
    """Test the foreground watch polls and stops cleanly on cancel."""
    httpserver.expect_request("/page").respond_with_data("<p>hi</p>")
    parser = _build_parser()
    config = _task_from_args(
        parser.parse_args(["watch", "web", "-u", httpserver.url_for("/page")])
    )

    task = asyncio.create_task(watch(config, test_settings))
    for _ in range(200):
        if httpserver.log:
            break
        await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert len(httpserver.log) >= 1
