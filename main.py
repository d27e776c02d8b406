"""Command line entry point for watchpost."""

import argparse
import asyncio
from pathlib import Path

import uvicorn

from core import get_logger, load_settings, setup_logging
from core.config import Settings
from core.event_bus import EventBus
from core.models.domain.task import TaskConfig
from core.services.event_recorder import EventRecorder
from core.supervisor import TaskSupervisor
from core.types import SourceKind
from notifiers.fanout import NotificationFanout

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="watchpost",
        description="Watch web pages, JSON APIs and exchange accounts for changes",
    )
    parser.add_argument("-c", "--config", type=Path, help="Configuration file path")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP control API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    watch = subparsers.add_parser(
        "watch", help="Run a single monitor in the foreground"
    )
    sources = watch.add_subparsers(dest="source", required=True)

    web = sources.add_parser("web", help="Watch a web page")
    web.add_argument("-u", "--url", required=True, help="Page URL")
    web.add_argument("-s", "--selector", default="", help="CSS selector")
    web.add_argument("-i", "--interval", type=int, default=300, help="Seconds")

    api = sources.add_parser("api", help="Watch a value in a JSON API")
    api.add_argument("-u", "--url", required=True, help="API URL")
    api.add_argument("-s", "--selector", default="", help="JSONPath or dot path")
    api.add_argument("-i", "--interval", type=int, default=60, help="Seconds")

    exchange = sources.add_parser("exchange", help="Watch a Hyperliquid account")
    exchange.add_argument("-a", "--address", required=True, help="Wallet address")
    exchange.add_argument("-i", "--interval", type=int, default=120, help="Seconds")
    exchange.add_argument(
        "--no-spot", action="store_true", help="Do not watch spot trades"
    )
    exchange.add_argument(
        "--no-derivatives", action="store_true", help="Do not watch positions"
    )

    for source in (web, api, exchange):
        source.add_argument("-n", "--notes", default="", help="Alert prefix")

    return parser


def _task_from_args(args: argparse.Namespace) -> TaskConfig:
    if args.source == "exchange":
        return TaskConfig(
            name="Hyperliquid account",
            source_kind=SourceKind.EXCHANGE_ACCOUNT,
            endpoint=args.address,
            interval_seconds=args.interval,
            notes=args.notes,
            watch_spot=not args.no_spot,
            watch_derivatives=not args.no_derivatives,
        )

    kind = SourceKind.WEB_PAGE if args.source == "web" else SourceKind.API_JSON
    return TaskConfig(
        name=args.url,
        source_kind=kind,
        endpoint=args.url,
        extraction_rule=args.selector,
        interval_seconds=args.interval,
        notes=args.notes,
    )


async def watch(config: TaskConfig, settings: Settings) -> None:
    """Run one task until cancelled, logging every event."""
    event_bus = EventBus(max_size=settings.event_bus_max_size)
    recorder = EventRecorder(event_bus, history_size=settings.event_history_size)
    fanout = NotificationFanout(settings.server_chan_keys)
    if not settings.server_chan_keys:
        logger.warning("SERVER_CHAN_KEY is not set, changes will only be logged")

    supervisor = TaskSupervisor([config], fanout, event_bus, settings=settings)
    recorder.start()
    try:
        if await supervisor.start(0):
            await asyncio.Event().wait()
    finally:
        await supervisor.stop_all()
        await recorder.stop()
        await fanout.aclose()


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    if args.config is not None:
        settings = settings.model_copy(update={"config_path": args.config})

    if args.command == "serve":
        from api.app import create_app

        uvicorn.run(create_app(settings), host=args.host, port=args.port)
        return

    if args.command == "watch":
        setup_logging(
            level=settings.log_level, enable_file_logging=settings.log_to_file
        )
        config = _task_from_args(args)
        logger.info(f"Starting monitor for {config.endpoint}")
        try:
            asyncio.run(watch(config, settings))
        except KeyboardInterrupt:
            logger.info("Monitoring stopped")
        return

    parser.print_help()


if __name__ == "__main__":
    main()
