"""Application service tying configuration, supervisor and notifications together."""

from core.config import Settings
from core.event_bus import EventBus
from core.log import get_logger
from core.models.domain.app_config import AppConfig, NotificationConfig
from core.models.domain.task import TaskConfig
from core.services.event_recorder import EventRecorder
from core.storage import ConfigStore
from core.supervisor import MonitorFactory, TaskSupervisor
from notifiers.fanout import NotificationFanout

logger = get_logger(__name__)


class WatchService:
    """Owns the running state of the application.

    Every configuration change goes through this service so the config
    file is saved after each edit.
    """

    def __init__(
        self,
        settings: Settings,
        store: ConfigStore | None = None,
        fanout: NotificationFanout | None = None,
        monitor_factory: MonitorFactory | None = None,
    ):
        """Initialize the service and load the configuration.

        Raises:
            ConfigurationError: If the config file is invalid
        """
        self.settings = settings
        self.store = store or ConfigStore(settings.config_path)
        self.event_bus = EventBus(max_size=settings.event_bus_max_size)
        self.recorder = EventRecorder(
            self.event_bus, history_size=settings.event_history_size
        )

        config = self.store.load()
        self.notification = self._effective_notification(config.notification)

        self.fanout = fanout or NotificationFanout()
        self.fanout.set_keys(self.notification.active_keys)

        self.supervisor = TaskSupervisor(
            config.tasks,
            self.fanout,
            self.event_bus,
            monitor_factory=monitor_factory,
            settings=settings,
        )

    def _effective_notification(
        self, notification: NotificationConfig
    ) -> NotificationConfig:
        # Keys from the environment apply only when the file has none
        if notification.server_chan_keys or not self.settings.server_chan_keys:
            return notification
        logger.info("Using ServerChan keys from the environment")
        return NotificationConfig(
            enable_server_chan=True,
            server_chan_keys=list(self.settings.server_chan_keys),
        )

    @property
    def app_config(self) -> AppConfig:
        return AppConfig(notification=self.notification, tasks=self.supervisor.configs)

    def save(self) -> None:
        self.store.save(self.app_config)

    async def start(self) -> None:
        """Start the event recorder and every enabled task."""
        self.recorder.start()
        started = await self.supervisor.start_enabled()
        logger.info(f"Watch service started with {started} running tasks")

    async def shutdown(self) -> None:
        """Stop all tasks so nothing keeps polling, then release resources."""
        await self.supervisor.stop_all()
        await self.recorder.stop()
        await self.fanout.aclose()
        logger.info("Watch service stopped")

    async def add_task(self, config: TaskConfig) -> int:
        index = self.supervisor.add(config)
        self.save()
        return index

    async def update_task(self, index: int, config: TaskConfig) -> bool:
        if not await self.supervisor.update(index, config):
            return False
        self.save()
        return True

    async def delete_task(self, index: int) -> bool:
        if not await self.supervisor.delete(index):
            return False
        self.save()
        return True

    async def start_task(self, index: int) -> bool:
        return await self.supervisor.start(index)

    async def stop_task(self, index: int) -> bool:
        return await self.supervisor.stop(index)

    async def stop_all(self) -> None:
        await self.supervisor.stop_all()

    def update_notification(self, notification: NotificationConfig) -> None:
        """Replace notification settings and the fanout's keys."""
        self.notification = notification
        self.fanout.set_keys(notification.active_keys)
        self.save()
        logger.info(
            f"Notification settings updated: ServerChan "
            f"{'enabled' if notification.enable_server_chan else 'disabled'}, "
            f"{len(notification.active_keys)} active keys"
        )
