"""Notification delivery."""

from .base import Notifier
from .exceptions import NotificationError
from .fanout import NotificationFanout
from .server_chan import ServerChanNotifier, server_chan_url

__all__ = [
    "NotificationError",
    "NotificationFanout",
    "Notifier",
    "ServerChanNotifier",
    "server_chan_url",
]
