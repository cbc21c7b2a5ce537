"""服务模块"""

from .aggregator import CheckAggregator
from .config_manager import ConfigManager
from .debounce import NotificationTracker
from .notifier import Notifier
from .poll_scheduler import PollScheduler

__all__ = ['CheckAggregator', 'ConfigManager', 'NotificationTracker', 'Notifier',
           'PollScheduler']
