"""工具模块"""

from .exceptions import (HealthPagerError, ConfigError, RegistryError, PagerError,
                         SchedulerError)
from .log_manager import LogManager, LogLevel, get_logger, configure_logging, log_manager

__all__ = [
    'HealthPagerError', 'ConfigError', 'RegistryError', 'PagerError', 'SchedulerError',
    'LogManager', 'LogLevel', 'get_logger', 'configure_logging', 'log_manager'
]
