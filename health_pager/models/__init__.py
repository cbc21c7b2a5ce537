"""数据模型模块"""

from .health_check import HealthCheck, NotificationRecord, STATUS_PASSING

__all__ = ['HealthCheck', 'NotificationRecord', 'STATUS_PASSING']
