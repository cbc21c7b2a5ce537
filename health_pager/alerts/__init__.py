"""告警模块"""

from .base import BasePager
from .pagerduty_pager import PagerDutyPager

__all__ = ['BasePager', 'PagerDutyPager']
