"""告警通知器

连接去抖状态机和告警平台，为需要通知的失败检查触发事件
"""

from datetime import datetime
from typing import Dict, Any, List, Optional

from .debounce import NotificationTracker
from ..alerts.base import BasePager
from ..models.health_check import HealthCheck
from ..utils.log_manager import get_logger


class Notifier:
    """告警通知器"""

    def __init__(self, tracker: NotificationTracker, pager: BasePager):
        """初始化告警通知器

        Args:
            tracker: 通知去抖状态机
            pager: 告警平台客户端
        """
        self.tracker = tracker
        self.pager = pager
        self.logger = get_logger('notifier')

        self.total_triggered = 0
        self.total_failed = 0

    @staticmethod
    def format_description(check: HealthCheck) -> str:
        return f"{check.service_name} => {check.output}"

    async def notify(self, failing_checks: List[HealthCheck],
                     now: Optional[datetime] = None) -> Dict[str, Any]:
        """处理一轮失败检查

        触发失败只记录日志，继续处理下一个检查；去抖记录不会回滚。

        Args:
            failing_checks: 未通过的健康检查
            now: 当前时间，默认为 datetime.now()

        Returns:
            本轮统计: incidents 为 (检查, incident_key或None) 列表，
            以及 triggered / failed / suppressed 计数
        """
        if now is None:
            now = datetime.now()

        incidents = []
        triggered = failed = suppressed = 0

        for check in failing_checks:
            if self.tracker.should_notify(check, now):
                suppressed += 1
                continue

            description = self.format_description(check)
            try:
                incident_key = await self.pager.trigger(description)
            except Exception as e:
                failed += 1
                incidents.append((check, None))
                self.logger.error(f"触发告警失败 {check.key}: {e}")
                continue

            triggered += 1
            incidents.append((check, incident_key))
            self.logger.info(f"已向告警平台提交新事件 {incident_key}: {description}")

        self.total_triggered += triggered
        self.total_failed += failed

        return {
            'incidents': incidents,
            'triggered': triggered,
            'failed': failed,
            'suppressed': suppressed,
        }
