"""通知去抖模块

按检查标识记录失败历史，决定每个失败检查本轮是否需要发送通知：

- 首次发现的失败检查不通知，可能只是部署过程中的短暂抖动
- 持续失败达到宽限期（30秒）后通知一次
- 通知后仍未恢复，每隔一小时再次升级通知
"""

from datetime import datetime, timedelta
from typing import Dict, Any, Optional

from ..models.health_check import HealthCheck, NotificationRecord
from ..utils.log_manager import get_logger

GRACE_PERIOD = timedelta(seconds=30)
ESCALATION_INTERVAL = timedelta(seconds=3600)


class NotificationTracker:
    """通知去抖状态机

    记录以 HealthCheck.key 为键，检查恢复后记录仍然保留，
    再次失败时沿用之前的时间戳和升级次数。
    """

    def __init__(self, notify_every_poll: bool = False,
                 grace_period: timedelta = GRACE_PERIOD,
                 escalation_interval: timedelta = ESCALATION_INTERVAL):
        """初始化通知去抖状态机

        Args:
            notify_every_poll: 为True时宽限期过后、首次升级之前每轮都通知；
                为False时宽限期过后只通知一次，随后按升级间隔再通知
            grace_period: 首次通知前的宽限期
            escalation_interval: 两次升级通知之间的间隔
        """
        self.notify_every_poll = notify_every_poll
        self.grace_period = grace_period
        self.escalation_interval = escalation_interval
        self.records: Dict[str, NotificationRecord] = {}
        self.cycle = 0
        self.logger = get_logger('debounce')

    def should_notify(self, check: HealthCheck, now: Optional[datetime] = None) -> bool:
        """判断失败检查是否已通知

        Args:
            check: 未通过的健康检查
            now: 当前时间，默认为 datetime.now()

        Returns:
            True 表示已通知过或仍需抑制，False 表示本次应该通知
        """
        if now is None:
            now = datetime.now()

        key = check.key
        record = self.records.get(key)

        if record is None:
            self.records[key] = NotificationRecord(timestamp=now, count=0,
                                                   last_seen_cycle=self.cycle)
            self.logger.info(f"首次发现失败检查 {key}，暂不通知")
            return True

        record.last_seen_cycle = self.cycle
        elapsed = now - record.timestamp

        if record.count == 0 and elapsed >= self.grace_period:
            if not self.notify_every_poll:
                record.timestamp = now
                record.count = 1
            self.logger.info(f"检查 {key} 持续失败 {elapsed.total_seconds():.0f} 秒，需要通知")
            return False

        if elapsed > self.escalation_interval:
            record.timestamp = now
            record.count += 1
            self.logger.warning(f"检查 {key} 超过一小时未恢复，第 {record.count} 次升级通知")
            return False

        return True

    def begin_cycle(self) -> int:
        """开始新一轮轮询

        Returns:
            新的轮询序号
        """
        self.cycle += 1
        return self.cycle

    def prune_stale(self, max_idle_cycles: int) -> int:
        """清理长时间未再失败的检查记录

        Args:
            max_idle_cycles: 记录允许空闲的最大轮询次数

        Returns:
            清理的记录数量
        """
        stale_keys = [
            key for key, record in self.records.items()
            if self.cycle - record.last_seen_cycle > max_idle_cycles
        ]
        for key in stale_keys:
            del self.records[key]

        if stale_keys:
            self.logger.info(f"清理了 {len(stale_keys)} 条过期通知记录")
        return len(stale_keys)

    def get_record(self, key: str) -> Optional[NotificationRecord]:
        return self.records.get(key)

    def get_all_records(self) -> Dict[str, NotificationRecord]:
        return self.records.copy()

    def get_stats(self) -> Dict[str, Any]:
        """获取去抖状态统计信息"""
        escalated = sum(1 for r in self.records.values() if r.count > 0)
        return {
            'records_count': len(self.records),
            'escalated_count': escalated,
            'cycle': self.cycle,
            'notify_every_poll': self.notify_every_poll,
        }
