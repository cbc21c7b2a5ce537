"""轮询调度器模块

按固定周期驱动 聚合器 -> 去抖状态机 -> 通知器 的处理流程
"""

import asyncio
import time
from datetime import datetime
from typing import Dict, Any, Optional

from .aggregator import CheckAggregator
from .debounce import NotificationTracker
from .notifier import Notifier
from ..utils.exceptions import SchedulerError
from ..utils.log_manager import get_logger


class PollScheduler:
    """轮询调度器

    单个事件循环内顺序执行每一轮处理，上一轮未结束时不会开始下一轮，
    处理超时只会推迟下一轮。
    """

    def __init__(self, aggregator: CheckAggregator, notifier: Notifier,
                 tracker: NotificationTracker, poll_interval: int = 15,
                 stale_cycles: int = 0):
        """初始化轮询调度器

        Args:
            aggregator: 健康检查聚合器
            notifier: 告警通知器
            tracker: 通知去抖状态机
            poll_interval: 轮询间隔（秒）
            stale_cycles: 通知记录空闲多少轮后清理，0表示不清理

        Raises:
            SchedulerError: 参数无效
        """
        if poll_interval <= 0:
            raise SchedulerError(f"轮询间隔必须是正数: {poll_interval}")
        if stale_cycles < 0:
            raise SchedulerError(f"stale_cycles 不能为负数: {stale_cycles}")

        self.aggregator = aggregator
        self.notifier = notifier
        self.tracker = tracker
        self.poll_interval = poll_interval
        self.stale_cycles = stale_cycles
        self.is_running = False
        self.logger = get_logger('poll_scheduler')

        self.last_tick_time: Optional[datetime] = None
        self.last_tick_duration: Optional[float] = None
        self.last_failing_count = 0

    async def start(self):
        """启动轮询循环，直到 stop() 或任务被取消"""
        if self.is_running:
            self.logger.warning("轮询调度器已经在运行")
            return

        self.is_running = True
        self.logger.info(f"启动轮询调度器，轮询间隔: {self.poll_interval}秒")

        try:
            await self._schedule_loop()
        except asyncio.CancelledError:
            self.logger.info("轮询调度器被取消")
        finally:
            await self.stop()

    async def stop(self):
        """停止轮询调度器"""
        if not self.is_running:
            return

        self.is_running = False
        self.logger.info("轮询调度器已停止")

    async def _schedule_loop(self):
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.poll_interval

        while self.is_running:
            delay = next_tick - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            if not self.is_running:
                break

            await self.run_once()

            next_tick += self.poll_interval
            current = loop.time()
            if next_tick < current:
                # 本轮耗时超过周期，跳过错过的节拍
                self.logger.warning("本轮处理耗时超过轮询间隔，推迟下一轮")
                next_tick = current

    async def run_once(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """执行一轮完整的轮询处理

        轮询过程中的任何异常都只记录日志，不会终止调度循环。

        Args:
            now: 本轮使用的当前时间，默认为 datetime.now()

        Returns:
            本轮统计信息，处理异常时为空字典
        """
        start = time.monotonic()
        cycle = self.tracker.begin_cycle()

        try:
            failing_checks = await self.aggregator.collect_failing_checks()
            if now is None:
                now = datetime.now()
            report = await self.notifier.notify(failing_checks, now)

            pruned = 0
            if self.stale_cycles > 0:
                pruned = self.tracker.prune_stale(self.stale_cycles)

        except Exception as e:
            self.logger.error(f"第 {cycle} 轮轮询异常: {e}", exc_info=True)
            return {}

        finally:
            self.last_tick_time = datetime.now()
            self.last_tick_duration = time.monotonic() - start

        self.last_failing_count = len(failing_checks)
        self.logger.debug(
            f"第 {cycle} 轮完成: 失败检查 {len(failing_checks)} 个, "
            f"触发 {report['triggered']} 个, 抑制 {report['suppressed']} 个, "
            f"耗时 {self.last_tick_duration:.3f}s"
        )

        return {
            'cycle': cycle,
            'failing_count': len(failing_checks),
            'triggered': report['triggered'],
            'failed': report['failed'],
            'suppressed': report['suppressed'],
            'pruned': pruned,
        }

    def get_scheduler_stats(self) -> Dict[str, Any]:
        """获取调度器统计信息"""
        return {
            'is_running': self.is_running,
            'poll_interval': self.poll_interval,
            'cycle': self.tracker.cycle,
            'last_tick_time': self.last_tick_time.isoformat() if self.last_tick_time else None,
            'last_tick_duration': self.last_tick_duration,
            'last_failing_count': self.last_failing_count,
            'total_triggered': self.notifier.total_triggered,
            'total_failed': self.notifier.total_failed,
            'debounce': self.tracker.get_stats(),
            'collection': dict(self.aggregator.last_stats),
        }
