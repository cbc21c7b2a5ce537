#!/usr/bin/env python3
"""
健康告警桥接主应用程序入口

从环境变量加载配置，组装注册中心客户端、去抖状态机、
通知器和轮询调度器，处理信号实现优雅关闭。
"""

import asyncio
import logging
import signal
import sys
from typing import Optional, Dict, Any, Mapping

from health_pager.alerts.pagerduty_pager import PagerDutyPager
from health_pager.registry.consul_client import ConsulRegistryClient
from health_pager.services.aggregator import CheckAggregator
from health_pager.services.config_manager import ConfigManager
from health_pager.services.debounce import NotificationTracker
from health_pager.services.notifier import Notifier
from health_pager.services.poll_scheduler import PollScheduler
from health_pager.utils.exceptions import ConfigError
from health_pager.utils.log_manager import log_manager, get_logger

# 版本信息
__version__ = "1.0.0"


class HealthPagerApp:
    """健康告警桥接主应用程序类"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """初始化应用程序

        Args:
            environ: 环境变量映射，默认使用 os.environ
        """
        self.environ = environ
        self.logger: logging.Logger = get_logger('main')
        self.is_running = False
        self.shutdown_event = asyncio.Event()

        self.config_manager: Optional[ConfigManager] = None
        self.tracker: Optional[NotificationTracker] = None
        self.scheduler: Optional[PollScheduler] = None
        self.scheduler_task: Optional[asyncio.Task] = None

    def initialize(self):
        """初始化应用程序组件

        Raises:
            ConfigError: 配置缺失或无效
        """
        self.config_manager = ConfigManager(self.environ)
        config = self.config_manager.load_config()

        global_config = config['global']
        log_manager.configure({
            'log_level': global_config['log_level'],
            'log_file': global_config['log_file'],
        })
        self.logger.info("开始初始化健康告警桥接")

        registry = ConsulRegistryClient('consul', config['registry'])
        pager = PagerDutyPager('pagerduty', config['pager'])

        self.tracker = NotificationTracker(
            notify_every_poll=global_config['notify_every_poll'])
        notifier = Notifier(self.tracker, pager)
        aggregator = CheckAggregator(registry)

        self.scheduler = PollScheduler(
            aggregator, notifier, self.tracker,
            poll_interval=global_config['poll_interval'],
            stale_cycles=global_config['stale_cycles'],
        )

        self.logger.info("应用程序组件初始化完成")

    async def start(self):
        """启动应用程序，阻塞直到收到关闭信号"""
        if self.is_running:
            self.logger.warning("应用程序已经在运行")
            return

        try:
            self.is_running = True
            self.scheduler_task = asyncio.create_task(self.scheduler.start())
            self.logger.info("健康告警桥接启动完成")

            await self.shutdown_event.wait()

        finally:
            await self.stop()

    async def stop(self):
        """停止应用程序"""
        if not self.is_running:
            return

        self.logger.info("正在停止健康告警桥接...")
        self.is_running = False

        if self.scheduler:
            await self.scheduler.stop()

        if self.scheduler_task and not self.scheduler_task.done():
            self.scheduler_task.cancel()
            await asyncio.gather(self.scheduler_task, return_exceptions=True)

        self.logger.info("健康告警桥接已停止")

    def shutdown(self):
        """触发应用程序关闭"""
        self.logger.info("收到关闭信号")
        self.shutdown_event.set()

    def get_status(self) -> Dict[str, Any]:
        status = {'is_running': self.is_running}
        if self.scheduler:
            status['scheduler_stats'] = self.scheduler.get_scheduler_stats()
        return status


async def main(environ: Optional[Mapping[str, str]] = None) -> int:
    """主函数

    Returns:
        进程退出码
    """
    app = HealthPagerApp(environ)

    try:
        app.initialize()
    except ConfigError as e:
        app.logger.critical(f"配置错误: {e.format_error()}")
        return 1

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, app.shutdown)
        except NotImplementedError:
            # Windows 事件循环不支持 add_signal_handler
            signal.signal(sig, lambda signum, frame: app.shutdown())

    app.logger.info(f"健康告警桥接 v{__version__} 已启动")
    await app.start()
    return 0


def run():
    """命令行入口"""
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        exit_code = 0
    finally:
        log_manager.cleanup()
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
