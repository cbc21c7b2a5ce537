"""
日志管理器测试模块
"""

import logging
import logging.handlers
import os
import tempfile
import pytest

from health_pager.utils.log_manager import LogManager, LogLevel


class TestLogManager:
    """日志管理器测试类"""

    def setup_method(self):
        """每个测试方法前的设置"""
        # 重置单例实例
        LogManager._instance = None
        LogManager._initialized = False

    def teardown_method(self):
        """清理测试创建的处理器"""
        if LogManager._instance is not None:
            LogManager._instance.cleanup()
        LogManager._instance = None
        LogManager._initialized = False

    def test_singleton_pattern(self):
        """测试单例模式"""
        manager1 = LogManager()
        manager2 = LogManager()

        assert manager1 is manager2

    def test_default_configuration(self):
        """测试默认配置"""
        manager = LogManager()

        assert manager.log_level == LogLevel.INFO
        assert manager._log_file is None
        assert manager._max_file_size == 10 * 1024 * 1024
        assert manager._backup_count == 5

    def test_configure_log_level(self):
        """测试日志级别配置"""
        manager = LogManager()

        manager.configure({'log_level': 'DEBUG'})
        assert manager.log_level == LogLevel.DEBUG

        manager.configure({'log_level': 'error'})
        assert manager.log_level == LogLevel.ERROR

        with pytest.raises(ValueError, match="无效的日志级别"):
            manager.configure({'log_level': 'INVALID'})

    def test_get_logger_console_only(self):
        """测试默认只有控制台处理器"""
        manager = LogManager()
        logger = manager.get_logger('test.console')

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert logger.propagate is False
        assert manager.get_logger('test.console') is logger

    def test_configure_updates_existing_loggers(self):
        """测试重新配置后已有记录器使用新级别"""
        manager = LogManager()
        logger = manager.get_logger('test.existing')
        assert logger.level == logging.INFO

        manager.configure({'log_level': 'WARNING'})

        assert logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in logger.handlers)

    def test_file_handler(self):
        """测试日志文件输出"""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = os.path.join(temp_dir, 'logs', 'health-pager.log')
            manager = LogManager()
            manager.configure({'log_file': log_file, 'backup_count': 2})

            logger = manager.get_logger('test.file')
            logger.info("写入日志文件")

            file_handlers = [h for h in logger.handlers
                             if isinstance(h, logging.handlers.RotatingFileHandler)]
            assert len(file_handlers) == 1
            assert file_handlers[0].backupCount == 2
            assert os.path.exists(log_file)

            manager.cleanup()

    def test_cleanup(self):
        """测试清理资源"""
        manager = LogManager()
        logger = manager.get_logger('test.cleanup')

        manager.cleanup()

        assert logger.handlers == []
        assert manager._loggers == {}
