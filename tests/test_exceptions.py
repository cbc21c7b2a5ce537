"""异常类测试"""

from datetime import datetime

from health_pager.utils.exceptions import (
    HealthPagerError,
    ErrorCode,
    ConfigError,
    RegistryError,
    PagerError,
    SchedulerError
)


class TestErrorCode:
    """错误代码测试"""

    def test_error_code_values(self):
        """测试错误代码值"""
        assert ErrorCode.UNKNOWN_ERROR.value == 1000
        assert ErrorCode.CONFIG_MISSING.value == 2000
        assert ErrorCode.REGISTRY_TIMEOUT.value == 3001
        assert ErrorCode.PAGER_SEND_ERROR.value == 4000
        assert ErrorCode.SCHEDULER_ERROR.value == 5000


class TestHealthPagerError:
    """HealthPagerError基础异常测试"""

    def test_basic_error_creation(self):
        """测试基础错误创建"""
        error = HealthPagerError("测试错误")

        assert str(error) == "测试错误"
        assert error.message == "测试错误"
        assert error.error_code == ErrorCode.UNKNOWN_ERROR
        assert error.details == {}
        assert error.cause is None
        assert error.recoverable is True
        assert isinstance(error.timestamp, datetime)

    def test_format_error(self):
        """测试格式化错误信息"""
        cause = ValueError("原始错误")
        error = HealthPagerError("测试错误", details={'key': 'value'}, cause=cause)

        formatted = error.format_error()

        assert formatted.startswith("[UNKNOWN_ERROR] 测试错误")
        assert "key=value" in formatted
        assert "原始错误" in formatted

    def test_to_dict(self):
        """测试转换为字典"""
        error = HealthPagerError("测试错误", ErrorCode.SCHEDULER_ERROR)

        error_dict = error.to_dict()

        assert error_dict['error_code'] == 5000
        assert error_dict['error_name'] == 'SCHEDULER_ERROR'
        assert error_dict['message'] == "测试错误"
        assert error_dict['cause'] is None
        assert error_dict['traceback'] is None

    def test_to_dict_traceback_of_cause(self):
        """测试在except块之外转换时仍保留原始异常堆栈"""
        try:
            int('abc')
        except ValueError as e:
            error = HealthPagerError("解析失败", ErrorCode.CONFIG_VALIDATION_ERROR, cause=e)

        error_dict = error.to_dict()

        assert "ValueError" in error_dict['traceback']
        assert "int('abc')" in error_dict['traceback']
        assert "NoneType: None" not in error_dict['traceback']


class TestSubclasses:
    """具体异常类测试"""

    def test_config_error(self):
        """测试配置异常默认不可恢复并记录环境变量"""
        error = ConfigError("缺少配置", env_var='PAGER_SERVICE_KEY')

        assert isinstance(error, HealthPagerError)
        assert error.recoverable is False
        assert error.error_code == ErrorCode.CONFIG_VALIDATION_ERROR
        assert error.details == {'env_var': 'PAGER_SERVICE_KEY'}

    def test_config_error_with_details(self):
        """测试配置异常合并详情"""
        error = ConfigError("无效", env_var='POLL_INTERVAL', details={'value': 'x'})

        assert error.details == {'value': 'x', 'env_var': 'POLL_INTERVAL'}

    def test_registry_error(self):
        """测试注册中心异常"""
        cause = OSError("connection refused")
        error = RegistryError("请求失败", service_name='api', cause=cause)

        assert error.recoverable is True
        assert error.error_code == ErrorCode.REGISTRY_CONNECTION_ERROR
        assert error.details['service_name'] == 'api'
        assert error.cause is cause

    def test_pager_error(self):
        """测试告警平台异常"""
        error = PagerError("超时", error_code=ErrorCode.PAGER_TIMEOUT, pager_name='pagerduty')

        assert error.error_code == ErrorCode.PAGER_TIMEOUT
        assert error.details == {'pager_name': 'pagerduty'}

    def test_scheduler_error(self):
        """测试调度器异常"""
        error = SchedulerError("间隔无效")

        assert error.error_code == ErrorCode.SCHEDULER_ERROR
