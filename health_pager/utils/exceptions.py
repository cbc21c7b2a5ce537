"""自定义异常类"""

import traceback
from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime


class ErrorCode(Enum):
    """错误代码枚举"""
    # 通用错误 (1000-1999)
    UNKNOWN_ERROR = 1000

    # 配置错误 (2000-2999)
    CONFIG_MISSING = 2000
    CONFIG_VALIDATION_ERROR = 2001

    # 注册中心错误 (3000-3999)
    REGISTRY_CONNECTION_ERROR = 3000
    REGISTRY_TIMEOUT = 3001
    REGISTRY_INVALID_RESPONSE = 3002

    # 告警错误 (4000-4999)
    PAGER_SEND_ERROR = 4000
    PAGER_TIMEOUT = 4001
    PAGER_REJECTED = 4002

    # 调度错误 (5000-5999)
    SCHEDULER_ERROR = 5000


class HealthPagerError(Exception):
    """健康告警桥接系统基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            'error_code': self.error_code.value,
            'error_name': self.error_code.name,
            'message': self.message,
            'details': self.details,
            'recoverable': self.recoverable,
            'timestamp': self.timestamp.isoformat(),
            'cause': str(self.cause) if self.cause else None,
            'traceback': self._format_cause_traceback()
        }

    def _format_cause_traceback(self) -> Optional[str]:
        """格式化原始异常的堆栈，不依赖当前是否处于except块中"""
        if self.cause is None:
            return None
        return ''.join(traceback.format_exception(
            type(self.cause), self.cause, self.cause.__traceback__
        ))

    def format_error(self) -> str:
        """格式化错误信息"""
        error_msg = f"[{self.error_code.name}] {self.message}"
        if self.details:
            details_str = ", ".join([f"{k}={v}" for k, v in self.details.items()])
            error_msg += f" (详情: {details_str})"
        if self.cause:
            error_msg += f" (原因: {str(self.cause)})"
        return error_msg


class ConfigError(HealthPagerError):
    """配置相关异常，启动阶段出现即终止进程"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_VALIDATION_ERROR,
        env_var: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop('details', {})
        if env_var:
            details['env_var'] = env_var
        kwargs.setdefault('recoverable', False)
        super().__init__(message, error_code, details, **kwargs)


class RegistryError(HealthPagerError):
    """注册中心调用异常"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.REGISTRY_CONNECTION_ERROR,
        service_name: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop('details', {})
        if service_name:
            details['service_name'] = service_name
        super().__init__(message, error_code, details, **kwargs)


class PagerError(HealthPagerError):
    """告警平台调用异常"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.PAGER_SEND_ERROR,
        pager_name: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop('details', {})
        if pager_name:
            details['pager_name'] = pager_name
        super().__init__(message, error_code, details, **kwargs)


class SchedulerError(HealthPagerError):
    """调度器相关异常"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCode.SCHEDULER_ERROR, **kwargs)
