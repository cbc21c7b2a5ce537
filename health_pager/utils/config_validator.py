"""配置验证工具"""

from typing import Dict, Any

from .exceptions import ConfigError, ErrorCode


class ConfigValidator:
    """配置验证器"""

    VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    @staticmethod
    def validate_registry_config(registry_config: Dict[str, Any]) -> None:
        """
        验证注册中心配置

        Args:
            registry_config: 注册中心配置

        Raises:
            ConfigError: 配置验证失败
        """
        address = registry_config.get('address')
        if not isinstance(address, str) or not address.strip():
            raise ConfigError("注册中心地址不能为空", env_var='REGISTRY_ADDR')

        timeout = registry_config.get('timeout')
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("请求超时时间必须是正数", env_var='REQUEST_TIMEOUT')

    @staticmethod
    def validate_pager_config(pager_config: Dict[str, Any]) -> None:
        """
        验证告警平台配置

        Args:
            pager_config: 告警平台配置

        Raises:
            ConfigError: 缺少服务密钥或地址无效
        """
        service_key = pager_config.get('service_key')
        if not service_key:
            raise ConfigError("PAGER_SERVICE_KEY 未设置",
                              error_code=ErrorCode.CONFIG_MISSING,
                              env_var='PAGER_SERVICE_KEY')

        events_url = pager_config.get('events_url', '')
        if not events_url.startswith(('http://', 'https://')):
            raise ConfigError(f"告警事件地址格式无效: {events_url}",
                              env_var='PAGER_EVENTS_URL')

    @staticmethod
    def validate_global_config(global_config: Dict[str, Any]) -> None:
        """
        验证全局配置

        Args:
            global_config: 全局配置

        Raises:
            ConfigError: 配置验证失败
        """
        poll_interval = global_config.get('poll_interval')
        if not isinstance(poll_interval, int) or poll_interval <= 0:
            raise ConfigError("poll_interval 必须是正整数", env_var='POLL_INTERVAL')

        stale_cycles = global_config.get('stale_cycles', 0)
        if not isinstance(stale_cycles, int) or stale_cycles < 0:
            raise ConfigError("stale_cycles 必须是非负整数",
                              env_var='DEBOUNCE_STALE_CYCLES')

        log_level = global_config.get('log_level')
        if log_level is not None and log_level not in ConfigValidator.VALID_LOG_LEVELS:
            raise ConfigError(
                f"log_level 必须是以下值之一: {ConfigValidator.VALID_LOG_LEVELS}",
                env_var='LOG_LEVEL')
