"""配置管理器"""

import os
from typing import Dict, Any, Mapping, Optional

from ..utils.config_validator import ConfigValidator
from ..utils.exceptions import ConfigError
from ..utils.log_manager import get_logger

DEFAULT_REGISTRY_ADDR = 'localhost:8500'
DEFAULT_PAGER_EVENTS_URL = 'https://events.pagerduty.com/generic/2010-04-15/create_event.json'
DEFAULT_POLL_INTERVAL = 15
DEFAULT_REQUEST_TIMEOUT = 5.0

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


class ConfigManager:
    """配置管理器，负责从环境变量加载、解析和验证配置"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        初始化配置管理器

        Args:
            environ: 环境变量映射，默认使用 os.environ
        """
        self.environ = environ if environ is not None else os.environ
        self.config: Dict[str, Any] = {}
        self.logger = get_logger('config_manager')

    def load_config(self) -> Dict[str, Any]:
        """
        加载环境变量配置

        Returns:
            Dict[str, Any]: 配置字典，包含 global / registry / pager 三部分

        Raises:
            ConfigError: 配置缺失或验证失败
        """
        self.logger.debug("开始读取环境变量配置")

        registry_addr = self.environ.get('REGISTRY_ADDR', '')
        if not registry_addr:
            self.logger.info(f"REGISTRY_ADDR 未设置，使用 {DEFAULT_REGISTRY_ADDR}")
            registry_addr = DEFAULT_REGISTRY_ADDR

        timeout = self._get_float('REQUEST_TIMEOUT', DEFAULT_REQUEST_TIMEOUT)

        config = {
            'global': {
                'poll_interval': self._get_int('POLL_INTERVAL', DEFAULT_POLL_INTERVAL),
                'notify_every_poll': self._get_bool('NOTIFY_EVERY_POLL', False),
                'stale_cycles': self._get_int('DEBOUNCE_STALE_CYCLES', 0),
                'log_level': (self.environ.get('LOG_LEVEL') or 'INFO').upper(),
                'log_file': self.environ.get('LOG_FILE') or None,
            },
            'registry': {
                'address': registry_addr,
                'timeout': timeout,
            },
            'pager': {
                'service_key': self.environ.get('PAGER_SERVICE_KEY', ''),
                'events_url': self.environ.get('PAGER_EVENTS_URL') or DEFAULT_PAGER_EVENTS_URL,
                'timeout': timeout,
            },
        }

        self._validate_config(config)
        self.config = config

        self.logger.info(
            f"配置加载成功: 注册中心={registry_addr}, "
            f"轮询间隔={config['global']['poll_interval']}秒"
        )
        return self.config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        ConfigValidator.validate_global_config(config['global'])
        ConfigValidator.validate_registry_config(config['registry'])
        ConfigValidator.validate_pager_config(config['pager'])

    def _get_int(self, name: str, default: int) -> int:
        raw = self.environ.get(name)
        if raw is None or raw == '':
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigError(f"{name} 必须是整数: {raw}", env_var=name)

    def _get_float(self, name: str, default: float) -> float:
        raw = self.environ.get(name)
        if raw is None or raw == '':
            return default
        try:
            return float(raw)
        except ValueError:
            raise ConfigError(f"{name} 必须是数字: {raw}", env_var=name)

    def _get_bool(self, name: str, default: bool) -> bool:
        raw = self.environ.get(name)
        if raw is None:
            return default
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ConfigError(f"{name} 必须是布尔值: {raw}", env_var=name)

    def get_global_config(self) -> Dict[str, Any]:
        return self.config.get('global', {})

    def get_registry_config(self) -> Dict[str, Any]:
        return self.config.get('registry', {})

    def get_pager_config(self) -> Dict[str, Any]:
        return self.config.get('pager', {})
