"""PagerDuty告警客户端实现"""

import asyncio
import json
from typing import Dict, Any
from urllib.parse import urlparse

import aiohttp

from .base import BasePager
from ..utils.exceptions import ConfigError, PagerError, ErrorCode
from ..utils.log_manager import get_logger


class PagerDutyPager(BasePager):
    """通过PagerDuty Events API v1 触发事件"""

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        初始化PagerDuty客户端

        Args:
            name: 客户端名称
            config: 客户端配置，需要 service_key 和 events_url
        """
        super().__init__(name, config)
        self.logger = get_logger(f'pager.{self.pager_type}')

        self.service_key = config.get('service_key', '')
        self.events_url = config.get('events_url', '')

        if not self.validate_config():
            raise ConfigError(f"PagerDuty客户端配置无效: {name}")

    def validate_config(self) -> bool:
        if not self.service_key:
            self.logger.error(f"PagerDuty客户端 {self.name} 缺少service_key配置")
            return False

        parsed_url = urlparse(self.events_url)
        if parsed_url.scheme not in ('http', 'https') or not parsed_url.netloc:
            self.logger.error(f"PagerDuty客户端 {self.name} 事件地址格式无效: {self.events_url}")
            return False

        return True

    async def trigger(self, description: str) -> str:
        """
        触发PagerDuty事件

        Args:
            description: 事件描述

        Returns:
            str: incident_key

        Raises:
            PagerError: 网络错误、超时或PagerDuty拒绝事件
        """
        payload = self._create_payload(description)
        self.logger.debug(f"发送PagerDuty事件: {description}")
        return await self._send_event(payload)

    def _create_payload(self, description: str) -> Dict[str, Any]:
        return {
            'service_key': self.service_key,
            'event_type': 'trigger',
            'description': description,
        }

    async def _send_event(self, payload: Dict[str, Any]) -> str:
        """
        发送事件请求

        Args:
            payload: 事件负载

        Returns:
            str: incident_key
        """
        timeout = aiohttp.ClientTimeout(total=self.get_timeout())

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.events_url, json=payload) as response:
                    response_text = await response.text()

                    if response.status < 200 or response.status >= 300:
                        raise PagerError(
                            f"PagerDuty返回错误状态码: {response.status}",
                            error_code=ErrorCode.PAGER_REJECTED,
                            pager_name=self.name,
                            details={'response': response_text[:200]}
                        )

                    try:
                        response_body = json.loads(response_text)
                    except json.JSONDecodeError as e:
                        raise PagerError(f"PagerDuty响应不是有效的JSON: {e}",
                                         error_code=ErrorCode.PAGER_REJECTED,
                                         pager_name=self.name, cause=e)

                    if not isinstance(response_body, dict) or \
                            response_body.get('status') != 'success':
                        raise PagerError(
                            f"PagerDuty拒绝事件: {response_text[:200]}",
                            error_code=ErrorCode.PAGER_REJECTED,
                            pager_name=self.name
                        )

                    incident_key = response_body.get('incident_key', '')
                    self.logger.debug(
                        f"PagerDuty事件发送成功 (状态码: {response.status}, "
                        f"incident_key: {incident_key})"
                    )
                    return incident_key

        except aiohttp.ClientError as e:
            raise PagerError(f"PagerDuty请求失败: {e}", pager_name=self.name, cause=e)
        except asyncio.TimeoutError as e:
            raise PagerError("PagerDuty请求超时", error_code=ErrorCode.PAGER_TIMEOUT,
                             pager_name=self.name, cause=e)

    def get_config_summary(self) -> Dict[str, Any]:
        """获取配置摘要，不包含服务密钥"""
        return {
            'name': self.name,
            'type': self.pager_type,
            'events_url': self.events_url,
            'timeout': self.get_timeout(),
            'service_key_set': bool(self.service_key),
        }
