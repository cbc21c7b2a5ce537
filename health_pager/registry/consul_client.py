"""Consul注册中心客户端"""

import asyncio
import json
from typing import Dict, Any, List
from urllib.parse import quote

import aiohttp

from .base import BaseRegistryClient
from ..models.health_check import HealthCheck
from ..utils.exceptions import RegistryError, ErrorCode


class ConsulRegistryClient(BaseRegistryClient):
    """通过Consul HTTP API读取服务目录和健康检查"""

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        初始化Consul客户端

        Args:
            name: 客户端名称
            config: 客户端配置，address 为 host:port 或完整URL
        """
        super().__init__(name, config)
        address = config.get('address', 'localhost:8500')
        if not address.startswith(('http://', 'https://')):
            address = f"http://{address}"
        self.base_url = address.rstrip('/')

    async def list_services(self) -> Dict[str, List[str]]:
        data = await self._get_json('/v1/catalog/services')
        if not isinstance(data, dict):
            raise RegistryError("服务目录响应格式无效",
                                error_code=ErrorCode.REGISTRY_INVALID_RESPONSE)

        # json 解析保持键顺序，即注册中心返回的顺序
        return {name: list(tags or []) for name, tags in data.items()}

    async def list_checks(self, service_name: str) -> List[HealthCheck]:
        data = await self._get_json(f'/v1/health/checks/{quote(service_name, safe="")}',
                                    service_name=service_name)
        if not isinstance(data, list):
            raise RegistryError("健康检查响应格式无效",
                                error_code=ErrorCode.REGISTRY_INVALID_RESPONSE,
                                service_name=service_name)

        return [HealthCheck.from_consul(item) for item in data if isinstance(item, dict)]

    async def _get_json(self, path: str, service_name: str = None) -> Any:
        """
        发送GET请求并解析JSON响应

        Args:
            path: 请求路径
            service_name: 相关服务名称，用于错误详情

        Returns:
            解析后的JSON数据

        Raises:
            RegistryError: 网络错误、超时、非2xx响应或JSON无效
        """
        url = f"{self.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.get_timeout())

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as response:
                    body = await response.text()
                    if response.status < 200 or response.status >= 300:
                        raise RegistryError(
                            f"注册中心返回错误状态码: {response.status}",
                            error_code=ErrorCode.REGISTRY_INVALID_RESPONSE,
                            service_name=service_name,
                            details={'url': url, 'response': body[:200]}
                        )
                    self.logger.debug(f"GET {url} -> {response.status}")
                    return json.loads(body)

        except json.JSONDecodeError as e:
            raise RegistryError(f"注册中心响应不是有效的JSON: {e}",
                                error_code=ErrorCode.REGISTRY_INVALID_RESPONSE,
                                service_name=service_name, cause=e)
        except aiohttp.ClientError as e:
            raise RegistryError(f"注册中心请求失败: {e}",
                                service_name=service_name, cause=e)
        except asyncio.TimeoutError as e:
            raise RegistryError(f"注册中心请求超时: {url}",
                                error_code=ErrorCode.REGISTRY_TIMEOUT,
                                service_name=service_name, cause=e)
