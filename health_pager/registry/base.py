"""注册中心客户端基类"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List

from ..models.health_check import HealthCheck
from ..utils.log_manager import get_logger


class BaseRegistryClient(ABC):
    """注册中心客户端抽象基类"""

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        初始化注册中心客户端

        Args:
            name: 客户端名称
            config: 客户端配置参数
        """
        self.name = name
        self.config = config
        class_name = self.__class__.__name__
        if class_name.endswith('RegistryClient'):
            class_name = class_name[:-len('RegistryClient')]
        self.registry_type = class_name.lower()
        self.logger = get_logger(f'registry.{self.registry_type}')

    @abstractmethod
    async def list_services(self) -> Dict[str, List[str]]:
        """
        列出注册中心已知的所有服务

        Returns:
            Dict[str, List[str]]: 服务名称 -> 标签列表，保持注册中心返回顺序

        Raises:
            RegistryError: 调用失败
        """
        pass

    @abstractmethod
    async def list_checks(self, service_name: str) -> List[HealthCheck]:
        """
        列出指定服务的健康检查

        Args:
            service_name: 服务名称

        Returns:
            List[HealthCheck]: 健康检查列表

        Raises:
            RegistryError: 调用失败
        """
        pass

    def get_timeout(self) -> float:
        """
        获取超时时间配置

        Returns:
            float: 超时时间（秒）
        """
        return self.config.get('timeout', 5)
