"""告警平台客户端基类"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class BasePager(ABC):
    """告警平台客户端抽象基类"""

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        初始化告警平台客户端

        Args:
            name: 客户端名称
            config: 客户端配置参数
        """
        self.name = name
        self.config = config
        class_name = self.__class__.__name__
        if class_name.endswith('Pager'):
            class_name = class_name[:-len('Pager')]
        self.pager_type = class_name.lower()

    @abstractmethod
    async def trigger(self, description: str) -> str:
        """
        触发一个事件

        Args:
            description: 事件描述

        Returns:
            str: 告警平台返回的事件标识

        Raises:
            PagerError: 触发失败
        """
        pass

    @abstractmethod
    def validate_config(self) -> bool:
        """
        验证配置参数是否有效

        Returns:
            bool: 配置是否有效
        """
        pass

    def get_timeout(self) -> float:
        return self.config.get('timeout', 5)
