"""健康检查相关的数据模型"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any

STATUS_PASSING = 'passing'
STATUS_WARNING = 'warning'
STATUS_CRITICAL = 'critical'
STATUS_MAINTENANCE = 'maintenance'


@dataclass
class HealthCheck:
    """注册中心返回的单个健康检查"""
    service_name: str
    status: str  # "passing", "warning", "critical", ...
    output: str = ''
    node: str = ''
    check_id: str = ''
    name: str = ''
    service_id: str = ''

    @property
    def key(self) -> str:
        """检查的稳定标识，跨轮询保持一致，用作去抖记录的键"""
        return f"{self.node}/{self.service_name}/{self.check_id or self.name or self.service_id}"

    @property
    def is_passing(self) -> bool:
        return self.status == STATUS_PASSING

    @classmethod
    def from_consul(cls, data: Dict[str, Any]) -> 'HealthCheck':
        """从Consul健康检查响应构造"""
        return cls(
            service_name=data.get('ServiceName') or '',
            status=data.get('Status') or '',
            output=data.get('Output') or '',
            node=data.get('Node') or '',
            check_id=data.get('CheckID') or '',
            name=data.get('Name') or '',
            service_id=data.get('ServiceID') or '',
        )


@dataclass
class NotificationRecord:
    """单个失败检查的通知记录"""
    timestamp: datetime  # 首次发现或上次升级的时间
    count: int = 0  # 升级次数
    last_seen_cycle: int = 0
