"""健康检查聚合器

从注册中心收集所有服务的健康检查，筛选出未通过的检查
"""

from typing import Dict, Any, List

from ..models.health_check import HealthCheck
from ..registry.base import BaseRegistryClient
from ..utils.log_manager import get_logger


class CheckAggregator:
    """健康检查聚合器"""

    def __init__(self, registry: BaseRegistryClient):
        """
        Args:
            registry: 注册中心客户端
        """
        self.registry = registry
        self.logger = get_logger('aggregator')
        self.last_stats: Dict[str, Any] = {}

    async def collect_failing_checks(self) -> List[HealthCheck]:
        """
        收集所有状态不是 passing 的健康检查

        单个调用失败只记录日志并按空结果处理，不影响其他服务的收集。

        Returns:
            List[HealthCheck]: 按注册中心返回顺序排列的失败检查
        """
        registry_errors = 0

        try:
            services = await self.registry.list_services()
        except Exception as e:
            self.logger.error(f"获取服务列表失败: {e}")
            services = {}
            registry_errors += 1

        all_checks: List[HealthCheck] = []
        for service_name in services:
            try:
                checks = await self.registry.list_checks(service_name)
            except Exception as e:
                self.logger.error(f"获取服务 {service_name} 的健康检查失败: {e}")
                registry_errors += 1
                continue
            all_checks.extend(checks)

        failing_checks = [check for check in all_checks if not check.is_passing]

        self.last_stats = {
            'services_count': len(services),
            'checks_count': len(all_checks),
            'failing_count': len(failing_checks),
            'registry_errors': registry_errors,
        }
        self.logger.debug(
            f"收集完成: {len(services)} 个服务, {len(all_checks)} 个检查, "
            f"{len(failing_checks)} 个未通过"
        )
        return failing_checks
