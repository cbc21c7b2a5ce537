"""测试数据模型"""

from datetime import datetime

from health_pager.models.health_check import HealthCheck, NotificationRecord


class TestHealthCheck:
    """测试HealthCheck模型"""

    def test_create_health_check(self):
        """测试创建健康检查"""
        check = HealthCheck(service_name="api", status="critical", output="HTTP 500")

        assert check.service_name == "api"
        assert check.status == "critical"
        assert check.output == "HTTP 500"
        assert check.node == ""
        assert not check.is_passing

    def test_is_passing_exact_match(self):
        """测试只有 passing 视为通过"""
        assert HealthCheck("api", "passing").is_passing
        assert not HealthCheck("api", "warning").is_passing
        assert not HealthCheck("api", "PASSING").is_passing

    def test_key_uses_identity_fields(self):
        """测试标识由节点、服务和检查ID组成"""
        check = HealthCheck("api", "critical", node="node-1", check_id="service:api-1")

        assert check.key == "node-1/api/service:api-1"

    def test_key_falls_back_to_name(self):
        """测试没有检查ID时使用检查名称"""
        check = HealthCheck("api", "critical", node="node-1", name="Service 'api' check")

        assert check.key == "node-1/api/Service 'api' check"

    def test_key_falls_back_to_service_id(self):
        """测试检查ID和名称都为空时使用服务实例ID区分"""
        a = HealthCheck("api", "critical", node="node-1", service_id="api-1")
        b = HealthCheck("api", "critical", node="node-1", service_id="api-2")

        assert a.key == "node-1/api/api-1"
        assert a.key != b.key

    def test_key_ignores_status_and_output(self):
        """测试状态和输出变化不影响标识"""
        a = HealthCheck("api", "warning", "slow", node="n1", check_id="c1")
        b = HealthCheck("api", "critical", "down", node="n1", check_id="c1")

        assert a.key == b.key

    def test_from_consul(self):
        """测试从Consul响应构造"""
        check = HealthCheck.from_consul({
            "Node": "node-1",
            "CheckID": "service:api-1",
            "Name": "Service 'api' check",
            "Status": "warning",
            "Notes": "",
            "Output": "HTTP GET http://10.0.0.1/health: 429",
            "ServiceID": "api-1",
            "ServiceName": "api",
            "ServiceTags": ["v1"]
        })

        assert check.service_name == "api"
        assert check.status == "warning"
        assert check.output == "HTTP GET http://10.0.0.1/health: 429"
        assert check.node == "node-1"
        assert check.check_id == "service:api-1"
        assert check.service_id == "api-1"

    def test_from_consul_missing_fields(self):
        """测试缺失字段使用空字符串"""
        check = HealthCheck.from_consul({"Status": "critical", "Output": None})

        assert check.service_name == ""
        assert check.output == ""


class TestNotificationRecord:
    """测试NotificationRecord模型"""

    def test_defaults(self):
        """测试默认值"""
        now = datetime.now()
        record = NotificationRecord(timestamp=now)

        assert record.timestamp == now
        assert record.count == 0
        assert record.last_seen_cycle == 0
