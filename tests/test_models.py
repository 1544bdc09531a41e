import pytest

from vulnscope.models import Module, ModuleResult, Severity, Target


def test_open_service_is_reported_open():
    target = Target("web-1", "192.168.1.10")
    target.add_service("HTTP", 80)
    assert target.is_service_open("HTTP") is True


def test_closed_and_unknown_services_are_not_open():
    target = Target("web-1")
    target.add_service("SSH", 22, is_open=False)
    assert target.is_service_open("SSH") is False
    assert target.is_service_open("FTP") is False


def test_list_open_services_keeps_order_and_skips_closed():
    target = Target("host")
    target.add_service("HTTP", 80)
    target.add_service("SSH", 22, is_open=False)
    target.add_service("FTP", 21)
    assert target.list_open_services() == ["HTTP", "FTP"]


def test_adding_service_again_replaces_entry():
    target = Target("host")
    target.add_service("HTTP", 80)
    target.add_service("HTTP", 8080, is_open=False)
    assert target.is_service_open("HTTP") is False
    assert target.service_port("HTTP") == 8080


def test_service_port_unknown_raises():
    with pytest.raises(KeyError):
        Target("host").service_port("HTTP")


def test_address_prefers_ip_over_id():
    assert Target("host", "10.0.0.5").address == "10.0.0.5"
    assert Target("host").address == "host"


def test_module_result_defaults():
    result = ModuleResult(module_id="m", success=False, message="msg")
    assert result.severity is Severity.LOW
    assert result.details is None
    assert result.attack_tactics == []
    assert result.mitigations == []
    assert result.attack_technique_id is None


def test_module_is_abstract():
    with pytest.raises(TypeError):
        Module()


def test_module_subclass_runs():
    class Echo(Module):
        module_id = "Echo"

        def run(self, target):
            return ModuleResult(self.module_id, True, "ok", target_id=target.id)

    result = Echo().run(Target("t1"))
    assert result.module_id == "Echo"
    assert result.target_id == "t1"
    assert result.success is True