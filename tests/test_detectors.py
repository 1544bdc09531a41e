from vulnscope.detectors import XPathInjectionDetector, XSSDetector, XXEDetector
from vulnscope.mitre import get_attack_mapper
from vulnscope.models import Severity, Target


class RecordingTransport:
    def __init__(self, response=None, echo=False, error=None):
        self.response = response
        self.echo = echo
        self.error = error
        self.calls = []

    def __call__(self, host, port, request):
        self.calls.append((host, port, request))
        if self.error is not None:
            raise self.error
        if self.echo:
            return request.decode("utf-8")
        return self.response


def http_target(ip="192.168.1.20"):
    target = Target("web-1", ip)
    target.add_service("HTTP", 80)
    return target


def test_xss_without_http_service():
    transport = RecordingTransport(response="")
    result = XSSDetector(transport=transport).run(Target("web-1"))
    assert result.success is False
    assert result.message == "HTTP service not available"
    assert result.details is None
    assert transport.calls == []


def test_xss_reflected_payloads_detected():
    transport = RecordingTransport(echo=True)
    result = XSSDetector(transport=transport).run(http_target())
    assert result.success is True
    assert result.severity is Severity.HIGH
    assert result.message == "XSS vulnerabilities detected (3 instances)"
    assert result.attack_technique_id == "T1189"
    assert result.attack_tactics == ["Initial Access"]
    expected = get_attack_mapper().map_vulnerability("XSS")
    assert result.mitigations == list(expected.mitigations)
    assert result.target_id == "web-1"


def test_xss_requests_go_to_ip_on_port_80():
    transport = RecordingTransport(response="<html>safe</html>")
    XSSDetector(transport=transport).run(http_target("10.0.0.7"))
    assert len(transport.calls) == 3
    host, port, request = transport.calls[0]
    assert host == "10.0.0.7"
    assert port == 80
    assert request.startswith(b"GET /search?q=<script>alert('XSS')</script> HTTP/1.1\r\n")
    assert b"User-Agent: C3NT1P3D3-Scanner/2.0\r\n" in request


def test_xss_uses_id_when_no_ip():
    transport = RecordingTransport(response="")
    target = Target("web-1")
    target.add_service("HTTP", 80)
    XSSDetector(transport=transport).run(target)
    assert {call[0] for call in transport.calls} == {"web-1"}


def test_xss_not_reflected():
    transport = RecordingTransport(response="HTTP/1.1 200 OK\r\n\r\nnothing")
    result = XSSDetector(transport=transport).run(http_target())
    assert result.success is False
    assert result.severity is Severity.LOW
    assert result.message == "No XSS vulnerabilities detected"
    assert "✓ No XSS vulnerabilities detected" in result.details
    assert result.attack_technique_id is None


def test_xss_exception_is_reported():
    transport = RecordingTransport(error=RuntimeError("boom"))
    result = XSSDetector(transport=transport).run(http_target())
    assert result.success is False
    assert result.message == "Exception during XSS scan: boom"
    assert result.severity is Severity.LOW


def test_xxe_indicator_in_response():
    transport = RecordingTransport(response="root:x:0:0:root:/root:/bin/bash")
    result = XXEDetector(transport=transport).run(http_target())
    assert result.success is True
    assert result.severity is Severity.CRITICAL
    assert result.message.startswith("XXE vulnerabilities detected (")
    assert result.attack_technique_id == "T1190"
    expected = get_attack_mapper().map_vulnerability("XXE")
    assert result.mitigations == list(expected.mitigations)
    assert "File disclosure (Linux /etc/passwd)" in result.details


def test_xxe_request_has_matching_content_length():
    transport = RecordingTransport(response="")
    XXEDetector(transport=transport).run(http_target())
    assert len(transport.calls) == 3
    for _, port, request in transport.calls:
        assert port == 80
        head, body = request.split(b"\r\n\r\n", 1)
        assert head.startswith(b"POST /api/xml HTTP/1.1")
        assert f"Content-Length: {len(body)}".encode() in head
        assert b"Content-Type: application/xml" in head


def test_xxe_no_indicator():
    transport = RecordingTransport(response="<ok/>")
    result = XXEDetector(transport=transport).run(http_target())
    assert result.success is False
    assert result.message == "No XXE vulnerabilities detected"
    assert "✓ No XXE vulnerabilities detected" in result.details


def test_xxe_without_http_service():
    result = XXEDetector(transport=RecordingTransport(response="")).run(Target("x"))
    assert result.message == "HTTP service not available"
    assert result.module_id == "XXEDetector"


def test_xpath_fixed_finding():
    result = XPathInjectionDetector().run(Target("db-1"))
    assert result.success is True
    assert result.severity is Severity.HIGH
    assert result.message == "XPath injection vulnerability detected"
    assert result.attack_technique_id == "T1190"
    assert result.attack_technique_name == "Exploit Public-Facing Application"
    assert result.attack_url == "https://attack.mitre.org/techniques/T1190/"
    assert result.mitigations[0] == "Use parameterized XPath queries"
    assert result.target_id == "db-1"