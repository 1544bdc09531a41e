"""Simulated targets and scans for exercising the scanner without touching a network."""

from __future__ import annotations

import json
import random
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from os import PathLike
from pathlib import Path
from typing import Iterable

COMMON_SERVICES: tuple[str, ...] = (
    "http", "https", "ssh", "ftp", "smtp", "dns", "mysql", "postgresql",
    "mongodb", "redis", "telnet", "rdp", "smb", "snmp", "ldap",
)

SERVICE_VERSIONS: tuple[str, ...] = (
    "1.0.0", "1.2.3", "2.0.1", "2.1.4", "3.0.0", "3.2.1", "4.0.0",
)

BANNER_TEMPLATES: tuple[str, ...] = (
    "{service}/{version} Server ready",
    "{service} {version} - Welcome",
    "{service} service {version} running",
    "{service} version {version} - Production",
    "{service}/{version} - Secure Server",
)

SCAN_ERROR = "Scan error: Connection timeout"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class SimulationTarget:
    """A made-up host and the service it appears to run."""

    ip: str
    port: int
    service: str
    version: str
    banners: dict[str, str] = field(default_factory=dict)


@dataclass
class SimulationResult:
    """The outcome of a simulated scan of one target."""

    target: str
    vulnerabilities: list[str]
    risk_level: str
    confidence_score: float
    timestamp: datetime


def determine_risk_level(vulnerabilities: Iterable[str]) -> str:
    """Rate a list of findings as CRITICAL, HIGH, MEDIUM or LOW."""
    critical = high = medium = 0
    for vuln in vulnerabilities:
        if "Remote code execution" in vuln or "Authentication bypass" in vuln:
            critical += 1
        elif "SQL injection" in vuln or "XSS" in vuln:
            high += 1
        elif "CVE-" in vuln:
            medium += 1
    if critical:
        return "CRITICAL"
    if high:
        return "HIGH"
    if medium:
        return "MEDIUM"
    return "LOW"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _major_version(version: str) -> int:
    match = _LEADING_INT.match(version.split(".", 1)[0])
    return int(match.group(1)) if match else 1


class SimulationEngine:
    """Generates fake targets and plausible vulnerability findings for them."""

    def __init__(
        self,
        *,
        simulation_enabled: bool = False,
        delay_ms: int = 100,
        confidence_level: float = 0.85,
        realism_level: int = 7,
        error_rate: float = 0.05,
        rng: random.Random | None = None,
    ) -> None:
        self.simulation_enabled = simulation_enabled
        self.delay_ms = delay_ms
        self._rng = rng if rng is not None else random.Random()
        self._confidence_level = 0.85
        self._realism_level = 7
        self._error_rate = 0.05
        self.confidence_level = confidence_level
        self.realism_level = realism_level
        self.error_rate = error_rate

    @property
    def confidence_level(self) -> float:
        """Base confidence in findings, kept within 0.0 to 1.0."""
        return self._confidence_level

    @confidence_level.setter
    def confidence_level(self, level: float) -> None:
        self._confidence_level = _clamp(float(level), 0.0, 1.0)

    @property
    def realism_level(self) -> int:
        """How realistic findings are, kept within 1 to 10."""
        return self._realism_level

    @realism_level.setter
    def realism_level(self, level: int) -> None:
        self._realism_level = int(_clamp(int(level), 1, 10))

    @property
    def error_rate(self) -> float:
        """Probability that a simulated scan fails, kept within 0.0 to 1.0."""
        return self._error_rate

    @error_rate.setter
    def error_rate(self, rate: float) -> None:
        self._error_rate = _clamp(float(rate), 0.0, 1.0)

    def generate_targets(self, count: int) -> list[SimulationTarget]:
        """Generate ``count`` targets in 192.168.1.0/24."""
        return [self.generate_target("192.168.1.0/24") for _ in range(count)]

    def generate_target(self, ip_range: str) -> SimulationTarget:
        """Generate one target with an address drawn from ``ip_range``."""
        ip = self._random_ip(ip_range)
        port = self._rng.randint(1, 65535)
        service = self._random_service()
        version = self._random_version()
        banners = {"server": self.generate_mock_banner(service), "version": version}
        return SimulationTarget(ip, port, service, version, banners)

    def simulate_scan(self, target: SimulationTarget) -> SimulationResult:
        """Pretend to scan a target and return plausible findings."""
        if self.delay_ms > 0:
            time.sleep(self.delay_ms / 1000.0)

        address = f"{target.ip}:{target.port}"
        timestamp = datetime.now(timezone.utc)
        confidence = self._confidence_score()

        if self._rng.random() < self._error_rate:
            return SimulationResult(address, [SCAN_ERROR], "UNKNOWN", confidence, timestamp)

        vulnerabilities = self.generate_mock_vulnerabilities(target.service, target.version)
        return SimulationResult(
            address,
            vulnerabilities,
            determine_risk_level(vulnerabilities),
            confidence,
            timestamp,
        )

    def simulate_batch(self, targets: Iterable[SimulationTarget]) -> list[SimulationResult]:
        """Simulate a scan of each target in order."""
        return [self.simulate_scan(target) for target in targets]

    def generate_mock_banner(self, service: str) -> str:
        """Build a service banner from a random template."""
        banner = self._rng.choice(BANNER_TEMPLATES)
        banner = banner.replace("{service}", service, 1)
        return banner.replace("{version}", self._random_version(), 1)

    def generate_mock_vulnerabilities(self, service: str, version: str) -> list[str]:
        """Draw findings whose likelihood depends on service, version and realism."""
        rng = self._rng
        probability = self._realism_level / 10.0 * self._confidence_level
        found: list[str] = []

        if service in ("http", "https"):
            if rng.random() < probability * 0.7:
                found.append("CVE-2023-XXXX: XSS vulnerability in web interface")
            if rng.random() < probability * 0.5:
                found.append("CVE-2023-XXXX: SQL injection in login form")

        if service == "ssh" and rng.random() < probability * 0.6:
            found.append("CVE-2023-XXXX: Weak SSH key exchange algorithms")

        if service in ("mysql", "postgresql") and rng.random() < probability * 0.8:
            found.append("CVE-2023-XXXX: Default database credentials")

        if _major_version(version) < 3 and rng.random() < probability * 0.9:
            found.append("CVE-2023-XXXX: Outdated software with known vulnerabilities")

        if not found and rng.random() < 0.3:
            found.append("INFO: Service banner reveals version information")

        return found

    def export_simulation_data(self, filename: str | PathLike[str]) -> None:
        """Write the engine's settings to a JSON file."""
        data = {
            "simulation_config": {
                "delay_ms": self.delay_ms,
                "confidence_level": self._confidence_level,
                "realism_level": self._realism_level,
                "error_rate": self._error_rate,
            }
        }
        Path(filename).write_text(json.dumps(data, indent=2), encoding="utf-8")

    def import_simulation_data(self, filename: str | PathLike[str]) -> None:
        """Load settings from a JSON file written by ``export_simulation_data``."""
        root = json.loads(Path(filename).read_text(encoding="utf-8"))
        if not isinstance(root, dict):
            raise ValueError("simulation data must be a JSON object")
        config = root.get("simulation_config")
        if config is None:
            return
        if not isinstance(config, dict):
            raise ValueError("simulation_config must be a JSON object")
        self.delay_ms = int(config.get("delay_ms", 100))
        self.confidence_level = config.get("confidence_level", 0.85)
        self.realism_level = config.get("realism_level", 7)
        self.error_rate = config.get("error_rate", 0.05)

    def _random_ip(self, ip_range: str) -> str:
        if ip_range == "192.168.1.0/24":
            return f"192.168.1.{self._rng.randint(1, 254)}"
        if ip_range == "10.0.0.0/8":
            octets = (self._rng.randint(0, 255) for _ in range(3))
            return "10." + ".".join(str(octet) for octet in octets)
        return "192.168.1.100"

    def _random_service(self) -> str:
        return self._rng.choice(COMMON_SERVICES)

    def _random_version(self) -> str:
        return self._rng.choice(SERVICE_VERSIONS)

    def _confidence_score(self) -> float:
        mean = self._confidence_level * (self._realism_level / 10.0)
        return _clamp(self._rng.normalvariate(mean, 0.1), 0.0, 1.0)