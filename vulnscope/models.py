"""Core types shared by detection modules: targets, results and the module interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """How serious a finding is."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass
class ModuleResult:
    """What a module reports after running against a target."""

    module_id: str
    success: bool
    message: str
    details: str | None = None
    severity: Severity = Severity.LOW
    target_id: str = ""
    attack_technique_id: str | None = None
    attack_technique_name: str | None = None
    attack_tactics: list[str] = field(default_factory=list)
    mitigations: list[str] = field(default_factory=list)
    attack_url: str | None = None


@dataclass
class _Service:
    port: int
    is_open: bool


@dataclass
class Target:
    """A host to scan, with the services it is known to expose."""

    id: str
    ip: str | None = None
    _services: dict[str, _Service] = field(default_factory=dict, init=False, repr=False)

    @property
    def address(self) -> str:
        """The address to connect to: the IP when known, otherwise the id."""
        return self.ip if self.ip is not None else self.id

    def add_service(self, service: str, port: int, is_open: bool = True) -> None:
        """Record a service on the given port, replacing any earlier entry."""
        self._services[service] = _Service(port, is_open)

    def is_service_open(self, service: str) -> bool:
        """True when the service is recorded and open."""
        entry = self._services.get(service)
        return entry is not None and entry.is_open

    def service_port(self, service: str) -> int:
        """Return the port recorded for a service; raises KeyError if unknown."""
        return self._services[service].port

    def list_open_services(self) -> list[str]:
        """Names of open services, in the order they were added."""
        return [name for name, entry in self._services.items() if entry.is_open]

    def __str__(self) -> str:
        services = ", ".join(
            f"{name}:{entry.port}" for name, entry in self._services.items() if entry.is_open
        )
        ip = self.ip if self.ip is not None else "N/A"
        return f"Target {self.id} (IP: {ip}) open services: [{services}]"


class Module(ABC):
    """A detection module that examines one target and reports a result."""

    module_id: str = ""

    @abstractmethod
    def run(self, target: Target) -> ModuleResult:
        """Examine ``target`` and describe what was found."""