"""Scanner settings grouped by concern, with JSON persistence and validation."""

from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from functools import lru_cache
from os import PathLike
from pathlib import Path
from typing import Any, TypeVar


class Environment(Enum):
    """Deployment stage the scanner runs in."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class SecurityConfig:
    """Encryption, concurrency, rate-limit and authentication settings."""

    enable_encryption: bool = True
    encryption_key_file: str = ""
    max_concurrent_scans: int = 10
    rate_limit_per_second: int = 100
    max_scan_duration_minutes: int = 60
    enable_audit_logging: bool = True
    require_authentication: bool = True
    authentication_token: str = ""


@dataclass
class NetworkConfig:
    """Timeouts, retries and packet limits for network operations."""

    connection_timeout_seconds: int = 30
    read_timeout_seconds: int = 15
    retry_attempts: int = 3
    retry_delay_seconds: int = 1
    enable_keep_alive: bool = True
    max_packet_size: int = 65536


@dataclass
class LoggingConfig:
    """Where and how much the scanner logs."""

    log_level: str = "INFO"
    log_file_path: str = "c3nt1p3d3.log"
    max_log_file_size_mb: int = 100
    max_log_files: int = 10
    enable_console_logging: bool = True
    enable_file_logging: bool = True
    enable_syslog: bool = False


@dataclass
class SimulationConfig:
    """Settings for running against simulated rather than real targets."""

    enable_simulation_mode: bool = False
    simulation_data_path: str = "simulation_data/"
    generate_mock_results: bool = True
    enable_network_simulation: bool = True
    simulation_delay_ms: int = 100


_C = TypeVar("_C")

_SECTIONS: dict[str, type] = {
    "security": SecurityConfig,
    "network": NetworkConfig,
    "logging": LoggingConfig,
    "simulation": SimulationConfig,
}


def _section_from_json(cls: type[_C], section: str, data: Any) -> _C:
    """Build a config section; keys that are absent take the section's defaults."""
    if not isinstance(data, dict):
        raise ValueError(f"section '{section}' must be a JSON object")
    defaults = cls()
    values: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        if f.name not in data:
            continue
        value = data[f.name]
        expected = type(getattr(defaults, f.name))
        if expected is bool:
            ok = isinstance(value, bool)
        elif expected is int:
            ok = isinstance(value, int) and not isinstance(value, bool)
        else:
            ok = isinstance(value, expected)
        if not ok:
            raise ValueError(
                f"'{section}.{f.name}' must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        values[f.name] = value
    return replace(defaults, **values)


class ConfigurationManager:
    """Holds the scanner's configuration; reads and writes it as JSON."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._custom_values: dict[str, str] = {}
        self.reset()

    def reset(self) -> None:
        """Restore every setting to its default value."""
        with self._lock:
            self._environment = Environment.DEVELOPMENT
            self._security = SecurityConfig(require_authentication=False)
            self._network = NetworkConfig()
            self._logging = LoggingConfig()
            self._simulation = SimulationConfig()

    @property
    def security(self) -> SecurityConfig:
        with self._lock:
            return self._security

    @security.setter
    def security(self, config: SecurityConfig) -> None:
        self._assign("_security", config, SecurityConfig)

    @property
    def network(self) -> NetworkConfig:
        with self._lock:
            return self._network

    @network.setter
    def network(self, config: NetworkConfig) -> None:
        self._assign("_network", config, NetworkConfig)

    @property
    def logging(self) -> LoggingConfig:
        with self._lock:
            return self._logging

    @logging.setter
    def logging(self, config: LoggingConfig) -> None:
        self._assign("_logging", config, LoggingConfig)

    @property
    def simulation(self) -> SimulationConfig:
        with self._lock:
            return self._simulation

    @simulation.setter
    def simulation(self, config: SimulationConfig) -> None:
        self._assign("_simulation", config, SimulationConfig)

    @property
    def environment(self) -> Environment:
        with self._lock:
            return self._environment

    @environment.setter
    def environment(self, env: Environment) -> None:
        if not isinstance(env, Environment):
            raise TypeError("environment must be an Environment")
        with self._lock:
            self._environment = env

    def _assign(self, attr: str, config: Any, cls: type) -> None:
        if not isinstance(config, cls):
            raise TypeError(f"expected {cls.__name__}, got {type(config).__name__}")
        with self._lock:
            setattr(self, attr, config)

    def load(self, path: str | PathLike[str]) -> None:
        """Read settings from a JSON file; sections not present are left untouched."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            root = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid configuration file: {exc}") from exc
        if not isinstance(root, dict):
            raise ValueError("configuration must be a JSON object")
        loaded = {
            name: _section_from_json(cls, name, root[name])
            for name, cls in _SECTIONS.items()
            if name in root
        }
        with self._lock:
            for name, section in loaded.items():
                setattr(self, "_" + name, section)

    def save(self, path: str | PathLike[str]) -> None:
        """Write all settings to a JSON file with two-space indentation."""
        with self._lock:
            root = {name: asdict(getattr(self, "_" + name)) for name in _SECTIONS}
        Path(path).write_text(json.dumps(root, indent=2) + "\n", encoding="utf-8")

    def validation_errors(self) -> list[str]:
        """Describe each setting that holds an unusable value."""
        with self._lock:
            errors = []
            if self._security.max_concurrent_scans <= 0:
                errors.append("max_concurrent_scans must be positive")
            if self._security.rate_limit_per_second <= 0:
                errors.append("rate_limit_per_second must be positive")
            if self._network.connection_timeout_seconds <= 0:
                errors.append("connection_timeout_seconds must be positive")
            return errors

    def is_valid(self) -> bool:
        """True when no validation errors are present."""
        return not self.validation_errors()

    def set_value(self, key: str, value: str) -> None:
        """Store a free-form setting under ``key``."""
        with self._lock:
            self._custom_values[key] = value

    def get_value(self, key: str) -> str:
        """Return a free-form setting; raises KeyError if it was never set."""
        with self._lock:
            try:
                return self._custom_values[key]
            except KeyError:
                raise KeyError(f"no configuration value for '{key}'") from None


@lru_cache(maxsize=None)
def get_configuration_manager() -> ConfigurationManager:
    """Return the shared configuration manager."""
    return ConfigurationManager()