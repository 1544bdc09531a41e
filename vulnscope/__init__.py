"""Vulnerability detection with ATT&CK mapping, scan simulation, configuration and detectors."""

__version__ = "3.0.0"
__all__ = ["config", "detectors", "mitre", "models", "simulation"]