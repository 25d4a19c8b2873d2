"""Icinga DB object model, heartbeat reading and telemetry helpers."""

__version__ = "0.1.0"