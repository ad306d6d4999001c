from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StartupProfile:
    role: str
    host: str
    port: int


def _require_valid_port(port: int, field_name: str = "port") -> None:
    if int(port) < 1 or int(port) > 65535:
        raise ValueError(f"{field_name} must be in range 1..65535")


def _require_non_empty_host(host: str) -> None:
    if not str(host or "").strip():
        raise ValueError("host is required")


def validate_fileserver_profile(profile: StartupProfile) -> None:
    _require_non_empty_host(profile.host)
    _require_valid_port(profile.port)
