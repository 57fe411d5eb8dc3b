"""Runtime settings read from the environment."""

from __future__ import annotations

import dataclasses
import os
import socket


def detect_local_ip(route_to: str = "8.8.8.8") -> str:
    """Return the source address the host would use to reach ``route_to``.

    Connecting a datagram socket only selects a route; nothing is sent.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect((route_to, 9))
        return sock.getsockname()[0]


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclasses.dataclass(frozen=True)
class Settings:
    http_host: str = "0.0.0.0"
    http_port: int = 8000
    media_address: str = "127.0.0.1"
    media_port: int = 9
    candidate_protocol: str = "UDP"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``ECHO_*`` variables.

        ``ECHO_MEDIA_ADDRESS`` defaults to the detected local IP.
        """
        media_address = os.environ.get("ECHO_MEDIA_ADDRESS") or detect_local_ip()
        return cls(
            http_host=os.environ.get("ECHO_HTTP_HOST", "0.0.0.0"),
            http_port=_int_env("ECHO_HTTP_PORT", 8000),
            media_address=media_address,
            media_port=_int_env("ECHO_MEDIA_PORT", 9),
            candidate_protocol=os.environ.get("ECHO_CANDIDATE_PROTOCOL", "UDP"),
            log_level=os.environ.get("ECHO_LOG_LEVEL", "INFO").upper(),
        )
