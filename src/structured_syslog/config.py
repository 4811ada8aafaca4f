import os
from dataclasses import dataclass
from typing import Literal, Optional

from .client import SyslogClient
from .formatter import BaseFormatter
from .levels import DEFAULT_FACILITY
from .transport import SocketTransport

TransportType = Literal["udp", "tcp", "unix", "unix_dgram"]

TRANSPORT_TYPES = ("udp", "tcp", "unix", "unix_dgram")


@dataclass
class SyslogConfig:
    """Configuration for a syslog client and its transport"""

    # Transport settings
    transport: TransportType = "udp"
    host: str = "localhost"
    port: int = 514
    socket_path: str = "/dev/log"
    max_msg_size: Optional[int] = None  # UDP only; None keeps the 480 octet default
    timeout: Optional[float] = None  # None leaves the socket blocking

    # Message defaults
    facility: int = int(DEFAULT_FACILITY)
    app_name: str = ""
    hostname: Optional[str] = None  # None discovers the local host name

    @classmethod
    def _parse_optional_int_env(cls, key: str) -> Optional[int]:
        value = os.getenv(key)
        return int(value) if value else None

    @classmethod
    def _parse_optional_float_env(cls, key: str) -> Optional[float]:
        value = os.getenv(key)
        return float(value) if value else None

    @classmethod
    def from_env(cls) -> "SyslogConfig":
        """Create configuration from environment variables"""
        return cls(
            transport=os.getenv("STRUCTURED_SYSLOG_TRANSPORT", "udp").lower(),
            host=os.getenv("STRUCTURED_SYSLOG_HOST", "localhost"),
            port=int(os.getenv("STRUCTURED_SYSLOG_PORT", "514")),
            socket_path=os.getenv("STRUCTURED_SYSLOG_SOCKET_PATH", "/dev/log"),
            max_msg_size=cls._parse_optional_int_env("STRUCTURED_SYSLOG_MAX_MSG_SIZE"),
            timeout=cls._parse_optional_float_env("STRUCTURED_SYSLOG_TIMEOUT"),
            facility=int(os.getenv("STRUCTURED_SYSLOG_FACILITY", "16")),
            app_name=os.getenv("STRUCTURED_SYSLOG_APP_NAME", ""),
            hostname=os.getenv("STRUCTURED_SYSLOG_HOSTNAME"),
        )

    def create_transport(self) -> SocketTransport:
        """
        Open the configured transport.

        Raises:
            ValueError: unknown transport type
            TransportConnectionError: the socket could not be connected
        """
        if self.transport == "udp":
            return SocketTransport.create_udp(
                self.host, self.port, max_msg_size=self.max_msg_size, timeout=self.timeout
            )
        elif self.transport == "tcp":
            return SocketTransport.create_tcp(self.host, self.port, timeout=self.timeout)
        elif self.transport == "unix":
            return SocketTransport.create_unix(self.socket_path, timeout=self.timeout)
        elif self.transport == "unix_dgram":
            return SocketTransport.create_unix_dgram(self.socket_path, timeout=self.timeout)

        raise ValueError(
            f"Unknown transport {self.transport!r}, expected one of {TRANSPORT_TYPES}"
        )

    def create_client(self, formatter: Optional[BaseFormatter] = None) -> SyslogClient:
        """Open the configured transport and wrap it in a client"""
        return SyslogClient(
            self.create_transport(),
            formatter=formatter,
            facility=self.facility,
            app_name=self.app_name,
            host_name=self.hostname,
        )


_default_config: Optional[SyslogConfig] = None


def get_default_config() -> SyslogConfig:
    """Get the default configuration instance"""
    global _default_config
    if _default_config is None:
        _default_config = SyslogConfig.from_env()
    return _default_config


def set_default_config(config: SyslogConfig) -> None:
    """Set the default configuration instance"""
    global _default_config
    _default_config = config
