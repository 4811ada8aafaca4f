"""
Structured Syslog

RFC 5424 syslog messages with structured data, sent over TCP, UDP and Unix domain sockets.
"""

__version__ = "0.1.0"

from .client import SyslogClient
from .config import (
    SyslogConfig,
    TransportType,
    get_default_config,
    set_default_config,
)
from .exceptions import (
    DuplicateSDElementError,
    MessageSizeExceededError,
    SyslogError,
    TransportConnectionError,
    UnsupportedSocketTypeError,
)
from .formatter import BaseFormatter, RFC5424Formatter
from .handler import SyslogHandler
from .host import get_local_hostname, get_proc_id
from .levels import (
    Facility,
    Severity,
    filter_facility,
    filter_severity,
    severity_for_level,
)
from .message import StructuredDataElement, SyslogMessage
from .transport import (
    BaseTransport,
    Endpoint,
    InetEndpoint,
    SocketTransport,
    UnixEndpoint,
)

__all__ = [
    # Levels
    "Facility",
    "Severity",
    "filter_facility",
    "filter_severity",
    "severity_for_level",
    # Messages
    "SyslogMessage",
    "StructuredDataElement",
    # Formatters
    "BaseFormatter",
    "RFC5424Formatter",
    # Transports
    "Endpoint",
    "InetEndpoint",
    "UnixEndpoint",
    "BaseTransport",
    "SocketTransport",
    # Client and configuration
    "SyslogClient",
    "SyslogConfig",
    "TransportType",
    "get_default_config",
    "set_default_config",
    "SyslogHandler",
    # Host discovery
    "get_local_hostname",
    "get_proc_id",
    # Errors
    "SyslogError",
    "DuplicateSDElementError",
    "MessageSizeExceededError",
    "UnsupportedSocketTypeError",
    "TransportConnectionError",
]
