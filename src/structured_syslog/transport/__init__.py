"""
Transports for sending formatted syslog messages

This package provides socket transports over TCP, UDP and Unix domain sockets.
"""

from .base import BaseTransport
from .endpoints import Endpoint, InetEndpoint, UnixEndpoint
from .socket import SocketTransport

__all__ = [
    # Endpoints
    "Endpoint",
    "InetEndpoint",
    "UnixEndpoint",
    # Transports
    "BaseTransport",
    "SocketTransport",
]
