"""
Transport endpoints: an internet (host, port) pair or a Unix socket path
"""

import socket
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class InetEndpoint:
    """TCP or UDP destination"""

    host: str
    port: int

    @property
    def family(self) -> int:
        return socket.AF_INET

    @property
    def address(self) -> Tuple[str, int]:
        return (self.host, self.port)

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class UnixEndpoint:
    """Unix domain socket destination"""

    path: str

    @property
    def family(self) -> int:
        return socket.AF_UNIX

    @property
    def address(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path


Endpoint = Union[InetEndpoint, UnixEndpoint]
