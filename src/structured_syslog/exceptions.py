"""
Exceptions raised by structured_syslog
"""

from typing import Optional


class SyslogError(Exception):
    """Base class for all structured_syslog errors"""

    pass


class DuplicateSDElementError(SyslogError, ValueError):
    """Raised when a structured data element with the same SD-ID already exists"""

    def __init__(self, sd_id: str):
        super().__init__(f"SD-ELEMENT with SD-ID {sd_id!r} already exists")
        self.sd_id = sd_id


class MessageSizeExceededError(SyslogError):
    """Raised when a datagram is larger than the transport's maximum message size"""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            f"Message of {size} octets exceeds the datagram limit of {max_size} octets"
        )
        self.size = size
        self.max_size = max_size


class UnsupportedSocketTypeError(SyslogError, ValueError):
    """Raised when sending over a socket that is neither stream nor datagram"""

    def __init__(self, sock_type: Optional[int]):
        super().__init__(f"The socket type {sock_type} is not supported")
        self.sock_type = sock_type


class TransportConnectionError(SyslogError, OSError):
    """Raised when a transport socket cannot be created or connected"""

    pass
