"""
Base class for syslog transports
"""

from typing import Any


class BaseTransport:
    """Sends already formatted syslog messages"""

    def send(self, data: bytes) -> bool:
        """Send ``data``; return False if the write failed"""
        raise NotImplementedError("Subclasses must implement send")

    def close(self) -> None:
        raise NotImplementedError("Subclasses must implement close")

    @property
    def closed(self) -> bool:
        raise NotImplementedError("Subclasses must implement closed")

    def __enter__(self) -> "BaseTransport":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        self.close()
        return False
