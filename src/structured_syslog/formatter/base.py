"""
Base class for syslog message formatters
"""

from ..message import SyslogMessage


class BaseFormatter:
    """Turns a SyslogMessage into the bytes put on the wire"""

    @staticmethod
    def calculate_priority(facility: int, severity: int) -> int:
        """PRI value: facility * 8 + severity"""
        return int(facility) * 8 + int(severity)

    def format(self, message: SyslogMessage) -> bytes:
        raise NotImplementedError("Subclasses must implement format")
