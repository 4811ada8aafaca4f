"""
Formatters turning syslog messages into wire bytes
"""

from .base import BaseFormatter
from .rfc5424 import RFC5424Formatter

__all__ = [
    "BaseFormatter",
    "RFC5424Formatter",
]
