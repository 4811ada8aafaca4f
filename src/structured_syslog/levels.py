"""
Syslog facility and severity catalogs (RFC 5424, section 6.2.1)
"""

import logging
from enum import IntEnum
from typing import Any, Dict


class Facility(IntEnum):
    """Syslog facilities"""

    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    AUDIT = 13
    ALERT = 14
    CLOCK = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23


class Severity(IntEnum):
    """Syslog severities, most severe first"""

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


DEFAULT_FACILITY = Facility.LOCAL0
DEFAULT_SEVERITY = Severity.EMERG

# Python logging levels -> syslog severities
LOGGING_SEVERITIES: Dict[int, Severity] = {
    logging.CRITICAL: Severity.CRIT,
    logging.ERROR: Severity.ERR,
    logging.WARNING: Severity.WARNING,
    logging.INFO: Severity.INFO,
    logging.DEBUG: Severity.DEBUG,
}


def _to_int(value: Any) -> Any:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def filter_facility(facility: Any) -> int:
    """Return ``facility`` as an int, or LOCAL0 if it is not a valid facility"""
    value = _to_int(facility)
    if value is None or value < Facility.KERN or value > Facility.LOCAL7:
        return int(DEFAULT_FACILITY)
    return value


def filter_severity(severity: Any) -> int:
    """
    Return ``severity`` as an int, or EMERG if it is not a valid severity.

    An unknown severity escalates to the most severe level rather than
    being dropped to a neutral one.
    """
    value = _to_int(severity)
    if value is None or value < Severity.EMERG or value > Severity.DEBUG:
        return int(DEFAULT_SEVERITY)
    return value


def severity_for_level(levelno: int) -> Severity:
    """Map a Python logging level number to the closest syslog severity"""
    if levelno in LOGGING_SEVERITIES:
        return LOGGING_SEVERITIES[levelno]
    if levelno >= logging.CRITICAL:
        return Severity.CRIT
    if levelno >= logging.ERROR:
        return Severity.ERR
    if levelno >= logging.WARNING:
        return Severity.WARNING
    if levelno >= logging.INFO:
        return Severity.INFO
    return Severity.DEBUG
