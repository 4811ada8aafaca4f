"""
RFC 5424 syslog formatter
"""

import re
from datetime import datetime
from typing import Callable, Iterable, Optional, Union

from ..message import StructuredDataElement, SyslogMessage
from .base import BaseFormatter

# Every byte outside PRINTUSASCII (%d33-126) maps to "?"
_PRINTUSASCII_TABLE = bytes(b if 33 <= b <= 126 else ord("?") for b in range(256))

_SD_NAME_FORBIDDEN = b'=]"'

_PARAM_VALUE_SPECIALS = re.compile(r'["\\\]]')


def _local_now() -> datetime:
    return datetime.now().astimezone()


class RFC5424Formatter(BaseFormatter):
    """
    Formats messages according to the RFC 5424 ABNF:

        <PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID STRUCTURED-DATA MSG

    Header fields are truncated to their maximum length and any byte that is
    not printable US-ASCII is replaced with "?". SD-IDs and SD-PARAM names
    lose the characters ``=``, ``]`` and ``"``; SD-PARAM values get ``"``,
    ``\\`` and ``]`` backslash-escaped. A body that is not pure ASCII is sent
    as UTF-8 preceded by a BOM.

    Args:
        clock: Returns the time used for the TIMESTAMP field. Naive values
            are taken as local time.
    """

    VERSION = 1
    SP = b" "
    NILVALUE = b"-"
    UTF8_BOM = b"\xef\xbb\xbf"

    HOSTNAME_MAX_LEN = 255
    APP_NAME_MAX_LEN = 48
    PROCID_MAX_LEN = 128
    MSGID_MAX_LEN = 32
    SD_NAME_MAX_LEN = 32

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or _local_now

    def format(self, message: SyslogMessage) -> bytes:
        return (
            self.format_header(message)
            + self.SP
            + self.format_structured_data(message.sd_elements)
            + self.SP
            + self.format_msg(message.msg)
        )

    def format_header(self, message: SyslogMessage) -> bytes:
        """HEADER = PRI VERSION SP TIMESTAMP SP HOSTNAME SP APP-NAME SP PROCID SP MSGID"""
        priority = self.calculate_priority(message.facility, message.severity)
        return self.SP.join(
            [
                f"<{priority}>{self.VERSION}".encode("ascii"),
                self.format_timestamp(),
                self.filter_header_field(message.host_name, self.HOSTNAME_MAX_LEN),
                self.filter_header_field(message.app_name, self.APP_NAME_MAX_LEN),
                self.filter_header_field(message.proc_id, self.PROCID_MAX_LEN),
                self.filter_header_field(message.msg_id, self.MSGID_MAX_LEN),
            ]
        )

    def format_timestamp(self) -> bytes:
        """Current time as YYYY-MM-DDThh:mm:ss+hh:mm"""
        now = self.clock()
        if now.tzinfo is None:
            now = now.astimezone()
        return now.replace(microsecond=0).isoformat().encode("ascii")

    def format_structured_data(
        self, sd_elements: Iterable[StructuredDataElement]
    ) -> bytes:
        parts = []
        for element in sd_elements:
            params = b"".join(
                self.SP + self.format_sd_param(name, value)
                for name, value in element.items()
            )
            parts.append(b"[" + self.filter_sd_name(element.id) + params + b"]")

        if not parts:
            return self.NILVALUE
        return b"".join(parts)

    def format_sd_param(self, name: str, value: str) -> bytes:
        """SD-PARAM = PARAM-NAME "=" %d34 PARAM-VALUE %d34"""
        return (
            self.filter_sd_name(name) + b'="' + self.escape_param_value(value) + b'"'
        )

    def format_msg(self, msg: Union[str, bytes]) -> bytes:
        """MSG: plain ASCII as is, anything else as UTF-8 with a BOM"""
        if isinstance(msg, bytes):
            if msg.isascii():
                return msg
            return self.UTF8_BOM + msg.decode("utf-8", errors="replace").encode("utf-8")

        data = msg.encode("utf-8", errors="replace")
        if data.isascii():
            return data
        return self.UTF8_BOM + data

    def filter_header_field(self, value: str, max_len: int) -> bytes:
        """Empty -> NILVALUE, otherwise truncate to max_len octets and keep PRINTUSASCII"""
        if not value:
            return self.NILVALUE
        data = value.encode("utf-8", errors="replace")[:max_len]
        return data.translate(_PRINTUSASCII_TABLE)

    def filter_sd_name(self, name: str) -> bytes:
        """SD-NAME: 1*32PRINTUSASCII except '=', SP, ']' and '"'"""
        data = name.encode("utf-8", errors="replace")
        data = data.translate(None, _SD_NAME_FORBIDDEN)
        return data.translate(_PRINTUSASCII_TABLE)[: self.SD_NAME_MAX_LEN]

    @staticmethod
    def escape_param_value(value: str) -> bytes:
        """Escape '"', '\\' and ']' with a backslash in one pass, then encode as UTF-8"""
        escaped = _PARAM_VALUE_SPECIALS.sub(r"\\\g<0>", value)
        return escaped.encode("utf-8", errors="replace")
