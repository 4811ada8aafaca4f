"""
logging.Handler that forwards records to a syslog collector
"""

import logging
from typing import Any, Mapping, Optional

from .client import SyslogClient
from .config import SyslogConfig, get_default_config
from .levels import severity_for_level
from .message import StructuredDataElement, SyslogMessage


class SyslogHandler(logging.Handler):
    """
    RFC 5424 syslog handler for the standard logging module.

    Each record is formatted with the handler's formatter and sent
    synchronously through a SyslogClient. Structured data can be attached
    per record::

        logger.info("login", extra={"structured_data": {"auth@32473": {"user": "bob"}}})

    Args:
        client: Client to send with. When omitted, one is built from
            ``config`` (or the default configuration) and owned by the handler.
        config: Configuration used to build the client
        msg_id: MSGID header value for every record
        level: Handler level
    """

    STRUCTURED_DATA_ATTR = "structured_data"

    def __init__(
        self,
        client: Optional[SyslogClient] = None,
        config: Optional[SyslogConfig] = None,
        msg_id: str = "",
        level: int = logging.NOTSET,
    ):
        super().__init__(level)
        self._owns_client = client is None
        if client is None:
            client = (config or get_default_config()).create_client()
        self.client = client
        self.msg_id = msg_id

    def build_message(self, record: logging.LogRecord) -> SyslogMessage:
        message = self.client.create_message(
            severity_for_level(record.levelno), self.format(record), self.msg_id
        )

        structured_data: Mapping[str, Mapping[Any, Any]] = getattr(
            record, self.STRUCTURED_DATA_ATTR, None
        ) or {}
        message.add_sd_elements(
            StructuredDataElement.from_dict(sd_id, params)
            for sd_id, params in structured_data.items()
        )
        return message

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if not self.client.send_message(self.build_message(record)):
                raise OSError("syslog transport reported a failed write")
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            if self._owns_client:
                self.client.close()
        finally:
            self.release()
        super().close()
