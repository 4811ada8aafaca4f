"""
Syslog client: the high level entry point for sending messages
"""

import copy
import logging
from typing import Any, Optional, Union

from .formatter import BaseFormatter, RFC5424Formatter
from .host import get_local_hostname, get_proc_id
from .levels import DEFAULT_FACILITY, filter_facility, filter_severity
from .message import SyslogMessage
from .transport import BaseTransport

logger = logging.getLogger(__name__)


class SyslogClient:
    """
    Formats messages and sends them over a transport.

    Facility, app name and host name are used for every message created by
    the client. Out of range facilities fall back to LOCAL0 and out of range
    severities escalate to EMERG.

    Example:
        with SyslogClient(SocketTransport.create_udp("localhost", 514),
                          app_name="billing") as client:
            client.send(Severity.INFO, "invoice generated")
    """

    def __init__(
        self,
        transport: BaseTransport,
        formatter: Optional[BaseFormatter] = None,
        facility: int = DEFAULT_FACILITY,
        app_name: str = "",
        host_name: Optional[str] = None,
    ):
        self.transport = transport
        self.formatter = formatter or RFC5424Formatter()
        self.facility = facility
        self.app_name = app_name
        self.host_name = get_local_hostname() if host_name is None else host_name

    @property
    def facility(self) -> int:
        return self._facility

    @facility.setter
    def facility(self, facility: Any) -> None:
        self._facility = filter_facility(facility)
        if self._facility != facility:
            logger.debug(f"Facility {facility!r} out of range, using {self._facility}")

    @property
    def app_name(self) -> str:
        return self._app_name

    @app_name.setter
    def app_name(self, app_name: Any) -> None:
        self._app_name = "" if app_name is None else str(app_name)

    @property
    def host_name(self) -> str:
        return self._host_name

    @host_name.setter
    def host_name(self, host_name: Any) -> None:
        self._host_name = "" if host_name is None else str(host_name)

    def with_formatter(self, formatter: BaseFormatter) -> "SyslogClient":
        """Copy of this client using ``formatter``"""
        client = copy.copy(self)
        client.formatter = formatter
        return client

    def with_transport(self, transport: BaseTransport) -> "SyslogClient":
        """Copy of this client using ``transport``"""
        client = copy.copy(self)
        client.transport = transport
        return client

    def create_message(
        self, severity: Any, msg: Union[str, bytes], msg_id: str = ""
    ) -> SyslogMessage:
        return SyslogMessage(
            facility=self.facility,
            severity=filter_severity(severity),
            msg=msg,
            app_name=self.app_name,
            host_name=self.host_name,
            proc_id=get_proc_id(),
            msg_id=msg_id,
        )

    def send(self, severity: Any, msg: Union[str, bytes], msg_id: str = "") -> bool:
        """
        Send ``msg`` with the given severity.

        Returns:
            The transport's result: False if the write failed

        Raises:
            MessageSizeExceededError: the formatted message does not fit in a datagram
        """
        return self.send_message(self.create_message(severity, msg, msg_id))

    def send_message(self, message: SyslogMessage) -> bool:
        """Format and send an already built message"""
        return self.transport.send(self.formatter.format(message))

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "SyslogClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        self.close()
        return False
