"""
Socket transport for stream (TCP, Unix) and datagram (UDP, Unix) sockets
"""

import logging
import socket
from typing import Optional

from ..exceptions import (
    MessageSizeExceededError,
    TransportConnectionError,
    UnsupportedSocketTypeError,
)
from .base import BaseTransport
from .endpoints import Endpoint, InetEndpoint, UnixEndpoint

logger = logging.getLogger(__name__)


class SocketTransport(BaseTransport):
    """
    Sends formatted messages over a connected socket.

    The behaviour depends on the socket type:

    - SOCK_STREAM: the whole buffer is written, continuing after short
      writes. There is no size limit.
    - SOCK_DGRAM: the buffer is sent as one datagram. Buffers larger than
      ``max_msg_size`` raise MessageSizeExceededError and are not sent.

    Write errors are logged and reported by ``send`` returning False.
    Timeouts are whatever the caller configured on the socket.

    Args:
        sock: A connected socket
        endpoint: The destination the socket is connected to
        max_msg_size: Datagram size limit in octets. Defaults to 480 for
            internet sockets and 2048 for Unix sockets. Ignored for streams.
    """

    # Keeps UDP datagrams below common path MTUs, avoiding IP fragmentation
    DEFAULT_UDP_MAX_MSG_SIZE = 480
    DEFAULT_UNIX_DGRAM_MAX_MSG_SIZE = 2048

    def __init__(
        self,
        sock: socket.socket,
        endpoint: Optional[Endpoint] = None,
        max_msg_size: Optional[int] = None,
    ):
        self.sock = sock
        self.endpoint = endpoint
        self.sock_type = sock.type
        self.max_msg_size: Optional[int] = None
        self._closed = False

        if self.sock_type == socket.SOCK_DGRAM:
            if max_msg_size is not None:
                self.max_msg_size = self._check_max_msg_size(max_msg_size)
            elif self._is_unix():
                self.max_msg_size = self.DEFAULT_UNIX_DGRAM_MAX_MSG_SIZE
            else:
                self.max_msg_size = self.DEFAULT_UDP_MAX_MSG_SIZE

    @classmethod
    def connect(
        cls,
        endpoint: Endpoint,
        sock_type: int,
        max_msg_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> "SocketTransport":
        """
        Create a socket of ``sock_type`` for ``endpoint`` and connect it.

        For datagram sockets connecting only fixes the default destination.

        Raises:
            TransportConnectionError: if the socket cannot be created or connected
            ValueError: if ``max_msg_size`` is not a positive integer
        """
        if max_msg_size is not None:
            cls._check_max_msg_size(max_msg_size)

        try:
            sock = socket.socket(endpoint.family, sock_type)
        except OSError as e:
            raise TransportConnectionError(
                f"Failed to create a socket for {endpoint}: {e}"
            ) from e

        try:
            if timeout is not None:
                sock.settimeout(timeout)
            sock.connect(endpoint.address)
        except OSError as e:
            sock.close()
            raise TransportConnectionError(f"Failed to connect to {endpoint}: {e}") from e

        logger.debug(f"Connected {socket.SocketKind(sock_type).name} socket to {endpoint}")
        return cls(sock, endpoint, max_msg_size)

    @classmethod
    def create_tcp(
        cls, host: str, port: int, timeout: Optional[float] = None
    ) -> "SocketTransport":
        return cls.connect(InetEndpoint(host, port), socket.SOCK_STREAM, timeout=timeout)

    @classmethod
    def create_udp(
        cls,
        host: str,
        port: int,
        max_msg_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> "SocketTransport":
        """
        Create a UDP transport.

        Only raise ``max_msg_size`` above the default of 480 octets when the
        path MTU to the collector is known to allow it.
        """
        return cls.connect(
            InetEndpoint(host, port),
            socket.SOCK_DGRAM,
            max_msg_size=max_msg_size,
            timeout=timeout,
        )

    @classmethod
    def create_unix(cls, path: str, timeout: Optional[float] = None) -> "SocketTransport":
        return cls.connect(UnixEndpoint(path), socket.SOCK_STREAM, timeout=timeout)

    @classmethod
    def create_unix_dgram(
        cls, path: str, timeout: Optional[float] = None
    ) -> "SocketTransport":
        return cls.connect(UnixEndpoint(path), socket.SOCK_DGRAM, timeout=timeout)

    @staticmethod
    def _check_max_msg_size(max_msg_size: int) -> int:
        if isinstance(max_msg_size, bool) or not isinstance(max_msg_size, int):
            raise ValueError(f"max_msg_size must be an integer, got {max_msg_size!r}")
        if max_msg_size <= 0:
            raise ValueError(f"max_msg_size must be positive, got {max_msg_size}")
        return max_msg_size

    def _is_unix(self) -> bool:
        if self.endpoint is not None:
            return isinstance(self.endpoint, UnixEndpoint)
        return getattr(socket, "AF_UNIX", None) == getattr(self.sock, "family", None)

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, data: bytes) -> bool:
        """
        Send one formatted message.

        Raises:
            MessageSizeExceededError: datagram larger than ``max_msg_size``
            UnsupportedSocketTypeError: socket is neither stream nor datagram
        """
        if self._closed:
            logger.warning(f"Attempted send on closed transport to {self.endpoint}")
            return False

        if self.sock_type == socket.SOCK_STREAM:
            return self._write_stream(data)
        if self.sock_type == socket.SOCK_DGRAM:
            return self._write_datagram(data)
        raise UnsupportedSocketTypeError(self.sock_type)

    def _write_stream(self, data: bytes) -> bool:
        """Write the whole buffer, resuming after short writes"""
        view = memoryview(data)
        while view:
            try:
                written = self.sock.send(view)
            except OSError as e:
                logger.warning(f"Stream write to {self.endpoint} failed: {e}")
                return False

            if written <= 0:
                logger.warning(f"Stream write to {self.endpoint} made no progress")
                return False

            view = view[written:]

        return True

    def _write_datagram(self, data: bytes) -> bool:
        size = len(data)
        if size > self.max_msg_size:
            raise MessageSizeExceededError(size, self.max_msg_size)

        try:
            sent = self.sock.send(data)
        except OSError as e:
            logger.warning(f"Datagram write to {self.endpoint} failed: {e}")
            return False

        if sent != size:
            logger.warning(f"Datagram to {self.endpoint} truncated: {sent}/{size} octets")
            return False
        return True

    def close(self) -> None:
        """Release the socket; calling it again does nothing"""
        if self._closed:
            return
        self._closed = True
        self.sock.close()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(endpoint={self.endpoint!r}, "
            f"sock_type={self.sock_type!r}, max_msg_size={self.max_msg_size!r})"
        )
