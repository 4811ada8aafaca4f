"""
Tests for socket transports
"""

import os
import shutil
import socket
import tempfile
from unittest.mock import Mock, patch

import pytest

from structured_syslog import (
    InetEndpoint,
    MessageSizeExceededError,
    SocketTransport,
    TransportConnectionError,
    UnixEndpoint,
    UnsupportedSocketTypeError,
)

requires_unix_sockets = pytest.mark.skipif(
    not hasattr(socket, "AF_UNIX"), reason="Unix domain sockets not available"
)


def mock_socket(sock_type):
    sock = Mock()
    sock.type = sock_type
    return sock


class TestEndpoints:
    def test_inet_endpoint(self):
        endpoint = InetEndpoint("syslog.example.com", 514)

        assert endpoint.family == socket.AF_INET
        assert endpoint.address == ("syslog.example.com", 514)
        assert str(endpoint) == "syslog.example.com:514"

    @requires_unix_sockets
    def test_unix_endpoint(self):
        endpoint = UnixEndpoint("/dev/log")

        assert endpoint.family == socket.AF_UNIX
        assert endpoint.address == "/dev/log"

    def test_endpoints_are_distinct_types(self):
        assert InetEndpoint("localhost", 514) != UnixEndpoint("localhost")


class TestStreamSend:
    def test_full_write(self):
        sock = mock_socket(socket.SOCK_STREAM)
        sock.send.return_value = 30
        transport = SocketTransport(sock, InetEndpoint("localhost", 514))

        assert transport.send(b"x" * 30) is True
        sock.send.assert_called_once()

    def test_short_writes_are_completed(self):
        sock = mock_socket(socket.SOCK_STREAM)
        sock.send.side_effect = [10, 20]
        transport = SocketTransport(sock, InetEndpoint("localhost", 514))
        data = bytes(range(30))

        assert transport.send(data) is True

        calls = sock.send.call_args_list
        assert len(calls) == 2
        assert bytes(calls[0].args[0]) == data
        assert bytes(calls[1].args[0]) == data[10:]
        assert len(calls[0].args[0][:10]) + len(calls[1].args[0]) == 30

    def test_many_short_writes(self):
        sock = mock_socket(socket.SOCK_STREAM)
        sock.send.return_value = 1
        transport = SocketTransport(sock)

        assert transport.send(b"abcde") is True
        assert sock.send.call_count == 5
        assert [bytes(call.args[0]) for call in sock.send.call_args_list] == [
            b"abcde", b"bcde", b"cde", b"de", b"e"
        ]

    def test_write_error_returns_false(self):
        sock = mock_socket(socket.SOCK_STREAM)
        sock.send.side_effect = [10, BrokenPipeError("peer closed")]
        transport = SocketTransport(sock)

        assert transport.send(b"x" * 30) is False
        assert sock.send.call_count == 2

    def test_no_progress_returns_false(self):
        sock = mock_socket(socket.SOCK_STREAM)
        sock.send.return_value = 0
        transport = SocketTransport(sock)

        assert transport.send(b"data") is False
        sock.send.assert_called_once()

    def test_no_size_limit(self):
        sock = mock_socket(socket.SOCK_STREAM)
        sock.send.side_effect = lambda view: len(view)
        transport = SocketTransport(sock, max_msg_size=10)

        assert transport.max_msg_size is None
        assert transport.send(b"x" * 100000) is True


class TestDatagramSend:
    def test_udp_default_limit(self):
        transport = SocketTransport(mock_socket(socket.SOCK_DGRAM), InetEndpoint("localhost", 514))

        assert transport.max_msg_size == 480

    def test_unix_default_limit(self):
        transport = SocketTransport(mock_socket(socket.SOCK_DGRAM), UnixEndpoint("/dev/log"))

        assert transport.max_msg_size == 2048

    def test_custom_limit(self):
        transport = SocketTransport(
            mock_socket(socket.SOCK_DGRAM), InetEndpoint("localhost", 514), max_msg_size=1400
        )

        assert transport.max_msg_size == 1400

    @pytest.mark.parametrize("max_msg_size", [0, -480, 1.5, "480", True])
    def test_invalid_limit(self, max_msg_size):
        with pytest.raises(ValueError):
            SocketTransport(
                mock_socket(socket.SOCK_DGRAM), InetEndpoint("localhost", 514), max_msg_size
            )

    def test_message_at_limit_is_sent(self):
        sock = mock_socket(socket.SOCK_DGRAM)
        sock.send.return_value = 480
        transport = SocketTransport(sock, InetEndpoint("localhost", 514))

        assert transport.send(b"x" * 480) is True
        sock.send.assert_called_once_with(b"x" * 480)

    def test_message_over_limit_is_not_sent(self):
        sock = mock_socket(socket.SOCK_DGRAM)
        transport = SocketTransport(sock, InetEndpoint("localhost", 514))

        with pytest.raises(MessageSizeExceededError) as exc_info:
            transport.send(b"x" * 481)

        assert exc_info.value.size == 481
        assert exc_info.value.max_size == 480
        sock.send.assert_not_called()

    def test_write_error_returns_false(self):
        sock = mock_socket(socket.SOCK_DGRAM)
        sock.send.side_effect = ConnectionRefusedError("nobody listening")
        transport = SocketTransport(sock, InetEndpoint("localhost", 514))

        assert transport.send(b"hello") is False

    def test_partial_datagram_returns_false(self):
        sock = mock_socket(socket.SOCK_DGRAM)
        sock.send.return_value = 3
        transport = SocketTransport(sock, InetEndpoint("localhost", 514))

        assert transport.send(b"hello") is False


class TestUnsupportedSocket:
    def test_send_is_not_attempted(self):
        sock = mock_socket(socket.SOCK_RAW)
        transport = SocketTransport(sock)

        with pytest.raises(UnsupportedSocketTypeError):
            transport.send(b"hello")
        sock.send.assert_not_called()


class TestClose:
    def test_close_is_idempotent(self):
        sock = mock_socket(socket.SOCK_STREAM)
        transport = SocketTransport(sock)

        transport.close()
        transport.close()

        assert transport.closed is True
        sock.close.assert_called_once()

    def test_send_after_close_returns_false(self):
        sock = mock_socket(socket.SOCK_STREAM)
        transport = SocketTransport(sock)
        transport.close()

        assert transport.send(b"hello") is False
        sock.send.assert_not_called()

    def test_context_manager_closes(self):
        sock = mock_socket(socket.SOCK_DGRAM)

        with SocketTransport(sock, InetEndpoint("localhost", 514)) as transport:
            assert transport.closed is False

        sock.close.assert_called_once()


class TestConnect:
    @patch("socket.socket")
    def test_socket_creation_failure(self, mock_socket_class):
        mock_socket_class.side_effect = OSError("too many open files")

        with pytest.raises(TransportConnectionError) as exc_info:
            SocketTransport.create_tcp("localhost", 514)

        assert isinstance(exc_info.value, OSError)
        assert isinstance(exc_info.value.__cause__, OSError)

    @patch("socket.socket")
    def test_connect_failure_closes_socket(self, mock_socket_class):
        sock = mock_socket(socket.SOCK_STREAM)
        sock.connect.side_effect = ConnectionRefusedError("refused")
        mock_socket_class.return_value = sock

        with pytest.raises(TransportConnectionError):
            SocketTransport.create_tcp("localhost", 514)

        sock.close.assert_called_once()

    @patch("socket.socket")
    def test_tcp_connects_stream_socket(self, mock_socket_class):
        sock = mock_socket(socket.SOCK_STREAM)
        mock_socket_class.return_value = sock

        transport = SocketTransport.create_tcp("syslog.test.com", 6514, timeout=2.5)

        mock_socket_class.assert_called_with(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout.assert_called_with(2.5)
        sock.connect.assert_called_with(("syslog.test.com", 6514))
        assert transport.endpoint == InetEndpoint("syslog.test.com", 6514)

    @patch("socket.socket")
    def test_udp_connects_datagram_socket(self, mock_socket_class):
        sock = mock_socket(socket.SOCK_DGRAM)
        mock_socket_class.return_value = sock

        transport = SocketTransport.create_udp("syslog.test.com", 514, max_msg_size=1200)

        mock_socket_class.assert_called_with(socket.AF_INET, socket.SOCK_DGRAM)
        sock.settimeout.assert_not_called()
        sock.connect.assert_called_with(("syslog.test.com", 514))
        assert transport.max_msg_size == 1200

    def test_invalid_limit_fails_before_connecting(self):
        with patch("socket.socket") as mock_socket_class:
            with pytest.raises(ValueError):
                SocketTransport.create_udp("localhost", 514, max_msg_size=0)

        mock_socket_class.assert_not_called()

    @pytest.mark.integration
    def test_refused_tcp_connection(self):
        probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
        probe.close()

        with pytest.raises(TransportConnectionError):
            SocketTransport.create_tcp("127.0.0.1", port)


@pytest.mark.integration
class TestInetRoundTrip:
    def test_tcp(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        port = server.getsockname()[1]

        try:
            with SocketTransport.create_tcp("127.0.0.1", port) as transport:
                conn, _ = server.accept()
                data = b"<134>1 - - - - - - " + b"x" * 20000
                assert transport.send(data) is True
                transport.close()

                received = b""
                conn.settimeout(5.0)
                while True:
                    chunk = conn.recv(65536)
                    if not chunk:
                        break
                    received += chunk
                conn.close()
        finally:
            server.close()

        assert received == data

    def test_udp(self):
        receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        receiver.bind(("127.0.0.1", 0))
        receiver.settimeout(5.0)
        port = receiver.getsockname()[1]

        try:
            with SocketTransport.create_udp("127.0.0.1", port) as transport:
                assert transport.send(b"y" * 480) is True
                with pytest.raises(MessageSizeExceededError):
                    transport.send(b"y" * 481)

            assert receiver.recv(65536) == b"y" * 480
        finally:
            receiver.close()


@requires_unix_sockets
@pytest.mark.integration
class TestUnixRoundTrip:
    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "syslog.sock")

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_unix_stream(self):
        server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        server.bind(self.path)
        server.listen(1)

        try:
            with SocketTransport.create_unix(self.path) as transport:
                conn, _ = server.accept()
                assert transport.send(b"stream message") is True
                conn.settimeout(5.0)
                assert conn.recv(1024) == b"stream message"
                conn.close()
        finally:
            server.close()

    def test_unix_datagram(self):
        receiver = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        receiver.bind(self.path)
        receiver.settimeout(5.0)

        try:
            with SocketTransport.create_unix_dgram(self.path) as transport:
                assert transport.max_msg_size == 2048
                assert transport.send(b"z" * 2048) is True
                with pytest.raises(MessageSizeExceededError):
                    transport.send(b"z" * 2049)

            assert receiver.recv(4096) == b"z" * 2048
        finally:
            receiver.close()

    def test_missing_socket_path(self):
        with pytest.raises(TransportConnectionError):
            SocketTransport.create_unix_dgram(self.path)
