#!/usr/bin/env python3
"""
Syslog Examples

Demonstrates how to send RFC 5424 messages:
- UDP client with structured data
- TCP client
- Local syslog daemon over a Unix socket
- logging integration
- Configuration via environment variables
"""

import logging
import os

from structured_syslog import (
    Facility,
    MessageSizeExceededError,
    Severity,
    SocketTransport,
    StructuredDataElement,
    SyslogClient,
    SyslogConfig,
    SyslogHandler,
    TransportConnectionError,
)


def example_udp_client():
    """Example: UDP client with structured data"""
    print("🌐 UDP Syslog Example")
    print("=" * 50)

    transport = SocketTransport.create_udp("localhost", 514)  # Change to your collector
    with SyslogClient(transport, facility=Facility.LOCAL0, app_name="demo-app") as client:
        client.send(Severity.INFO, "Payment processing started")

        message = client.create_message(Severity.WARNING, "High transaction volume", msg_id="PAY")
        message.add_sd_element(
            StructuredDataElement.from_dict("payment@32473", {"tx": "1042", "amount": "99.95"})
        )
        client.send_message(message)

        try:
            client.send(Severity.DEBUG, "x" * 1000)
        except MessageSizeExceededError as e:
            print(f"Not sent: {e}")

    print("✅ UDP messages sent (check your syslog server)")
    print()


def example_tcp_client():
    """Example: TCP client"""
    print("🌐 TCP Syslog Example")
    print("=" * 50)

    try:
        transport = SocketTransport.create_tcp("localhost", 601, timeout=5.0)
    except TransportConnectionError as e:
        print(f"❌ No TCP collector: {e}")
        print()
        return

    with SyslogClient(transport, app_name="demo-app") as client:
        if not client.send(Severity.ERR, "Payment gateway timeout " + "detail " * 200):
            print("❌ Write failed")

    print("✅ TCP message sent")
    print()


def example_local_daemon():
    """Example: local syslog daemon"""
    print("🌐 Unix Socket Example")
    print("=" * 50)

    try:
        transport = SocketTransport.create_unix_dgram("/dev/log")
    except TransportConnectionError as e:
        print(f"❌ No local syslog daemon: {e}")
        print()
        return

    with SyslogClient(transport, facility=Facility.USER, app_name="demo-app") as client:
        client.send(Severity.NOTICE, "Configuration reloaded")

    print("✅ Message sent to the local daemon")
    print()


def example_logging_handler():
    """Example: forward the logging module to syslog"""
    print("🌐 Logging Handler Example")
    print("=" * 50)

    config = SyslogConfig(transport="udp", host="localhost", app_name="demo-app")
    handler = SyslogHandler(config=config, msg_id="APP")
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = logging.getLogger("syslog_demo")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    logger.info("User logged in", extra={"structured_data": {"auth@32473": {"user": "alice"}}})
    logger.error("Payment declined")

    logger.removeHandler(handler)
    handler.close()

    print("✅ Log records forwarded")
    print()


def example_environment_config():
    """Example: Configuration via environment variables"""
    print("🌐 Environment Configuration Example")
    print("=" * 50)

    os.environ.update({
        "STRUCTURED_SYSLOG_TRANSPORT": "udp",
        "STRUCTURED_SYSLOG_HOST": "localhost",
        "STRUCTURED_SYSLOG_PORT": "514",
        "STRUCTURED_SYSLOG_APP_NAME": "production-service",
        "STRUCTURED_SYSLOG_FACILITY": "23",
    })

    config = SyslogConfig.from_env()
    with config.create_client() as client:
        client.send(Severity.INFO, f"Configured for {config.transport}://{config.host}:{config.port}")

    print("✅ Client configured from environment")
    print()


def main():
    print("📋 Available Examples:")
    print("1. UDP client with structured data")
    print("2. TCP client")
    print("3. Local syslog daemon")
    print("4. Logging handler")
    print("5. Environment variable configuration")
    print()

    try:
        example_udp_client()
        example_tcp_client()
        example_local_daemon()
        example_logging_handler()
        example_environment_config()

        print("🎉 All examples completed!")
        print()
        print("💡 Tips:")
        print("  - Replace localhost with your actual syslog collector")
        print("  - Keep UDP messages under 480 octets or use TCP")
        print("  - Set a socket timeout if the collector may stall")

    except KeyboardInterrupt:
        print("\n⏹️  Examples interrupted")


if __name__ == "__main__":
    main()
