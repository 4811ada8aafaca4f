"""
Local host and process discovery
"""

import os
import socket


def get_local_hostname() -> str:
    """Host name of the local machine, or an empty string if it is unknown"""
    try:
        return socket.gethostname()
    except OSError:
        return ""


def get_proc_id() -> str:
    return str(os.getpid())
