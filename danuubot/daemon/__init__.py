"""
Connection lifecycle for DanuuBot.

Supervises the bridge connection with bounded reconnects and shows the
pairing QR code in the terminal.
"""

from danuubot.daemon.supervisor import ConnectionState, ConnectionSupervisor, LOGGED_OUT_STATUS
from danuubot.daemon.pairing import render_qr, show_pairing_qr

__all__ = [
    "ConnectionState",
    "ConnectionSupervisor",
    "LOGGED_OUT_STATUS",
    "render_qr",
    "show_pairing_qr",
]
