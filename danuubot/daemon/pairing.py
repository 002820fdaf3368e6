"""Terminal rendering of the device pairing QR code."""

import io

import qrcode
from rich.console import Console


def render_qr(data: str) -> str:
    """Render QR data as block characters for a terminal."""
    qr = qrcode.QRCode(border=1)
    qr.add_data(data)
    qr.make(fit=True)

    out = io.StringIO()
    qr.print_ascii(out=out, invert=True)
    return out.getvalue()


def show_pairing_qr(data: str, console: Console | None = None) -> None:
    """Print the pairing QR code with scan instructions."""
    console = console or Console()
    console.print("Scan this QR code with your WhatsApp app to link your device:")
    console.print(render_qr(data), highlight=False, markup=False, soft_wrap=True)
