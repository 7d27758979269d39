"""ESC/POS encoder for thermal receipt printers (Elgin i9 and friends)."""

from __future__ import annotations

from typing import Optional

from django.conf import settings

from modules.receipts.fields import (
    CURRENCY,
    FOOTER,
    ITEMS_TITLE,
    NOTE_TITLE,
    TOTAL_LABEL,
    Receipt,
)

ESC = b"\x1b"
GS = b"\x1d"

RESET = ESC + b"@"
ALIGN_LEFT = ESC + b"a\x00"
ALIGN_CENTER = ESC + b"a\x01"
BOLD_ON = ESC + b"E\x01"
BOLD_OFF = ESC + b"E\x00"
CUT = GS + b"V\x00"

# 32 columns: 58 mm roll with font A.
RULE = "-" * 32


def encode_escpos(receipt: Receipt, encoding: Optional[str] = None) -> bytes:
    """Encode ``receipt`` as a raw ESC/POS byte stream.

    Text goes out in a single-byte code page; characters it cannot
    represent are replaced rather than aborting the print.
    """
    codec = encoding or settings.RECEIPT_ENCODING
    out = bytearray()

    def line(text: str = "") -> None:
        out.extend(f"{text}\n".encode(codec, errors="replace"))

    out += RESET

    # Header
    out += ALIGN_CENTER + BOLD_ON
    line(receipt.store_name)
    out += BOLD_OFF
    line(receipt.tagline)
    line(RULE)

    # Order data
    out += ALIGN_LEFT
    for label, value in receipt.fields:
        line(f"{label}: {value}")

    if receipt.note:
        line(RULE)
        line(NOTE_TITLE)
        line(receipt.note)

    line(RULE)

    # Items
    out += BOLD_ON
    line(ITEMS_TITLE)
    out += BOLD_OFF
    for item in receipt.items:
        line(f"{item.quantity}x {item.name}")
        line(f"   {CURRENCY} {item.subtotal}")

    line(RULE)

    # Total
    out += BOLD_ON + ALIGN_CENTER
    line(f"{TOTAL_LABEL}: {CURRENCY} {receipt.total}")
    out += ALIGN_LEFT + BOLD_OFF

    line()
    line(FOOTER)
    line(RULE)
    line()
    line()

    out += CUT
    return bytes(out)
