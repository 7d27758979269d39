"""Print-ready HTML encoder for the browser print dialog."""

from __future__ import annotations

from django.template.loader import render_to_string

from modules.receipts.fields import (
    CURRENCY,
    FOOTER,
    ITEMS_TITLE,
    NOTE_TITLE,
    TOTAL_LABEL,
    Receipt,
)


def render_document(receipt: Receipt) -> str:
    """Render ``receipt`` as a self-contained 80 mm HTML page.

    The page opens the print dialog on load.  All values are autoescaped
    by the template engine.
    """
    return render_to_string(
        "receipts/receipt.html",
        {
            "receipt": receipt,
            "currency": CURRENCY,
            "note_title": NOTE_TITLE,
            "items_title": ITEMS_TITLE,
            "total_label": TOTAL_LABEL,
            "footer": FOOTER,
        },
    )
