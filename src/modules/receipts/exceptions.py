"""Receipt domain exceptions."""

from __future__ import annotations


class PrinterError(Exception):
    """The printer device could not be written to."""


class UnknownReceiptFormat(Exception):
    """The requested receipt variant does not exist."""
