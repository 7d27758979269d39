"""Printer sinks for raw ESC/POS payloads."""

from __future__ import annotations

from typing import Protocol

import structlog

from modules.receipts.exceptions import PrinterError

logger = structlog.get_logger(__name__)


class IPrinter(Protocol):
    def write(self, payload: bytes) -> None: ...


class FilePrinter:
    """Writes the payload to a device path or shared printer.

    On Windows this is typically a shared queue such as
    ``\\\\localhost\\ELGIN_I9``; on Linux a device like ``/dev/usb/lp0``.
    """

    def __init__(self, path: str) -> None:
        self._path = path

    def write(self, payload: bytes) -> None:
        log = logger.bind(path=self._path, size=len(payload))
        try:
            with open(self._path, "wb") as device:
                device.write(payload)
        except OSError as exc:
            log.error("printer.write_failed", error=str(exc))
            raise PrinterError(f"Could not write to printer at {self._path}.") from exc
        log.info("printer.job_sent")
