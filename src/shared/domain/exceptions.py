"""Cross-module exceptions.

Module-specific business errors live in each module's ``exceptions.py``;
this module only holds failures that any service can surface.
"""

from __future__ import annotations


class StorageError(Exception):
    """The database failed while a unit of work was in flight.

    Raised after the enclosing ``transaction.atomic`` block rolled back,
    so no partial state is left behind.  Not retried by the services:
    retry policy belongs to the caller.
    """
