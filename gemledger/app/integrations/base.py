from __future__ import annotations

from typing import Any, List, Protocol


SourceName = str


class SourceError(RuntimeError):
    """A source answered, but not with something we can use."""


class InvoiceSource(Protocol):
    name: SourceName

    def fetch(self) -> List[Any]:
        """Return raw (un-normalized) invoice records, or raise."""
        ...
