from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional

from gemledger.app.books.normalize import Invoice, invoice_to_dict, unwrap_invoice_records


class LocalCacheSource:
    """
    Last-known-good invoice snapshot, held in memory.

    The fetch orchestrator refreshes it after every successful upstream fetch,
    so it can answer when both remote sources are down.
    """

    name = "local_cache"

    def __init__(self, records: Optional[Iterable[Any]] = None):
        self._records: List[Any] = list(records or [])

    @classmethod
    def from_file(cls, path: Path) -> "LocalCacheSource":
        """
        Seed from a JSON file ({"invoices": [...]} or a bare list).

        Raises:
            FileNotFoundError: if the file doesn't exist
            ValueError: if the JSON doesn't hold an invoice list
        """
        with path.open("r", encoding="utf-8") as f:
            return cls(unwrap_invoice_records(json.load(f)))

    def store(self, invoices: Iterable[Invoice | Any]) -> None:
        self._records = [
            invoice_to_dict(inv) if isinstance(inv, Invoice) else inv
            for inv in invoices
        ]

    def fetch(self) -> List[Any]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
