"""
Books - report filtering.

All criteria are optional and ANDed. Empty values impose no constraint.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

from .coerce import to_date
from .normalize import Invoice


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first(params: Mapping[str, Any], *names: str) -> Optional[str]:
    for name in names:
        value = _clean(params.get(name))
        if value:
            return value
    return None


@dataclass(frozen=True)
class ReportCriteria:
    date_from: Optional[date | str] = None
    date_to: Optional[date | str] = None
    party: Optional[str] = None
    transaction_type: Optional[str] = None
    source: Optional[str] = None
    sell_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "ReportCriteria":
        """Build criteria from query-string style keys (camelCase or snake_case)."""
        return cls(
            date_from=_first(params, "date_from", "dateFrom", "from"),
            date_to=_first(params, "date_to", "dateTo", "to"),
            party=_first(params, "party"),
            transaction_type=_first(params, "transaction_type", "transactionType", "type"),
            source=_first(params, "source"),
            sell_id=_first(params, "sell_id", "sellId"),
        )


def _bound(value: Optional[date | str]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not _clean(value):
        return None
    return to_date(value)


def _equals(actual: Optional[str], wanted: Optional[str]) -> bool:
    return (actual or "").strip().casefold() == wanted.strip().casefold()


def matches(invoice: Invoice, criteria: ReportCriteria) -> bool:
    start = _bound(criteria.date_from)
    end = _bound(criteria.date_to)
    if start and invoice.date < start:
        return False
    if end and invoice.date > end:
        return False

    party = _clean(criteria.party)
    if party and party.casefold() not in (invoice.party or "").casefold():
        return False

    transaction_type = _clean(criteria.transaction_type)
    if transaction_type and not _equals(invoice.transaction_type, transaction_type):
        return False

    source = _clean(criteria.source)
    if source and not _equals(invoice.source, source):
        return False

    sell_id = _clean(criteria.sell_id)
    if sell_id and not _equals(invoice.sell_id, sell_id):
        return False

    return True


def filter_invoices(
    invoices: Iterable[Invoice],
    criteria: Optional[ReportCriteria] = None,
) -> List[Invoice]:
    if criteria is None:
        return list(invoices)
    return [inv for inv in invoices if matches(inv, criteria)]
