"""
Books - invoice totals.

Responsibility:
- Aggregate line items into pieces / carats / amount / average price.

Design notes:
- An explicit per-row amount (server-origin data) is trusted over
  recomputing cts * price, so totals stay identical across sources.
- average_price is guarded: 0 when there are no carats.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .coerce import to_number
from .normalize import Invoice, LineItem


@dataclass(frozen=True)
class Totals:
    total_pcs: float = 0.0
    total_cts: float = 0.0
    total_amount: float = 0.0
    average_price: float = 0.0


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_amount(item: LineItem | Mapping[str, Any]) -> float:
    explicit = _field(item, "amount")
    if explicit is not None:
        return to_number(explicit)
    return to_number(_field(item, "cts")) * to_number(_field(item, "price"))


def calculate_totals(items: Iterable[LineItem | Mapping[str, Any]]) -> Totals:
    total_pcs = 0.0
    total_cts = 0.0
    total_amount = 0.0

    for item in items or []:
        total_pcs += to_number(_field(item, "pcs"))
        total_cts += to_number(_field(item, "cts"))
        total_amount += line_amount(item)

    average_price = total_amount / total_cts if total_cts > 0 else 0.0
    return Totals(
        total_pcs=total_pcs,
        total_cts=total_cts,
        total_amount=total_amount,
        average_price=average_price,
    )


def invoice_totals(invoice: Invoice) -> Totals:
    return calculate_totals(invoice.rows)


def combine_totals(invoices: Iterable[Invoice]) -> Totals:
    """Totals over every row of every invoice (store-wide summary)."""
    return calculate_totals(row for inv in invoices for row in inv.rows)
