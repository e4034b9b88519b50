"""
Books - invoice normalization layer.

Responsibility:
- Map invoice records from any source (our own API, the Supabase store, the
  local cache, older exports) into one canonical Invoice shape.

Design notes:
- This module must be PURE: no IO, no logging, no global state.
- Field aliasing is an explicit table of (canonical, aliases, default, kind)
  entries applied by one helper. Add a legacy name there, never inline.
- Idempotent: normalizing an already-normalized invoice (or its dict form)
  yields an identical Invoice.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Literal, Mapping, NamedTuple, Optional, Tuple

from .coerce import to_date, to_number

DEFAULT_TRANSACTION_TYPE = "Sales"

FieldKind = Literal["text", "optional_text", "number", "optional_number", "date", "rows"]


# -------------------------
# Canonical records
# -------------------------

@dataclass(frozen=True)
class LineItem:
    """
    One row of an invoice.

    Invariants:
    - pcs, cts, price are finite and non-negative
    - amount is None unless the source carried an explicit pre-aggregated
      amount; otherwise the line amount is derived as cts * price
    """
    id: str
    lot_name: str = ""
    description: str = ""
    shape: str = ""
    size: str = ""
    grade: str = ""
    pcs: float = 0.0
    cts: float = 0.0
    price: float = 0.0
    remarks: str = ""
    amount: Optional[float] = None


@dataclass(frozen=True)
class Invoice:
    id: str
    invoice_number: str
    date: date
    party: str
    transaction_type: str
    source: str = ""
    sell_id: Optional[str] = None
    remarks: str = ""
    rows: Tuple[LineItem, ...] = ()


# -------------------------
# Alias tables
# -------------------------

class FieldAlias(NamedTuple):
    canonical: str
    aliases: Tuple[str, ...]
    default: Any
    kind: FieldKind


INVOICE_FIELDS: Tuple[FieldAlias, ...] = (
    FieldAlias("id", ("invoice_id", "invoiceId"), "", "text"),
    FieldAlias("invoice_number", ("invoiceNumber", "invoice_no", "invoiceNo", "ref_no", "refNo"), "", "text"),
    FieldAlias("date", ("invoice_date", "invoiceDate", "created_at", "createdAt"), None, "date"),
    FieldAlias("party", ("party_name", "partyName", "client", "customer"), "", "text"),
    FieldAlias("transaction_type", ("transactionType", "txn_type", "type"), DEFAULT_TRANSACTION_TYPE, "text"),
    FieldAlias("source", ("origin",), "", "text"),
    FieldAlias("sell_id", ("sellId", "sell_no", "sellNo"), None, "optional_text"),
    FieldAlias("remarks", ("notes", "note"), "", "text"),
    FieldAlias("rows", ("items", "line_items", "lineItems"), (), "rows"),
)

LINE_ITEM_FIELDS: Tuple[FieldAlias, ...] = (
    FieldAlias("id", ("row_id", "rowId"), "", "text"),
    FieldAlias("lot_name", ("lotName", "lotNo", "lot_no", "lot"), "", "text"),
    FieldAlias("description", ("desc",), "", "text"),
    FieldAlias("shape", (), "", "text"),
    FieldAlias("size", (), "", "text"),
    FieldAlias("grade", ("quality",), "", "text"),
    FieldAlias("pcs", ("pieces", "qty", "quantity"), 0.0, "number"),
    FieldAlias("cts", ("carats", "carat", "weight"), 0.0, "number"),
    FieldAlias("price", ("rate", "price_per_carat", "pricePerCarat"), 0.0, "number"),
    FieldAlias("remarks", ("remark", "notes"), "", "text"),
    FieldAlias("amount", ("line_amount", "lineAmount"), None, "optional_number"),
)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _lookup(record: Mapping[str, Any], alias: FieldAlias) -> Any:
    for name in (alias.canonical, *alias.aliases):
        value = record.get(name)
        if not _is_blank(value):
            return value
    return None


def _text(value: Any) -> str:
    return str(value).strip()


def _non_negative(value: Any) -> float:
    return max(to_number(value), 0.0)


def _apply(record: Mapping[str, Any], fields: Iterable[FieldAlias], today: Optional[date]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for alias in fields:
        raw = _lookup(record, alias)
        if alias.kind == "rows":
            out[alias.canonical] = raw if isinstance(raw, (list, tuple)) else alias.default
        elif raw is None:
            out[alias.canonical] = to_date(None, today=today) if alias.kind == "date" else alias.default
        elif alias.kind == "date":
            out[alias.canonical] = to_date(raw, today=today)
        elif alias.kind in ("number", "optional_number"):
            out[alias.canonical] = _non_negative(raw)
        else:
            out[alias.canonical] = _text(raw)
    return out


# -------------------------
# Public API
# -------------------------

def line_item_to_dict(item: LineItem) -> Dict[str, Any]:
    return asdict(item)


def invoice_to_dict(invoice: Invoice) -> Dict[str, Any]:
    """Canonical, JSON-friendly dict form (ISO date, rows as dicts)."""
    return {
        "id": invoice.id,
        "invoice_number": invoice.invoice_number,
        "date": invoice.date.isoformat(),
        "party": invoice.party,
        "transaction_type": invoice.transaction_type,
        "source": invoice.source,
        "sell_id": invoice.sell_id,
        "remarks": invoice.remarks,
        "rows": [line_item_to_dict(row) for row in invoice.rows],
    }


def normalize_line_item(record: Any, invoice_id: str, index: int) -> LineItem:
    """
    Normalize a single row. Row ids are synthesized as "{invoice_id}-{index}"
    when the record carries none.
    """
    if isinstance(record, LineItem):
        record = line_item_to_dict(record)
    if not isinstance(record, Mapping):
        record = {}

    values = _apply(record, LINE_ITEM_FIELDS, today=None)
    if not values["id"]:
        values["id"] = f"{invoice_id}-{index}"
    return LineItem(**values)


def normalize_invoice(record: Any, today: Optional[date] = None) -> Invoice:
    """
    Map one loosely-typed record into a canonical Invoice.

    Precedence per field: canonical name, then legacy aliases (in table
    order), then the default. Missing dates become today; a missing
    transaction type becomes "Sales".
    """
    if isinstance(record, Invoice):
        record = invoice_to_dict(record)
    if not isinstance(record, Mapping):
        record = {}

    values = _apply(record, INVOICE_FIELDS, today=today)
    invoice_id = values["id"] or values["invoice_number"]
    values["id"] = invoice_id
    values["rows"] = tuple(
        normalize_line_item(row, invoice_id, idx) for idx, row in enumerate(values["rows"])
    )
    return Invoice(**values)


def normalize_invoices(records: Iterable[Any], today: Optional[date] = None) -> List[Invoice]:
    """Normalize a batch, skipping entries that are not records at all."""
    return [
        normalize_invoice(r, today=today)
        for r in records or []
        if isinstance(r, (Mapping, Invoice))
    ]


def unwrap_invoice_records(payload: Any) -> List[Any]:
    """
    Pull the invoice list out of a decoded response body.

    Accepts {"invoices": [...]}, {"data": [...]} or a bare list.

    Raises ValueError for any other shape so callers can treat it as a
    decode failure.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in ("invoices", "data"):
            value = payload.get(key)
            if isinstance(value, list):
                return value
    raise ValueError(f"unexpected invoice payload shape: {type(payload).__name__}")
