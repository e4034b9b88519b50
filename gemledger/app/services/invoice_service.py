from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from gemledger.app.books.coerce import to_date
from gemledger.app.books.normalize import Invoice, normalize_invoice, normalize_line_item
from gemledger.app.models import InvoiceRecord, InvoiceRow, uuid_str

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "manual"
MAX_NUMBER_ATTEMPTS = 50


def record_to_invoice(rec: InvoiceRecord) -> Invoice:
    return normalize_invoice(
        {
            "id": rec.id,
            "invoice_number": rec.invoice_number,
            "date": rec.invoice_date,
            "party": rec.party,
            "transaction_type": rec.transaction_type,
            "source": rec.source,
            "sell_id": rec.sell_id,
            "remarks": rec.remarks,
            "rows": [
                {
                    "id": row.id,
                    "lot_name": row.lot_name,
                    "description": row.description,
                    "shape": row.shape,
                    "size": row.size,
                    "grade": row.grade,
                    "pcs": row.pcs,
                    "cts": row.cts,
                    "price": row.price,
                    "remarks": row.remarks,
                }
                for row in rec.rows
            ],
        }
    )


def _base_query():
    return (
        select(InvoiceRecord)
        .options(selectinload(InvoiceRecord.rows))
        .order_by(InvoiceRecord.created_at, InvoiceRecord.invoice_number)
    )


def list_invoices(
    db: Session,
    *,
    party: Optional[str] = None,
    transaction_type: Optional[str] = None,
) -> List[Invoice]:
    """
    Stored invoices in insertion order. party / transaction_type are exact
    matches here; the fuzzy report filters live in books.filters.
    """
    stmt = _base_query()
    if party:
        stmt = stmt.where(InvoiceRecord.party == party)
    if transaction_type:
        stmt = stmt.where(InvoiceRecord.transaction_type == transaction_type)
    return [record_to_invoice(rec) for rec in db.execute(stmt).scalars().all()]


def list_parties(db: Session) -> List[str]:
    rows = db.execute(
        select(InvoiceRecord.party).order_by(InvoiceRecord.created_at, InvoiceRecord.invoice_number)
    ).scalars()
    seen: Dict[str, None] = {}
    for party in rows:
        seen.setdefault(party, None)
    return list(seen)


def count_invoices(db: Session) -> int:
    return int(db.execute(select(func.count(InvoiceRecord.id))).scalar_one())


def format_invoice_number(invoice_date: date, sequence: int) -> str:
    return f"INV-{invoice_date.isoformat()}-{sequence:04d}"


def next_invoice_number(db: Session, invoice_date: date) -> str:
    """
    INV-{date}-{sequence}, sequence = stored count + 1, bumped until unused.
    """
    sequence = count_invoices(db) + 1
    for _ in range(MAX_NUMBER_ATTEMPTS):
        candidate = format_invoice_number(invoice_date, sequence)
        exists = db.execute(
            select(InvoiceRecord.id).where(InvoiceRecord.invoice_number == candidate)
        ).scalar_one_or_none()
        if exists is None:
            return candidate
        sequence += 1
    raise RuntimeError("Could not generate a unique invoice number")


def create_invoice(
    db: Session,
    *,
    party: Optional[str],
    transaction_type: Optional[str],
    invoice_date: Any,
    items: Iterable[Mapping[str, Any]] = (),
    remarks: Optional[str] = None,
    source: Optional[str] = None,
    sell_id: Optional[str] = None,
) -> Invoice:
    party = (party or "").strip()
    transaction_type = (transaction_type or "").strip()
    raw_date = invoice_date.strip() if isinstance(invoice_date, str) else invoice_date
    if not party or not transaction_type or not raw_date:
        raise HTTPException(status_code=400, detail="party, transactionType, and date are required.")

    parsed_date = to_date(raw_date)
    invoice_id = uuid_str()
    rec = InvoiceRecord(
        id=invoice_id,
        invoice_number=next_invoice_number(db, parsed_date),
        invoice_date=parsed_date,
        party=party,
        transaction_type=transaction_type,
        source=(source or "").strip() or DEFAULT_SOURCE,
        sell_id=(sell_id or "").strip() or None,
        remarks=(remarks or "").strip(),
    )

    for position, raw in enumerate(items or []):
        item = normalize_line_item(raw, invoice_id, position)
        rec.rows.append(
            InvoiceRow(
                id=f"{invoice_id}-{position}",
                position=position,
                lot_name=item.lot_name,
                description=item.description,
                shape=item.shape,
                size=item.size,
                grade=item.grade,
                pcs=item.pcs,
                cts=item.cts,
                price=item.price,
                remarks=item.remarks,
            )
        )

    db.add(rec)
    db.commit()
    db.refresh(rec)

    logger.info("Created invoice %s for party=%s type=%s", rec.invoice_number, party, transaction_type)
    return record_to_invoice(rec)
