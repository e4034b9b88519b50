from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gemledger.app.books.adapters import invoice_to_contract
from gemledger.app.db import get_db
from gemledger.app.domain.contracts import InvoiceContract, SummaryContract, WireModel
from gemledger.app.services import invoice_service, report_service

router = APIRouter(prefix="/api")


# ----------------------------
# Request/Response Schemas
# ----------------------------

class InvoiceCreate(WireModel):
    # Required fields are checked by invoice_service (400, not 422).
    party: Optional[str] = None
    transaction_type: Optional[str] = None
    date: Optional[str] = None
    items: List[Dict[str, Any]] = []
    remarks: Optional[str] = None
    source: Optional[str] = None
    sell_id: Optional[str] = None


class InvoiceListOut(WireModel):
    invoices: List[InvoiceContract]


class InvoiceCreatedOut(WireModel):
    invoice: InvoiceContract


class PartiesOut(WireModel):
    parties: List[str]


# ----------------------------
# Health
# ----------------------------

@router.get("/health")
def health():
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}


# ----------------------------
# Invoices
# ----------------------------

@router.get("/invoices", response_model=InvoiceListOut)
def list_invoices(
    party: Optional[str] = Query(None),
    transaction_type: Optional[str] = Query(None, alias="transactionType"),
    db: Session = Depends(get_db),
):
    invoices = invoice_service.list_invoices(db, party=party, transaction_type=transaction_type)
    return InvoiceListOut(invoices=[invoice_to_contract(inv) for inv in invoices])


@router.post("/invoices", response_model=InvoiceCreatedOut, status_code=201)
def create_invoice(req: InvoiceCreate, db: Session = Depends(get_db)):
    invoice = invoice_service.create_invoice(
        db,
        party=req.party,
        transaction_type=req.transaction_type,
        invoice_date=req.date,
        items=req.items,
        remarks=req.remarks,
        source=req.source,
        sell_id=req.sell_id,
    )
    return InvoiceCreatedOut(invoice=invoice_to_contract(invoice))


@router.get("/parties", response_model=PartiesOut)
def parties(db: Session = Depends(get_db)):
    return PartiesOut(parties=invoice_service.list_parties(db))


@router.get("/summary", response_model=SummaryContract)
def summary(db: Session = Depends(get_db)):
    return report_service.summary_report(invoice_service.list_invoices(db))
