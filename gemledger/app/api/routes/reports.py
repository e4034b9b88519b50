from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gemledger.app.books.filters import ReportCriteria
from gemledger.app.db import get_db
from gemledger.app.domain.contracts import (
    CashFlowContract,
    ClientLedgerContract,
    InvoiceReportContract,
    StatementContract,
)
from gemledger.app.services import invoice_service, report_service

router = APIRouter(prefix="/api", tags=["reports"])


def report_criteria(
    date_from: Optional[str] = Query(None, alias="from", description="Inclusive start date"),
    date_to: Optional[str] = Query(None, alias="to", description="Inclusive end date"),
    party: Optional[str] = Query(None, description="Case-insensitive substring (exact name for partywise-statement)"),
    transaction_type: Optional[str] = Query(None, alias="transactionType"),
    source: Optional[str] = Query(None),
    sell_id: Optional[str] = Query(None, alias="sellId"),
) -> ReportCriteria:
    return ReportCriteria.from_mapping(
        {
            "date_from": date_from,
            "date_to": date_to,
            "party": party,
            "transaction_type": transaction_type,
            "source": source,
            "sell_id": sell_id,
        }
    )


@router.get("/invoice-report", response_model=InvoiceReportContract)
def invoice_report(
    criteria: ReportCriteria = Depends(report_criteria),
    db: Session = Depends(get_db),
):
    return report_service.invoice_report(invoice_service.list_invoices(db), criteria)


@router.get("/cash-flow", response_model=CashFlowContract)
def cash_flow(
    criteria: ReportCriteria = Depends(report_criteria),
    db: Session = Depends(get_db),
):
    return report_service.cash_flow_report(invoice_service.list_invoices(db), criteria)


@router.get("/partywise-statement", response_model=StatementContract)
def partywise_statement(
    criteria: ReportCriteria = Depends(report_criteria),
    db: Session = Depends(get_db),
):
    party = (criteria.party or "").strip()
    if not party:
        raise HTTPException(status_code=400, detail="party query param is required.")
    return report_service.partywise_statement_report(
        invoice_service.list_invoices(db), party, criteria
    )


@router.get("/client-ledger", response_model=ClientLedgerContract)
def client_ledger(
    criteria: ReportCriteria = Depends(report_criteria),
    db: Session = Depends(get_db),
):
    return report_service.client_ledger_report(invoice_service.list_invoices(db), criteria)
