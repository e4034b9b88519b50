from __future__ import annotations

from dataclasses import asdict
from typing import Dict, Iterable, List

from gemledger.app.books.ledger import LedgerRow, LedgerSummary
from gemledger.app.books.normalize import Invoice, LineItem
from gemledger.app.books.totals import Totals, invoice_totals, line_amount
from gemledger.app.domain.contracts import (
    InvoiceContract,
    LedgerRowContract,
    LedgerSummaryContract,
    LineItemContract,
    SummaryContract,
    TotalsContract,
)


def totals_to_contract(totals: Totals) -> TotalsContract:
    return TotalsContract(**asdict(totals))


def line_item_to_contract(item: LineItem) -> LineItemContract:
    return LineItemContract(
        id=item.id,
        lot_name=item.lot_name,
        description=item.description,
        shape=item.shape,
        size=item.size,
        grade=item.grade,
        pcs=item.pcs,
        cts=item.cts,
        price=item.price,
        remarks=item.remarks,
        amount=line_amount(item),
    )


def invoice_to_contract(invoice: Invoice) -> InvoiceContract:
    return InvoiceContract(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        date=invoice.date,
        party=invoice.party,
        transaction_type=invoice.transaction_type,
        source=invoice.source,
        sell_id=invoice.sell_id,
        remarks=invoice.remarks,
        items=[line_item_to_contract(row) for row in invoice.rows],
        totals=totals_to_contract(invoice_totals(invoice)),
    )


def ledger_row_to_contract(row: LedgerRow) -> LedgerRowContract:
    return LedgerRowContract(
        date=row.date,
        ref_no=row.ref_no,
        description=row.description,
        party=row.party,
        transaction_type=row.transaction_type,
        amount=float(row.amount or 0.0),
        debit=float(row.debit or 0.0),
        credit=float(row.credit or 0.0),
        balance=float(row.balance or 0.0),
    )


def ledger_to_contracts(rows: Iterable[LedgerRow]) -> List[LedgerRowContract]:
    return [ledger_row_to_contract(row) for row in rows]


def ledger_summary_to_contract(summary: LedgerSummary) -> LedgerSummaryContract:
    return LedgerSummaryContract(**asdict(summary))


def summary_to_contract(invoice_count: int, totals: Totals, balances: Dict[str, float]) -> SummaryContract:
    return SummaryContract(
        invoice_count=invoice_count,
        totals=totals_to_contract(totals),
        balances=dict(balances),
    )
