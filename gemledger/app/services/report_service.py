from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from gemledger.app.books.adapters import (
    invoice_to_contract,
    ledger_summary_to_contract,
    ledger_to_contracts,
    summary_to_contract,
    totals_to_contract,
)
from gemledger.app.books.filters import ReportCriteria, filter_invoices
from gemledger.app.books.ledger import (
    cash_flow,
    client_ledger,
    party_balances,
    partywise_statement,
    summarize_ledger,
)
from gemledger.app.books.normalize import Invoice
from gemledger.app.books.totals import combine_totals
from gemledger.app.domain.contracts import (
    CashFlowContract,
    ClientLedgerContract,
    InvoiceReportContract,
    StatementContract,
    SummaryContract,
)

logger = logging.getLogger(__name__)

REPORT_KINDS = ("invoice-report", "cash-flow", "partywise-statement", "client-ledger", "summary")


def invoice_report(
    invoices: Iterable[Invoice],
    criteria: Optional[ReportCriteria] = None,
) -> InvoiceReportContract:
    selected = sorted(
        filter_invoices(invoices, criteria),
        key=lambda inv: (inv.date, inv.invoice_number),
    )
    return InvoiceReportContract(
        invoices=[invoice_to_contract(inv) for inv in selected],
        totals=totals_to_contract(combine_totals(selected)),
    )


def cash_flow_report(
    invoices: Iterable[Invoice],
    criteria: Optional[ReportCriteria] = None,
) -> CashFlowContract:
    rows = cash_flow(invoices, criteria)
    summary = summarize_ledger(rows)
    return CashFlowContract(
        rows=ledger_to_contracts(rows),
        summary=ledger_summary_to_contract(summary),
        balance=summary.closing_balance,
    )


def partywise_statement_report(
    invoices: Iterable[Invoice],
    party: str,
    criteria: Optional[ReportCriteria] = None,
) -> StatementContract:
    rows = partywise_statement(invoices, party, criteria)
    return StatementContract(
        party=party,
        statement=ledger_to_contracts(rows),
        summary=ledger_summary_to_contract(summarize_ledger(rows)),
    )


def client_ledger_report(
    invoices: Iterable[Invoice],
    criteria: Optional[ReportCriteria] = None,
) -> ClientLedgerContract:
    selected = filter_invoices(invoices, criteria)
    rows = client_ledger(selected)
    return ClientLedgerContract(
        rows=ledger_to_contracts(rows),
        balances=party_balances(selected),
        summary=ledger_summary_to_contract(summarize_ledger(rows)),
    )


def summary_report(invoices: Iterable[Invoice]) -> SummaryContract:
    items: List[Invoice] = list(invoices)
    return summary_to_contract(
        invoice_count=len(items),
        totals=combine_totals(items),
        balances=party_balances(items),
    )


def build_report(
    kind: str,
    invoices: Iterable[Invoice],
    criteria: Optional[ReportCriteria] = None,
):
    """
    Dispatch by report kind (CLI entry point).

    Raises ValueError for an unknown kind, or a partywise statement without
    a party in the criteria.
    """
    key = (kind or "").strip().lower()
    logger.info("Building %s report", key)
    if key == "invoice-report":
        return invoice_report(invoices, criteria)
    if key == "cash-flow":
        return cash_flow_report(invoices, criteria)
    if key == "partywise-statement":
        party = (criteria.party if criteria else None) or ""
        if not party.strip():
            raise ValueError("partywise-statement requires a party")
        return partywise_statement_report(invoices, party.strip(), criteria)
    if key == "client-ledger":
        return client_ledger_report(invoices, criteria)
    if key == "summary":
        return summary_report(filter_invoices(invoices, criteria))
    raise ValueError(f"unknown report kind: {kind}")
