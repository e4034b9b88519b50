"""
Books - ledger / statement construction.

Responsibility:
- Turn invoices into ledger rows with debit/credit columns and a running
  balance. Cash flow, partywise statement and client ledger are the same
  builder run in a different LedgerMode.

Design notes:
- classify() is the only place that decides debit vs credit. Every report,
  the API and the CLI go through it.
- Deterministic: rows are ordered by date, then invoice number.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Literal, Optional

from .filters import ReportCriteria, filter_invoices
from .normalize import Invoice
from .totals import Totals, invoice_totals

Side = Literal["debit", "credit"]

CREDIT_KEYWORDS = ("purchase", "payment", "receipt", "credit", "return")


class LedgerMode(str, Enum):
    GLOBAL = "global"
    PER_PARTY = "per_party"


@dataclass(frozen=True)
class LedgerRow:
    """
    A single line of a statement.

    Invariants:
    - at most one of debit / credit is nonzero
    - amount == debit - credit
    - balance is the running total after applying this row (overall in
      GLOBAL mode, for this row's party in PER_PARTY mode)
    """
    date: date
    ref_no: str
    description: str
    party: str
    transaction_type: str
    amount: float
    debit: float
    credit: float
    balance: float
    totals: Totals


@dataclass(frozen=True)
class LedgerSummary:
    row_count: int
    total_debit: float
    total_credit: float
    closing_balance: float


def is_credit(transaction_type: Optional[str]) -> bool:
    kind = (transaction_type or "").casefold()
    return any(keyword in kind for keyword in CREDIT_KEYWORDS)


def classify(transaction_type: Optional[str]) -> Side:
    return "credit" if is_credit(transaction_type) else "debit"


def _sort_key(invoice: Invoice) -> tuple:
    return (invoice.date, invoice.invoice_number or "")


def _party_key(party: str) -> str:
    return (party or "").strip().casefold()


def build_ledger(
    invoices: Iterable[Invoice],
    mode: LedgerMode = LedgerMode.GLOBAL,
    criteria: Optional[ReportCriteria] = None,
    opening_balance: float = 0.0,
) -> List[LedgerRow]:
    selected = sorted(filter_invoices(invoices, criteria), key=_sort_key)

    balances: Dict[str, float] = defaultdict(lambda: float(opening_balance))
    rows: List[LedgerRow] = []

    for inv in selected:
        totals = invoice_totals(inv)
        amount = totals.total_amount
        debit, credit = (0.0, amount) if is_credit(inv.transaction_type) else (amount, 0.0)

        key = _party_key(inv.party) if mode is LedgerMode.PER_PARTY else ""
        balances[key] += debit - credit

        rows.append(
            LedgerRow(
                date=inv.date,
                ref_no=inv.invoice_number,
                description=inv.transaction_type,
                party=inv.party,
                transaction_type=inv.transaction_type,
                amount=debit - credit,
                debit=debit,
                credit=credit,
                balance=balances[key],
                totals=totals,
            )
        )

    return rows


def cash_flow(
    invoices: Iterable[Invoice],
    criteria: Optional[ReportCriteria] = None,
) -> List[LedgerRow]:
    return build_ledger(invoices, LedgerMode.GLOBAL, criteria)


def partywise_statement(
    invoices: Iterable[Invoice],
    party: str,
    criteria: Optional[ReportCriteria] = None,
) -> List[LedgerRow]:
    """
    Statement for exactly one party (case-insensitive, surrounding whitespace
    ignored). criteria.party is ignored; the other criteria still apply.
    """
    key = _party_key(party)
    own = [inv for inv in invoices if _party_key(inv.party) == key]
    return build_ledger(own, LedgerMode.PER_PARTY, replace(criteria or ReportCriteria(), party=None))


def client_ledger(
    invoices: Iterable[Invoice],
    criteria: Optional[ReportCriteria] = None,
) -> List[LedgerRow]:
    return build_ledger(invoices, LedgerMode.PER_PARTY, criteria)


def summarize_ledger(rows: Iterable[LedgerRow], opening_balance: float = 0.0) -> LedgerSummary:
    items = list(rows)
    total_debit = sum(r.debit for r in items)
    total_credit = sum(r.credit for r in items)
    return LedgerSummary(
        row_count=len(items),
        total_debit=total_debit,
        total_credit=total_credit,
        closing_balance=float(opening_balance) + total_debit - total_credit,
    )


def party_balances(invoices: Iterable[Invoice]) -> Dict[str, float]:
    """Net debit - credit per party, keyed by party name as first seen."""
    out: Dict[str, float] = {}
    names: Dict[str, str] = {}
    for row in client_ledger(invoices):
        name = names.setdefault(_party_key(row.party), row.party)
        out[name] = row.balance
    return out


class LedgerIntegrityError(ValueError):
    pass


def check_ledger_integrity(
    ledger: Iterable[LedgerRow],
    *,
    mode: LedgerMode = LedgerMode.GLOBAL,
    opening_balance: float = 0.0,
) -> dict:
    """
    Side-effect-free ledger integrity check.

    Invariants:
    - Amounts are finite and at most one side is nonzero.
    - Rows are in (date, ref_no) order.
    - Running balances are continuous (per party in PER_PARTY mode).
    """
    rows = list(ledger)
    last: Dict[str, float] = defaultdict(lambda: float(opening_balance))
    prev_key: tuple | None = None

    for idx, row in enumerate(rows):
        if not (math.isfinite(row.debit) and math.isfinite(row.credit)):
            raise LedgerIntegrityError(f"Invariant violation: non-finite amount at row {idx}.")
        if row.debit and row.credit:
            raise LedgerIntegrityError(
                f"Invariant violation: row {idx} carries both a debit and a credit."
            )

        key = (row.date, row.ref_no or "")
        if prev_key and key < prev_key:
            raise LedgerIntegrityError("Invariant violation: ledger rows are not in date order.")

        party = _party_key(row.party) if mode is LedgerMode.PER_PARTY else ""
        expected = last[party] + row.debit - row.credit
        if abs(row.balance - expected) > 1e-6:
            raise LedgerIntegrityError(
                f"Invariant violation: running balance mismatch at row {idx}."
            )

        last[party] = row.balance
        prev_key = key

    summary = summarize_ledger(rows, opening_balance)
    return {
        "rows": summary.row_count,
        "total_debit": round(summary.total_debit, 2),
        "total_credit": round(summary.total_credit, 2),
        "parties": len(last),
    }
