from dataclasses import replace
from datetime import date

import pytest

from gemledger.app.books.filters import ReportCriteria
from gemledger.app.books.ledger import (
    LedgerIntegrityError,
    LedgerMode,
    build_ledger,
    cash_flow,
    check_ledger_integrity,
    classify,
    client_ledger,
    is_credit,
    party_balances,
    partywise_statement,
    summarize_ledger,
)


@pytest.mark.parametrize(
    "kind, side",
    [
        ("Sales", "debit"),
        ("SALES", "debit"),
        ("Memo Issue", "debit"),
        ("", "debit"),
        (None, "debit"),
        ("Purchase", "credit"),
        ("Purchase Return", "credit"),
        ("sales return", "credit"),
        ("Payment", "credit"),
        ("Cash Receipt", "credit"),
        ("Credit Note", "credit"),
    ],
)
def test_classify_by_keyword(kind, side):
    assert classify(kind) == side
    assert is_credit(kind) is (side == "credit")


def test_build_ledger_empty_returns_empty_list():
    assert build_ledger([]) == []
    assert cash_flow([]) == []
    assert client_ledger([]) == []


def test_running_balance_sales_then_payment(make_invoice):
    invoices = [
        make_invoice("INV-2", date(2024, 1, 2), "Acme", "Payment", 40),
        make_invoice("INV-1", date(2024, 1, 1), "Acme", "Sales", 100),
    ]

    rows = build_ledger(invoices)

    assert [r.ref_no for r in rows] == ["INV-1", "INV-2"]
    assert [(r.debit, r.credit) for r in rows] == [(100.0, 0.0), (0.0, 40.0)]
    assert [r.balance for r in rows] == [100.0, 60.0]
    assert [r.amount for r in rows] == [100.0, -40.0]
    assert rows[0].description == "Sales"


def test_same_day_ties_break_on_invoice_number(make_invoice):
    day = date(2024, 3, 1)
    invoices = [
        make_invoice("INV-0003", day, "A", "Sales", 1),
        make_invoice("INV-0001", day, "B", "Sales", 1),
        make_invoice("INV-0002", day, "A", "Sales", 1),
    ]
    assert [r.ref_no for r in build_ledger(invoices)] == ["INV-0001", "INV-0002", "INV-0003"]


def test_per_party_mode_runs_separate_balances(make_invoice):
    invoices = [
        make_invoice("INV-1", date(2024, 1, 1), "Acme", "Sales", 100),
        make_invoice("INV-2", date(2024, 1, 2), "Star", "Sales", 70),
        make_invoice("INV-3", date(2024, 1, 3), "ACME", "Receipt", 30),
        make_invoice("INV-4", date(2024, 1, 4), "Star", "Purchase", 100),
    ]

    global_rows = build_ledger(invoices, LedgerMode.GLOBAL)
    party_rows = client_ledger(invoices)

    assert [r.balance for r in global_rows] == [100.0, 170.0, 140.0, 40.0]
    assert [r.balance for r in party_rows] == [100.0, 70.0, 70.0, -30.0]
    check_ledger_integrity(global_rows)
    check_ledger_integrity(party_rows, mode=LedgerMode.PER_PARTY)


def test_partywise_statement_scopes_to_party_and_keeps_other_criteria(make_invoice):
    invoices = [
        make_invoice("INV-1", date(2024, 1, 1), "Acme Corp", "Sales", 100),
        make_invoice("INV-2", date(2024, 1, 2), "Star", "Sales", 70),
        make_invoice("INV-3", date(2024, 2, 1), "acme corp ", "Payment", 30),
    ]

    rows = partywise_statement(invoices, "ACME CORP")
    assert [r.balance for r in rows] == [100.0, 70.0]

    january = partywise_statement(invoices, "acme corp", ReportCriteria(date_to="2024-01-31", party="star"))
    assert [r.ref_no for r in january] == ["INV-1"]


def test_partywise_statement_does_not_merge_similar_party_names(make_invoice):
    invoices = [
        make_invoice("INV-1", date(2024, 1, 1), "Acme Corp", "Sales", 100),
        make_invoice("INV-2", date(2024, 1, 2), "Acme Traders", "Sales", 70),
    ]

    assert partywise_statement(invoices, "acme") == []

    rows = partywise_statement(invoices, "Acme Corp")
    assert [r.party for r in rows] == ["Acme Corp"]
    assert summarize_ledger(rows).closing_balance == 100.0


def test_cash_flow_applies_date_window(make_invoice):
    invoices = [
        make_invoice("INV-1", date(2024, 1, 1), "Acme", "Sales", 100),
        make_invoice("INV-2", date(2024, 1, 15), "Star", "Purchase", 40),
        make_invoice("INV-3", date(2024, 2, 1), "Acme", "Sales", 10),
    ]
    rows = cash_flow(invoices, ReportCriteria(date_from="2024-01-10", date_to="2024-01-31"))
    assert [(r.ref_no, r.balance) for r in rows] == [("INV-2", -40.0)]


def test_summary_and_party_balances(make_invoice):
    invoices = [
        make_invoice("INV-1", date(2024, 1, 1), "Acme", "Sales", 100),
        make_invoice("INV-2", date(2024, 1, 2), "acme", "Payment", 25),
        make_invoice("INV-3", date(2024, 1, 3), "Star", "Sales", 10),
    ]
    summary = summarize_ledger(cash_flow(invoices))

    assert summary.row_count == 3
    assert summary.total_debit == 110.0
    assert summary.total_credit == 25.0
    assert summary.closing_balance == 85.0
    assert party_balances(invoices) == {"Acme": 75.0, "Star": 10.0}


def test_integrity_check_catches_broken_balance(make_invoice):
    rows = build_ledger(
        [
            make_invoice("INV-1", date(2024, 1, 1), "Acme", "Sales", 100),
            make_invoice("INV-2", date(2024, 1, 2), "Acme", "Sales", 50),
        ]
    )
    report = check_ledger_integrity(rows)
    assert report["rows"] == 2
    assert report["total_debit"] == 150.0

    broken = [rows[0], replace(rows[1], balance=999.0)]
    with pytest.raises(LedgerIntegrityError):
        check_ledger_integrity(broken)

    with pytest.raises(LedgerIntegrityError):
        check_ledger_integrity(list(reversed(rows)))

    with pytest.raises(LedgerIntegrityError):
        check_ledger_integrity([replace(rows[0], credit=5.0)])
