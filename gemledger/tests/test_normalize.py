from datetime import date

import pytest

from gemledger.app.books.normalize import (
    DEFAULT_TRANSACTION_TYPE,
    Invoice,
    LineItem,
    invoice_to_dict,
    normalize_invoice,
    normalize_invoices,
    unwrap_invoice_records,
)

TODAY = date(2025, 1, 15)


def test_canonical_names_win_over_aliases():
    inv = normalize_invoice(
        {
            "id": "a1",
            "invoice_number": "INV-1",
            "invoiceNumber": "IGNORED",
            "date": "2024-03-04",
            "party": "Acme",
            "transaction_type": "Purchase",
            "transactionType": "Sales",
            "rows": [{"lot_name": "L1", "lotName": "L2", "cts": 1, "price": 2}],
            "items": [{"lotName": "FROM-ITEMS"}],
        },
        today=TODAY,
    )

    assert inv.invoice_number == "INV-1"
    assert inv.transaction_type == "Purchase"
    assert len(inv.rows) == 1
    assert inv.rows[0].lot_name == "L1"


def test_legacy_aliases_are_used_when_canonical_missing():
    inv = normalize_invoice(
        {
            "invoiceId": 7,
            "invoiceNumber": "INV-2024-03-04-0001",
            "invoiceDate": "3/4/2024",
            "partyName": "Star Gems",
            "transactionType": "Payment",
            "sellId": "S-9",
            "items": [
                {"lotNo": "LOT-A", "qty": "3", "carats": "1.5", "rate": "200", "quality": "AA"},
            ],
        },
        today=TODAY,
    )

    assert inv.id == "7"
    assert inv.date == date(2024, 3, 4)
    assert inv.party == "Star Gems"
    assert inv.transaction_type == "Payment"
    assert inv.sell_id == "S-9"
    row = inv.rows[0]
    assert (row.lot_name, row.pcs, row.cts, row.price, row.grade) == ("LOT-A", 3.0, 1.5, 200.0, "AA")
    assert row.amount is None


def test_defaults_for_missing_fields():
    inv = normalize_invoice({"rows": [{}, {"cts": "oops"}]}, today=TODAY)

    assert inv.date == TODAY
    assert inv.party == ""
    assert inv.transaction_type == DEFAULT_TRANSACTION_TYPE
    assert inv.source == ""
    assert inv.sell_id is None
    assert inv.rows[1].cts == 0.0


def test_blank_transaction_type_defaults_to_sales():
    inv = normalize_invoice({"transactionType": "   "}, today=TODAY)
    assert inv.transaction_type == "Sales"


def test_row_ids_are_synthesized_from_invoice_id():
    inv = normalize_invoice(
        {"id": "inv-9", "rows": [{"cts": 1}, {"id": "keep-me"}, {"cts": 2}]},
        today=TODAY,
    )
    assert [r.id for r in inv.rows] == ["inv-9-0", "keep-me", "inv-9-2"]


def test_invoice_id_falls_back_to_invoice_number():
    inv = normalize_invoice({"invoiceNumber": "INV-5", "rows": [{}]}, today=TODAY)
    assert inv.id == "INV-5"
    assert inv.rows[0].id == "INV-5-0"


def test_negative_quantities_are_clamped():
    inv = normalize_invoice({"rows": [{"pcs": -2, "cts": -1.5, "price": "-10"}]}, today=TODAY)
    row = inv.rows[0]
    assert (row.pcs, row.cts, row.price) == (0.0, 0.0, 0.0)


def test_explicit_amount_is_kept():
    inv = normalize_invoice({"rows": [{"cts": 2, "price": 10, "amount": "19.5"}]}, today=TODAY)
    assert inv.rows[0].amount == 19.5


def test_normalize_is_idempotent():
    raw = {
        "invoiceNumber": "INV-3",
        "date": "12/1/24",
        "party": " Acme Corp ",
        "type": "Purchase Return",
        "source": "import",
        "items": [{"lotName": "L", "pcs": 1, "cts": 0.5, "price": 100}],
    }
    once = normalize_invoice(raw, today=TODAY)

    assert normalize_invoice(once, today=TODAY) == once
    assert normalize_invoice(invoice_to_dict(once), today=date(1999, 1, 1)) == once
    assert once.party == "Acme Corp"


def test_normalize_invoices_skips_non_records():
    invoices = normalize_invoices([{"id": "a"}, None, "junk", 3, {"id": "b"}], today=TODAY)
    assert [inv.id for inv in invoices] == ["a", "b"]
    assert all(isinstance(inv, Invoice) for inv in invoices)


def test_line_items_accept_dataclass_rows():
    inv = normalize_invoice({"id": "x", "rows": [LineItem(id="r1", cts=1.0, price=3.0)]}, today=TODAY)
    assert inv.rows[0] == LineItem(id="r1", cts=1.0, price=3.0)


@pytest.mark.parametrize(
    "payload",
    [
        {"invoices": [{"id": 1}]},
        {"data": [{"id": 1}]},
        [{"id": 1}],
    ],
)
def test_unwrap_invoice_records_envelopes(payload):
    assert unwrap_invoice_records(payload) == [{"id": 1}]


@pytest.mark.parametrize("payload", [{"error": "nope"}, "text", None, {"invoices": "x"}])
def test_unwrap_invoice_records_rejects_other_shapes(payload):
    with pytest.raises(ValueError):
        unwrap_invoice_records(payload)
