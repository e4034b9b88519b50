from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LineItemContract(WireModel):
    id: str
    lot_name: str
    description: str
    shape: str
    size: str
    grade: str
    pcs: float
    cts: float
    price: float
    remarks: str
    amount: float


class TotalsContract(WireModel):
    total_pcs: float
    total_cts: float
    total_amount: float
    average_price: float


class InvoiceContract(WireModel):
    id: str
    invoice_number: str
    date: date
    party: str
    transaction_type: str
    source: str = ""
    sell_id: Optional[str] = None
    remarks: str = ""
    items: List[LineItemContract]
    totals: TotalsContract


class LedgerRowContract(WireModel):
    date: date
    ref_no: str
    description: str
    party: str
    transaction_type: str
    amount: float
    debit: float
    credit: float
    balance: float


class LedgerSummaryContract(WireModel):
    row_count: int
    total_debit: float
    total_credit: float
    closing_balance: float


class SummaryContract(WireModel):
    invoice_count: int
    totals: TotalsContract
    balances: Dict[str, float]


class InvoiceReportContract(WireModel):
    invoices: List[InvoiceContract]
    totals: TotalsContract


class CashFlowContract(WireModel):
    rows: List[LedgerRowContract]
    summary: LedgerSummaryContract
    balance: float


class StatementContract(WireModel):
    party: str
    statement: List[LedgerRowContract]
    summary: LedgerSummaryContract


class ClientLedgerContract(WireModel):
    rows: List[LedgerRowContract]
    balances: Dict[str, float]
    summary: LedgerSummaryContract
