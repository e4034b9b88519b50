"""Domain contracts and shared types."""

from gemledger.app.domain.contracts import (  # noqa: F401
    CashFlowContract,
    ClientLedgerContract,
    InvoiceContract,
    InvoiceReportContract,
    LedgerRowContract,
    LedgerSummaryContract,
    LineItemContract,
    StatementContract,
    SummaryContract,
    TotalsContract,
)
