from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gemledger.app.db import Base


# -------------------------
# Helpers
# -------------------------

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def uuid_str() -> str:
    return str(uuid.uuid4())


REFERENCE_LISTS = ("lot_names", "shapes", "sizes", "descriptions", "grades")


# -------------------------
# Invoices
# -------------------------

class InvoiceRecord(Base):
    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid_str)
    invoice_number: Mapped[str] = mapped_column(String(40), nullable=False, unique=True)

    invoice_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    party: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    transaction_type: Mapped[str] = mapped_column(String(60), nullable=False)
    source: Mapped[str] = mapped_column(String(60), nullable=False, default="")
    sell_id: Mapped[Optional[str]] = mapped_column(String(60), nullable=True)
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    rows: Mapped[List["InvoiceRow"]] = relationship(
        "InvoiceRow",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="InvoiceRow.position",
    )


class InvoiceRow(Base):
    """
    One line item. The line amount is never stored: it is cts * price.
    """
    __tablename__ = "invoice_rows"

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    invoice_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    lot_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    description: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    shape: Mapped[str] = mapped_column(String(80), nullable=False, default="")
    size: Mapped[str] = mapped_column(String(80), nullable=False, default="")
    grade: Mapped[str] = mapped_column(String(80), nullable=False, default="")

    pcs: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cts: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")

    invoice = relationship("InvoiceRecord", back_populates="rows")

    __table_args__ = (
        Index("ix_invoice_rows_invoice_position", "invoice_id", "position"),
    )


# -------------------------
# Reference lists (lot names, shapes, sizes, descriptions, grades)
# -------------------------

class ReferenceItem(Base):
    __tablename__ = "reference_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid_str)
    list_name: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("list_name", "name", name="uq_reference_items_list_name"),
    )
