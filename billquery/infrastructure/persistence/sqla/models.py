from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

bills = Table(
    "bills",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("execution_date", DateTime, nullable=False),
    Column("total_amount", Numeric(10, 2), nullable=False),
    Column("number_of_installments", Integer, nullable=False),
    Column("installment_amount", Numeric(10, 2)),
    Column("description", Text),
    Column("is_recurring", Boolean, nullable=False, default=False),
    Column("category", String),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

installments = Table(
    "installments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("bill_id", Integer, ForeignKey("bills.id", ondelete="CASCADE"), nullable=False),
    Column("credit_card_id", Integer),
    Column("invoice_id", Integer),
    Column("installment_number", Integer, nullable=False),
    Column("amount", Numeric(10, 2), nullable=False),
    Column("due_date", Date, nullable=False),
    Column("created_at", DateTime, nullable=False),
)

Index("idx_bills_execution_date", bills.c.execution_date)
Index("idx_installments_bill_card", installments.c.bill_id, installments.c.credit_card_id)
