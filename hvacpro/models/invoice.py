"""
Invoice model
"""

from sqlmodel import Field, SQLModel
from datetime import date
from decimal import Decimal
from typing import Optional
from enum import Enum


class InvoiceStatus(str, Enum):
    """Status of an invoice"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


# Sent to the customer and not yet paid
PENDING_INVOICE_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


class Invoice(SQLModel, table=True):
    """Invoice issued to a contact"""

    __tablename__ = "invoices"

    id: Optional[int] = Field(default=None, primary_key=True)
    invoice_number: str = Field(index=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)
    job_id: Optional[int] = Field(default=None, foreign_key="jobs.id")
    contact_id: int = Field(foreign_key="contacts.id")

    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT, index=True)
    issue_date: date
    due_date: date
    amount: Decimal = Field(max_digits=10, decimal_places=2)
    tax: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    discount: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    notes: Optional[str] = None
    payment_method: Optional[str] = None
    payment_date: Optional[date] = None
