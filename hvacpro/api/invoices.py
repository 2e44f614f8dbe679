"""
Invoice API endpoints
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import List
import structlog

from hvacpro.core.dependencies import (
    ensure_contact,
    ensure_owned,
    get_storage,
    get_workspace_user,
)
from hvacpro.models import ActivityType, Invoice, InvoiceStatus, User
from hvacpro.schemas.workspace import InvoiceCreate, InvoiceRead, InvoiceUpdate
from hvacpro.services.activity import INVOICE_NUMBER_PREFIX, document_number, record_activity
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[InvoiceRead])
async def list_invoices(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """List invoices, latest issue date first"""
    return storage.list_for_contractor(Invoice, user.contractor_id, order_by="issue_date", descending=True)


@router.get("/recent", response_model=List[InvoiceRead])
async def list_recent_invoices(
    limit: int = Query(default=5, ge=1, le=100),
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Most recently issued invoices"""
    return storage.list_for_contractor(
        Invoice, user.contractor_id, order_by="issue_date", descending=True, limit=limit
    )


@router.post("", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Create an invoice; sent invoices are announced in the activity feed"""
    ensure_contact(storage, user.contractor_id, invoice_data.contact_id)

    invoice = storage.add(Invoice(
        **invoice_data.model_dump(),
        contractor_id=user.contractor_id,
        invoice_number=document_number(INVOICE_NUMBER_PREFIX),
    ))

    if invoice.status == InvoiceStatus.SENT:
        record_activity(
            storage,
            invoice.contractor_id,
            ActivityType.INVOICE_CREATED,
            f"Invoice #{invoice.invoice_number} sent",
            user_id=user.id,
            entity_type="invoice",
            entity_id=invoice.id,
        )

    logger.info(f"Invoice created: {invoice.id} ({invoice.invoice_number})")
    return invoice


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(
    invoice_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Get invoice by ID"""
    return ensure_owned(storage.get(Invoice, invoice_id), user, "Invoice")


@router.patch("/{invoice_id}", response_model=InvoiceRead)
async def update_invoice(
    invoice_id: int,
    invoice_update: InvoiceUpdate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Update invoice; payment is recorded in the activity feed"""
    invoice = ensure_owned(storage.get(Invoice, invoice_id), user, "Invoice")
    data = invoice_update.model_dump(exclude_unset=True)
    if "contact_id" in data:
        ensure_contact(storage, invoice.contractor_id, data["contact_id"])

    was_paid = invoice.status == InvoiceStatus.PAID
    invoice = storage.update(invoice, data)

    if invoice.status == InvoiceStatus.PAID and not was_paid:
        record_activity(
            storage,
            invoice.contractor_id,
            ActivityType.INVOICE_PAID,
            f"Invoice #{invoice.invoice_number} paid",
            user_id=user.id,
            entity_type="invoice",
            entity_id=invoice.id,
        )

    logger.info(f"Invoice updated: {invoice_id}")
    return invoice


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Delete invoice"""
    invoice = ensure_owned(storage.get(Invoice, invoice_id), user, "Invoice")
    storage.delete(invoice)
    logger.info(f"Invoice deleted: {invoice_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
