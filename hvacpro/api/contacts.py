"""
Contact API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List
import structlog

from hvacpro.core.dependencies import ensure_owned, get_storage, get_workspace_user
from hvacpro.core.exceptions import StorageError
from hvacpro.models import Contact, User
from hvacpro.schemas.workspace import ContactCreate, ContactRead, ContactUpdate
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[ContactRead])
async def list_contacts(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """List the caller's contacts"""
    return storage.list_for_contractor(Contact, user.contractor_id, order_by="id")


@router.post("", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
async def create_contact(
    contact_data: ContactCreate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Create a contact"""
    contact = storage.add(Contact(**contact_data.model_dump(), contractor_id=user.contractor_id))
    logger.info(f"Contact created: {contact.id}")
    return contact


@router.get("/{contact_id}", response_model=ContactRead)
async def get_contact(
    contact_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Get contact by ID"""
    return ensure_owned(storage.get(Contact, contact_id), user, "Contact")


@router.patch("/{contact_id}", response_model=ContactRead)
async def update_contact(
    contact_id: int,
    contact_update: ContactUpdate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Update contact"""
    contact = ensure_owned(storage.get(Contact, contact_id), user, "Contact")
    contact = storage.update(contact, contact_update.model_dump(exclude_unset=True))
    logger.info(f"Contact updated: {contact_id}")
    return contact


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Delete contact"""
    contact = ensure_owned(storage.get(Contact, contact_id), user, "Contact")
    try:
        storage.delete(contact)
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Contact is still referenced by jobs, invoices or appointments"
        )

    logger.info(f"Contact deleted: {contact_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
