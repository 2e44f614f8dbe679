"""
Message API endpoints
"""

from fastapi import APIRouter, Depends, status
from typing import List
import structlog

from hvacpro.core.dependencies import (
    ensure_contact,
    ensure_owned,
    get_storage,
    get_workspace_user,
)
from hvacpro.models import Message, User
from hvacpro.schemas.workspace import MessageCreate, MessageRead, MessageUpdate, UnreadCount
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[MessageRead])
async def list_messages(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """List messages, newest first"""
    return storage.list_for_contractor(Message, user.contractor_id, order_by="timestamp", descending=True)


@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    return UnreadCount(count=storage.count_unread_messages(user.contractor_id))


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def create_message(
    message_data: MessageCreate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Post a message as the current user"""
    ensure_contact(storage, user.contractor_id, message_data.contact_id)

    message = storage.add(Message(
        **message_data.model_dump(),
        contractor_id=user.contractor_id,
        user_id=user.id,
    ))
    logger.info(f"Message created: {message.id}")
    return message


@router.patch("/{message_id}", response_model=MessageRead)
async def update_message(
    message_id: int,
    message_update: MessageUpdate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Update message, e.g. mark it read"""
    message = ensure_owned(storage.get(Message, message_id), user, "Message")
    return storage.update(message, message_update.model_dump(exclude_unset=True))
