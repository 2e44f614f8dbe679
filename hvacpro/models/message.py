"""
Message model - customer conversations
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum


class MessageType(str, Enum):
    CHAT = "chat"
    EMAIL = "email"
    SMS = "sms"


class Message(SQLModel, table=True):
    __tablename__ = "messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)
    contact_id: Optional[int] = Field(default=None, foreign_key="contacts.id")
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")

    content: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    is_read: bool = Field(default=False, index=True)
    type: MessageType = Field(default=MessageType.CHAT)
