"""
Activity feed model
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum


class ActivityType(str, Enum):
    JOB_CREATED = "job_created"
    JOB_COMPLETED = "job_completed"
    INVOICE_CREATED = "invoice_created"
    INVOICE_PAID = "invoice_paid"
    REVIEW_RECEIVED = "review_received"
    MESSAGE_RECEIVED = "message_received"


class Activity(SQLModel, table=True):
    """Dashboard feed entry written when something happens in a workspace"""

    __tablename__ = "activities"

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")

    type: ActivityType
    description: str
    entity_type: Optional[str] = None  # invoice, job, review, message
    entity_id: Optional[int] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow, index=True)
