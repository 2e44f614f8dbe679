"""
Appointment model - schedule entries
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(SQLModel, table=True):
    """A scheduled visit, optionally tied to a job"""

    __tablename__ = "appointments"

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)
    job_id: Optional[int] = Field(default=None, foreign_key="jobs.id")
    contact_id: int = Field(foreign_key="contacts.id")

    title: str
    description: Optional[str] = None
    start_time: datetime = Field(index=True)
    end_time: datetime
    status: AppointmentStatus = Field(default=AppointmentStatus.PENDING)
    assigned_to_id: Optional[int] = Field(default=None, foreign_key="users.id")
    location: Optional[str] = None
    notes: Optional[str] = None
