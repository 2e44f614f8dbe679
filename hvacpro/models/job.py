"""
Job model - service work for a contact
"""

from sqlmodel import Field, SQLModel
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from enum import Enum


class JobStatus(str, Enum):
    """Status of a job"""
    ESTIMATE = "estimate"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_JOB_STATUSES = (JobStatus.SCHEDULED, JobStatus.IN_PROGRESS)


class Job(SQLModel, table=True):
    """A unit of work such as an AC repair or a furnace install"""

    __tablename__ = "jobs"

    id: Optional[int] = Field(default=None, primary_key=True)
    job_number: str = Field(index=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)
    contact_id: int = Field(foreign_key="contacts.id", index=True)

    title: str
    description: Optional[str] = None
    status: JobStatus = Field(default=JobStatus.ESTIMATE, index=True)
    type: str = Field(description="ac_repair, ac_maintenance, heating_repair, ...")

    created_at: datetime = Field(default_factory=datetime.utcnow)
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    assigned_to_id: Optional[int] = Field(default=None, foreign_key="users.id")
    notes: Optional[str] = None
    total_amount: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
