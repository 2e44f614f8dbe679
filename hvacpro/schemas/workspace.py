"""
API schemas for contacts, jobs, appointments, invoices, reviews, messages,
activities and dashboard stats
"""

from pydantic import Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from hvacpro.models.activity import ActivityType
from hvacpro.models.appointment import AppointmentStatus
from hvacpro.models.contact import ContactType
from hvacpro.models.invoice import InvoiceStatus
from hvacpro.models.job import JobStatus
from hvacpro.models.message import MessageType
from hvacpro.schemas.base import CamelModel, to_naive_utc
from hvacpro.schemas.contractor import ContractorRead

# ============================================================================
# Contact Schemas
# ============================================================================

class ContactCreate(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    type: ContactType = ContactType.RESIDENTIAL
    company_name: Optional[str] = None
    notes: Optional[str] = None


class ContactUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    type: Optional[ContactType] = None
    company_name: Optional[str] = None
    notes: Optional[str] = None


class ContactRead(ContactCreate):
    id: int
    contractor_id: int


# ============================================================================
# Job Schemas
# ============================================================================

class JobCreate(CamelModel):
    contact_id: int
    title: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: JobStatus = JobStatus.ESTIMATE
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    assigned_to_id: Optional[int] = None
    notes: Optional[str] = None
    total_amount: Decimal = Decimal("0")


class JobUpdate(CamelModel):
    contact_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1)
    type: Optional[str] = None
    description: Optional[str] = None
    status: Optional[JobStatus] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    assigned_to_id: Optional[int] = None
    notes: Optional[str] = None
    total_amount: Optional[Decimal] = None


class JobRead(JobCreate):
    id: int
    job_number: str
    contractor_id: int
    created_at: datetime


# ============================================================================
# Appointment Schemas
# ============================================================================

class AppointmentCreate(CamelModel):
    contact_id: int
    job_id: Optional[int] = None
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: AppointmentStatus = AppointmentStatus.PENDING
    assigned_to_id: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def naive_times(cls, value):
        return to_naive_utc(value)


class AppointmentUpdate(CamelModel):
    contact_id: Optional[int] = None
    job_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None
    assigned_to_id: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def naive_times(cls, value):
        return to_naive_utc(value)


class AppointmentRead(AppointmentCreate):
    id: int
    contractor_id: int


# ============================================================================
# Invoice Schemas
# ============================================================================

class InvoiceCreate(CamelModel):
    contact_id: int
    job_id: Optional[int] = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    issue_date: date
    due_date: date
    amount: Decimal = Field(..., ge=0)
    tax: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    notes: Optional[str] = None
    payment_method: Optional[str] = None
    payment_date: Optional[date] = None


class InvoiceUpdate(CamelModel):
    contact_id: Optional[int] = None
    job_id: Optional[int] = None
    status: Optional[InvoiceStatus] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    tax: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    notes: Optional[str] = None
    payment_method: Optional[str] = None
    payment_date: Optional[date] = None


class InvoiceRead(InvoiceCreate):
    id: int
    invoice_number: str
    contractor_id: int


# ============================================================================
# Review Schemas
# ============================================================================

class ReviewCreate(CamelModel):
    contact_id: int
    job_id: Optional[int] = None
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    service_type: Optional[str] = None
    verified: bool = False
    response: Optional[str] = None


class ReviewUpdate(CamelModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = None
    service_type: Optional[str] = None
    verified: Optional[bool] = None
    response: Optional[str] = None


class ReviewRead(ReviewCreate):
    id: int
    contractor_id: int
    date: datetime


# ============================================================================
# Message Schemas
# ============================================================================

class MessageCreate(CamelModel):
    content: str = Field(..., min_length=1)
    contact_id: Optional[int] = None
    type: MessageType = MessageType.CHAT


class MessageUpdate(CamelModel):
    is_read: Optional[bool] = None
    content: Optional[str] = Field(default=None, min_length=1)


class MessageRead(MessageCreate):
    id: int
    contractor_id: int
    user_id: Optional[int] = None
    timestamp: datetime
    is_read: bool


class UnreadCount(CamelModel):
    count: int


# ============================================================================
# Activity & Stats Schemas
# ============================================================================

class ActivityRead(CamelModel):
    id: int
    contractor_id: int
    user_id: Optional[int] = None
    type: ActivityType
    description: str
    entity_type: Optional[str] = None
    entity_id: Optional[int] = None
    timestamp: datetime


class ContractorStats(CamelModel):
    active_jobs: int
    scheduled_today: int
    pending_invoices_amount: float
    pending_invoices_count: int
    average_rating: float
    review_count: int


class TenantPreview(CamelModel):
    """Read-only dashboard snapshot shown to admins"""
    preview_mode: bool = True
    contractor: ContractorRead
    stats: ContractorStats
