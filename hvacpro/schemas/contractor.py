"""
Pydantic schemas for contractors and the Atlas pipeline
"""

from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from hvacpro.models.contractor import ContractorStatus
from hvacpro.schemas.base import CamelModel, to_naive_utc


class ContractorFields(CamelModel):
    """Editable contractor profile fields"""
    place_id: Optional[str] = None
    site_url: Optional[str] = None
    year_founded: Optional[str] = None
    phone: Optional[str] = None
    phone_type: Optional[str] = None
    address: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    rating: Optional[str] = None
    review_count: Optional[str] = None
    reviews_link: Optional[str] = None
    photos_count: Optional[str] = None
    working_hours: Optional[str] = None
    accepts_credit_cards: Optional[bool] = None
    logo: Optional[str] = None
    verified_location: Optional[bool] = None
    location_link: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None
    website_title: Optional[str] = None
    website_generator: Optional[str] = None
    website_keywords: Optional[str] = None
    description: Optional[str] = None
    lead_source: Optional[str] = None
    notes: Optional[str] = None


class ContractorCreate(ContractorFields):
    name: str = Field(..., min_length=1)
    slug: Optional[str] = Field(default=None, description="Generated from the name when omitted")
    email: str = ""
    primary_color: str = "#2563EB"
    status: ContractorStatus = ContractorStatus.PROSPECT
    active: bool = True


class ContractorUpdate(ContractorFields):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    primary_color: Optional[str] = None
    active: Optional[bool] = None
    status: Optional[ContractorStatus] = None


class ContractorRead(ContractorFields):
    id: int
    name: str
    slug: str
    email: str
    primary_color: str
    status: ContractorStatus
    last_contacted_date: Optional[datetime] = None
    active: bool
    created_by_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ContractorSlugInfo(CamelModel):
    """Public answer for a slug lookup"""
    name: str
    slug: str
    is_prospect: bool


class PipelineStatusUpdate(CamelModel):
    status: Optional[ContractorStatus] = None
    notes: Optional[str] = None
    last_contacted_date: Optional[datetime] = None

    @field_validator("last_contacted_date")
    @classmethod
    def naive_contact_date(cls, value):
        return to_naive_utc(value)


class PipelineSummary(CamelModel):
    total: int
    prospect: int
    contacted: int
    qualified: int
    demo: int
    client: int


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    pages: int


class ContractorPage(CamelModel):
    contractors: List[ContractorRead]
    pagination: Pagination


class LoginGate(CamelModel):
    """Which login form to show for a public path"""
    mode: str
    slug: Optional[str] = None
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    action_label: Optional[str] = None
    tabs: List[str] = []
