"""
Contractor model - tenant directory and Atlas sales pipeline
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum


class ContractorStatus(str, Enum):
    """Sales pipeline status of a contractor"""
    PROSPECT = "prospect"       # Scraped lead, never contacted
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    DEMO = "demo"
    CLIENT = "client"           # Paying tenant


class Contractor(SQLModel, table=True):
    """A tenant, or a scraped lead that may become one"""

    __tablename__ = "contractors"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    slug: str = Field(unique=True, index=True, description="URL-safe public identifier")
    place_id: Optional[str] = Field(default=None, unique=True, description="Google Places ID")
    site_url: Optional[str] = None
    year_founded: Optional[str] = None

    # Contact info
    email: str = Field(default="", index=True)
    phone: Optional[str] = None
    phone_type: Optional[str] = None
    address: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = Field(default=None, index=True)
    state: Optional[str] = None
    zip: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None

    # Scraped listing metadata
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

    # Branding
    primary_color: str = Field(default="#2563EB")

    # Pipeline
    status: ContractorStatus = Field(default=ContractorStatus.PROSPECT, index=True)
    lead_source: Optional[str] = None
    notes: Optional[str] = None
    last_contacted_date: Optional[datetime] = None

    active: bool = Field(default=True, index=True)
    created_by_id: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    @property
    def is_prospect(self) -> bool:
        return self.status == ContractorStatus.PROSPECT
