"""
Customer review models
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from datetime import datetime
from decimal import Decimal
from typing import Optional


class Review(SQLModel, table=True):
    """Review left by one of the contractor's customers"""

    __tablename__ = "reviews"

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)
    job_id: Optional[int] = Field(default=None, foreign_key="jobs.id")
    contact_id: int = Field(foreign_key="contacts.id")

    rating: int
    comment: Optional[str] = None
    service_type: Optional[str] = None
    date: datetime = Field(default_factory=datetime.utcnow)
    verified: bool = Field(default=False)
    response: Optional[str] = None


class GoogleReview(SQLModel, table=True):
    """Review scraped from a Google Maps listing"""

    __tablename__ = "google_reviews"

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)
    place_id: str = Field(index=True)
    author_name: Optional[str] = None
    stars: Optional[int] = None
    total_score: Optional[Decimal] = Field(default=None, max_digits=3, decimal_places=1)
    review_text: Optional[str] = None
    published_at_date: Optional[datetime] = None
    response_from_owner_text: Optional[str] = None
    response_from_owner_date: Optional[datetime] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    raw_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    imported_at: datetime = Field(default_factory=datetime.utcnow)
