"""
Customer contact model
"""

from sqlmodel import Field, SQLModel
from typing import Optional
from enum import Enum


class ContactType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class Contact(SQLModel, table=True):
    """A customer of a contractor"""

    __tablename__ = "contacts"

    id: Optional[int] = Field(default=None, primary_key=True)
    contractor_id: int = Field(foreign_key="contractors.id", index=True)

    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    type: ContactType = Field(default=ContactType.RESIDENTIAL)
    company_name: Optional[str] = None
    notes: Optional[str] = None
