"""
Storage interface shared by the SQL and in-memory backends
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple, Type, TypeVar

from sqlmodel import SQLModel

from hvacpro.models import Contractor, ContractorStatus, GoogleReview, User, Appointment

ModelT = TypeVar("ModelT", bound=SQLModel)

# Public sort keys accepted by the Atlas list, mapped to model attributes
CONTRACTOR_SORT_FIELDS = {
    "name": "name",
    "city": "city",
    "state": "state",
    "status": "status",
    "rating": "rating",
    "reviewCount": "review_count",
    "review_count": "review_count",
    "lastContactedDate": "last_contacted_date",
    "last_contacted_date": "last_contacted_date",
}


@dataclass
class ContractorQuery:
    """Filter, sort and page parameters for the contractor directory"""
    status: Optional[ContractorStatus] = None
    search: Optional[str] = None
    sort_by: str = "name"
    sort_dir: str = "asc"
    page: int = 1
    limit: int = 20

    @property
    def sort_field(self) -> str:
        return CONTRACTOR_SORT_FIELDS.get(self.sort_by, "name")

    @property
    def descending(self) -> bool:
        return self.sort_dir.lower() == "desc"

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit


class Storage(ABC):
    """Persistence operations used by the API, services and scripts.

    ``add`` raises ``DuplicateUsernameError`` when a user conflicts with an
    existing username; that conflict is the authoritative signal that an
    account already exists.
    """

    # Generic records

    @abstractmethod
    def get(self, model: Type[ModelT], record_id: int) -> Optional[ModelT]:
        ...

    @abstractmethod
    def add(self, record: ModelT) -> ModelT:
        ...

    @abstractmethod
    def update(self, record: ModelT, data: dict) -> ModelT:
        ...

    @abstractmethod
    def delete(self, record: SQLModel) -> None:
        ...

    @abstractmethod
    def list_for_contractor(
        self,
        model: Type[ModelT],
        contractor_id: int,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        ...

    # Users

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def list_users(self) -> List[User]:
        ...

    @abstractmethod
    def count_users(self) -> int:
        ...

    # Contractors

    @abstractmethod
    def get_contractor_by_slug(self, slug: str) -> Optional[Contractor]:
        ...

    @abstractmethod
    def list_contractors(self, status: Optional[ContractorStatus] = None) -> List[Contractor]:
        ...

    @abstractmethod
    def search_contractors(self, query: ContractorQuery) -> Tuple[List[Contractor], int]:
        """Return one page of matching contractors and the total match count"""

    @abstractmethod
    def count_contractors_by_status(self) -> Dict[ContractorStatus, int]:
        ...

    @abstractmethod
    def find_slugs(self, prefix: str) -> Set[str]:
        """Slugs starting with ``prefix``"""

    @abstractmethod
    def place_id_index(self) -> Dict[str, int]:
        """Map of Google place id to contractor id"""

    # Workspace queries

    @abstractmethod
    def list_appointments_between(
        self, contractor_id: int, start: datetime, end: datetime
    ) -> List[Appointment]:
        """Appointments with ``start <= start_time < end``, earliest first"""

    @abstractmethod
    def count_unread_messages(self, contractor_id: int) -> int:
        ...

    @abstractmethod
    def find_google_review(
        self, place_id: str, author_name: Optional[str], published_at: Optional[datetime]
    ) -> Optional[GoogleReview]:
        ...
