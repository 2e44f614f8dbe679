"""
In-memory storage for tests and single-process demos.

Records live in per-model dicts keyed by monotonically increasing integer
ids. Nothing is persisted and nothing is shared between processes.
"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple, Type

from sqlmodel import SQLModel

from hvacpro.core.exceptions import DuplicateUsernameError, StorageError
from hvacpro.models import (
    Appointment,
    Contractor,
    ContractorStatus,
    GoogleReview,
    Message,
    User,
)
from hvacpro.storage.base import ContractorQuery, ModelT, Storage


def _sort_key(attribute: str):
    def key(record):
        value = getattr(record, attribute)
        if isinstance(value, str):
            value = value.lower()
        # None sorts after everything, like NULLS LAST
        return (value is None, value if value is not None else 0)
    return key


class MemStorage(Storage):
    """Storage over process-local dictionaries"""

    def __init__(self):
        self._tables: Dict[type, Dict[int, SQLModel]] = defaultdict(dict)
        self._counters: Dict[type, int] = defaultdict(int)

    def _rows(self, model: Type[ModelT]) -> List[ModelT]:
        return list(self._tables[model].values())

    def _check_unique(self, record: SQLModel, values: Optional[dict] = None) -> None:
        """Mirror the unique constraints of the SQL schema"""
        values = values or {}
        if isinstance(record, User):
            username = values.get("username", record.username)
            for user in self._rows(User):
                if user.username == username and user.id != record.id:
                    raise DuplicateUsernameError(username)
        elif isinstance(record, Contractor):
            slug = values.get("slug", record.slug)
            place_id = values.get("place_id", record.place_id)
            for contractor in self._rows(Contractor):
                if contractor.id == record.id:
                    continue
                if contractor.slug == slug:
                    raise StorageError(f"Slug already exists: {slug}")
                if place_id and contractor.place_id == place_id:
                    raise StorageError(f"Place id already exists: {place_id}")

    # Generic records

    def get(self, model: Type[ModelT], record_id: int) -> Optional[ModelT]:
        return self._tables[model].get(record_id)

    def add(self, record: ModelT) -> ModelT:
        self._check_unique(record)
        model = type(record)
        if record.id is None:
            self._counters[model] += 1
            record.id = self._counters[model]
        else:
            self._counters[model] = max(self._counters[model], record.id)
        self._tables[model][record.id] = record
        return record

    def update(self, record: ModelT, data: dict) -> ModelT:
        self._check_unique(record, data)
        for key, value in data.items():
            setattr(record, key, value)
        return record

    def delete(self, record: SQLModel) -> None:
        self._tables[type(record)].pop(record.id, None)

    def list_for_contractor(
        self,
        model: Type[ModelT],
        contractor_id: int,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        rows = sorted(
            (row for row in self._rows(model) if row.contractor_id == contractor_id),
            key=lambda row: row.id,
        )
        if order_by:
            rows.sort(key=_sort_key(order_by), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    # Users

    def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._rows(User):
            if user.username == username:
                return user
        return None

    def list_users(self) -> List[User]:
        return sorted(self._rows(User), key=lambda user: user.id)

    def count_users(self) -> int:
        return len(self._tables[User])

    # Contractors

    def get_contractor_by_slug(self, slug: str) -> Optional[Contractor]:
        for contractor in self._rows(Contractor):
            if contractor.slug == slug:
                return contractor
        return None

    def list_contractors(self, status: Optional[ContractorStatus] = None) -> List[Contractor]:
        rows = sorted(self._rows(Contractor), key=lambda c: c.id)
        if status is not None:
            rows = [c for c in rows if c.status == status]
        return rows

    def search_contractors(self, query: ContractorQuery) -> Tuple[List[Contractor], int]:
        rows = self.list_contractors(query.status)
        if query.search:
            needle = query.search.strip().lower()
            rows = [
                c for c in rows
                if any(needle in (value or "").lower() for value in (c.name, c.email, c.phone, c.city))
            ]
        rows.sort(key=_sort_key(query.sort_field), reverse=query.descending)
        total = len(rows)
        return rows[query.offset:query.offset + query.limit], total

    def count_contractors_by_status(self) -> Dict[ContractorStatus, int]:
        counts: Dict[ContractorStatus, int] = defaultdict(int)
        for contractor in self._rows(Contractor):
            counts[ContractorStatus(contractor.status)] += 1
        return dict(counts)

    def find_slugs(self, prefix: str) -> Set[str]:
        return {c.slug for c in self._rows(Contractor) if c.slug.startswith(prefix)}

    def place_id_index(self) -> Dict[str, int]:
        return {c.place_id: c.id for c in self._rows(Contractor) if c.place_id}

    # Workspace queries

    def list_appointments_between(
        self, contractor_id: int, start: datetime, end: datetime
    ) -> List[Appointment]:
        rows = [
            apt for apt in self._rows(Appointment)
            if apt.contractor_id == contractor_id and start <= apt.start_time < end
        ]
        return sorted(rows, key=lambda apt: apt.start_time)

    def count_unread_messages(self, contractor_id: int) -> int:
        return sum(
            1 for message in self._rows(Message)
            if message.contractor_id == contractor_id and not message.is_read
        )

    def find_google_review(
        self, place_id: str, author_name: Optional[str], published_at: Optional[datetime]
    ) -> Optional[GoogleReview]:
        for review in self._rows(GoogleReview):
            if (
                review.place_id == place_id
                and review.author_name == author_name
                and review.published_at_date == published_at
            ):
                return review
        return None
