"""
SQLModel session backed storage
"""

from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple, Type

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, col, select
import structlog

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

logger = structlog.get_logger(__name__)


class DatabaseStorage(Storage):
    """Storage over a single SQLModel session; every write commits"""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self, record: SQLModel) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if isinstance(record, User) and "username" in str(e.orig).lower():
                raise DuplicateUsernameError(record.username) from e
            logger.error(f"Integrity error on {type(record).__name__}: {e.orig}")
            raise StorageError(str(e.orig)) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error on {type(record).__name__}: {e}")
            raise StorageError(str(e)) from e

    # Generic records

    def get(self, model: Type[ModelT], record_id: int) -> Optional[ModelT]:
        return self.session.get(model, record_id)

    def add(self, record: ModelT) -> ModelT:
        self.session.add(record)
        self._commit(record)
        self.session.refresh(record)
        return record

    def update(self, record: ModelT, data: dict) -> ModelT:
        for key, value in data.items():
            setattr(record, key, value)
        self.session.add(record)
        self._commit(record)
        self.session.refresh(record)
        return record

    def delete(self, record: SQLModel) -> None:
        self.session.delete(record)
        self._commit(record)

    def list_for_contractor(
        self,
        model: Type[ModelT],
        contractor_id: int,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        query = select(model).where(model.contractor_id == contractor_id)
        if order_by:
            column = getattr(model, order_by)
            query = query.order_by(column.desc() if descending else column.asc(), model.id)
        if limit is not None:
            query = query.limit(limit)
        return list(self.session.exec(query).all())

    # Users

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def list_users(self) -> List[User]:
        return list(self.session.exec(select(User).order_by(User.id)).all())

    def count_users(self) -> int:
        return self.session.exec(select(func.count()).select_from(User)).one()

    # Contractors

    def get_contractor_by_slug(self, slug: str) -> Optional[Contractor]:
        return self.session.exec(select(Contractor).where(Contractor.slug == slug)).first()

    def list_contractors(self, status: Optional[ContractorStatus] = None) -> List[Contractor]:
        query = select(Contractor).order_by(Contractor.id)
        if status is not None:
            query = query.where(Contractor.status == status)
        return list(self.session.exec(query).all())

    def search_contractors(self, query: ContractorQuery) -> Tuple[List[Contractor], int]:
        conditions = []
        if query.status is not None:
            conditions.append(Contractor.status == query.status)
        if query.search:
            term = query.search.strip()
            conditions.append(
                or_(
                    col(Contractor.name).icontains(term, autoescape=True),
                    col(Contractor.email).icontains(term, autoescape=True),
                    col(Contractor.phone).icontains(term, autoescape=True),
                    col(Contractor.city).icontains(term, autoescape=True),
                )
            )

        total = self.session.exec(
            select(func.count()).select_from(Contractor).where(*conditions)
        ).one()

        sort_column = col(getattr(Contractor, query.sort_field))
        order = sort_column.desc() if query.descending else sort_column.asc()
        rows = self.session.exec(
            select(Contractor)
            .where(*conditions)
            .order_by(order, Contractor.id)
            .offset(query.offset)
            .limit(query.limit)
        ).all()
        return list(rows), total

    def count_contractors_by_status(self) -> Dict[ContractorStatus, int]:
        rows = self.session.exec(
            select(Contractor.status, func.count()).group_by(Contractor.status)
        ).all()
        return {ContractorStatus(status): count for status, count in rows}

    def find_slugs(self, prefix: str) -> Set[str]:
        rows = self.session.exec(
            select(Contractor.slug).where(col(Contractor.slug).startswith(prefix, autoescape=True))
        ).all()
        return set(rows)

    def place_id_index(self) -> Dict[str, int]:
        rows = self.session.exec(
            select(Contractor.place_id, Contractor.id).where(col(Contractor.place_id).is_not(None))
        ).all()
        return {place_id: contractor_id for place_id, contractor_id in rows if place_id}

    # Workspace queries

    def list_appointments_between(
        self, contractor_id: int, start: datetime, end: datetime
    ) -> List[Appointment]:
        rows = self.session.exec(
            select(Appointment)
            .where(
                Appointment.contractor_id == contractor_id,
                Appointment.start_time >= start,
                Appointment.start_time < end,
            )
            .order_by(Appointment.start_time)
        ).all()
        return list(rows)

    def count_unread_messages(self, contractor_id: int) -> int:
        return self.session.exec(
            select(func.count())
            .select_from(Message)
            .where(Message.contractor_id == contractor_id, Message.is_read == False)  # noqa: E712
        ).one()

    def find_google_review(
        self, place_id: str, author_name: Optional[str], published_at: Optional[datetime]
    ) -> Optional[GoogleReview]:
        return self.session.exec(
            select(GoogleReview).where(
                GoogleReview.place_id == place_id,
                GoogleReview.author_name == author_name,
                GoogleReview.published_at_date == published_at,
            )
        ).first()
