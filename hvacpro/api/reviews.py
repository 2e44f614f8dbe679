"""
Review API endpoints
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import List
import structlog

from hvacpro.core.dependencies import (
    ensure_contact,
    ensure_owned,
    get_storage,
    get_workspace_user,
)
from hvacpro.models import ActivityType, Review, User
from hvacpro.schemas.workspace import ReviewCreate, ReviewRead, ReviewUpdate
from hvacpro.services.activity import record_activity
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[ReviewRead])
async def list_reviews(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """List reviews, newest first"""
    return storage.list_for_contractor(Review, user.contractor_id, order_by="date", descending=True)


@router.get("/recent", response_model=List[ReviewRead])
async def list_recent_reviews(
    limit: int = Query(default=3, ge=1, le=100),
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    return storage.list_for_contractor(
        Review, user.contractor_id, order_by="date", descending=True, limit=limit
    )


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Record a customer review"""
    ensure_contact(storage, user.contractor_id, review_data.contact_id)

    review = storage.add(Review(**review_data.model_dump(), contractor_id=user.contractor_id))
    record_activity(
        storage,
        review.contractor_id,
        ActivityType.REVIEW_RECEIVED,
        f"New {review.rating}-star review received",
        user_id=user.id,
        entity_type="review",
        entity_id=review.id,
    )

    logger.info(f"Review created: {review.id}")
    return review


@router.get("/{review_id}", response_model=ReviewRead)
async def get_review(
    review_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    return ensure_owned(storage.get(Review, review_id), user, "Review")


@router.patch("/{review_id}", response_model=ReviewRead)
async def update_review(
    review_id: int,
    review_update: ReviewUpdate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Update review, usually to add the owner's response"""
    review = ensure_owned(storage.get(Review, review_id), user, "Review")
    review = storage.update(review, review_update.model_dump(exclude_unset=True))
    logger.info(f"Review updated: {review_id}")
    return review


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    review = ensure_owned(storage.get(Review, review_id), user, "Review")
    storage.delete(review)
    logger.info(f"Review deleted: {review_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
