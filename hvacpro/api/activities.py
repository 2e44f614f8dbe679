"""
Activity feed and dashboard stats endpoints
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from hvacpro.core.dependencies import get_storage, get_workspace_user
from hvacpro.models import Activity, User
from hvacpro.schemas.workspace import ActivityRead, ContractorStats
from hvacpro.services.stats import contractor_stats
from hvacpro.storage import Storage

router = APIRouter()


@router.get("/activities", response_model=List[ActivityRead])
async def list_activities(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Full activity feed, newest first"""
    return storage.list_for_contractor(Activity, user.contractor_id, order_by="timestamp", descending=True)


@router.get("/activities/recent", response_model=List[ActivityRead])
async def list_recent_activities(
    limit: int = Query(default=5, ge=1, le=100),
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    return storage.list_for_contractor(
        Activity, user.contractor_id, order_by="timestamp", descending=True, limit=limit
    )


@router.get("/stats", response_model=ContractorStats)
async def get_stats(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Headline numbers for the dashboard"""
    return ContractorStats(**contractor_stats(storage, user.contractor_id))
