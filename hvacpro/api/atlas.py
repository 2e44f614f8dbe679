"""
Atlas sales pipeline API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
import math
import structlog

from hvacpro.core.dependencies import get_storage, require_permission
from hvacpro.core.exceptions import InvalidTransitionError
from hvacpro.core.permissions import Permission
from hvacpro.models import ContractorStatus, User
from hvacpro.schemas.contractor import (
    ContractorPage,
    ContractorRead,
    Pagination,
    PipelineStatusUpdate,
    PipelineSummary,
)
from hvacpro.services import pipeline
from hvacpro.storage import ContractorQuery, Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/contractors", response_model=ContractorPage)
async def list_pipeline_contractors(
    status_filter: Optional[ContractorStatus] = Query(default=None, alias="status"),
    search: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=200),
    sort_by: str = Query(default="name", alias="sortBy"),
    sort_dir: str = Query(default="asc", alias="sortDir"),
    user: User = Depends(require_permission(Permission.PIPELINE_VIEW)),
    storage: Storage = Depends(get_storage)
):
    """Filtered, sorted and paged contractor list for the pipeline board"""
    query = ContractorQuery(
        status=status_filter,
        search=search or None,
        sort_by=sort_by,
        sort_dir=sort_dir,
        page=page,
        limit=limit,
    )
    contractors, total = storage.search_contractors(query)

    return ContractorPage(
        contractors=[ContractorRead.model_validate(c) for c in contractors],
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            pages=math.ceil(total / limit) if total else 0,
        ),
    )


@router.get("/pipeline-summary", response_model=PipelineSummary)
async def get_pipeline_summary(
    user: User = Depends(require_permission(Permission.PIPELINE_VIEW)),
    storage: Storage = Depends(get_storage)
):
    """Contractor counts per pipeline stage"""
    return PipelineSummary(**pipeline.pipeline_summary(storage))


@router.patch("/contractors/{contractor_id}/status", response_model=ContractorRead)
async def update_pipeline_status(
    contractor_id: int,
    update: PipelineStatusUpdate,
    user: User = Depends(require_permission(Permission.PIPELINE_EDIT)),
    storage: Storage = Depends(get_storage)
):
    """Move a contractor through the pipeline, or just log notes and contact date"""
    if update.status is not None:
        try:
            contractor = pipeline.set_status(storage, contractor_id, update.status, notes=update.notes)
        except InvalidTransitionError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        contractor = pipeline.update_contact_log(
            storage,
            contractor_id,
            notes=update.notes,
            last_contacted_date=update.last_contacted_date,
        )

    if not contractor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contractor not found"
        )

    logger.info(f"Pipeline entry {contractor_id} updated by user {user.id}")
    return contractor
