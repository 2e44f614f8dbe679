"""
Job API endpoints
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
from hvacpro.models import ActivityType, Job, JobStatus, User
from hvacpro.schemas.workspace import JobCreate, JobRead, JobUpdate
from hvacpro.services.activity import JOB_NUMBER_PREFIX, document_number, record_activity
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[JobRead])
async def list_jobs(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """List jobs, newest first"""
    return storage.list_for_contractor(Job, user.contractor_id, order_by="created_at", descending=True)


@router.get("/recent", response_model=List[JobRead])
async def list_recent_jobs(
    limit: int = Query(default=5, ge=1, le=100),
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Most recently created jobs"""
    return storage.list_for_contractor(
        Job, user.contractor_id, order_by="created_at", descending=True, limit=limit
    )


@router.post("", response_model=JobRead, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Create a job and announce it in the activity feed"""
    ensure_contact(storage, user.contractor_id, job_data.contact_id)

    job = storage.add(Job(
        **job_data.model_dump(),
        contractor_id=user.contractor_id,
        job_number=document_number(JOB_NUMBER_PREFIX),
    ))
    record_activity(
        storage,
        job.contractor_id,
        ActivityType.JOB_CREATED,
        f"New job created: {job.title}",
        user_id=user.id,
        entity_type="job",
        entity_id=job.id,
    )

    logger.info(f"Job created: {job.id} ({job.job_number})")
    return job


@router.get("/{job_id}", response_model=JobRead)
async def get_job(
    job_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Get job by ID"""
    return ensure_owned(storage.get(Job, job_id), user, "Job")


@router.patch("/{job_id}", response_model=JobRead)
async def update_job(
    job_id: int,
    job_update: JobUpdate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Update job; completing it is recorded in the activity feed"""
    job = ensure_owned(storage.get(Job, job_id), user, "Job")
    data = job_update.model_dump(exclude_unset=True)
    if "contact_id" in data:
        ensure_contact(storage, job.contractor_id, data["contact_id"])

    was_completed = job.status == JobStatus.COMPLETED
    job = storage.update(job, data)

    if job.status == JobStatus.COMPLETED and not was_completed:
        record_activity(
            storage,
            job.contractor_id,
            ActivityType.JOB_COMPLETED,
            f"Job #{job.job_number} completed",
            user_id=user.id,
            entity_type="job",
            entity_id=job.id,
        )

    logger.info(f"Job updated: {job_id}")
    return job


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Delete job"""
    job = ensure_owned(storage.get(Job, job_id), user, "Job")
    storage.delete(job)
    logger.info(f"Job deleted: {job_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
