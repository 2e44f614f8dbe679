"""
Contractor directory API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime
from typing import List, Optional
import structlog

from hvacpro.core.dependencies import get_current_user, get_storage, require_permission
from hvacpro.core.exceptions import InvalidTransitionError, StorageError
from hvacpro.core.permissions import Permission, get_permissions_for_role
from hvacpro.models import Contractor, User
from hvacpro.schemas.contractor import ContractorCreate, ContractorRead, ContractorUpdate
from hvacpro.services import pipeline
from hvacpro.services.slugs import slugify, unique_slug
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


def get_visible_contractor(storage: Storage, contractor_id: int, user: User) -> Contractor:
    """Contractor that ``user`` may see: any for admins, their own otherwise"""
    contractor = storage.get(Contractor, contractor_id)
    if not contractor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contractor not found"
        )

    if not user.is_admin and user.contractor_id != contractor.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied"
        )
    return contractor


@router.get("", response_model=List[ContractorRead])
async def list_contractors(
    slug: Optional[str] = None,
    admin: User = Depends(require_permission(Permission.CONTRACTORS_MANAGE)),
    storage: Storage = Depends(get_storage)
):
    """List contractors, or the one matching ``slug``"""
    if slug is not None:
        contractor = storage.get_contractor_by_slug(slug)
        return [contractor] if contractor else []
    return storage.list_contractors()


@router.post("", response_model=ContractorRead, status_code=status.HTTP_201_CREATED)
async def create_contractor(
    contractor_data: ContractorCreate,
    admin: User = Depends(require_permission(Permission.CONTRACTORS_MANAGE)),
    storage: Storage = Depends(get_storage)
):
    """Create a contractor; the slug is derived from the name when omitted"""
    if contractor_data.slug:
        slug = slugify(contractor_data.slug)
        if not slug or storage.get_contractor_by_slug(slug):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Slug is invalid or already in use"
            )
    else:
        slug = unique_slug(storage, contractor_data.name)

    values = contractor_data.model_dump(exclude={"slug"})
    try:
        contractor = storage.add(Contractor(**values, slug=slug, created_by_id=admin.id))
    except StorageError as e:
        logger.error(f"Failed to create contractor: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to create contractor"
        )

    logger.info(f"Contractor created: {contractor.id} ({contractor.slug})")
    return contractor


@router.get("/{contractor_id}", response_model=ContractorRead)
async def get_contractor(
    contractor_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage)
):
    """Get contractor by ID"""
    return get_visible_contractor(storage, contractor_id, user)


@router.patch("/{contractor_id}", response_model=ContractorRead)
async def update_contractor(
    contractor_id: int,
    contractor_update: ContractorUpdate,
    user: User = Depends(require_permission(Permission.COMPANY_EDIT)),
    storage: Storage = Depends(get_storage)
):
    """Update a contractor profile; status changes go through the pipeline"""
    contractor = get_visible_contractor(storage, contractor_id, user)

    data = contractor_update.model_dump(exclude_unset=True)
    new_status = data.pop("status", None)

    if new_status is not None and new_status != contractor.status:
        if Permission.PIPELINE_EDIT not in get_permissions_for_role(user.role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions"
            )
        try:
            contractor = pipeline.set_status(storage, contractor_id, new_status)
        except InvalidTransitionError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if data:
        data["updated_at"] = datetime.utcnow()
        try:
            contractor = storage.update(contractor, data)
        except StorageError as e:
            logger.error(f"Failed to update contractor {contractor_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Failed to update contractor"
            )

    logger.info(f"Contractor updated: {contractor_id} by user {user.id}")
    return contractor
