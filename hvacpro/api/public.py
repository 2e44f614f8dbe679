"""
Public slug lookup, login gate and admin preview endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from typing import Optional
import structlog

from hvacpro.core.dependencies import get_storage, require_permission
from hvacpro.core.permissions import Permission
from hvacpro.models import User
from hvacpro.schemas.contractor import ContractorRead, ContractorSlugInfo, LoginGate
from hvacpro.schemas.workspace import ContractorStats, TenantPreview
from hvacpro.services.provisioning import lookup_contractor_by_slug
from hvacpro.services.slug_gate import resolve_login_gate
from hvacpro.services.stats import contractor_stats
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/contractor-by-slug/{slug}", response_model=ContractorSlugInfo)
async def get_contractor_by_slug(
    slug: str,
    storage: Storage = Depends(get_storage)
):
    """Resolve a public slug; prospects get a demo login on first visit"""
    lookup = lookup_contractor_by_slug(storage, slug)
    if lookup is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contractor not found"
        )
    return ContractorSlugInfo(name=lookup.name, slug=lookup.slug, is_prospect=lookup.is_prospect)


@router.get("/login-gate", response_model=LoginGate)
async def get_login_gate(
    path: Optional[str] = None,
    storage: Storage = Depends(get_storage)
):
    """Which login form to render for a public URL path"""
    return LoginGate(**resolve_login_gate(storage, path))


@router.get("/view-as/{slug}", response_model=TenantPreview)
async def view_as_contractor(
    slug: str,
    admin: User = Depends(require_permission(Permission.TENANT_PREVIEW)),
    storage: Storage = Depends(get_storage)
):
    """Read-only snapshot of a tenant's dashboard"""
    contractor = storage.get_contractor_by_slug(slug)
    if not contractor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contractor not found"
        )

    logger.info(f"Admin {admin.id} previewing contractor {contractor.id}")
    return TenantPreview(
        contractor=ContractorRead.model_validate(contractor),
        stats=ContractorStats(**contractor_stats(storage, contractor.id)),
    )
