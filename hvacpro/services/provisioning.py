"""
Prospect account auto-provisioning.

A prospect's public URL doubles as its demo login: the first lookup of a
prospect slug creates a contractor user whose username and password are
both the slug. Provisioning is best effort and never blocks the lookup.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import structlog

from hvacpro.core.auth import hash_password
from hvacpro.core.config import get_settings
from hvacpro.core.exceptions import DuplicateUsernameError
from hvacpro.models import Contractor, ContractorStatus, User, UserRole
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)


@dataclass
class SlugLookup:
    name: str
    slug: str
    is_prospect: bool


def prospect_email(contractor: Contractor) -> str:
    if contractor.email:
        return contractor.email
    return f"{contractor.slug}@{get_settings().PROSPECT_EMAIL_DOMAIN}"


def split_name(name: str) -> Tuple[str, str]:
    parts = (name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def build_prospect_user(contractor: Contractor) -> User:
    first_name, last_name = split_name(contractor.name)
    return User(
        username=contractor.slug,
        password_hash=hash_password(contractor.slug),
        email=prospect_email(contractor),
        first_name=first_name,
        last_name=last_name,
        role=UserRole.CONTRACTOR,
        contractor_id=contractor.id,
        is_active=True,
    )


def provision_prospect_user(storage: Storage, contractor: Contractor) -> Optional[User]:
    """Create the demo login for a prospect.

    Returns the new user, or None when the contractor is not a prospect or
    already has an account. The username unique constraint decides races:
    a concurrent insert that wins first makes this one a no-op.
    """
    if not contractor.is_prospect:
        return None

    if storage.get_user_by_username(contractor.slug) is not None:
        return None

    try:
        user = storage.add(build_prospect_user(contractor))
    except DuplicateUsernameError:
        logger.info(f"Prospect user already provisioned: {contractor.slug}")
        return None

    logger.info(f"Provisioned prospect user {user.id} for contractor {contractor.id} ({contractor.slug})")
    return user


def lookup_contractor_by_slug(storage: Storage, slug: str) -> Optional[SlugLookup]:
    """Resolve a public slug, provisioning a demo login for prospects.

    The result never says whether provisioning ran or failed.
    """
    contractor = storage.get_contractor_by_slug(slug)
    if contractor is None:
        return None

    is_prospect = contractor.is_prospect
    if is_prospect:
        try:
            provision_prospect_user(storage, contractor)
        except Exception as e:
            logger.error(f"Failed to provision prospect user for {slug}: {e}")

    return SlugLookup(name=contractor.name, slug=contractor.slug, is_prospect=is_prospect)


def provision_all_prospects(storage: Storage) -> Dict[str, int]:
    """Create demo logins for every prospect that lacks one"""
    results = {"prospects": 0, "created": 0, "skipped": 0, "failed": 0}

    for contractor in storage.list_contractors(ContractorStatus.PROSPECT):
        results["prospects"] += 1
        try:
            user = provision_prospect_user(storage, contractor)
        except Exception as e:
            logger.error(f"Failed to provision prospect user for {contractor.slug}: {e}")
            results["failed"] += 1
            continue

        if user is None:
            logger.info(f"User already exists for {contractor.name} ({contractor.slug}), skipping")
            results["skipped"] += 1
        else:
            results["created"] += 1

    return results


def ensure_admin_user(storage: Storage, username: str, password: str, email: str) -> Optional[User]:
    """Create the bootstrap admin account unless the username is taken"""
    if storage.get_user_by_username(username) is not None:
        return None

    try:
        user = storage.add(User(
            username=username,
            password_hash=hash_password(password),
            email=email,
            first_name="Admin",
            last_name="User",
            role=UserRole.ADMIN,
            is_active=True,
        ))
    except DuplicateUsernameError:
        return None

    logger.info(f"Seed admin user created: {user.id} ({username})")
    return user
