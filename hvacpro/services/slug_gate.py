"""
Login gate for public contractor URLs
"""

from typing import Optional

from hvacpro.services.provisioning import lookup_contractor_by_slug
from hvacpro.storage import Storage

# Top-level paths that belong to the app itself, never to a contractor
RESERVED_PATHS = {"", "auth", "admin", "atlas", "view-as", "api", "login", "register"}

PROSPECT_ACTION_LABEL = "Access Your Dashboard"
STANDARD_TABS = ["login", "register"]


def extract_slug(path: Optional[str]) -> Optional[str]:
    """Slug candidate from a raw URL path, or None for app paths"""
    segment = (path or "").split("?", 1)[0].strip("/")
    if "/" in segment or segment.lower() in RESERVED_PATHS:
        return None
    return segment


def resolve_login_gate(storage: Storage, path: Optional[str]) -> dict:
    """Decide which login form a visitor to ``path`` should see.

    Prospects get a one-click form pre-filled with their slug credentials;
    everyone else gets the standard login and registration tabs.
    """
    slug = extract_slug(path)
    lookup = lookup_contractor_by_slug(storage, slug) if slug else None

    if lookup is not None and lookup.is_prospect:
        return {
            "mode": "prospect",
            "slug": lookup.slug,
            "name": lookup.name,
            "username": lookup.slug,
            "password": lookup.slug,
            "action_label": PROSPECT_ACTION_LABEL,
            "tabs": [],
        }

    return {
        "mode": "standard",
        "slug": None,
        "name": None,
        "username": None,
        "password": None,
        "action_label": None,
        "tabs": list(STANDARD_TABS),
    }
