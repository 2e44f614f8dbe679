"""
Slug helpers for contractor public URLs
"""

from slugify import slugify as _slugify

from hvacpro.storage import Storage

# "Heating & Air" -> "heating-and-air"
SLUG_REPLACEMENTS = [["&", "and"]]


def slugify(value: str) -> str:
    """Lowercase ASCII slug with words joined by hyphens"""
    return _slugify(str(value), lowercase=True, replacements=SLUG_REPLACEMENTS)


def unique_slug(storage: Storage, name: str) -> str:
    """Slug for ``name`` that no contractor uses yet.

    Collisions get a numeric suffix: ``acme-hvac``, ``acme-hvac-1``, ...
    """
    base = slugify(name) or "contractor"
    taken = storage.find_slugs(base)
    if base not in taken:
        return base

    counter = 1
    while f"{base}-{counter}" in taken:
        counter += 1
    return f"{base}-{counter}"
