"""
Import scraped HVAC contractor listings from an Outscraper CSV export

Every row with a name becomes a prospect contractor with a unique slug.
Run once per export:

    hvacpro-import-contractors path/to/export.csv
"""

import argparse
import sys
from typing import Iterable, List, Optional

import pandas as pd
import structlog
from sqlmodel import Session

from hvacpro.core.config import get_settings
from hvacpro.core.database import engine, init_db
from hvacpro.core.exceptions import StorageError
from hvacpro.core.logging import configure_logging
from hvacpro.models import Contractor, ContractorStatus
from hvacpro.services.slugs import unique_slug
from hvacpro.storage import DatabaseStorage, Storage

logger = structlog.get_logger(__name__)

LEAD_SOURCE = "outscraper_csv"


def clean(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def first_value(row: dict, *keys: str) -> str:
    """First non-empty cell among ``keys``"""
    for key in keys:
        value = clean(row.get(key))
        if value:
            return value
    return ""


def row_to_contractor(row: dict, slug: str) -> Contractor:
    """Map one export row onto a prospect contractor"""
    email = first_value(row, "email_1", "email_2", "email_3")
    return Contractor(
        name=clean(row.get("name")),
        slug=slug,
        email=email or f"info@{get_settings().PROSPECT_EMAIL_DOMAIN}",
        phone=first_value(row, "phone", "phone_1"),
        phone_type=first_value(
            row,
            "phone.phones_enricher.carrier_type",
            "phone_1.phones_enricher.carrier_type",
        ),
        photos_count=clean(row.get("photos_count")),
        site_url=f"/{slug}",
        place_id=clean(row.get("place_id")) or None,
        year_founded=clean(row.get("site.company_insights.founded_year")),
        address=clean(row.get("full_address")),
        street=clean(row.get("street")),
        city=clean(row.get("city")),
        state=clean(row.get("state")),
        zip=first_value(row, "postal_code", "zip"),
        latitude=clean(row.get("latitude")),
        longitude=clean(row.get("longitude")),
        rating=clean(row.get("rating")),
        review_count=clean(row.get("reviews")),
        reviews_link=clean(row.get("reviews_link")),
        working_hours=clean(row.get("working_hours")),
        accepts_credit_cards=False,
        logo=clean(row.get("logo")),
        verified_location=clean(row.get("verified")) == "True",
        location_link=clean(row.get("location_link")),
        facebook=clean(row.get("facebook")),
        instagram=clean(row.get("instagram")),
        linkedin=clean(row.get("linkedin")),
        twitter=clean(row.get("twitter")),
        website=clean(row.get("site")),
        website_title=clean(row.get("website_title")),
        website_generator=clean(row.get("website_generator")),
        website_keywords=clean(row.get("website_keywords")),
        description=first_value(row, "description", "site.company_insights.description"),
        status=ContractorStatus.PROSPECT,
        lead_source=LEAD_SOURCE,
        active=True,
    )


def read_rows(csv_path: str) -> List[dict]:
    """Load the export with every cell as text"""
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    return df.to_dict(orient="records")


def import_contractors(storage: Storage, rows: Iterable[dict]) -> dict:
    """Insert each named row as a prospect; returns imported/skipped/errors counts"""
    results = {"imported": 0, "skipped": 0, "errors": 0}

    for row in rows:
        name = clean(row.get("name"))
        if not name:
            results["skipped"] += 1
            continue

        try:
            storage.add(row_to_contractor(row, unique_slug(storage, name)))
        except StorageError as e:
            logger.error(f"Error importing {name}: {e}")
            results["errors"] += 1
            continue

        results["imported"] += 1
        if results["imported"] % 50 == 0:
            logger.info(f"Imported {results['imported']} contractors")

    return results


def main(argv: Optional[List[str]] = None):
    """Main entry point for the contractor import"""
    parser = argparse.ArgumentParser(description="Import contractors from an Outscraper CSV export")
    parser.add_argument("csv_path", help="Path to the CSV export")
    args = parser.parse_args(argv)

    configure_logging()
    logger.info(f"Reading CSV file: {args.csv_path}")

    try:
        rows = read_rows(args.csv_path)
        logger.info(f"Found {len(rows)} records in CSV file")

        init_db()
        with Session(engine) as session:
            results = import_contractors(DatabaseStorage(session), rows)

        logger.info("Contractor import complete")
        logger.info(f"Results: {results}")

    except Exception as e:
        logger.error(f"Fatal error in contractor import: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
