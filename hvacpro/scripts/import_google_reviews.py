"""
Import Google Maps reviews scraped into a JSON array

Reviews are matched to contractors by Google place id. Large files are
processed in batches; rerun with the printed ``--start`` to resume:

    hvacpro-import-reviews reviews.json --start 0 --batch-size 1000
"""

import argparse
import json
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

import pandas as pd
import structlog
from sqlmodel import Session

from hvacpro.core.database import engine, init_db
from hvacpro.core.exceptions import StorageError
from hvacpro.core.logging import configure_logging
from hvacpro.models import GoogleReview
from hvacpro.storage import DatabaseStorage, Storage

logger = structlog.get_logger(__name__)

DEFAULT_BATCH_SIZE = 1000


def parse_timestamp(value) -> Optional[datetime]:
    """Scraper timestamps as naive UTC datetimes"""
    if not value:
        return None
    timestamp = pd.to_datetime(value, utc=True, errors="coerce")
    if pd.isna(timestamp):
        return None
    return timestamp.tz_convert(None).to_pydatetime()


def parse_score(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def review_to_record(review: dict, contractor_id: int) -> GoogleReview:
    location = review.get("location") or {}
    return GoogleReview(
        contractor_id=contractor_id,
        place_id=review["placeId"],
        author_name=review.get("name"),
        stars=review.get("stars"),
        total_score=parse_score(review.get("totalScore")),
        review_text=review.get("text"),
        published_at_date=parse_timestamp(review.get("publishedAtDate")),
        response_from_owner_text=review.get("responseFromOwnerText"),
        response_from_owner_date=parse_timestamp(review.get("responseFromOwnerDate")),
        latitude=str(location["lat"]) if location.get("lat") else None,
        longitude=str(location["lng"]) if location.get("lng") else None,
        raw_data=review,
    )


def import_google_reviews(
    storage: Storage,
    reviews: List[dict],
    start: int = 0,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> dict:
    """Import ``reviews[start:start + batch_size]``.

    Reviews without a place id, or already stored under the same place id,
    author and publish date, are skipped. Reviews whose place id matches no
    contractor are counted separately.
    """
    end = min(start + batch_size, len(reviews))
    batch = reviews[start:end]
    contractor_ids = storage.place_id_index()
    logger.info(f"Processing reviews {start} to {end - 1} of {len(reviews)}")
    logger.info(f"Found {len(contractor_ids)} contractors with place ids")

    results = {"imported": 0, "skipped": 0, "no_match": 0}

    for review in batch:
        place_id = review.get("placeId")
        if not place_id:
            results["skipped"] += 1
            continue

        contractor_id = contractor_ids.get(place_id)
        if contractor_id is None:
            results["no_match"] += 1
            continue

        author = review.get("name")
        published_at = parse_timestamp(review.get("publishedAtDate"))
        if storage.find_google_review(place_id, author, published_at) is not None:
            results["skipped"] += 1
            continue

        try:
            storage.add(review_to_record(review, contractor_id))
        except StorageError as e:
            logger.error(f"Error importing review from {author}: {e}")
            results["skipped"] += 1
            continue

        results["imported"] += 1

    results["batch_size"] = len(batch)
    results["next_start"] = end
    results["complete"] = end >= len(reviews)
    return results


def load_reviews(json_path: str) -> List[dict]:
    with open(json_path, encoding="utf-8") as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the review import"""
    parser = argparse.ArgumentParser(description="Import scraped Google reviews from JSON")
    parser.add_argument("json_path", help="Path to the JSON array of reviews")
    parser.add_argument("--start", type=int, default=0, help="Index of the first review to process")
    parser.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE, help="Reviews per run")
    args = parser.parse_args(argv)

    configure_logging()

    try:
        reviews = load_reviews(args.json_path)

        init_db()
        with Session(engine) as session:
            results = import_google_reviews(
                DatabaseStorage(session), reviews, start=args.start, batch_size=args.batch_size
            )

        logger.info("Google review import complete")
        logger.info(f"Results: {results}")
        if results["complete"]:
            logger.info("All reviews have been processed")
        else:
            logger.info(f"To continue, rerun with --start {results['next_start']}")

    except Exception as e:
        logger.error(f"Fatal error in review import: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
