"""
Dashboard statistics for a contractor workspace
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from hvacpro.models import Invoice, Job, Review
from hvacpro.models.invoice import PENDING_INVOICE_STATUSES
from hvacpro.models.job import ACTIVE_JOB_STATUSES
from hvacpro.storage import Storage


def day_bounds(day: datetime):
    start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def contractor_stats(storage: Storage, contractor_id: int, now: Optional[datetime] = None) -> dict:
    """Headline numbers for the dashboard cards"""
    start, end = day_bounds(now or datetime.utcnow())

    jobs = storage.list_for_contractor(Job, contractor_id)
    active_jobs = sum(1 for job in jobs if job.status in ACTIVE_JOB_STATUSES)

    scheduled_today = len(storage.list_appointments_between(contractor_id, start, end))

    pending = [
        invoice for invoice in storage.list_for_contractor(Invoice, contractor_id)
        if invoice.status in PENDING_INVOICE_STATUSES
    ]
    pending_amount = sum((Decimal(invoice.amount) for invoice in pending), Decimal("0"))

    reviews = storage.list_for_contractor(Review, contractor_id)
    review_count = len(reviews)
    average_rating = (
        sum(review.rating for review in reviews) / review_count if review_count else 0.0
    )

    return {
        "active_jobs": active_jobs,
        "scheduled_today": scheduled_today,
        "pending_invoices_amount": float(pending_amount),
        "pending_invoices_count": len(pending),
        "average_rating": round(average_rating, 2),
        "review_count": review_count,
    }
