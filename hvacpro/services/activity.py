"""
Activity feed and document numbering for contractor workspaces
"""

from typing import Optional
import time

import structlog

from hvacpro.models import Activity, ActivityType
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)

JOB_NUMBER_PREFIX = "JOB"
INVOICE_NUMBER_PREFIX = "INV"


def document_number(prefix: str) -> str:
    """``prefix`` plus the last six digits of the current epoch milliseconds"""
    return f"{prefix}{str(int(time.time() * 1000))[-6:]}"


def record_activity(
    storage: Storage,
    contractor_id: int,
    activity_type: ActivityType,
    description: str,
    user_id: Optional[int] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
) -> Activity:
    """Append an entry to the contractor's activity feed"""
    activity = storage.add(Activity(
        contractor_id=contractor_id,
        user_id=user_id,
        type=activity_type,
        description=description,
        entity_type=entity_type,
        entity_id=entity_id,
    ))
    logger.debug(f"Activity {activity_type.value} recorded for contractor {contractor_id}")
    return activity
