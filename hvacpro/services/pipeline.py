"""
Atlas sales pipeline status machine
"""

from datetime import datetime
from typing import Dict, Optional, Set

import structlog

from hvacpro.core.exceptions import InvalidTransitionError
from hvacpro.models import Contractor, ContractorStatus
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)

PIPELINE_STAGES = (
    ContractorStatus.PROSPECT,
    ContractorStatus.CONTACTED,
    ContractorStatus.QUALIFIED,
    ContractorStatus.DEMO,
    ContractorStatus.CLIENT,
)

# Sales may skip stages or move a lead back, so every stage reaches every stage.
# Narrow an entry here to forbid a move.
ALLOWED_TRANSITIONS: Dict[ContractorStatus, Set[ContractorStatus]] = {
    stage: set(PIPELINE_STAGES) for stage in PIPELINE_STAGES
}


def allowed_transitions(current: ContractorStatus) -> Set[ContractorStatus]:
    """Statuses reachable from ``current``"""
    return set(ALLOWED_TRANSITIONS.get(ContractorStatus(current), set()))


def can_transition(current: ContractorStatus, target: ContractorStatus) -> bool:
    return ContractorStatus(target) in allowed_transitions(current)


def validate_transition(current: ContractorStatus, target: ContractorStatus) -> None:
    if not can_transition(current, target):
        raise InvalidTransitionError(current, target)


def set_status(
    storage: Storage,
    contractor_id: int,
    new_status: ContractorStatus,
    notes: Optional[str] = None,
) -> Optional[Contractor]:
    """Move a contractor to ``new_status`` and stamp ``last_contacted_date``.

    Returns None when the contractor does not exist. Raises
    ``InvalidTransitionError`` when the move is not allowed.
    """
    contractor = storage.get(Contractor, contractor_id)
    if contractor is None:
        return None

    previous = contractor.status
    validate_transition(previous, new_status)

    now = datetime.utcnow()
    data = {
        "status": ContractorStatus(new_status),
        "last_contacted_date": now,
        "updated_at": now,
    }
    if notes is not None:
        data["notes"] = notes

    contractor = storage.update(contractor, data)
    logger.info(
        "Contractor status changed",
        contractor_id=contractor_id,
        from_status=ContractorStatus(previous).value,
        to_status=contractor.status.value,
    )
    return contractor


def update_contact_log(
    storage: Storage,
    contractor_id: int,
    notes: Optional[str] = None,
    last_contacted_date: Optional[datetime] = None,
) -> Optional[Contractor]:
    """Record notes and/or a contact date without changing the status"""
    contractor = storage.get(Contractor, contractor_id)
    if contractor is None:
        return None

    data = {"updated_at": datetime.utcnow()}
    if notes is not None:
        data["notes"] = notes
    if last_contacted_date is not None:
        data["last_contacted_date"] = last_contacted_date

    contractor = storage.update(contractor, data)
    logger.info("Contractor contact log updated", contractor_id=contractor_id)
    return contractor


def pipeline_summary(storage: Storage) -> Dict[str, int]:
    """Contractor counts per stage plus the overall total"""
    counts = storage.count_contractors_by_status()
    summary = {stage.value: counts.get(stage, 0) for stage in PIPELINE_STAGES}
    summary["total"] = sum(counts.values())
    return summary
