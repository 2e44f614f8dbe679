"""
Appointment API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from datetime import date, datetime
from typing import List
import structlog

from hvacpro.core.dependencies import (
    ensure_contact,
    ensure_owned,
    get_storage,
    get_workspace_user,
)
from hvacpro.models import Appointment, User
from hvacpro.schemas.workspace import AppointmentCreate, AppointmentRead, AppointmentUpdate
from hvacpro.services.stats import day_bounds
from hvacpro.storage import Storage

logger = structlog.get_logger(__name__)
router = APIRouter()


def check_time_range(start_time: datetime, end_time: datetime) -> None:
    if end_time < start_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="endTime must not be before startTime"
        )


@router.get("", response_model=List[AppointmentRead])
async def list_appointments(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """List appointments by start time"""
    return storage.list_for_contractor(Appointment, user.contractor_id, order_by="start_time")


@router.get("/today", response_model=List[AppointmentRead])
async def list_todays_appointments(
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Appointments starting today"""
    start, end = day_bounds(datetime.utcnow())
    return storage.list_appointments_between(user.contractor_id, start, end)


@router.get("/date/{day}", response_model=List[AppointmentRead])
async def list_appointments_on(
    day: date,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Appointments starting on ``day`` (YYYY-MM-DD)"""
    start, end = day_bounds(datetime.combine(day, datetime.min.time()))
    return storage.list_appointments_between(user.contractor_id, start, end)


@router.post("", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment_data: AppointmentCreate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Create an appointment"""
    ensure_contact(storage, user.contractor_id, appointment_data.contact_id)
    check_time_range(appointment_data.start_time, appointment_data.end_time)

    appointment = storage.add(Appointment(
        **appointment_data.model_dump(),
        contractor_id=user.contractor_id,
    ))
    logger.info(f"Appointment created: {appointment.id}")
    return appointment


@router.get("/{appointment_id}", response_model=AppointmentRead)
async def get_appointment(
    appointment_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Get appointment by ID"""
    return ensure_owned(storage.get(Appointment, appointment_id), user, "Appointment")


@router.patch("/{appointment_id}", response_model=AppointmentRead)
async def update_appointment(
    appointment_id: int,
    appointment_update: AppointmentUpdate,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Update appointment"""
    appointment = ensure_owned(storage.get(Appointment, appointment_id), user, "Appointment")
    data = appointment_update.model_dump(exclude_unset=True)
    if "contact_id" in data:
        ensure_contact(storage, appointment.contractor_id, data["contact_id"])
    check_time_range(
        data.get("start_time") or appointment.start_time,
        data.get("end_time") or appointment.end_time,
    )

    appointment = storage.update(appointment, data)
    logger.info(f"Appointment updated: {appointment_id}")
    return appointment


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
    appointment_id: int,
    user: User = Depends(get_workspace_user),
    storage: Storage = Depends(get_storage)
):
    """Delete appointment"""
    appointment = ensure_owned(storage.get(Appointment, appointment_id), user, "Appointment")
    storage.delete(appointment)
    logger.info(f"Appointment deleted: {appointment_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
