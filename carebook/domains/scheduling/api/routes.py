"""
Scheduling API Routes

FastAPI router for slot and booking endpoints. Domain exceptions propagate to
the application's exception handlers, which map them to 404 / 409 / 422.
"""

from datetime import UTC, date, datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from carebook.domains.scheduling.api.dependencies import (
    get_available_slots_use_case,
    get_block_slot_use_case,
    get_booking_lifecycle_manager,
    get_booking_use_case,
    get_create_slot_use_case,
    get_delete_slot_use_case,
    get_list_clinicians_use_case,
    get_patient_appointments_use_case,
    get_resource_schedule_use_case,
    get_slot_use_case,
    get_unblock_slot_use_case,
)
from carebook.domains.scheduling.api.schemas import (
    BookingResponse,
    CancellationResponse,
    ClinicianResponse,
    CreateBookingRequest,
    CreateSlotRequest,
    RescheduleBookingRequest,
    SlotResponse,
    UpdateBookingRequest,
)
from carebook.domains.scheduling.application.services.booking_lifecycle import BookingLifecycleManager
from carebook.domains.scheduling.application.use_cases import (
    BlockSlotUseCase,
    CreateSlotUseCase,
    DeleteSlotUseCase,
    GetAvailableSlotsRequest,
    GetAvailableSlotsUseCase,
    GetBookingByIdUseCase,
    GetPatientAppointmentsUseCase,
    GetResourceScheduleRequest,
    GetResourceScheduleUseCase,
    GetSlotUseCase,
    ListCliniciansUseCase,
    UnblockSlotUseCase,
)
from carebook.domains.scheduling.application.use_cases import (
    CreateSlotRequest as CreateSlotCommand,
)

router = APIRouter(prefix="/scheduling", tags=["Scheduling"])

# Type aliases for dependencies
BookingManagerDep = Annotated[BookingLifecycleManager, Depends(get_booking_lifecycle_manager)]
GetAvailableSlotsUseCaseDep = Annotated[GetAvailableSlotsUseCase, Depends(get_available_slots_use_case)]
GetPatientAppointmentsUseCaseDep = Annotated[
    GetPatientAppointmentsUseCase, Depends(get_patient_appointments_use_case)
]
GetBookingUseCaseDep = Annotated[GetBookingByIdUseCase, Depends(get_booking_use_case)]
GetResourceScheduleUseCaseDep = Annotated[GetResourceScheduleUseCase, Depends(get_resource_schedule_use_case)]
CreateSlotUseCaseDep = Annotated[CreateSlotUseCase, Depends(get_create_slot_use_case)]
GetSlotUseCaseDep = Annotated[GetSlotUseCase, Depends(get_slot_use_case)]
BlockSlotUseCaseDep = Annotated[BlockSlotUseCase, Depends(get_block_slot_use_case)]
UnblockSlotUseCaseDep = Annotated[UnblockSlotUseCase, Depends(get_unblock_slot_use_case)]
DeleteSlotUseCaseDep = Annotated[DeleteSlotUseCase, Depends(get_delete_slot_use_case)]
ListCliniciansUseCaseDep = Annotated[ListCliniciansUseCase, Depends(get_list_clinicians_use_case)]


# ==================== Bookings ====================


@router.post("/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(request: CreateBookingRequest, manager: BookingManagerDep):
    """Book a slot for a patient."""
    view = await manager.create_booking(
        patient_id=request.patient_id,
        slot_id=request.slot_id,
        reason=request.reason,
    )
    return BookingResponse.model_validate(view)


@router.get("/patients/{patient_id}/bookings", response_model=list[BookingResponse])
async def get_patient_appointments(patient_id: UUID, use_case: GetPatientAppointmentsUseCaseDep):
    """List a patient's bookings ordered by appointment time."""
    views = await use_case.execute(patient_id)
    return [BookingResponse.model_validate(v) for v in views]


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: UUID, use_case: GetBookingUseCaseDep):
    """Get a booking with its patient, clinician and slot."""
    return BookingResponse.model_validate(await use_case.execute(booking_id))


@router.patch("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking(booking_id: UUID, request: UpdateBookingRequest, manager: BookingManagerDep):
    """Update status and/or reason of a booking."""
    view = await manager.update_booking(booking_id, status=request.status, reason=request.reason)
    return BookingResponse.model_validate(view)


@router.post("/bookings/{booking_id}/cancel", response_model=CancellationResponse)
async def cancel_booking(booking_id: UUID, manager: BookingManagerDep):
    """Cancel a booking and free its slot."""
    result = await manager.cancel_booking(booking_id)
    return CancellationResponse.model_validate(result)


@router.post("/bookings/{booking_id}/reschedule", response_model=BookingResponse)
async def reschedule_booking(
    booking_id: UUID,
    request: RescheduleBookingRequest,
    manager: BookingManagerDep,
):
    """Move a booking to another slot."""
    view = await manager.reschedule_booking(
        booking_id,
        new_slot_id=request.new_slot_id,
        reason=request.reason,
    )
    return BookingResponse.model_validate(view)


# ==================== Slots ====================


@router.post("/slots", response_model=SlotResponse, status_code=status.HTTP_201_CREATED)
async def create_slot(request: CreateSlotRequest, use_case: CreateSlotUseCaseDep):
    """Publish a new Available slot for a clinician."""
    view = await use_case.execute(
        CreateSlotCommand(
            resource_id=request.resource_id,
            start_time=request.start_time,
            end_time=request.end_time,
        )
    )
    return SlotResponse.model_validate(view)


@router.get("/slots/{slot_id}", response_model=SlotResponse)
async def get_slot(slot_id: UUID, use_case: GetSlotUseCaseDep):
    return SlotResponse.model_validate(await use_case.execute(slot_id))


@router.post("/slots/{slot_id}/block", response_model=SlotResponse)
async def block_slot(slot_id: UUID, use_case: BlockSlotUseCaseDep):
    """Put an Available slot on hold."""
    return SlotResponse.model_validate(await use_case.execute(slot_id))


@router.post("/slots/{slot_id}/unblock", response_model=SlotResponse)
async def unblock_slot(slot_id: UUID, use_case: UnblockSlotUseCaseDep):
    """Release a hold on a Blocked slot."""
    return SlotResponse.model_validate(await use_case.execute(slot_id))


@router.delete("/slots/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slot(slot_id: UUID, use_case: DeleteSlotUseCaseDep):
    """Delete an Available slot."""
    await use_case.execute(slot_id)


# ==================== Resources ====================


@router.get("/resources", response_model=list[ClinicianResponse])
async def list_clinicians(use_case: ListCliniciansUseCaseDep):
    """List bookable clinicians."""
    return [ClinicianResponse.model_validate(c) for c in await use_case.execute()]


@router.get("/resources/{resource_id}/available-slots", response_model=list[SlotResponse])
async def get_available_slots(
    resource_id: UUID,
    use_case: GetAvailableSlotsUseCaseDep,
    day: Annotated[date, Query(alias="date", description="Calendar day (YYYY-MM-DD)")],
):
    """List Available slots of a clinician on a given day."""
    views = await use_case.execute(GetAvailableSlotsRequest(resource_id=resource_id, day=day, tz=UTC))
    return [SlotResponse.model_validate(v) for v in views]


@router.get("/resources/{resource_id}/schedule", response_model=list[BookingResponse])
async def get_resource_schedule(
    resource_id: UUID,
    use_case: GetResourceScheduleUseCaseDep,
    start: Annotated[datetime, Query(description="Range start (inclusive)")],
    end: Annotated[datetime, Query(description="Range end (exclusive)")],
):
    """List a clinician's bookings starting within [start, end)."""
    views = await use_case.execute(
        GetResourceScheduleRequest(resource_id=resource_id, range_start=start, range_end=end)
    )
    return [BookingResponse.model_validate(v) for v in views]
