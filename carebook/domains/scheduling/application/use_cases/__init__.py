"""
Scheduling Domain Use Cases

Read path and slot administration use cases. Booking mutations live on
BookingLifecycleManager (application.services).
"""

from carebook.domains.scheduling.application.use_cases.create_slot import (
    CreateSlotRequest,
    CreateSlotUseCase,
)
from carebook.domains.scheduling.application.use_cases.get_available_slots import (
    GetAvailableSlotsRequest,
    GetAvailableSlotsUseCase,
)
from carebook.domains.scheduling.application.use_cases.get_booking import GetBookingByIdUseCase
from carebook.domains.scheduling.application.use_cases.get_patient_appointments import (
    GetPatientAppointmentsUseCase,
)
from carebook.domains.scheduling.application.use_cases.get_resource_schedule import (
    GetResourceScheduleRequest,
    GetResourceScheduleUseCase,
)
from carebook.domains.scheduling.application.use_cases.list_clinicians import (
    ClinicianSummary,
    ListCliniciansUseCase,
)
from carebook.domains.scheduling.application.use_cases.manage_slots import (
    BlockSlotUseCase,
    DeleteSlotUseCase,
    GetSlotUseCase,
    UnblockSlotUseCase,
)

__all__ = [
    "CreateSlotRequest",
    "CreateSlotUseCase",
    "GetAvailableSlotsRequest",
    "GetAvailableSlotsUseCase",
    "GetBookingByIdUseCase",
    "GetPatientAppointmentsUseCase",
    "GetResourceScheduleRequest",
    "GetResourceScheduleUseCase",
    "ClinicianSummary",
    "ListCliniciansUseCase",
    "BlockSlotUseCase",
    "DeleteSlotUseCase",
    "GetSlotUseCase",
    "UnblockSlotUseCase",
]
