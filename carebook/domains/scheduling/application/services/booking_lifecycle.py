"""
Booking Lifecycle Manager

Creates, cancels, reschedules and updates bookings. Each operation runs in a
single database transaction on the injected session; slot state changes go
through the SlotAllocator and notifications are published only after commit.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carebook.core.domain import EntityNotFoundException, SlotUnavailableException, ValidationException
from carebook.database.transaction import atomic
from carebook.domains.scheduling.application.dto import BookingView, CancellationResult
from carebook.domains.scheduling.application.ports import (
    IBookingRepository,
    ISlotRepository,
    IUserRepository,
)
from carebook.domains.scheduling.application.services.notification_publisher import NotificationPublisher
from carebook.domains.scheduling.application.services.slot_allocator import SlotAllocator
from carebook.domains.scheduling.domain.entities import Booking, Person, Slot
from carebook.domains.scheduling.domain.events import (
    FALLBACK_DOCTOR_NAME,
    FALLBACK_PATIENT_NAME,
    FALLBACK_RESCHEDULED_DATE,
    AppointmentBooked,
    AppointmentCancelled,
    AppointmentEvent,
    AppointmentRescheduled,
)
from carebook.domains.scheduling.domain.value_objects import (
    FALLBACK_APPOINTMENT_DATE,
    BookingStatus,
    SlotStatus,
    UserRole,
    format_appointment_date,
)

logger = logging.getLogger(__name__)


def parse_booking_status(value: BookingStatus | str) -> BookingStatus:
    if isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus.from_string(value)
    except ValueError:
        raise ValidationException(
            f"Invalid booking status '{value}'. Expected one of: {', '.join(BookingStatus.values())}",
            field="status",
        ) from None


class BookingLifecycleManager:
    """
    Orchestrates the booking state machine.

    Pending -> Confirmed | Cancelled, Confirmed -> Cancelled | Completed.
    Cancelled and Completed are terminal. Rescheduling keeps the booking id,
    swaps its slot and resets it to Pending.
    """

    def __init__(
        self,
        session: AsyncSession,
        booking_repository: IBookingRepository,
        slot_repository: ISlotRepository,
        user_repository: IUserRepository,
        slot_allocator: SlotAllocator,
        notification_publisher: NotificationPublisher | None = None,
    ):
        """
        Initialize manager with dependencies.

        Args:
            session: Session owning the transaction boundary (commit / rollback)
            booking_repository: Booking storage bound to ``session``
            slot_repository: Slot storage bound to ``session``, used for reads
            user_repository: Read-only user directory
            slot_allocator: Sole writer of slot status
            notification_publisher: Post-commit event delivery; None disables notifications
        """
        self.session = session
        self.booking_repo = booking_repository
        self.slot_repo = slot_repository
        self.user_repo = user_repository
        self.slot_allocator = slot_allocator
        self.notification_publisher = notification_publisher

    async def _get_for_update(self, booking_id: UUID) -> Booking:
        booking = await self.booking_repo.lock_for_update(booking_id)
        if booking is None:
            raise EntityNotFoundException(entity_type="Booking", entity_id=booking_id)
        return booking

    async def _load_context(self, booking: Booking) -> tuple[Slot | None, dict[UUID, Person]]:
        slot = await self.slot_repo.find_by_id(booking.slot_id) if booking.slot_id else None
        user_ids = [booking.patient_id]
        if slot is not None:
            user_ids.append(slot.resource_id)
        people = await self.user_repo.find_by_ids(user_ids)
        return slot, people

    # ==================== Operations ====================

    async def create_booking(
        self,
        patient_id: UUID,
        slot_id: UUID,
        reason: str | None = None,
    ) -> BookingView:
        """
        Claim a slot and create a Pending booking for the patient.

        Raises:
            EntityNotFoundException: patient or slot missing
            SlotUnavailableException: slot is not Available
            SlotContentionException: another request holds the slot
        """
        async with atomic(self.session):
            patient = await self.user_repo.find_by_id(patient_id)
            if patient is None:
                raise EntityNotFoundException(entity_type="Patient", entity_id=patient_id)

            await self.slot_allocator.claim_slot(slot_id)
            booking = await self.booking_repo.add(
                Booking.create_pending(patient_id=patient_id, slot_id=slot_id, reason=reason)
            )
            slot, people = await self._load_context(booking)

        logger.info(f"Booking {booking.id} created for patient {patient_id} on slot {slot_id}")
        self._publish(self._build_events(AppointmentBooked, booking, slot, people))
        return BookingView.build(booking, slot, people)

    async def cancel_booking(self, booking_id: UUID) -> CancellationResult:
        """
        Cancel a booking and free its slot.

        Raises:
            EntityNotFoundException: booking missing
            InvalidOperationException: booking already Cancelled or Completed
        """
        async with atomic(self.session):
            booking = await self._get_for_update(booking_id)
            await self._cancel(booking)
            slot, people = await self._load_context(booking)

        logger.info(f"Booking {booking_id} cancelled, slot {booking.slot_id} released")
        self._publish(self._build_events(AppointmentCancelled, booking, slot, people))
        return CancellationResult(booking_id=booking.id, slot_id=booking.slot_id)

    async def reschedule_booking(
        self,
        booking_id: UUID,
        new_slot_id: UUID,
        reason: str | None = None,
    ) -> BookingView:
        """
        Move a booking to another slot.

        The new slot is claimed before the old one is released, so a failed
        claim leaves the booking and both slots untouched.

        Args:
            booking_id: Booking to move
            new_slot_id: Target slot, must be Available
            reason: Optional explanation included in the notifications

        Raises:
            SlotUnavailableException: target slot is not Available, including the slot already held
        """
        async with atomic(self.session):
            booking = await self._get_for_update(booking_id)
            booking.ensure_mutable("reschedule")
            if booking.slot_id == new_slot_id:
                # The held slot is Booked
                raise SlotUnavailableException(slot_id=new_slot_id, current_status=SlotStatus.BOOKED.value)

            await self.slot_allocator.claim_slot(new_slot_id)
            old_slot_id = booking.move_to_slot(new_slot_id)
            await self.slot_allocator.release_slot(old_slot_id)
            await self.booking_repo.save(booking)
            slot, people = await self._load_context(booking)

        logger.info(f"Booking {booking_id} rescheduled from slot {old_slot_id} to {new_slot_id}")
        self._publish(
            self._build_events(
                AppointmentRescheduled,
                booking,
                slot,
                people,
                reason=reason,
                fallback_date=FALLBACK_RESCHEDULED_DATE,
            )
        )
        return BookingView.build(booking, slot, people)

    async def update_booking_status(self, booking_id: UUID, status: BookingStatus | str) -> BookingView:
        """Apply a status transition. A move to Cancelled is handled as a cancellation."""
        return await self.update_booking(booking_id, status=status)

    async def update_booking(
        self,
        booking_id: UUID,
        status: BookingStatus | str | None = None,
        reason: str | None = None,
    ) -> BookingView:
        """
        Partial update of a booking.

        Args:
            booking_id: Booking to update
            status: Optional new status, validated against the state machine
            reason: Optional new reason for the visit

        Raises:
            EntityNotFoundException: booking missing
            InvalidOperationException: booking is terminal, or the transition is illegal
            ValidationException: unknown status value
        """
        target = parse_booking_status(status) if status is not None else None

        async with atomic(self.session):
            booking = await self._get_for_update(booking_id)
            booking.ensure_mutable("update")

            if reason is not None:
                booking.update_reason(reason)

            cancelled = target == BookingStatus.CANCELLED
            if cancelled:
                await self._cancel(booking)
            else:
                if target is not None:
                    booking.change_status(target)
                await self.booking_repo.save(booking)
            slot, people = await self._load_context(booking)

        logger.info(f"Booking {booking_id} updated (status={booking.status.value})")
        if cancelled:
            self._publish(self._build_events(AppointmentCancelled, booking, slot, people))
        return BookingView.build(booking, slot, people)

    async def _cancel(self, booking: Booking) -> None:
        booking.cancel()
        await self.booking_repo.save(booking)
        await self.slot_allocator.release_slot(booking.slot_id)

    # ==================== Notifications ====================

    def _build_events(
        self,
        event_cls: type[AppointmentEvent],
        booking: Booking,
        slot: Slot | None,
        people: dict[UUID, Person],
        reason: str | None = None,
        fallback_date: str = FALLBACK_APPOINTMENT_DATE,
    ) -> list[AppointmentEvent]:
        """One event for the patient and, when the slot owner is known, one for the clinician."""
        patient = people.get(booking.patient_id)
        clinician = people.get(slot.resource_id) if slot is not None else None
        appointment_date = format_appointment_date(slot.start_time if slot else None, fallback_date)

        events: list[AppointmentEvent] = []
        if booking.patient_id is not None:
            events.append(
                event_cls(
                    recipient_id=booking.patient_id,
                    recipient_role=UserRole.PATIENT,
                    counterparty_name=clinician.doctor_name if clinician else FALLBACK_DOCTOR_NAME,
                    appointment_date=appointment_date,
                    booking_id=booking.id,
                    slot_id=booking.slot_id,
                    reason=reason,
                )
            )
        if slot is not None and slot.resource_id is not None:
            events.append(
                event_cls(
                    recipient_id=slot.resource_id,
                    recipient_role=UserRole.CLINICIAN,
                    counterparty_name=patient.full_name if patient else FALLBACK_PATIENT_NAME,
                    appointment_date=appointment_date,
                    booking_id=booking.id,
                    slot_id=booking.slot_id,
                    reason=reason,
                )
            )
        return events

    def _publish(self, events: list[AppointmentEvent]) -> None:
        if self.notification_publisher is None:
            return
        try:
            self.notification_publisher.publish(events)
        except Exception as e:
            logger.warning(f"Could not schedule notifications: {e}")
