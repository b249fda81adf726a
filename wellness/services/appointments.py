import logging
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.utils import timezone

from wellness.models import Appointment, AppointmentTransition, User
from wellness.permissions import is_admin_user
from wellness.services.audit import log_action
from wellness.services.formatting import format_datetime, iso
from wellness.services.profiles import profile_summary

logger = logging.getLogger(__name__)

TRANSITIONS = {
    Appointment.STATUS_SCHEDULED: [Appointment.STATUS_CONFIRMED, Appointment.STATUS_CANCELLED],
    Appointment.STATUS_CONFIRMED: [Appointment.STATUS_COMPLETED, Appointment.STATUS_CANCELLED],
    Appointment.STATUS_COMPLETED: [],
    Appointment.STATUS_CANCELLED: [],
}

# Employees may only withdraw a booking nobody has confirmed yet
EMPLOYEE_CANCELLABLE = {Appointment.STATUS_SCHEDULED}


def can_transition(current: str, new: str) -> bool:
    """Return True if an appointment may move from ``current`` to ``new``."""
    return new in TRANSITIONS.get(current, [])


def serialize_appointment(a: Appointment, *, with_user: bool = False) -> dict:
    data = {
        'id': a.id,
        'userId': a.user_id,
        'appointmentDate': iso(a.appointment_date),
        'appointmentDateLabel': format_datetime(a.appointment_date),
        'type': a.type,
        'typeLabel': a.get_type_display(),
        'notes': a.notes,
        'durationMinutes': a.duration_minutes,
        'status': a.status,
        'canCancel': a.status in EMPLOYEE_CANCELLABLE,
        'createdAt': iso(a.created_at),
    }
    if with_user:
        data['userProfile'] = profile_summary(a.user)
    return data


def list_for_user(user: User, *, newest_first: bool = False) -> list[dict]:
    order = '-appointment_date' if newest_first else 'appointment_date'
    qs = Appointment.objects.filter(user=user).order_by(order, 'id')
    return [serialize_appointment(a) for a in qs]


def list_all(*, status: Optional[str] = None, upcoming_only: bool = False) -> list[dict]:
    qs = Appointment.objects.select_related('user', 'user__profile')
    if status:
        qs = qs.filter(status=status)
    if upcoming_only:
        qs = qs.filter(appointment_date__gte=timezone.now())
    return [serialize_appointment(a, with_user=True) for a in qs.order_by('appointment_date', 'id')]


def book(user: User, *, when: datetime, type: str, notes: str = '') -> Appointment:
    appt = Appointment.objects.create(
        user=user,
        appointment_date=when,
        type=type,
        notes=notes,
        status=Appointment.STATUS_SCHEDULED,
    )
    log_action(user=user, action='appointment_book', object_type='appointment', object_id=appt.id,
               detail={'type': type, 'when': when.isoformat()})
    return appt


def _get_for_update(appointment_id: int) -> Appointment:
    try:
        return Appointment.objects.select_for_update().get(id=appointment_id)
    except Appointment.DoesNotExist:
        raise LookupError('Appointment not found')


@transaction.atomic
def change_status(operator: User, appointment_id: int, new_status: str) -> Appointment:
    """Move an appointment along the status table.

    Owners can only cancel a still-scheduled booking; admin users can
    apply any transition the table allows.  Every change is recorded as
    an :class:`AppointmentTransition`.
    """
    appt = _get_for_update(appointment_id)
    if not is_admin_user(operator):
        if appt.user_id != operator.id:
            raise PermissionError('You cannot modify this appointment')
        if new_status != Appointment.STATUS_CANCELLED:
            raise PermissionError('Employees can only cancel appointments')
        if appt.status not in EMPLOYEE_CANCELLABLE:
            raise ValueError(f'Cannot cancel an appointment that is {appt.status}')
    if not can_transition(appt.status, new_status):
        raise ValueError(f'Cannot change status from {appt.status} to {new_status}')
    old_status = appt.status
    appt.status = new_status
    appt.save(update_fields=['status', 'updated_at'])
    AppointmentTransition.objects.create(
        appointment=appt,
        from_status=old_status,
        to_status=new_status,
        operator=operator,
    )
    log_action(user=operator, action='appointment_status', object_type='appointment', object_id=appt.id,
               detail={'from': old_status, 'to': new_status})
    return appt
