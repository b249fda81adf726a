"""
Workshop catalogue and registration rules.

Registrations move through a small state table.  Capacity is measured
as the number of live (pending or confirmed) registrations, so a
cancelled seat is immediately available to the next employee.
"""
import logging
from typing import Optional

import bleach
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from wellness.exceptions import Conflict
from wellness.models import Workshop, WorkshopRegistration, User
from wellness.services.audit import log_action
from wellness.services.formatting import format_category, format_date, iso
from wellness.services.profiles import profile_summary

logger = logging.getLogger(__name__)

REGISTRATION_TRANSITIONS = {
    WorkshopRegistration.STATUS_PENDING: [WorkshopRegistration.STATUS_CONFIRMED, WorkshopRegistration.STATUS_CANCELLED],
    WorkshopRegistration.STATUS_CONFIRMED: [WorkshopRegistration.STATUS_CANCELLED],
    WorkshopRegistration.STATUS_CANCELLED: [WorkshopRegistration.STATUS_PENDING],
}


def can_transition(current: str, new: str) -> bool:
    return new in REGISTRATION_TRANSITIONS.get(current, [])


def _with_participants(qs):
    return qs.annotate(
        participants=Count('registrations', filter=Q(registrations__status__in=WorkshopRegistration.ACTIVE_STATUSES))
    )


def participant_count(workshop: Workshop) -> int:
    return workshop.registrations.filter(status__in=WorkshopRegistration.ACTIVE_STATUSES).count()


def serialize_workshop(w: Workshop, *, my_status: Optional[str] = None) -> dict:
    current = getattr(w, 'participants', None)
    if current is None:
        current = participant_count(w)
    return {
        'id': w.id,
        'title': w.title,
        'description': w.description,
        'category': w.category,
        'categoryLabel': format_category(w.category),
        'maxParticipants': w.max_participants,
        'currentParticipants': current,
        'isFull': current >= w.max_participants,
        'startDate': iso(w.start_date),
        'startDateLabel': format_date(w.start_date),
        'endDate': iso(w.end_date),
        'endDateLabel': format_date(w.end_date, empty='Not set'),
        'isActive': w.is_active,
        'createdAt': iso(w.created_at),
        'myRegistrationStatus': my_status,
    }


def serialize_registration(r: WorkshopRegistration, *, with_user: bool = False) -> dict:
    data = {
        'id': r.id,
        'workshopId': r.workshop_id,
        'userId': r.user_id,
        'notes': r.notes,
        'status': r.status,
        'registrationDate': iso(r.registration_date),
    }
    if with_user:
        data['userProfile'] = profile_summary(r.user)
    return data


def list_active(user: Optional[User] = None) -> list[dict]:
    qs = _with_participants(Workshop.objects.filter(is_active=True)).order_by('start_date', 'id')
    mine = {}
    if user is not None:
        mine = dict(
            WorkshopRegistration.objects.filter(user=user).values_list('workshop_id', 'status')
        )
    return [serialize_workshop(w, my_status=mine.get(w.id)) for w in qs]


def list_all() -> list[dict]:
    qs = _with_participants(Workshop.objects.all()).order_by('-created_at', '-id')
    return [serialize_workshop(w) for w in qs]


def create_workshop(admin: User, **fields) -> Workshop:
    fields['title'] = bleach.clean(fields['title'].strip(), strip=True)
    fields['description'] = bleach.clean(fields['description'].strip(), strip=True)
    w = Workshop.objects.create(**fields)
    log_action(user=admin, action='workshop_create', object_type='workshop', object_id=w.id,
               detail={'title': w.title})
    return w


def delete_workshop(admin: User, workshop_id: int) -> None:
    w = Workshop.objects.filter(id=workshop_id).first()
    if w is None:
        raise LookupError('Workshop not found')
    title = w.title
    w.delete()
    log_action(user=admin, action='workshop_delete', object_type='workshop', object_id=workshop_id,
               detail={'title': title})


def _ensure_capacity(workshop: Workshop) -> None:
    if participant_count(workshop) >= workshop.max_participants:
        raise Conflict('This workshop is full')


@transaction.atomic
def register(user: User, workshop_id: int, notes: str = '') -> WorkshopRegistration:
    """Register ``user`` for a workshop.

    A live registration is a conflict; a cancelled one is revived as
    pending instead of creating a second row.
    """
    workshop = Workshop.objects.select_for_update().filter(id=workshop_id).first()
    if workshop is None:
        raise LookupError('Workshop not found')
    if not workshop.is_active:
        raise ValueError('This workshop is not open for registration')
    notes = bleach.clean((notes or '').strip(), strip=True)
    existing = WorkshopRegistration.objects.select_for_update().filter(workshop=workshop, user=user).first()
    if existing is not None and existing.status in WorkshopRegistration.ACTIVE_STATUSES:
        raise Conflict('You are already registered for this workshop')
    _ensure_capacity(workshop)
    if existing is not None:
        existing.status = WorkshopRegistration.STATUS_PENDING
        existing.notes = notes
        existing.save(update_fields=['status', 'notes', 'updated_at'])
        reg = existing
    else:
        try:
            with transaction.atomic():
                reg = WorkshopRegistration.objects.create(workshop=workshop, user=user, notes=notes)
        except IntegrityError:
            raise Conflict('You are already registered for this workshop')
    log_action(user=user, action='workshop_register', object_type='workshop', object_id=workshop.id,
               detail={'registrationId': reg.id})
    return reg


@transaction.atomic
def set_registration_status(operator: User, registration_id: int, new_status: str) -> WorkshopRegistration:
    reg = WorkshopRegistration.objects.select_for_update().select_related('workshop').filter(id=registration_id).first()
    if reg is None:
        raise LookupError('Registration not found')
    if not can_transition(reg.status, new_status):
        raise ValueError(f'Cannot change registration from {reg.status} to {new_status}')
    if new_status == WorkshopRegistration.STATUS_PENDING:
        # revival takes a seat again
        _ensure_capacity(reg.workshop)
    old_status = reg.status
    reg.status = new_status
    reg.save(update_fields=['status', 'updated_at'])
    log_action(user=operator, action='workshop_registration_status', object_type='workshop_registration',
               object_id=reg.id, detail={'from': old_status, 'to': new_status})
    return reg


def cancel_registration(user: User, workshop_id: int) -> WorkshopRegistration:
    reg = WorkshopRegistration.objects.filter(workshop_id=workshop_id, user=user).first()
    if reg is None:
        raise LookupError('Registration not found')
    return set_registration_status(user, reg.id, WorkshopRegistration.STATUS_CANCELLED)


def list_registrations(workshop_id: int) -> list[dict]:
    if not Workshop.objects.filter(id=workshop_id).exists():
        raise LookupError('Workshop not found')
    qs = (WorkshopRegistration.objects.filter(workshop_id=workshop_id)
          .select_related('user', 'user__profile').order_by('registration_date', 'id'))
    return [serialize_registration(r, with_user=True) for r in qs]
