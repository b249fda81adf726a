from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from wellness.models import Appointment, Message, Workshop, WorkshopRegistration

DASHBOARD_CACHE_KEY = 'dashboard:summary'


def compute_summary() -> dict:
    now = timezone.now()
    return {
        'upcomingAppointments': Appointment.objects.filter(
            appointment_date__gte=now,
            status__in=[Appointment.STATUS_SCHEDULED, Appointment.STATUS_CONFIRMED],
        ).count(),
        'unreadMessages': Message.objects.filter(to_user__isnull=True, is_read=False).count(),
        'activeWorkshops': Workshop.objects.filter(is_active=True).count(),
        'pendingRegistrations': WorkshopRegistration.objects.filter(status=WorkshopRegistration.STATUS_PENDING).count(),
        'generatedAt': now.isoformat(),
    }


def refresh_summary() -> dict:
    summary = compute_summary()
    cache.set(DASHBOARD_CACHE_KEY, summary, settings.DASHBOARD_CACHE_SECONDS)
    return summary


def get_summary() -> dict:
    cached = cache.get(DASHBOARD_CACHE_KEY)
    if cached:
        return cached
    return refresh_summary()


def invalidate_summary() -> None:
    cache.delete(DASHBOARD_CACHE_KEY)
