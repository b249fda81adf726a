import logging
from typing import Optional

from django.db import transaction

from wellness.models import UserProfile, User
from wellness.services.formatting import iso

logger = logging.getLogger(__name__)


def get_profile(user: User) -> Optional[UserProfile]:
    return UserProfile.objects.filter(user=user).first()


def needs_profile_setup(user: User) -> bool:
    profile = get_profile(user)
    return not profile or not profile.first_name


def serialize_profile(profile: Optional[UserProfile]) -> Optional[dict]:
    if profile is None:
        return None
    return {
        'id': profile.user_id,
        'email': profile.user.email,
        'firstName': profile.first_name,
        'lastName': profile.last_name,
        'position': profile.position,
        'department': profile.department,
        'yearsAtCompany': profile.years_at_company,
        'hasPsychologicalDisorders': profile.has_psychological_disorders,
        'hasDepressionHistory': profile.has_depression_history,
        'takesMedication': profile.takes_medication,
        'hasTherapyHistory': profile.has_therapy_history,
        'maritalStatus': profile.marital_status,
        'hasChildren': profile.has_children,
        'numberOfChildren': profile.number_of_children,
        'sleepHours': profile.sleep_hours,
        'sleepWellOrganized': profile.sleep_well_organized,
        'updatedAt': iso(profile.updated_at),
    }


def profile_summary(user: Optional[User]) -> Optional[dict]:
    """Name/contact block attached to admin listings."""
    if user is None:
        return None
    profile = getattr(user, 'profile', None)
    return {
        'id': user.id,
        'email': user.email,
        'firstName': profile.first_name if profile else '',
        'lastName': profile.last_name if profile else '',
        'position': profile.position if profile else '',
        'department': profile.department if profile else '',
    }


@transaction.atomic
def upsert_profile(user: User, fields: dict) -> UserProfile:
    profile, created = UserProfile.objects.select_for_update().get_or_create(user=user)
    for name, value in fields.items():
        setattr(profile, name, value)
    profile.save()
    logger.info("profile %s for user %s", 'created' if created else 'updated', user.id)
    return profile
