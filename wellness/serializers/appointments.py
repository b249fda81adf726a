from datetime import datetime

import bleach
from django.utils import timezone
from rest_framework import serializers

from wellness.models import Appointment


class AppointmentCreateSerializer(serializers.Serializer):
    """Accepts either ``date`` + ``time`` or a full ``appointmentDate``."""
    date = serializers.DateField(required=False)
    time = serializers.TimeField(required=False)
    appointmentDate = serializers.DateTimeField(required=False)
    type = serializers.ChoiceField(choices=Appointment.TYPE_CHOICES, required=False, default='individual')
    notes = serializers.CharField(required=False, allow_blank=True, max_length=2000, default='')

    def validate_notes(self, v):
        return bleach.clean((v or '').strip(), strip=True)

    def validate(self, attrs):
        when = attrs.get('appointmentDate')
        if when is None:
            day, at = attrs.get('date'), attrs.get('time')
            if day is None or at is None:
                raise serializers.ValidationError('Please select date and time')
            when = datetime.combine(day, at)
            when = timezone.make_aware(when, timezone.get_current_timezone())
        if when <= timezone.now():
            raise serializers.ValidationError('Appointments must be booked in the future')
        attrs['when'] = when
        return attrs


class AppointmentStatusSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(choices=Appointment.STATUS_CHOICES)


class AppointmentListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Appointment.STATUS_CHOICES, required=False)
    upcoming = serializers.BooleanField(required=False, default=False)
