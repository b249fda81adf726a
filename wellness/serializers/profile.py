import math
import re

import bleach
from rest_framework import serializers

from wellness.models import UserProfile

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class LenientIntegerField(serializers.IntegerField):
    """Reads the leading integer (``"7 years"`` -> 7); anything else becomes 0."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or data is None:
            return 0
        if isinstance(data, float):
            data = int(data) if math.isfinite(data) else 0
        match = _LEADING_INT.match(str(data))
        if match is None:
            return 0
        return max(int(match.group(0)), 0)


class ProfileSerializer(serializers.Serializer):
    firstName = serializers.CharField(max_length=100, source='first_name')
    lastName = serializers.CharField(max_length=100, source='last_name')
    position = serializers.CharField(max_length=150)
    department = serializers.CharField(max_length=150)
    yearsAtCompany = LenientIntegerField(source='years_at_company', required=False)
    hasPsychologicalDisorders = serializers.BooleanField(source='has_psychological_disorders', required=False)
    hasDepressionHistory = serializers.BooleanField(source='has_depression_history', required=False)
    takesMedication = serializers.BooleanField(source='takes_medication', required=False)
    hasTherapyHistory = serializers.BooleanField(source='has_therapy_history', required=False)
    maritalStatus = serializers.ChoiceField(choices=UserProfile.MARITAL_CHOICES, source='marital_status', required=False)
    hasChildren = serializers.BooleanField(source='has_children', required=False)
    numberOfChildren = LenientIntegerField(source='number_of_children', required=False)
    sleepHours = LenientIntegerField(source='sleep_hours', required=False)
    sleepWellOrganized = serializers.BooleanField(source='sleep_well_organized', required=False)

    def _clean(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('Please fill in all required fields')
        return v

    def validate_firstName(self, v):
        return self._clean(v)

    def validate_lastName(self, v):
        return self._clean(v)

    def validate_position(self, v):
        return self._clean(v)

    def validate_department(self, v):
        return self._clean(v)
