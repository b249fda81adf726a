from rest_framework import serializers

from wellness.models import Workshop, WorkshopRegistration


class WorkshopCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    category = serializers.ChoiceField(choices=Workshop.CATEGORY_CHOICES, required=False, default='mental_stability')
    maxParticipants = serializers.IntegerField(min_value=1, source='max_participants')
    startDate = serializers.DateTimeField(required=False, allow_null=True, source='start_date')
    endDate = serializers.DateTimeField(required=False, allow_null=True, source='end_date')
    isActive = serializers.BooleanField(required=False, default=True, source='is_active')

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': 'End date must be after the start date'})
        return attrs


class WorkshopRegisterSerializer(serializers.Serializer):
    workshopId = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=2000, default='')


class WorkshopIdSerializer(serializers.Serializer):
    workshopId = serializers.IntegerField(min_value=1)


class RegistrationStatusSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(choices=WorkshopRegistration.STATUS_CHOICES)
