from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

User = get_user_model()

DUPLICATE_EMAIL_MESSAGE = 'An account with this email already exists'


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)

    def validate_email(self, v):
        return (v or '').strip().lower()

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Please fill in all fields')
        return v


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False, write_only=True)
    confirmPassword = serializers.CharField(trim_whitespace=False, write_only=True)

    def validate_email(self, v):
        v = (v or '').strip().lower()
        if User.objects.filter(email__iexact=v).exists():
            raise serializers.ValidationError(DUPLICATE_EMAIL_MESSAGE)
        return v

    def validate(self, attrs):
        if attrs['password'] != attrs['confirmPassword']:
            raise serializers.ValidationError({'confirmPassword': 'Passwords do not match'})
        try:
            validate_password(attrs['password'], user=User(email=attrs['email'], username=attrs['email']))
        except DjangoValidationError as e:
            raise serializers.ValidationError({'password': e.messages})
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)
