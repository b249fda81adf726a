"""
Database models for the psychological hub backend.

These models capture the records the mobile client works with: users
and their wellness profiles, counselling appointments, messages to the
HR inbox, workshops with their registrations, self-assessment quizzes
and articles.  Field names mirror the JSON the client already consumes
so that serialisation stays a thin mapping.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class WellnessUserManager(UserManager):
    """Users log in with their email; the username mirrors it."""

    def create_user(self, username=None, email=None, password=None, **extra_fields):
        email = self.normalize_email(email or username or '')
        username = username or email
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        email = self.normalize_email(email or username or '')
        username = username or email
        extra_fields.setdefault('role', 'admin')
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """Custom user model with a role.

    ``employee`` is the regular app user.  ``counselor`` and ``admin``
    correspond to rows of the former ``admin_users`` table and unlock
    the admin dashboard.
    """
    ROLE_CHOICES = [
        ('employee', 'Employee'),
        ('counselor', 'Counselor'),
        ('admin', 'Administrator'),
    ]
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default='employee', db_index=True)

    objects = WellnessUserManager()

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class UserProfile(models.Model):
    """Employee details collected by the profile setup screen."""
    MARITAL_CHOICES = [
        ('single', 'Single'),
        ('married', 'Married'),
        ('divorced', 'Divorced'),
        ('widowed', 'Widowed'),
    ]
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    position = models.CharField(max_length=150, blank=True)
    department = models.CharField(max_length=150, blank=True, db_index=True)
    years_at_company = models.PositiveIntegerField(default=0)
    has_psychological_disorders = models.BooleanField(default=False)
    has_depression_history = models.BooleanField(default=False)
    takes_medication = models.BooleanField(default=False)
    has_therapy_history = models.BooleanField(default=False)
    marital_status = models.CharField(max_length=16, choices=MARITAL_CHOICES, default='single')
    has_children = models.BooleanField(default=False)
    number_of_children = models.PositiveIntegerField(default=0)
    sleep_hours = models.PositiveIntegerField(default=0)
    sleep_well_organized = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"{self.full_name or self.user.email} ({self.department})"


class Appointment(models.Model):
    TYPE_CHOICES = [
        ('individual', 'Individual Session'),
        ('group', 'Group Session'),
        ('online', 'Online Session'),
        ('in_person', 'In-Person'),
    ]

    STATUS_SCHEDULED = 'scheduled'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='appointments')
    appointment_date = models.DateTimeField()
    type = models.CharField(max_length=16, choices=TYPE_CHOICES, default='individual')
    notes = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(default=60)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['user', 'appointment_date']),
            models.Index(fields=['status', 'appointment_date']),
        ]

    def __str__(self) -> str:
        return f"{self.type} for {self.user_id} @ {self.appointment_date:%F %H:%M} ({self.status})"


class AppointmentTransition(models.Model):
    """Records a status transition for an appointment."""
    appointment = models.ForeignKey(Appointment, related_name='transitions', on_delete=models.CASCADE)
    from_status = models.CharField(max_length=16, null=True, blank=True)
    to_status = models.CharField(max_length=16)
    operator = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='appointment_transitions')
    timestamp = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.appointment_id}: {self.from_status} -> {self.to_status}"


class Message(models.Model):
    """A message between an employee and the HR/counselling team.

    ``to_user`` left empty means the message sits in the shared HR
    inbox that every admin user can read.  Anonymous reports carry no
    sender at all.
    """
    from_user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='sent_messages')
    to_user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='received_messages')
    subject = models.CharField(max_length=255)
    message = models.TextField()
    is_read = models.BooleanField(default=False, db_index=True)
    is_anonymous = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['from_user', 'created_at']),
            models.Index(fields=['to_user', 'created_at']),
        ]

    def __str__(self) -> str:
        return f"{self.subject} ({self.from_user_id} -> {self.to_user_id or 'inbox'})"


class Workshop(models.Model):
    CATEGORY_CHOICES = [
        ('mental_stability', 'Mental Stability'),
        ('soft_skills', 'Soft Skills'),
        ('stress_management', 'Stress Management'),
        ('time_management', 'Time Management'),
        ('public_speaking', 'Public Speaking'),
    ]
    title = models.CharField(max_length=255)
    description = models.TextField()
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES, default='mental_stability')
    max_participants = models.PositiveIntegerField()
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.title


class WorkshopRegistration(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    ACTIVE_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED)

    workshop = models.ForeignKey(Workshop, on_delete=models.CASCADE, related_name='registrations')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='workshop_registrations')
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    registration_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['workshop', 'user'], name='unique_workshop_registration'),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} in {self.workshop_id} ({self.status})"


class Quiz(models.Model):
    """A self-assessment questionnaire.

    ``questions`` holds ``[{"question": str, "options": [str], "scores": [int]}]``
    and ``scoring_rules`` maps a result category to
    ``{"min": int, "max": int, "message": str}``.
    """
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=64, blank=True)
    questions = models.JSONField(default=list)
    scoring_rules = models.JSONField(default=dict)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'quizzes'

    def __str__(self) -> str:
        return self.title


class QuizResult(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='quiz_results')
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name='results')
    answers = models.JSONField(default=list)
    score = models.FloatField()
    result_category = models.CharField(max_length=64, null=True, blank=True)
    recommendations = models.TextField(blank=True)
    taken_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['user', 'taken_at'])]

    def __str__(self) -> str:
        return f"{self.quiz_id} by {self.user_id}: {self.score}"


class Article(models.Model):
    title = models.CharField(max_length=255)
    summary = models.TextField(blank=True)
    content = models.TextField()
    category = models.CharField(max_length=64, blank=True, db_index=True)
    author = models.CharField(max_length=150, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    is_published = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.title


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at']),
            models.Index(fields=['object_type', 'object_id', 'created_at']),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
