"""
Django admin registrations for the wellness models.

Quizzes and articles have no authoring screen in the mobile app, so
HR staff maintain them here at ``/admin/``.  The other registrations
are mainly for inspecting and correcting data.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    User,
    UserProfile,
    Appointment,
    AppointmentTransition,
    Message,
    Workshop,
    WorkshopRegistration,
    Quiz,
    QuizResult,
    Article,
    AuditEvent,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'role', 'is_active', 'is_staff', 'date_joined')
    list_filter = ('role', 'is_active', 'is_staff')
    search_fields = ('email', 'username')
    ordering = ('email',)
    fieldsets = BaseUserAdmin.fieldsets + (('Wellness', {'fields': ('role',)}),)
    add_fieldsets = BaseUserAdmin.add_fieldsets + (('Wellness', {'fields': ('email', 'role')}),)


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'first_name', 'last_name', 'position', 'department', 'updated_at')
    list_filter = ('department', 'marital_status')
    search_fields = ('user__email', 'first_name', 'last_name', 'department')


class AppointmentTransitionInline(admin.TabularInline):
    model = AppointmentTransition
    extra = 0
    readonly_fields = ('from_status', 'to_status', 'operator', 'timestamp')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'appointment_date', 'type', 'status')
    list_filter = ('status', 'type')
    search_fields = ('user__email', 'notes')
    inlines = [AppointmentTransitionInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'subject', 'from_user', 'to_user', 'is_read', 'is_anonymous', 'created_at')
    list_filter = ('is_read', 'is_anonymous')
    search_fields = ('subject', 'from_user__email', 'to_user__email')


class WorkshopRegistrationInline(admin.TabularInline):
    model = WorkshopRegistration
    extra = 0


@admin.register(Workshop)
class WorkshopAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'category', 'max_participants', 'start_date', 'is_active')
    list_filter = ('category', 'is_active')
    search_fields = ('title',)
    inlines = [WorkshopRegistrationInline]


@admin.register(WorkshopRegistration)
class WorkshopRegistrationAdmin(admin.ModelAdmin):
    list_display = ('id', 'workshop', 'user', 'status', 'registration_date')
    list_filter = ('status', 'workshop')
    search_fields = ('user__email', 'workshop__title')


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'category', 'is_active', 'created_at')
    list_filter = ('category', 'is_active')
    search_fields = ('title',)


@admin.register(QuizResult)
class QuizResultAdmin(admin.ModelAdmin):
    list_display = ('id', 'quiz', 'user', 'score', 'result_category', 'taken_at')
    list_filter = ('quiz', 'result_category')
    search_fields = ('user__email', 'quiz__title')


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'category', 'author', 'is_published', 'created_at')
    list_filter = ('category', 'is_published')
    search_fields = ('title', 'author')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
