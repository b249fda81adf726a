"""
URL mappings for the psychological hub API.

This module registers all API endpoints with their corresponding view
functions.  Trailing slashes are deliberately omitted because the
mobile client never sends them.
"""
from django.urls import path, include

from .auth_views import login_view, register_view, me_view, jwt_refresh_view, jwt_logout_view
from .views import health
from .views.appointments import appointments, cancel_appointment, admin_appointments, admin_appointment_status
from .views.articles import articles, article_detail
from .views.dashboard import admin_dashboard
from .views.messages import messages, send_message, mark_read, admin_messages, admin_reply
from .views.profile import profile_view, profile_overview
from .views.quizzes import quizzes, quiz_detail, quiz_submit, my_quiz_results
from .views.support import support, anonymous_report
from .views.workshops import (
    workshops,
    register_workshop,
    cancel_workshop_registration,
    admin_workshops,
    admin_workshop_detail,
    admin_workshop_registrations,
    admin_registration_status,
)


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/me', me_view, name='me_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', jwt_logout_view, name='jwt_logout_view'),
    # Profile
    path('api/profile', profile_view, name='profile'),
    path('api/profile/overview', profile_overview, name='profile_overview'),
    # Appointments
    path('api/appointments', appointments, name='appointments'),
    path('api/appointments/<int:pk>/cancel', cancel_appointment, name='cancel_appointment'),
    # Messages
    path('api/messages', messages, name='messages'),
    path('api/messages/send', send_message, name='send_message'),
    path('api/messages/mark-read', mark_read, name='mark_read'),
    # Workshops
    path('api/workshops', workshops, name='workshops'),
    path('api/workshops/register', register_workshop, name='register_workshop'),
    path('api/workshops/cancel', cancel_workshop_registration, name='cancel_workshop_registration'),
    # Quizzes
    path('api/quizzes', quizzes, name='quizzes'),
    path('api/quizzes/results', my_quiz_results, name='my_quiz_results'),
    path('api/quizzes/<int:pk>', quiz_detail, name='quiz_detail'),
    path('api/quizzes/<int:pk>/submit', quiz_submit, name='quiz_submit'),
    # Articles
    path('api/articles', articles, name='articles'),
    path('api/articles/<int:pk>', article_detail, name='article_detail'),
    # HR support
    path('api/support', support, name='support'),
    path('api/support/report', anonymous_report, name='anonymous_report'),
    # Admin dashboard
    path('api/admin/dashboard', admin_dashboard, name='admin_dashboard'),
    path('api/admin/appointments', admin_appointments, name='admin_appointments'),
    path('api/admin/appointments/status', admin_appointment_status, name='admin_appointment_status'),
    path('api/admin/messages', admin_messages, name='admin_messages'),
    path('api/admin/messages/reply', admin_reply, name='admin_reply'),
    path('api/admin/workshops', admin_workshops, name='admin_workshops'),
    path('api/admin/workshops/<int:pk>', admin_workshop_detail, name='admin_workshop_detail'),
    path('api/admin/workshops/<int:pk>/registrations', admin_workshop_registrations, name='admin_workshop_registrations'),
    path('api/admin/registrations/status', admin_registration_status, name='admin_registration_status'),
]
