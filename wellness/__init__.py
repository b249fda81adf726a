"""Wellness application for the psychological hub backend.

This package contains models, serializers, services, views and route
registrations implementing the API consumed by the mobile application.
"""
