"""Display helpers shared by the serializers.

The mobile screens render categories and dates the same way everywhere;
serving the labels from here keeps every client consistent.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from django.utils import timezone

_WORD_START = re.compile(r'\b\w')


def format_category(category: Optional[str]) -> str:
    """``stress_management`` -> ``Stress Management``."""
    if not category:
        return ''
    return _WORD_START.sub(lambda m: m.group(0).upper(), category.replace('_', ' '))


def format_date(value: Optional[datetime | date], empty: str = 'TBD') -> str:
    """Render like ``Mon, Jan 6, 2025``; missing dates become ``empty``."""
    if not value:
        return empty
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return f"{value:%a}, {value:%b} {value.day}, {value.year}"


def format_datetime(value: Optional[datetime]) -> str:
    """Render like ``Mon, Jan 6, 2025, 09:30 AM``."""
    if not value:
        return ''
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return f"{format_date(value)}, {value:%I:%M %p}"


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
