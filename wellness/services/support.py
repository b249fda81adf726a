from django.conf import settings

REPORTABLE_ISSUES = [
    {
        'key': 'harassment',
        'title': 'Workplace Harassment',
        'description': 'Report any form of workplace harassment or discrimination',
    },
    {
        'key': 'burnout',
        'title': 'Burnout & Overload',
        'description': 'Get support for work-related stress and burnout',
    },
    {
        'key': 'work_life_balance',
        'title': 'Work-Life Balance',
        'description': 'Discuss issues affecting your work-life balance',
    },
    {
        'key': 'conflicts',
        'title': 'Interpersonal Conflicts',
        'description': 'Resolve conflicts with colleagues or supervisors',
    },
    {
        'key': 'confidential',
        'title': 'Confidential Matters',
        'description': 'Discuss sensitive workplace issues privately',
    },
]


def support_info() -> dict:
    phone = settings.SUPPORT_PHONE
    return {
        'email': settings.SUPPORT_EMAIL,
        'emailUrl': f'mailto:{settings.SUPPORT_EMAIL}',
        'phone': phone,
        'phoneUrl': 'tel:' + ''.join(ch for ch in phone if ch.isdigit() or ch == '+'),
        'emergencyNumber': settings.EMERGENCY_NUMBER,
        'emergencyUrl': f'tel:{settings.EMERGENCY_NUMBER}',
        'issues': REPORTABLE_ISSUES,
    }
