"""
Management command to populate the database with demo data.
"""
from datetime import timedelta
import random

from django.core.management.base import BaseCommand
from django.utils import timezone

from wellness.models import (
    User, UserProfile, Appointment, Message, Workshop, WorkshopRegistration,
    Quiz, Article,
)


STRESS_QUIZ = {
    'title': 'Workplace Stress Check',
    'description': 'Ten quick questions about how work has felt over the last two weeks.',
    'category': 'stress',
    'questions': [
        {'question': q, 'options': ['Never', 'Sometimes', 'Often', 'Always'], 'scores': [0, 1, 2, 3]}
        for q in [
            'I feel overwhelmed by my workload.',
            'I find it hard to switch off after work.',
            'I feel tense before starting my day.',
            'I have trouble concentrating on tasks.',
            'I feel irritable with colleagues.',
            'I skip breaks to keep up.',
            'I lose sleep thinking about work.',
            'I feel my effort goes unnoticed.',
            'I dread checking my messages.',
            'I feel physically exhausted at the end of the day.',
        ]
    ],
    'scoring_rules': {
        'low': {'min': 0, 'max': 10, 'message': 'Your stress level looks manageable. Keep up your routines.'},
        'moderate': {'min': 11, 'max': 20, 'message': 'Some stress is building up. Consider a stress management workshop.'},
        'high': {'min': 21, 'max': 30, 'message': 'Your stress level is high. Booking a session with a counselor could help.'},
    },
}

SLEEP_QUIZ = {
    'title': 'Sleep Quality',
    'description': 'How rested are you?',
    'category': 'sleep',
    'questions': [
        {'question': 'How many hours do you usually sleep?', 'options': ['Less than 5', '5-6', '7-8', 'More than 8'], 'scores': [3, 2, 0, 1]},
        {'question': 'How often do you wake up during the night?', 'options': ['Rarely', 'Once', 'Several times'], 'scores': [0, 1, 3]},
        {'question': 'Do you feel rested in the morning?', 'options': ['Yes', 'Sometimes', 'No'], 'scores': [0, 1, 3]},
    ],
    'scoring_rules': {
        'good': {'min': 0, 'max': 2, 'message': 'You seem to sleep well.'},
        'fair': {'min': 3, 'max': 5, 'message': 'Your sleep could be better. Try a regular bedtime.'},
        'poor': {'min': 6, 'max': 9, 'message': 'Poor sleep affects wellbeing. Talk to a counselor if it persists.'},
    },
}


class Command(BaseCommand):
    help = 'Populate database with demo data'

    def handle(self, *args, **options):
        self.stdout.write('Creating demo data...')

        admins = self.create_admin_users()
        employees = self.create_employees()
        self.create_profiles(employees)
        workshops = self.create_workshops()
        self.create_registrations(workshops, employees)
        self.create_quizzes()
        self.create_articles()
        self.create_appointments(employees)
        self.create_messages(employees, admins)

        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def create_admin_users(self):
        admins = []
        for email, role in [('counselor1@psychhub.org', 'counselor'), ('admin1@psychhub.org', 'admin')]:
            user = User.objects.filter(email=email).first()
            if user is None:
                user = User.objects.create_user(email=email, password='123456', role=role)
            admins.append(user)
            self.stdout.write(f'admin user: {user.email} ({user.role})')
        return admins

    def create_employees(self):
        employees = []
        for i in range(1, 7):
            email = f'employee{i}@psychhub.org'
            user = User.objects.filter(email=email).first()
            if user is None:
                user = User.objects.create_user(email=email, password='123456', role='employee')
            employees.append(user)
            self.stdout.write(f'employee: {user.email}')
        return employees

    def create_profiles(self, employees):
        departments = ['Engineering', 'Sales', 'Finance', 'Operations', 'Marketing']
        positions = ['Analyst', 'Engineer', 'Manager', 'Coordinator', 'Specialist']
        first_names = ['Amira', 'Youssef', 'Salma', 'Karim', 'Ines', 'Mehdi']
        for i, user in enumerate(employees):
            # leave the last employee without a profile to exercise the setup screen
            if i == len(employees) - 1:
                continue
            married = random.random() < 0.5
            UserProfile.objects.get_or_create(
                user=user,
                defaults={
                    'first_name': first_names[i % len(first_names)],
                    'last_name': 'Demo',
                    'position': random.choice(positions),
                    'department': random.choice(departments),
                    'years_at_company': random.randint(0, 15),
                    'marital_status': 'married' if married else 'single',
                    'has_children': married,
                    'number_of_children': random.randint(1, 3) if married else 0,
                    'sleep_hours': random.randint(5, 9),
                    'sleep_well_organized': random.random() < 0.6,
                },
            )

    def create_workshops(self):
        now = timezone.now()
        data = [
            ('Handling Pressure at Work', 'stress_management', 15),
            ('Speaking With Confidence', 'public_speaking', 10),
            ('Prioritise Your Week', 'time_management', 20),
            ('Emotional Balance', 'mental_stability', 12),
            ('Feedback That Helps', 'soft_skills', 2),
        ]
        workshops = []
        for i, (title, category, cap) in enumerate(data):
            start = now + timedelta(days=7 * (i + 1))
            workshop, _ = Workshop.objects.get_or_create(
                title=title,
                defaults={
                    'description': f'{title}: a practical session run by the counselling team.',
                    'category': category,
                    'max_participants': cap,
                    'start_date': start,
                    'end_date': start + timedelta(hours=2),
                },
            )
            workshops.append(workshop)
            self.stdout.write(f'workshop: {workshop.title}')
        return workshops

    def create_registrations(self, workshops, employees):
        for workshop in workshops:
            taken = WorkshopRegistration.objects.filter(workshop=workshop).count()
            for user in random.sample(employees, k=min(3, len(employees))):
                if taken >= workshop.max_participants:
                    break
                _, created = WorkshopRegistration.objects.get_or_create(
                    workshop=workshop, user=user,
                    defaults={'status': random.choice(WorkshopRegistration.ACTIVE_STATUSES)},
                )
                taken += int(created)

    def create_quizzes(self):
        for data in (STRESS_QUIZ, SLEEP_QUIZ):
            quiz, _ = Quiz.objects.get_or_create(title=data['title'], defaults=data)
            self.stdout.write(f'quiz: {quiz.title}')

    def create_articles(self):
        data = [
            ('Five Minute Breathing Breaks', 'stress', True),
            ('Building a Sleep Routine', 'sleep', True),
            ('Talking About Mental Health at Work', 'wellbeing', True),
            ('Draft: Managing Remote Burnout', 'wellbeing', False),
        ]
        for title, category, published in data:
            Article.objects.get_or_create(
                title=title,
                defaults={
                    'summary': f'A short read on {category}.',
                    'content': f'{title}\n\nPractical advice from the counselling team.',
                    'category': category,
                    'author': 'Counselling Team',
                    'is_published': published,
                },
            )

    def create_appointments(self, employees):
        now = timezone.now()
        types = [choice for choice, _ in Appointment.TYPE_CHOICES]
        for i, user in enumerate(employees):
            if Appointment.objects.filter(user=user).exists():
                continue
            Appointment.objects.create(
                user=user,
                appointment_date=now + timedelta(days=i + 1, hours=random.randint(1, 6)),
                type=random.choice(types),
                notes='Initial consultation',
                status=random.choice([Appointment.STATUS_SCHEDULED, Appointment.STATUS_CONFIRMED]),
            )
            Appointment.objects.create(
                user=user,
                appointment_date=now - timedelta(days=14 + i),
                type=random.choice(types),
                status=Appointment.STATUS_COMPLETED,
            )

    def create_messages(self, employees, admins):
        if Message.objects.exists():
            return
        for user in employees[:3]:
            inbound = Message.objects.create(
                from_user=user,
                subject='Question about counselling sessions',
                message='Are the sessions confidential?',
            )
            Message.objects.create(
                from_user=admins[0],
                to_user=user,
                subject=f'Re: {inbound.subject}',
                message='Yes, everything you share stays between you and your counselor.',
            )
            inbound.is_read = True
            inbound.save(update_fields=['is_read'])
        Message.objects.create(
            subject='Workload concerns',
            message='The team has been working every weekend for a month.',
            is_anonymous=True,
        )
