# wellness/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand

from wellness.models import User

TEST_SET = [
    ("employee1@psychhub.org", "employee"),
    ("counselor1@psychhub.org", "counselor"),
    ("admin@psychhub.org", "admin"),
]


class Command(BaseCommand):
    help = "Ensure test users exist with the given password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="Wellness#2024")

    def handle(self, *args, **opts):
        password = opts["password"]
        for email, role in TEST_SET:
            u = User.objects.filter(email=email).first()
            if u is None:
                u = User.objects.create_user(email=email, password=password, role=role)
            else:
                u.set_password(password)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
