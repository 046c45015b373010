# billing/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password
from billing.models import User

TEST_SET = [
    ("clerk1", "clerk"),
    ("admin1", "admin"),
]
DEV_PASSWORD = "billing-dev-123"


class Command(BaseCommand):
    help = f"Ensure development billing users exist with password={DEV_PASSWORD} (idempotent)."

    def handle(self, *args, **opts):
        for username, role in TEST_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "role": role,
                    "password": make_password(DEV_PASSWORD),
                    "is_active": True,
                    "is_staff": role == "admin",
                },
            )
            if not created:
                # reset password, role and active flag
                u.password = make_password(DEV_PASSWORD)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
