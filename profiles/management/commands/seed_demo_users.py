from datetime import timedelta

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.authtoken.models import Token

from profiles.models import Profile

DEMO_USERS = {
    "client": {"username": "aida", "password": "asdasd", "email": "aida@example.com", "is_staff": False},
    "executor": {"username": "timur", "password": "asdasd24", "email": "timur@example.com", "is_staff": False},
    "admin": {"username": "moderator", "password": "asdasd42", "email": "moderator@example.com", "is_staff": True},
}


class Command(BaseCommand):
    help = "Create or update demo users (client, verified executor, staff moderator) with tokens."

    def handle(self, *args, **options):
        User = get_user_model()

        for role, cfg in DEMO_USERS.items():
            u, created = User.objects.get_or_create(
                username=cfg["username"],
                defaults={"email": cfg["email"]},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.username}'"))
            else:
                self.stdout.write(f"User '{u.username}' already exists")

            u.set_password(cfg["password"])
            u.is_staff = cfg["is_staff"]
            u.save(update_fields=["password", "is_staff"])

            profile_type = Profile.Type.CLIENT if role == "admin" else role
            prof, _ = Profile.objects.get_or_create(user=u, defaults={"type": profile_type})
            prof.type = profile_type
            if role == "executor":
                prof.is_verified = True
                prof.subscription_expires_at = timezone.now() + timedelta(days=30)
            prof.save()

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(f"  → role={role}, token={token.key}")

        self.stdout.write(self.style.SUCCESS("Demo users ready."))
