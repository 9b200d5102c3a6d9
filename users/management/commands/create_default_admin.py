from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from users.models import UserProfile

User = get_user_model()


class Command(BaseCommand):
    help = "Creates the default platform admin from DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD if it does not exist."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=None, help="Override DEFAULT_ADMIN_EMAIL")
        parser.add_argument("--password", default=None, help="Override DEFAULT_ADMIN_PASSWORD")
        parser.add_argument("--name", default="Admin", help="Display name for the admin profile")

    def handle(self, *args, **options):
        email = (options["email"] or settings.DEFAULT_ADMIN_EMAIL or "").strip().lower()
        password = options["password"] or settings.DEFAULT_ADMIN_PASSWORD

        if not email:
            raise CommandError("DEFAULT_ADMIN_EMAIL is not set.")

        user = User.objects.filter(email__iexact=email).first()
        if user is not None:
            self.stdout.write(self.style.WARNING(f"Admin already exists: {email}"))
            return

        if not password:
            raise CommandError("DEFAULT_ADMIN_PASSWORD is not set.")

        user = User.objects.create_user(
            username=email,
            email=email,
            password=password,
            is_staff=True,
        )
        profile = user.profile
        profile.full_name = options["name"]
        profile.role = UserProfile.ROLE_ADMIN
        profile.save(update_fields=["full_name", "role", "updated_at"])
        self.stdout.write(self.style.SUCCESS(f"Created admin: {email}"))
