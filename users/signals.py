"""
Signals for the users app.

Automatically create a `UserProfile` instance whenever a `User` is saved
without one, so every account has a role and display name.
"""
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver
from .models import UserProfile

User = get_user_model()


@receiver(post_save, sender=User)
def ensure_profile(sender, instance, created, **kwargs):
    """Ensure exactly one UserProfile exists for every User."""
    if created or not UserProfile.objects.filter(user=instance).exists():
        role = UserProfile.ROLE_ADMIN if instance.is_superuser else UserProfile.ROLE_USER
        UserProfile.objects.get_or_create(
            user=instance,
            defaults={"full_name": instance.get_full_name(), "role": role},
        )
