from rest_framework.permissions import BasePermission


def is_platform_admin(user) -> bool:
    """True for staff/superusers and accounts whose profile role is ``admin``."""
    if not user or not getattr(user, "is_authenticated", False):
        return False
    if user.is_staff or user.is_superuser:
        return True
    profile = getattr(user, "profile", None)
    return bool(profile and profile.role == "admin")


class IsPlatformAdmin(BasePermission):
    message = "Admin access required."

    def has_permission(self, request, view):
        return is_platform_admin(getattr(request, "user", None))


class IsOwnerOrPlatformAdmin(BasePermission):
    """
    Object-level check for records that belong to a user.

    The owning user is looked up through the view's ``owner_field``
    attribute (defaults to ``user``).
    """

    message = "You are not allowed to access this resource."

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        owner_field = getattr(view, "owner_field", "user")
        if is_platform_admin(request.user):
            return True
        return getattr(obj, f"{owner_field}_id", None) == request.user.id
