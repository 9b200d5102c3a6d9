"""
Serializers for the users app.

Defines serializers for exposing users, registering new accounts,
email-based login that returns JWT refresh/access tokens, and the
dashboard profile/password updates.
"""
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.validators import UniqueValidator
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from common.permissions import is_platform_admin
from .models import UserProfile

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="profile.full_name", read_only=True)
    avatar = serializers.CharField(source="profile.avatar", read_only=True)
    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "avatar", "date_joined"]
        read_only_fields = fields

    def get_role(self, obj) -> str:
        return UserProfile.ROLE_ADMIN if is_platform_admin(obj) else UserProfile.ROLE_USER


class UserMiniSerializer(serializers.ModelSerializer):
    """Creator/reviewer summary embedded in project and request payloads."""

    name = serializers.CharField(source="profile.full_name", read_only=True)
    avatar = serializers.CharField(source="profile.avatar", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "avatar"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, trim_whitespace=True)
    email = serializers.EmailField(
        max_length=150,
        validators=[
            UniqueValidator(
                queryset=User.objects.all(),
                lookup="iexact",
                message="An account with this email already exists.",
            )
        ],
    )
    password = serializers.CharField(write_only=True, trim_whitespace=False, style={"input_type": "password"})

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def validate(self, attrs):
        # Run Django's password validators with user context so similarity checks work
        pseudo_user = User(username=attrs["email"], email=attrs["email"])
        validate_password(attrs["password"], user=pseudo_user)
        return attrs

    def create(self, validated_data):
        user = User.objects.create_user(
            username=validated_data["email"],
            email=validated_data["email"],
            password=validated_data["password"],
        )
        profile = user.profile
        profile.full_name = validated_data["name"]
        profile.role = UserProfile.ROLE_USER
        profile.save(update_fields=["full_name", "role", "updated_at"])
        return user

    def to_representation(self, instance):
        return UserSerializer(instance).data


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Login using email + password and return SimpleJWT refresh/access tokens.
    POST body: {"email": "...", "password": "..."}
    """
    email = serializers.EmailField(write_only=True)
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Remove the parent-added username field so the browsable form shows only Email + Password.
        self.fields.pop(self.username_field, None)

    def validate(self, attrs):
        email = attrs.get("email")
        password = attrs.get("password")

        # Find user by email (case-insensitive)
        user = User.objects.filter(email__iexact=email).order_by("id").first()
        if user is None or not user.check_password(password):
            raise AuthenticationFailed("Invalid email or password")

        if not user.is_active:
            raise AuthenticationFailed("User account is disabled")

        refresh = self.get_token(user)
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
            "user": UserSerializer(user).data,
        }


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=False)
    email = serializers.EmailField(max_length=150, required=False)
    avatar = serializers.URLField(max_length=500, required=False, allow_blank=True)

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        user = self.context["request"].user
        if value != (user.email or "").lower() and User.objects.filter(email__iexact=value).exclude(pk=user.pk).exists():
            raise serializers.ValidationError("Email already in use")
        return value

    def update(self, instance, validated_data):
        profile = instance.profile
        if "email" in validated_data:
            instance.email = validated_data["email"]
            instance.username = validated_data["email"]
            instance.save(update_fields=["email", "username"])
        if "name" in validated_data:
            profile.full_name = validated_data["name"]
        if validated_data.get("avatar"):
            profile.avatar = validated_data["avatar"]
        profile.save()
        return instance

    def to_representation(self, instance):
        return UserSerializer(instance).data


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_current_password(self, value: str) -> str:
        if not self.context["request"].user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value

    def validate_new_password(self, value: str) -> str:
        # Run Django's password validators (length, common, numeric, etc.) with the real user
        validate_password(value, self.context["request"].user)
        return value
