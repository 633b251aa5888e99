"""Auth API serializers.

Provides serializers for signup, login, password changes and the user's own
profile. Field rules (password strength, name and address length) come from
``user_auth_app.validators``; email uniqueness is enforced at create time.
"""

from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers

from user_auth_app.validators import address_field, name_field, password_field

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public representation of a user."""

    class Meta:
        model = User
        fields = ["id", "email", "name", "address", "role"]


class SignupSerializer(serializers.Serializer):
    """Validate a self-service signup; the role is always USER."""

    email = serializers.EmailField(max_length=255)
    password = password_field()
    name = name_field()
    address = address_field()

    def validate_email(self, value):
        return value.strip().lower()


class LoginSerializer(serializers.Serializer):
    """Authenticate email/password and attach the user to validated data."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get("request"),
            email=attrs["email"].strip().lower(),
            password=attrs["password"],
        )
        # None signals bad credentials; the view answers 401.
        attrs["user"] = user
        return attrs


class ChangePasswordSerializer(serializers.Serializer):
    """Current password plus a new one satisfying the strength rules."""

    currentPassword = serializers.CharField(write_only=True, trim_whitespace=False)
    newPassword = password_field()


class PasswordUpdateSerializer(ChangePasswordSerializer):
    """Like ChangePasswordSerializer but requires a matching confirmation."""

    confirmPassword = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        if attrs["confirmPassword"] != attrs["newPassword"]:
            raise serializers.ValidationError(
                {"confirmPassword": "Password confirmation does not match new password"}
            )
        return attrs


class ProfileUpdateSerializer(serializers.Serializer):
    """Partial update of the user's own name/address."""

    name = name_field(required=False)
    address = address_field()

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError(
                {"non_field_errors": ["At least one field (name or address) must be provided for update"]}
            )
        return attrs

    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value)
        instance.save(update_fields=list(validated_data.keys()))
        return instance
