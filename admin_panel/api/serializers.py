"""Admin panel serializers.

Query-parameter validation for the user and store lists, input validation
for creating users and stores, and the row representations used by both
lists.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from common.api.listing import ListQuerySerializer, text_filter
from ratings.services import format_average
from stores.models import STORE_ADDRESS_MAX_LENGTH, STORE_NAME_MAX_LENGTH, Store
from user_auth_app.validators import address_field, name_field, password_field

User = get_user_model()

CREATABLE_ROLES = (User.Role.USER, User.Role.STORE_OWNER)


class AdminUserListQuerySerializer(ListQuerySerializer):
    """GET /api/admin/users query parameters."""

    name = text_filter()
    email = text_filter()
    address = text_filter()
    role = serializers.ChoiceField(
        choices=User.Role.choices,
        required=False,
        allow_blank=True,
        error_messages={"invalid_choice": "Invalid role"},
    )


class AdminStoreListQuerySerializer(ListQuerySerializer):
    """GET /api/admin/stores query parameters."""

    search = text_filter()
    name = text_filter()
    address = text_filter()
    owner = text_filter()
    minRating = serializers.FloatField(
        required=False,
        min_value=1,
        max_value=5,
        error_messages={
            "min_value": "Minimum rating must be between 1 and 5",
            "max_value": "Minimum rating must be between 1 and 5",
        },
    )


class AdminUserCreateSerializer(serializers.Serializer):
    """POST /api/admin/users body."""

    email = serializers.EmailField(max_length=255)
    password = password_field()
    name = name_field()
    address = address_field()
    role = serializers.ChoiceField(
        choices=CREATABLE_ROLES,
        error_messages={"invalid_choice": "Role must be USER or STORE_OWNER"},
    )

    def validate_email(self, value):
        return value.strip().lower()


class AdminStoreCreateSerializer(serializers.Serializer):
    """POST /api/admin/stores body; the owner must currently be a STORE_OWNER."""

    name = serializers.CharField(
        max_length=STORE_NAME_MAX_LENGTH,
        error_messages={
            "blank": "Store name must be between 1 and 255 characters",
            "max_length": "Store name must be between 1 and 255 characters",
        },
    )
    address = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        max_length=STORE_ADDRESS_MAX_LENGTH,
        error_messages={"max_length": "Store address must not exceed 500 characters"},
    )
    owner_id = serializers.IntegerField(min_value=1)

    def validate_owner_id(self, value):
        owner = User.objects.filter(pk=value, role=User.Role.STORE_OWNER).first()
        if owner is None:
            raise serializers.ValidationError("Invalid owner ID or owner is not a store owner")
        self.context["owner"] = owner
        return value

    def create(self, validated_data):
        return Store.objects.create(
            name=validated_data["name"],
            address=validated_data["address"],
            owner=self.context["owner"],
        )


class AdminUserRowSerializer(serializers.ModelSerializer):
    """User row; ``average_rating`` is only present for store owners."""

    average_rating = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email", "address", "role", "average_rating"]

    def get_average_rating(self, obj):
        return format_average(getattr(obj, "average_rating", 0))

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.role != User.Role.STORE_OWNER:
            data.pop("average_rating", None)
        return data


class AdminStoreRowSerializer(serializers.ModelSerializer):
    """Store row with owner name/email and rating summary."""

    email = serializers.EmailField(source="owner.email")
    owner = serializers.CharField(source="owner.name")
    average_rating = serializers.SerializerMethodField()
    total_ratings = serializers.IntegerField()

    class Meta:
        model = Store
        fields = ["id", "name", "email", "owner", "address", "average_rating", "total_ratings"]

    def get_average_rating(self, obj):
        return format_average(obj.average_rating)


class AdminStoreCreatedSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = ["id", "name", "address", "owner_id", "created_at"]
