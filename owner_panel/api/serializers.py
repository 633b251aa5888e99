"""Owner panel serializers.

Owned-store summaries with a per-score breakdown, the paginated rating list
of one store, and the partial store update (name/address only).
"""

from rest_framework import serializers

from common.api.listing import MAX_PAGE_NUMBER
from ratings.models import Rating
from ratings.services import BREAKDOWN_KEYS, build_statistics
from stores.models import STORE_ADDRESS_MAX_LENGTH, STORE_NAME_MAX_LENGTH, Store


class OwnerRatingsQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, max_value=MAX_PAGE_NUMBER, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=20)


class OwnedStoreSerializer(serializers.ModelSerializer):
    """Owned store with full statistics; expects ``recent_ratings`` (by store id) in context."""

    rating = serializers.SerializerMethodField()
    recentRatings = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = ["id", "name", "address", "rating", "recentRatings"]

    def get_rating(self, obj):
        counts = {key: getattr(obj, key, 0) for key in BREAKDOWN_KEYS.values()}
        return build_statistics(obj.average_rating, obj.total_ratings, counts)

    def get_recentRatings(self, obj):
        return self.context.get("recent_ratings", {}).get(obj.id, [])


class StoreRatingSerializer(serializers.ModelSerializer):
    """One rating of an owned store, with the rater's identity."""

    user = serializers.SerializerMethodField()

    class Meta:
        model = Rating
        fields = ["id", "score", "created_at", "user"]

    def get_user(self, obj):
        return {"id": obj.user_id, "name": obj.user.name, "email": obj.user.email}


class StoreUpdateSerializer(serializers.ModelSerializer):
    """PATCH body: name and/or address."""

    name = serializers.CharField(
        required=False,
        min_length=1,
        max_length=STORE_NAME_MAX_LENGTH,
        error_messages={
            "blank": "Store name must be between 1 and 255 characters",
            "max_length": "Store name must be between 1 and 255 characters",
        },
    )
    address = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=STORE_ADDRESS_MAX_LENGTH,
        error_messages={"max_length": "Address must not exceed 500 characters"},
    )

    class Meta:
        model = Store
        fields = ["name", "address"]


class StoreOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = ["id", "name", "address", "created_at"]
