"""Stores API serializers.

Query-parameter validation for the public store listing, input validation
for rating submissions, and read serializers for store summaries and store
details (rating averages rendered with two decimals).
"""

from rest_framework import serializers

from common.api.listing import ListQuerySerializer, text_filter
from ratings.models import MAX_SCORE, MIN_SCORE, Rating
from ratings.services import format_average
from stores.models import Store


class StoreListQuerySerializer(ListQuerySerializer):
    """GET /api/stores query parameters."""

    name = text_filter()
    address = text_filter()
    minRating = serializers.FloatField(
        required=False,
        min_value=1,
        max_value=5,
        error_messages={
            "min_value": "Minimum rating must be between 1 and 5",
            "max_value": "Minimum rating must be between 1 and 5",
        },
    )


class RateStoreSerializer(serializers.Serializer):
    """Input for POST /api/stores/<id>/rate."""

    score = serializers.IntegerField(
        min_value=MIN_SCORE,
        max_value=MAX_SCORE,
        error_messages={
            "min_value": "Rating score must be between 1 and 5",
            "max_value": "Rating score must be between 1 and 5",
        },
    )


class RatingSummarySerializer(serializers.Serializer):
    """{"average": "4.50", "total": 2} from annotated store rows."""

    average = serializers.SerializerMethodField()
    total = serializers.IntegerField(source="total_ratings")

    def get_average(self, obj):
        return format_average(obj.average_rating)


class StoreSummarySerializer(serializers.ModelSerializer):
    """Store row of the public listing; expects ``viewer_scores`` in context."""

    rating = RatingSummarySerializer(source="*")
    userRating = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = ["id", "name", "address", "rating", "userRating"]

    def get_userRating(self, obj):
        score = self.context.get("viewer_scores", {}).get(obj.id)
        return {"score": score} if score is not None else None


class RecentRatingSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.name")

    class Meta:
        model = Rating
        fields = ["score", "user_name", "created_at"]


class StoreDetailSerializer(serializers.ModelSerializer):
    """Single store with owner, rating summary and recent ratings.

    ``userRating`` and ``recentRatings`` are supplied through context.
    """

    owner = serializers.SerializerMethodField()
    rating = RatingSummarySerializer(source="*")
    userRating = serializers.SerializerMethodField()
    recentRatings = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = ["id", "name", "address", "created_at", "owner", "rating", "userRating", "recentRatings"]

    def get_owner(self, obj):
        return {"name": obj.owner.name, "email": obj.owner.email}

    def get_userRating(self, obj):
        rating = self.context.get("viewer_rating")
        if rating is None:
            return None
        return {"score": rating.score, "created_at": serializers.DateTimeField().to_representation(rating.created_at)}

    def get_recentRatings(self, obj):
        return RecentRatingSerializer(self.context.get("recent_ratings", []), many=True).data
