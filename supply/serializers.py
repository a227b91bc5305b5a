from rest_framework import serializers

from accounts.serializers.user import UserMiniSerializer
from stations.constants import Product
from stations.serializers import StationMiniSerializer
from supply.models import Supply, SupplyStatus


class SupplySerializer(serializers.ModelSerializer):
    station = StationMiniSerializer(read_only=True)
    requested_by = UserMiniSerializer(read_only=True)
    approved_by = UserMiniSerializer(read_only=True)

    class Meta:
        model = Supply
        fields = (
            "id",
            "station",
            "requested_by",
            "product",
            "quantity",
            "current_petrol_level",
            "current_diesel_level",
            "status",
            "approved_by",
            "delivery_date",
            "volume_credited",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class SupplyRequestSerializer(serializers.Serializer):
    station_id = serializers.IntegerField()
    product = serializers.ChoiceField(choices=Product.choices)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=1)
    current_petrol_level = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    current_diesel_level = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )


class SupplyStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SupplyStatus.choices)
