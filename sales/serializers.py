from rest_framework import serializers

from accounts.serializers.user import UserMiniSerializer
from sales.models import Sale
from stations.constants import Product
from stations.serializers import PumpMiniSerializer, StationMiniSerializer


class SaleSerializer(serializers.ModelSerializer):
    pump = PumpMiniSerializer(read_only=True)
    station = StationMiniSerializer(read_only=True)
    recorded_by = UserMiniSerializer(read_only=True)
    volume = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Sale
        fields = (
            "id",
            "product",
            "price_per_litre",
            "opening_meter_reading",
            "closing_meter_reading",
            "volume",
            "total_price",
            "pump",
            "station",
            "recorded_by",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class SaleCreateSerializer(serializers.Serializer):
    """
    Shape of POST /sales. ``price_per_litre`` is only a fallback; the
    station's configured price wins.
    """

    product = serializers.ChoiceField(choices=Product.choices)
    price_per_litre = serializers.DecimalField(
        max_digits=12, decimal_places=4, min_value=0, required=False, allow_null=True
    )
    opening_meter_reading = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    closing_meter_reading = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    pump_id = serializers.IntegerField()

    def validate(self, attrs):
        if attrs["closing_meter_reading"] <= attrs["opening_meter_reading"]:
            raise serializers.ValidationError({
                "closing_meter_reading": (
                    "Closing meter reading must be greater than "
                    "the opening meter reading."
                )
            })
        return attrs


class SaleUpdateSerializer(serializers.Serializer):
    product = serializers.ChoiceField(choices=Product.choices, required=False)
    price_per_litre = serializers.DecimalField(
        max_digits=12, decimal_places=4, min_value=0, required=False
    )
    opening_meter_reading = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=0, required=False
    )
    closing_meter_reading = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=0, required=False
    )
    pump_id = serializers.IntegerField(required=False)
