from rest_framework import serializers

from stations.models import Station, Pump, PumpDailyRecord


class StationMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Station
        fields = ("id", "name", "state", "lga")


class PumpMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Pump
        fields = ("id", "pump_number", "dispensed_product", "station")


class PumpDailyRecordSerializer(serializers.ModelSerializer):
    pump = PumpMiniSerializer(read_only=True)

    class Meta:
        model = PumpDailyRecord
        fields = (
            "id",
            "pump",
            "station",
            "record_date",
            "volume_sold",
            "total_revenue",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class RecordSalesSerializer(serializers.Serializer):
    pump_id = serializers.IntegerField()
    record_date = serializers.DateField()
    volume_sold = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    total_revenue = serializers.DecimalField(max_digits=18, decimal_places=4, min_value=0)
