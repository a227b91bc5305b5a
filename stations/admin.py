from django.contrib import admin

from stations.models import Station, Pump, PumpDailyRecord


@admin.register(Station)
class StationAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "state",
        "petrol_price_per_litre",
        "diesel_price_per_litre",
        "petrol_volume",
        "diesel_volume",
        "active",
    )
    list_filter = ("state", "active")
    search_fields = ("name", "address")


@admin.register(Pump)
class PumpAdmin(admin.ModelAdmin):
    list_display = ("station", "pump_number", "dispensed_product")
    list_filter = ("station", "dispensed_product")


@admin.register(PumpDailyRecord)
class PumpDailyRecordAdmin(admin.ModelAdmin):
    list_display = ("pump", "station", "record_date", "volume_sold", "total_revenue")
    list_filter = ("station", "record_date")
