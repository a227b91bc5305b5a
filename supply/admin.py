from django.contrib import admin

from supply.models import Supply


@admin.register(Supply)
class SupplyAdmin(admin.ModelAdmin):
    list_display = (
        "station",
        "product",
        "quantity",
        "status",
        "requested_by",
        "approved_by",
        "delivery_date",
    )
    list_filter = ("station", "product", "status")
    # Status moves only through InventoryLedger
    readonly_fields = ("status", "volume_credited", "delivery_date")
