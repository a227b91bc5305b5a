from django.contrib import admin

from sales.models import Sale


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "station",
        "pump",
        "product",
        "opening_meter_reading",
        "closing_meter_reading",
        "price_per_litre",
        "total_price",
        "created_at",
    )
    list_filter = ("station", "product")
    readonly_fields = ("total_price", "created_at", "updated_at")
