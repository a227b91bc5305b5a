from django.db import models

from stations.constants import Product


class Station(models.Model):
    name = models.CharField(max_length=150)
    address = models.TextField(blank=True)
    ward = models.CharField(max_length=100, blank=True)
    lga = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    active = models.BooleanField(default=True)

    # =========================
    # PRICING (0 = not configured)
    # =========================
    petrol_price_per_litre = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    diesel_price_per_litre = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    gas_price_per_litre = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    kerosene_price_per_litre = models.DecimalField(max_digits=12, decimal_places=4, default=0)

    # =========================
    # STOCK (litres)
    # =========================
    petrol_volume = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    diesel_volume = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    gas_volume = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    kerosene_volume = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Pump(models.Model):
    station = models.ForeignKey(
        Station,
        on_delete=models.CASCADE,
        related_name="pumps"
    )
    pump_number = models.PositiveIntegerField()
    dispensed_product = models.CharField(
        max_length=20,
        choices=Product.choices,
        default=Product.PETROL
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["station", "pump_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["station", "pump_number"],
                name="unique_pump_number_per_station",
            ),
        ]

    def __str__(self):
        return f"{self.station.name} – Pump {self.pump_number}"


class PumpDailyRecord(models.Model):
    """
    Rolling volume / revenue of one pump for one calendar day.

    Written by the sale path through DailyAggregateTracker only.
    """

    pump = models.ForeignKey(
        Pump,
        on_delete=models.CASCADE,
        related_name="daily_records"
    )
    # Denormalised from pump for reporting
    station = models.ForeignKey(
        Station,
        on_delete=models.CASCADE,
        related_name="daily_records"
    )

    record_date = models.DateField()

    volume_sold = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    total_revenue = models.DecimalField(max_digits=18, decimal_places=4, default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-record_date", "pump"]
        constraints = [
            models.UniqueConstraint(
                fields=["pump", "record_date"],
                name="unique_daily_record_per_pump",
            ),
        ]

    def __str__(self):
        return f"{self.pump} – {self.record_date}"
