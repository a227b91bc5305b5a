import uuid
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from stations.constants import Product

TOTAL_PRICE_QUANTUM = Decimal("0.0001")


def compute_total_price(opening, closing, price_per_litre) -> Decimal:
    """
    (closing - opening) × price, rounded to 4 decimal places.
    """
    volume = Decimal(closing) - Decimal(opening)
    return (volume * Decimal(price_per_litre)).quantize(
        TOTAL_PRICE_QUANTUM, rounding=ROUND_HALF_UP
    )


class Sale(models.Model):
    """
    One fuel-dispensing transaction read off a pump meter.

    ``total_price`` is derived; SaleRecorder recomputes it on every write.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.CharField(max_length=20, choices=Product.choices)

    # Trusted price actually charged
    price_per_litre = models.DecimalField(max_digits=12, decimal_places=4)

    opening_meter_reading = models.DecimalField(max_digits=14, decimal_places=2)
    closing_meter_reading = models.DecimalField(max_digits=14, decimal_places=2)

    total_price = models.DecimalField(max_digits=18, decimal_places=4)

    pump = models.ForeignKey(
        "stations.Pump",
        on_delete=models.PROTECT,
        related_name="sales"
    )
    # Denormalised from pump for reporting
    station = models.ForeignKey(
        "stations.Station",
        on_delete=models.PROTECT,
        related_name="sales"
    )
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="sales_recorded"
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(closing_meter_reading__gt=F("opening_meter_reading")),
                name="sale_closing_after_opening",
            ),
        ]

    def __str__(self):
        return f"{self.product} {self.volume} L – {self.station_id}"

    @property
    def volume(self) -> Decimal:
        return self.closing_meter_reading - self.opening_meter_reading
