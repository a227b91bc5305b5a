# supply/models.py

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q

from stations.constants import Product


class SupplyStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"
    DELIVERED = "DELIVERED", "Delivered"


ALLOWED_TRANSITIONS = {
    SupplyStatus.PENDING: [
        SupplyStatus.APPROVED,
        SupplyStatus.REJECTED,
    ],
    SupplyStatus.APPROVED: [
        SupplyStatus.DELIVERED,
    ],
    SupplyStatus.REJECTED: [],
    SupplyStatus.DELIVERED: [],
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


class Supply(models.Model):
    """
    Fuel restock request

    - PENDING : raised by a station manager
    - APPROVED / REJECTED : decided by a director
    - DELIVERED : fuel received, station stock credited (once)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    station = models.ForeignKey(
        "stations.Station",
        on_delete=models.CASCADE,
        related_name="supplies"
    )

    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="supplies_requested"
    )

    product = models.CharField(
        max_length=20,
        choices=Product.choices,
        default=Product.PETROL
    )

    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Litres requested"
    )

    # Tank readings reported with the request
    current_petrol_level = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    current_diesel_level = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )

    status = models.CharField(
        max_length=20,
        choices=SupplyStatus.choices,
        default=SupplyStatus.PENDING
    )

    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplies_approved"
    )

    delivery_date = models.DateTimeField(null=True, blank=True)

    volume_credited = models.BooleanField(
        default=False,
        help_text="Set when the delivered quantity has been added to station stock"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "Supplies"
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=1),
                name="supply_quantity_at_least_one_litre",
            ),
        ]

    def __str__(self):
        return f"{self.product} {self.quantity} L – {self.station_id} ({self.status})"

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def can_transition_to(self, new_status) -> bool:
        return new_status in ALLOWED_TRANSITIONS.get(self.status, [])
