# supply/services/ledger.py

import logging
from datetime import timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Sum
from django.db.models.functions import TruncDate
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from core.exceptions import StateConflict
from stations.constants import Product
from stations.services.directory import StationDirectory
from supply.models import Supply, SupplyStatus

logger = logging.getLogger(__name__)

MIN_QUANTITY = Decimal("1")


class InventoryLedger:
    """
    Restock workflow and the only path that adds fuel to station stock.
    """

    def __init__(self, directory=None):
        self.directory = directory or StationDirectory()

    def _queryset(self):
        return Supply.objects.select_related("station", "requested_by", "approved_by")

    # ============================================================
    # REQUEST
    # ============================================================

    def create(self, station_id, product, quantity, requester_id, **levels) -> Supply:
        if product not in Product.values:
            raise ValidationError({"product": f"Unknown product {product}."})

        quantity = Decimal(quantity)
        if quantity < MIN_QUANTITY:
            raise ValidationError({"quantity": "Quantity must be at least 1 litre."})

        station = self.directory.find_station(station_id)
        requester = self.directory.find_user(requester_id)

        supply = Supply.objects.create(
            station=station,
            requested_by=requester,
            product=product,
            quantity=quantity,
            current_petrol_level=levels.get("current_petrol_level"),
            current_diesel_level=levels.get("current_diesel_level"),
        )

        logger.info(
            "Supply %s requested: %s L %s for station %s by user %s",
            supply.pk,
            quantity,
            product,
            station.pk,
            requester.pk,
        )
        return supply

    # ============================================================
    # READS
    # ============================================================

    def find_all(self):
        return self._queryset().order_by("-created_at")

    def find_all_by_station(self, station_id):
        station = self.directory.find_station(station_id)
        return self._queryset().filter(station=station).order_by("-created_at")

    def find_one(self, supply_id) -> Supply:
        try:
            return self._queryset().get(pk=supply_id)
        except (Supply.DoesNotExist, ValueError, TypeError, DjangoValidationError):
            raise NotFound("Supply request not found")

    # ============================================================
    # STATE MACHINE
    # ============================================================

    def update_status(self, supply_id, new_status, approver_id) -> Supply:
        if new_status not in SupplyStatus.values:
            raise ValidationError({"status": f"Unknown status {new_status}."})

        approver = self.directory.find_user(approver_id)

        with transaction.atomic():
            # Row lock: concurrent deliveries of the same request queue here
            try:
                supply = Supply.objects.select_for_update().get(pk=supply_id)
            except (Supply.DoesNotExist, ValueError, TypeError, DjangoValidationError):
                raise NotFound("Supply request not found")

            if supply.is_terminal:
                logger.warning(
                    "Rejected %s -> %s on terminal supply %s",
                    supply.status,
                    new_status,
                    supply.pk,
                )
                raise StateConflict(
                    f"Cannot update supply request that is already {supply.status}"
                )

            if not supply.can_transition_to(new_status):
                logger.warning(
                    "Rejected %s -> %s on supply %s",
                    supply.status,
                    new_status,
                    supply.pk,
                )
                raise StateConflict(
                    f"Transition not allowed: {supply.status} → {new_status}"
                )

            previous = supply.status
            supply.status = new_status
            supply.approved_by = approver
            update_fields = ["status", "approved_by", "updated_at"]

            if new_status == SupplyStatus.DELIVERED:
                supply.delivery_date = timezone.now()
                update_fields.append("delivery_date")

                if not supply.volume_credited:
                    self.directory.credit_station_volume(
                        supply.station_id,
                        supply.product,
                        supply.quantity,
                    )
                    supply.volume_credited = True
                    update_fields.append("volume_credited")

            supply.save(update_fields=update_fields)

        logger.info(
            "Supply %s moved %s -> %s by user %s",
            supply.pk,
            previous,
            new_status,
            approver.pk,
        )
        return self.find_one(supply.pk)

    # ============================================================
    # TRENDS
    # ============================================================

    def get_refuel_trends(self, station_id=None, days=30):
        since = timezone.now() - timedelta(days=days)

        qs = Supply.objects.filter(
            status=SupplyStatus.DELIVERED,
            delivery_date__gte=since,
        )

        if station_id is not None:
            station = self.directory.find_station(station_id)
            qs = qs.filter(station=station)

        rows = (
            qs.annotate(date=TruncDate("delivery_date"))
            .values("date", "product")
            .annotate(total_quantity=Sum("quantity"))
            .order_by("date", "product")
        )

        return [
            {
                "date": row["date"],
                "product": row["product"],
                "total_quantity": row["total_quantity"] or Decimal("0"),
            }
            for row in rows
        ]

    def get_last_restock(self, station_id):
        """
        Latest delivered restock per product, ``None`` when never restocked.
        """
        station = self.directory.find_station(station_id)

        result = {}
        for product in Product.values:
            last = (
                Supply.objects
                .filter(
                    station=station,
                    product=product,
                    status=SupplyStatus.DELIVERED,
                )
                .order_by("-delivery_date")
                .first()
            )
            result[product.lower()] = (
                {"quantity": last.quantity, "date": last.delivery_date}
                if last else None
            )

        return result
