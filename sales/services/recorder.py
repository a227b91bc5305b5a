# sales/services/recorder.py

import logging
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.paginator import InvalidPage, Paginator
from django.db import transaction
from django.db.models import Sum
from django.db.models.functions import TruncMonth, TruncWeek
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from core.utils.aggregations import sum_field
from sales.models import Sale, compute_total_price
from stations.constants import Product
from stations.services.daily_records import DailyAggregateTracker
from stations.services.directory import StationDirectory

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "product",
    "price_per_litre",
    "opening_meter_reading",
    "closing_meter_reading",
    "pump_id",
)

READING_QUANTUM = Decimal("0.01")
PRICE_QUANTUM = Decimal("0.0001")


def _reading(value) -> Decimal:
    # Same scale as the stored meter columns
    return Decimal(value).quantize(READING_QUANTUM, rounding=ROUND_HALF_UP)


def _price(value) -> Decimal:
    return Decimal(value).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def _validate_readings(opening, closing):
    if closing <= opening:
        raise ValidationError(
            {
                "closing_meter_reading": (
                    "Closing meter reading must be greater than "
                    "the opening meter reading."
                )
            }
        )


def _validate_product(product):
    if product not in Product.values:
        raise ValidationError({"product": f"Unknown product {product}."})


class SaleRecorder:
    """
    Write path of the sale ledger.

    Every write keeps the pump's daily record in step inside the same
    transaction: create adds the sale, update swaps the old figures for
    the new ones, remove takes the sale back out.
    """

    def __init__(self, directory=None, tracker=None):
        self.directory = directory or StationDirectory()
        self.tracker = tracker or DailyAggregateTracker()

    # ============================================================
    # PRICING
    # ============================================================

    def resolve_price(self, station, product, client_price=None) -> Decimal:
        """
        Station price for the product, then the station petrol price,
        then (unless disabled) the price sent by the client.
        """
        price = _price(self.directory.get_station_price(station, product))
        if price > 0:
            return price

        price = _price(self.directory.get_station_price(station, Product.PETROL))
        if price > 0:
            return price

        if getattr(settings, "SALES_REQUIRE_STATION_PRICE", False):
            raise ValidationError(
                {"price_per_litre": f"Station {station.pk} has no configured price for {product}."}
            )

        if client_price is not None:
            client_price = _price(client_price)

        if client_price is None or client_price <= 0:
            raise ValidationError(
                {"price_per_litre": "No station price is configured and no price was supplied."}
            )

        logger.warning(
            "Station %s has no configured price for %s; using client price %s",
            station.pk,
            product,
            client_price,
        )
        return client_price

    # ============================================================
    # CREATE
    # ============================================================

    def create(self, data, acting_user_id) -> Sale:
        product = data.get("product")
        _validate_product(product)

        pump = self.directory.find_pump_with_station(data.get("pump_id"))
        user = self.directory.find_user(acting_user_id)

        opening = _reading(data["opening_meter_reading"])
        closing = _reading(data["closing_meter_reading"])
        _validate_readings(opening, closing)

        price = self.resolve_price(pump.station, product, data.get("price_per_litre"))
        total_price = compute_total_price(opening, closing, price)

        with transaction.atomic():
            sale = Sale.objects.create(
                product=product,
                price_per_litre=price,
                opening_meter_reading=opening,
                closing_meter_reading=closing,
                total_price=total_price,
                pump=pump,
                station=pump.station,
                recorded_by=user,
            )

            self.tracker.upsert(
                pump=pump,
                record_date=timezone.localdate(sale.created_at),
                volume_delta=closing - opening,
                revenue_delta=total_price,
            )

        logger.info(
            "Sale %s recorded on pump %s: %s L %s = %s",
            sale.pk,
            pump.pk,
            closing - opening,
            product,
            total_price,
        )
        return sale

    # ============================================================
    # READS
    # ============================================================

    def _queryset(self):
        return Sale.objects.select_related("pump", "station", "recorded_by")

    def find_all(self, page=1, limit=20):
        paginator = Paginator(self._queryset().order_by("-created_at"), limit)
        try:
            return paginator.page(page)
        except InvalidPage:
            raise NotFound(f"Invalid page {page}.")

    def find_one(self, sale_id) -> Sale:
        try:
            return self._queryset().get(pk=sale_id)
        except (Sale.DoesNotExist, ValueError, TypeError, DjangoValidationError):
            raise NotFound(f"Sale record with ID {sale_id} not found")

    def find_by_station(self, station_id):
        station = self.directory.find_station(station_id)
        return self._queryset().filter(station=station).order_by("-created_at")

    # ============================================================
    # UPDATE
    # ============================================================

    def update(self, sale_id, patch) -> Sale:
        unknown = set(patch) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError({field: "This field cannot be updated." for field in unknown})

        with transaction.atomic():
            try:
                sale = (
                    Sale.objects
                    .select_for_update()
                    .select_related("pump", "station")
                    .get(pk=sale_id)
                )
            except (Sale.DoesNotExist, ValueError, TypeError, DjangoValidationError):
                raise NotFound(f"Sale with ID {sale_id} not found")

            old_pump = sale.pump
            old_product = sale.product
            old_volume = sale.volume
            old_total = sale.total_price
            sale_day = timezone.localdate(sale.created_at)

            if "product" in patch:
                _validate_product(patch["product"])
                sale.product = patch["product"]

            if "pump_id" in patch and patch["pump_id"] != old_pump.pk:
                pump = self.directory.find_pump_with_station(patch["pump_id"])
                sale.pump = pump
                sale.station = pump.station

            if "opening_meter_reading" in patch:
                sale.opening_meter_reading = _reading(patch["opening_meter_reading"])
            if "closing_meter_reading" in patch:
                sale.closing_meter_reading = _reading(patch["closing_meter_reading"])

            _validate_readings(sale.opening_meter_reading, sale.closing_meter_reading)

            if patch.get("price_per_litre") is not None:
                # Back-office correction of the charged price
                sale.price_per_litre = _price(patch["price_per_litre"])
            elif sale.product != old_product or sale.pump_id != old_pump.pk:
                sale.price_per_litre = self.resolve_price(
                    sale.station, sale.product, sale.price_per_litre
                )

            sale.total_price = compute_total_price(
                sale.opening_meter_reading,
                sale.closing_meter_reading,
                sale.price_per_litre,
            )
            sale.save()

            self.tracker.reverse(old_pump, sale_day, old_volume, old_total)
            self.tracker.upsert(
                pump=sale.pump,
                record_date=sale_day,
                volume_delta=sale.volume,
                revenue_delta=sale.total_price,
            )

        logger.info("Sale %s updated: total %s -> %s", sale.pk, old_total, sale.total_price)
        return self.find_one(sale.pk)

    # ============================================================
    # DELETE
    # ============================================================

    def remove(self, sale_id) -> None:
        with transaction.atomic():
            try:
                sale = (
                    Sale.objects
                    .select_for_update()
                    .select_related("pump")
                    .get(pk=sale_id)
                )
            except (Sale.DoesNotExist, ValueError, TypeError, DjangoValidationError):
                raise NotFound(f"Sale with ID {sale_id} not found")

            self.tracker.reverse(
                sale.pump,
                timezone.localdate(sale.created_at),
                sale.volume,
                sale.total_price,
            )
            sale.delete()

        logger.info("Sale %s removed", sale_id)

    # ============================================================
    # REPORTS
    # ============================================================

    def total_sales(self) -> Decimal:
        return sum_field(Sale.objects.all(), "total_price")

    def total_sales_by_station(self, station_id) -> Decimal:
        station = self.directory.find_station(station_id)
        return sum_field(Sale.objects.filter(station=station), "total_price")

    def total_sales_per_week(self):
        rows = (
            Sale.objects
            .annotate(week_start=TruncWeek("created_at"))
            .values("week_start")
            .annotate(total_sale=Sum("total_price"))
            .order_by("week_start")
        )

        result = []
        for row in rows:
            week_start = row["week_start"]
            if hasattr(week_start, "date"):
                week_start = week_start.date()
            year, week, _ = week_start.isocalendar()
            result.append({
                "year": year,
                "week": week,
                "week_start": week_start,
                "total_sale": row["total_sale"] or Decimal("0"),
            })
        return result

    def total_sales_per_month(self):
        rows = (
            Sale.objects
            .annotate(month=TruncMonth("created_at"))
            .values("month")
            .annotate(total_sale=Sum("total_price"))
            .order_by("month")
        )

        return [
            {
                "month": row["month"].strftime("%Y-%m"),
                "total_sale": row["total_sale"] or Decimal("0"),
            }
            for row in rows
        ]

    def daily_sales_by_station(self, station_id):
        station = self.directory.find_station(station_id)
        return self.tracker.daily_totals_by_station(station.pk)
