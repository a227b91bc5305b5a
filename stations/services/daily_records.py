# stations/services/daily_records.py

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F, Sum
from django.utils import timezone

from stations.models import Pump, PumpDailyRecord

logger = logging.getLogger(__name__)


class DailyAggregateTracker:
    """
    One (volume, revenue) rollup per pump and calendar day.

    The (pump, record_date) unique constraint is the arbiter under
    concurrency: ``get_or_create`` re-reads after losing an insert race,
    and the accumulation itself is a single ``UPDATE ... SET x = x + d``.
    """

    # ============================================================
    # SALE PATH → ACCUMULATION
    # ============================================================

    @transaction.atomic
    def upsert(self, pump: Pump, record_date, volume_delta, revenue_delta) -> PumpDailyRecord:
        record, created = PumpDailyRecord.objects.get_or_create(
            pump=pump,
            record_date=record_date,
            defaults={
                "station_id": pump.station_id,
                "volume_sold": Decimal("0"),
                "total_revenue": Decimal("0"),
            },
        )

        PumpDailyRecord.objects.filter(pk=record.pk).update(
            volume_sold=F("volume_sold") + Decimal(volume_delta),
            total_revenue=F("total_revenue") + Decimal(revenue_delta),
            updated_at=timezone.now(),
        )

        if created:
            logger.info("Opened daily record for pump %s on %s", pump.pk, record_date)

        record.refresh_from_db()
        return record

    @transaction.atomic
    def reverse(self, pump: Pump, record_date, volume, revenue) -> int:
        """
        Takes a sale's figures back out of an existing rollup.

        A missing record is left missing; returns the number of rows touched.
        """
        updated = PumpDailyRecord.objects.filter(
            pump=pump,
            record_date=record_date,
        ).update(
            volume_sold=F("volume_sold") - Decimal(volume),
            total_revenue=F("total_revenue") - Decimal(revenue),
            updated_at=timezone.now(),
        )

        if not updated:
            logger.warning(
                "No daily record for pump %s on %s to reverse %s L from",
                pump.pk,
                record_date,
                volume,
            )
        return updated

    # ============================================================
    # MANUAL CORRECTION
    # ============================================================

    @transaction.atomic
    def record(self, pump: Pump, record_date, volume_sold, total_revenue) -> PumpDailyRecord:
        """
        Overwrites the figures of a (pump, day); used by the back office
        to correct a rollup by hand.
        """
        record, created = PumpDailyRecord.objects.update_or_create(
            pump=pump,
            record_date=record_date,
            defaults={
                "station_id": pump.station_id,
                "volume_sold": Decimal(volume_sold),
                "total_revenue": Decimal(total_revenue),
            },
        )

        logger.info(
            "%s daily record for pump %s on %s by hand",
            "Created" if created else "Overwrote",
            pump.pk,
            record_date,
        )
        return record

    # ============================================================
    # READS
    # ============================================================

    def get_by_station(self, station_id, record_date=None):
        qs = (
            PumpDailyRecord.objects
            .select_related("pump")
            .filter(station_id=station_id)
        )

        if record_date is not None:
            qs = qs.filter(record_date=record_date)

        return qs.order_by("-record_date", "pump__pump_number")

    def daily_totals_by_station(self, station_id):
        """
        Station totals per day, newest first.
        """
        rows = (
            PumpDailyRecord.objects
            .filter(station_id=station_id)
            .values("record_date")
            .annotate(
                volume_sold=Sum("volume_sold"),
                total_revenue=Sum("total_revenue"),
            )
            .order_by("-record_date")
        )

        return [
            {
                "date": row["record_date"],
                "volume_sold": row["volume_sold"] or Decimal("0"),
                "total_revenue": row["total_revenue"] or Decimal("0"),
            }
            for row in rows
        ]
