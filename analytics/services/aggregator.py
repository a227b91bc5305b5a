# analytics/services/aggregator.py
"""
Dashboard figures computed straight from the Sale ledger.

Read-only and lock-free: a report may trail an in-flight sale by one
transaction.
"""

from collections import defaultdict
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import DecimalField, F, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from core.utils.aggregations import sum_field
from core.utils.periods import (
    day_bounds,
    get_period_dates,
    month_bounds,
    previous_month,
    trailing_days,
)
from sales.models import Sale
from stations.constants import Product
from stations.models import Station

ZERO = Decimal("0")

VOLUME_EXPR = Sum(
    F("closing_meter_reading") - F("opening_meter_reading"),
    output_field=DecimalField(max_digits=16, decimal_places=2),
)


def percentage_change(current, previous) -> float:
    if previous > 0:
        return round(float((current - previous) / previous * 100), 2)
    if current > 0:
        return 100.0
    return 0.0


class AnalyticsAggregator:

    def __init__(self, trend_days=None):
        self.trend_days = trend_days or getattr(settings, "ANALYTICS_TREND_DAYS", 30)

    # ============================================================
    # MONTH OVER MONTH
    # ============================================================

    def monthly_sales_comparison(self):
        today = timezone.localdate()

        current_start, current_end = month_bounds(today)
        last_start, last_end = month_bounds(previous_month(today))

        current_total = sum_field(
            Sale.objects.filter(created_at__gte=current_start, created_at__lt=current_end),
            "total_price",
        )
        last_total = sum_field(
            Sale.objects.filter(created_at__gte=last_start, created_at__lt=last_end),
            "total_price",
        )

        return {
            "current_month_total": current_total,
            "last_month_total": last_total,
            "percentage_change": percentage_change(current_total, last_total),
        }

    # ============================================================
    # 30-DAY TREND (dense)
    # ============================================================

    def sales_trend_30_days(self):
        days = trailing_days(self.trend_days)
        start, _ = day_bounds(days[0])

        rows = (
            Sale.objects
            .filter(created_at__gte=start)
            .annotate(date=TruncDate("created_at"))
            .values("date", "product")
            .annotate(daily_revenue=Sum("total_price"))
        )

        series = {
            day: {product.lower(): ZERO for product in Product.values}
            for day in days
        }

        for row in rows:
            entry = series.get(row["date"])
            if entry is not None:
                entry[row["product"].lower()] += row["daily_revenue"] or ZERO

        return [{"date": day, **series[day]} for day in days]

    # ============================================================
    # PRODUCT MIX (litres)
    # ============================================================

    def product_comparison(self):
        since = timezone.now() - timedelta(days=self.trend_days)

        rows = (
            Sale.objects
            .filter(created_at__gte=since)
            .values("product")
            .annotate(total_volume=VOLUME_EXPR)
        )

        result = {f"{product.lower()}_total_volume": ZERO for product in Product.values}
        for row in rows:
            result[f"{row['product'].lower()}_total_volume"] = row["total_volume"] or ZERO

        return result

    # ============================================================
    # STATION RANKING (yesterday)
    # ============================================================

    def station_performance_yesterday(self):
        """
        Top and bottom three stations by yesterday's revenue.

        Both lists are cut from the same descending ranking, so with fewer
        than six stations they share members.
        """
        yesterday = timezone.localdate() - timedelta(days=1)
        start, end = day_bounds(yesterday)

        rows = (
            Sale.objects
            .filter(created_at__gte=start, created_at__lt=end)
            .values("station_id", "station__name")
            .annotate(total_sales=Sum("total_price"))
            .order_by("-total_sales", "station__name")
        )

        ranking = [
            {
                "station_id": row["station_id"],
                "station_name": row["station__name"],
                "total_sales": row["total_sales"] or ZERO,
            }
            for row in rows
        ]

        return {
            "date": yesterday,
            "top3": ranking[:3],
            "bottom3": ranking[-3:],
        }

    # ============================================================
    # DASHBOARD CARDS
    # ============================================================

    def daily_stats(self):
        month_start, month_end = get_period_dates("month")
        today_start, today_end = get_period_dates("day")

        month_total = sum_field(
            Sale.objects.filter(created_at__gte=month_start, created_at__lt=month_end),
            "total_price",
        )

        rows = (
            Sale.objects
            .filter(created_at__gte=today_start, created_at__lt=today_end)
            .values("product")
            .annotate(volume=VOLUME_EXPR)
        )

        volumes = {product.lower(): ZERO for product in Product.values}
        for row in rows:
            volumes[row["product"].lower()] = row["volume"] or ZERO

        return {
            "month_total_sales": month_total,
            "today_total_volume": sum(volumes.values(), ZERO),
            **{f"today_{product}_volume": volume for product, volume in volumes.items()},
        }

    def daily_sales_by_station(self):
        days = trailing_days(self.trend_days)
        start, _ = day_bounds(days[0])

        rows = (
            Sale.objects
            .filter(created_at__gte=start)
            .annotate(date=TruncDate("created_at"))
            .values("station_id", "date")
            .annotate(total_sales=Sum("total_price"))
        )

        per_station = defaultdict(dict)
        for row in rows:
            per_station[row["station_id"]][row["date"]] = row["total_sales"] or ZERO

        return [
            {
                "station_id": station.pk,
                "station_name": station.name,
                "daily_sales": [
                    {"date": day, "total_sales": per_station[station.pk].get(day, ZERO)}
                    for day in days
                ],
            }
            for station in Station.objects.order_by("name")
        ]
