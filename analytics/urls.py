from django.urls import path

from analytics.views import (
    DailySalesByStationView,
    DailyStatsView,
    MonthlySalesComparisonView,
    ProductComparisonView,
    SalesTrend30DaysView,
    StationPerformanceYesterdayView,
)

urlpatterns = [
    path(
        "sales/monthly-comparison/",
        MonthlySalesComparisonView.as_view(),
        name="analytics-monthly-comparison",
    ),
    path("sales/trend/30-days/", SalesTrend30DaysView.as_view(), name="analytics-trend-30-days"),
    path(
        "sales/product-comparison/",
        ProductComparisonView.as_view(),
        name="analytics-product-comparison",
    ),
    path(
        "stations/performance/yesterday/",
        StationPerformanceYesterdayView.as_view(),
        name="analytics-station-performance",
    ),
    path("sales/stats/", DailyStatsView.as_view(), name="analytics-daily-stats"),
    path(
        "sales/station-daily-trend/",
        DailySalesByStationView.as_view(),
        name="analytics-station-daily-trend",
    ),
]
