from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.constants import RoleGroups
from accounts.permissions import HasRequiredRole
from analytics.services.aggregator import AnalyticsAggregator


class AnalyticsAPIView(APIView):
    permission_classes = [HasRequiredRole]
    required_roles = {"*": RoleGroups.ANALYTICS}

    aggregator = AnalyticsAggregator()
    report = None

    def get(self, request):
        return Response(getattr(self.aggregator, self.report)())


class MonthlySalesComparisonView(AnalyticsAPIView):
    report = "monthly_sales_comparison"


class SalesTrend30DaysView(AnalyticsAPIView):
    report = "sales_trend_30_days"


class ProductComparisonView(AnalyticsAPIView):
    report = "product_comparison"


class StationPerformanceYesterdayView(AnalyticsAPIView):
    report = "station_performance_yesterday"


class DailyStatsView(AnalyticsAPIView):
    report = "daily_stats"


class DailySalesByStationView(AnalyticsAPIView):
    report = "daily_sales_by_station"
