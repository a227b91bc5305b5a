from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from accounts.constants import RoleGroups
from accounts.permissions import HasRequiredRole
from core.pagination import StandardResultsSetPagination
from sales.serializers import SaleCreateSerializer, SaleSerializer, SaleUpdateSerializer
from sales.services.recorder import SaleRecorder


class SaleViewSet(viewsets.ViewSet):
    """
    API sales ledger

    - writes go through SaleRecorder (price, total, daily record)
    - report/* are read-only sums over the ledger
    """

    permission_classes = [HasRequiredRole]
    required_roles = {
        "create": RoleGroups.SALES_WRITERS,
        "partial_update": RoleGroups.SALES_WRITERS,
        "destroy": RoleGroups.SALES_WRITERS,
        "*": RoleGroups.REPORTING,
    }

    pagination_class = StandardResultsSetPagination
    recorder = SaleRecorder()

    def list(self, request):
        paginator = self.pagination_class()
        limit = paginator.get_page_size(request)
        page = request.query_params.get(paginator.page_query_param, 1)

        sales_page = self.recorder.find_all(page, limit)

        return Response({
            "count": sales_page.paginator.count,
            "page": sales_page.number,
            "limit": limit,
            "results": SaleSerializer(sales_page.object_list, many=True).data,
        })

    def create(self, request):
        serializer = SaleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sale = self.recorder.create(serializer.validated_data, request.user.pk)

        return Response(SaleSerializer(sale).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(SaleSerializer(self.recorder.find_one(pk)).data)

    def partial_update(self, request, pk=None):
        serializer = SaleUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        sale = self.recorder.update(pk, serializer.validated_data)

        return Response(SaleSerializer(sale).data)

    def destroy(self, request, pk=None):
        self.recorder.remove(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # =========================
    # BY STATION
    # =========================

    @action(detail=False, methods=["get"], url_path=r"station/(?P<station_id>\d+)")
    def by_station(self, request, station_id=None):
        sales = self.recorder.find_by_station(station_id)
        return Response(SaleSerializer(sales, many=True).data)

    # =========================
    # REPORTS
    # =========================

    @action(detail=False, methods=["get"], url_path="report/total")
    def report_total(self, request):
        return Response({"total_sale": self.recorder.total_sales()})

    @action(detail=False, methods=["get"], url_path=r"report/station/(?P<station_id>\d+)/total")
    def report_station_total(self, request, station_id=None):
        return Response({
            "station_id": int(station_id),
            "total_sale": self.recorder.total_sales_by_station(station_id),
        })

    @action(detail=False, methods=["get"], url_path="report/weekly")
    def report_weekly(self, request):
        return Response(self.recorder.total_sales_per_week())

    @action(detail=False, methods=["get"], url_path="report/monthly")
    def report_monthly(self, request):
        return Response(self.recorder.total_sales_per_month())

    @action(detail=False, methods=["get"], url_path=r"report/daily/station/(?P<station_id>\d+)")
    def report_daily_station(self, request, station_id=None):
        return Response(self.recorder.daily_sales_by_station(station_id))
