from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.fields import DateField

from accounts.constants import RoleGroups
from accounts.permissions import HasRequiredRole
from stations.serializers import PumpDailyRecordSerializer, RecordSalesSerializer
from stations.services.daily_records import DailyAggregateTracker
from stations.services.directory import StationDirectory


class RecordDailySalesAPIView(APIView):
    """
    Manual correction of a pump's daily rollup.
    """

    permission_classes = [HasRequiredRole]
    required_roles = {"*": RoleGroups.SALES_WRITERS}

    directory = StationDirectory()
    tracker = DailyAggregateTracker()

    def post(self, request):
        serializer = RecordSalesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        pump = self.directory.find_pump_with_station(data["pump_id"])

        record = self.tracker.record(
            pump=pump,
            record_date=data["record_date"],
            volume_sold=data["volume_sold"],
            total_revenue=data["total_revenue"],
        )

        return Response(
            PumpDailyRecordSerializer(record).data,
            status=status.HTTP_201_CREATED,
        )


class StationDailyRecordsAPIView(APIView):
    permission_classes = [HasRequiredRole]
    required_roles = {"*": RoleGroups.REPORTING}

    directory = StationDirectory()
    tracker = DailyAggregateTracker()

    def get(self, request, station_id):
        station = self.directory.find_station(station_id)

        record_date = request.query_params.get("date")
        if record_date:
            try:
                record_date = DateField().to_internal_value(record_date)
            except ValidationError:
                raise ValidationError({"date": "Expected YYYY-MM-DD."})

        records = self.tracker.get_by_station(station.pk, record_date)
        return Response(PumpDailyRecordSerializer(records, many=True).data)
