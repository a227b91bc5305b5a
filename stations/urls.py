from django.urls import path

from stations.views import RecordDailySalesAPIView, StationDailyRecordsAPIView

urlpatterns = [
    path("record/", RecordDailySalesAPIView.as_view(), name="station-record"),
    path(
        "<int:station_id>/daily-records/",
        StationDailyRecordsAPIView.as_view(),
        name="station-daily-records",
    ),
]
