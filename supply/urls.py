from django.urls import path

from supply.views import (
    LastRestockAPIView,
    RefuelTrendsAPIView,
    StationRefuelTrendsAPIView,
    StationSupplyListAPIView,
    SupplyListAPIView,
    SupplyRequestAPIView,
    SupplyStatusAPIView,
)

urlpatterns = [
    path("", SupplyListAPIView.as_view(), name="supply-list"),
    path("request/", SupplyRequestAPIView.as_view(), name="supply-request"),
    path("stats/trends/", RefuelTrendsAPIView.as_view(), name="supply-trends"),
    path("station/<int:station_id>/", StationSupplyListAPIView.as_view(), name="supply-station"),
    path(
        "station/<int:station_id>/stats/trends/",
        StationRefuelTrendsAPIView.as_view(),
        name="supply-station-trends",
    ),
    path(
        "station/<int:station_id>/last-restock/",
        LastRestockAPIView.as_view(),
        name="supply-station-last-restock",
    ),
    path("<uuid:supply_id>/status/", SupplyStatusAPIView.as_view(), name="supply-status"),
]
