from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.constants import RoleGroups, UserRole
from accounts.permissions import HasRequiredRole
from core.pagination import StandardResultsSetPagination
from supply.serializers import (
    SupplyRequestSerializer,
    SupplySerializer,
    SupplyStatusSerializer,
)
from supply.services.ledger import InventoryLedger

TREND_DAYS = 30


class SupplyLedgerMixin:
    permission_classes = [HasRequiredRole]
    ledger = InventoryLedger()


class SupplyRequestAPIView(SupplyLedgerMixin, APIView):
    required_roles = {"*": (UserRole.MANAGER,)}

    def post(self, request):
        serializer = SupplyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        supply = self.ledger.create(
            station_id=data["station_id"],
            product=data["product"],
            quantity=data["quantity"],
            requester_id=request.user.pk,
            current_petrol_level=data.get("current_petrol_level"),
            current_diesel_level=data.get("current_diesel_level"),
        )

        return Response(SupplySerializer(supply).data, status=status.HTTP_201_CREATED)


class SupplyListAPIView(SupplyLedgerMixin, ListAPIView):
    required_roles = {"*": RoleGroups.SUPPLY_APPROVERS}
    serializer_class = SupplySerializer
    pagination_class = StandardResultsSetPagination
    filterset_fields = ["status", "product", "station"]
    ordering_fields = ["created_at", "delivery_date"]

    def get_queryset(self):
        return self.ledger.find_all()


class StationSupplyListAPIView(SupplyLedgerMixin, APIView):
    required_roles = {"*": RoleGroups.SUPPLY_APPROVERS + (UserRole.MANAGER,)}

    def get(self, request, station_id):
        supplies = self.ledger.find_all_by_station(station_id)
        return Response(SupplySerializer(supplies, many=True).data)


class SupplyStatusAPIView(SupplyLedgerMixin, APIView):
    required_roles = {"*": RoleGroups.SUPPLY_APPROVERS}

    def patch(self, request, supply_id):
        serializer = SupplyStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        supply = self.ledger.update_status(
            supply_id,
            serializer.validated_data["status"],
            request.user.pk,
        )
        return Response(SupplySerializer(supply).data)


class RefuelTrendsAPIView(SupplyLedgerMixin, APIView):
    required_roles = {"*": RoleGroups.SUPPLY_APPROVERS}

    def get(self, request):
        return Response(self.ledger.get_refuel_trends(None, TREND_DAYS))


class StationRefuelTrendsAPIView(SupplyLedgerMixin, APIView):
    required_roles = {"*": RoleGroups.SUPPLY_APPROVERS + (UserRole.MANAGER,)}

    def get(self, request, station_id):
        return Response(self.ledger.get_refuel_trends(station_id, TREND_DAYS))


class LastRestockAPIView(SupplyLedgerMixin, APIView):
    required_roles = {"*": RoleGroups.SUPPLY_APPROVERS + (UserRole.MANAGER,)}

    def get(self, request, station_id):
        return Response(self.ledger.get_last_restock(station_id))
