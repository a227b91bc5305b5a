# stations/services/directory.py
"""
StationDirectory: the one place the sales and supply services read
stations, pumps and users, and the only writer of station stock counters.
"""

import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import F
from rest_framework.exceptions import NotFound, ValidationError

from stations.constants import PRICE_FIELDS, VOLUME_FIELDS, Product
from stations.models import Pump, Station

logger = logging.getLogger(__name__)


class StationDirectory:

    def find_pump_with_station(self, pump_id) -> Pump:
        try:
            return Pump.objects.select_related("station").get(pk=pump_id)
        except (Pump.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Pump with ID {pump_id} not found")

    def find_station(self, station_id) -> Station:
        try:
            return Station.objects.get(pk=station_id)
        except (Station.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Station with ID {station_id} not found")

    def find_user(self, user_id):
        User = get_user_model()
        try:
            return User.objects.get(pk=user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"User with ID {user_id} not found")

    # ============================================================
    # PRICING
    # ============================================================

    def get_station_price(self, station, product) -> Decimal:
        """
        Configured price of ``product`` at ``station`` (instance or id).

        Returns Decimal("0") when the station has no price for it.
        """
        if not isinstance(station, Station):
            station = self.find_station(station)

        field = PRICE_FIELDS.get(product)
        if field is None:
            raise ValidationError({"product": f"Unknown product {product}."})

        return getattr(station, field) or Decimal("0")

    # ============================================================
    # STOCK
    # ============================================================

    def credit_station_volume(self, station_id, product, amount) -> Station:
        """
        Adds ``amount`` litres to the station counter for ``product``.

        The increment runs in the database; callers own the transaction.
        """
        field = VOLUME_FIELDS.get(product)
        if field is None:
            raise ValidationError({"product": f"Unknown product {product}."})

        amount = Decimal(amount)

        updated = Station.objects.filter(pk=station_id).update(
            **{field: F(field) + amount}
        )
        if not updated:
            raise NotFound(f"Station with ID {station_id} not found")

        logger.info(
            "Credited %s L of %s to station %s", amount, Product(product).label, station_id
        )

        return Station.objects.get(pk=station_id)
