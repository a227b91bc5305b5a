from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.constants import UserRole
from accounts.models import User
from stations.constants import Product
from stations.models import Pump, Station


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def station(db):
    return Station.objects.create(
        name="Station Ikeja",
        state="Lagos",
        petrol_price_per_litre=Decimal("650.50"),
        diesel_price_per_litre=Decimal("980.00"),
    )


@pytest.fixture
def pump(station):
    return Pump.objects.create(
        station=station,
        pump_number=1,
        dispensed_product=Product.PETROL,
    )


def _make_user(username, role, station=None):
    return User.objects.create_user(
        username=username,
        email=f"{username}@test.com",
        password="pass1234",
        role=role,
        station=station,
    )


@pytest.fixture
def manager(station):
    return _make_user("manager1", UserRole.MANAGER, station)


@pytest.fixture
def director(db):
    return _make_user("director1", UserRole.DIRECTOR)


@pytest.fixture
def station_admin(db):
    return _make_user("admin1", UserRole.ADMIN)


@pytest.fixture
def attendant(station):
    return _make_user("attendant1", UserRole.ATTENDANT, station)
