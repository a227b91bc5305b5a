from decimal import Decimal

from supply.models import Supply, SupplyStatus

SUPPLY_URL = "/api/v1/supply/"


def _request(api_client, manager, station, quantity="2000"):
    api_client.force_authenticate(user=manager)
    return api_client.post(
        f"{SUPPLY_URL}request/",
        {"station_id": station.pk, "product": "PETROL", "quantity": quantity},
        format="json",
    )


def test_manager_requests_restock(api_client, manager, station):
    response = _request(api_client, manager, station)

    assert response.status_code == 201
    assert response.data["status"] == SupplyStatus.PENDING
    assert response.data["requested_by"]["id"] == manager.pk


def test_quantity_below_one_litre_is_invalid(api_client, manager, station):
    response = _request(api_client, manager, station, quantity="0")

    assert response.status_code == 400
    assert response.data["kind"] == "invalid_input"


def test_director_cannot_request_restock(api_client, director, station):
    response = _request(api_client, director, station)

    assert response.status_code == 403


def test_director_walks_supply_to_delivered(api_client, manager, director, station):
    station.petrol_volume = Decimal("5000")
    station.save()
    supply_id = _request(api_client, manager, station).data["id"]

    api_client.force_authenticate(user=director)
    url = f"{SUPPLY_URL}{supply_id}/status/"
    approved = api_client.patch(url, {"status": "APPROVED"}, format="json")
    delivered = api_client.patch(url, {"status": "DELIVERED"}, format="json")
    again = api_client.patch(url, {"status": "DELIVERED"}, format="json")

    assert approved.status_code == 200
    assert delivered.status_code == 200
    assert delivered.data["volume_credited"] is True
    assert again.status_code == 409
    assert again.data["kind"] == "state_conflict"

    station.refresh_from_db()
    assert station.petrol_volume == Decimal("7000.00")


def test_manager_cannot_approve(api_client, manager, station):
    supply_id = _request(api_client, manager, station).data["id"]

    response = api_client.patch(
        f"{SUPPLY_URL}{supply_id}/status/",
        {"status": "APPROVED"},
        format="json",
    )

    assert response.status_code == 403
    assert Supply.objects.get(pk=supply_id).status == SupplyStatus.PENDING


def test_list_filters_by_status(api_client, manager, director, station):
    _request(api_client, manager, station)
    _request(api_client, manager, station)
    Supply.objects.filter(pk=Supply.objects.first().pk).update(status=SupplyStatus.REJECTED)

    api_client.force_authenticate(user=director)
    response = api_client.get(SUPPLY_URL, {"status": "PENDING"})

    assert response.status_code == 200
    assert response.data["count"] == 1


def test_station_views(api_client, manager, station):
    _request(api_client, manager, station)

    listed = api_client.get(f"{SUPPLY_URL}station/{station.pk}/")
    trends = api_client.get(f"{SUPPLY_URL}station/{station.pk}/stats/trends/")
    last = api_client.get(f"{SUPPLY_URL}station/{station.pk}/last-restock/")

    assert len(listed.data) == 1
    assert trends.data == []
    assert last.data["petrol"] is None


def test_unknown_station_supplies(api_client, director):
    api_client.force_authenticate(user=director)

    response = api_client.get(f"{SUPPLY_URL}station/99999/")

    assert response.status_code == 404
