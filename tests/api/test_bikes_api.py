"""Tests for the catalog endpoints."""

import pytest

from fare_engine.api.middleware.correlation import CORRELATION_HEADER


@pytest.mark.api
class TestListBikes:
    def test_defaults_to_daily_order(self, test_client):
        response = test_client.get("/bikes")

        assert response.status_code == 200
        bikes = response.json()
        assert len(bikes) == 9
        assert bikes[0]["id"] == 1
        assert bikes[-1]["id"] == 2
        assert bikes[-1]["availability"] == "Coming Soon"

    def test_decimal_rates_serialize_as_strings(self, test_client):
        bike = next(b for b in test_client.get("/bikes").json() if b["id"] == 801)
        assert bike["price"]["day"] == "550"
        assert bike["price"]["quarterly"] is None

    def test_quarterly_tariff(self, test_client):
        ids = [bike["id"] for bike in test_client.get("/bikes?tariff=Quarterly").json()]
        assert ids[0] == 901
        assert ids[-1] == 2

    def test_type_filter_and_descending_order(self, test_client):
        response = test_client.get(
            "/bikes", params={"tariff": "Daily", "type": "Electric", "order": "desc"}
        )

        assert response.status_code == 200
        assert [bike["id"] for bike in response.json()] == [6, 901, 801, 802]

    def test_descending_keeps_coming_soon_last(self, test_client):
        bikes = test_client.get("/bikes", params={"tariff": "Monthly", "order": "desc"}).json()

        assert bikes[0]["id"] == 3
        assert bikes[-1]["availability"] == "Coming Soon"

    def test_type_filter_keeps_coming_soon_last(self, test_client):
        ids = [b["id"] for b in test_client.get("/bikes?type=Fuel&order=desc").json()]
        assert ids == [5, 2]

    @pytest.mark.parametrize("params", [{"type": "Cruiser"}, {"order": "cheapest"}])
    def test_invalid_filter_or_order(self, test_client, params):
        assert test_client.get("/bikes", params=params).status_code == 422

    def test_unknown_tariff(self, test_client):
        response = test_client.get("/bikes", params={"tariff": "Fortnightly"})

        assert response.status_code == 422
        assert response.json() == {"tariff": "Fortnightly", "detail": "Unknown tariff: Fortnightly"}


@pytest.mark.api
class TestGetBike:
    def test_found(self, test_client):
        response = test_client.get("/bikes/901")

        assert response.status_code == 200
        assert response.json()["price"]["yearly"] == "140000"

    def test_not_found(self, test_client):
        response = test_client.get("/bikes/999")

        assert response.status_code == 404
        assert response.json() == {"bike_id": 999, "detail": "Bike not found: 999"}

    def test_non_numeric_id(self, test_client):
        assert test_client.get("/bikes/abc").status_code == 422


@pytest.mark.api
class TestCorrelationHeader:
    def test_echoes_incoming_id(self, test_client):
        response = test_client.get("/health", headers={CORRELATION_HEADER: "req-42"})
        assert response.headers[CORRELATION_HEADER] == "req-42"

    def test_generates_id(self, test_client):
        response = test_client.get("/health")
        assert len(response.headers[CORRELATION_HEADER]) == 36
