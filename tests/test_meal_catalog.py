"""Tests for the catalog client and the dev catalog service."""

import pytest
import requests
from fastapi.testclient import TestClient

from mealcart.catalog_service.main import app as catalog_app
from mealcart.services import meal_catalog
from mealcart.services.meal_catalog import MealCatalog, MealNotFoundError

pytestmark = pytest.mark.integration


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class StubGet:
    """Replays queued responses or exceptions for requests.get."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.urls = []

    def __call__(self, url, timeout=None):
        self.urls.append(url)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


MEAL_JSON = {
    "id": 7,
    "name": "Paneer Tikka",
    "price": 9.5,
    "chefId": 101,
    "chefName": "Asha Rao",
    "image": "/img/paneer.jpg",
    "isAvailable": True,
}


@pytest.fixture()
def client_under_test():
    return MealCatalog(base_url="http://catalog.test/", timeout=1)


class TestFindMeal:
    def test_parses_catalog_record(self, client_under_test, monkeypatch):
        stub = StubGet(FakeResponse(200, MEAL_JSON))
        monkeypatch.setattr(meal_catalog.requests, "get", stub)

        meal = client_under_test.find_meal(7)
        assert stub.urls == ["http://catalog.test/meals/7"]
        assert meal.id == 7
        assert meal.name == "Paneer Tikka"
        assert str(meal.price) == "9.5"
        assert meal.chef_id == 101
        assert meal.chef_name == "Asha Rao"
        assert meal.available is True

    def test_unavailable_flag(self, client_under_test, monkeypatch):
        stub = StubGet(FakeResponse(200, {**MEAL_JSON, "isAvailable": False}))
        monkeypatch.setattr(meal_catalog.requests, "get", stub)
        assert client_under_test.find_meal(7).available is False

    def test_404_is_not_retried(self, client_under_test, monkeypatch):
        stub = StubGet(FakeResponse(404))
        monkeypatch.setattr(meal_catalog.requests, "get", stub)

        with pytest.raises(MealNotFoundError):
            client_under_test.find_meal(7)
        assert len(stub.urls) == 1

    def test_connection_errors_are_retried_then_raised(self, client_under_test, monkeypatch):
        stub = StubGet(requests.ConnectionError("refused"))
        monkeypatch.setattr(meal_catalog.requests, "get", stub)

        with pytest.raises(requests.ConnectionError):
            client_under_test.find_meal(7)
        assert len(stub.urls) == 3

    def test_recovers_after_transient_failure(self, client_under_test, monkeypatch):
        stub = StubGet(FakeResponse(502), FakeResponse(200, MEAL_JSON))
        monkeypatch.setattr(meal_catalog.requests, "get", stub)

        assert client_under_test.find_meal(7).name == "Paneer Tikka"
        assert len(stub.urls) == 2


class TestDevCatalogService:
    def test_serves_meal(self):
        with TestClient(catalog_app) as c:
            body = c.get("/meals/1").json()
        assert body["chefId"] == 101
        assert body["isAvailable"] is True

    def test_unknown_meal_is_404(self):
        with TestClient(catalog_app) as c:
            assert c.get("/meals/42").status_code == 404
