import pytest
from fastapi.testclient import TestClient

from magento_migration.config import config
from magento_migration.converters import build_registry
from magento_migration.dependencies.app import RunServices, get_run_services
from magento_migration.main import app
from magento_migration.utils.logger import logger

HEADERS = {"Authorization": f"Bearer {config.API_TOKEN}"}


@pytest.fixture
def run_services(mapping_service, logging_service):
    return RunServices(
        registry=build_registry(mapping_service, logging_service, logger),
        logging_service=logging_service,
    )


@pytest.fixture
def client(run_services):
    app.dependency_overrides[get_run_services] = lambda: run_services
    yield TestClient(app)
    app.dependency_overrides.clear()


def convert_payload(entity="country", records=None, profile="magento19"):
    return {
        "connection_id": "connection-1",
        "run_id": "run-1",
        "profile": profile,
        "entity": entity,
        "records": records if records is not None else [],
    }


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health_without_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "unhealthy"


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer wrong-token"},
    {"Authorization": f"Basic {config.API_TOKEN}"},
    {"Authorization": "malformed"},
])
def test_convert_requires_bearer_token(client, headers):
    response = client.post("/converter/convert", json=convert_payload(), headers=headers)

    assert response.status_code == 403


def test_convert_returns_results_and_logs(client, mapping_store):
    records = [
        {"country_id": "XK", "iso2_code": "XK", "iso3_code": "XKX"},
        {"country_id": "QQ", "iso2_code": "QQ"},
    ]

    response = client.post("/converter/convert", json=convert_payload(records=records), headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["entity"] == "country"
    assert body["results"][0]["converted"]["iso"] == "XK"
    assert body["results"][0]["main_mapping_id"] == mapping_store.get("country", "XK").id
    assert body["results"][1]["converted"] is None
    assert body["results"][1]["unconverted"] == records[1]
    assert len(body["logs"]) == 1
    assert body["logs"][0]["code"] == "SWAG_MIGRATION_EMPTY_NECESSARY_FIELD_COUNTRY"
    assert body["logs"][0]["parameters"]["empty_fields"] == ["iso3_code"]


def test_convert_unknown_entity(client):
    response = client.post("/converter/convert", json=convert_payload(entity="unicorn"), headers=HEADERS)

    assert response.status_code == 404


def test_convert_entity_without_converter(client):
    response = client.post("/converter/convert", json=convert_payload(entity="order"), headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["detail"]["error_code"] == "CONVERTER_NOT_FOUND"


def test_convert_rejects_incomplete_request(client):
    payload = convert_payload()
    del payload["run_id"]

    response = client.post("/converter/convert", json=payload, headers=HEADERS)

    assert response.status_code == 422


def test_run_services_require_database():
    app.dependency_overrides.clear()
    client = TestClient(app)

    response = client.post("/converter/convert", json=convert_payload(), headers=HEADERS)

    assert response.status_code == 500


def test_convert_rejects_entity_outside_profile(client, mapping_store):
    records = [{"country_id": "XK", "iso2_code": "XK", "iso3_code": "XKX"}]

    response = client.post(
        "/converter/convert",
        json=convert_payload(records=records, profile="magento21"),
        headers=HEADERS
    )

    assert response.status_code == 422
    assert "magento21" in response.json()["detail"]["message"]
    assert mapping_store.inserts == 0


def test_data_selections_for_profile(client):
    response = client.get("/converter/data-selections", params={"profile": "magento19"}, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["profile"] == "magento19"
    assert [selection["identifier"] for selection in body["data_selections"]] == ["products"]
    assert body["data_selections"][0]["entity_names_required_for_count"] == ["product"]


def test_data_selections_for_unknown_profile(client):
    response = client.get("/converter/data-selections", params={"profile": "shopware55"}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["data_selections"] == []


def test_data_selections_require_bearer_token(client):
    response = client.get("/converter/data-selections", params={"profile": "magento19"})

    assert response.status_code == 403
