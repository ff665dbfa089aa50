# ================================
# HEALTH TESTS (test_health.py)
# ================================

from office_api.api import API_VERSION


def test_health_reports_service(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == API_VERSION


def test_ready_when_database_answers(client):
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_office_errors_are_documented_with_error_body(client):
    schema = client.get("/openapi.json").json()

    responses = schema["paths"]["/offices/{office_id}"]["put"]["responses"]
    for status_code in ("401", "403", "404", "422"):
        assert responses[status_code]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorResponse"
        }
    assert "field_errors" in schema["components"]["schemas"]["ErrorResponse"]["properties"]
