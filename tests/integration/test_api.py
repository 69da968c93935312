# tests/integration/test_api.py
from healthlens.config.settings import settings
from healthlens.flows.errors import ModelInvocationError
from healthlens.models.endpoint import ModelResponse

API_PREFIX = f"/api/{settings.api_version}"


def test_root_lists_flows(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "operational"
    assert "diet_planner" in body["flows"]


def test_health_endpoints(test_client):
    assert test_client.get("/health").json()["status"] == "healthy"
    assert test_client.get("/health/live").json() == {"status": "alive"}


def test_metrics_endpoint_is_open_without_api_key(test_client, mocker):
    mocker.patch("healthlens.utils.dependencies.settings.api_key", None)
    response = test_client.get("/metrics")
    assert response.status_code == 200
    assert "flow_invocations_total" in response.text


def test_metrics_endpoint_requires_api_key_when_configured(test_client, mocker):
    mocker.patch("healthlens.utils.dependencies.settings.api_key", "secret-key")
    assert test_client.get("/metrics").status_code == 403
    assert test_client.get("/metrics", headers={"X-API-KEY": "secret-key"}).status_code == 200


def test_flow_catalog(test_client):
    response = test_client.get(f"{API_PREFIX}/flows")
    assert response.status_code == 200
    flows = {flow["name"]: flow for flow in response.json()["flows"]}
    assert len(flows) == 23
    assert flows["virtual_nursing_assistant"]["safety_checks"] == ["physical_emergency", "mental_health_crisis"]


def test_run_flow_success(test_client, stub_client, diet_request, minimal_diet_plan):
    stub_client.queue_json(minimal_diet_plan)

    response = test_client.post(f"{API_PREFIX}/flows/diet_planner", json=diet_request)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["safety_override"] is None
    assert body["version"] == settings.api_version
    assert len(body["data"]["dailyPlans"]) == 1
    assert "registered dietitian" in body["data"]["overallDisclaimer"]


def test_run_flow_reports_safety_override(test_client, stub_client):
    response = test_client.post(f"{API_PREFIX}/flows/virtual_nursing_assistant", json={"message": "I think it's a heart attack"})

    assert response.status_code == 200
    assert response.json()["safety_override"] == "physical_emergency"
    assert stub_client.calls == 0


def test_unknown_flow_is_404(test_client):
    response = test_client.post(f"{API_PREFIX}/flows/teleport", json={})
    assert response.status_code == 404


def test_invalid_input_is_422_with_violations(test_client, stub_client, diet_request):
    diet_request["age"] = -1

    response = test_client.post(f"{API_PREFIX}/flows/diet_planner", json=diet_request)

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["retryable"] is False
    assert body["error"]["code"] == "INPUT_VALIDATION_ERROR"
    assert [v["path"] for v in body["error"]["violations"]] == ["age"]
    assert stub_client.calls == 0


def test_empty_body_is_an_input_error(test_client):
    response = test_client.post(f"{API_PREFIX}/flows/health_myth_buster")
    assert response.status_code == 422
    assert response.json()["error"]["violations"][0]["path"] == "mythQuery"


def test_model_failure_is_502_and_retryable(test_client, stub_client):
    stub_client.queue(ModelInvocationError("upstream unavailable"))

    response = test_client.post(f"{API_PREFIX}/flows/mental_health_check_in", json={"recentActivity": "A calm week."})

    assert response.status_code == 502
    body = response.json()
    assert body["retryable"] is True
    assert body["error"]["code"] == "MODEL_INVOCATION_ERROR"
    assert body["error"]["flow"] == "mental_health_check_in"


def test_output_drift_is_502_and_not_retryable(test_client, stub_client):
    stub_client.queue(ModelResponse(text='{"mood": "calm"}'))

    response = test_client.post(f"{API_PREFIX}/flows/mental_health_check_in", json={"recentActivity": "A calm week."})

    assert response.status_code == 502
    body = response.json()
    assert body["retryable"] is False
    assert body["error"]["code"] == "OUTPUT_VALIDATION_ERROR"
    assert {v["path"] for v in body["error"]["violations"]} == {"sentiment", "supportMessage"}
