import pytest
from fastapi.testclient import TestClient

from lead_dashboard import server
from lead_dashboard.errors import TransportFailure

from conftest import FakeTransport


@pytest.fixture
def api():
    def use(transport):
        server.app.dependency_overrides[server.get_transport] = lambda: transport
        return TestClient(server.app)

    yield use
    server.app.dependency_overrides.clear()


def test_health(api):
    response = api(FakeTransport()).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_manager_view_model(api, manager_body):
    transport = FakeTransport(default=manager_body)
    response = api(transport).post("/manager/view-model", json={"start": "2024-03-10", "end": "2024-01-01"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["range"] == {"start": "2024-01-01", "end": "2024-02-29"}
    assert transport.calls == [("/manager/dashboard", {"startDate": "2024/01/01", "endDate": "2024/02/29"})]
    assert {"kpis", "kpiCards", "funnel", "leadSources", "leaderboard", "campaigns"} <= set(payload["data"])
    assert payload["data"]["kpis"]["totalLeads"] == 120


def test_manager_view_model_needs_both_bounds(api, manager_body):
    transport = FakeTransport(default=manager_body)
    response = api(transport).post("/manager/view-model", json={"start": "2024-03-01"})

    assert response.status_code == 400
    assert transport.calls == []


def test_backend_failure_maps_to_bad_gateway(api):
    transport = FakeTransport(default=TransportFailure("backend down", status_code=500))
    response = api(transport).post("/manager/view-model", json={"start": "2024-03-01", "end": "2024-03-10"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Dashboard unavailable for this range."


def test_worker_view_model_with_open_range(api, worker_body):
    transport = FakeTransport(default=worker_body)
    response = api(transport).post("/worker/view-model", json={})

    assert response.status_code == 200
    assert response.json()["range"] == {"start": None, "end": None}
    assert transport.calls[0][1]["startDate"] is None
    assert response.json()["data"]["kpis"]["totalAssignedLeads"] == 18
