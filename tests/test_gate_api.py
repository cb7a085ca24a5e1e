from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tradegate.config.schema import AppSettings, ExchangeConfig
from tradegate.main import app
from tradegate.services.runtime import GateRuntime, build_runtime, set_runtime

from tests.conftest import AUTHORITY, POOL, TARGET, TOKEN
from tests.fakes.fake_exchange import FakeExchangeExecutor

PARAMS = {"max_trade_amount": 1000, "min_liquidity": 500, "max_slippage": 300, "risk_threshold": 5}
SIGNAL = {
    "pool": POOL,
    "token": TOKEN,
    "target_token": TARGET,
    "risk_score": 7,
    "liquidity": 600,
    "trade_amount": 400,
    "expected_output": 1000,
}
HEADERS = {"X-Operator-Id": AUTHORITY}


@pytest.fixture
def runtime() -> GateRuntime:
    settings = AppSettings(exchange=ExchangeConfig(timeout_sec=1.0))
    runtime = build_runtime(settings, executor=FakeExchangeExecutor())
    set_runtime(runtime)
    return runtime


@pytest.fixture
def client(runtime: GateRuntime) -> TestClient:
    test_client = TestClient(app)
    response = test_client.post("/api/gate/initialize", json=PARAMS, headers=HEADERS)
    assert response.status_code == 201
    return test_client


def test_initialize_requires_identity(runtime: GateRuntime) -> None:
    response = TestClient(app).post("/api/gate/initialize", json=PARAMS)
    assert response.status_code == 401
    assert not runtime.holder.initialized


def test_second_initialize_conflicts(client: TestClient) -> None:
    response = client.post("/api/gate/initialize", json=PARAMS, headers={"X-Operator-Id": "other"})
    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "ALREADY_INITIALIZED"


def test_signal_accepted_without_execution(client: TestClient) -> None:
    response = client.post("/api/gate/signals", json=SIGNAL)

    assert response.status_code == 200
    body = response.json()
    assert body["executed"] is False
    assert body["pool"] == POOL
    state = client.get("/api/gate/state").json()
    assert state["config"]["total_trades"] == 0


def test_signal_rejection_maps_to_conflict(client: TestClient) -> None:
    response = client.post("/api/gate/signals", json={**SIGNAL, "risk_score": 3})
    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "RISK_SCORE_TOO_LOW"


def test_auto_execute_then_confirm(client: TestClient, runtime: GateRuntime) -> None:
    response = client.post("/api/gate/signals", json={**SIGNAL, "auto_execute": True})
    assert response.status_code == 200
    assert response.json()["min_amount_out"] == 970

    confirm = client.post("/api/gate/settlements/confirm", json={"reference": "fake-1"})
    assert confirm.json() == {"successful_trades": 1}
    again = client.post("/api/gate/settlements/confirm", json={})
    assert again.status_code == 409
    assert again.json()["detail"]["reason"] == "NO_PENDING_TRADE"


def test_exchange_failure_maps_to_bad_gateway(client: TestClient, runtime: GateRuntime) -> None:
    runtime.executor.error = RuntimeError("rpc down")  # type: ignore[attr-defined]
    response = client.post("/api/gate/signals", json={**SIGNAL, "auto_execute": True})
    assert response.status_code == 502
    assert response.json()["detail"]["reason"] == "EXCHANGE_ERROR"


def test_pause_and_resume(client: TestClient) -> None:
    assert client.post("/api/gate/pause", headers=HEADERS).json()["paused"] is True
    blocked = client.post("/api/gate/signals", json=SIGNAL)
    assert blocked.json()["detail"]["reason"] == "BOT_PAUSED"

    events = client.get("/api/gate/events", params={"event": "emergency_pause"}).json()["events"]
    assert events[0]["payload"]["authority"] == AUTHORITY

    assert client.post("/api/gate/resume", headers=HEADERS).json() == {"paused": False}
    assert client.post("/api/gate/signals", json=SIGNAL).status_code == 200


def test_unauthorized_control_is_forbidden(client: TestClient) -> None:
    for method, path in (("post", "/api/gate/pause"), ("post", "/api/gate/resume")):
        response = getattr(client, method)(path, headers={"X-Operator-Id": "mallory"})
        assert response.status_code == 403
        assert response.json()["detail"]["reason"] == "UNAUTHORIZED_ACCESS"
    response = client.put("/api/gate/config", json=PARAMS)
    assert response.status_code == 403


def test_reconfigure_validation(client: TestClient) -> None:
    bad = client.put("/api/gate/config", json={**PARAMS, "max_slippage": 11_000}, headers=HEADERS)
    assert bad.status_code == 422
    assert bad.json()["detail"]["reason"] == "INVALID_CONFIGURATION"
    assert client.get("/api/gate/state").json()["config"]["max_slippage"] == 300

    good = client.put("/api/gate/config", json={**PARAMS, "max_slippage": 100}, headers=HEADERS)
    assert good.status_code == 200
    assert client.get("/api/gate/state").json()["config"]["max_slippage"] == 100


def test_metrics_and_health(client: TestClient) -> None:
    client.post("/api/gate/signals", json=SIGNAL)
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "tradegate_signals_total" in metrics.text
    assert client.get("/healthz").json()["initialized"] is True
