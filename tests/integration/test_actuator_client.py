import pytest
import requests

from conftest import FakeResponse
from core.exceptions import HealthCheckTimeoutError, MetricsUnavailableError
from core.polling import RetryPolicy
from integrations.actuator_client import ActuatorClient

BASE = "http://localhost:8080"

INFO = {
    "java": {"version": "17.0.16", "vendor": {"name": "BellSoft"}},
    "spring": {"boot": {"version": "3.1.0"}},
}


def _metric(value):
    return {"name": "metric", "measurements": [{"statistic": "VALUE", "value": value}]}


@pytest.fixture
def client(fake_session):
    return ActuatorClient(BASE, timeout=1.0, session=fake_session)


def test_snapshot_reads_versions_and_metrics(client, fake_session):
    """Test reading versions from info and the first measurement of each metric."""
    fake_session.add(f"{BASE}/actuator/info", FakeResponse(200, INFO))
    fake_session.add(f"{BASE}/actuator/metrics/application.started.time", FakeResponse(200, _metric(1.234)))
    fake_session.add(f"{BASE}/actuator/metrics/jvm.memory.used", FakeResponse(200, _metric(204857600.75)))

    snapshot = client.snapshot()

    assert snapshot.java_version == "17.0.16"
    assert snapshot.spring_version == "3.1.0"
    assert snapshot.startup_time_ms == 1.234
    assert snapshot.memory_used_bytes == 204857600.0


def test_missing_info_field_reports_unknown(client, fake_session):
    """Test that a missing version field does not abort the capture."""
    fake_session.add(f"{BASE}/actuator/info", FakeResponse(200, {"java": {"version": "8.0.462"}}))

    assert client.java_version() == "8.0.462"
    assert client.spring_boot_version() == "unknown"


def test_metric_without_measurements_raises(client, fake_session):
    """Test typed error for malformed metric payloads."""
    fake_session.add(f"{BASE}/actuator/metrics/jvm.memory.used", FakeResponse(200, {"measurements": []}))

    with pytest.raises(MetricsUnavailableError):
        client.get_metric_value("jvm.memory.used")


def test_is_up_false_on_connection_error_and_error_status(client, fake_session):
    """Test health probe results."""
    assert client.is_up("/actuator/health") is False

    fake_session.add(f"{BASE}/actuator/health", FakeResponse(503))
    assert client.is_up("/actuator/health") is False

    fake_session.routes[f"{BASE}/actuator/health"] = [FakeResponse(200, {"status": "UP"})]
    assert client.is_up("/actuator/health") is True


def test_wait_until_healthy_polls_info_then_health(client, fake_session):
    """Test that the info endpoint is polled before the health endpoint."""
    fake_session.add(
        f"{BASE}/actuator/info",
        requests.exceptions.ConnectionError("refused"),
        FakeResponse(200, INFO),
    )
    fake_session.add(f"{BASE}/actuator/health", FakeResponse(503), FakeResponse(200, {"status": "UP"}))
    sleeps = []

    client.wait_until_healthy(RetryPolicy(interval=1.0, timeout=30.0), sleep=sleeps.append)

    assert fake_session.requested == [
        f"{BASE}/actuator/info",
        f"{BASE}/actuator/info",
        f"{BASE}/actuator/health",
        f"{BASE}/actuator/health",
    ]
    assert sleeps == [1.0, 1.0]


def test_wait_until_healthy_times_out(client):
    """Test that an application that never starts raises instead of hanging."""
    with pytest.raises(HealthCheckTimeoutError):
        client.wait_until_healthy(RetryPolicy(interval=0.001, timeout=0.01), sleep=lambda _: None)
