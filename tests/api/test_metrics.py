import pytest
from fastapi.testclient import TestClient

from pomotrack.api.metrics import sentiment_label_value


def test_metrics_endpoint_returns_prometheus_format(client: TestClient):
    """Test that metrics endpoint returns data in Prometheus text format"""
    response = client.get("/api/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")

    content = response.text
    assert "pomotrack_" in content


def test_metrics_endpoint_no_auth_required(client: TestClient):
    """Test that metrics endpoint doesn't require authentication"""
    response = client.get("/api/metrics")

    assert response.status_code == 200


def test_metrics_contains_expected_metrics(client: TestClient):
    """Test that metrics endpoint exposes expected metric types"""
    response = client.get("/api/metrics")
    content = response.text

    expected_metrics = [
        "pomotrack_timer_transitions_total",
        "pomotrack_timer_phase_starts_total",
        "pomotrack_sentiment_analyses_total",
        "pomotrack_service_errors_total",
    ]

    for metric_name in expected_metrics:
        assert metric_name in content, f"Expected metric '{metric_name}' not found in output"


def test_timer_actions_are_counted(client: TestClient, test_user):
    """Test that timer transitions and rejected requests show up as samples"""
    client.post("/api/timer/start", headers=test_user["headers"], json={"duration_minutes": 25, "phase": "long_break"})
    client.post("/api/timer/pause", headers=test_user["headers"])
    client.post("/api/timer/start", headers=test_user["headers"], json={"duration_minutes": 0})

    content = client.get("/api/metrics").text

    assert 'pomotrack_timer_transitions_total{action="start"}' in content
    assert 'pomotrack_timer_transitions_total{action="pause"}' in content
    assert 'pomotrack_timer_phase_starts_total{phase="long_break"}' in content
    assert 'pomotrack_service_errors_total{status="400"}' in content


def test_sentiment_label_series_are_bounded(client: TestClient, test_user, make_timer_session):
    """Test that free-text labels collapse onto a fixed set of series"""
    session = make_timer_session(test_user["user_id"])
    for i in range(5):
        client.post("/api/insights/analyze", headers=test_user["headers"], json={
            "id": session.id,
            "sentiment_label": f"junk-{i}",
        })
    client.post("/api/insights/analyze", headers=test_user["headers"], json={
        "id": session.id,
        "sentiment_label": "positive",
    })

    content = client.get("/api/metrics").text
    series = {
        line.split("{", 1)[1].split("}", 1)[0]
        for line in content.splitlines()
        if line.startswith("pomotrack_sentiment_analyses_total{")
    }

    assert "junk" not in content
    assert 'label="OTHER"' in series
    assert 'label="POSITIVE"' in series
    assert series <= {f'label="{name}"' for name in ("POSITIVE", "NEUTRAL", "NEGATIVE", "OTHER", "NONE")}


@pytest.mark.parametrize("label,expected", [
    ("POSITIVE", "POSITIVE"),
    (" negative ", "NEGATIVE"),
    ("Neutral", "NEUTRAL"),
    ("ecstatic", "OTHER"),
    ("", "NONE"),
    (None, "NONE"),
])
def test_sentiment_label_value(label, expected):
    assert sentiment_label_value(label) == expected
