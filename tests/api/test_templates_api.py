from datetime import datetime
from fastapi.testclient import TestClient

from pomotrack.models.models import ScheduledSession, TimerSession


def test_create_template(client: TestClient, test_user):
    """Test creating a template"""
    response = client.post("/api/templates", headers=test_user["headers"], json={
        "name": "Deep Work",
        "focus_duration": 50,
        "break_duration": 10,
        "description": "Long writing blocks",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Deep Work"
    assert data["focus_duration"] == 50
    assert data["break_duration"] == 10
    assert data["user_id"] == test_user["user_id"]
    assert data["created_at"] == "2026-10-18T09:30:00"


def test_create_template_validation(client: TestClient, test_user):
    response = client.post("/api/templates", headers=test_user["headers"], json={
        "name": "",
        "focus_duration": 25,
        "break_duration": 5,
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Name is required"}

    response = client.post("/api/templates", headers=test_user["headers"], json={
        "name": "Sprint",
        "focus_duration": 0,
        "break_duration": 5,
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Focus duration must be at least 1 minute"}


def test_list_and_get_templates(client: TestClient, test_user, test_user2, make_template):
    mine = make_template(test_user["user_id"], name="Mine")
    theirs = make_template(test_user2["user_id"], name="Theirs")

    listed = client.get("/api/templates", headers=test_user["headers"])
    assert listed.status_code == 200
    assert [t["name"] for t in listed.json()] == ["Mine"]

    fetched = client.get(f"/api/templates/{mine.id}", headers=test_user["headers"])
    assert fetched.status_code == 200
    assert fetched.json()["id"] == mine.id

    hidden = client.get(f"/api/templates/{theirs.id}", headers=test_user["headers"])
    assert hidden.status_code == 404
    assert hidden.json() == {"error": "Session not found"}


def test_update_template(client: TestClient, test_user, make_template, clock):
    template = make_template(test_user["user_id"])
    clock.advance(days=1)

    response = client.put(f"/api/templates/{template.id}", headers=test_user["headers"], json={
        "name": "Short Bursts",
        "focus_duration": 15,
        "break_duration": 3,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Short Bursts"
    assert data["updated_at"] == "2026-10-19T09:30:00"


def test_delete_template(client: TestClient, test_user, make_template, make_scheduled_session, make_timer_session, db):
    """Test that delete removes schedule entries but keeps timer history"""
    template = make_template(test_user["user_id"])
    make_scheduled_session(test_user["user_id"], datetime(2026, 10, 20, 9, 0), template_id=template.id)
    make_timer_session(test_user["user_id"], template_id=template.id)

    response = client.delete(f"/api/templates/{template.id}", headers=test_user["headers"])

    assert response.status_code == 204
    assert db.query(ScheduledSession).count() == 0
    assert db.query(TimerSession).filter(TimerSession.template_id.is_(None)).count() == 1

    again = client.delete(f"/api/templates/{template.id}", headers=test_user["headers"])
    assert again.status_code == 404


def test_templates_require_auth(client: TestClient):
    assert client.get("/api/templates").status_code == 401
