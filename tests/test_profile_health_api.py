"""HTTP tests for the profile, health metrics and health card endpoints."""
from conftest import USER_ID, add_metrics

METRICS = {
    "height": 165, "weight": 60, "age": 28, "gender": "female", "activity_level": "light",
    "blood_pressure": "115/75", "heart_rate": 68, "blood_type": "O+",
    "allergies": "pollen, penicillin", "medications": "",
}


def test_profile_lifecycle(auth_client):
    """Test profile creation, duplicate rejection and partial update."""
    assert auth_client.get("/api/user/profile").status_code == 404
    assert auth_client.put("/api/user/profile", json={"display_name": "Ann"}).status_code == 404

    r = auth_client.post("/api/user/profile", json={"display_name": "Ann", "email": "ann@example.com"})
    assert r.status_code == 201
    assert r.json()["initial_health_data_submitted"] is False
    assert auth_client.post("/api/user/profile", json={"display_name": "Ann", "email": "a@b.c"}).status_code == 400

    r = auth_client.put("/api/user/profile", json={"display_name": "Annie"})
    assert r.json()["display_name"] == "Annie"
    assert r.json()["email"] == "ann@example.com"


def test_initial_health_data_requires_profile(auth_client):
    """Test that initial health data needs a profile."""
    assert auth_client.post("/api/health/initial", json=METRICS).status_code == 404


def test_initial_health_data_marks_profile(auth_client):
    """Test that initial health data marks the profile as submitted."""
    auth_client.post("/api/user/profile", json={"display_name": "Ann", "email": "ann@example.com"})
    r = auth_client.post("/api/health/initial", json=METRICS)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["initial_health_data_submitted"] is True
    assert body["health_metrics"]["user_id"] == USER_ID
    assert auth_client.get("/api/user/profile").json()["initial_health_data_submitted"] is True


def test_latest_and_history(auth_client):
    """Test the latest snapshot and limited history."""
    assert auth_client.get("/api/health/latest").json() is None

    auth_client.post("/api/health/metrics", json=METRICS)
    auth_client.post("/api/health/metrics", json={**METRICS, "weight": 59})
    assert auth_client.get("/api/health/latest").json()["weight"] == 59

    history = auth_client.get("/api/health/history", params={"limit": 1}).json()
    assert [h["weight"] for h in history] == [59]


def test_blood_pressure_format_is_validated(auth_client):
    """Test that a malformed blood pressure is rejected with 400."""
    r = auth_client.post("/api/health/metrics", json={**METRICS, "blood_pressure": "high"})
    assert r.status_code == 400
    fields = [e["field"] for e in r.json()["error"]["details"]["validation_errors"]]
    assert "body.blood_pressure" in fields


def test_health_card(auth_client):
    """Test the health card JSON and its PDF export."""
    assert auth_client.get("/api/health-card").status_code == 404

    auth_client.post("/api/user/profile", json={"display_name": "Ann Lee", "email": "ann@example.com"})
    auth_client.post("/api/health/metrics", json=METRICS)
    card = auth_client.get("/api/health-card").json()
    assert card["personal_info"]["full_name"] == "Ann Lee"
    assert card["personal_info"]["email"] == "ann@example.com"
    assert card["personal_info"]["blood_type"] == "O+"
    assert card["medical_conditions"]["allergies"] == ["pollen", "penicillin"]
    assert card["medical_conditions"]["medications"] == []
    assert card["vital_signs"]["blood_pressure"] == "115/75"

    r = auth_client.get("/api/health-card/pdf")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert 'filename="health_card_Ann_Lee.pdf"' in r.headers["content-disposition"]
    assert r.content.startswith(b"%PDF")


def test_health_card_without_profile_uses_placeholder_name(auth_client, db):
    """Test the health card name when no profile exists."""
    add_metrics(db)
    card = auth_client.get("/api/health-card").json()
    assert card["personal_info"]["full_name"] == "Not provided"
    assert card["medical_conditions"]["allergies"] == ["peanuts", "shellfish"]
