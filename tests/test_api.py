from dosetrack.core.dependencies import get_tracking_service
from dosetrack.core.exceptions import StorageError
from dosetrack.main import app


def create(client, name="Aricept", dosage="10mg", notes=None):
    response = client.post("/api/medications/", json={"name": name, "dosage": dosage, "notes": notes})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_medication(client):
    body = create(client, notes="Take with breakfast")

    assert body["id"] == 1
    assert body["name"] == "Aricept"
    assert body["dosage"] == "10mg"
    assert body["notes"] == "Take with breakfast"
    assert body["created_at"].startswith("2025-03-10T23:00:00")


def test_create_medication_validation(client):
    response = client.post("/api/medications/", json={"name": "  ", "dosage": "10mg"})
    assert response.status_code == 422
    assert isinstance(response.json()["detail"], str)

    response = client.post("/api/medications/", json={"name": "Aricept"})
    assert response.status_code == 422

    assert client.get("/api/medications/").json() == []


def test_list_medications_without_logs(client):
    create(client)

    [medication] = client.get("/api/medications/").json()
    days = medication["last_7_days"]
    assert [d["status"] for d in days] == ["pending"] * 7
    assert [d["day_index"] for d in days] == list(range(7))
    assert days[-1]["date"] == "2025-03-10"
    assert days[0]["date"] == "2025-03-04"


def test_scenario_over_http(client):
    create(client)

    for status, hour in (("taken", "09"), ("missed", "21")):
        response = client.post("/api/doses/", json={
            "medication_id": 1,
            "status": status,
            "logged_at": f"2025-03-10T{hour}:00:00Z",
        })
        assert response.status_code == 201, response.text

    [medication] = client.get("/api/medications/").json()
    assert [d["status"] for d in medication["last_7_days"]] == ["pending"] * 6 + ["missed"]


def test_log_dose_by_path(client):
    create(client)

    response = client.post("/api/medications/1/doses", json={"status": "TAKEN"})
    assert response.status_code == 201
    body = response.json()
    assert body["medication_id"] == 1
    assert body["status"] == "taken"

    assert client.get("/api/medications/1").json()["last_7_days"][-1]["status"] == "taken"


def test_log_dose_unknown_medication(client):
    response = client.post("/api/doses/", json={
        "medication_id": 77,
        "status": "taken",
        "logged_at": "2025-03-10T09:00:00Z",
    })
    assert response.status_code == 404
    assert "77" in response.json()["detail"]


def test_log_dose_invalid_status(client):
    create(client)

    response = client.post("/api/medications/1/doses", json={"status": "skipped"})
    assert response.status_code == 422
    assert client.get("/api/medications/1/doses").json() == []


def test_adherence_endpoint(client):
    create(client)
    client.post("/api/medications/1/doses", json={"status": "taken", "logged_at": "2025-03-09T08:00:00Z"})
    client.post("/api/medications/1/doses", json={"status": "missed", "logged_at": "2025-03-10T08:00:00Z"})

    body = client.get("/api/medications/1/adherence", params={"days": 14}).json()
    assert body["days"] == 14
    assert len(body["statuses"]) == 14
    assert body["start_date"] == "2025-02-25"
    assert body["end_date"] == "2025-03-10"
    assert body["summary"] == {
        "taken": 1,
        "missed": 1,
        "pending": 12,
        "compliance_rate": 50.0,
        "below_threshold": True,
    }

    assert client.get("/api/medications/1/adherence", params={"days": 0}).status_code == 422
    assert client.get("/api/medications/9/adherence").status_code == 404


def test_dose_history(client):
    create(client)
    client.post("/api/medications/1/doses", json={"status": "taken", "logged_at": "2025-03-10T09:00:00Z"})
    client.post("/api/medications/1/doses", json={"status": "missed", "logged_at": "2025-03-10T21:00:00Z"})

    history = client.get("/api/medications/1/doses").json()
    assert [(h["status"], h["is_authoritative"]) for h in history] == [
        ("missed", True),
        ("taken", False),
    ]
    assert history[0]["day"] == "2025-03-10"


def test_get_unknown_medication(client):
    response = client.get("/api/medications/3")
    assert response.status_code == 404


def test_storage_error_hides_internal_detail(client):
    class BrokenService:
        def list_medications(self):
            raise StorageError("sqlite3.OperationalError: disk I/O error at /var/lib/dosetrack.db")

    app.dependency_overrides[get_tracking_service] = lambda: BrokenService()

    response = client.get("/api/medications/")
    assert response.status_code == 500
    assert response.json() == {"detail": StorageError.public_detail}


def test_health_endpoints(client):
    assert client.get("/api/health").json()["status"] == "healthy"
    assert client.get("/health").status_code == 200
    assert client.get("/").json()["api"] == "/api"


def test_log_dose_out_of_range_timestamp(client):
    create(client)

    for logged_at in ("0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00"):
        response = client.post("/api/medications/1/doses", json={"status": "taken", "logged_at": logged_at})
        assert response.status_code == 422, response.text
        assert isinstance(response.json()["detail"], str)

    assert client.get("/api/medications/1/doses").json() == []
    assert client.get("/api/medications/").status_code == 200
