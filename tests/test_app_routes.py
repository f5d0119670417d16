import pytest

from rfid_attendance.main import create_app, get_container
from rfid_attendance.storage.memory import InMemoryKeyValueStorage


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv("RFID_SETTINGS_MODULE", raising=False)
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(storage=InMemoryKeyValueStorage())


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, username="admin", password="admin123"):
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return resp.get_json()["user"]


def _add_employee(client, **overrides):
    payload = {"name": "Asha", "empId": "EMP001", "branchId": "main", "salary": 26000, "rfidUid": "AB12"}
    payload.update(overrides)
    resp = client.post("/api/employees", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["employee"]


def test_login_required(client):
    resp = client.get("/api/attendance")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_bad_login(client):
    resp = client.post("/api/login", json={"username": "admin", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid credentials"}


def test_company_is_public(client):
    resp = client.get("/api/company")

    assert resp.status_code == 200
    assert resp.get_json()["company"]["name"]


def test_employee_cannot_reach_admin_pages(client):
    _login(client)
    _add_employee(client)
    client.post("/api/logout")

    user = _login(client, "emp001", "emp123")
    assert user["role"] == "employee"
    assert user["employeeId"]

    assert client.get("/api/employees").status_code == 403
    assert client.post("/api/scan", json={"uid": "AB12"}).status_code == 403
    assert client.get("/api/dashboard").get_json()["employee"]["name"] == "Asha"


def test_scan_then_list_attendance(client):
    _login(client)
    _add_employee(client)

    resp = client.post("/api/scan", json={"uid": " ab12 "})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["scan"]["action"] == "in"
    assert body["scan"]["employee"] == "Asha"

    records = client.get("/api/attendance").get_json()["records"]
    assert len(records) == 1
    assert records[0]["employee"] == "Asha"

    log = client.get("/api/scan/log").get_json()["log"]
    assert log[0]["message"].startswith("Asha clocked in")


def test_unknown_card_scan_is_rejected_not_an_error(client):
    _login(client)

    body = client.post("/api/scan", json={"uid": "ZZ99"}).get_json()

    assert body["scan"]["accepted"] is False
    assert body["scan"]["reason"] == "UnknownCard"


def test_validation_errors_are_400(client):
    _login(client)

    resp = client.post("/api/employees", json={"name": "", "empId": "X"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Name is required"


def test_storage_failure_is_503(app, client, monkeypatch):
    _login(client)
    monkeypatch.setattr(get_container(app).storage, "_write", _offline)

    resp = client.post("/api/holidays", json={"date": "2026-01-26", "name": "Republic Day"})

    assert resp.status_code == 503
    assert get_container(app).state.holidays == []


async def _offline(key, text):
    raise OSError("storage offline")


def test_report_csv_download(client):
    _login(client)
    _add_employee(client)

    resp = client.get("/api/reports/daily-attendance/csv?date=2026-01-06")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "Daily_Attendance_Report_-_06_Jan_2026.csv" in resp.headers["Content-Disposition"]
    lines = resp.get_data(as_text=True).split("\n")
    assert lines[0] == "Name,Emp ID,Department,In Time,Out Time,Hours,Status"
    assert lines[1] == '"Asha","EMP001","","Absent","-","-","absent"'


def test_unknown_report_type_is_400(client):
    _login(client)

    assert client.get("/api/reports/nope").status_code == 400


def test_reset_needs_confirmation(client):
    _login(client)

    assert client.post("/api/reset", json={}).status_code == 400
    assert client.post("/api/reset", json={"confirm": True}).status_code == 200
    assert client.get("/api/me").status_code == 401


def test_cannot_delete_own_account(client):
    user = _login(client)

    resp = client.delete(f"/api/admin/users/{user['id']}")

    assert resp.status_code == 400


def test_reset_with_storage_failure_is_503(app, client, monkeypatch):
    _login(client)
    monkeypatch.setattr(get_container(app).storage, "_remove", _offline_remove)

    resp = client.post("/api/reset", json={"confirm": True})

    assert resp.status_code == 503
    assert resp.get_json()["success"] is False


async def _offline_remove(key):
    raise OSError("storage offline")
