import json

import pytest


def login(client, username, password):
    return client.post("/auth", data={"username": username, "password": password})


@pytest.mark.parametrize(
    "username, password, home",
    [
        ("admin", "admin123", "/admin/dashboard"),
        ("mreyes", "faculty123", "/faculty/dashboard"),
        ("sbo", "sbo123", "/sbo/home"),
        ("2024-0001", "Doe2005-03-14", "/student/dashboard"),
    ],
)
def test_login_redirects_to_role_home_and_stores_identity(client, username, password, home):
    resp = login(client, username, password)

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith(home)
    with client.session_transaction() as sess:
        stored = json.loads(sess["currentUser"])
    assert stored["id"] in (1, 2, 3)


def test_dashboard_greets_restored_identity(client):
    login(client, "admin", "admin123")

    resp = client.get("/admin/dashboard")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Hello Portal Admin!" in body
    assert "Welcome back, Portal Admin!" in body


def test_bad_login_stays_on_auth_page(client):
    resp = login(client, "admin", "wrong")

    assert resp.status_code == 200
    assert "Login Failed: Invalid credentials" in resp.get_data(as_text=True)
    with client.session_transaction() as sess:
        assert "currentUser" not in sess


def test_malformed_session_is_cleared(client):
    with client.session_transaction() as sess:
        sess["currentUser"] = "{not json"

    resp = client.get("/admin/dashboard")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth")
    with client.session_transaction() as sess:
        assert "currentUser" not in sess


def test_anonymous_user_is_sent_to_auth(client):
    resp = client.get("/faculty/dashboard")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth")


def test_wrong_role_gets_403(client):
    login(client, "2024-0001", "Doe2005-03-14")

    resp = client.get("/admin/dashboard")

    assert resp.status_code == 403


def test_logout_clears_session_even_when_anonymous(client):
    resp = client.get("/logout")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth")


def test_logout_after_login(client):
    login(client, "sbo", "sbo123")

    resp = client.get("/logout", follow_redirects=True)

    assert "Logged Out: You have been successfully logged out." in resp.get_data(as_text=True)
    with client.session_transaction() as sess:
        assert "currentUser" not in sess


def test_sbo_scans_twice_for_time_in_then_time_out(client, attendance_repo):
    login(client, "sbo", "sbo123")

    first = client.post("/sbo/scan", json={"qr_code": " 2024-0001 "})
    second = client.post("/sbo/scan", json={"qr_code": "2024-0001"})

    assert first.status_code == 200
    assert first.get_json()["data"]["status"] == "partial"
    assert first.get_json()["data"]["recorded_by"] == 3
    assert second.status_code == 200
    assert second.get_json()["data"]["status"] == "present"
    assert len(attendance_repo.records) == 1


def test_sbo_scan_rejects_empty_and_unknown_codes(client):
    login(client, "sbo", "sbo123")

    empty = client.post("/sbo/scan", json={"qr_code": "  "})
    unknown = client.post("/sbo/scan", data={"school_id": "0000"})

    assert empty.status_code == 400
    assert empty.get_json()["message"] == "QR code is empty"
    assert unknown.status_code == 400
    assert unknown.get_json()["message"] == "Student not found"


def test_sbo_check_reports_student(client):
    login(client, "sbo", "sbo123")

    resp = client.get("/sbo/check/2024-0001")

    data = resp.get_json()
    assert data["success"] is True
    assert data["has_record"] is False
    assert data["scan_window"] == "time_in"
    assert data["student"]["name"] == "Jane Doe"
    assert client.get("/sbo/check/nope").status_code == 404


def test_records_csv_export(client):
    login(client, "sbo", "sbo123")
    client.post("/sbo/scan", json={"qr_code": "2024-0001"})
    client.get("/logout")
    login(client, "mreyes", "faculty123")

    resp = client.get("/records.csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_all.csv" in resp.headers["Content-Disposition"]
    assert resp.data.startswith(b"\xef\xbb\xbf")
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("School ID,Student Name")
    assert lines[1].startswith("2024-0001,Jane Doe,y2,")


def test_records_rejects_bad_filters(client):
    login(client, "admin", "admin123")

    assert client.get("/records?date=02/02/2026").status_code == 400
    assert client.get("/records?limit=abc").status_code == 400
    assert client.get("/records?limit=5").get_json()["success"] is True


def test_student_qr_image(client):
    login(client, "2024-0001", "Doe2005-03-14")

    resp = client.get("/student/qr.png")

    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert resp.data.startswith(b"\x89PNG")


def test_registration_logs_student_in(client, students_repo):
    resp = client.post(
        "/auth/register",
        data={
            "school_id": "2024-0099",
            "last_name": "Cruz",
            "first_name": "Juan",
            "middle_name": "",
            "birthdate": "2006-07-01",
            "year_level": "y1",
            "tribe": "Banwa",
        },
    )

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/student/dashboard")
    assert students_repo.get_by_school_id("2024-0099").middle_name is None
    with client.session_transaction() as sess:
        assert json.loads(sess["currentUser"])["school_id"] == "2024-0099"


def test_registration_errors_rerender_form(client):
    resp = client.post("/auth/register", data={"school_id": "2024-0001"})

    assert resp.status_code == 400
    assert "Registration Failed" in resp.get_data(as_text=True)


def test_json_calls_queue_a_single_welcome(client):
    login(client, "sbo", "sbo123")

    for _ in range(5):
        assert client.get("/sbo/check/2024-0001").status_code == 200

    with client.session_transaction() as sess:
        welcomes = [m for _, m in sess.get("_flashes", []) if m.startswith("Welcome Back!")]
    assert welcomes == ["Welcome Back! Hello Sam Officer! 👋"]


def test_records_stats_endpoint(client):
    login(client, "sbo", "sbo123")
    client.post("/sbo/scan", json={"qr_code": "2024-0001"})

    resp = client.get("/records/stats?period=week")

    data = resp.get_json()["data"]
    assert data["period"] == "week"
    assert (data["total"], data["present"], data["rate"]) == (1, 1, 100)
    assert client.get("/records/stats?period=year").status_code == 400


def test_staff_dashboard_shows_attendance_rates(client):
    login(client, "mreyes", "faculty123")

    body = client.get("/faculty/dashboard").get_data(as_text=True)

    assert "Today: 0 of 1 students (0%)" in body
    assert "Month: 0 of 1 students (0%)" in body
