from __future__ import annotations

import io

import pytest
from openpyxl import load_workbook

from school_attendance.common import http

DAY = "2026-03-02"


@pytest.fixture
def registered(client, admin_headers):
    year = client.post(
        "/api/academic-years",
        json={"name": "2025/2026", "start_year": 2025, "end_year": 2026},
        headers=admin_headers,
    ).get_json()["academic_year"]
    student = client.post(
        "/api/students",
        json={"name": "Ama Mensah", "class": "Form 1A", "parent_phone": "0244000001"},
        headers=admin_headers,
    ).get_json()["student"]
    absent = client.post(
        "/api/students",
        json={"name": "Esi Owusu", "class": "Form 2A", "parent_phone": "0244000003"},
        headers=admin_headers,
    ).get_json()["student"]
    teacher = client.post(
        "/api/teachers",
        json={"name": "Grace Asante", "id_card_number": "GHA-1", "phone": "0244000101", "sex": "F"},
        headers=admin_headers,
    ).get_json()["teacher"]
    return {"year": year, "student": student, "absent": absent, "teacher": teacher}


def _checkin(client, headers, code, clock):
    return client.post(
        "/api/attendance/checkin",
        json={"qr_data": code, "client_date": DAY, "client_time": clock},
        headers=headers,
    )


def test_health(client):
    assert client.get("/health").get_json()["success"] is True


def test_checkin_requires_an_api_key(client, registered):
    res = _checkin(client, {}, registered["student"]["student_id"], "07:55:00")
    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "API key required"}

    res = _checkin(client, {"X-API-Key": "wrong"}, registered["student"]["student_id"], "07:55:00")
    assert res.status_code == 401


def test_scanner_key_cannot_manage_data(client, scanner_headers):
    res = client.post("/api/classes", json={"name": "Form 1A", "code": "F1A"}, headers=scanner_headers)
    assert res.status_code == 403


def test_student_registration_contract(client, registered):
    student = registered["student"]
    assert student["student_id"] == "MPASAT2601"
    assert student["class"] == "Form 1A"
    assert student["qr_code"].startswith("data:image/png;base64,")

    listed = client.get("/api/students").get_json()["students"]
    assert {s["student_id"] for s in listed} == {"MPASAT2601", "MPASAT2602"}

    png = client.get(f"/api/students/{student['id']}/qr.png")
    assert png.status_code == 200
    assert png.mimetype == "image/png"
    assert png.data.startswith(b"\x89PNG")


def test_invalid_registration_is_400(client, registered, admin_headers):
    res = client.post("/api/students", json={"name": "X", "class": "F1", "parent_phone": "12"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_checkin_flow(client, registered, scanner_headers):
    code = registered["student"]["student_id"]

    arrival = _checkin(client, scanner_headers, code, "07:55:00").get_json()
    assert arrival["success"] is True
    assert arrival["check_in_type"] == "arrival"
    assert arrival["status"] == "present"
    assert arrival["minutes_late"] == 0
    assert arrival["student_id"] == code
    assert arrival["name"] == "Ama Mensah"
    assert arrival["class"] == "Form 1A"
    assert len(arrival["attendance"]) == 1

    departure = _checkin(client, scanner_headers, code, "15:10:00").get_json()
    assert departure["check_in_type"] == "departure"
    assert len(departure["attendance"]) == 2

    third = _checkin(client, scanner_headers, code, "15:20:00")
    assert third.status_code == 409
    assert third.get_json()["success"] is False


def test_identical_scan_twice_is_rejected(client, registered, scanner_headers):
    code = registered["student"]["student_id"]

    first = _checkin(client, scanner_headers, code, "07:55:00")
    second = _checkin(client, scanner_headers, code, "07:55:00")

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.get_json()["success"] is False
    entries = client.get(f"/api/attendance/entries?date={DAY}").get_json()["entries"]
    assert [e["check_in_type"] for e in entries] == ["arrival"]


def test_checkin_needs_both_client_date_and_time(client, registered, scanner_headers):
    res = client.post(
        "/api/attendance/checkin",
        json={"qr_data": registered["student"]["student_id"], "client_date": DAY},
        headers=scanner_headers,
    )
    assert res.status_code == 400


def test_unknown_qr_is_404(client, registered, scanner_headers):
    res = _checkin(client, scanner_headers, "NOT-A-CODE", "07:55:00")
    assert res.status_code == 404
    assert res.get_json()["message"] == "Invalid QR code"


def test_teacher_checkin_response(client, registered, scanner_headers):
    body = _checkin(client, scanner_headers, registered["teacher"]["teacher_id"], "08:10:00").get_json()
    assert body["person_type"] == "teacher"
    assert body["teacher_id"] == "MPT001"
    assert body["minutes_late"] == 10


def test_stats_entries_and_report(client, registered, scanner_headers):
    _checkin(client, scanner_headers, registered["student"]["student_id"], "08:17:00")
    _checkin(client, scanner_headers, registered["teacher"]["teacher_id"], "07:40:00")

    stats = client.get(f"/api/attendance/stats?date={DAY}").get_json()
    assert (stats["present"], stats["late"], stats["absent"]) == (0, 1, 1)
    assert stats["total"] == 1
    assert stats["total_roster"] == 2
    assert stats["teachers_present"] == 1

    roster = client.get(f"/api/attendance/stats?date={DAY}&total=roster").get_json()
    assert roster["total"] == 2

    entries = client.get(f"/api/attendance/entries?date={DAY}").get_json()["entries"]
    assert [e["check_in_time"] for e in entries] == ["07:40:00", "08:17:00"]

    report = client.get(f"/api/attendance/report?date={DAY}").get_json()
    assert report["total"] == 2
    assert report["entries"][0]["minutes_late"] == 17
    assert report["absentStudents"] == [
        {"student_id": registered["absent"]["student_id"], "name": "Esi Owusu", "class": "Form 2A"}
    ]


def test_bad_query_parameters_are_400(client, registered):
    assert client.get("/api/attendance/stats?date=02-03-2026").status_code == 400
    assert client.get(f"/api/attendance/stats?date={DAY}&total=everyone").status_code == 400
    assert client.get("/api/attendance/report?academic_year_id=999").status_code == 404


def test_stats_default_to_today(client, registered, monkeypatch, fixed_now):
    monkeypatch.setattr(http, "now_local", lambda: fixed_now)
    body = client.get("/api/attendance/stats").get_json()
    assert body["date"] == "2026-03-02"


def test_report_downloads(client, registered, scanner_headers):
    _checkin(client, scanner_headers, registered["student"]["student_id"], "07:55:00")

    csv_res = client.get(f"/api/attendance/report.csv?date={DAY}")
    assert csv_res.mimetype == "text/csv"
    assert "attachment" in csv_res.headers["Content-Disposition"]
    assert csv_res.data.startswith(b"\xef\xbb\xbf")

    xlsx_res = client.get(f"/api/attendance/report.xlsx?date={DAY}")
    ws = load_workbook(io.BytesIO(xlsx_res.data)).active
    assert ws["A6"].value == registered["student"]["student_id"]


def test_delete_all_attendance(client, registered, scanner_headers, admin_headers):
    _checkin(client, scanner_headers, registered["student"]["student_id"], "07:55:00")

    assert client.delete("/api/attendance/all", headers=scanner_headers).status_code == 403

    res = client.delete(
        f"/api/attendance/all?academic_year_id={registered['year']['id']}", headers=admin_headers
    ).get_json()
    assert res["deleted"] == 1
    assert client.get(f"/api/attendance/stats?date={DAY}").get_json()["present"] == 0


def test_settings_endpoints(client, admin_headers):
    body = client.get("/api/settings").get_json()
    assert body["success"] is True
    assert body["settings"] == {"school_start_time": "08:00", "school_end_time": "15:00"}

    rejected = client.put(
        "/api/settings", json={"school_start_time": "09:00", "school_end_time": "08:00"}, headers=admin_headers
    )
    assert rejected.status_code == 409
    assert client.get("/api/settings").get_json()["settings"]["school_start_time"] == "08:00"

    ok = client.put(
        "/api/settings", json={"school_start_time": "07:30", "school_end_time": "14:00"}, headers=admin_headers
    ).get_json()
    assert ok["message"] == "Settings saved"
    assert ok["settings"] == {"school_start_time": "07:30", "school_end_time": "14:00"}
    assert client.get("/api/settings").get_json()["settings"]["school_end_time"] == "14:00"


def test_academic_year_and_class_endpoints(client, registered, admin_headers):
    years = client.get("/api/academic-years").get_json()["academic_years"]
    assert years[0]["status"] == "active"

    blocked = client.delete(f"/api/academic-years/{registered['year']['id']}", headers=admin_headers)
    assert blocked.status_code == 409

    created = client.post("/api/classes", json={"name": "Form 1A", "code": "F1A"}, headers=admin_headers)
    assert created.status_code == 201
    class_id = created.get_json()["class"]["id"]
    updated = client.put(
        f"/api/classes/{class_id}", json={"name": "Form 1A", "code": "F1-A"}, headers=admin_headers
    ).get_json()
    assert updated["class"]["code"] == "F1-A"
    assert client.delete(f"/api/classes/{class_id}", headers=admin_headers).status_code == 200
    assert client.get("/api/classes").get_json()["classes"] == []


def test_delete_student_then_404(client, registered, admin_headers):
    student_id = registered["student"]["id"]
    assert client.delete(f"/api/students/{student_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/students/{student_id}").status_code == 404


def test_unknown_route_is_json_404(client):
    res = client.get("/api/nowhere")
    assert res.status_code == 404
    assert res.get_json()["success"] is False


def test_auth_can_be_disabled(app, client, registered):
    app.config["AUTH_ENABLED"] = False
    res = _checkin(client, {}, registered["student"]["student_id"], "07:55:00")
    assert res.status_code == 200
