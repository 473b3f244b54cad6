from __future__ import annotations


def _seed(client):
    member = client.post("/api/members", json={"name": "Aoki", "email": "aoki@example.com", "transport_fee": 500})
    assert member.status_code == 201
    location = client.post("/api/locations", json={"name": "ClientA", "hourly_wage": 2000, "type": "client"})
    assert location.status_code == 201
    return member.get_json()["data"]["id"]


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok", "storage": "memory"}


def test_clock_in_out_and_payroll(client):
    member_id = _seed(client)

    res = client.post(
        "/api/attendance/clock-in",
        json={"member_id": member_id, "location": "ClientA", "date": "2024-05-01", "clock_in": "09:00"},
    )
    assert res.status_code == 201
    record = res.get_json()["data"]
    assert record["member_name"] == "Aoki"
    assert record["clock_out"] is None

    res = client.post(f"/api/attendance/{record['id']}/clock-out", json={"clock_out": "17:30"})
    assert res.status_code == 200
    assert res.get_json()["data"]["total_hours"] == 8.5

    res = client.get(f"/api/payroll/{member_id}/2024-05")
    body = res.get_json()["data"]
    assert body["member_name"] == "Aoki"
    assert body["total_hours"] == 8.5
    assert body["total_salary"] == 17000

    res = client.get("/api/payroll/2024-05")
    assert [s["member_id"] for s in res.get_json()["data"]] == [member_id]


def test_double_clock_in_is_409(client):
    member_id = _seed(client)
    payload = {"member_id": member_id, "location": "ClientA", "date": "2024-05-01", "clock_in": "09:00"}

    assert client.post("/api/attendance/clock-in", json=payload).status_code == 201
    res = client.post("/api/attendance/clock-in", json=payload)

    assert res.status_code == 409
    assert res.get_json()["success"] is False
    assert len(client.get("/api/attendance?open=1").get_json()["data"]) == 1


def test_validation_error_is_400_with_field(client):
    member_id = _seed(client)

    res = client.post(
        "/api/attendance/clock-in",
        json={"member_id": member_id, "location": "ClientA", "date": "2024-02-30", "clock_in": "09:00"},
    )

    assert res.status_code == 400
    body = res.get_json()
    assert body["success"] is False
    assert body["field"] == "date"


def test_unknown_record_is_404(client):
    assert client.delete("/api/attendance/999").status_code == 404
    assert client.get("/api/members/999").status_code == 404


def test_unknown_route_is_json_404(client):
    res = client.get("/api/nope")

    assert res.status_code == 404
    assert res.get_json()["success"] is False


def test_shift_workflow_and_projection(client):
    member_id = _seed(client)

    res = client.post(
        "/api/shifts",
        json={"member_id": member_id, "location": "ClientA", "date": "2024-05-10", "start_time": "09:00", "end_time": "13:00"},
    )
    assert res.status_code == 201
    shift_id = res.get_json()["data"]["id"]

    assert client.post(f"/api/shifts/{shift_id}/approve").get_json()["data"]["status"] == "approved"
    assert client.put(f"/api/shifts/{shift_id}", json={"end_time": "14:00"}).status_code == 409

    projected = client.get(f"/api/payroll/{member_id}/2024-05/projected").get_json()["data"]
    assert projected["total_salary"] == 8000


def test_finalize_lock_and_unlock(client):
    member_id = _seed(client)
    rec = client.post(
        "/api/attendance/clock-in",
        json={"member_id": member_id, "location": "ClientA", "date": "2024-05-01", "clock_in": "09:00"},
    ).get_json()["data"]
    client.post(f"/api/attendance/{rec['id']}/clock-out", json={"clock_out": "17:00"})

    res = client.post(f"/api/payroll/{member_id}/2024-05/finalize")
    assert res.status_code == 201
    salary_id = res.get_json()["data"]["id"]
    assert client.post(f"/api/payroll/{member_id}/2024-05/finalize").status_code == 409

    assert client.get(f"/api/salary/{member_id}/2024-05").get_json()["data"]["total_salary"] == 16000
    assert client.delete(f"/api/salary/{salary_id}").status_code == 200
    assert client.get(f"/api/salary/{member_id}/2024-05").status_code == 404


def test_statement_includes_transport(client):
    member_id = _seed(client)
    client.post("/api/locations", json={"name": "Office", "hourly_wage": 1500, "type": "office"})
    rec = client.post(
        "/api/attendance/clock-in",
        json={"member_id": member_id, "location": "Office", "date": "2024-05-02", "clock_in": "09:00"},
    ).get_json()["data"]
    client.post(f"/api/attendance/{rec['id']}/clock-out", json={"clock_out": "11:00"})

    body = client.get(f"/api/payroll/{member_id}/2024-05/statement").get_json()["data"]

    assert body["total_salary"] == 3000
    assert body["transport"]["total_fee"] == 500
    assert body["grand_total"] == 3500


def test_invalid_member_fees_do_not_leave_a_location_behind(client):
    payload = {"name": "ClientZ", "hourly_wage": 1000, "type": "client", "member_transport_fees": {"abc": 100}}

    res = client.post("/api/locations", json=payload)
    assert res.status_code == 400
    assert [loc["name"] for loc in client.get("/api/locations").get_json()["data"]] == []

    payload["member_transport_fees"] = {}
    assert client.post("/api/locations", json=payload).status_code == 201


def test_location_update_is_all_or_nothing(client):
    member_id = _seed(client)
    location = client.get("/api/locations").get_json()["data"][0]

    res = client.put(
        f"/api/locations/{location['id']}",
        json={"hourly_wage": 3000, "member_transport_fees": {str(member_id): "lots"}},
    )

    assert res.status_code == 400
    assert client.get(f"/api/locations/{location['id']}").get_json()["data"]["hourly_wage"] == 2000

    res = client.put(f"/api/locations/{location['id']}", json={"member_transport_fees": {str(member_id): 1200}})
    assert res.get_json()["data"]["member_transport_fees"] == {str(member_id): 1200.0}
