from __future__ import annotations

from datetime import date, datetime

from gym_membership.core.enums import MemberStatus


def test_health_reports_database_state(client, store):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "OK"
    assert resp.get_json()["database"] is True


def test_api_returns_503_when_store_down(client, store):
    store.conn.available = False

    resp = client.post("/api/payments", json={"member_id": 1, "amount": 10})

    assert resp.status_code == 503
    assert "database" in resp.get_json()["error"]
    assert store.payments.rows == []
    # Health stays up while degraded.
    assert client.get("/health").status_code == 200


def test_register_member_then_duplicate(client):
    resp = client.post("/api/members", json={"name": "John", "email": "john@example.com"})
    assert resp.status_code == 201
    assert resp.get_json()["message"] == "Member registered successfully"

    dup = client.post("/api/members", json={"name": "John", "email": "JOHN@EXAMPLE.COM"})
    assert dup.status_code == 409
    assert dup.get_json()["error"] == "Email already registered"


def test_register_member_requires_fields(client):
    resp = client.post("/api/members", json={"name": "John"})
    assert resp.status_code == 400


def test_update_and_delete_member(client, store):
    member = store.members.add("John", "john@example.com")

    resp = client.put(f"/api/members/{member.member_id}", json={"name": "John", "email": "john@example.com", "status": "inactive"})
    assert resp.status_code == 200
    assert store.members.get_by_id(member.member_id).status == MemberStatus.INACTIVE

    assert client.delete(f"/api/members/{member.member_id}").status_code == 200
    assert client.get(f"/api/members/{member.member_id}").status_code == 404


def test_create_plan_and_list(client):
    resp = client.post("/api/plans", json={"name": "Premium", "duration_months": 12, "price": 49.99})
    assert resp.status_code == 201

    plans = client.get("/api/plans").get_json()
    assert plans[0]["name"] == "Premium"
    assert plans[0]["price"] == "49.99"


def test_record_payment(client, store):
    member = store.members.add("John", "john@example.com")
    plan = store.plans.add("Monthly", 1)

    resp = client.post("/api/payments", json={"member_id": member.member_id, "plan_id": plan.plan_id, "amount": 49.99})

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["member_id"] == member.member_id
    assert body["amount"] == "49.99"
    assert body["message"] == "Payment recorded successfully"
    assert len(store.payments.rows) == 1


def test_record_payment_missing_fields(client):
    assert client.post("/api/payments", json={"amount": 10}).status_code == 400
    assert client.post("/api/payments", json={"member_id": 1}).status_code == 400
    assert client.post("/api/payments", json={"member_id": 1, "amount": -5}).status_code == 400


def test_record_payment_unknown_plan(client, store):
    member = store.members.add("John", "john@example.com")

    resp = client.post("/api/payments", json={"member_id": member.member_id, "plan_id": 77, "amount": 10})

    assert resp.status_code == 404


def test_subscription_endpoint(client, store):
    member = store.members.add("John", "john@example.com")
    store.payments.add(member.member_id, "49.99", paid_at=datetime(2000, 1, 1), expiry=date(2000, 2, 1))

    body = client.get(f"/api/members/{member.member_id}/subscription").get_json()

    assert body["active"] is False
    assert body["expiry_date"] == "2000-02-01"


def test_checkin_checkout_flow(client, store):
    member = store.members.add("John", "john@example.com")

    checkin = client.post(f"/api/attendance/checkin/{member.member_id}")
    assert checkin.status_code == 201
    attendance_id = checkin.get_json()["id"]

    again = client.post(f"/api/attendance/checkin/{member.member_id}")
    assert again.status_code == 409

    checkout = client.post(f"/api/attendance/checkout/{attendance_id}")
    assert checkout.status_code == 200
    assert checkout.get_json()["message"] == "Check-out recorded successfully"
    assert checkout.get_json()["durationMinutes"] == 0

    twice = client.post(f"/api/attendance/checkout/{attendance_id}")
    assert twice.status_code == 400

    history = client.get(f"/api/attendance/{member.member_id}").get_json()
    assert len(history) == 1
    assert history[0]["duration_minutes"] == 0


def test_checkin_refused_for_suspended_member(client, store):
    member = store.members.add("John", "john@example.com", status=MemberStatus.SUSPENDED)

    resp = client.post(f"/api/attendance/checkin/{member.member_id}")

    assert resp.status_code == 403
    assert store.attendance.list_all() == []


def test_checkout_missing_record(client):
    resp = client.post("/api/attendance/checkout/12345")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Attendance record not found"


def test_reports(client, store):
    member = store.members.add("John", "john@example.com")
    store.payments.add(member.member_id, "49.99", paid_at=datetime(2025, 12, 8), expiry=None)

    revenue = client.get("/api/reports/revenue").get_json()
    assert revenue["total"] == "49.99"

    client.post(f"/api/attendance/checkin/{member.member_id}")
    stats = client.get("/api/reports/attendance?date=2025-12-08").get_json()
    assert stats["total_checkins"] == 1
    assert stats["open_sessions"] == 1

    assert client.get("/api/reports/attendance?date=bad").status_code == 400


def test_unknown_route_is_json(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "error" in resp.get_json()
