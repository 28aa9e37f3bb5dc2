import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from unittest.mock import patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.facility_settings import FacilitySettings


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str = "billing@example.com", password: str = "secret") -> dict:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def create_customer(client: TestClient, headers: dict, name: str, **fields) -> int:
    payload = {"name": name, "monthly_rate": "1200.00"}
    payload.update(fields)
    resp = client.post("/customers", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def generate(client: TestClient, headers: dict, customer_ids, service_month="2025-01-01"):
    return client.post(
        "/invoices/generate",
        json={
            "service_month": service_month,
            "invoice_date": "2025-01-31",
            "due_date": "2025-02-15",
            "customer_ids": customer_ids,
        },
        headers=headers,
    )


def test_generate_invoices_returns_count_and_numbers():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(
        client,
        headers,
        "Ada",
        daily_rate="40.00",
        daily_rate_days=5,
        additional_line_1_desc="Pharmacy",
        additional_line_1_amount="75.00",
    )
    bea = create_customer(client, headers, "Bea")

    resp = generate(client, headers, [ada, bea])
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["count"] == 2
    assert data["invoice_numbers"] == ["CGAR-2025-001", "CGAR-2025-002"]

    invoices = client.get("/invoices?sort_by=invoice_number&sort_order=asc", headers=headers).json()
    assert [inv["customer_name"] for inv in invoices] == ["Ada", "Bea"]
    assert Decimal(invoices[0]["total_amount"]) == Decimal("1475.00")
    assert Decimal(invoices[0]["daily_rate_total"]) == Decimal("200.00")
    assert invoices[0]["status"] == "draft"
    assert invoices[1]["daily_rate_total"] is None


def test_generate_twice_reports_nothing_to_generate():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    assert generate(client, headers, [ada]).json()["count"] == 1

    resp = generate(client, headers, [ada])
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is False
    assert data["count"] == 0
    assert data["message"] == "All invoices already exist for this service month"
    assert data["skipped_customer_ids"] == [ada]
    assert len(client.get("/invoices", headers=headers).json()) == 1


def test_generate_with_no_customers_is_not_an_error():
    client = TestClient(app)
    headers = register_and_login(client)
    resp = generate(client, headers, [])
    assert resp.status_code == 200
    assert resp.json()["success"] is False
    assert resp.json()["message"] == "No active customers selected"


def test_generate_uses_default_dates():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    resp = client.post("/invoices/generate", json={"customer_ids": [ada]}, headers=headers)
    assert resp.status_code == 200
    today = date.today()
    assert resp.json()["service_month"] == today.replace(day=1).isoformat()
    invoice = client.get("/invoices", headers=headers).json()[0]
    assert invoice["invoice_date"] == today.isoformat()
    assert invoice["due_date"].endswith("-15")


def test_generation_defaults_endpoint():
    client = TestClient(app)
    headers = register_and_login(client)
    resp = client.get("/invoices/defaults?reference_date=2025-01-20", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {
        "service_month": "2025-01-01",
        "invoice_date": "2025-01-20",
        "due_date": "2025-02-15",
        "service_month_label": "January 2025",
        "invoice_date_label": "January 20, 2025",
        "due_date_label": "February 15, 2025",
    }


def test_next_number_preview():
    client = TestClient(app)
    headers = register_and_login(client)
    assert client.get("/invoices/next-number?year=2025", headers=headers).json()["invoice_number"] == "CGAR-2025-001"
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    assert client.get("/invoices/next-number?year=2025", headers=headers).json()["invoice_number"] == "CGAR-2025-002"


def test_filter_by_status_and_month():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada], service_month="2025-01-01")
    generate(client, headers, [ada], service_month="2025-02-01")
    invoices = client.get("/invoices", headers=headers).json()
    assert [inv["service_month"] for inv in invoices] == ["2025-02-01", "2025-01-01"]

    client.put(f"/invoices/{invoices[0]['id']}/status", json={"status": "paid"}, headers=headers)
    paid = client.get("/invoices?status=paid", headers=headers).json()
    assert [inv["id"] for inv in paid] == [invoices[0]["id"]]
    january = client.get("/invoices?service_month=2025-01-15", headers=headers).json()
    assert [inv["id"] for inv in january] == [invoices[1]["id"]]


def test_invalid_sort_rejected():
    client = TestClient(app)
    headers = register_and_login(client)
    assert client.get("/invoices?sort_by=nope", headers=headers).status_code == 400
    assert client.get("/invoices?sort_order=sideways", headers=headers).status_code == 400


def test_status_can_move_between_any_states():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    invoice_id = client.get("/invoices", headers=headers).json()[0]["id"]

    for new_status in ("paid", "draft", "sent", "paid", "sent"):
        resp = client.put(f"/invoices/{invoice_id}/status", json={"status": new_status}, headers=headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == new_status


def test_unknown_status_rejected():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    invoice_id = client.get("/invoices", headers=headers).json()[0]["id"]
    resp = client.put(f"/invoices/{invoice_id}/status", json={"status": "void"}, headers=headers)
    assert resp.status_code == 422


def test_patch_invoice_notes_and_due_date():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    invoice = client.get("/invoices", headers=headers).json()[0]
    resp = client.patch(
        f"/invoices/{invoice['id']}",
        json={"due_date": "2025-02-28", "notes": "Family pays by check"},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["due_date"] == "2025-02-28"
    assert data["notes"] == "Family pays by check"
    assert data["total_amount"] == invoice["total_amount"]


def test_patch_invoice_can_clear_notes():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    invoice_id = client.get("/invoices", headers=headers).json()[0]["id"]
    client.patch(f"/invoices/{invoice_id}", json={"notes": "Call family first"}, headers=headers)

    resp = client.patch(f"/invoices/{invoice_id}", json={"notes": None, "status": None}, headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["notes"] is None
    assert data["status"] == "draft"
    assert data["due_date"] == "2025-02-15"


def test_storage_failure_message_is_returned():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    invoice_id = client.get("/invoices", headers=headers).json()[0]["id"]

    with patch.object(Session, "commit", side_effect=OperationalError("UPDATE", {}, Exception("database is locked"))):
        resp = client.put(f"/invoices/{invoice_id}/status", json={"status": "sent"}, headers=headers)
    assert resp.status_code == 500
    assert "database is locked" in resp.json()["detail"]
    assert client.get(f"/invoices/{invoice_id}", headers=headers).json()["status"] == "draft"


def test_generate_reports_storage_failure_message():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")

    with patch.object(Session, "commit", side_effect=OperationalError("INSERT", {}, Exception("disk is full"))):
        resp = generate(client, headers, [ada])
    assert resp.status_code == 500
    assert "disk is full" in resp.json()["detail"]
    assert client.get("/invoices", headers=headers).json() == []


def test_get_and_delete_invoice():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    invoice_id = client.get("/invoices", headers=headers).json()[0]["id"]

    assert client.get(f"/invoices/{invoice_id}", headers=headers).status_code == 200
    resp = client.delete(f"/invoices/{invoice_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == invoice_id
    assert client.get(f"/invoices/{invoice_id}", headers=headers).status_code == 404
    assert client.delete(f"/invoices/{invoice_id}", headers=headers).status_code == 404


def test_deleted_invoice_month_can_be_regenerated():
    client = TestClient(app)
    headers = register_and_login(client)
    ada = create_customer(client, headers, "Ada")
    generate(client, headers, [ada])
    invoice_id = client.get("/invoices", headers=headers).json()[0]["id"]
    client.delete(f"/invoices/{invoice_id}", headers=headers)

    data = generate(client, headers, [ada]).json()
    assert data["count"] == 1
    assert data["invoice_numbers"] == ["CGAR-2025-002"]


def test_print_batch_orders_by_customer_and_includes_facility():
    client = TestClient(app)
    headers = register_and_login(client)
    db = SessionLocal()
    db.add(
        FacilitySettings(
            name="Sunrise Care Home",
            address="500 Main St",
            city_state_zip="Springfield, IL 62701",
            thank_you_note="Thank you!",
        )
    )
    db.commit()
    db.close()

    zed = create_customer(client, headers, "Zed", monthly_rate="3000.00")
    amy = create_customer(
        client,
        headers,
        "Amy",
        daily_rate="40.00",
        daily_rate_days=5,
        additional_line_1_desc="Pharmacy",
        additional_line_1_amount="75.00",
        additional_line_2_amount="10.00",
    )
    generate(client, headers, [zed, amy])
    ids = ",".join(str(inv["id"]) for inv in client.get("/invoices", headers=headers).json())

    resp = client.get(f"/invoices/print?ids={ids}", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["facility"]["name"] == "Sunrise Care Home"
    assert [item["invoice"]["customer_name"] for item in data["invoices"]] == ["Amy", "Zed"]

    amy_print = data["invoices"][0]
    assert [line["description"] for line in amy_print["lines"]] == [
        "Monthly Care Services",
        "Daily Care Services (5 days @ $40.00)",
        "Pharmacy",
    ]
    assert amy_print["total_display"] == "$1,485.00"
    assert amy_print["service_month_label"] == "January 2025"
    assert amy_print["due_date_label"] == "February 15, 2025"


def test_print_requires_ids():
    client = TestClient(app)
    headers = register_and_login(client)
    assert client.get("/invoices/print", headers=headers).status_code == 400
    assert client.get("/invoices/print?ids=abc", headers=headers).status_code == 400
