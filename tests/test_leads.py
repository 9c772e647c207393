import asyncio

from sqlalchemy.exc import OperationalError

from app.config import settings
from app.models.contact import ContactSubmission
from app.routers import leads
from app.services import email_service, lead_service


def test_submit_lead(client, db, monkeypatch):
    sent = []

    async def fake_notify(name, email, phone=None, message=None):
        sent.append((name, email, phone, message))

    monkeypatch.setattr(leads, "send_lead_notification", fake_notify)

    response = client.post("/submit-lead", json={
        "name": "  Rohan  ",
        "email": "rohan@example.com",
        "phone": "",
        "message": "Interested in mentoring",
    })
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Lead captured successfully"}

    lead = db.query(ContactSubmission).one()
    assert lead.name == "Rohan"
    assert lead.phone is None
    assert lead.source == "lead"
    assert sent == [("Rohan", "rohan@example.com", None, "Interested in mentoring")]


def test_lead_validation_errors(client, db):
    response = client.post("/submit-lead", json={"name": " ", "email": "nope"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Invalid data"
    assert {error["field"] for error in body["errors"]} == {"name", "email"}
    assert db.query(ContactSubmission).count() == 0


def test_contact_form(client, admin_credentials):
    payload = {
        "name": "Neha",
        "email": "neha@example.com",
        "phone": "9876543210",
        "purpose": "Healing",
        "message": "When are you available?",
    }
    response = client.post("/api/contact", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Contact form submitted successfully"

    client.post("/api/auth/login", json=admin_credentials)
    listed = client.get("/api/contact").json()["data"]
    assert [s["id"] for s in listed] == [body["id"]]
    assert listed[0]["source"] == "contact"
    assert listed[0]["purpose"] == "Healing"


def test_contact_form_requires_every_field(client):
    response = client.post("/api/contact", json={"name": "Neha", "email": "neha@example.com"})
    assert response.status_code == 400
    assert {error["field"] for error in response.json()["errors"]} == {"phone", "purpose", "message"}


def test_checkout_lead_is_best_effort(client, db, razorpay_orders, monkeypatch):
    def broken_insert(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(lead_service, "create_submission", broken_insert)
    response = client.post("/api/checkout/create-order", json={
        "planId": "healing-basic",
        "name": "Priya Sharma",
        "email": "priya@example.com",
        "phone": "9876543210",
    })
    assert response.status_code == 200
    assert db.query(ContactSubmission).count() == 0


def test_lead_email_body_escapes_input():
    body = email_service.build_lead_body("<b>Eve</b>", "eve@example.com", None, "hi & bye")
    assert "&lt;b&gt;Eve&lt;/b&gt;" in body
    assert "hi &amp; bye" in body
    assert "<strong>Phone:</strong> N/A" in body


def test_notification_skipped_without_recipient(monkeypatch):
    calls = []

    async def fake_send(message):
        calls.append(message)

    monkeypatch.setattr(settings, "lead_notify_email", None)
    monkeypatch.setattr(email_service.fast_mail, "send_message", fake_send)
    asyncio.run(email_service.send_lead_notification("Eve", "eve@example.com"))
    assert calls == []


def test_lead_phone_longer_than_column(client, db):
    response = client.post(
        "/submit-lead",
        json={"name": "Priya", "email": "priya@example.com", "phone": "9" * 31},
    )
    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["phone"]
    assert db.query(ContactSubmission).count() == 0
