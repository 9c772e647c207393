import pytest

from app.models.payment import PaymentTracking

TESTIMONIAL = {
    "name": "Asha Verma",
    "role": "Teacher",
    "content": "The sessions helped me sleep again.",
    "rating": 5,
    "category": "healing",
}

BLOG = {
    "title": "Finding Calm",
    "excerpt": "Five minutes a day.",
    "content": "Long form content.",
    "author": "Claryntia",
}

PACKAGE = {
    "name": "Career Clarity",
    "description": "Three coaching calls",
    "price": 15000,
    "duration": "3 Months",
    "features": ["Weekly call", "  ", "Resume review"],
    "is_popular": True,
}

RESOURCES = [
    ("/api/testimonials", TESTIMONIAL, {"rating": 4}, "Testimonial"),
    ("/api/blogs", BLOG, {"title": "Finding Calm, Again"}, "Blog"),
    ("/api/packages", PACKAGE, {"price": 12000}, "Package"),
]


@pytest.mark.parametrize("path, payload, change, label", RESOURCES)
def test_lifecycle(admin_client, path, payload, change, label):
    created = admin_client.post(path, json=payload)
    assert created.status_code == 201
    record = created.json()["data"]
    record_id = record["id"]

    listed = admin_client.get(path).json()["data"]
    assert [r["id"] for r in listed] == [record_id]

    updated = admin_client.put(f"{path}/{record_id}", json={**payload, **change})
    assert updated.status_code == 200
    for field, value in change.items():
        assert updated.json()["data"][field] == value

    fetched = admin_client.get(f"{path}/{record_id}").json()["data"]
    assert fetched == updated.json()["data"]

    deleted = admin_client.delete(f"{path}/{record_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": f"{label} deleted"}

    assert admin_client.get(path).json()["data"] == []
    assert admin_client.get(f"{path}/{record_id}").status_code == 404


@pytest.mark.parametrize("path, payload, change, label", RESOURCES)
def test_writes_require_admin(client, path, payload, change, label):
    assert client.post(path, json=payload).status_code == 401
    assert client.put(f"{path}/some-id", json=payload).status_code == 401
    assert client.delete(f"{path}/some-id").status_code == 401


@pytest.mark.parametrize("path", ["/api/testimonials", "/api/blogs", "/api/packages"])
def test_reads_are_public(client, path):
    response = client.get(path)
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": [], "message": None}


def test_missing_record_on_update(admin_client):
    response = admin_client.put("/api/packages/does-not-exist", json=PACKAGE)
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Package not found"}


def test_package_features_drop_blanks(admin_client):
    data = admin_client.post("/api/packages", json=PACKAGE).json()["data"]
    assert data["features"] == ["Weekly call", "Resume review"]


def test_testimonial_rating_out_of_range(admin_client):
    response = admin_client.post("/api/testimonials", json={**TESTIMONIAL, "rating": 6})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "rating"


def test_payment_tracking_lifecycle(client, admin_credentials):
    created = client.post("/api/payments", json={
        "name": "Priya Sharma",
        "email": "priya@example.com",
        "phone": "9876543210",
        "package_id": "healing-basic",
        "package_name": "Healing Session",
        "amount": 15000,
        "payment_method": "upi",
    })
    assert created.status_code == 201
    payment_id = created.json()["data"]["id"]
    assert created.json()["data"]["status"] == "pending"

    # Reading and updating are back-office only
    assert client.get("/api/payments").status_code == 401
    assert client.patch(f"/api/payments/{payment_id}/status", json={"status": "success"}).status_code == 401

    client.post("/api/auth/login", json=admin_credentials)
    updated = client.patch(f"/api/payments/{payment_id}/status", json={"status": "success"})
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "success"

    bad_status = client.patch(f"/api/payments/{payment_id}/status", json={"status": "completed"})
    assert bad_status.status_code == 400

    assert client.delete(f"/api/payments/{payment_id}").status_code == 200
    assert client.get("/api/payments").json()["data"] == []


PUBLIC_PAYMENT = {
    "name": "Priya Sharma",
    "email": "priya@example.com",
    "phone": "9876543210",
    "package_id": "mentoria-pro",
    "package_name": "Mentoria Pro",
    "amount": 4999,
    "payment_method": "upi",
}


def test_public_payment_cannot_choose_status(client, db):
    response = client.post("/api/payments", json={**PUBLIC_PAYMENT, "status": "success"})
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "pending"

    stored = db.query(PaymentTracking).one()
    assert stored.status == "pending"


def test_admin_put_can_set_payment_status(admin_client):
    created = admin_client.post("/api/payments", json=PUBLIC_PAYMENT).json()["data"]
    response = admin_client.put(
        f"/api/payments/{created['id']}",
        json={**PUBLIC_PAYMENT, "status": "failed"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "failed"


@pytest.mark.parametrize(
    "path, payload, field, size",
    [
        ("/api/payments", PUBLIC_PAYMENT, "name", 201),
        ("/api/payments", PUBLIC_PAYMENT, "phone", 31),
        ("/api/payments", PUBLIC_PAYMENT, "coupon_code", 51),
        ("/api/testimonials", TESTIMONIAL, "role", 201),
        ("/api/blogs", BLOG, "title", 301),
        ("/api/packages", PACKAGE, "duration", 101),
    ],
)
def test_oversized_fields_are_rejected(admin_client, db, path, payload, field, size):
    response = admin_client.post(path, json={**payload, field: "9" * size})
    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == [field]
    assert db.query(PaymentTracking).count() == 0
