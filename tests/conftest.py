"""
Shared fixtures.

Environment variables are set before anything under `app` is imported:
Settings, the database engine, the Razorpay client and the mail config
are all built at import time.
"""
import os

os.environ.setdefault("DATABASE_URI", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "rzp_test_secret")
os.environ.setdefault("SANITY_PROJECT_ID", "testproj")
os.environ.setdefault("SANITY_DATASET", "production")
os.environ.setdefault("MAIL_SUPPRESS_SEND", "true")
os.environ.setdefault("UPI_VPA", "fallback@upi")

import copy
import hashlib
import hmac

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.core.rate_limiter import limiter
from app.main import app
from app.services import auth_service, razorpay_service
from app.services.cms_service import SanityClient, CMSError, get_cms_client

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ── Fake CMS ──────────────────────────────────────────────────────────────────

PLANS = [
    {
        "planId": "healing-basic",
        "title": "Healing Session",
        "description": "One-on-one healing session",
        "price": 15000,
        "duration": "60 mins",
        "features": ["Energy reading", "Follow-up call"],
        "isPopular": True,
        "category": "healing",
        "paymentType": "razorpay",
        "order": 1,
        "image": {"asset": {"_ref": "image-abc123-800x600-png"}},
    },
    {
        "planId": "mentoria-pro",
        "title": "Mentoria Pro",
        "price": 4999,
        "features": None,
        "isPopular": None,
        "category": "mentoria",
        "paymentType": "upi",
        "order": 2,
    },
]

COUPONS = [
    {"code": "SAVE10", "discountType": "percentage", "discountAmount": 10,
     "expiryDate": None, "isActive": True},
    {"code": "FLAT500", "discountType": "flat", "discountAmount": 500,
     "expiryDate": "2999-12-31T23:59:59Z", "isActive": True},
    {"code": "OLD", "discountType": "percentage", "discountAmount": 50,
     "expiryDate": "2020-01-01T00:00:00Z", "isActive": True},
    {"code": "PAUSED", "discountType": "percentage", "discountAmount": 20,
     "expiryDate": None, "isActive": False},
    {"code": "BROKEN", "discountType": "percentage", "discountAmount": "lots",
     "expiryDate": None, "isActive": True},
]

TESTIMONIALS = [
    {"name": "Asha", "role": "Teacher", "content": "Life changing.", "rating": 5,
     "category": "healing"},
    {"name": "Ravi", "content": "Got the job.", "rating": 4, "category": "career"},
    {"name": "Meera", "content": "Felt lighter.", "rating": 5},
]

POSTS = [
    {
        "_id": "post-1",
        "title": "Finding Calm",
        "slug": "finding-calm",
        "excerpt": "Five minutes a day.",
        "publishedAt": "2026-01-05T10:00:00Z",
        "mainImage": {
            "asset": {"_id": "image-xyz789-1200x630-jpg",
                      "url": "https://cdn.sanity.io/images/testproj/production/xyz789-1200x630.jpg"},
            "alt": "A quiet lake",
        },
    },
]

SITE_SETTINGS = {
    "siteTitle": "Claryntia",
    "description": "Healing and career mentoring",
    "upiId": "claryntia@okhdfc",
    "upiQrCode": None,
}


class FakeCMS(SanityClient):
    """
    Answers the GROQ queries the app sends from in-memory documents.
    `down` makes every query fail; `down_for` fails only queries on one
    document type.
    """

    def __init__(self):
        super().__init__(project_id="testproj", dataset="production", api_version="2024-01-24")
        self.plans = copy.deepcopy(PLANS)
        self.coupons = copy.deepcopy(COUPONS)
        self.testimonials = copy.deepcopy(TESTIMONIALS)
        self.posts = copy.deepcopy(POSTS)
        self.site_settings = copy.deepcopy(SITE_SETTINGS)
        self.down = False
        self.down_for = None
        self.calls = []

    def fetch(self, query, params=None):
        params = params or {}
        self.calls.append((query, params))
        doc_type = query.split('_type == "', 1)[1].split('"', 1)[0]
        if self.down or self.down_for == doc_type:
            raise CMSError("CMS unreachable")

        if doc_type == "pricing":
            if "planId" in params:
                return next((p for p in self.plans if p["planId"] == params["planId"]), None)
            if "category" in params:
                return [p for p in self.plans if p.get("category") == params["category"]]
            return list(self.plans)
        if doc_type == "coupon":
            return next(
                (c for c in self.coupons if c["code"] == params["code"] and c["isActive"]),
                None,
            )
        if doc_type == "testimonial":
            category = params.get("category")
            if not category:
                return list(self.testimonials)
            return [
                t for t in self.testimonials
                if t.get("category") == category
                or (category == "healing" and "category" not in t)
            ]
        if doc_type == "post":
            return list(self.posts)
        if doc_type == "siteSettings":
            return self.site_settings
        return None


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def disable_rate_limits():
    limiter.enabled = False
    limiter.reset()
    yield
    limiter.enabled = True


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory():
    """For code that opens its own sessions instead of using get_db."""
    return TestingSessionLocal


@pytest.fixture
def cms():
    return FakeCMS()


@pytest.fixture
def client(cms):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cms_client] = lambda: cms
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_credentials(db):
    auth_service.create_or_reset_admin(db, "admin", "correct-horse-battery")
    return {"username": "admin", "password": "correct-horse-battery"}


@pytest.fixture
def admin_client(client, admin_credentials):
    response = client.post("/api/auth/login", json=admin_credentials)
    assert response.status_code == 200
    return client


@pytest.fixture
def razorpay_orders(monkeypatch):
    """Captures every order sent to Razorpay and answers like the real API."""
    created = []

    def fake_create(data=None, **kwargs):
        created.append(data)
        return {
            "id": f"order_test{len(created)}",
            "entity": "order",
            "amount": data["amount"],
            "currency": data["currency"],
            "receipt": data["receipt"],
            "status": "created",
        }

    monkeypatch.setattr(razorpay_service.client.order, "create", fake_create)
    return created


@pytest.fixture
def sign():
    """Signs like Razorpay: HMAC-SHA256 of "order_id|payment_id" with the key secret."""
    def _sign(order_id: str, payment_id: str) -> str:
        return hmac.new(
            settings.razorpay_key_secret.encode("utf-8"),
            f"{order_id}|{payment_id}".encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
    return _sign
