from datetime import datetime, timedelta, timezone

import jwt
import mongomock
import pytest
from fastapi.testclient import TestClient

import database
from main import app

JWT_SECRET = "test-secret-for-admin-tokens-0123456789"


def make_token(secret=JWT_SECRET, expires_in=timedelta(hours=1)):
    payload = {"sub": "admin@example.com", "role": "admin", "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", JWT_SECRET)


@pytest.fixture
def mongo(monkeypatch):
    db = mongomock.MongoClient()["furniture_test"]
    monkeypatch.setattr(database, "db", db)
    return db


@pytest.fixture
def client(mongo):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def submission_payload():
    return {
        "name": "  Abebe Kebede ",
        "email": " abebe@example.com ",
        "phone": " +251 911 000000 ",
        "projectType": "kitchen",
        "description": "Walnut kitchen cabinets with soft-close drawers",
        "budget": "50k-100k",
        "timeline": "1-3 months",
        "language": "am",
    }


@pytest.fixture
def project_payload():
    return {
        "titleEn": "Modern Oak Dining Table",
        "titleAm": "ዘመናዊ ኦክ የመግቢያ ጠረጴዛ",
        "descriptionEn": "Handcrafted solid oak dining table with CNC precision joints",
        "descriptionAm": "በእጅ የተሠራ ጠንካራ ኦክ የመግቢያ ጠረጴዛ",
        "category": "living",
        "materials": ["Solid Oak", "Steel Legs", "Polyurethane Finish"],
        "dimensions": {"length": "180", "width": "90", "height": "75", "unit": "cm"},
        "images": ["/projects/dining-table-1.jpg", "/projects/dining-table-2.jpg"],
        "featured": True,
    }
