from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from weddingplanner.auth import create_access_token, hash_password
from weddingplanner.main import app
from weddingplanner.models import (
    BOOKING_PENDING,
    ROLE_ADMIN,
    ROLE_CLIENT,
    ROLE_VENDOR,
    Booking,
    Client,
    Service,
    User,
    Vendor,
)

PASSWORD = "password123"


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture(autouse=True)
def mock_send_email():
    """Outbound email never leaves the process in API tests"""
    with patch("weddingplanner.email_service.send_email", new_callable=AsyncMock) as mock:
        mock.return_value = {"id": "<test@weddingplanner.com>", "transport": "smtp"}
        yield mock


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


@pytest.fixture
def make_client(db):
    def _make(email="client@example.com", first_name="Hana", last_name="Bekele"):
        user = User(
            email=email,
            password_hash=hash_password(PASSWORD),
            first_name=first_name,
            last_name=last_name,
            role=ROLE_CLIENT,
        )
        db.add(user)
        db.flush()
        db.add(Client(user_id=user.id))
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_vendor(db):
    def _make(
        email="vendor@example.com",
        first_name="Abebe",
        business_name="Addis Blooms",
        category="flowers",
        approved=True,
    ):
        user = User(
            email=email,
            password_hash=hash_password(PASSWORD),
            first_name=first_name,
            last_name="Tesfaye",
            role=ROLE_VENDOR,
        )
        db.add(user)
        db.flush()
        db.add(
            Vendor(
                user_id=user.id,
                business_name=business_name,
                category=category,
                is_approved=approved,
                approved_at=datetime.utcnow() if approved else None,
            )
        )
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_admin(db):
    def _make(email="admin@example.com"):
        user = User(
            email=email,
            password_hash=hash_password(PASSWORD),
            first_name="Admin",
            role=ROLE_ADMIN,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_service(db):
    def _make(vendor_user: User, name="Bridal Bouquet", price=2500.0, category="flowers", active=True):
        service = Service(
            vendor_id=vendor_user.vendor.id,
            name=name,
            description=f"{name} package",
            category=category,
            price=price,
            is_active=active,
        )
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    return _make


@pytest.fixture
def make_booking(db):
    def _make(client_user: User, service: Service, status=BOOKING_PENDING):
        booking = Booking(
            service_id=service.id,
            client_id=client_user.client.id,
            event_date=datetime.utcnow() + timedelta(days=30),
            location="Addis Ababa",
            attendees=120,
            special_requests="",
            status=status,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make
