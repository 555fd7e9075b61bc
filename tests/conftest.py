import os

# Configure the app for tests before any weddingplanner module reads config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAIL_TRANSPORT"] = "smtp"
os.environ["CHAPA_SECRET_KEY"] = "CHASECK_TEST-key"
os.environ["CHAPA_WEBHOOK_SECRET"] = "chapa-webhook-secret"
os.environ["FRONTEND_URL"] = "http://localhost:5173"
os.environ["SECURITY_HEADERS_ENABLED"] = "true"

import pytest  # noqa: E402

from weddingplanner.database import Base, SessionLocal, engine  # noqa: E402


@pytest.fixture
def db():
    """Fresh in-memory schema per test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
