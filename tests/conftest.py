"""
Pytest configuration and shared fixtures for tests
"""

from datetime import time, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.pool import StaticPool

from app import create_app
from config import Config
from models import db
from models.service import Service
from models.user import User
from scheduling.dates import day_of_week, utc_today
from scheduling.schedule_store import add_template

MONDAY = 1


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,  # Keep single connection for in-memory DB
    }
    NOTIFY_ASYNC = False
    BCRYPT_ROUNDS = 4
    SMTP_HOST = None
    LOG_LEVEL = "WARNING"


def next_weekday(dow: int, start=None):
    """First date strictly after ``start`` (default: today) whose day_of_week is ``dow``."""
    day = (start or utc_today()) + timedelta(days=1)
    while day_of_week(day) != dow:
        day += timedelta(days=1)
    return day


@pytest.fixture(name="app")
def app_fixture():
    """Flask app bound to an in-memory SQLite database"""
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(name="client")
def client_fixture(app):
    return app.test_client()


@pytest.fixture(name="make_user")
def make_user_fixture(app):
    counter = {"n": 0}

    def _make(email=None, name="Test User"):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash="not-a-real-hash",
            name=name,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture(name="user")
def user_fixture(make_user):
    return make_user(email="alice@example.com", name="Alice")


@pytest.fixture(name="haircut")
def haircut_fixture(app):
    """Haircut with Monday 09:00 and 10:00 slots"""
    service = Service(name="Haircut", description="Professional haircut", price=Decimal("50.00"), duration_minutes=60)
    db.session.add(service)
    db.session.commit()
    add_template(service.id, MONDAY, "09:00", "10:00")
    add_template(service.id, MONDAY, "10:00", "11:00")
    return service


@pytest.fixture(name="monday")
def monday_fixture():
    return next_weekday(MONDAY)


@pytest.fixture(name="today_service")
def today_service_fixture(app):
    """Service offering a 09:00 slot on today's weekday"""
    service = Service(name="Massage", price=Decimal("80.00"), duration_minutes=60)
    db.session.add(service)
    db.session.commit()
    add_template(service.id, day_of_week(utc_today()), time(9, 0), time(10, 0))
    return service
