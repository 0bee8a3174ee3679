# tests/conftest.py
from datetime import datetime, timezone

import pytest

from contact_api import create_app
from contact_api.config import ContactSettings
from contact_api.utils.email_sender import RecordingMailer

FIXED_NOW = datetime(2026, 7, 4, 20, 30, tzinfo=timezone.utc)
NOW_MS = int(FIXED_NOW.timestamp() * 1000)


def valid_payload(**overrides):
    data = {
        "name": "Jordan Smith",
        "email": "jordan@example.com",
        "phone": "208-555-0100",
        "business": "Smith Court Surfaces",
        "role": "Owner",
        "message": "We resurface tennis and pickleball courts around Boise.",
        "fax_number": "",
        "_timestamp": str(NOW_MS - 10_000),
    }
    data.update(overrides)
    return data


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def app(mailer):
    app = create_app(
        mailer=mailer, clock=lambda: FIXED_NOW, settings=ContactSettings()
    )
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
