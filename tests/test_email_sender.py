# tests/test_email_sender.py
import pytest
from botocore.exceptions import ClientError

from contact_api.utils.email_sender import (
    EmailConfigError,
    EmailDispatchError,
    OutgoingEmail,
    RecordingMailer,
    SendGridMailer,
    SesMailer,
    mailer_from_env,
)


def make_email(**overrides):
    data = dict(
        to=["info@hardcourtcollective.com", "bryce@gullstack.com"],
        from_email="notifications@hardcourtcollective.com",
        from_name="Hard Court Collective",
        subject="New Lead",
        body_text="plain",
        body_html="<p>html</p>",
        reply_to="jordan@example.com",
    )
    data.update(overrides)
    return OutgoingEmail(**data)


class FakeResponse:
    def __init__(self, status_code, headers=None):
        self.status_code = status_code
        self.headers = headers or {}


class FakeSendGridClient:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.messages = []

    def send(self, message):
        self.messages.append(message)
        if self.exc:
            raise self.exc
        return self.response


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("EMAIL_PROVIDER", "SENDGRID_API_KEY", "AWS_REGION", "AWS_ACCESS_KEY_ID"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_sendgrid_builds_one_message_for_all_recipients():
    mailer = SendGridMailer("SG.test")
    mailer.client = FakeSendGridClient(FakeResponse(202, {"X-Message-Id": "abc123"}))

    assert mailer.send(make_email()) == "abc123"

    payload = mailer.client.messages[0].get()
    tos = [t["email"] for t in payload["personalizations"][0]["to"]]
    assert tos == ["info@hardcourtcollective.com", "bryce@gullstack.com"]
    assert payload["from"] == {
        "email": "notifications@hardcourtcollective.com",
        "name": "Hard Court Collective",
    }
    assert payload["reply_to"]["email"] == "jordan@example.com"
    types = [c["type"] for c in payload["content"]]
    assert types == ["text/plain", "text/html"]


def test_sendgrid_error_status_raises():
    mailer = SendGridMailer("SG.test")
    mailer.client = FakeSendGridClient(FakeResponse(500))
    with pytest.raises(EmailDispatchError):
        mailer.send(make_email())


def test_sendgrid_exception_is_wrapped():
    boom = RuntimeError("HTTP Error 401: Unauthorized")
    mailer = SendGridMailer("SG.test")
    mailer.client = FakeSendGridClient(exc=boom)
    with pytest.raises(EmailDispatchError) as info:
        mailer.send(make_email())
    assert info.value.__cause__ is boom


class FakeSesClient:
    def __init__(self, exc=None):
        self.exc = exc
        self.calls = []

    def send_email(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc:
            raise self.exc
        return {"MessageId": "ses-1"}


def test_ses_send():
    mailer = SesMailer("us-west-2")
    mailer.client = FakeSesClient()
    assert mailer.send(make_email()) == "ses-1"
    call = mailer.client.calls[0]
    assert call["Source"] == "Hard Court Collective <notifications@hardcourtcollective.com>"
    assert call["Destination"]["ToAddresses"] == [
        "info@hardcourtcollective.com",
        "bryce@gullstack.com",
    ]
    assert call["ReplyToAddresses"] == ["jordan@example.com"]
    assert call["Message"]["Body"]["Html"]["Data"] == "<p>html</p>"


def test_ses_client_error_raises():
    err = ClientError(
        {"Error": {"Code": "MessageRejected", "Message": "Email address is not verified."}},
        "SendEmail",
    )
    mailer = SesMailer("us-west-2")
    mailer.client = FakeSesClient(exc=err)
    with pytest.raises(EmailDispatchError, match="not verified"):
        mailer.send(make_email())


def test_recording_mailer_fail_on():
    mailer = RecordingMailer(fail_on={2})
    mailer.send(make_email())
    with pytest.raises(EmailDispatchError):
        mailer.send(make_email())
    assert mailer.attempts == 2
    assert len(mailer.sent) == 1


def test_env_prefers_sendgrid_key(clean_env):
    clean_env.setenv("SENDGRID_API_KEY", "SG.test")
    assert isinstance(mailer_from_env(), SendGridMailer)


def test_env_falls_back_to_ses(clean_env):
    clean_env.setenv("AWS_REGION", "us-west-2")
    assert isinstance(mailer_from_env(), SesMailer)


def test_env_log_provider(clean_env):
    clean_env.setenv("EMAIL_PROVIDER", "log")
    mailer = mailer_from_env()
    assert isinstance(mailer, RecordingMailer)
    assert mailer.log_only


def test_env_missing_credentials(clean_env):
    with pytest.raises(EmailConfigError):
        mailer_from_env()


def test_env_sendgrid_without_key(clean_env):
    clean_env.setenv("EMAIL_PROVIDER", "sendgrid")
    with pytest.raises(EmailConfigError, match="SENDGRID_API_KEY"):
        mailer_from_env()


def test_env_unknown_provider(clean_env):
    clean_env.setenv("EMAIL_PROVIDER", "pigeon")
    with pytest.raises(EmailConfigError, match="pigeon"):
        mailer_from_env()


def test_create_app_fails_fast_without_provider(clean_env):
    from contact_api import create_app

    with pytest.raises(EmailConfigError):
        create_app()
