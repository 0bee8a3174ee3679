"""
SendGrid / SES email sending wrapper.

Configure via env:
- EMAIL_PROVIDER: "sendgrid" | "ses" | "log" (default: "sendgrid" if SENDGRID_API_KEY set,
  else "ses" if AWS region/creds set)
- For SendGrid: SENDGRID_API_KEY
- For SES: AWS_REGION, AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY (or use default creds)
- "log" only logs each email; meant for local development

Senders raise EmailDispatchError on any provider failure. Nothing here retries;
resilience is whatever the provider client does internally.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


class EmailConfigError(RuntimeError):
    """Provider missing or not configured. Raised at startup."""


class EmailDispatchError(RuntimeError):
    """A send failed. The provider error is chained as __cause__."""


@dataclass
class OutgoingEmail:
    to: List[str]
    from_email: str
    from_name: str
    subject: str
    body_text: str
    body_html: Optional[str] = None
    reply_to: Optional[str] = None


class Mailer:
    provider = "none"

    def send(self, email: OutgoingEmail) -> str:
        """Send one email; return the provider message id."""
        raise NotImplementedError


class SendGridMailer(Mailer):
    provider = "sendgrid"

    def __init__(self, api_key: str):
        from sendgrid import SendGridAPIClient

        self.client = SendGridAPIClient(api_key)

    def _build(self, email: OutgoingEmail):
        from sendgrid.helpers.mail import Mail, Email, To, Content, ReplyTo

        html = email.body_html if email.body_html else f"<pre>{email.body_text}</pre>"
        message = Mail(
            from_email=Email(email.from_email, email.from_name),
            to_emails=[To(addr) for addr in email.to],
            subject=email.subject,
            plain_text_content=Content("text/plain", email.body_text),
            html_content=Content("text/html", html),
        )
        if email.reply_to:
            message.reply_to = ReplyTo(email.reply_to)
        return message

    def send(self, email: OutgoingEmail) -> str:
        try:
            response = self.client.send(self._build(email))
        except Exception as e:
            raise EmailDispatchError(f"sendgrid send failed: {e}") from e

        status = getattr(response, "status_code", None)
        if status is None or not 200 <= int(status) < 300:
            raise EmailDispatchError(f"sendgrid returned status {status}")

        msg_id = None
        headers = getattr(response, "headers", None)
        if headers:
            msg_id = headers.get("X-Message-Id")
        return msg_id or str(status)


class SesMailer(Mailer):
    provider = "ses"

    def __init__(self, region: str):
        import boto3

        self.client = boto3.client("ses", region_name=region)

    def send(self, email: OutgoingEmail) -> str:
        from botocore.exceptions import BotoCoreError, ClientError

        body = {"Text": {"Data": email.body_text, "Charset": "UTF-8"}}
        if email.body_html:
            body["Html"] = {"Data": email.body_html, "Charset": "UTF-8"}

        kwargs = dict(
            Source=f"{email.from_name} <{email.from_email}>",
            Destination={"ToAddresses": list(email.to)},
            Message={
                "Subject": {"Data": email.subject, "Charset": "UTF-8"},
                "Body": body,
            },
        )
        if email.reply_to:
            kwargs["ReplyToAddresses"] = [email.reply_to]
        try:
            response = self.client.send_email(**kwargs)
        except ClientError as e:
            detail = e.response.get("Error", {}).get("Message", str(e))
            raise EmailDispatchError(f"ses send failed: {detail}") from e
        except BotoCoreError as e:
            raise EmailDispatchError(f"ses send failed: {e}") from e
        return response.get("MessageId") or "unknown"


@dataclass
class RecordingMailer(Mailer):
    """
    Keeps every email in memory instead of sending it.
    fail_on: 1-based send numbers that raise EmailDispatchError.
    """

    fail_on: set = field(default_factory=set)
    log_only: bool = False
    sent: List[OutgoingEmail] = field(default_factory=list)
    attempts: int = 0
    provider = "log"

    def send(self, email: OutgoingEmail) -> str:
        self.attempts += 1
        if self.attempts in self.fail_on:
            raise EmailDispatchError(f"send #{self.attempts} rejected")
        self.sent.append(email)
        if self.log_only:
            logger.info("[email][dev] to=%s subj=%s", ", ".join(email.to), email.subject)
            logger.debug(email.body_text)
        return f"local-{self.attempts}"


def mailer_from_env() -> Mailer:
    provider = os.getenv("EMAIL_PROVIDER", "").strip().lower()
    if not provider:
        if os.getenv("SENDGRID_API_KEY"):
            provider = "sendgrid"
        elif os.getenv("AWS_REGION") or os.getenv("AWS_ACCESS_KEY_ID"):
            provider = "ses"
        else:
            raise EmailConfigError(
                "EMAIL_PROVIDER not set and no SENDGRID_API_KEY or AWS creds"
            )

    if provider == "sendgrid":
        api_key = os.getenv("SENDGRID_API_KEY", "").strip()
        if not api_key:
            raise EmailConfigError("SENDGRID_API_KEY not set")
        return SendGridMailer(api_key)
    if provider == "ses":
        return SesMailer(os.getenv("AWS_REGION", "us-east-1"))
    if provider == "log":
        return RecordingMailer(log_only=True)
    raise EmailConfigError(f"Unknown EMAIL_PROVIDER: {provider}")
