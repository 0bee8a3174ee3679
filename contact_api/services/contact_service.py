from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from contact_api.config import ContactSettings
from contact_api.models.submission import Submission
from contact_api.services.email_templates import build_auto_reply, build_notification
from contact_api.utils.email_sender import Mailer
from contact_api.utils.spam_checks import Check, build_checks, run_checks
from contact_api.utils.timefmt import format_submission_time

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thank you for your message! We'll be in touch within 2 hours."
DISPATCH_FAILED_TEMPLATE = (
    "There was a problem sending your message. "
    "Please try again or email us directly at {contact_email}."
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _mask_email(e: str | None) -> str | None:
    if not e:
        return None
    local, _, domain = e.partition("@")
    if not domain:
        return e
    if len(local) <= 2:
        masked = local[0:1] + "***"
    else:
        masked = local[0] + "***" + local[-1]
    return masked + "@" + domain


class ContactHandler:
    """
    Validate a contact form post, then send the lead notification and the
    auto-reply. Stateless between calls; the mailer and clock are injected.
    """

    def __init__(
        self,
        mailer: Mailer,
        settings: Optional[ContactSettings] = None,
        clock: Clock = utc_now,
        checks: Optional[Sequence[Check]] = None,
    ):
        self.mailer = mailer
        self.settings = settings or ContactSettings()
        self.clock = clock
        self.checks = (
            tuple(checks)
            if checks is not None
            else build_checks(self.settings.min_elapsed_ms)
        )

    @property
    def dispatch_failed_message(self) -> str:
        return DISPATCH_FAILED_TEMPLATE.format(contact_email=self.settings.contact_email)

    def validate(self, sub: Submission, now: datetime) -> str | None:
        return run_checks(sub, int(now.timestamp() * 1000), self.checks)

    def handle(self, data: Mapping[str, Any] | None) -> Tuple[int, Dict[str, Any]]:
        """Return (http_status, json_body)."""
        sub = Submission.from_form(data)
        now = self.clock()

        reason = self.validate(sub, now)
        if reason:
            logger.info(
                "[contact] rejected reason=%r email=%s", reason, _mask_email(sub.email)
            )
            return 400, {"error": reason}

        submitted_at = format_submission_time(now, self.settings.timezone)
        notification = build_notification(sub, submitted_at, self.settings)
        auto_reply = build_auto_reply(sub, self.settings)

        step = "notification"
        try:
            msg_id = self.mailer.send(notification)
            logger.info("[contact] notification sent id=%s", msg_id)
            step = "auto-reply"
            msg_id = self.mailer.send(auto_reply)
            logger.info(
                "[contact] auto-reply sent id=%s to=%s", msg_id, _mask_email(sub.email)
            )
        except Exception:
            if step == "auto-reply":
                logger.exception(
                    "[contact] partial delivery: notification sent, auto-reply failed (to=%s)",
                    _mask_email(sub.email),
                )
            else:
                logger.exception("[contact] notification send failed")
            return 500, {"error": self.dispatch_failed_message}

        return 200, {"success": True, "message": SUCCESS_MESSAGE}
