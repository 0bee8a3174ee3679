"""
Contact form controller: the client side of /api/contact.

Mirrors what the site's form script does in the browser: stamp the form with a
load-time token, run a local honeypot/timing pre-check, post once, and write a
status message. The local pre-check only saves a round trip; the server
repeats every check and its answer is the one that counts.
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import requests

from contact_api.config import MIN_ELAPSED_MS
from contact_api.models.submission import HONEYPOT_FIELD, TIMESTAMP_FIELD
from contact_api.utils.spam_checks import parse_timestamp

WAIT_MESSAGE = "Please wait a few seconds before submitting the form."
SUCCESS_MESSAGE = "Thank you for your message! We'll get back to you soon."
RETRY_MESSAGE = (
    "There was an error sending your message. "
    "Please try again or call us directly."
)

USER_FIELDS = ("name", "email", "phone", "business", "role", "message", HONEYPOT_FIELD)


def epoch_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class FormMessage:
    text: str = ""
    kind: str = ""
    visible: bool = False
    scrolled_into_view: bool = False


@dataclass
class ContactForm:
    """Field values plus the bits of UI state the controller drives."""

    fields: Dict[str, str] = field(default_factory=dict)
    message: FormMessage = field(default_factory=FormMessage)
    submit_enabled: bool = True
    loading: bool = False

    def reset(self) -> None:
        for name in USER_FIELDS:
            self.fields[name] = ""


class TimestampIssuer:
    def __init__(self, clock: Callable[[], int] = epoch_ms):
        self.clock = clock

    def issue(self, form: ContactForm) -> int:
        token = self.clock()
        form.fields[TIMESTAMP_FIELD] = str(token)
        return token


@dataclass
class SubmitResult:
    ok: bool
    status_code: Optional[int]
    message: str


class ContactFormController:
    def __init__(
        self,
        form: ContactForm,
        endpoint: str,
        session: Optional[requests.Session] = None,
        clock: Callable[[], int] = epoch_ms,
        timeout: float = 10,
    ):
        self.form = form
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.clock = clock
        self.timeout = timeout
        self.issuer = TimestampIssuer(clock)
        self.issuer.issue(form)

    def local_spam_check(self) -> bool:
        """Advisory only. False if the honeypot is filled or the form is too fresh."""
        fields = self.form.fields
        if (fields.get(HONEYPOT_FIELD) or "").strip():
            return False
        issued = parse_timestamp(fields.get(TIMESTAMP_FIELD))
        if issued is not None and self.clock() - issued < MIN_ELAPSED_MS:
            return False
        return True

    def show_message(self, text: str, kind: str) -> None:
        msg = self.form.message
        msg.text = text
        msg.kind = kind
        msg.visible = True
        msg.scrolled_into_view = True

    def hide_message(self) -> None:
        self.form.message.visible = False

    def _set_loading(self, loading: bool) -> None:
        self.form.loading = loading
        self.form.submit_enabled = not loading

    @staticmethod
    def _error_text(resp: requests.Response) -> str:
        try:
            data: Any = resp.json()
        except ValueError:
            data = {}
        if isinstance(data, dict):
            return data.get("message") or data.get("error") or RETRY_MESSAGE
        return RETRY_MESSAGE

    def submit(self) -> SubmitResult:
        if not self.local_spam_check():
            self.show_message(WAIT_MESSAGE, "error")
            return SubmitResult(False, None, WAIT_MESSAGE)

        self._set_loading(True)
        self.hide_message()
        try:
            resp = self.session.post(
                self.endpoint, data=dict(self.form.fields), timeout=self.timeout
            )
        except requests.RequestException:
            self.show_message(RETRY_MESSAGE, "error")
            return SubmitResult(False, None, RETRY_MESSAGE)
        finally:
            self._set_loading(False)

        if 200 <= resp.status_code < 300:
            self.show_message(SUCCESS_MESSAGE, "success")
            self.form.reset()
            self.issuer.issue(self.form)
            return SubmitResult(True, resp.status_code, SUCCESS_MESSAGE)

        text = self._error_text(resp)
        self.show_message(text, "error")
        return SubmitResult(False, resp.status_code, text)
