from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping

NOT_PROVIDED = "Not provided"

# wire names used by the site's form
HONEYPOT_FIELD = "fax_number"
TIMESTAMP_FIELD = "_timestamp"


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Submission:
    """One contact form post. Lives for a single request and is never stored."""

    name: str = ""
    email: str = ""
    phone: str = ""
    business: str = ""
    role: str = ""
    message: str = ""
    honeypot: str = ""
    issued_at: str = ""

    @classmethod
    def from_form(cls, data: Mapping[str, Any] | None) -> "Submission":
        data = data or {}
        return cls(
            name=_text(data, "name"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            business=_text(data, "business"),
            role=_text(data, "role"),
            message=_text(data, "message"),
            honeypot=_text(data, HONEYPOT_FIELD).strip(),
            issued_at=_text(data, TIMESTAMP_FIELD),
        )

    @property
    def phone_display(self) -> str:
        return self.phone or NOT_PROVIDED

    @property
    def business_display(self) -> str:
        return self.business or NOT_PROVIDED
