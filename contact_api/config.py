"""
Contact form settings.

Configure via env (a local .env is loaded by create_app):
- CONTACT_MIN_ELAPSED_MS: minimum time between page load and submit (default: 3000)
- CONTACT_TIMEZONE: zone used for the "Submitted" line (default: America/Boise)
- CONTACT_NOTIFY_TO: comma separated lead recipients
- CONTACT_NOTIFY_FROM, CONTACT_REPLY_FROM, CONTACT_FROM_NAME: sender identities
- CONTACT_ALLOWED_ORIGIN: optional origin allowed to read responses to cross-site
  form posts (urlencoded or multipart). Preflighted requests such as JSON posts
  are not supported: OPTIONS on /api/contact is 405.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import List, Optional

MIN_ELAPSED_MS = 3000
DEFAULT_TIMEZONE = "America/Boise"
DEFAULT_NOTIFY_TO = ["info@hardcourtcollective.com", "bryce@gullstack.com"]
DEFAULT_NOTIFY_FROM = "notifications@hardcourtcollective.com"
DEFAULT_REPLY_FROM = "info@hardcourtcollective.com"
DEFAULT_FROM_NAME = "Hard Court Collective"
CONTACT_EMAIL = "info@hardcourtcollective.com"
SITE_URL = "https://hardcourtcollective.com"


def _split_list(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


@dataclass
class ContactSettings:
    min_elapsed_ms: int = MIN_ELAPSED_MS
    timezone: str = DEFAULT_TIMEZONE
    notify_to: List[str] = field(default_factory=lambda: list(DEFAULT_NOTIFY_TO))
    notify_from: str = DEFAULT_NOTIFY_FROM
    reply_from: str = DEFAULT_REPLY_FROM
    from_name: str = DEFAULT_FROM_NAME
    contact_email: str = CONTACT_EMAIL
    site_url: str = SITE_URL
    allowed_origin: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ContactSettings":
        return cls(
            min_elapsed_ms=int(
                os.getenv("CONTACT_MIN_ELAPSED_MS", str(MIN_ELAPSED_MS))
            ),
            timezone=os.getenv("CONTACT_TIMEZONE", DEFAULT_TIMEZONE).strip(),
            notify_to=_split_list(os.getenv("CONTACT_NOTIFY_TO"))
            or list(DEFAULT_NOTIFY_TO),
            notify_from=os.getenv("CONTACT_NOTIFY_FROM", DEFAULT_NOTIFY_FROM).strip(),
            reply_from=os.getenv("CONTACT_REPLY_FROM", DEFAULT_REPLY_FROM).strip(),
            from_name=os.getenv("CONTACT_FROM_NAME", DEFAULT_FROM_NAME).strip(),
            allowed_origin=(os.getenv("CONTACT_ALLOWED_ORIGIN") or "").strip() or None,
        )
