"""
Spam checks for contact form submissions.

Each check takes (submission, now_ms) and returns the client-facing rejection
reason, or None when the submission passes. The handler runs them in order and
stops at the first failure.
"""

from __future__ import annotations
import re
from typing import Callable, Iterable, Optional, Sequence

from contact_api.config import MIN_ELAPSED_MS
from contact_api.models.submission import Submission

SPAM_DETECTED = "Spam detected"
TOO_QUICK = "Form submitted too quickly"
REQUIRED_MISSING = "Required fields missing"
INVALID_CONTENT = "Invalid content detected"

REQUIRED_FIELDS = ("name", "email", "role", "message")

GIBBERISH_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(.)\1{4,}"),  # repeated characters
    re.compile(r"^[a-z]{30,}$", re.IGNORECASE),  # whole text is one long word
    re.compile(r"(.{2,})\1{3,}"),  # repeated patterns
)

# leading whitespace, optional sign, digits; anything after is ignored
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

Check = Callable[[Submission, int], Optional[str]]


def parse_timestamp(raw: str | None) -> int | None:
    """Parse a client timestamp token; None when missing or unparseable."""
    if not raw:
        return None
    m = _INT_PREFIX_RE.match(raw)
    if not m:
        return None
    return int(m.group(1))


def check_honeypot(sub: Submission, now_ms: int) -> str | None:
    if sub.honeypot:
        return SPAM_DETECTED
    return None


class TimestampCheck:
    """Reject tokens that are missing, zero, unparseable or younger than min_elapsed_ms."""

    def __init__(self, min_elapsed_ms: int = MIN_ELAPSED_MS):
        self.min_elapsed_ms = min_elapsed_ms

    def __call__(self, sub: Submission, now_ms: int) -> str | None:
        issued = parse_timestamp(sub.issued_at)
        if not issued:
            return TOO_QUICK
        if now_ms - issued < self.min_elapsed_ms:
            return TOO_QUICK
        return None


check_timestamp = TimestampCheck()


def check_required_fields(sub: Submission, now_ms: int) -> str | None:
    if any(not getattr(sub, f) for f in REQUIRED_FIELDS):
        return REQUIRED_MISSING
    return None


def is_gibberish(text: str, patterns: Iterable[re.Pattern[str]] = GIBBERISH_PATTERNS) -> bool:
    return any(p.search(text) for p in patterns)


class GibberishCheck:
    """Crude filler-text detection over name + message. False positives are accepted."""

    def __init__(self, patterns: Sequence[re.Pattern[str]] = GIBBERISH_PATTERNS):
        self.patterns = tuple(patterns)

    def __call__(self, sub: Submission, now_ms: int) -> str | None:
        if is_gibberish(f"{sub.name} {sub.message}", self.patterns):
            return INVALID_CONTENT
        return None


check_gibberish = GibberishCheck()

DEFAULT_CHECKS: tuple[Check, ...] = (
    check_honeypot,
    check_timestamp,
    check_required_fields,
    check_gibberish,
)


def build_checks(min_elapsed_ms: int = MIN_ELAPSED_MS) -> tuple[Check, ...]:
    """Default check order with a custom minimum fill time."""
    return (
        check_honeypot,
        TimestampCheck(min_elapsed_ms),
        check_required_fields,
        check_gibberish,
    )


def run_checks(
    sub: Submission, now_ms: int, checks: Iterable[Check] = DEFAULT_CHECKS
) -> str | None:
    """Return the first rejection reason, or None if every check passes."""
    for check in checks:
        reason = check(sub, now_ms)
        if reason:
            return reason
    return None
