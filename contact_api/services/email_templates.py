"""
Lead notification and auto-reply emails for the contact form.

Bodies live in app/templates/emails/ and are rendered with the Flask app's
Jinja environment; the .html templates are autoescaped.
"""

from __future__ import annotations
from typing import Any, Dict
from urllib.parse import urlparse

from flask import render_template

from contact_api.config import ContactSettings
from contact_api.models.submission import Submission
from contact_api.utils.email_sender import OutgoingEmail

TAGLINE = "Marketing Built for Performance"

NEXT_STEPS = [
    {
        "title": "Quick Response (Within 2 Hours)",
        "summary": "We'll contact you to confirm receipt",
        "detail": "A member of our team will contact you to confirm receipt and "
        "gather any additional details needed for your market analysis.",
    },
    {
        "title": "Market Analysis (24-48 Hours)",
        "summary": "We'll analyze your local competition",
        "detail": "We'll analyze your local competition, search volume, and "
        "opportunity gaps specific to your market.",
    },
    {
        "title": "Strategy Consultation (Within 1 Week)",
        "summary": "We'll schedule a call to discuss your custom marketing roadmap",
        "detail": "We'll schedule a 15-30 minute call to review our findings and "
        "discuss your custom marketing roadmap.",
    },
]


def _context(sub: Submission, settings: ContactSettings, **extra: Any) -> Dict[str, Any]:
    ctx = {
        "sub": sub,
        "company": settings.from_name,
        "tagline": TAGLINE,
        "contact_email": settings.contact_email,
        "site_url": settings.site_url,
        "site_host": urlparse(settings.site_url).netloc or settings.site_url,
        "steps": NEXT_STEPS,
    }
    ctx.update(extra)
    return ctx


def build_notification(
    sub: Submission, submitted_at: str, settings: ContactSettings
) -> OutgoingEmail:
    """Internal lead email: every submitted field plus the submission time."""
    ctx = _context(sub, settings, submitted_at=submitted_at)
    return OutgoingEmail(
        to=list(settings.notify_to),
        from_email=settings.notify_from,
        from_name=settings.from_name,
        subject=f"New Lead: {sub.name} ({sub.role}) - {settings.from_name}",
        body_text=render_template("emails/lead_notification.txt", **ctx),
        body_html=render_template("emails/lead_notification.html", **ctx),
        reply_to=sub.email,
    )


def build_auto_reply(sub: Submission, settings: ContactSettings) -> OutgoingEmail:
    ctx = _context(sub, settings)
    return OutgoingEmail(
        to=[sub.email],
        from_email=settings.reply_from,
        from_name=settings.from_name,
        subject=f"Thank You for Your Interest - {settings.from_name}",
        body_text=render_template("emails/auto_reply.txt", **ctx),
        body_html=render_template("emails/auto_reply.html", **ctx),
    )
