"""Best-effort admin email notifications (Flask-Mail).

A failed send is logged and reported to the caller; it never fails the
request that stored the lead.
"""

from __future__ import annotations

import logging
import smtplib
from typing import Iterable, Optional

from flask import current_app
from flask_mail import Message as MailMessage

from houseplanfiles.extensions import mail


logger = logging.getLogger(__name__)

CONTACT_SUBJECT = 'New Contact Form Submission - HousePlanFiles'


def notify_admin(subject: str, lines: Iterable[str], reply_to: Optional[str] = None) -> bool:
    recipient = current_app.config.get('ADMIN_EMAIL')
    if not recipient:
        logger.warning('ADMIN_EMAIL not configured; skipping notification %r', subject)
        return False

    msg = MailMessage(subject=subject, recipients=[recipient], reply_to=reply_to)
    msg.body = '\n'.join(lines)
    try:
        mail.send(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error('Failed to send notification %r: %s', subject, exc)
        return False
    return True


def lead_lines(title: str, fields: dict) -> list[str]:
    lines = [title, '']
    for label, value in fields.items():
        lines.append(f"{label}: {value if value not in (None, '') else 'Not provided'}")
    return lines
