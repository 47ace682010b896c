"""
Outbound email for the contact form, via the Resend API or in memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 15  # seconds


class MailerError(RuntimeError):
    """Raised when the email API refuses a message."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Email API returned status {status_code}")
        self.status_code = status_code
        self.body = body


@dataclass
class EmailMessage:
    from_email: str
    to: str
    subject: str
    text: str
    html: str

    def as_payload(self) -> dict:
        return {
            "from": self.from_email,
            "to": self.to,
            "subject": self.subject,
            "text": self.text,
            "html": self.html,
        }


class Mailer(Protocol):
    """Defines what the contact form needs from an email provider."""

    from_email: str
    to_email: str

    def send(self, message: EmailMessage) -> None:
        ...


@dataclass
class InMemoryMailer:
    """Test double that records messages instead of sending them."""

    from_email: str = "onboarding@resend.dev"
    to_email: str = "team@example.test"
    sent: list[EmailMessage] = field(default_factory=list)

    def send(self, message: EmailMessage) -> None:
        self.sent.append(message)

    def reset(self) -> None:
        self.sent.clear()


@dataclass
class ResendMailer:
    api_key: str
    to_email: str
    from_email: str = "onboarding@resend.dev"
    api_url: str = "https://api.resend.com/emails"

    def send(self, message: EmailMessage) -> None:
        response = requests.post(
            self.api_url,
            json=message.as_payload(),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=REQUEST_TIMEOUT,
        )
        if not response.ok:
            raise MailerError(response.status_code, response.text)
        logger.info("Contact email sent to %s", message.to)
