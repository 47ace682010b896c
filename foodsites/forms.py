"""
Form body parsing plus the contact and partner form payload builders.
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import parse_qs

from fastapi import Request

from foodsites.db import PartnerRegistration
from foodsites.mailer import EmailMessage

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"
FORM_CONTENT_TYPES = (URLENCODED, MULTIPART)
NOT_PROVIDED = "(not provided)"

PARTNER_REQUIRED = (
    "org",
    "name",
    "email",
    "phone",
    "address",
    "city",
    "zip",
    "open_hours",
)


@dataclass
class FormFields:
    """Read-only view of submitted fields with trimmed string values."""

    values: Mapping[str, Any]

    def get(self, key: str) -> str:
        value = self.values.get(key)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else ""
        return str(value).strip()

    def has(self, key: str) -> bool:
        return key in self.values


def _first_values(parsed: dict[str, list[str]]) -> dict[str, str]:
    return {key: items[0] for key, items in parsed.items() if items}


async def read_fields(request: Request) -> FormFields:
    """
    Read a request body as flat fields, whatever its encoding.

    Form encodings go through Starlette's form parser, JSON bodies must be
    objects, and anything else is treated as a urlencoded string.
    """
    content_type = request.headers.get("content-type", "")
    if any(kind in content_type for kind in FORM_CONTENT_TYPES):
        form = await request.form()
        # First value wins for repeated keys, as in the other encodings.
        return FormFields({key: form.getlist(key)[0] for key in form.keys()})
    if "application/json" in content_type:
        payload = json.loads(await request.body() or b"{}")
        if not isinstance(payload, dict):
            payload = {}
        return FormFields(payload)
    text = (await request.body()).decode("utf-8", errors="replace")
    return FormFields(_first_values(parse_qs(text, keep_blank_values=True)))


def missing_fields(fields: FormFields, required) -> list[str]:
    return [key for key in required if not fields.get(key)]


@dataclass
class ContactSubmission:
    name: str
    email: str
    message: str
    org: str = ""
    contact_type: str = "individual"
    phone: str = ""
    honeypot: str = ""

    @classmethod
    def from_fields(cls, fields: FormFields) -> "ContactSubmission":
        return cls(
            org=fields.get("org"),
            contact_type=fields.get("contact_type") or "individual",
            name=fields.get("name"),
            email=fields.get("email"),
            phone=fields.get("phone"),
            message=fields.get("message"),
            honeypot=fields.get("website"),
        )

    @property
    def is_spam(self) -> bool:
        return bool(self.honeypot)

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.email and self.message)

    def to_email(self, from_email: str, to_email: str) -> EmailMessage:
        org = self.org or NOT_PROVIDED
        phone = self.phone or NOT_PROVIDED
        text = (
            f"Contact type: {self.contact_type}\n"
            f"Organization: {org}\n"
            f"Name: {self.name}\n"
            f"Email: {self.email}\n"
            f"Phone: {phone}\n"
            f"\n"
            f"Message:\n{self.message}"
        )
        esc = html.escape
        body = (
            '<div style="font-family:system-ui,Segoe UI,Roboto,Arial">\n'
            '  <h2 style="margin:0 0 12px 0">New contact form message</h2>\n'
            f"  <p><strong>Contact type:</strong> {esc(self.contact_type)}</p>\n"
            f"  <p><strong>Organization:</strong> {esc(org)}</p>\n"
            f"  <p><strong>Name:</strong> {esc(self.name)}</p>\n"
            f"  <p><strong>Email:</strong> {esc(self.email)}</p>\n"
            f"  <p><strong>Phone:</strong> {esc(phone)}</p>\n"
            f'  <pre style="white-space:pre-wrap;line-height:1.5">{esc(self.message)}</pre>\n'
            "</div>"
        )
        return EmailMessage(
            from_email=from_email,
            to=to_email,
            subject=f"New contact form message from {self.name}",
            text=text,
            html=body,
        )


def _optional(fields: FormFields, key: str) -> Optional[str]:
    return fields.get(key) or None


def registration_from_fields(fields: FormFields) -> PartnerRegistration:
    """Build a registration record from partner form fields; checkboxes count when present."""
    business_type = fields.get("business_type")
    if not business_type and fields.get("business_type_other"):
        business_type = "Other"
    return PartnerRegistration(
        org=fields.get("org"),
        name=fields.get("name"),
        email=fields.get("email"),
        phone=fields.get("phone"),
        address=fields.get("address"),
        city=fields.get("city"),
        zip=fields.get("zip"),
        business_type=business_type,
        business_type_other=_optional(fields, "business_type_other"),
        offer_dropoff=fields.has("offer_dropoff"),
        offer_pickup=fields.has("offer_pickup"),
        offer_both=fields.has("offer_both"),
        open_hours=fields.get("open_hours"),
        duration=_optional(fields, "duration"),
        duration_dates=_optional(fields, "duration_dates"),
        storage_space=_optional(fields, "storage_space"),
        additional_info=_optional(fields, "additional_info"),
        ack_participation=fields.has("ack_participation"),
        ack_followup=fields.has("ack_followup"),
    )
