"""
Supabase-backed registration store talking to PostgREST over HTTP.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional

import requests

from foodsites.db import PartnerRegistration, StoreError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 15  # seconds

_RECORD_FIELDS = {f.name for f in fields(PartnerRegistration)}


def _parse_timestamp(value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).timestamp()
    except ValueError:
        return None


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def _to_record(row: dict) -> PartnerRegistration:
    data = {k: v for k, v in row.items() if k in _RECORD_FIELDS}
    data["id"] = str(row.get("id"))
    created_at = _parse_timestamp(row.get("created_at"))
    if created_at is None:
        data.pop("created_at", None)
    else:
        data["created_at"] = created_at
    for key in ("org", "name", "email", "phone", "address", "city", "zip", "open_hours"):
        data[key] = data.get(key) or ""
    data["business_type"] = data.get("business_type") or ""
    return PartnerRegistration(**data)


@dataclass
class SupabaseRegistrationStore:
    """
    Registration store using the Supabase REST API with the service-role key.

    Requests are stateless; no auth session is kept between calls.
    """

    url: str
    service_role_key: str
    table: str = "partner_registrations"

    def __post_init__(self):
        if not self.url:
            raise ValueError("Missing SUPABASE_URL environment variable")
        if not self.service_role_key:
            raise ValueError("Missing SUPABASE_SERVICE_ROLE_KEY environment variable")
        self._session = requests.Session()
        self._session.headers.update(
            {
                "apikey": self.service_role_key,
                "Authorization": f"Bearer {self.service_role_key}",
                "Content-Type": "application/json",
            }
        )

    @property
    def endpoint(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1/{self.table}"

    def _check(self, response: requests.Response, action: str) -> None:
        if response.ok:
            return
        logger.error(
            "Supabase %s error %s: %s", action, response.status_code, response.text
        )
        raise StoreError(f"Supabase {action} failed with status {response.status_code}")

    def create_registration(self, record: PartnerRegistration) -> PartnerRegistration:
        payload = record.as_dict()
        # Let the database stamp created_at.
        payload.pop("created_at", None)
        response = self._session.post(
            self.endpoint,
            json=payload,
            headers={"Prefer": "return=representation"},
            timeout=REQUEST_TIMEOUT,
        )
        self._check(response, "insert")
        rows = response.json() or []
        return _to_record(rows[0]) if rows else record

    def list_registrations(
        self, city: Optional[str] = None
    ) -> list[PartnerRegistration]:
        params = {"select": "*", "order": "created_at.asc"}
        if city:
            params["city"] = f"ilike.{city}"
        response = self._session.get(
            self.endpoint, params=params, timeout=REQUEST_TIMEOUT
        )
        self._check(response, "select")
        return [_to_record(row) for row in response.json() or []]

    def get_registration(self, registration_id: str) -> Optional[PartnerRegistration]:
        # The id column is a uuid; PostgREST rejects anything else with a 400.
        if not _is_uuid(registration_id):
            return None
        response = self._session.get(
            self.endpoint,
            params={"select": "*", "id": f"eq.{registration_id}", "limit": "1"},
            timeout=REQUEST_TIMEOUT,
        )
        self._check(response, "select")
        rows = response.json() or []
        return _to_record(rows[0]) if rows else None
