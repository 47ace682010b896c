"""
Site model shared by the finder, the map and the sites API.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import quote


class SiteType(str, Enum):
    DROP_OFF = "drop-off"
    PICK_UP = "pick-up"
    BOTH = "both"

    @property
    def label(self) -> str:
        """Badge text, e.g. ``DROP OFF``."""
        return self.value.upper().replace("-", " ")


@dataclass
class Site:
    slug: str
    name: str
    type: SiteType
    category: str
    address: str
    city: str
    zip: str
    phone: Optional[str] = None
    hours: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    def as_dict(self) -> dict:
        data = {k: v for k, v in asdict(self).items() if v is not None}
        data["type"] = self.type.value
        return data

    @property
    def has_coords(self) -> bool:
        # Zero is treated as missing, as the map front end does.
        return bool(self.lat) and bool(self.lng)

    @property
    def full_address(self) -> str:
        line = self.address
        if self.city:
            line = f"{line}, {self.city}"
        if self.zip:
            line = f"{line} {self.zip}"
        return line

    @property
    def directions_url(self) -> str:
        query = quote(f"{self.address} {self.city} {self.zip}", safe="")
        return f"https://www.google.com/maps/search/?api=1&query={query}"

    @property
    def detail_path(self) -> str:
        return f"/site/{self.slug}"

    @property
    def tel_link(self) -> Optional[str]:
        if not self.phone:
            return None
        return "tel:" + re.sub(r"\D", "", self.phone)


def _get(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def infer_type(row: Any) -> Optional[SiteType]:
    """
    Work out what a registration offers from its three checkbox flags.

    Returns None when none of the flags are set; such registrations are not
    listed as sites.
    """
    drop = bool(_get(row, "offer_dropoff"))
    pick = bool(_get(row, "offer_pickup"))
    both = bool(_get(row, "offer_both"))
    if both or (drop and pick):
        return SiteType.BOTH
    if drop:
        return SiteType.DROP_OFF
    if pick:
        return SiteType.PICK_UP
    return None


def site_from_registration(row: Any) -> Optional[Site]:
    site_type = infer_type(row)
    if site_type is None:
        return None
    return Site(
        slug=str(_get(row, "id")),
        name=_get(row, "org") or "",
        type=site_type,
        category=_get(row, "business_type") or "partner",
        address=_get(row, "address") or "",
        city=_get(row, "city") or "",
        zip=_get(row, "zip") or "",
        phone=_get(row, "phone") or None,
        hours=_get(row, "open_hours") or None,
    )


def sites_from_registrations(rows) -> list[Site]:
    sites = []
    for row in rows:
        site = site_from_registration(row)
        if site is not None:
            sites.append(site)
    return sites
