"""
Pydantic schemas for the sites API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class SiteResponse(BaseModel):
    slug: str
    name: str
    type: Literal["drop-off", "pick-up", "both"]
    category: str
    address: str
    city: str
    zip: str
    phone: Optional[str] = None
    hours: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class SiteDetailResponse(SiteResponse):
    badge: str
    full_address: str
    directions_url: str
    tel_link: Optional[str] = None
    description: Optional[str] = None
    featured: bool = False


class LatLng(BaseModel):
    lat: float
    lng: float


class MarkerResponse(BaseModel):
    slug: str
    title: str
    position: LatLng
    color: str


class MarkerDiffResponse(BaseModel):
    added: list[MarkerResponse]
    removed: list[str]
    updated: list[MarkerResponse]


class MapResponse(BaseModel):
    center: LatLng
    zoom: int
    api_key: Optional[str] = None
    map_id: Optional[str] = None
    marker_kind: Literal["advanced", "classic"]
    count: int
    summary: str
    markers: list[MarkerResponse]
    diff: MarkerDiffResponse


class PartnerProgressResponse(BaseModel):
    count: int
    goal: int
    percent: int


class HealthResponse(BaseModel):
    ok: bool
