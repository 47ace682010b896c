"""
HTTP routes for the sites API and the public form endpoints.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from foodsites.config import Settings, get_settings
from foodsites.content import SiteCollection
from foodsites.db import RegistrationStore
from foodsites.dependencies import (
    get_mailer,
    get_registration_store,
    get_site_collection,
)
from foodsites.finder import ResultSummary, TypeFilter, filter_sites
from foodsites.forms import (
    PARTNER_REQUIRED,
    URLENCODED,
    ContactSubmission,
    missing_fields,
    read_fields,
    registration_from_fields,
)
from foodsites.mailer import Mailer, MailerError
from foodsites.map_view import (
    DEFAULT_ZOOM,
    compute_center,
    diff_known,
    marker_kind,
    markers_for,
)
from foodsites.progress import PartnerProgress
from foodsites.schemas import (
    HealthResponse,
    MapResponse,
    PartnerProgressResponse,
    SiteDetailResponse,
    SiteResponse,
)
from foodsites.sites import Site, site_from_registration, sites_from_registrations

logger = logging.getLogger(__name__)

router = APIRouter()

MESSAGE_SENT_PATH = "/message-sent"
THANKS_PATH = "/thanks"


def _server_error() -> PlainTextResponse:
    return PlainTextResponse("Server error", status_code=500)


def _see_other(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=303)


def _content_sites(collection: SiteCollection, city: str) -> list[Site]:
    sites = collection.sites()
    if city:
        sites = [s for s in sites if s.city.lower() == city.lower()]
    return sites


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(ok=True)


@router.get(
    "/sites", response_model=list[SiteResponse], response_model_exclude_none=True
)
def list_sites(
    city: str = Query(""),
    q: str = Query(""),
    site_type: Optional[str] = Query(None, alias="type"),
    store: RegistrationStore = Depends(get_registration_store),
):
    """
    List registered partner sites, optionally narrowed by city, search text and type.
    """
    city = city.strip()
    try:
        rows = store.list_registrations(city=city or None)
    except Exception:
        logger.exception("Sites API error")
        return _server_error()
    sites = filter_sites(sites_from_registrations(rows), q, TypeFilter.parse(site_type))
    return [site.as_dict() for site in sites]


@router.get(
    "/sites/{slug}",
    response_model=SiteDetailResponse,
    response_model_exclude_none=True,
)
def get_site(
    slug: str,
    store: RegistrationStore = Depends(get_registration_store),
    collection: SiteCollection = Depends(get_site_collection),
):
    try:
        item = collection.get(slug)
        if item:
            site = item.to_site()
            description = item.description or None
            featured = item.entry.featured
        else:
            row = store.get_registration(slug)
            site = site_from_registration(row) if row else None
            description = None
            featured = False
    except Exception:
        logger.exception("Site lookup error for %s", slug)
        return _server_error()
    if site is None:
        raise HTTPException(status_code=404, detail="Site not found")
    return SiteDetailResponse(
        **site.as_dict(),
        badge=site.type.label,
        full_address=site.full_address,
        directions_url=site.directions_url,
        tel_link=site.tel_link,
        description=description,
        featured=featured,
    )


@router.get(
    "/content/sites",
    response_model=list[SiteResponse],
    response_model_exclude_none=True,
)
def list_content_sites(
    featured: bool = Query(False),
    collection: SiteCollection = Depends(get_site_collection),
):
    try:
        items = collection.featured() if featured else collection.all()
    except Exception:
        logger.exception("Content sites error")
        return _server_error()
    return [item.to_site().as_dict() for item in items]


@router.get("/map", response_model=MapResponse)
def map_payload(
    q: str = Query(""),
    site_type: Optional[str] = Query(None, alias="type"),
    city: str = Query(""),
    known: str = Query("", description="Comma-separated slugs already on the map"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    store: RegistrationStore = Depends(get_registration_store),
    collection: SiteCollection = Depends(get_site_collection),
    settings: Settings = Depends(get_settings),
):
    city = city.strip()
    try:
        rows = store.list_registrations(city=city or None)
        sites = _content_sites(collection, city) + sites_from_registrations(rows)
    except Exception:
        logger.exception("Map API error")
        return _server_error()
    visible = filter_sites(sites, q, TypeFilter.parse(site_type))

    active = (lat, lng) if lat is not None and lng is not None else None
    center_lat, center_lng = compute_center(visible, active)
    known_slugs = [s.strip() for s in known.split(",") if s.strip()]
    return {
        "center": {"lat": center_lat, "lng": center_lng},
        "zoom": DEFAULT_ZOOM,
        "api_key": settings.google_maps_api_key,
        "map_id": settings.google_maps_map_id,
        "marker_kind": marker_kind(settings.google_maps_map_id),
        "count": len(visible),
        "summary": ResultSummary(len(visible), city or None).label,
        "markers": [m.as_dict() for m in markers_for(visible)],
        "diff": diff_known(known_slugs, visible).as_dict(),
    }


@router.get("/partner-progress", response_model=PartnerProgressResponse)
def partner_progress(
    goal: Optional[int] = Query(None, ge=1),
    store: RegistrationStore = Depends(get_registration_store),
    settings: Settings = Depends(get_settings),
):
    try:
        rows = store.list_registrations()
    except Exception:
        logger.exception("Partner progress error")
        return _server_error()
    progress = PartnerProgress(
        count=len(sites_from_registrations(rows)),
        goal=goal or settings.partner_goal,
    )
    return progress.as_dict()


@router.get("/contact")
def contact_usage():
    return PlainTextResponse(
        "Use POST /api/contact to submit the form.",
        status_code=405,
        headers={"Allow": "POST"},
    )


@router.post("/contact")
async def submit_contact(
    request: Request, mailer: Optional[Mailer] = Depends(get_mailer)
):
    try:
        submission = ContactSubmission.from_fields(await read_fields(request))
        if submission.is_spam:
            return _see_other(MESSAGE_SENT_PATH)
        if not submission.is_complete:
            return PlainTextResponse("Missing required fields", status_code=400)
        if mailer is None:
            logger.error(
                "Contact email not configured. Set RESEND_API_KEY and CONTACT_TO_EMAIL env vars."
            )
            return _server_error()
        mailer.send(submission.to_email(mailer.from_email, mailer.to_email))
    except MailerError as exc:
        logger.error("Resend API error %s %s", exc.status_code, exc.body)
        return _server_error()
    except Exception:
        logger.exception("Contact submit error")
        return _server_error()
    return _see_other(MESSAGE_SENT_PATH)


@router.post("/partner")
async def submit_partner(
    request: Request,
    store: RegistrationStore = Depends(get_registration_store),
):
    content_type = request.headers.get("content-type", "")
    if URLENCODED not in content_type:
        return PlainTextResponse("Unsupported Media Type", status_code=415)
    try:
        fields = await read_fields(request)
        if missing_fields(fields, PARTNER_REQUIRED):
            return PlainTextResponse("Missing required fields", status_code=400)
        record = store.create_registration(registration_from_fields(fields))
        logger.info("Partner registration %s saved for %s", record.id, record.org)
    except Exception:
        logger.exception("Partner registration error")
        return _server_error()
    return _see_other(THANKS_PATH)
