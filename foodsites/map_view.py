"""
Map centering and marker bookkeeping for the site map.

The map front end keeps one marker per site. ``MarkerLayer`` tracks which
markers are currently shown and works out the smallest set of changes that
brings the map in line with a new site list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from foodsites.sites import Site, SiteType

DEFAULT_CENTER = (32.2988, -90.1848)  # Jackson, MS
DEFAULT_ZOOM = 11

MARKER_COLORS = {
    SiteType.BOTH: "red",
    SiteType.DROP_OFF: "blue",
    SiteType.PICK_UP: "green",
}


@dataclass(frozen=True)
class Marker:
    slug: str
    title: str
    lat: float
    lng: float
    color: str

    @classmethod
    def from_site(cls, site: Site) -> "Marker":
        return cls(
            slug=site.slug,
            title=site.name,
            lat=float(site.lat),
            lng=float(site.lng),
            color=MARKER_COLORS[site.type],
        )

    def as_dict(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "position": {"lat": self.lat, "lng": self.lng},
            "color": self.color,
        }


@dataclass
class MarkerDiff:
    added: list[Marker] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    updated: list[Marker] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.updated)

    def as_dict(self) -> dict:
        return {
            "added": [m.as_dict() for m in self.added],
            "removed": list(self.removed),
            "updated": [m.as_dict() for m in self.updated],
        }


def markers_for(sites: Iterable[Site]) -> list[Marker]:
    return [Marker.from_site(site) for site in sites if site.has_coords]


def compute_center(
    sites: Iterable[Site], active: Optional[tuple[float, float]] = None
) -> tuple[float, float]:
    if active and active[0] and active[1]:
        return active
    markers = markers_for(sites)
    if not markers:
        return DEFAULT_CENTER
    lat = sum(m.lat for m in markers) / len(markers)
    lng = sum(m.lng for m in markers) / len(markers)
    return lat, lng


def marker_kind(map_id: Optional[str]) -> str:
    """Advanced markers need a map id; otherwise the classic marker is used."""
    return "advanced" if map_id else "classic"


class MarkerLayer:
    def __init__(self, markers: Iterable[Marker] = ()):
        self.markers: dict[str, Marker] = {m.slug: m for m in markers}

    def sync(self, sites: Iterable[Site]) -> MarkerDiff:
        wanted = {m.slug: m for m in markers_for(sites)}
        diff = MarkerDiff()
        for slug in self.markers:
            if slug not in wanted:
                diff.removed.append(slug)
        for slug, marker in wanted.items():
            current = self.markers.get(slug)
            if current is None:
                diff.added.append(marker)
            elif current != marker:
                diff.updated.append(marker)
        self.markers = wanted
        return diff

    def clear(self) -> list[str]:
        removed = list(self.markers)
        self.markers = {}
        return removed

    def __len__(self) -> int:
        return len(self.markers)

    def __contains__(self, slug: str) -> bool:
        return slug in self.markers


def diff_known(known_slugs: Iterable[str], sites: Iterable[Site]) -> MarkerDiff:
    """Diff for a client that only reports which slugs it already shows."""
    known = list(dict.fromkeys(known_slugs))
    wanted = {m.slug: m for m in markers_for(sites)}
    return MarkerDiff(
        added=[m for slug, m in wanted.items() if slug not in known],
        removed=[slug for slug in known if slug not in wanted],
    )
