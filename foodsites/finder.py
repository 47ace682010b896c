"""
Search and type filtering over the site list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from foodsites.sites import Site, SiteType


class TypeFilter(str, Enum):
    ALL = "all"
    DROP_OFF = "drop-off"
    PICK_UP = "pick-up"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TypeFilter":
        """Unknown or empty values mean no filtering."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL

    def matches(self, site_type: SiteType) -> bool:
        if self is TypeFilter.ALL:
            return True
        if self is TypeFilter.BOTH:
            return site_type is SiteType.BOTH
        return site_type.value == self.value or site_type is SiteType.BOTH


def matches_query(site: Site, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    return q in site.city.lower() or q in site.name.lower() or q in site.zip


def filter_sites(
    sites: Iterable[Site],
    query: str = "",
    type_filter: TypeFilter = TypeFilter.ALL,
) -> list[Site]:
    return [
        site
        for site in sites
        if matches_query(site, query) and type_filter.matches(site.type)
    ]


@dataclass
class ResultSummary:
    count: int
    city: Optional[str] = None

    @property
    def label(self) -> str:
        text = f"{self.count} site{'' if self.count == 1 else 's'}"
        if self.city:
            text = f"{text} in {self.city}"
        return text
