"""
Static site collection: markdown files with YAML front matter.

Each ``<slug>.md`` under the content directory describes one curated site.
The front matter is validated against ``SiteEntry``; the markdown body is
kept as the description.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError

from foodsites.sites import Site, SiteType

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


class ContentError(ValueError):
    """Raised when a content file cannot be parsed or fails validation."""


class SiteEntry(BaseModel):
    name: str
    type: SiteType
    category: str
    address: str
    city: str
    zip: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    phone: Optional[str] = None
    hours: Optional[str] = None
    featured: bool = False


class ContentSite(BaseModel):
    slug: str
    entry: SiteEntry
    description: str = ""

    def to_site(self) -> Site:
        data = self.entry.model_dump(exclude={"featured"})
        return Site(slug=self.slug, **data)


def split_front_matter(text: str) -> tuple[str, str]:
    lines = text.splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return "", text
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :]).strip()
    raise ContentError("Unterminated front matter block")


def parse_site_file(path: Path) -> ContentSite:
    try:
        front_matter, body = split_front_matter(path.read_text(encoding="utf-8"))
        data = yaml.safe_load(front_matter) or {}
    except (ContentError, yaml.YAMLError) as exc:
        raise ContentError(f"{path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ContentError(f"{path.name}: front matter must be a mapping")
    # YAML reads bare ZIP codes as integers.
    for key in ("zip", "phone"):
        if isinstance(data.get(key), int):
            data[key] = str(data[key])
    try:
        entry = SiteEntry.model_validate(data)
    except ValidationError as exc:
        raise ContentError(f"{path.name}: {exc}") from exc
    return ContentSite(slug=path.stem, entry=entry, description=body)


class SiteCollection:
    """Loads and serves the curated site collection from a directory."""

    def __init__(self, content_dir: str | Path):
        self.content_dir = Path(content_dir)
        self._entries: Optional[dict[str, ContentSite]] = None

    def load(self) -> dict[str, ContentSite]:
        if self._entries is not None:
            return self._entries
        entries: dict[str, ContentSite] = {}
        if self.content_dir.is_dir():
            for path in sorted(self.content_dir.glob("*.md")):
                item = parse_site_file(path)
                entries[item.slug] = item
        else:
            logger.info("Content directory %s not found; no static sites", self.content_dir)
        self._entries = entries
        return entries

    def all(self) -> list[ContentSite]:
        return list(self.load().values())

    def get(self, slug: str) -> Optional[ContentSite]:
        return self.load().get(slug)

    def featured(self) -> list[ContentSite]:
        return [item for item in self.all() if item.entry.featured]

    def sites(self) -> list[Site]:
        return [item.to_site() for item in self.all()]

    def reload(self) -> None:
        self._entries = None
