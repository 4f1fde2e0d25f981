from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from math import ceil
from typing import Iterable, Optional, Sequence


ALL_CATEGORY = 'All'
VIDEO_CATEGORY = 'Video'
GROUPS_PER_PAGE = 12


@dataclass
class GalleryGroup:
    key: str
    title: str
    items: list = field(default_factory=list)

    @property
    def cover(self):
        return self.items[0] if self.items else None

    @property
    def created_at(self) -> datetime:
        cover = self.cover
        return getattr(cover, 'created_at', None) or datetime.min


@dataclass(frozen=True)
class GroupPage:
    groups: list[GalleryGroup]
    page: int
    pages: int
    total: int


class PageOutOfRange(ValueError):
    """Requested page is outside 1..pages."""


def group_key(title: Optional[str]) -> str:
    return (title or '').strip().lower()


def categories(items: Iterable) -> list[str]:
    """Tabs: "All", the distinct item categories in first-seen order, "Video"."""
    seen = []
    for item in items:
        cat = (getattr(item, 'category', None) or '').strip()
        if cat and cat not in seen and cat not in (ALL_CATEGORY, VIDEO_CATEGORY):
            seen.append(cat)
    return [ALL_CATEGORY, *seen, VIDEO_CATEGORY]


def filter_by_category(items: Sequence, category: Optional[str]) -> list:
    if not category or category == ALL_CATEGORY:
        return list(items)
    return [i for i in items if (getattr(i, 'category', None) or '').strip() == category]


def group_by_title(items: Iterable) -> list[GalleryGroup]:
    """Group items sharing a title (case and whitespace insensitive).

    Groups are ordered by their first item's ``created_at``, newest first.
    """
    groups: dict[str, GalleryGroup] = {}
    for item in items:
        key = group_key(getattr(item, 'title', None))
        group = groups.get(key)
        if group is None:
            group = groups[key] = GalleryGroup(key=key, title=(item.title or '').strip())
        group.items.append(item)
    return sorted(groups.values(), key=lambda g: g.created_at, reverse=True)


def paginate_groups(groups: Sequence[GalleryGroup], page: int = 1, per_page: int = GROUPS_PER_PAGE) -> GroupPage:
    total = len(groups)
    pages = max(1, ceil(total / per_page))
    if page < 1 or page > pages:
        raise PageOutOfRange(f"Page must be between 1 and {pages}")
    start = (page - 1) * per_page
    return GroupPage(groups=list(groups[start:start + per_page]), page=page, pages=pages, total=total)
