"""Auto-open state for the third-party chat widget.

The widget opens itself on page load unless the visitor closed it within the
cooldown window. The close time lives in a cookie as epoch milliseconds.
"""

from __future__ import annotations

import time
from typing import Optional


def current_ms() -> int:
    return int(time.time() * 1000)


def parse_closed_at(raw: Optional[str]) -> Optional[int]:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def remaining_cooldown(closed_at_ms: Optional[int], cooldown_seconds: int, now_ms: Optional[int] = None) -> int:
    """Seconds left before the widget may auto-open again (0 when it may)."""
    if closed_at_ms is None:
        return 0
    now_ms = current_ms() if now_ms is None else now_ms
    left_ms = closed_at_ms + cooldown_seconds * 1000 - now_ms
    return max(0, -(-left_ms // 1000))


def widget_state(widget_id: str, closed_at_ms: Optional[int], cooldown_seconds: int,
                 now_ms: Optional[int] = None) -> dict:
    remaining = remaining_cooldown(closed_at_ms, cooldown_seconds, now_ms)
    return {
        'widgetId': widget_id,
        'autoOpen': remaining == 0,
        'closedAt': closed_at_ms,
        'retryAfter': remaining,
    }


def dismiss(response, cookie_name: str, cooldown_seconds: int, now_ms: Optional[int] = None):
    """Record a dismissal on ``response``; the cookie outlives the cooldown."""
    now_ms = current_ms() if now_ms is None else now_ms
    response.set_cookie(
        cookie_name,
        str(now_ms),
        max_age=max(cooldown_seconds, 60) * 10,
        samesite='Lax',
    )
    return now_ms
