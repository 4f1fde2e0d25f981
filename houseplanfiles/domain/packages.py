from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence


INITIAL_FEATURE_COUNT = 4
PREMIUM_MOBILE_INITIAL_COUNT = 4

# Split before each price marker: "₹ 15/sq.ft Rs 20/sq.ft" -> two lines.
_PRICE_MARKER = re.compile(r'(?=₹|\bRs\.?|\bINR\b)', re.IGNORECASE)
_LEADING_DASHES = re.compile(r'^[\s\-–—]+')


@dataclass(frozen=True)
class FeatureList:
    visible: list[str]
    hidden: list[str]

    @property
    def hidden_count(self) -> int:
        return len(self.hidden)

    @property
    def toggle_label(self) -> str:
        if not self.hidden:
            return ''
        return f"View {self.hidden_count} More Benefits"


def truncate_features(features: Sequence[str], limit: int = INITIAL_FEATURE_COUNT) -> FeatureList:
    """Split a package's features into the initially visible part and the rest."""
    cleaned = [str(f).strip() for f in (features or []) if str(f).strip()]
    return FeatureList(visible=cleaned[:limit], hidden=cleaned[limit:])


def is_numeric_price(price) -> bool:
    if isinstance(price, (int, float)):
        return True
    try:
        float(str(price).replace(',', '').strip())
        return True
    except (TypeError, ValueError):
        return False


def numeric_price(price):
    if not is_numeric_price(price):
        return None
    if isinstance(price, (int, float)):
        return float(price)
    return float(str(price).replace(',', '').strip())


def price_lines(price) -> list[str]:
    """Break a free-text price into display lines at currency markers.

    Numeric prices are returned as a single line.
    """
    if price is None:
        return []
    text = str(price).strip()
    if not text:
        return []
    if is_numeric_price(text):
        return [text]
    lines = []
    for chunk in _PRICE_MARKER.split(text):
        line = _LEADING_DASHES.sub('', chunk).strip()
        if line:
            lines.append(line)
    return lines


def mobile_window(items: Sequence, expanded: bool, limit: int = PREMIUM_MOBILE_INITIAL_COUNT) -> list:
    return list(items) if expanded else list(items)[:limit]
