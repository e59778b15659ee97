"""
Null-safe readers for the `lighthouseResult` block of a PageSpeed response.

Every accessor walks its own path and returns None when any container on
the way is missing or is not a dict, or when the leaf has the wrong type.
One missing audit never affects another field.
"""
import math
from typing import Any, Optional

from ..models import CoreWebVitals, SeoChecks

# audit id -> CoreWebVitals field
CORE_WEB_VITAL_AUDITS = {
    "first_contentful_paint": "first-contentful-paint",
    "largest_contentful_paint": "largest-contentful-paint",
    "total_blocking_time": "total-blocking-time",
    "cumulative_layout_shift": "cumulative-layout-shift",
}

# audit id -> SeoChecks field
SEO_CHECK_AUDITS = {
    "meta_description": "meta-description",
    "viewport": "viewport",
    "http_status_code": "http-status-code",
    "robots_txt": "robots-txt",
    "crawlable_anchors": "crawlable-anchors",
    "link_text": "link-text",
    "is_crawlable": "is-crawlable",
}


def dig(document: Any, *keys: str) -> Any:
    """Follow `keys` through nested dicts, None as soon as a step is missing."""
    node = document
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
        if node is None:
            return None
    return node


def _number(value: Any) -> Optional[float]:
    """A Lighthouse score: a finite number in 0..1, else None."""
    # bool is an int subclass, but a boolean score is malformed
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        score = float(value)
    except OverflowError:
        return None
    if not math.isfinite(score) or not 0.0 <= score <= 1.0:
        return None
    return score


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class LighthouseResult:
    """Read-only view over the raw `lighthouseResult` dict."""

    def __init__(self, raw: Any):
        self.raw = raw if isinstance(raw, dict) else {}

    def category_score(self, name: str) -> Optional[float]:
        return _number(dig(self.raw, "categories", name, "score"))

    def audit_display_value(self, audit_id: str) -> Optional[str]:
        return _text(dig(self.raw, "audits", audit_id, "displayValue"))

    def audit_score(self, audit_id: str) -> Optional[float]:
        return _number(dig(self.raw, "audits", audit_id, "score"))

    def final_screenshot(self) -> Optional[str]:
        """Base64 data URI of the final rendered frame."""
        return _text(dig(self.raw, "audits", "final-screenshot", "details", "data"))

    def core_web_vitals(self) -> CoreWebVitals:
        return CoreWebVitals(**{
            field: self.audit_display_value(audit_id)
            for field, audit_id in CORE_WEB_VITAL_AUDITS.items()
        })

    def seo_checks(self) -> SeoChecks:
        return SeoChecks(**{
            field: self.audit_score(audit_id)
            for field, audit_id in SEO_CHECK_AUDITS.items()
        })
