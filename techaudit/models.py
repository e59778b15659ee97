from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, Any
from enum import Enum


class Strategy(str, Enum):
    MOBILE = "mobile"
    DESKTOP = "desktop"


class _CamelModel(BaseModel):
    """Snake-case fields in Python, camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Report Sections ───────────────────────────────────────────────────────────

class CoreWebVitals(_CamelModel):
    first_contentful_paint: Optional[str] = None
    largest_contentful_paint: Optional[str] = None
    total_blocking_time: Optional[str] = None
    cumulative_layout_shift: Optional[str] = None


class SeoChecks(_CamelModel):
    meta_description: Optional[float] = None
    viewport: Optional[float] = None
    http_status_code: Optional[float] = None
    robots_txt: Optional[float] = None
    crawlable_anchors: Optional[float] = None
    link_text: Optional[float] = None
    is_crawlable: Optional[float] = None


# ─── Response Models ───────────────────────────────────────────────────────────

class AuditReport(_CamelModel):
    url: str
    strategy: Strategy
    performance_score: Optional[float] = None
    core_web_vitals: CoreWebVitals
    seo_score: Optional[float] = None
    screenshot: Optional[str] = None
    raw_lighthouse: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(
        **_CamelModel.model_config,
        json_schema_extra={
            "example": {
                "url": "https://example.com",
                "strategy": "mobile",
                "performanceScore": 0.82,
                "coreWebVitals": {
                    "firstContentfulPaint": "1.2 s",
                    "largestContentfulPaint": "2.4 s",
                    "totalBlockingTime": "150 ms",
                    "cumulativeLayoutShift": "0.01",
                },
                "seoScore": 0.92,
                "screenshot": "data:image/jpeg;base64,...",
                "rawLighthouse": {},
            }
        },
    )


class CoreWebVitalsReport(_CamelModel):
    url: str
    strategy: Strategy
    performance_score: Optional[float] = None
    core_web_vitals: CoreWebVitals


class SeoReport(_CamelModel):
    url: str
    strategy: Strategy
    seo_score: Optional[float] = None
    seo_checks: SeoChecks


class ScreenshotReport(_CamelModel):
    url: str
    strategy: Strategy
    screenshot: Optional[str] = None


class HealthStatus(BaseModel):
    status: str = "ok"
