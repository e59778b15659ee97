"""
Audit proxy: validates the inbound parameters, makes the single PageSpeed
call and reshapes the Lighthouse result into the fixed report models.
"""
import logging
from typing import Optional

import httpx

from ..config import Settings
from ..errors import InvalidInput, MissingInput
from ..models import (
    AuditReport, CoreWebVitalsReport, ScreenshotReport, SeoReport, Strategy,
)
from .lighthouse import LighthouseResult
from .pagespeed_client import PageSpeedClient

logger = logging.getLogger(__name__)


def resolve_strategy(value: Optional[str]) -> Strategy:
    """Empty or missing means mobile; anything else must be mobile/desktop."""
    if value is None or not value.strip():
        return Strategy.MOBILE
    try:
        return Strategy(value.strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in Strategy)
        raise InvalidInput(detail=f"strategy must be one of: {allowed} (got {value[:40]!r})")


def require_url(value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise MissingInput()
    return value.strip()


class AuditProxy:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.client = PageSpeedClient(settings, transport=transport)

    async def _lighthouse(
        self,
        target_url: Optional[str],
        strategy: Optional[str],
        categories: tuple,
        screenshot: bool = False,
    ):
        url = require_url(target_url)
        resolved = resolve_strategy(strategy)
        logger.info("Running PageSpeed audit for %s (%s, %s)", url, resolved.value, "+".join(categories))
        raw = await self.client.run_pagespeed(url, resolved, categories, screenshot=screenshot)
        return url, resolved, LighthouseResult(raw)

    async def run_audit(self, target_url: Optional[str], strategy: Optional[str] = None) -> AuditReport:
        """Performance + SEO scores, core web vitals, screenshot and the raw result."""
        url, resolved, lh = await self._lighthouse(
            target_url, strategy, ("performance", "seo"), screenshot=True,
        )
        return AuditReport(
            url=url,
            strategy=resolved,
            performance_score=lh.category_score("performance"),
            core_web_vitals=lh.core_web_vitals(),
            seo_score=lh.category_score("seo"),
            screenshot=lh.final_screenshot(),
            raw_lighthouse=lh.raw if self.settings.include_raw_lighthouse else None,
        )

    async def run_core_web_vitals(self, target_url: Optional[str], strategy: Optional[str] = None) -> CoreWebVitalsReport:
        url, resolved, lh = await self._lighthouse(target_url, strategy, ("performance",))
        return CoreWebVitalsReport(
            url=url,
            strategy=resolved,
            performance_score=lh.category_score("performance"),
            core_web_vitals=lh.core_web_vitals(),
        )

    async def run_seo(self, target_url: Optional[str], strategy: Optional[str] = None) -> SeoReport:
        url, resolved, lh = await self._lighthouse(target_url, strategy, ("seo",))
        return SeoReport(
            url=url,
            strategy=resolved,
            seo_score=lh.category_score("seo"),
            seo_checks=lh.seo_checks(),
        )

    async def run_screenshot(self, target_url: Optional[str], strategy: Optional[str] = None) -> ScreenshotReport:
        url, resolved, lh = await self._lighthouse(
            target_url, strategy, ("performance",), screenshot=True,
        )
        return ScreenshotReport(url=url, strategy=resolved, screenshot=lh.final_screenshot())
