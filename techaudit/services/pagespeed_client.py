"""
PageSpeed Insights v5 client: one GET per audit, no retries.
"""
import logging
from typing import Iterable, Optional

import httpx

from ..config import Settings
from ..errors import ServerMisconfigured, UpstreamFailure
from ..models import Strategy

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str:
    """Best-effort message from a failed upstream response."""
    try:
        message = response.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    if isinstance(message, str) and message:
        return f"HTTP {response.status_code}: {message[:300]}"
    return f"HTTP {response.status_code}"


class PageSpeedClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def build_params(
        self,
        url: str,
        strategy: Strategy,
        categories: Iterable[str],
        screenshot: bool = False,
    ) -> list:
        params = [("url", url), ("strategy", strategy.value)]
        params += [("category", c) for c in categories]
        if screenshot:
            params.append(("screenshot", "true"))
        params.append(("key", self.settings.pagespeed_api_key))
        return params

    async def run_pagespeed(
        self,
        url: str,
        strategy: Strategy,
        categories: Iterable[str],
        screenshot: bool = False,
    ) -> dict:
        """Call runPagespeed and return the raw `lighthouseResult` dict."""
        if not self.settings.pagespeed_api_key:
            logger.error("PAGESPEED_API_KEY is not set in the environment")
            raise ServerMisconfigured("PAGESPEED_API_KEY")

        params = self.build_params(url, strategy, categories, screenshot)
        timeout = self.settings.upstream_timeout_seconds
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.get(self.settings.pagespeed_api_url, params=params)
        except httpx.TimeoutException:
            logger.error("PageSpeed call for %s timed out after %ss", url, timeout)
            raise UpstreamFailure(detail=f"Upstream request timed out after {timeout}s")
        except httpx.HTTPError as e:
            logger.error("PageSpeed call for %s failed: %s", url, e)
            raise UpstreamFailure(detail=f"Upstream request failed: {str(e)[:200]}")

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.error("PageSpeed returned an error for %s: %s", url, detail)
            raise UpstreamFailure(detail=detail)

        try:
            data = response.json()
        except ValueError:
            logger.error("PageSpeed returned a non-JSON body for %s", url)
            raise UpstreamFailure(detail="Upstream response is not valid JSON")

        lighthouse = data.get("lighthouseResult") if isinstance(data, dict) else None
        if not isinstance(lighthouse, dict):
            logger.error("PageSpeed response for %s has no lighthouseResult", url)
            raise UpstreamFailure(detail="Upstream response has no lighthouseResult")
        return lighthouse
