"""
techaudit/routers/audit_router.py: PageSpeed audit endpoints.
All routes sit behind the shared-secret gate, which runs before any
query parameter is looked at.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import Settings, get_settings
from ..models import AuditReport, CoreWebVitalsReport, ScreenshotReport, SeoReport
from ..services.audit_proxy import AuditProxy
from ..utils.secret import require_secret

router = APIRouter(tags=["Audit"], dependencies=[Depends(require_secret)])

URL_QUERY = Query(None, description="Page to audit, e.g. https://example.com")
STRATEGY_QUERY = Query(None, description="mobile (default) or desktop")


def get_audit_proxy(settings: Settings = Depends(get_settings)) -> AuditProxy:
    return AuditProxy(settings)


@router.get("/pagespeed-audit", response_model=AuditReport)
async def pagespeed_audit(
    url: Optional[str] = URL_QUERY,
    strategy: Optional[str] = STRATEGY_QUERY,
    proxy: AuditProxy = Depends(get_audit_proxy),
):
    """
    Full audit: performance and SEO scores, core web vitals, final screenshot
    (base64 data URL) and the raw Lighthouse result for the debug panel.
    """
    return await proxy.run_audit(url, strategy)


@router.get("/audit", response_model=AuditReport)
async def audit(
    url: Optional[str] = URL_QUERY,
    strategy: Optional[str] = STRATEGY_QUERY,
    proxy: AuditProxy = Depends(get_audit_proxy),
):
    """Short alias of /pagespeed-audit."""
    return await proxy.run_audit(url, strategy)


@router.get("/pagespeed-core-web-vitals", response_model=CoreWebVitalsReport)
async def pagespeed_core_web_vitals(
    url: Optional[str] = URL_QUERY,
    strategy: Optional[str] = STRATEGY_QUERY,
    proxy: AuditProxy = Depends(get_audit_proxy),
):
    return await proxy.run_core_web_vitals(url, strategy)


@router.get("/pagespeed-seo", response_model=SeoReport)
async def pagespeed_seo(
    url: Optional[str] = URL_QUERY,
    strategy: Optional[str] = STRATEGY_QUERY,
    proxy: AuditProxy = Depends(get_audit_proxy),
):
    """SEO score plus the individual crawlability checks (each 0-1 or null)."""
    return await proxy.run_seo(url, strategy)


@router.get("/pagespeed-screenshot", response_model=ScreenshotReport)
async def pagespeed_screenshot(
    url: Optional[str] = URL_QUERY,
    strategy: Optional[str] = STRATEGY_QUERY,
    proxy: AuditProxy = Depends(get_audit_proxy),
):
    return await proxy.run_screenshot(url, strategy)
