"""
techaudit/utils/secret.py: shared-secret gate for the API routes.
The dashboard sends the secret in the x-techaudit-secret header.
"""
import logging
import secrets
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from techaudit.config import Settings, get_settings
from techaudit.errors import ServerMisconfigured, Unauthorized

logger = logging.getLogger(__name__)

SECRET_HEADER = "x-techaudit-secret"
secret_header = APIKeyHeader(name=SECRET_HEADER, auto_error=False)


def check_secret(supplied: Optional[str], expected: Optional[str]) -> None:
    if not expected:
        logger.error("TECHAUDIT_SECRET is not set in the environment")
        raise ServerMisconfigured("TECHAUDIT_SECRET")
    if supplied is None or not secrets.compare_digest(supplied.encode(), expected.encode()):
        raise Unauthorized()


async def require_secret(
    supplied: Optional[str] = Security(secret_header),
    settings: Settings = Depends(get_settings),
) -> None:
    check_secret(supplied, settings.techaudit_secret)


async def require_secret_for_health(
    supplied: Optional[str] = Security(secret_header),
    settings: Settings = Depends(get_settings),
) -> None:
    if settings.health_requires_secret:
        check_secret(supplied, settings.techaudit_secret)
