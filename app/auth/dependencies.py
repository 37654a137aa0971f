# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Scheduled-job endpoints (daily maintenance, idea cleanup, task release) are
# called by a scheduler holding a shared secret:
#
#   Authorization: Bearer <CRON_SECRET>
#
# Usage:
#   from app.auth import verify_cron_auth
#
#   @router.post("/daily", dependencies=[Depends(verify_cron_auth)])
#   async def daily(): ...
# =============================================================================

import logging
import secrets

from fastapi import Header

from app.config import settings
from app.exceptions import CronNotConfiguredError, CronUnauthorizedError

logger = logging.getLogger(__name__)


async def verify_cron_auth(authorization: str | None = Header(None)) -> None:
    """
    Check the scheduler's bearer token.

    - development: always allowed
    - CRON_SECRET unset: 500 (the endpoint can't be protected)
    - header missing or not exactly "Bearer <CRON_SECRET>": 401

    Raises:
        CronNotConfiguredError: If CRON_SECRET is not set
        CronUnauthorizedError: If the header is missing or wrong
    """
    if settings.ENVIRONMENT == "development":
        logger.debug("Cron auth skipped in development")
        return

    if not settings.CRON_SECRET:
        logger.error("CRON_SECRET is not set - refusing scheduled-job request")
        raise CronNotConfiguredError()

    if not authorization:
        logger.warning("Cron request without Authorization header")
        raise CronUnauthorizedError("missing authorization header")

    expected = f"Bearer {settings.CRON_SECRET}"
    if not secrets.compare_digest(authorization.encode(), expected.encode()):
        logger.warning("Cron request with invalid token")
        raise CronUnauthorizedError("invalid token")
