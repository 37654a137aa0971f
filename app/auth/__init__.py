# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-secret authentication for scheduled-job endpoints.
#
# Usage:
#   from app.auth import verify_cron_auth
#
#   @router.post("/tasks/release", dependencies=[Depends(verify_cron_auth)])
#   async def release(): ...
# =============================================================================

from app.auth.dependencies import verify_cron_auth

__all__ = [
    "verify_cron_auth",
]
