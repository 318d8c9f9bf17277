# =============================================================================
# app/auth/middleware.py - Route Protection Middleware
# =============================================================================
# Guards whole path prefixes (by default /admin) the way a frontend
# middleware would: requests without any session credentials never reach
# the handler. Browsers are redirected to the login page; API clients get
# a 401.
#
# This only checks that credentials are present. Routes still verify the
# token itself through get_current_user.
# =============================================================================

import logging
from typing import Iterable

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Cookie set by the Supabase auth helpers
SESSION_COOKIE = "sb-access-token"


def has_session(request: Request) -> bool:
    """True if the request carries a bearer token or a Supabase session cookie."""
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return True
    return bool(request.cookies.get(SESSION_COOKIE))


def is_protected(path: str, prefixes: Iterable[str]) -> bool:
    """Prefix match on path segments: /admin guards /admin and /admin/x, not /administrator."""
    for prefix in prefixes:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


class ProtectedRouteMiddleware(BaseHTTPMiddleware):
    """
    Reject unauthenticated requests to protected path prefixes.

    Args:
        app: The ASGI app
        prefixes: Path prefixes to guard
        login_url: Redirect target for browser requests
    """

    def __init__(self, app, prefixes: Iterable[str], login_url: str = "/login"):
        super().__init__(app)
        self.prefixes = list(prefixes)
        self.login_url = login_url

    async def dispatch(self, request: Request, call_next):
        if not is_protected(request.url.path, self.prefixes) or has_session(request):
            return await call_next(request)

        logger.info(f"Blocked unauthenticated request to {request.url.path}")

        if "text/html" in request.headers.get("accept", ""):
            return RedirectResponse(url=self.login_url, status_code=307)

        return JSONResponse(
            status_code=401,
            content={
                "detail": "Authentication required",
                "code": "AUTH_REQUIRED",
                "suggestion": f"Sign in at {self.login_url} and retry with a bearer token",
            },
            headers={"WWW-Authenticate": "Bearer"},
        )
