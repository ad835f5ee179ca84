from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.rate_limiter import InMemoryRateLimiterService, RateLimiterService
from app.services.tenant_context import get_current_tenant, tenant_route

logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/", "/health"}


class TenantRateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, rate_limiter: RateLimiterService | None = None) -> None:
        super().__init__(app)
        self._rate_limiter = rate_limiter or InMemoryRateLimiterService()

    async def dispatch(self, request: Request, call_next):
        tenant = get_current_tenant(request)
        if not tenant or request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        route = tenant_route(request.url.path)
        decision = self._rate_limiter.check(tenant=tenant, route=route)
        headers = {
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
        }
        if not decision.allowed:
            logger.warning("Rate limit exceeded tenant=%s route=%s", tenant, route)
            headers["Retry-After"] = str(decision.retry_after_seconds)
            return JSONResponse(status_code=429, content={"detail": "Too many requests"}, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
