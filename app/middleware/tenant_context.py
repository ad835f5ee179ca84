from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware

from app.core.request_context import set_request_context
from app.services.tenant_context import extract_tenant_slug


class TenantContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        request.state.tenant_slug = extract_tenant_slug(request)
        if request.state.tenant_slug:
            set_request_context(tenant=request.state.tenant_slug)
        return await call_next(request)
