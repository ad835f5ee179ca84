from __future__ import annotations

import re

from fastapi import Request

from utils.slug import normalize_slug

_TENANT_PATH = re.compile(r"^/api/([^/]+)/(.*)$")


def extract_tenant_slug(request: Request) -> str | None:
    """Tenant do path (/api/{tenant}/...) ou, em seguida, do header X-Tenant-ID."""
    match = _TENANT_PATH.match(request.url.path)
    raw = match.group(1) if match else request.headers.get("X-Tenant-ID")
    slug = normalize_slug(raw or "")
    return slug or None


def get_current_tenant(request: Request) -> str | None:
    tenant = getattr(request.state, "tenant_slug", None)
    if tenant:
        return tenant
    return extract_tenant_slug(request)


def tenant_route(path: str) -> str:
    """Path below the tenant prefix, e.g. addons/selection. Other paths come back unchanged."""
    match = _TENANT_PATH.match(path)
    if not match:
        return path
    return match.group(2).strip("/")
