from __future__ import annotations

from contextvars import ContextVar


_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_TENANT_CTX: ContextVar[str | None] = ContextVar("tenant", default=None)


def set_request_context(*, request_id: str | None = None, tenant: str | None = None) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if tenant is not None:
        _TENANT_CTX.set(tenant)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_tenant() -> str | None:
    return _TENANT_CTX.get()


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _TENANT_CTX.set(None)
