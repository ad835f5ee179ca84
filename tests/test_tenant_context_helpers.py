from starlette.requests import Request

from app.services.tenant_context import extract_tenant_slug, get_current_tenant
from utils.slug import normalize_slug


def _build_request(path: str = "/", headers: list[tuple[bytes, bytes]] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "query_string": b"",
        "headers": headers or [],
    }
    return Request(scope)


def test_tenant_from_path_is_normalized():
    request = _build_request("/api/Café Zé/orders/quote")

    assert extract_tenant_slug(request) == "cafe-ze"


def test_tenant_falls_back_to_header():
    request = _build_request("/health", headers=[(b"x-tenant-id", b"Burger_Bar")])

    assert extract_tenant_slug(request) == "burger-bar"


def test_no_tenant():
    assert extract_tenant_slug(_build_request("/health")) is None
    assert extract_tenant_slug(_build_request("/api/%%%/orders/quote")) is None


def test_state_wins_over_path():
    request = _build_request("/api/other/orders/quote")
    request.state.tenant_slug = "burger-bar"

    assert get_current_tenant(request) == "burger-bar"


def test_normalize_slug_collapses_separators():
    assert normalize_slug("  São  Paulo -- Grill ") == "sao-paulo-grill"
    assert normalize_slug("") == ""
