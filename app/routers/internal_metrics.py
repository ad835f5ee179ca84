from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, status

from app.core import config
from app.core.metrics import request_metrics

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


def require_internal_token(x_internal_token: str | None = Header(default=None)) -> None:
    configured = (config.INTERNAL_METRICS_TOKEN or "").strip()
    if not configured:
        if config.IS_PROD:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Métricas em produção requerem INTERNAL_METRICS_TOKEN configurado",
            )
        return
    if (x_internal_token or "").strip() != configured:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")


@router.get("", dependencies=[Depends(require_internal_token)])
def endpoint_metrics():
    return {"endpoints": request_metrics.snapshot()}


@router.get("/tenants", dependencies=[Depends(require_internal_token)])
def tenant_metrics():
    return {"tenants": request_metrics.snapshot_per_tenant()}
