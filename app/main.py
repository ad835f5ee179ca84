import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import CORS_ALLOW_ORIGIN_REGEX, CORS_ORIGINS
from app.core.logging_setup import configure_logging
from app.core.startup_checks import validate_runtime_configuration
from app.middleware.observability import ObservabilityMiddleware
from app.middleware.tenant_context import TenantContextMiddleware
from app.middleware.tenant_rate_limit import TenantRateLimitMiddleware
from app.routers.addons import router as addons_router
from app.routers.delivery import router as delivery_router
from app.routers.internal_metrics import router as internal_metrics_router
from app.routers.orders import router as orders_router
from app.routers.settings import router as settings_router
from app.routers.vouchers import router as vouchers_router

configure_logging()

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Addon Pricing API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=CORS_ALLOW_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
app.add_middleware(TenantContextMiddleware)
app.add_middleware(TenantRateLimitMiddleware)


def _startup_tasks() -> None:
    try:
        validate_runtime_configuration()
    except Exception:
        logger.exception("%s ERROR startup failed", STARTUP_PREFIX)
        raise


# Routers
app.include_router(addons_router)
app.include_router(orders_router)
app.include_router(delivery_router)
app.include_router(vouchers_router)
app.include_router(settings_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
