import os
import re
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}

ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_STAGE = ENV_NORMALIZED in {"stage", "staging", "homolog"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}
PUBLIC_BASE_DOMAIN = os.getenv("PUBLIC_BASE_DOMAIN", "").strip().lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Pricing defaults
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "GBP").strip().upper() or "GBP"
SUPPORTED_CURRENCIES = {"GBP", "USD", "EUR"}

_default_fee_env = os.getenv("DEFAULT_DELIVERY_FEE", "2.50").strip()
try:
    DEFAULT_DELIVERY_FEE = Decimal(_default_fee_env)
except InvalidOperation as exc:
    raise RuntimeError(f"Invalid DEFAULT_DELIVERY_FEE: {_default_fee_env}") from exc

DEFAULT_DELIVERY_TIME_MINUTES = int(os.getenv("DEFAULT_DELIVERY_TIME_MINUTES", "30"))

# Rate limit por tenant+endpoint
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "1000"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
RATE_LIMIT_SELECTION_PER_MINUTE = int(os.getenv("RATE_LIMIT_SELECTION_PER_MINUTE", "3000"))

INTERNAL_METRICS_TOKEN = os.getenv("INTERNAL_METRICS_TOKEN", "").strip()

FEATURE_SERVER_SIDE_REPRICING = os.getenv("FEATURE_SERVER_SIDE_REPRICING", "1").strip().lower() in _TRUE_VALUES

# CORS
_cors_env = os.getenv("ORIGENS_CORS", os.getenv("CORS_ORIGINS", ""))
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

_cors_origin_regex_env = os.getenv("CORS_ALLOW_ORIGIN_REGEX", "").strip()
if _cors_origin_regex_env:
    CORS_ALLOW_ORIGIN_REGEX = _cors_origin_regex_env
elif not IS_DEV and PUBLIC_BASE_DOMAIN:
    escaped_base_domain = re.escape(PUBLIC_BASE_DOMAIN)
    CORS_ALLOW_ORIGIN_REGEX = rf"^https://([a-z0-9-]+\.)?{escaped_base_domain}$"
else:
    CORS_ALLOW_ORIGIN_REGEX = None
