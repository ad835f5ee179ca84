from __future__ import annotations

import logging

from app.core import config

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"


def validate_runtime_configuration() -> None:
    if config.DEFAULT_CURRENCY not in config.SUPPORTED_CURRENCIES:
        logger.critical("%s unsupported currency=%s", STARTUP_PREFIX, config.DEFAULT_CURRENCY)
        raise RuntimeError(f"Unsupported DEFAULT_CURRENCY: {config.DEFAULT_CURRENCY}")

    if config.DEFAULT_DELIVERY_FEE < 0:
        logger.critical("%s negative default delivery fee=%s", STARTUP_PREFIX, config.DEFAULT_DELIVERY_FEE)
        raise RuntimeError("DEFAULT_DELIVERY_FEE cannot be negative")

    if config.IS_PROD and not config.INTERNAL_METRICS_TOKEN:
        logger.critical("%s INTERNAL_METRICS_TOKEN missing in production", STARTUP_PREFIX)
        raise RuntimeError("INTERNAL_METRICS_TOKEN is required in production")

    logger.info(
        "%s configuration ok env=%s currency=%s default_delivery_fee=%s",
        STARTUP_PREFIX,
        config.ENV,
        config.DEFAULT_CURRENCY,
        config.DEFAULT_DELIVERY_FEE,
    )
