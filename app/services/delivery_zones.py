from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Iterable, Optional

from app.core.config import DEFAULT_DELIVERY_FEE, DEFAULT_DELIVERY_TIME_MINUTES
from app.core.money import format_money
from app.schemas.delivery import DeliveryQuote, DeliveryZone


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def normalize_postcode(postcode: str) -> str:
    return _WHITESPACE.sub("", postcode or "").upper()


def _zone_matches(zone: DeliveryZone, postcode: str) -> bool:
    for zone_postcode in zone.postcodes:
        normalized = normalize_postcode(zone_postcode)
        if not normalized:
            continue
        # "SW1" covers "SW1A1AA"
        if postcode == normalized or postcode.startswith(normalized):
            return True
    return False


def match_delivery_zone(
    zones: Iterable[DeliveryZone],
    postcode: str,
) -> tuple[bool, Optional[DeliveryZone]]:
    """Returns (deliverable, zone). No zones configured means delivery everywhere."""
    zones = list(zones)
    if not zones:
        return True, None

    normalized = normalize_postcode(postcode)
    if not normalized:
        return False, None
    for zone in zones:
        if _zone_matches(zone, normalized):
            return True, zone
    return False, None


def calculate_delivery_fee(
    zones: Iterable[DeliveryZone],
    postcode: str,
    order_value: Decimal,
    *,
    default_fee: Decimal = DEFAULT_DELIVERY_FEE,
    currency_symbol: str = "£",
) -> DeliveryQuote:
    deliverable, zone = match_delivery_zone(zones, postcode)
    delivery_time = get_delivery_time(zone)

    if not deliverable:
        logger.info("Delivery unavailable postcode=%s", normalize_postcode(postcode))
        return DeliveryQuote(
            available=False,
            delivery_time=delivery_time,
            error="Delivery not available to this postcode",
        )

    if zone is None:
        return DeliveryQuote(available=True, fee=default_fee, delivery_time=delivery_time)

    if order_value < zone.min_order:
        return DeliveryQuote(
            available=False,
            zone=zone,
            delivery_time=delivery_time,
            error=f"Minimum order value for this area is {format_money(zone.min_order, currency_symbol)}",
        )

    return DeliveryQuote(available=True, fee=zone.delivery_fee, zone=zone, delivery_time=delivery_time)


def get_delivery_time(zone: Optional[DeliveryZone]) -> int:
    if zone is not None and zone.delivery_time:
        return zone.delivery_time
    return DEFAULT_DELIVERY_TIME_MINUTES
