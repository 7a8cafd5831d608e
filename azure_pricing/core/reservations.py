# =============================================================================
# core/reservations.py - Reserved-instance prices grouped by SKU
# =============================================================================
#
# Reservation meters come back as one row per (SKU, region, term).  This
# module groups them by SKU so the 1-year and 3-year terms for the same
# size sit next to each other.  Rows keep the API's order inside a group.
# =============================================================================

from typing import Optional

from azure_pricing.core.client import fetch_with_pagination
from azure_pricing.core.constants import RESERVATION_MAX_RESULTS
from azure_pricing.core.models import PriceItem, format_price


NO_RESERVATIONS_MESSAGE = "No reservation prices found for the specified criteria."


def search_reservation_prices(
    service_name: Optional[str] = None,
    arm_sku_name: Optional[str] = None,
    arm_region_name: Optional[str] = None,
    currency_code: Optional[str] = None,
) -> list[PriceItem]:
    params = {
        "priceType": "Reservation",
        "serviceName": service_name,
        "armSkuName": arm_sku_name,
        "armRegionName": arm_region_name,
        "currencyCode": currency_code,
    }
    return fetch_with_pagination(params, RESERVATION_MAX_RESULTS)


def format_reservation_prices(items: list[PriceItem]) -> str:
    """Render reservation rows under one heading per SKU.

    The heading is the ARM SKU name, or the plain SKU name for meters that
    have none.
    """
    if not items:
        return NO_RESERVATIONS_MESSAGE

    grouped: dict[str, list[PriceItem]] = {}
    for item in items:
        grouped.setdefault(item.arm_sku_name or item.sku_name, []).append(item)

    result = "## Reservation Prices\n\n"
    for sku, prices in grouped.items():
        result += f"### {sku}\n"
        for p in prices:
            result += (
                f"- {p.reservation_term or 'N/A'}: {format_price(p.retail_price)} {p.currency_code}"
                f" - {p.location} ({p.product_name})\n"
            )
        result += "\n"

    return result


def get_reservation_prices(
    service_name: Optional[str] = None,
    arm_sku_name: Optional[str] = None,
    arm_region_name: Optional[str] = None,
    currency_code: Optional[str] = None,
) -> str:
    """Fetch and render reservation prices."""
    items = search_reservation_prices(service_name, arm_sku_name, arm_region_name, currency_code)
    return format_reservation_prices(items)
