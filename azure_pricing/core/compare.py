# =============================================================================
# core/compare.py - VM price comparison across regions / SKU sizes
# =============================================================================
#
# HOW THE COMPARISON IS BUILT:
#   1. Fetch up to 500 Virtual Machines meters (optionally one ARM SKU).
#   2. Keep only the requested regions, if any were given.
#   3. Group by ARM SKU name, in the order each SKU is first seen.
#   4. Inside each group, list the 10 cheapest regions.
#
# The agent gets a short ranked table per SKU rather than 500 raw rows.
# =============================================================================

from typing import Optional

from azure_pricing.core.client import fetch_with_pagination
from azure_pricing.core.constants import COMPARE_MAX_RESULTS, COMPARE_PRICES_PER_SKU
from azure_pricing.core.models import PriceItem, format_price


NO_VM_PRICES_MESSAGE = "No VM prices found for the specified criteria."


def search_vm_prices(
    sku_name: Optional[str] = None,
    price_type: Optional[str] = None,
    currency_code: Optional[str] = None,
) -> list[PriceItem]:
    """Fetch Virtual Machines meters for the comparison.

    ``sku_name`` is an ARM SKU name such as ``Standard_D2s_v3`` and narrows
    the query on ``armSkuName``.  ``price_type`` defaults to Consumption.
    """
    params = {
        "serviceName": "Virtual Machines",
        "priceType": price_type or "Consumption",
        "currencyCode": currency_code,
    }
    if sku_name:
        params["armSkuName"] = sku_name

    return fetch_with_pagination(params, COMPARE_MAX_RESULTS)


def filter_regions(items: list[PriceItem], regions: Optional[list[str]]) -> list[PriceItem]:
    """Keep items whose region is in ``regions``; no-op when it is empty."""
    if not regions:
        return items
    wanted = set(regions)
    return [item for item in items if item.arm_region_name in wanted]


def group_by_arm_sku(items: list[PriceItem]) -> dict[str, list[PriceItem]]:
    grouped: dict[str, list[PriceItem]] = {}
    for item in items:
        grouped.setdefault(item.arm_sku_name, []).append(item)
    return grouped


def format_vm_comparison(items: list[PriceItem]) -> str:
    """Render the per-SKU comparison table, cheapest region first."""
    if not items:
        return NO_VM_PRICES_MESSAGE

    result = "## VM Price Comparison\n\n"
    for sku, prices in group_by_arm_sku(items).items():
        result += f"### {sku}\n"
        cheapest = sorted(prices, key=lambda p: p.retail_price)[:COMPARE_PRICES_PER_SKU]
        for p in cheapest:
            result += (
                f"- {p.arm_region_name}: {format_price(p.retail_price)} {p.currency_code}/"
                f"{p.unit_of_measure} ({p.product_name})\n"
            )
        result += "\n"

    return result


def compare_vm_prices(
    sku_name: Optional[str] = None,
    regions: Optional[list[str]] = None,
    price_type: Optional[str] = None,
    currency_code: Optional[str] = None,
) -> str:
    """Fetch, filter and render a VM price comparison."""
    items = search_vm_prices(sku_name, price_type, currency_code)
    return format_vm_comparison(filter_regions(items, regions))
