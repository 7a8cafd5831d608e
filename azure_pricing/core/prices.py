# =============================================================================
# core/prices.py - Raw price query & listing
# =============================================================================
#
# The most general tool: any combination of filter fields, rendered as one
# block per price record.  The other report modules are narrower queries
# with their own grouping.
# =============================================================================

from typing import Any, Mapping

from azure_pricing.core.client import fetch_with_pagination
from azure_pricing.core.constants import DEFAULT_MAX_RESULTS, QUERY_MAX_RESULTS
from azure_pricing.core.models import PriceItem, format_price


NO_PRICES_MESSAGE = "No prices found matching the criteria."


def search_prices(
    params: Mapping[str, Any],
    max_results: int | None = None,
) -> list[PriceItem]:
    """Fetch price records for arbitrary filter parameters.

    ``max_results`` defaults to 100 and is clamped to 1000.
    """
    limit = min(max_results or DEFAULT_MAX_RESULTS, QUERY_MAX_RESULTS)
    return fetch_with_pagination(params, limit)


def _format_item(item: PriceItem) -> str:
    lines = [
        f"**{item.product_name}** - {item.sku_name}",
        f"  - Retail Price: {format_price(item.retail_price)} {item.currency_code}/{item.unit_of_measure}",
        f"  - Region: {item.location} ({item.arm_region_name})",
        f"  - Service: {item.service_name} ({item.service_family})",
        f"  - Type: {item.price_type}",
        f"  - Meter: {item.meter_name}",
        f"  - ARM SKU: {item.arm_sku_name or 'N/A'}",
    ]

    if item.reservation_term:
        lines.append(f"  - Reservation Term: {item.reservation_term}")

    if item.savings_plan:
        lines.append("  - Savings Plans:")
        for plan in item.savings_plan:
            lines.append(f"    - {plan.term}: {format_price(plan.retail_price)} {item.currency_code}")

    return "\n".join(lines)


def format_price_items(items: list[PriceItem]) -> str:
    """Render price records as a count header plus one block per record."""
    if not items:
        return NO_PRICES_MESSAGE

    blocks = "\n\n".join(_format_item(item) for item in items)
    return f"Found {len(items)} price(s):\n\n{blocks}"
