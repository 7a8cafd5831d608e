# =============================================================================
# core/families.py - Service family listing & service discovery
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Helps the agent find the right names BEFORE it queries prices.
#     - format_service_families(): the fixed list of valid families
#     - get_services_by_family():  which services and products exist inside
#                                  one family, discovered from live data
#
# DISCOVERY IS SAMPLED:
#   The API has no "list services" endpoint, so discovery scans up to
#   max_results price records for the family and collects the distinct
#   service / product names it sees.  A larger scan is more complete but
#   slower.
# =============================================================================

from typing import Optional

from azure_pricing.core.client import fetch_with_pagination
from azure_pricing.core.constants import (
    FAMILY_DEFAULT_MAX_RESULTS,
    FAMILY_MAX_RESULTS,
    FAMILY_PRODUCTS_PER_SERVICE,
    SERVICE_FAMILIES,
)
from azure_pricing.core.models import PriceItem


def is_known_family(service_family: str) -> bool:
    return service_family in SERVICE_FAMILIES


def format_service_families() -> str:
    """Render the list of valid service families."""
    families = "\n".join(f"- {family}" for family in SERVICE_FAMILIES)
    return (
        "## Azure Service Families\n\n"
        "The following service families can be used to filter Azure prices:\n\n"
        f"{families}"
    )


def unknown_family_message(service_family: str) -> str:
    return (
        f'Unknown service family: "{service_family}". '
        "Use get_service_families to see valid options."
    )


def collect_services(items: list[PriceItem]) -> dict[str, set[str]]:
    """Map each service name to the distinct product names seen for it."""
    services: dict[str, set[str]] = {}
    for item in items:
        services.setdefault(item.service_name, set()).add(item.product_name)
    return services


def _service_sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive order; on a tie the lowercase spelling sorts first."""
    return name.casefold(), name.swapcase()


def format_services_by_family(service_family: str, items: list[PriceItem]) -> str:
    """Render the services of a family, each with up to 20 product names.

    Args:
        service_family: The family that was scanned (used in headings).
        items: The scanned price records.

    Returns:
        A markdown report.  Services are ordered ignoring case; products
        keep plain string order.
    """
    if not items:
        return f"No services found for service family: {service_family}"

    services = collect_services(items)

    result = f'## Services in "{service_family}" Family\n\n'
    result += f"Found {len(services)} service(s) from {len(items)} price records:\n\n"

    for service_name in sorted(services, key=_service_sort_key):
        products = sorted(services[service_name])
        result += f"### {service_name}\n"
        result += f"Products ({len(products)}):\n"
        for product in products[:FAMILY_PRODUCTS_PER_SERVICE]:
            result += f"- {product}\n"
        if len(products) > FAMILY_PRODUCTS_PER_SERVICE:
            result += f"- ... and {len(products) - FAMILY_PRODUCTS_PER_SERVICE} more\n"
        result += "\n"

    return result


def get_services_by_family(service_family: str, max_results: Optional[int] = None) -> str:
    """Validate the family, scan its price records and render the services.

    An unknown family is answered with a normal text message and no request
    is made.  ``max_results`` defaults to 500 and is clamped to 2000.
    """
    if not is_known_family(service_family):
        return unknown_family_message(service_family)

    limit = min(max_results or FAMILY_DEFAULT_MAX_RESULTS, FAMILY_MAX_RESULTS)
    items = fetch_with_pagination({"serviceFamily": service_family}, limit)
    return format_services_by_family(service_family, items)
