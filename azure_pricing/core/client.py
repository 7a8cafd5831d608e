# =============================================================================
# core/client.py - Retail Prices API client (fetch + pagination)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues the initial query against https://prices.azure.com/api/retail/prices
#   and follows the NextPageLink chain until either the chain ends or enough
#   items have been collected.
#
# FAILURE POLICY:
#   - First page fails (HTTP 4xx/5xx)  →  PricingAPIError, the call aborts.
#   - A later page fails               →  stop paging, return what we have.
#     The caller still gets a useful (partial) report.
#   - Transport errors (DNS, refused connection) are not HTTP statuses and
#     propagate on any page.
#   Nothing here retries.
#
# CONFIGURATION (read on every call, see main.py for .env loading):
#   AZURE_PRICING_API_URL      upstream endpoint
#   AZURE_PRICING_API_VERSION  api-version query parameter
#   AZURE_PRICING_TIMEOUT      per-request timeout in seconds (unset = none)
# =============================================================================

import json
import logging
import os
import urllib.error
import urllib.parse
import urllib.request
from decimal import Decimal
from typing import Any, Mapping

from azure_pricing.core.constants import API_BASE_URL, API_VERSION, DEFAULT_MAX_RESULTS
from azure_pricing.core.filters import build_filter
from azure_pricing.core.models import PriceItem, PricePage


logger = logging.getLogger(__name__)


class PricingAPIError(Exception):
    """The Retail Prices API answered the initial query with an error status."""

    def __init__(self, status: int, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(f"API request failed: {status} {reason}")


def build_query_url(params: Mapping[str, Any]) -> str:
    """Build the URL of the first page for a set of query parameters.

    ``currencyCode`` and ``meterRegion`` are sent quoted (``'USD'``,
    ``'primary'``), which is what the API expects.
    """
    query = {
        "api-version": os.environ.get("AZURE_PRICING_API_VERSION", API_VERSION),
    }

    if params.get("currencyCode"):
        query["currencyCode"] = f"'{params['currencyCode']}'"

    if params.get("primaryOnly"):
        query["meterRegion"] = "'primary'"

    odata_filter = build_filter(params)
    if odata_filter:
        query["$filter"] = odata_filter

    base_url = os.environ.get("AZURE_PRICING_API_URL", API_BASE_URL)
    return f"{base_url}?{urllib.parse.urlencode(query)}"


def _get_page(url: str) -> PricePage:
    """GET one page and parse it.  HTTP error statuses raise HTTPError."""
    request = urllib.request.Request(url, headers={"Accept": "application/json"})

    timeout = os.environ.get("AZURE_PRICING_TIMEOUT")
    kwargs = {"timeout": float(timeout)} if timeout else {}

    with urllib.request.urlopen(request, **kwargs) as response:
        body = response.read().decode("utf-8")

    return PricePage.from_api(json.loads(body, parse_float=Decimal))


def query_prices(params: Mapping[str, Any]) -> PricePage:
    """Fetch the first page of results for ``params``.

    Raises:
        PricingAPIError: The API answered with a non-success status.
    """
    url = build_query_url(params)
    logger.debug("GET %s", url)
    try:
        return _get_page(url)
    except urllib.error.HTTPError as exc:
        raise PricingAPIError(exc.code, str(exc.reason)) from exc


def fetch_with_pagination(
    params: Mapping[str, Any],
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[PriceItem]:
    """Fetch up to ``max_results`` items, following NextPageLink as needed.

    Args:
        params: Query parameters (filter fields plus currencyCode,
            primaryOnly and customFilter).
        max_results: Upper bound on the number of items returned.

    Returns:
        Items in arrival order, truncated to ``max_results``.  May be shorter
        if the chain ended or a later page failed.
    """
    page = query_prices(params)
    items = list(page.items)
    pages = 1

    while page.next_page_link and len(items) < max_results:
        try:
            page = _get_page(page.next_page_link)
        except urllib.error.HTTPError as exc:
            logger.warning(
                "Stopping pagination after %d page(s): %s %s",
                pages, exc.code, exc.reason,
            )
            break
        items.extend(page.items)
        pages += 1
        logger.debug("Fetched page %d, %d item(s) so far", pages, len(items))

    return items[:max_results]
