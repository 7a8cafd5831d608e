"""
tests/conftest.py - shared fixtures

The Retail Prices API is faked by patching urllib.request.urlopen.  Tests
queue responses on the ``prices_api`` fixture in the order they will be
requested, then inspect ``prices_api.requested`` for the URLs that were hit.

Usage:
    def test_something(prices_api, api_item):
        prices_api.add_page([api_item(retailPrice=1.5)])
        prices_api.add_error(503, "Service Unavailable")
"""

import json
import urllib.error
from unittest.mock import patch

import pytest

from azure_pricing.core.models import PriceItem


BASE_URL = "https://prices.azure.com/api/retail/prices"


def _api_item(**overrides) -> dict:
    item = {
        "currencyCode": "USD",
        "tierMinimumUnits": 0.0,
        "retailPrice": 0.096,
        "unitPrice": 0.096,
        "armRegionName": "eastus",
        "location": "US East",
        "effectiveStartDate": "2023-01-01T00:00:00Z",
        "meterId": "meter-1",
        "meterName": "D2s v3",
        "productId": "DZH318Z0BQ4L",
        "skuId": "DZH318Z0BQ4L/00TG",
        "productName": "Virtual Machines DSv3 Series",
        "skuName": "D2s v3",
        "serviceName": "Virtual Machines",
        "serviceId": "DZH313Z7MMC8",
        "serviceFamily": "Compute",
        "unitOfMeasure": "1 Hour",
        "type": "Consumption",
        "isPrimaryMeterRegion": True,
        "armSkuName": "Standard_D2s_v3",
    }
    item.update(overrides)
    return item


class _FakeResponse:
    status = 200
    reason = "OK"

    def __init__(self, payload: dict):
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakePricesAPI:
    """Queue of canned responses served to urlopen in request order."""

    def __init__(self):
        self.responses = []
        self.requested = []

    def add_page(self, items: list, next_page_link: str | None = None) -> None:
        self.responses.append({
            "BillingCurrency": "USD",
            "CustomerEntityId": "Default",
            "CustomerEntityType": "Retail",
            "Items": items,
            "NextPageLink": next_page_link,
            "Count": len(items),
        })

    def add_error(self, code: int, reason: str) -> None:
        self.responses.append((code, reason))

    def urlopen(self, request, *args, **kwargs):
        url = request.full_url
        self.requested.append(url)
        if not self.responses:
            raise AssertionError(f"unexpected request: {url}")
        response = self.responses.pop(0)
        if isinstance(response, tuple):
            code, reason = response
            raise urllib.error.HTTPError(url, code, reason, None, None)
        return _FakeResponse(response)


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Make sure a developer's .env overrides don't leak into tests."""
    for name in (
        "AZURE_PRICING_API_URL",
        "AZURE_PRICING_API_VERSION",
        "AZURE_PRICING_TIMEOUT",
        "AZURE_PRICING_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Upstream fake
# =============================================================================


@pytest.fixture
def prices_api():
    """Patch urlopen with a FakePricesAPI for the duration of the test."""
    api = FakePricesAPI()
    with patch("urllib.request.urlopen", side_effect=api.urlopen):
        yield api


@pytest.fixture
def api_item():
    """Factory for one upstream Items[] element (camelCase dict)."""
    return _api_item


@pytest.fixture
def price_item():
    """Factory for a parsed PriceItem, overrides given in upstream names."""

    def _make(**overrides) -> PriceItem:
        return PriceItem.from_api(_api_item(**overrides))

    return _make


@pytest.fixture
def next_link():
    """Build an absolute NextPageLink like the API returns."""

    def _make(skip: int) -> str:
        return f"{BASE_URL}?api-version=2023-01-01-preview&$skip={skip}"

    return _make
