"""
tests/test_dispatcher.py - request boundary: routing, validation, error results
"""

import urllib.parse
from unittest.mock import patch

import pytest

from azure_pricing.tools.dispatcher import TOOLS, ToolResult, dispatch


class TestRouting:
    """tool lookup"""

    def test_registered_tools(self):
        assert set(TOOLS) == {
            "query_azure_prices",
            "compare_vm_prices",
            "get_service_families",
            "get_reservation_prices",
            "get_services_by_family",
        }

    def test_unknown_tool_is_an_error_naming_the_tool(self):
        result = dispatch("get_spot_prices", {})

        assert result == ToolResult("Error: Unknown tool: get_spot_prices", is_error=True)

    def test_service_families_needs_no_arguments(self):
        result = dispatch("get_service_families")

        assert not result.is_error
        assert result.text.startswith("## Azure Service Families")


class TestValidation:
    """argument models reject bad input instead of coercing it"""

    @pytest.mark.parametrize(
        "name, arguments",
        [
            ("query_azure_prices", {"serviceNme": "Storage"}),
            ("query_azure_prices", {"maxResults": "50"}),
            ("query_azure_prices", {"maxResults": 0}),
            ("query_azure_prices", {"primaryOnly": "yes"}),
            ("query_azure_prices", {"priceType": "Spot"}),
            ("compare_vm_prices", {"regions": "eastus"}),
            ("compare_vm_prices", {"priceType": "DevTestConsumption"}),
            ("get_service_families", {"serviceFamily": "Compute"}),
            ("get_reservation_prices", {"armSkuName": 42}),
            ("get_services_by_family", {}),
        ],
    )
    def test_rejected(self, prices_api, name, arguments):
        result = dispatch(name, arguments)

        assert result.is_error
        assert result.text.startswith("Error: ")
        assert prices_api.requested == []


class TestQueryAzurePrices:
    """query_azure_prices through the dispatcher"""

    def test_arguments_reach_the_url(self, prices_api, api_item):
        prices_api.add_page([api_item()])

        result = dispatch("query_azure_prices", {
            "serviceName": "Virtual Machines",
            "armRegionName": "eastus",
            "currencyCode": "GBP",
            "primaryOnly": True,
            "customFilter": "contains(meterName, 'Spot')",
            "maxResults": 10,
        })

        assert not result.is_error
        assert result.text.startswith("Found 1 price(s):")
        query = urllib.parse.parse_qs(urllib.parse.urlsplit(prices_api.requested[0]).query)
        assert query["currencyCode"] == ["'GBP'"]
        assert query["meterRegion"] == ["'primary'"]
        assert query["$filter"] == [
            "serviceName eq 'Virtual Machines' and armRegionName eq 'eastus' and "
            "contains(meterName, 'Spot')"
        ]

    def test_upstream_failure_becomes_error_result(self, prices_api):
        prices_api.add_error(500, "Internal Server Error")

        result = dispatch("query_azure_prices", {"serviceName": "Storage"})

        assert result == ToolResult("Error: API request failed: 500 Internal Server Error", is_error=True)

    def test_empty_result_is_not_an_error(self, prices_api):
        prices_api.add_page([])

        result = dispatch("query_azure_prices", {})

        assert result == ToolResult("No prices found matching the criteria.")


class TestOtherTools:
    """remaining tools through the dispatcher"""

    def test_compare_vm_prices(self, prices_api, api_item):
        prices_api.add_page([api_item(armRegionName="eastus"), api_item(armRegionName="westus")])

        result = dispatch("compare_vm_prices", {"regions": ["westus"]})

        assert not result.is_error
        assert "- westus: " in result.text
        assert "- eastus: " not in result.text

    def test_get_reservation_prices(self, prices_api, api_item):
        prices_api.add_page([api_item(type="Reservation", reservationTerm="1 Year")])

        result = dispatch("get_reservation_prices", {"armSkuName": "Standard_D2s_v3"})

        assert "- 1 Year: 0.096 USD - US East" in result.text

    def test_unknown_family_is_a_normal_result(self, prices_api):
        result = dispatch("get_services_by_family", {"serviceFamily": "Spaceships"})

        assert not result.is_error
        assert 'Unknown service family: "Spaceships"' in result.text

    def test_services_by_family(self, prices_api, api_item):
        prices_api.add_page([api_item(serviceName="Storage", productName="Blob", serviceFamily="Storage")])

        result = dispatch("get_services_by_family", {"serviceFamily": "Storage", "maxResults": 50})

        assert result.text.startswith('## Services in "Storage" Family')

    def test_malformed_upstream_body_becomes_error_result(self):
        with patch("urllib.request.urlopen") as mock_urlopen:
            mock_urlopen.return_value.__enter__.return_value.read.return_value = b"<html>oops</html>"
            result = dispatch("get_reservation_prices", {})

        assert result.is_error
        assert result.text.startswith("Error: ")
