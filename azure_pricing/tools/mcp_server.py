# =============================================================================
# tools/mcp_server.py - FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares the five MCP tools the agent can call.  Each tool is a thin
#   wrapper: it collects the arguments the agent actually supplied, hands
#   them to tools/dispatcher.py, and returns the text report.
#
# HOW IT WORKS (the flow):
#   1. The agent decides it needs prices and calls a tool by name
#   2. FastMCP validates the arguments against the signature below; the
#      Strict* types reject "50" for an int or "yes" for a bool
#   3. The wrapper calls dispatch(), which runs the core/ pipeline
#   4. A normal result goes back as text; a failed one is raised as a
#      ToolError, which MCP delivers as a text result with isError set
#
# PARAMETER NAMES:
#   Parameters are camelCase (serviceName, armSkuName, ...) because they
#   mirror the Retail Prices API field names the agent will see in reports
#   and in customFilter expressions.
#
# RUNNING THIS SERVER:
#     a) python main.py              (stdio transport)
#     b) python -m azure_pricing
#     c) azure-pricing-mcp           (console script, after pip install)
# =============================================================================

import logging
import os
import sys
from typing import Literal, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import StrictBool, StrictInt, StrictStr

from azure_pricing.tools.dispatcher import dispatch


# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout carries the MCP JSON stream.  A log line on
# stdout would corrupt the protocol.
#
# Color scheme:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status / failures
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("AZURE_PRICING_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the first line and size of a report in GREEN, then return it."""
    first_line = text.split("\n", 1)[0]
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {first_line}{_RESET}")
    return text


def _run(tool_name: str, **arguments) -> str:
    """Dispatch a tool call with only the arguments the agent supplied."""
    supplied = {name: value for name, value in arguments.items() if value is not None}
    _log_request(tool_name, **supplied)

    result = dispatch(tool_name, supplied)
    if result.is_error:
        _log_status(f"{tool_name} failed: {result.text}")
        raise ToolError(result.text)

    return _log_response(tool_name, result.text)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("azure-pricing-mcp")


# =============================================================================
# TOOL 1: query_azure_prices
# =============================================================================
# The general-purpose query.  Every other tool is a narrower, pre-grouped
# version of this one.
# =============================================================================
@mcp.tool()
def query_azure_prices(
    serviceName: Optional[StrictStr] = None,
    serviceFamily: Optional[StrictStr] = None,
    armRegionName: Optional[StrictStr] = None,
    armSkuName: Optional[StrictStr] = None,
    priceType: Optional[Literal["Consumption", "Reservation", "DevTestConsumption"]] = None,
    currencyCode: Optional[StrictStr] = None,
    productName: Optional[StrictStr] = None,
    skuName: Optional[StrictStr] = None,
    meterName: Optional[StrictStr] = None,
    customFilter: Optional[StrictStr] = None,
    primaryOnly: Optional[StrictBool] = None,
    maxResults: Optional[StrictInt] = None,
) -> str:
    """Query Azure retail prices with optional filters.

    Supports filtering by service name, region, SKU, price type, and more.
    Returns pricing information including retail price, unit of measure,
    and meter details.

    Args:
        serviceName: Service name, e.g. 'Virtual Machines', 'Storage',
            'SQL Database'. Case-sensitive.
        serviceFamily: Service family, e.g. 'Compute', 'Storage', 'Databases'.
        armRegionName: Azure region, e.g. 'eastus', 'westeurope'.
        armSkuName: ARM SKU name, e.g. 'Standard_D2s_v3'.
        priceType: Consumption, Reservation or DevTestConsumption.
        currencyCode: Currency for prices (default: USD), e.g. EUR, GBP, JPY.
        productName: Product name, e.g. 'Virtual Machines Dv3 Series'.
        skuName: SKU name.
        meterName: Meter name.
        customFilter: Custom OData filter expression for advanced queries,
            e.g. "contains(meterName, 'Spot')".
        primaryOnly: If true, only return primary meter prices.
        maxResults: Maximum number of results (default: 100, max: 1000).
    """
    return _run(
        "query_azure_prices",
        serviceName=serviceName,
        serviceFamily=serviceFamily,
        armRegionName=armRegionName,
        armSkuName=armSkuName,
        priceType=priceType,
        currencyCode=currencyCode,
        productName=productName,
        skuName=skuName,
        meterName=meterName,
        customFilter=customFilter,
        primaryOnly=primaryOnly,
        maxResults=maxResults,
    )


# =============================================================================
# TOOL 2: compare_vm_prices
# =============================================================================
@mcp.tool()
def compare_vm_prices(
    skuName: Optional[StrictStr] = None,
    regions: Optional[list[StrictStr]] = None,
    priceType: Optional[Literal["Consumption", "Reservation"]] = None,
    currencyCode: Optional[StrictStr] = None,
) -> str:
    """Compare prices for Virtual Machine SKUs across regions or SKU sizes.

    Useful for cost optimization.  Results are grouped per ARM SKU with the
    ten cheapest regions listed first.

    Args:
        skuName: VM ARM SKU name to compare, e.g. 'Standard_D2s_v3'.
            If omitted, all VM SKUs in the scanned records are compared.
        regions: Regions to compare, e.g. ['eastus', 'westeurope'].
            If omitted, all regions are shown.
        priceType: Consumption (default) or Reservation.
        currencyCode: Currency for prices (default: USD).
    """
    return _run(
        "compare_vm_prices",
        skuName=skuName,
        regions=regions,
        priceType=priceType,
        currencyCode=currencyCode,
    )


# =============================================================================
# TOOL 3: get_service_families
# =============================================================================
# No network call; the agent uses it to pick a valid serviceFamily.
# =============================================================================
@mcp.tool()
def get_service_families() -> str:
    """Get the list of Azure service families that can be used to filter prices."""
    return _run("get_service_families")


# =============================================================================
# TOOL 4: get_reservation_prices
# =============================================================================
@mcp.tool()
def get_reservation_prices(
    serviceName: Optional[StrictStr] = None,
    armSkuName: Optional[StrictStr] = None,
    armRegionName: Optional[StrictStr] = None,
    currencyCode: Optional[StrictStr] = None,
) -> str:
    """Get reservation (reserved instance) prices for a service or SKU.

    Shows 1-year and 3-year reservation pricing grouped by SKU.

    Args:
        serviceName: Service name, e.g. 'Virtual Machines', 'SQL Database'.
        armSkuName: ARM SKU name, e.g. 'Standard_D2s_v3'.
        armRegionName: Azure region, e.g. 'eastus'.
        currencyCode: Currency for prices (default: USD).
    """
    return _run(
        "get_reservation_prices",
        serviceName=serviceName,
        armSkuName=armSkuName,
        armRegionName=armRegionName,
        currencyCode=currencyCode,
    )


# =============================================================================
# TOOL 5: get_services_by_family
# =============================================================================
# Discovery tool: call it BEFORE query_azure_prices when the agent does not
# know the exact serviceName / productName strings.
# =============================================================================
@mcp.tool()
def get_services_by_family(
    serviceFamily: StrictStr,
    maxResults: Optional[StrictInt] = None,
) -> str:
    """Get the services and product types within an Azure service family.

    Useful for discovering what resources are available before querying
    prices.

    Args:
        serviceFamily: The family to explore, e.g. 'Compute', 'Storage',
            'Databases'.  See get_service_families for valid values.
        maxResults: Maximum number of price records to scan (default: 500,
            max: 2000).  Higher values give more complete results but take
            longer.
    """
    return _run(
        "get_services_by_family",
        serviceFamily=serviceFamily,
        maxResults=maxResults,
    )


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Load .env, configure logging and serve over stdio."""
    load_dotenv()
    configure_logging()
    logging.info("Azure Pricing MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
