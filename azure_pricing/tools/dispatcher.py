# =============================================================================
# tools/dispatcher.py - Tool name + arguments → text result
# =============================================================================
#
# WHAT THIS FILE DOES:
#   The single request boundary of the server.  dispatch() looks up a tool
#   by name, validates its argument bag against that tool's parameter model,
#   runs the core/ pipeline, and ALWAYS returns a ToolResult:
#
#     dispatch("get_service_families", {})           → ToolResult(text)
#     dispatch("no_such_tool", {})                   → ToolResult("Error: ...", is_error=True)
#     dispatch("query_azure_prices", {"bogus": 1})   → ToolResult("Error: ...", is_error=True)
#
#   Every exception raised below this point (HTTP failure, malformed JSON,
#   validation error) is caught HERE and turned into an error result.
#   Nothing below retries.
#
# PARAMETER MODELS:
#   One pydantic model per tool.  Field aliases are the camelCase names the
#   agent sends; unknown fields are rejected (extra="forbid") and strings,
#   booleans and integers are strict, so a mistyped argument is an error
#   rather than a silent coercion.
#
#   This module knows nothing about FastMCP; tools/mcp_server.py adapts it.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from azure_pricing.core.compare import compare_vm_prices
from azure_pricing.core.families import format_service_families, get_services_by_family
from azure_pricing.core.models import PriceType
from azure_pricing.core.prices import format_price_items, search_prices
from azure_pricing.core.reservations import get_reservation_prices


logger = logging.getLogger(__name__)


class UnknownToolError(Exception):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


@dataclass(frozen=True)
class ToolResult:
    """The text payload returned for one tool call."""

    text: str
    is_error: bool = False


# =============================================================================
# Parameter models (one per tool)
# =============================================================================
class ToolParams(BaseModel):
    model_config = ConfigDict(extra="forbid")


class QueryPricesParams(ToolParams):
    service_name: Optional[StrictStr] = Field(None, alias="serviceName")
    service_family: Optional[StrictStr] = Field(None, alias="serviceFamily")
    arm_region_name: Optional[StrictStr] = Field(None, alias="armRegionName")
    arm_sku_name: Optional[StrictStr] = Field(None, alias="armSkuName")
    price_type: Optional[PriceType] = Field(None, alias="priceType")
    currency_code: Optional[StrictStr] = Field(None, alias="currencyCode")
    product_name: Optional[StrictStr] = Field(None, alias="productName")
    sku_name: Optional[StrictStr] = Field(None, alias="skuName")
    meter_name: Optional[StrictStr] = Field(None, alias="meterName")
    custom_filter: Optional[StrictStr] = Field(None, alias="customFilter")
    primary_only: Optional[StrictBool] = Field(None, alias="primaryOnly")
    max_results: Optional[StrictInt] = Field(None, alias="maxResults", ge=1)

    def query_params(self) -> dict[str, Any]:
        """The upstream query mapping (camelCase keys, unset fields dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"max_results"})


class CompareVmPricesParams(ToolParams):
    sku_name: Optional[StrictStr] = Field(None, alias="skuName")
    regions: Optional[list[StrictStr]] = None
    price_type: Optional[Literal["Consumption", "Reservation"]] = Field(None, alias="priceType")
    currency_code: Optional[StrictStr] = Field(None, alias="currencyCode")


class ServiceFamiliesParams(ToolParams):
    pass


class ReservationPricesParams(ToolParams):
    service_name: Optional[StrictStr] = Field(None, alias="serviceName")
    arm_sku_name: Optional[StrictStr] = Field(None, alias="armSkuName")
    arm_region_name: Optional[StrictStr] = Field(None, alias="armRegionName")
    currency_code: Optional[StrictStr] = Field(None, alias="currencyCode")


class ServicesByFamilyParams(ToolParams):
    service_family: StrictStr = Field(alias="serviceFamily")
    max_results: Optional[StrictInt] = Field(None, alias="maxResults", ge=1)


# =============================================================================
# Handlers
# =============================================================================
def _query_azure_prices(params: QueryPricesParams) -> str:
    items = search_prices(params.query_params(), params.max_results)
    return format_price_items(items)


def _compare_vm_prices(params: CompareVmPricesParams) -> str:
    return compare_vm_prices(
        sku_name=params.sku_name,
        regions=params.regions,
        price_type=params.price_type,
        currency_code=params.currency_code,
    )


def _get_service_families(params: ServiceFamiliesParams) -> str:
    return format_service_families()


def _get_reservation_prices(params: ReservationPricesParams) -> str:
    return get_reservation_prices(
        service_name=params.service_name,
        arm_sku_name=params.arm_sku_name,
        arm_region_name=params.arm_region_name,
        currency_code=params.currency_code,
    )


def _get_services_by_family(params: ServicesByFamilyParams) -> str:
    return get_services_by_family(params.service_family, params.max_results)


class ToolSpec(NamedTuple):
    params: type[ToolParams]
    handler: Callable[[Any], str]


TOOLS: dict[str, ToolSpec] = {
    "query_azure_prices": ToolSpec(QueryPricesParams, _query_azure_prices),
    "compare_vm_prices": ToolSpec(CompareVmPricesParams, _compare_vm_prices),
    "get_service_families": ToolSpec(ServiceFamiliesParams, _get_service_families),
    "get_reservation_prices": ToolSpec(ReservationPricesParams, _get_reservation_prices),
    "get_services_by_family": ToolSpec(ServicesByFamilyParams, _get_services_by_family),
}


def dispatch(name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
    """Run a tool by name and return its text result.

    Args:
        name: One of the keys of TOOLS.
        arguments: The raw argument bag, keyed by camelCase parameter name.

    Returns:
        A ToolResult.  Failures of any kind come back with ``is_error=True``
        and the text ``"Error: <message>"``; this function does not raise.
    """
    try:
        tool = TOOLS.get(name)
        if tool is None:
            raise UnknownToolError(name)
        params = tool.params.model_validate(dict(arguments or {}))
        return ToolResult(tool.handler(params))
    except Exception as exc:
        logger.exception("Tool %s failed", name)
        return ToolResult(f"Error: {exc}", is_error=True)
