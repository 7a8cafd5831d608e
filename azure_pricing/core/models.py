# =============================================================================
# core/models.py - Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every record that flows from the
# Azure Retail Prices API into a report.  They are frozen: a price record is
# built once from the upstream JSON and never changed afterwards.
#
# UPSTREAM NAMING:
#   The API speaks camelCase ("retailPrice", "armSkuName").  The from_api()
#   constructors are the ONLY place that knows those keys; everything past
#   them uses the snake_case attributes below.
#
# PRICES AS DECIMALS:
#   Prices are parsed as decimal.Decimal and printed through format_price(),
#   which drops trailing zeros the way a JSON number prints (0.096 stays
#   "0.096", 30.0 becomes "30", 0.0 becomes "0").
# =============================================================================

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Literal, Optional


PriceType = Literal["Consumption", "Reservation", "DevTestConsumption"]


def _to_decimal(value: Any) -> Decimal:
    """Convert a JSON number (int, float or Decimal) to a Decimal."""
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_price(value: Decimal) -> str:
    """Render a price without trailing zeros ("30.0" -> "30", "0.0960" -> "0.096")."""
    return format(value.normalize(), "f")


# -----------------------------------------------------------------------------
# SavingsPlan: one savings-plan price attached to a consumption meter
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SavingsPlan:
    """A savings-plan price for a meter (e.g. the "1 Year" commitment)."""

    unit_price: Decimal
    retail_price: Decimal
    term: str                          # "1 Year", "3 Years"

    @classmethod
    def from_api(cls, data: dict) -> "SavingsPlan":
        return cls(
            unit_price=_to_decimal(data.get("unitPrice")),
            retail_price=_to_decimal(data.get("retailPrice")),
            term=data.get("term", ""),
        )


# -----------------------------------------------------------------------------
# PriceItem: one priced meter at a point in time
# -----------------------------------------------------------------------------
# Every report in core/ is a different grouping of a list of these.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PriceItem:
    """One row of the Azure retail price sheet."""

    currency_code: str                 # "USD"
    tier_minimum_units: Decimal
    retail_price: Decimal
    unit_price: Decimal
    arm_region_name: str               # "eastus"
    location: str                      # "US East"
    effective_start_date: str          # ISO timestamp, kept as text
    meter_id: str
    meter_name: str
    product_id: str
    product_name: str                  # "Virtual Machines Dv3 Series"
    sku_id: str
    sku_name: str                      # "D2s v3"
    service_name: str                  # "Virtual Machines"
    service_id: str
    service_family: str                # "Compute"
    unit_of_measure: str               # "1 Hour"
    price_type: str                    # one of PriceType
    is_primary_meter_region: bool
    arm_sku_name: str                  # "Standard_D2s_v3"; empty for many meters
    reservation_term: Optional[str] = None
    savings_plan: tuple[SavingsPlan, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: dict) -> "PriceItem":
        """Build a PriceItem from one element of the API's ``Items`` array."""
        return cls(
            currency_code=data.get("currencyCode", ""),
            tier_minimum_units=_to_decimal(data.get("tierMinimumUnits")),
            retail_price=_to_decimal(data.get("retailPrice")),
            unit_price=_to_decimal(data.get("unitPrice")),
            arm_region_name=data.get("armRegionName", ""),
            location=data.get("location", ""),
            effective_start_date=data.get("effectiveStartDate", ""),
            meter_id=data.get("meterId", ""),
            meter_name=data.get("meterName", ""),
            product_id=data.get("productId", ""),
            product_name=data.get("productName", ""),
            sku_id=data.get("skuId", ""),
            sku_name=data.get("skuName", ""),
            service_name=data.get("serviceName", ""),
            service_id=data.get("serviceId", ""),
            service_family=data.get("serviceFamily", ""),
            unit_of_measure=data.get("unitOfMeasure", ""),
            price_type=data.get("type", ""),
            is_primary_meter_region=bool(data.get("isPrimaryMeterRegion", False)),
            arm_sku_name=data.get("armSkuName", ""),
            reservation_term=data.get("reservationTerm") or None,
            savings_plan=tuple(
                SavingsPlan.from_api(plan) for plan in data.get("savingsPlan") or []
            ),
        )


# -----------------------------------------------------------------------------
# PricePage: one page of the API response
# -----------------------------------------------------------------------------
# If next_page_link is set, more items exist upstream.  The link is absolute
# and already encodes every query parameter, so it is followed verbatim.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PricePage:
    """A single page returned by the Retail Prices API."""

    billing_currency: str
    items: list[PriceItem] = field(default_factory=list)
    next_page_link: Optional[str] = None
    count: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "PricePage":
        items = [PriceItem.from_api(item) for item in data.get("Items") or []]
        return cls(
            billing_currency=data.get("BillingCurrency", ""),
            items=items,
            next_page_link=data.get("NextPageLink") or None,
            count=int(data.get("Count") or len(items)),
        )
