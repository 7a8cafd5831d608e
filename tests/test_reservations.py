"""
tests/test_reservations.py - reservation price grouping
"""

import urllib.parse

from azure_pricing.core.reservations import (
    NO_RESERVATIONS_MESSAGE,
    format_reservation_prices,
    get_reservation_prices,
)


class TestFormatReservationPrices:
    """format_reservation_prices"""

    def test_empty_list(self):
        assert format_reservation_prices([]) == "No reservation prices found for the specified criteria."

    def test_groups_in_fetch_order_without_sorting(self, price_item):
        items = [
            price_item(reservationTerm="3 Years", retailPrice=1500, unitOfMeasure="1 Hour"),
            price_item(reservationTerm="1 Year", retailPrice=900),
        ]

        text = format_reservation_prices(items)

        assert text == (
            "## Reservation Prices\n\n"
            "### Standard_D2s_v3\n"
            "- 3 Years: 1500 USD - US East (Virtual Machines DSv3 Series)\n"
            "- 1 Year: 900 USD - US East (Virtual Machines DSv3 Series)\n"
            "\n"
        )

    def test_falls_back_to_sku_name(self, price_item):
        items = [price_item(armSkuName="", skuName="P1 v2", reservationTerm="1 Year")]

        assert "### P1 v2\n" in format_reservation_prices(items)

    def test_whole_float_price_drops_trailing_zero(self, price_item):
        items = [price_item(reservationTerm="1 Year", retailPrice=900.0)]

        assert "- 1 Year: 900 USD - US East" in format_reservation_prices(items)

    def test_missing_term_shows_na(self, price_item):
        assert "- N/A: " in format_reservation_prices([price_item()])

    def test_first_seen_group_order(self, price_item):
        items = [
            price_item(armSkuName="Standard_E4s_v5"),
            price_item(armSkuName="Standard_B1s"),
            price_item(armSkuName="Standard_E4s_v5"),
        ]

        text = format_reservation_prices(items)

        assert text.count("### ") == 2
        assert text.index("### Standard_E4s_v5") < text.index("### Standard_B1s")


class TestGetReservationPrices:
    """get_reservation_prices end to end against the fake API"""

    def test_forces_reservation_price_type(self, prices_api):
        prices_api.add_page([])

        result = get_reservation_prices(service_name="SQL Database", arm_region_name="westeurope")

        assert result == NO_RESERVATIONS_MESSAGE
        query = urllib.parse.parse_qs(urllib.parse.urlsplit(prices_api.requested[0]).query)
        assert query["$filter"] == [
            "serviceName eq 'SQL Database' and "
            "armRegionName eq 'westeurope' and "
            "priceType eq 'Reservation'"
        ]
