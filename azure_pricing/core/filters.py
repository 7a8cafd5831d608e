# =============================================================================
# core/filters.py - OData $filter construction
# =============================================================================
#
# Turns a flat mapping of query parameters into the conjunctive filter
# expression the Retail Prices API accepts:
#
#     {"serviceName": "Virtual Machines", "armRegionName": "eastus"}
#       →  "serviceName eq 'Virtual Machines' and armRegionName eq 'eastus'"
#
# TRUST BOUNDARY:
#   Values are interpolated as-is and customFilter is appended verbatim.
#   Nothing is escaped; a value containing a quote produces whatever
#   expression it spells.  The caller (the agent) is trusted.
# =============================================================================

from typing import Any, Mapping

from azure_pricing.core.constants import FILTER_FIELDS


def build_filter(params: Mapping[str, Any]) -> str:
    """Build the ``$filter`` expression for a set of query parameters.

    Args:
        params: Query parameters keyed by upstream field name
            (``serviceName``, ``armSkuName``, ...).  Keys outside
            FILTER_FIELDS are ignored, except ``customFilter``.

    Returns:
        The clauses joined with `` and `` in FILTER_FIELDS order, followed by
        the custom filter.  An empty string when nothing applies.
    """
    clauses = [
        f"{name} eq '{params[name]}'"
        for name in FILTER_FIELDS
        if params.get(name)
    ]

    custom_filter = params.get("customFilter")
    if custom_filter:
        clauses.append(custom_filter)

    return " and ".join(clauses)
