# =============================================================================
# core/constants.py - Shared constants for the pricing server
# =============================================================================
#
# SERVICE_FAMILIES is the single source of truth for valid family names.
# Both get_service_families (the listing) and get_services_by_family (the
# validator) read it from here.
# =============================================================================

# --- Upstream API ---
API_BASE_URL = "https://prices.azure.com/api/retail/prices"
API_VERSION = "2023-01-01-preview"

# --- Filter fields, in the order they are emitted into $filter ---
FILTER_FIELDS = (
    "serviceName",
    "serviceFamily",
    "armRegionName",
    "armSkuName",
    "priceType",
    "productName",
    "skuName",
    "meterName",
)

# --- Result caps (items fetched per tool call) ---
DEFAULT_MAX_RESULTS = 100
QUERY_MAX_RESULTS = 1000
COMPARE_MAX_RESULTS = 500
RESERVATION_MAX_RESULTS = 200
FAMILY_DEFAULT_MAX_RESULTS = 500
FAMILY_MAX_RESULTS = 2000

# --- Report truncation ---
COMPARE_PRICES_PER_SKU = 10
FAMILY_PRODUCTS_PER_SERVICE = 20

SERVICE_FAMILIES = (
    "Analytics",
    "Azure Arc",
    "Azure Communication Services",
    "Azure Security",
    "Azure Stack",
    "Compute",
    "Containers",
    "Data",
    "Databases",
    "Developer Tools",
    "Dynamics",
    "Gaming",
    "Integration",
    "Internet of Things",
    "Management and Governance",
    "Microsoft Syntex",
    "Mixed Reality",
    "Networking",
    "Other",
    "Power Platform",
    "Quantum Computing",
    "Security",
    "Storage",
    "Telecommunications",
    "Web",
    "Windows Virtual Desktop",
)
