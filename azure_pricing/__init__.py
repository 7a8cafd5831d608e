# =============================================================================
# azure_pricing/__init__.py
# =============================================================================
# MCP tool server for the Azure Retail Prices API.
#
#   core/   → pure Python: HTTP paging, filter building, report formatting
#   tools/  → the MCP-facing layer: argument validation, dispatch, FastMCP
# =============================================================================

__version__ = "1.0.0"
