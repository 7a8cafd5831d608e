# =============================================================================
# azure_pricing/core/__init__.py
# =============================================================================
# This package contains ALL business logic for the pricing server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any MCP type.  Every module
#   here works against plain dataclasses and dicts, so it can be imported
#   and tested without an agent, a transport, or (with urlopen patched) the
#   network.
# =============================================================================
