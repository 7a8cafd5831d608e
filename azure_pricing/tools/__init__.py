# =============================================================================
# azure_pricing/tools/__init__.py
# =============================================================================
# This package is the translation layer between MCP and core/.
#
#   dispatcher.py  → validates arguments, runs a core/ pipeline, and turns
#                    every failure into an error result (no FastMCP imports)
#   mcp_server.py  → the FastMCP server: tool signatures, descriptions the
#                    agent reads, and stderr logging
#
# Tools do NOT contain pricing logic (that's in core/).
# =============================================================================
