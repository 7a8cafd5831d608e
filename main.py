# =============================================================================
# main.py - Entry Point for the Azure Pricing MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Environment variables are loaded from .env (if present)
#   2. Logging is configured on stderr
#   3. The FastMCP server starts on the stdio transport and waits for an
#      MCP client (an agent, an IDE, or `fastmcp dev`) to connect
#
# CONFIGURATION (.env or environment):
#   AZURE_PRICING_API_URL      default https://prices.azure.com/api/retail/prices
#   AZURE_PRICING_API_VERSION  default 2023-01-01-preview
#   AZURE_PRICING_TIMEOUT      seconds per request; unset = wait indefinitely
#   AZURE_PRICING_LOG_LEVEL    default INFO
# =============================================================================

from azure_pricing.tools.mcp_server import main


if __name__ == "__main__":
    main()
