from azure_pricing.tools.mcp_server import main

main()
