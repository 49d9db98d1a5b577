"""
Perplexity Sonar MCP server.

Run with:
    sonar-mcp --api-key pplx-...
    python -m sonar_mcp.server
"""
