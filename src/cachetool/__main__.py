"""Run the CacheTool MCP server with ``python -m cachetool``."""

from .server import main

if __name__ == "__main__":
    main()
