#!/usr/bin/env python3
"""Run the Multi-Provider MCP Server (or a single tool, see --help)"""

import sys
from multi_provider_mcp.main import main

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
