"""Run the EMA MCP stdio server: python -m ema_mcp"""

from .stdio_server import run

run()
