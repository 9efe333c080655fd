"""
EMA Tools Package

All tool modules in this directory are auto-discovered by registry.py
Each tool should either:
1. Inherit from MCPTool and implement required methods
2. Use the @tool decorator for simple function-based tools

Shared query logic lives in the ema_utils package.
"""

# Tools are auto-discovered, no explicit imports needed
