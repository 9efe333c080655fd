"""
EMA MCP Server

Tool layer exposing the European Medicines Agency public JSON data files.
All tools are auto-discovered via registry.py
"""

from .registry import execute_tool, get_all_tools, get_tool
from .base import MCPTool, tool

__version__ = "0.1.0"

__all__ = ["execute_tool", "get_all_tools", "get_tool", "MCPTool", "tool", "__version__"]
