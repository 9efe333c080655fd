"""
MCP Tool Registry

Single source of truth for tool discovery and collection.
Automatically discovers and registers all tools from ema_mcp/tools/.
"""

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Dict, List, Optional

from .base import MCPTool, ToolDefinition, get_function_tools

logger = logging.getLogger(__name__)

TOOLS_PACKAGE = "ema_mcp.tools"

# Global registry
_tool_registry: Dict[str, ToolDefinition] = {}
_initialized: bool = False


def _discover_tools() -> None:
    """
    Discover and register all tools from the ema_mcp/tools/ directory.
    This is the ONLY place where tools are collected.
    """
    global _tool_registry, _initialized

    if _initialized:
        return

    tools_path = Path(__file__).parent / "tools"

    if not tools_path.exists():
        logger.warning(f"Tools directory not found: {tools_path}")
        _initialized = True
        return

    for _, module_name, is_pkg in pkgutil.iter_modules([str(tools_path)]):
        # Helper packages (ema_utils) carry no tools
        if module_name.startswith("_") or is_pkg:
            continue

        try:
            full_module_name = f"{TOOLS_PACKAGE}.{module_name}"
            module = importlib.import_module(full_module_name)
            logger.debug(f"Loaded tool module: {full_module_name}")

            for name, obj in inspect.getmembers(module):
                if (
                    inspect.isclass(obj)
                    and issubclass(obj, MCPTool)
                    and obj is not MCPTool
                    and not inspect.isabstract(obj)
                ):
                    try:
                        instance = obj()
                        definition = instance.to_definition()
                        _tool_registry[definition.name] = definition
                        logger.info(f"Registered tool: {definition.name} ({module_name})")
                    except Exception as e:
                        logger.error(f"Failed to instantiate tool {name}: {e}")

        except Exception as e:
            logger.error(f"Failed to load tool module {module_name}: {e}")

    # Also collect function-based tools (decorated with @tool)
    for name, definition in get_function_tools().items():
        if name not in _tool_registry:
            _tool_registry[name] = definition
            logger.info(f"Registered function tool: {name}")

    _initialized = True
    logger.info(f"Tool discovery complete. Total tools: {len(_tool_registry)}")

def get_all_tools() -> Dict[str, ToolDefinition]:
    """Every registered tool, keyed by name. Discovery runs on first use."""
    _discover_tools()
    return dict(_tool_registry)


def get_tool(name: str) -> Optional[ToolDefinition]:
    _discover_tools()
    return _tool_registry.get(name)


def get_openai_tools_schema() -> List[Dict]:
    """Tool definitions in OpenAI function calling format, for /tools/schema."""
    return [
        {
            "type": "function",
            "function": {
                "name": name,
                "description": definition.description,
                "parameters": definition.input_schema(),
            },
        }
        for name, definition in get_all_tools().items()
    ]


def _lookup_failure(name: str, error: str, error_type: str) -> Dict:
    return {"success": False, "tool": name, "error": error, "error_type": error_type}


async def execute_tool(name: str, /, **arguments) -> Dict:
    """
    Run a registered tool and return its response envelope.

    `name` is positional-only: tool arguments may carry their own `name`
    (ema_info's get_medicine_by_name does).
    """
    definition = get_tool(name)

    if definition is None:
        return _lookup_failure(name, f"Tool not found: {name}", "not_found")
    if definition.handler is None:
        return _lookup_failure(name, f"Tool has no handler: {name}", "no_handler")

    return await definition.handler(**arguments)


def reset_registry() -> None:
    """Forget discovered tools so the next lookup rediscovers them."""
    global _tool_registry, _initialized
    _tool_registry = {}
    _initialized = False
