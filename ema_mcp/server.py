#!/usr/bin/env python3
"""
HTTP Server Entrypoint

HTTP API server that exposes all registered EMA tools.
Tools are automatically discovered via registry.py
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import __version__
from .registry import (
    execute_tool,
    get_all_tools,
    get_openai_tools_schema,
)
from .tools.ema_utils import METHODS

load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# error_type -> HTTP status for the /ema convenience routes
_STATUS_BY_ERROR_TYPE = {
    "validation": 400,
    "unknown_method": 404,
    "timeout": 504,
    "http_error": 502,
    "network_error": 502,
    "request_error": 502,
    "invalid_response": 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    tools = get_all_tools()
    logger.info(f"EMA MCP HTTP server starting with {len(tools)} tools")
    for name in tools:
        logger.info(f"  - {name}")

    yield

    logger.info("EMA MCP HTTP server shutting down")


app = FastAPI(
    title="EMA MCP Server",
    description="Model Context Protocol tools for European Medicines Agency public data",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ToolRequest(BaseModel):
    """Request body for tool execution."""

    arguments: Dict[str, Any] = {}


class ToolResponse(BaseModel):
    """Response from tool execution."""

    success: bool
    tool: str
    result: Any = None
    error: str = None
    error_type: str = None
    details: Dict[str, Any] = None


# ============== API Endpoints ==============


@app.get("/")
async def root():
    return {
        "service": "EMA MCP Server",
        "version": __version__,
        "tools_count": len(get_all_tools()),
        "endpoints": {
            "list_tools": "/tools",
            "tool_schema": "/tools/schema",
            "execute": "/tools/{tool_name}/execute",
            "ema_methods": "/ema/methods",
            "ema_query": "/ema/{method}",
            "health": "/health",
        },
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "tools_loaded": len(get_all_tools())}


@app.get("/tools")
async def list_tools():
    tools = get_all_tools()
    return {
        "total": len(tools),
        "tools": [
            {
                "name": name,
                "description": tool.description,
                "category": tool.category,
                "parameters": [
                    {
                        "name": p.name,
                        "type": p.type,
                        "description": p.description,
                        "required": p.required,
                    }
                    for p in tool.parameters
                ],
            }
            for name, tool in tools.items()
        ],
    }


@app.get("/tools/schema")
async def get_tools_schema():
    return {"tools": get_openai_tools_schema()}


@app.get("/tools/{tool_name}")
async def get_tool_info(tool_name: str):
    tools = get_all_tools()
    if tool_name not in tools:
        raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")

    tool = tools[tool_name]
    return {
        "name": tool.name,
        "description": tool.description,
        "category": tool.category,
        "input_schema": tool.input_schema(),
    }


@app.post("/tools/{tool_name}/execute", response_model=ToolResponse)
async def execute_tool_endpoint(tool_name: str, request: ToolRequest):
    result = await execute_tool(tool_name, **request.arguments)
    return ToolResponse(**result)


# ============== Convenience Endpoints ==============
# Direct access to the ema_info methods


@app.get("/ema/methods")
async def list_ema_methods():
    return {"total": len(METHODS), "methods": list(METHODS)}


@app.post("/ema/{method}")
async def run_ema_method(method: str, request: ToolRequest):
    arguments = {k: v for k, v in request.arguments.items() if k != "method"}
    result = await execute_tool("ema_info", method=method, **arguments)
    if not result["success"]:
        status = _STATUS_BY_ERROR_TYPE.get(result.get("error_type"), 500)
        raise HTTPException(status_code=status, detail=result.get("error"))
    return result["result"]


def main():
    """Run the HTTP server."""
    import uvicorn

    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))
    logger.info(f"Starting EMA MCP HTTP server on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
