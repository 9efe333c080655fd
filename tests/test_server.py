"""
Tests for the HTTP and stdio transports.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from ema_mcp.server import app
from ema_mcp.stdio_server import ToolCallError, call_tool, list_tools
from ema_mcp.tools.ema_utils import METHODS, EmaClient, EmaHttpError


@pytest.fixture
def http_client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def canned_medicines(sample_medicines):
    with patch.object(EmaClient, "fetch_records", new_callable=AsyncMock,
                      return_value=sample_medicines) as mock_fetch:
        yield mock_fetch


class TestHttpServer:

    def test_health(self, http_client):
        response = http_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_tools(self, http_client):
        names = [t["name"] for t in http_client.get("/tools").json()["tools"]]

        assert "ema_info" in names

    def test_tool_info(self, http_client):
        info = http_client.get("/tools/ema_info").json()

        assert info["input_schema"]["properties"]["method"]["enum"] == list(METHODS)
        assert http_client.get("/tools/nope").status_code == 404

    def test_execute(self, http_client, canned_medicines):
        response = http_client.post(
            "/tools/ema_info/execute",
            json={"arguments": {"method": "search_medicines", "active_substance": "semaglutide",
                                "status": "Authorised"}},
        )

        body = response.json()
        assert body["success"] is True
        assert body["result"]["total_count"] == 3

    def test_execute_reports_validation_error(self, http_client):
        response = http_client.post(
            "/tools/ema_info/execute",
            json={"arguments": {"method": "search_medicines", "limit": 0}},
        )

        body = response.json()
        assert body["success"] is False
        assert body["error_type"] == "validation"

    def test_ema_methods(self, http_client):
        assert http_client.get("/ema/methods").json()["methods"] == list(METHODS)

    def test_ema_method_route(self, http_client, canned_medicines):
        response = http_client.post("/ema/get_medicine_by_name", json={"arguments": {"name": "Ozemp"}})

        assert response.status_code == 200
        assert response.json()["medicine"]["name_of_medicine"] == "Ozempic"

    def test_ema_method_route_errors(self, http_client):
        assert http_client.post("/ema/get_everything", json={}).status_code == 404
        assert http_client.post("/ema/get_pips", json={"arguments": {"year": 1990}}).status_code == 400

    def test_ema_method_route_upstream_failure(self, http_client):
        with patch.object(EmaClient, "fetch_records", new_callable=AsyncMock,
                          side_effect=EmaHttpError(503, "Service Unavailable")):
            response = http_client.post("/ema/get_pips", json={})

        assert response.status_code == 502
        assert "503" in response.json()["detail"]


class TestStdioServer:

    @pytest.mark.asyncio
    async def test_list_tools(self):
        tools = {t.name: t for t in await list_tools()}

        assert tools["ema_info"].inputSchema["required"] == ["method"]

    @pytest.mark.asyncio
    async def test_call_tool_returns_json_text(self, canned_medicines):
        content = await call_tool("ema_info", {"method": "search_medicines", "limit": 2})

        assert len(content) == 1
        payload = json.loads(content[0].text)
        assert payload["total_count"] == 2
        assert payload["source"] == "EMA Medicines Database"

    @pytest.mark.asyncio
    async def test_call_tool_medicine_by_name(self, canned_medicines):
        content = await call_tool("ema_info", {"method": "get_medicine_by_name", "name": "Ozemp"})

        payload = json.loads(content[0].text)
        assert payload["found"] is True
        assert payload["medicine"]["name_of_medicine"] == "Ozempic"

    @pytest.mark.asyncio
    async def test_call_tool_error_payload(self):
        with pytest.raises(ToolCallError) as exc_info:
            await call_tool("ema_info", {"method": "search_medicines", "status": "Pending"})

        payload = json.loads(str(exc_info.value))
        assert payload["source"] == "EMA MCP Server"
        assert "status" in payload["error"]

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        with pytest.raises(ToolCallError, match="Unknown tool: nope"):
            await call_tool("nope", {})
