"""MCP tool registration exercised through an in-memory FastMCP client."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from fastmcp import Client, FastMCP

from gorm2sql_mcp.gorm_tools.mcp_tools import register_gorm_tools
from gorm2sql_mcp.services import GormAnalysisService

SOURCE = 'package p\n\nfunc f() {\n\tdb.Table("orders").Where("paid").Find(&rows)\n}\n'


def _server() -> FastMCP:
    mcp = FastMCP("gorm2sql-test")
    register_gorm_tools(mcp, GormAnalysisService())
    return mcp


def _call(tool: str, args: dict[str, Any]) -> dict[str, Any]:
    async def run() -> dict[str, Any]:
        async with Client(_server()) as client:
            result = await client.call_tool(tool, args)
            assert result.structured_content is not None
            return result.structured_content

    return asyncio.run(run())


def test_infer_sql_from_source_tool() -> None:
    payload = _call("infer_sql_from_source", {"source": SOURCE, "filename": "q.go"})
    assert payload["status"] == "ok"
    assert payload["lines"] == ["q.go:4: SELECT * FROM orders WHERE paid"]


def test_infer_sql_from_file_tool_error_value(tmp_path: Path) -> None:
    payload = _call("infer_sql_from_file", {"path": str(tmp_path / "missing.go")})
    assert payload["status"] == "error"
    assert payload["error"]["kind"] == "file_unreadable"


def test_infer_sql_from_paths_tool(tmp_path: Path) -> None:
    (tmp_path / "q.go").write_text(SOURCE, encoding="utf-8")
    payload = _call("infer_sql_from_paths", {"paths": [str(tmp_path)]})
    assert payload["files_analyzed"] == 1
    assert payload["statement_count"] == 1
