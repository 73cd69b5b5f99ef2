"""MCP tool registration for GORM SQL inference.

This module exposes `register_gorm_tools`, which attaches the analysis tools
to a provided FastMCP instance and delegates all work to an injected
`GormAnalysisService`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastmcp import Context, FastMCP
from fastmcp.utilities.logging import get_logger
from pydantic import Field

from gorm2sql_mcp.models import BatchAnalysisResult, FileAnalysisResult

if TYPE_CHECKING:
    from gorm2sql_mcp.services.analysis_service import GormAnalysisService

_logger = get_logger(__name__)


def register_gorm_tools(mcp: FastMCP, service: GormAnalysisService) -> None:
    """Register GORM-to-SQL inference tools on the given FastMCP instance.

    Args:
        mcp: The FastMCP server instance.
        service: GormAnalysisService instance that performs the work.
    """

    @mcp.tool
    async def infer_sql_from_file(
        ctx: Context,
        path: Annotated[str, Field(description="Path to a Go source file")],
    ) -> FileAnalysisResult:  # pyright: ignore[reportUnusedFunction]
        """Infer the SQL issued by GORM call chains in one Go file.

        Returns one statement per source line (the most complete chain seen
        there), ordered by line. Unreadable or unparseable files come back
        with status='error' and an error kind instead of raising.
        """
        result = service.analyze_file(path)
        if result.error is not None:
            await ctx.warning(f"{result.error.kind}: {result.error.cause}")
        return result

    @mcp.tool
    async def infer_sql_from_source(
        _ctx: Context,
        source: Annotated[str, Field(description="Go source code to analyze")],
        filename: Annotated[
            str, Field(description="Label used in the '<path>:<line>: <SQL>' lines")
        ] = "<source>",
    ) -> FileAnalysisResult:  # pyright: ignore[reportUnusedFunction]
        """Infer SQL from Go source passed inline rather than read from disk."""
        _logger.info("infer_sql_from_source: %s (%d bytes)", filename, len(source))
        return service.analyze_source(source, filename)

    @mcp.tool
    async def infer_sql_from_paths(
        _ctx: Context,
        paths: Annotated[
            list[str],
            Field(description="Go files or directories; directories are searched recursively"),
        ],
    ) -> BatchAnalysisResult:  # pyright: ignore[reportUnusedFunction]
        """Infer SQL for many files; each file succeeds or fails on its own."""
        return service.analyze_paths(paths)

    # Hint to static analyzers that nested functions are intentionally used
    _ = (infer_sql_from_file, infer_sql_from_source, infer_sql_from_paths)
