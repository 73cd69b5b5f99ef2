"""FastMCP server implementation for gorm2sql-mcp."""

from __future__ import annotations

import dotenv
from fastmcp import FastMCP
from fastmcp.utilities.logging import get_logger
from starlette.requests import Request
from starlette.responses import JSONResponse

from gorm2sql_mcp.gorm_tools.mcp_tools import register_gorm_tools
from gorm2sql_mcp.services import ConfigService, GormAnalysisService

# Load environment variables
dotenv.load_dotenv()

# Configure a module-level logger for local server logs.
_logger = get_logger(__name__)

mcp = FastMCP(
    instructions=(
        "Statically infers the SQL statements issued by GORM call chains in Go "
        "source files, without compiling or running the code."
    ),
)

# -- Tool Registration -------------------------------------------------------
settings = ConfigService.analyzer_settings()
analysis_service = GormAnalysisService(settings=settings, logger=_logger)

register_gorm_tools(mcp, analysis_service)
_logger.info(
    "Registered GORM tools (chain_order=%s, sort_order=%s, require_recognized=%s)",
    settings.chain_order.value,
    settings.sort_order,
    settings.require_recognized,
)


# -- Health Check ----------------------------------------------------------
@mcp.custom_route("/health", methods=["GET"])
async def health_check(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy", "service": "gorm2sql-mcp"})
