"""gorm2sql-mcp package for static GORM-to-SQL inference.

Reads Go source, follows GORM call chains such as
`db.Model(&User{}).Where("age > 18").Find(&users)` and reconstructs the SQL
they would issue, without compiling or running anything. Exposed as a
library, a command-line tool and a Model Context Protocol (FastMCP) server.
"""

from gorm2sql_mcp.models import (
    AnalysisErrorInfo,
    BatchAnalysisResult,
    FileAnalysisResult,
    InferredStatement,
)
from gorm2sql_mcp.services import AnalyzerSettings, ConfigService, GormAnalysisService

__all__ = [  # noqa: RUF022
    # Result models
    "AnalysisErrorInfo",
    "BatchAnalysisResult",
    "FileAnalysisResult",
    "InferredStatement",
    # Services
    "AnalyzerSettings",
    "ConfigService",
    "GormAnalysisService",
]
