"""Services package for gorm2sql-mcp.

Main Components:
- ConfigService: Environment-driven analyzer configuration
- GormAnalysisService: File, source and batch analysis orchestration
"""

from .analysis_service import GormAnalysisService
from .config_service import AnalyzerSettings, ConfigService

__all__ = [
    "AnalyzerSettings",
    "ConfigService",
    "GormAnalysisService",
]
