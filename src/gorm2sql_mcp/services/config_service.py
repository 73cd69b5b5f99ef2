"""Configuration service for gorm2sql-mcp.

Centralizes environment variable handling for the analyzer. Every getter
falls back to a safe default on missing or malformed values.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from typing import Final

from gorm2sql_mcp.gorm_tools.resolver import ChainOrder
from gorm2sql_mcp.models import SortOrder

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AnalyzerSettings:
    """Effective analyzer knobs for one run."""

    sort_order: SortOrder = "asc"
    chain_order: ChainOrder = ChainOrder.OUTERMOST_FIRST
    require_recognized: bool = False
    file_glob: str = "*.go"

    @property
    def ascending(self) -> bool:
        return self.sort_order == "asc"

    def with_overrides(
        self,
        *,
        sort_order: SortOrder | None = None,
        chain_order: ChainOrder | None = None,
        require_recognized: bool | None = None,
    ) -> AnalyzerSettings:
        """Return a copy with the given non-None values replaced."""
        return replace(
            self,
            sort_order=sort_order if sort_order is not None else self.sort_order,
            chain_order=chain_order if chain_order is not None else self.chain_order,
            require_recognized=(
                require_recognized if require_recognized is not None else self.require_recognized
            ),
        )


class ConfigService:
    """Service for reading analyzer configuration from the environment."""

    @staticmethod
    def sort_order() -> SortOrder:
        """Line ordering for reports (GORM2SQL_SORT_ORDER: asc|desc)."""
        val = os.getenv("GORM2SQL_SORT_ORDER", "asc").strip().lower()
        return "desc" if val == "desc" else "asc"

    @staticmethod
    def chain_order() -> ChainOrder:
        """Chain link order (GORM2SQL_CHAIN_ORDER: outermost_first|source)."""
        val = os.getenv("GORM2SQL_CHAIN_ORDER", ChainOrder.OUTERMOST_FIRST.value)
        try:
            return ChainOrder(val.strip().lower())
        except ValueError:
            return ChainOrder.OUTERMOST_FIRST

    @staticmethod
    def require_recognized() -> bool:
        """Only report chains with at least one GORM method (GORM2SQL_REQUIRE_RECOGNIZED)."""
        return os.getenv("GORM2SQL_REQUIRE_RECOGNIZED", "").strip().lower() in _TRUTHY

    @staticmethod
    def file_glob() -> str:
        """Glob used when a directory is given (GORM2SQL_FILE_GLOB)."""
        val = os.getenv("GORM2SQL_FILE_GLOB", "").strip()
        return val or "*.go"

    @staticmethod
    def analyzer_settings() -> AnalyzerSettings:
        """Collect all analyzer settings from the environment."""
        return AnalyzerSettings(
            sort_order=ConfigService.sort_order(),
            chain_order=ConfigService.chain_order(),
            require_recognized=ConfigService.require_recognized(),
            file_glob=ConfigService.file_glob(),
        )
