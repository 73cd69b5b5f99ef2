"""GORM chain analysis package.

Parses Go source with tree-sitter, resolves GORM call chains into statement
builders and renders them to SQL. Everything here except `mcp_tools` is pure
and free of I/O.
"""

from __future__ import annotations

from .builder import JoinKind, Operation, StatementBuilder
from .dedup import LongestPerLine, format_line
from .exceptions import ChainAnalysisError, FileUnreadableError, ParseFailedError
from .methods import ChainMethod, apply_method
from .naming import camel_to_snake, infer_table_name, pluralize
from .resolver import ChainOrder, resolve_chain, unwind_chain
from .syntax import parse_go_source
from .walker import Candidate, walk_source

__all__ = [
    "Candidate",
    "ChainAnalysisError",
    "ChainMethod",
    "ChainOrder",
    "FileUnreadableError",
    "JoinKind",
    "LongestPerLine",
    "Operation",
    "ParseFailedError",
    "StatementBuilder",
    "apply_method",
    "camel_to_snake",
    "format_line",
    "infer_table_name",
    "parse_go_source",
    "pluralize",
    "resolve_chain",
    "unwind_chain",
    "walk_source",
]
