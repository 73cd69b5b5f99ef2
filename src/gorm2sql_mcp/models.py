"""Pydantic models for analysis results and MCP tool I/O.

Failures are carried as data (`status="error"` plus `AnalysisErrorInfo`)
so a batch over many files always completes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ErrorKind = Literal["file_unreadable", "parse_failed"]
SortOrder = Literal["asc", "desc"]


class InferredStatement(BaseModel):
    """The statement kept for one source line."""

    line: int = Field(ge=1, description="1-based line where the GORM chain starts")
    sql: str = Field(description="Inferred SQL, the longest rendering seen on that line")


class AnalysisErrorInfo(BaseModel):
    """Why a file could not be analyzed."""

    kind: ErrorKind = Field(description="file_unreadable or parse_failed")
    path: str = Field(description="Path of the file that failed")
    cause: str = Field(description="Underlying I/O or syntax error message")


class FileAnalysisResult(BaseModel):
    """Outcome of analyzing a single Go source file."""

    path: str = Field(description="Analyzed file path as given by the caller")
    status: Literal["ok", "error"] = Field(default="ok", description="Overall status")
    statement_count: int = Field(
        default=0, ge=0, description="Number of distinct lines with an inferred statement"
    )
    statements: list[InferredStatement] = Field(
        default_factory=list, description="Inferred statements in line order"
    )
    lines: list[str] = Field(
        default_factory=list, description="Display lines formatted as '<path>:<line>: <SQL>'"
    )
    summary: str = Field(default="", description="One-line human-readable summary")
    error: AnalysisErrorInfo | None = Field(
        default=None, description="Populated when status is 'error'"
    )


class BatchAnalysisResult(BaseModel):
    """Outcome of analyzing several files independently."""

    results: list[FileAnalysisResult] = Field(
        default_factory=list, description="Per-file results in processing order"
    )
    files_analyzed: int = Field(default=0, ge=0, description="Files analyzed successfully")
    files_failed: int = Field(default=0, ge=0, description="Files that produced an error")
    statement_count: int = Field(
        default=0, ge=0, description="Total inferred statements across all files"
    )
