"""Custom exception hierarchy for GORM chain analysis.

This module defines the exceptions raised while loading and parsing a Go
source file. They never escape the analysis service: each one is caught per
file and converted into an `AnalysisErrorInfo` value so that a batch keeps
going when a single file is bad.

Exception Categories:
- Base exception for chain analysis errors
- File errors when the target cannot be opened or read
- Parse errors when the target is not syntactically valid Go
"""

from __future__ import annotations


class ChainAnalysisError(Exception):
    """Base exception for chain analysis operations.

    Carries the path of the file being analyzed and a human-readable cause.
    """

    kind: str = "analysis_error"

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class FileUnreadableError(ChainAnalysisError):
    """Raised when the target file cannot be opened or read.

    This covers missing files, permission problems and directories passed
    where a file was expected.
    """

    kind = "file_unreadable"


class ParseFailedError(ChainAnalysisError):
    """Raised when the source is not syntactically valid Go.

    Any ERROR or MISSING node in the tree-sitter parse tree counts as a
    failure, the same way `go/parser` rejects a file with any syntax error.
    """

    kind = "parse_failed"
