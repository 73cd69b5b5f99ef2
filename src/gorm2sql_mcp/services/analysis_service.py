"""Analysis service: infer SQL statements from GORM chains in Go files.

Orchestrates reading, parsing, walking and per-line deduplication. Errors are
never raised to the caller; they come back as `FileAnalysisResult` values
with `status="error"`, one per failing file.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
from pathlib import Path

from tree_sitter import Parser

from gorm2sql_mcp.gorm_tools.dedup import LongestPerLine
from gorm2sql_mcp.gorm_tools.exceptions import ChainAnalysisError, FileUnreadableError
from gorm2sql_mcp.gorm_tools.syntax import create_parser, parse_go_source
from gorm2sql_mcp.gorm_tools.walker import walk_source
from gorm2sql_mcp.models import (
    AnalysisErrorInfo,
    BatchAnalysisResult,
    FileAnalysisResult,
    InferredStatement,
)
from gorm2sql_mcp.services.config_service import AnalyzerSettings

NO_STATEMENTS_SUMMARY = "No GORM query statements found"


def read_source(path: str) -> bytes:
    """Read a file fully, raising `FileUnreadableError` on any I/O failure."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise FileUnreadableError(path, exc.strerror or str(exc)) from exc


def summarize(count: int) -> str:
    if count == 0:
        return NO_STATEMENTS_SUMMARY
    noun = "statement" if count == 1 else "statements"
    return f"Analyzed {count} SQL {noun}"


class GormAnalysisService:
    """Infer SQL from GORM call chains without running any code.

    One parser is reused across files; all other state (builders, the
    per-line result map) is local to a single file's pass.
    """

    def __init__(
        self,
        settings: AnalyzerSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or AnalyzerSettings()
        self._logger = logger or logging.getLogger(__name__)
        self._parser: Parser = create_parser()

    # ---- single file ----------------------------------------------------
    def analyze_source(self, source: str | bytes, path: str = "<source>") -> FileAnalysisResult:
        """Analyze in-memory Go source; `path` is only used for labels."""
        raw = source.encode("utf-8") if isinstance(source, str) else source
        try:
            return self._analyze_bytes(raw, path)
        except ChainAnalysisError as exc:
            return self._error_result(exc)

    def analyze_file(self, path: str) -> FileAnalysisResult:
        """Analyze a Go file on disk.

        Args:
            path: File to analyze

        Returns:
            Result with the ordered statements, or an error value when the
            file is unreadable or not valid Go
        """
        self._logger.info("Analyzing file: %s", path)
        try:
            raw = read_source(path)
            return self._analyze_bytes(raw, path)
        except ChainAnalysisError as exc:
            return self._error_result(exc)

    # ---- batch ----------------------------------------------------------
    def expand_paths(self, paths: Iterable[str]) -> Iterator[str]:
        """Yield files, expanding directories recursively with the configured glob."""
        for raw in paths:
            p = Path(raw)
            if p.is_dir():
                for match in sorted(p.rglob(self.settings.file_glob)):
                    if match.is_file():
                        yield str(match)
            else:
                yield raw

    def analyze_paths(self, paths: Iterable[str]) -> BatchAnalysisResult:
        """Analyze each file independently; a failing file does not stop the batch."""
        batch = BatchAnalysisResult()
        for path in self.expand_paths(paths):
            result = self.analyze_file(path)
            batch.results.append(result)
            if result.status == "ok":
                batch.files_analyzed += 1
                batch.statement_count += result.statement_count
            else:
                batch.files_failed += 1
        self._logger.info(
            "Batch finished (files_analyzed=%d, files_failed=%d, statements=%d)",
            batch.files_analyzed,
            batch.files_failed,
            batch.statement_count,
        )
        return batch

    # ---- internal helpers -----------------------------------------------
    def _analyze_bytes(self, raw: bytes, path: str) -> FileAnalysisResult:
        tree = parse_go_source(raw, path, self._parser)
        results = LongestPerLine()
        for candidate in walk_source(
            tree,
            raw,
            order=self.settings.chain_order,
            require_recognized=self.settings.require_recognized,
        ):
            results.offer(candidate.line, candidate.sql)

        ascending = self.settings.ascending
        statements = [
            InferredStatement(line=line, sql=sql) for line, sql in results.ordered(ascending)
        ]
        count = len(results)
        self._logger.info("%s: %d statement(s) inferred", path, count)
        return FileAnalysisResult(
            path=path,
            status="ok",
            statement_count=count,
            statements=statements,
            lines=results.report(path, ascending),
            summary=summarize(count),
        )

    def _error_result(self, exc: ChainAnalysisError) -> FileAnalysisResult:
        self._logger.warning("Analysis failed (%s): %s", exc.kind, exc)
        info = AnalysisErrorInfo(
            kind=exc.kind,  # type: ignore[arg-type]
            path=exc.path,
            cause=exc.cause,
        )
        return FileAnalysisResult(
            path=exc.path,
            status="error",
            summary=f"{exc.kind.replace('_', ' ')}: {exc.cause}",
            error=info,
        )
