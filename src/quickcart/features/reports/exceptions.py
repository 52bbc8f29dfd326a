"""Errors raised by the report pipeline."""

from typing import Optional


class ReportError(Exception):
    """Base class for report generation errors."""


class ReportGenerationFailed(ReportError):
    """
    A report could not be produced. No partial document exists.

    Attributes:
        stage: The pipeline stage that failed (e.g. "rows").
        cause: The original exception, also available as __cause__.
    """

    def __init__(self, stage: str, cause: Optional[BaseException] = None):
        self.stage = stage
        self.cause = cause
        message = f"Report generation failed during '{stage}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ReportGenerationCancelled(ReportError):
    """The caller asked the generator to stop before the report was finished."""

    def __init__(self, rows_drawn: int):
        self.rows_drawn = rows_drawn
        super().__init__(f"Report generation cancelled after {rows_drawn} rows")


class RendererClosedError(RuntimeError):
    """Drawing was attempted on a renderer whose document is already finished."""
