"""
errors.py — exceptions raised by the comparison engine.

Only the aggregator raises. Normalizers, classifiers and the extractor
degrade silently on bad data (pass-through / `other` / fewer entries).
"""
from __future__ import annotations


class AnalysisError(Exception):
    """Base class for every error the engine reports to its caller."""


class ValidationError(AnalysisError):
    """The request itself is unusable (too few products, empty selection…)."""


class DataQualityError(AnalysisError):
    """Product data is too thin to compare (strict mode only)."""

    def __init__(self, message: str, data_issues: list[str] | None = None) -> None:
        super().__init__(message)
        self.data_issues: list[str] = list(data_issues or [])

    def __str__(self) -> str:
        base = super().__str__()
        if self.data_issues:
            return f"{base} Issues: {'; '.join(self.data_issues)}"
        return base
