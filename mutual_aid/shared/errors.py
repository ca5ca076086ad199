from __future__ import annotations


class RequestLoadError(RuntimeError):
    """Raised when the request list cannot be loaded from the relief API."""


class RequestMutationError(RuntimeError):
    """Raised when creating a request or updating its status fails."""


class EmptyExportError(RuntimeError):
    """Raised when an export is requested but there are no requests to export."""


class ReportGenerationError(RuntimeError):
    """Raised when an export file cannot be generated."""
