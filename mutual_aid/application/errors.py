from __future__ import annotations
from mutual_aid.shared.errors import (
    EmptyExportError,
    ReportGenerationError,
    RequestLoadError,
    RequestMutationError,
)


__all__ = [
    "EmptyExportError",
    "ReportGenerationError",
    "RequestLoadError",
    "RequestMutationError",
]
