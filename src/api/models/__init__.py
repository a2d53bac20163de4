"""API Pydantic models."""

from .responses import (
    EditRequest,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    ImportConfirmResponse,
    ImportEmployeeRow,
    ImportPreviewResponse,
    ImportProjectGroup,
    TemplateSelection,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "TemplateSelection",
    "EditRequest",
    "ImportEmployeeRow",
    "ImportProjectGroup",
    "ImportPreviewResponse",
    "ImportConfirmResponse",
]
