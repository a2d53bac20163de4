"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel

from models.projects import Project
from models.views import FieldChange


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    templates_available: bool
    database_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# TEMPLATES
# =============================================================================


class TemplateSelection(BaseModel):
    template_id: str


# =============================================================================
# INVOICE EDITING
# =============================================================================


class EditRequest(BaseModel):
    """Changes dispatched by the live view since editing started."""

    template_id: str | None = None
    changes: list[FieldChange] = []


# =============================================================================
# IMPORTS
# =============================================================================


class ImportEmployeeRow(BaseModel):
    employee_name: str
    rate: float
    hours: float
    amount: float


class ImportProjectGroup(BaseModel):
    project_name: str
    matched_project_id: str | None = None
    matched_project_name: str | None = None
    employees: list[ImportEmployeeRow]


class ImportPreviewResponse(BaseModel):
    """Parsed upload awaiting confirmation."""

    import_id: str
    filename: str
    sheet_names: list[str]
    selected_sheet: str | None = None
    groups: list[ImportProjectGroup]
    matched_count: int
    unmatched_count: int


class ImportConfirmResponse(BaseModel):
    imported_employees: int
    updated_projects: list[Project]
    skipped_projects: list[str]
