"""API route modules."""

from .health import router as health_router
from .imports import router as imports_router
from .invoices import router as invoices_router
from .projects import router as projects_router
from .templates import router as templates_router

__all__ = [
    "health_router",
    "projects_router",
    "templates_router",
    "invoices_router",
    "imports_router",
]
