"""FastAPI application entry point."""

import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import (
    health_router,
    imports_router,
    invoices_router,
    projects_router,
    templates_router,
)
from core.config import API_DEBUG, API_VERSION, DB_PATH
from core.database import init_schema


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: make sure the schema exists and export templates are in place
    from services.export import TEMPLATES_DIR

    init_schema(DB_PATH)
    if not (TEMPLATES_DIR / "base.html").exists():
        warnings.warn(f"Export templates not found at {TEMPLATES_DIR}")

    yield


app = FastAPI(
    title="Project Invoice API",
    description="Projects, employee hours and invoice rendering with four visual templates",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report every invalid field in the standard error format."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        details.append(f"{location}: {error['msg']}")

    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error="Request validation failed",
            code=ErrorCodes.VALIDATION_ERROR,
            details=details,
        ).model_dump(),
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(projects_router)
app.include_router(templates_router)
app.include_router(invoices_router)
app.include_router(imports_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
