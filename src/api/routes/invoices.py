"""Invoice preview, editing and export endpoints."""

import asyncio
import time
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response
from pydantic import ValidationError

from api.dependencies import (
    get_client_ip,
    get_preference_store,
    get_repository,
    get_today,
    not_found,
)
from api.logging import RequestLog, record_http_error, write_log
from api.models.responses import EditRequest, ErrorCodes
from core.repository import NotFoundError, ProjectRepository
from models.projects import Project
from models.templates import InvoiceTemplate
from models.views import LiveView
from services.catalog import resolve_template
from services.editing import EditSession
from services.invoices import build_invoice, generate_invoice_document
from services.live_view import render_live_view
from services.settings import TemplatePreferenceStore

router = APIRouter(prefix="/v1/projects", tags=["invoices"])


def choose_template(template_id: str | None, store: TemplatePreferenceStore) -> InvoiceTemplate:
    """Requested template, else the saved preference. Unknown ids get standard."""
    if template_id:
        return resolve_template(template_id)
    return store.selected_template()


def edit_session(
    project_id: str,
    body: EditRequest,
    repository: ProjectRepository,
    today: date,
) -> EditSession:
    """Start editing the stored project and replay the dispatched changes."""
    try:
        session = EditSession.start(repository.get_project(project_id), today)
        for change in body.changes:
            session.apply(change)
    except NotFoundError as e:
        raise not_found(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Invalid change",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": [str(e)],
            },
        )
    return session


@router.get("/{project_id}/preview", response_model=LiveView)
def preview_invoice(
    project_id: str,
    template_id: str | None = None,
    repository: ProjectRepository = Depends(get_repository),
    store: TemplatePreferenceStore = Depends(get_preference_store),
    today: date = Depends(get_today),
):
    """Read-only live view of the project's invoice."""
    try:
        project = repository.get_project(project_id)
    except NotFoundError as e:
        raise not_found(e)
    template = choose_template(template_id, store)
    return render_live_view(build_invoice(project, template, today), editing=False)


@router.post("/{project_id}/edit", response_model=LiveView)
def edit_invoice(
    project_id: str,
    body: EditRequest,
    repository: ProjectRepository = Depends(get_repository),
    store: TemplatePreferenceStore = Depends(get_preference_store),
    today: date = Depends(get_today),
):
    """
    Editable live view with the given changes applied.

    Nothing is stored; the client keeps the change list until it saves or
    cancels.
    """
    session = edit_session(project_id, body, repository, today)
    return session.live_view(choose_template(body.template_id, store))


@router.post("/{project_id}/edit/save", response_model=Project)
def save_invoice_edits(
    request: Request,
    project_id: str,
    body: EditRequest,
    repository: ProjectRepository = Depends(get_repository),
    today: date = Depends(get_today),
):
    """Apply the changes and persist the edited project."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/projects/{project_id}/edit/save",
        method="POST",
        client_ip=get_client_ip(request),
        project_id=project_id,
        template_id=body.template_id,
    )

    try:
        session = edit_session(project_id, body, repository, today)
        try:
            update = session.to_update()
        except ValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={
                    "error": "Edited invoice failed validation",
                    "code": ErrorCodes.VALIDATION_ERROR,
                    "details": [
                        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                        for err in e.errors()
                    ],
                },
            )

        project = repository.update_project(project_id, update)

        request_log.status_code = 200
        request_log.employees_processed = len(project.employees)
        request_log.total_amount = project.total_amount
        return project

    except HTTPException as e:
        record_http_error(request_log, e)
        raise

    finally:
        write_log(request_log, start_time, repository.db_path)


@router.get("/{project_id}/export")
async def export_invoice(
    request: Request,
    project_id: str,
    template_id: str | None = None,
    repository: ProjectRepository = Depends(get_repository),
    store: TemplatePreferenceStore = Depends(get_preference_store),
    today: date = Depends(get_today),
):
    """Download the invoice as a standalone HTML document."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/projects/{project_id}/export",
        method="GET",
        client_ip=get_client_ip(request),
        project_id=project_id,
    )

    try:
        try:
            project = repository.get_project(project_id)
        except NotFoundError as e:
            raise not_found(e)

        template = choose_template(template_id, store)
        request_log.template_id = template.id

        # Rendering is sync; keep it off the event loop
        document = await asyncio.to_thread(
            generate_invoice_document, project, template.id, today
        )

        request_log.status_code = 200
        request_log.employees_processed = document.employee_count
        request_log.total_amount = document.total_amount

        return Response(
            content=document.content,
            media_type=document.media_type,
            headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
        )

    except HTTPException as e:
        record_http_error(request_log, e)
        raise

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        write_log(request_log, start_time, repository.db_path)
