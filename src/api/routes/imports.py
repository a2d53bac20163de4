"""Spreadsheet import endpoints."""

import asyncio
import time
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import Response

from api.dependencies import (
    ImportSessionStore,
    get_client_ip,
    get_import_sessions,
    get_repository,
    get_today,
    not_found,
)
from api.logging import RequestLog, record_http_error, write_log
from api.models.responses import (
    ErrorCodes,
    ImportConfirmResponse,
    ImportEmployeeRow,
    ImportPreviewResponse,
    ImportProjectGroup,
)
from core.config import MAX_UPLOAD_SIZE_BYTES
from core.repository import NotFoundError, ProjectRepository
from services.imports import (
    ImportSession,
    SpreadsheetFormatError,
    apply_import,
    build_sample_workbook,
    match_projects,
)

router = APIRouter(prefix="/v1/imports", tags=["imports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def invalid_sheet(e: ValueError) -> HTTPException:
    details = [line.strip() for line in str(e).split("\n") if line.strip()]
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "error": "Spreadsheet validation failed",
            "code": ErrorCodes.VALIDATION_ERROR,
            "details": details,
        },
    )


def build_preview(
    import_id: str,
    session: ImportSession,
    repository: ProjectRepository,
) -> ImportPreviewResponse:
    matches = match_projects(session.entries, repository.list_projects())
    groups = [
        ImportProjectGroup(
            project_name=match.project_name,
            matched_project_id=match.matched_project_id,
            matched_project_name=match.matched_project_name,
            employees=[
                ImportEmployeeRow(
                    employee_name=entry.employee_name,
                    rate=entry.rate,
                    hours=entry.hours,
                    amount=entry.amount,
                )
                for entry in match.employees
            ],
        )
        for match in matches
    ]
    matched = sum(1 for m in matches if m.matched)
    return ImportPreviewResponse(
        import_id=import_id,
        filename=session.filename,
        sheet_names=session.sheet_names,
        selected_sheet=session.selected_sheet,
        groups=groups,
        matched_count=matched,
        unmatched_count=len(matches) - matched,
    )


@router.get("/sample")
def download_sample(repository: ProjectRepository = Depends(get_repository)):
    """Sample upload workbook using the names of existing projects."""
    content = build_sample_workbook([p.name for p in repository.list_projects()])
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="employee_data_template.xlsx"'},
    )


@router.post("", response_model=ImportPreviewResponse, status_code=status.HTTP_201_CREATED)
async def upload_spreadsheet(
    request: Request,
    file: Annotated[UploadFile, File(description="Excel workbook with employee hours")],
    sheet: Annotated[str | None, Form(description="Sheet to parse (default: first)")] = None,
    repository: ProjectRepository = Depends(get_repository),
    sessions: ImportSessionStore = Depends(get_import_sessions),
):
    """
    Upload a workbook and preview how its rows match existing projects.

    Nothing is written until the import is confirmed.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/imports",
        method="POST",
        client_ip=get_client_ip(request),
        file_name=file.filename,
    )

    try:
        if not file or not file.filename:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "No file provided",
                    "code": ErrorCodes.INVALID_REQUEST,
                    "details": [],
                },
            )

        file_content = await file.read()
        request_log.file_size_bytes = len(file_content)

        if len(file_content) > MAX_UPLOAD_SIZE_BYTES:
            max_mb = MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail={
                    "error": f"File exceeds maximum size of {max_mb} MB",
                    "code": ErrorCodes.FILE_TOO_LARGE,
                    "details": [f"File size: {len(file_content) / (1024*1024):.1f} MB"],
                },
            )

        try:
            session = await asyncio.to_thread(ImportSession, file.filename, file_content)
            await asyncio.to_thread(session.select_sheet, sheet)
        except SpreadsheetFormatError as e:
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail={
                    "error": str(e),
                    "code": ErrorCodes.UNSUPPORTED_MEDIA_TYPE,
                    "details": [f"Received: {file.filename}"],
                },
            )
        except ValueError as e:
            raise invalid_sheet(e)

        import_id = sessions.add(session)
        preview = build_preview(import_id, session, repository)

        request_log.status_code = 201
        request_log.employees_processed = len(session.entries)
        for group in preview.groups:
            if group.matched_project_id:
                message = f"{group.project_name} -> {group.matched_project_name}"
                request_log.details.append(("project_processed", message))
            else:
                request_log.details.append(("warning", f"No matching project: {group.project_name}"))
        return preview

    except HTTPException as e:
        record_http_error(request_log, e)
        raise

    finally:
        write_log(request_log, start_time, repository.db_path)


@router.get("/{import_id}", response_model=ImportPreviewResponse)
def get_import(
    import_id: str,
    sheet: str | None = None,
    repository: ProjectRepository = Depends(get_repository),
    sessions: ImportSessionStore = Depends(get_import_sessions),
):
    """Current preview; naming a sheet re-parses the upload from that sheet."""
    try:
        session = sessions.get(import_id)
    except NotFoundError as e:
        raise not_found(e)

    if sheet is not None:
        try:
            session.select_sheet(sheet)
        except ValueError as e:
            raise invalid_sheet(e)
    return build_preview(import_id, session, repository)


@router.post("/{import_id}/confirm", response_model=ImportConfirmResponse)
def confirm_import(
    request: Request,
    import_id: str,
    repository: ProjectRepository = Depends(get_repository),
    sessions: ImportSessionStore = Depends(get_import_sessions),
    today: date = Depends(get_today),
):
    """Append matched rows to their projects and discard the upload."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/imports/{import_id}/confirm",
        method="POST",
        client_ip=get_client_ip(request),
    )

    try:
        try:
            session = sessions.get(import_id)
        except NotFoundError as e:
            raise not_found(e)

        request_log.file_name = session.filename
        matches = match_projects(session.entries, repository.list_projects())
        result = apply_import(repository, matches, today)
        sessions.discard(import_id)

        request_log.status_code = 200
        request_log.employees_processed = result.imported_employees
        for project in result.updated_projects:
            request_log.details.append(("project_processed", project.name))
        for match in result.skipped:
            request_log.details.append(("warning", f"Skipped: {match.project_name}"))

        return ImportConfirmResponse(
            imported_employees=result.imported_employees,
            updated_projects=result.updated_projects,
            skipped_projects=[m.project_name for m in result.skipped],
        )

    except HTTPException as e:
        record_http_error(request_log, e)
        raise

    finally:
        write_log(request_log, start_time, repository.db_path)


@router.delete("/{import_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_import(import_id: str, sessions: ImportSessionStore = Depends(get_import_sessions)):
    try:
        sessions.discard(import_id)
    except NotFoundError as e:
        raise not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
