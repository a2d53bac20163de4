"""SQLite request logging for API."""

import sqlite3
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from fastapi import HTTPException

from core.config import DB_PATH


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    project_id: str | None = None
    template_id: str | None = None
    file_size_bytes: int | None = None
    file_name: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    employees_processed: int | None = None
    total_amount: float | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)


def log_request(log: RequestLog, db_path: Path = DB_PATH) -> None:
    """Write request log to SQLite database."""
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()

        # Insert main request record
        cursor.execute(
            """
            INSERT INTO api_requests (
                request_id, timestamp, endpoint, method, client_ip,
                project_id, template_id, file_size_bytes, file_name,
                status_code, error_code, error_message, processing_time_ms,
                employees_processed, total_amount
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.project_id,
                log.template_id,
                log.file_size_bytes,
                log.file_name,
                log.status_code,
                log.error_code,
                log.error_message,
                log.processing_time_ms,
                log.employees_processed,
                log.total_amount,
            ),
        )

        # Insert detail records
        for detail_type, message in log.details:
            cursor.execute(
                """
                INSERT INTO api_request_details (request_id, detail_type, message)
                VALUES (?, ?, ?)
            """,
                (log.request_id, detail_type, message),
            )

        conn.commit()
    finally:
        conn.close()


def record_http_error(log: RequestLog, e: HTTPException) -> None:
    """Copy status, error code and details of a raised HTTPException into the log."""
    log.status_code = e.status_code
    if isinstance(e.detail, dict):
        log.error_code = e.detail.get("code")
        log.error_message = e.detail.get("error")
        for detail in e.detail.get("details", []):
            log.details.append(("validation_error", detail))
    else:
        log.error_message = str(e.detail)


def write_log(log: RequestLog, start_time: float, db_path: Path = DB_PATH) -> None:
    """Stamp the processing time and write the log, never failing the request."""
    log.processing_time_ms = int((time.time() - start_time) * 1000)
    try:
        log_request(log, db_path)
    except Exception:
        # Don't fail the request if logging fails
        pass
