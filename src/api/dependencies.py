"""FastAPI dependencies for shared resources."""

import time
import uuid
from collections import OrderedDict
from datetime import date
from functools import lru_cache

from fastapi import HTTPException, Request, status

from api.models.responses import ErrorCodes
from core.config import (
    DB_PATH,
    IMPORT_SESSION_LIMIT,
    IMPORT_SESSION_TTL_SECONDS,
    SETTINGS_PATH,
)
from core.repository import NotFoundError, ProjectRepository
from services.dates import invoice_today
from services.imports import ImportSession
from services.settings import TemplatePreferenceStore


@lru_cache
def get_repository() -> ProjectRepository:
    return ProjectRepository(DB_PATH)


@lru_cache
def get_preference_store() -> TemplatePreferenceStore:
    return TemplatePreferenceStore(SETTINGS_PATH)


def get_today() -> date:
    """Today's date in the invoicing time zone."""
    return invoice_today()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": str(e),
            "code": ErrorCodes.NOT_FOUND,
            "details": [],
        },
    )


class ImportSessionStore:
    """
    Uploaded workbooks awaiting confirmation, kept in process memory.

    Uploads older than `ttl_seconds` are dropped, and once more than `limit`
    are pending the oldest go first.
    """

    def __init__(
        self,
        limit: int = IMPORT_SESSION_LIMIT,
        ttl_seconds: float = IMPORT_SESSION_TTL_SECONDS,
        clock=time.monotonic,
    ):
        self.limit = limit
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # import_id -> (added_at, session), oldest first
        self._sessions: OrderedDict[str, tuple[float, ImportSession]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, import_id: str) -> bool:
        return import_id in self._sessions

    def _evict(self) -> None:
        cutoff = self._clock() - self.ttl_seconds
        while self._sessions:
            import_id, (added_at, _) = next(iter(self._sessions.items()))
            if added_at > cutoff and len(self._sessions) <= self.limit:
                break
            del self._sessions[import_id]

    def add(self, session: ImportSession) -> str:
        import_id = str(uuid.uuid4())
        self._sessions[import_id] = (self._clock(), session)
        self._evict()
        return import_id

    def get(self, import_id: str) -> ImportSession:
        self._evict()
        try:
            return self._sessions[import_id][1]
        except KeyError:
            raise NotFoundError(f"Import not found: {import_id}") from None

    def discard(self, import_id: str) -> None:
        if self._sessions.pop(import_id, None) is None:
            raise NotFoundError(f"Import not found: {import_id}")


@lru_cache
def get_import_sessions() -> ImportSessionStore:
    return ImportSessionStore()
