"""
HTTP routes for the registration API.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Query, Response

from shared.csv_codec import count_rows, document_header
from shared.errors import MalformedDocumentError, RegistrationValidationError
from shared.validation import utc_timestamp, validate_registration
from signup.config import Settings, get_settings
from signup.db import RegistrationStore
from signup.dependencies import get_registration_store
from signup.schemas import (
    CheckResponse,
    HealthResponse,
    PingResponse,
    RegisterResponse,
    Registration,
    RegistrationListResponse,
    ResetResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DOWNLOAD_FILENAME = "registrations.csv"
NO_DATA_MESSAGE = "No data available"


def require_admin(
    x_admin_token: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Guards admin routes when ADMIN_TOKEN is configured."""
    if not settings.admin_token:
        return
    if not x_admin_token or not secrets.compare_digest(
        x_admin_token, settings.admin_token
    ):
        raise HTTPException(status_code=401, detail="Admin token required")


def _backend_name(settings: Settings) -> str:
    return "memory" if settings.use_in_memory_backends else settings.registration_backend


@router.get("/test", response_model=PingResponse)
def ping():
    return PingResponse(status="ok", message="Server is running properly")


@router.get("/health", response_model=HealthResponse)
def health(
    settings: Settings = Depends(get_settings),
    store: RegistrationStore = Depends(get_registration_store),
):
    return HealthResponse(
        status="ok",
        message="Server is running properly",
        environment=settings.environment,
        timestamp=utc_timestamp(),
        backend=_backend_name(settings),
        location=store.location,
        cors_origins=settings.cors_origins,
    )


@router.post("/register", response_model=RegisterResponse)
def register(
    payload: dict[str, Any] = Body(...),
    store: RegistrationStore = Depends(get_registration_store),
):
    """
    Validate a sign-up submission and persist it.
    """
    try:
        record = validate_registration(payload)
    except RegistrationValidationError as e:
        logger.info("Rejected registration (%s: %s)", e.code, e.field)
        raise HTTPException(status_code=400, detail=e.as_dict())

    try:
        store.add(record)
    except Exception as e:
        logger.exception("Error saving registration")
        raise HTTPException(status_code=500, detail=f"Server error: {e}")

    return RegisterResponse(
        success=True,
        message="Registration saved successfully",
        timestamp=record.timestamp,
    )


@router.get(
    "/registrations",
    response_model=RegistrationListResponse,
    dependencies=[Depends(require_admin)],
)
def list_registrations(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    store: RegistrationStore = Depends(get_registration_store),
):
    try:
        records = store.list_recent(limit=limit)
    except (FileNotFoundError, MalformedDocumentError) as e:
        logger.warning("No registrations available: %s", e)
        records = []
    registrations = [Registration(**record.as_dict()) for record in records]
    return RegistrationListResponse(
        registrations=registrations, total=len(registrations)
    )


@router.get("/download", dependencies=[Depends(require_admin)])
def download(store: RegistrationStore = Depends(get_registration_store)):
    try:
        document = store.export_document()
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Registrations file not found")
    return Response(
        content=document,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"'
        },
    )


@router.api_route(
    "/reset",
    methods=["GET", "POST"],
    response_model=ResetResponse,
    dependencies=[Depends(require_admin)],
)
def reset(store: RegistrationStore = Depends(get_registration_store)):
    logger.info("Resetting registrations at %s", store.location)
    try:
        store.reset()
    except Exception as e:
        logger.exception("Error resetting registrations")
        raise HTTPException(status_code=500, detail=f"Failed to reset: {e}")
    return ResetResponse(
        success=True,
        message="Registrations reset successfully",
        location=store.location,
    )


@router.get("/check", response_model=CheckResponse)
def check(store: RegistrationStore = Depends(get_registration_store)):
    try:
        document = store.export_document()
        headers = document_header(document)
        registrations_count = count_rows(document)
    except (FileNotFoundError, MalformedDocumentError) as e:
        logger.warning("Status check found no data at %s: %s", store.location, e)
        return CheckResponse(
            success=True,
            exists=False,
            location=store.location,
            headers="",
            registrations_count=0,
            message=NO_DATA_MESSAGE,
        )
    return CheckResponse(
        success=True,
        exists=True,
        location=store.location,
        headers=headers,
        registrations_count=registrations_count,
    )
