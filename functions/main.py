# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================


# Cloud functions for the event registration backend.
#
# This file containing Python cloud functions must be named main.py.
# See https://cloud.google.com/run/docs/write-functions#python for more info.

# Standard library imports
import os
import secrets
from dataclasses import asdict, dataclass

# Third-party library imports
from firebase_admin import initialize_app, firestore
from firebase_functions import https_fn, logger, options

# Local application imports
from shared.constants import REGISTRATIONS_COLLECTION
from shared.csv_codec import count_rows, document_header
from shared.errors import MalformedDocumentError, RegistrationValidationError
from shared.json_utils import convert_keys
from shared.validation import validate_registration
from signup.firestore_store import FirestoreRegistrationStore

MAX_LIST_LIMIT = 1000
DOWNLOAD_FILENAME = "registrations.csv"
ADMIN_TOKEN_HEADER = "X-Admin-Token"

initialize_app()


@dataclass
class RegisterAttendeeResult:
    success: bool
    message: str
    timestamp: str


@dataclass
class CheckRegistrationsResult:
    success: bool
    exists: bool
    headers: str
    registrations_count: int


def _registration_store() -> FirestoreRegistrationStore:
    return FirestoreRegistrationStore(firestore.client(), REGISTRATIONS_COLLECTION)


def _is_admin_request(headers) -> bool:
    """Admin functions are open unless ADMIN_TOKEN is set in the environment."""
    admin_token = os.environ.get("ADMIN_TOKEN")
    if not admin_token:
        return True
    supplied = headers.get(ADMIN_TOKEN_HEADER) or ""
    return secrets.compare_digest(supplied, admin_token)


@https_fn.on_call(memory=options.MemoryOption.MB_256)
def register_attendee(req: https_fn.CallableRequest) -> dict:
    """
    Validates a sign-up submission and saves it to Firestore.

    Args:
        req (https_fn.CallableRequest): The request, containing the form fields
            in camelCase.

    Returns:
        A dictionary representation of the RegisterAttendeeResult object.
    """
    payload = req.data if isinstance(req.data, dict) else {}

    try:
        record = validate_registration(payload)
    except RegistrationValidationError as e:
        logger.info(f"Rejected registration ({e.code}: {e.field})")
        raise https_fn.HttpsError(
            https_fn.FunctionsErrorCode.INVALID_ARGUMENT, e.message, e.as_dict()
        )

    try:
        _registration_store().add(record)
    except Exception as e:
        logger.error(f"Error registering attendee: {e}")
        raise https_fn.HttpsError(https_fn.FunctionsErrorCode.INTERNAL, str(e))

    result = RegisterAttendeeResult(
        success=True,
        message="Registration saved successfully",
        timestamp=record.timestamp,
    )
    return convert_keys(asdict(result), "snake_to_camel")


@https_fn.on_call(memory=options.MemoryOption.MB_256)
def list_registrations(req: https_fn.CallableRequest) -> dict:
    """
    Returns registrations, most recent first.

    Args:
        req (https_fn.CallableRequest): The request, optionally containing a
            positive integer `limit`.
    """
    if not _is_admin_request(req.raw_request.headers):
        raise https_fn.HttpsError(
            https_fn.FunctionsErrorCode.UNAUTHENTICATED, "Admin token required"
        )

    data = req.data if isinstance(req.data, dict) else {}
    limit = data.get("limit")
    if limit is not None and (
        not isinstance(limit, int) or isinstance(limit, bool) or not 0 < limit <= MAX_LIST_LIMIT
    ):
        raise https_fn.HttpsError(
            https_fn.FunctionsErrorCode.INVALID_ARGUMENT,
            f"limit must be an integer between 1 and {MAX_LIST_LIMIT}.",
        )

    records = _registration_store().list_recent(limit=limit)
    return {"registrations": [record.as_dict() for record in records]}


@https_fn.on_call(memory=options.MemoryOption.MB_256)
def check_registrations(req: https_fn.CallableRequest) -> dict:
    """
    Reports the export header and how many registrations are stored.
    """
    document = _registration_store().export_document()
    try:
        result = CheckRegistrationsResult(
            success=True,
            exists=True,
            headers=document_header(document),
            registrations_count=count_rows(document),
        )
    except MalformedDocumentError as e:
        logger.warn(f"No registration data available: {e}")
        result = CheckRegistrationsResult(
            success=True, exists=False, headers="", registrations_count=0
        )
    return convert_keys(asdict(result), "snake_to_camel")


@https_fn.on_request(memory=options.MemoryOption.MB_256)
def download_registrations(req: https_fn.Request) -> https_fn.Response:
    """
    Serves every registration as a CSV attachment, most recent first.
    """
    if not _is_admin_request(req.headers):
        return https_fn.Response(
            "Admin token required", status=401, mimetype="text/plain"
        )

    try:
        document = _registration_store().export_document()
    except Exception as e:
        logger.error(f"Error exporting registrations: {e}")
        return https_fn.Response(
            f"Error downloading file: {e}", status=500, mimetype="text/plain"
        )

    return https_fn.Response(
        document,
        status=200,
        mimetype="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={DOWNLOAD_FILENAME}"
        },
    )
