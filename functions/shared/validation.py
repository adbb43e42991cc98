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


"""
Validation of sign-up form submissions.

Which optional fields become mandatory depends only on the registrant's
affiliation; that dependency lives in AFFILIATION_REQUIREMENTS and nowhere
else, so the HTTP service and the Cloud Functions enforce the same rules.
"""

import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from shared.constants import CONDITIONAL_FIELDS, EMAIL_PATTERN, REQUIRED_FIELDS
from shared.errors import (
    InvalidChoiceError,
    InvalidEmailFormatError,
    MissingConditionalFieldError,
    MissingRequiredFieldError,
)
from shared.json_utils import camel_to_snake
from shared.types import Affiliation, Attendance, RegistrationRecord

AFFILIATION_REQUIREMENTS: dict[Affiliation, frozenset[str]] = {
    Affiliation.CURRENT_CLASS: frozenset({"netId", "program"}),
    Affiliation.INCOMING_CLASS: frozenset({"netId", "program"}),
    Affiliation.ALUMNI: frozenset({"netId", "graduationYear"}),
    Affiliation.OUTSIDE_CORNELL: frozenset(),
}

_EMAIL_RE = re.compile(EMAIL_PATTERN)

# Wire fields copied onto the record besides the required ones.
_OPTIONAL_FIELDS = CONDITIONAL_FIELDS + ("questions",)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC instant with millisecond precision, e.g. 2025-01-31T09:15:00.000Z."""
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def required_fields_for(affiliation: Affiliation) -> tuple[str, ...]:
    """Conditional fields the affiliation makes mandatory, in check order."""
    required = AFFILIATION_REQUIREMENTS[affiliation]
    return tuple(name for name in CONDITIONAL_FIELDS if name in required)


def validate_registration(
    payload: Mapping[str, Any], now: Optional[datetime] = None
) -> RegistrationRecord:
    """
    Validates one submission and returns the accepted record.

    Args:
        payload: Mapping of camelCase form field names to submitted values.
        now: Acceptance time; defaults to the current UTC time. A timestamp
            supplied inside the payload is always ignored.

    Returns:
        RegistrationRecord with the submitted values and a fresh timestamp.

    Raises:
        MissingRequiredFieldError: a required field is absent or blank.
        InvalidEmailFormatError: email is not shaped like local@domain.tld.
        InvalidChoiceError: affiliationType or attendance is not a known value.
        MissingConditionalFieldError: the affiliation requires netId,
            graduationYear or program and it is blank.
    """
    values = {name: _text(payload.get(name)) for name in REQUIRED_FIELDS}
    values.update({name: _text(payload.get(name)) for name in _OPTIONAL_FIELDS})

    for name in REQUIRED_FIELDS:
        if not values[name].strip():
            raise MissingRequiredFieldError(name)

    if not _EMAIL_RE.fullmatch(values["email"]):
        raise InvalidEmailFormatError()

    affiliation = Affiliation.parse(values["affiliationType"])
    if affiliation is None:
        raise InvalidChoiceError("affiliationType", values["affiliationType"])
    attendance = Attendance.parse(values["attendance"])
    if attendance is None:
        raise InvalidChoiceError("attendance", values["attendance"])

    for name in required_fields_for(affiliation):
        if not values[name].strip():
            raise MissingConditionalFieldError(name)

    values["affiliationType"] = affiliation.value
    values["attendance"] = attendance.value
    record_fields = {camel_to_snake(name): value for name, value in values.items()}
    return RegistrationRecord(timestamp=utc_timestamp(now), **record_fields)
