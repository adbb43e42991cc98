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


from typing import Optional


class RegistrationError(Exception):
    """Base class for registration errors. None of these are fatal."""


class RegistrationValidationError(RegistrationError):
    """A submission the registrant can correct and resubmit."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def as_dict(self) -> dict:
        return {"code": self.code, "field": self.field, "message": self.message}


class MissingRequiredFieldError(RegistrationValidationError):
    code = "MISSING_REQUIRED_FIELD"

    def __init__(self, field: str):
        super().__init__("Please fill in all required fields", field)


class InvalidEmailFormatError(RegistrationValidationError):
    code = "INVALID_EMAIL_FORMAT"

    def __init__(self, field: str = "email"):
        super().__init__("Please enter a valid email address", field)


class InvalidChoiceError(RegistrationValidationError):
    code = "INVALID_CHOICE"

    def __init__(self, field: str, value: str):
        super().__init__(f"Invalid value for {field}: {value!r}", field)
        self.value = value


_CONDITIONAL_MESSAGES = {
    "netId": "Please provide your Cornell NetID",
    "graduationYear": "Please provide your graduation year",
    "program": "Please provide your program",
}


class MissingConditionalFieldError(RegistrationValidationError):
    code = "MISSING_CONDITIONAL_FIELD"

    def __init__(self, field: str):
        super().__init__(
            _CONDITIONAL_MESSAGES.get(field, f"Please provide {field}"), field
        )


class MalformedDocumentError(RegistrationError):
    """A CSV document that does not even contain a header line."""
