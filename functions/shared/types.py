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


from dataclasses import asdict, dataclass, fields
from enum import StrEnum
from typing import Any, Mapping, Optional

from dacite import Config, from_dict

from shared.json_utils import convert_keys


class Affiliation(StrEnum):
    """How a registrant relates to the program. Values are the form labels."""

    CURRENT_CLASS = "Current Class"
    INCOMING_CLASS = "Incoming Class"
    ALUMNI = "Alumni"
    OUTSIDE_CORNELL = "Outside of Cornell"

    @classmethod
    def parse(cls, value: str) -> Optional["Affiliation"]:
        """Returns the member for a form label or compact name, else None."""
        text = value.strip()
        for member in cls:
            if text == member.value:
                return member
        return _AFFILIATION_ALIASES.get(text)


_AFFILIATION_ALIASES = {
    "CurrentClass": Affiliation.CURRENT_CLASS,
    "IncomingClass": Affiliation.INCOMING_CLASS,
    "Alumni": Affiliation.ALUMNI,
    "OutsideCornell": Affiliation.OUTSIDE_CORNELL,
}


class Attendance(StrEnum):
    YES = "Yes"
    MAYBE = "Maybe"
    NO = "No"

    @classmethod
    def parse(cls, value: str) -> Optional["Attendance"]:
        text = value.strip()
        for member in cls:
            if text == member.value:
                return member
        return None


@dataclass(frozen=True)
class RegistrationRecord:
    """One accepted registration. Never updated after creation."""

    first_name: str
    last_name: str
    email: str
    affiliation_type: str
    attendance: str
    timestamp: str
    net_id: str = ""
    graduation_year: str = ""
    program: str = ""
    questions: str = ""

    def as_dict(self) -> dict:
        """Returns the camelCase wire/document shape."""
        return convert_keys(asdict(self), "snake_to_camel")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RegistrationRecord":
        """
        Loads a stored registration (camelCase keys).

        Stored documents may predate server-side validation, so missing
        fields load as empty strings and nothing is re-validated.
        """
        snake = convert_keys(dict(data), "camel_to_snake")
        normalized = {}
        for field in fields(cls):
            value = snake.get(field.name)
            normalized[field.name] = "" if value is None else str(value)
        return from_dict(
            data_class=cls, data=normalized, config=Config(check_types=False)
        )
