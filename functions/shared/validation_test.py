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


import unittest
from datetime import datetime, timezone

from shared.errors import (
    InvalidChoiceError,
    InvalidEmailFormatError,
    MissingConditionalFieldError,
    MissingRequiredFieldError,
)
from shared.types import Affiliation, RegistrationRecord
from shared.validation import (
    required_fields_for,
    utc_timestamp,
    validate_registration,
)

FIXED_NOW = datetime(2025, 3, 14, 15, 9, 26, 535000, tzinfo=timezone.utc)


def _payload(**overrides):
    payload = {
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "grace@navy.mil",
        "affiliationType": "Outside of Cornell",
        "attendance": "Maybe",
    }
    payload.update(overrides)
    return payload


class ValidateRegistrationTest(unittest.TestCase):

    def test_valid_outside_registration(self):
        record = validate_registration(_payload(), now=FIXED_NOW)

        self.assertIsInstance(record, RegistrationRecord)
        self.assertEqual(record.first_name, "Grace")
        self.assertEqual(record.affiliation_type, "Outside of Cornell")
        self.assertEqual(record.net_id, "")
        self.assertEqual(record.timestamp, "2025-03-14T15:09:26.535Z")

    def test_missing_required_fields(self):
        for field in ["firstName", "lastName", "email", "affiliationType", "attendance"]:
            for missing in [None, "", "   "]:
                with self.subTest(field=field, value=missing):
                    with self.assertRaises(MissingRequiredFieldError) as ctx:
                        validate_registration(_payload(**{field: missing}))
                    self.assertEqual(ctx.exception.field, field)

    def test_absent_required_field(self):
        payload = _payload()
        del payload["attendance"]
        with self.assertRaises(MissingRequiredFieldError) as ctx:
            validate_registration(payload)
        self.assertEqual(ctx.exception.field, "attendance")

    def test_required_fields_checked_in_form_order(self):
        with self.assertRaises(MissingRequiredFieldError) as ctx:
            validate_registration({"email": "a@b.com"})
        self.assertEqual(ctx.exception.field, "firstName")

    def test_invalid_emails(self):
        for email in ["abc", "a@b", "a@b@c.com", "a b@c.com", "@b.com", "a@b.com\n"]:
            with self.subTest(email=email):
                with self.assertRaises(InvalidEmailFormatError):
                    validate_registration(_payload(email=email))

    def test_permissive_emails_accepted(self):
        for email in ["a@b.com", "x@y.z", "first.last+tag@sub.example.co.uk", "a@b.c.d"]:
            with self.subTest(email=email):
                record = validate_registration(_payload(email=email))
                self.assertEqual(record.email, email)

    def test_unknown_affiliation_rejected(self):
        with self.assertRaises(InvalidChoiceError) as ctx:
            validate_registration(_payload(affiliationType="Faculty"))
        self.assertEqual(ctx.exception.field, "affiliationType")

    def test_unknown_attendance_rejected(self):
        with self.assertRaises(InvalidChoiceError) as ctx:
            validate_registration(_payload(attendance="Definitely"))
        self.assertEqual(ctx.exception.field, "attendance")

    def test_compact_affiliation_names_accepted(self):
        record = validate_registration(
            _payload(affiliationType="CurrentClass", netId="abc123", program="MBA")
        )
        self.assertEqual(record.affiliation_type, "Current Class")

    def test_alumni_requires_graduation_year(self):
        for extra in [{"netId": "al1"}, {}]:
            with self.subTest(extra=extra):
                with self.assertRaises(MissingConditionalFieldError) as ctx:
                    validate_registration(_payload(affiliationType="Alumni", **extra))
                self.assertEqual(ctx.exception.field, "graduationYear")

    def test_net_id_required_for_cornell_affiliations(self):
        for affiliation in ["Current Class", "Incoming Class", "Alumni"]:
            with self.subTest(affiliation=affiliation):
                with self.assertRaises(MissingConditionalFieldError) as ctx:
                    validate_registration(
                        _payload(
                            affiliationType=affiliation,
                            graduationYear="2020",
                            program="MPS",
                        )
                    )
                self.assertEqual(ctx.exception.field, "netId")

    def test_program_required_for_students(self):
        for affiliation in ["Current Class", "Incoming Class"]:
            with self.subTest(affiliation=affiliation):
                with self.assertRaises(MissingConditionalFieldError) as ctx:
                    validate_registration(
                        _payload(affiliationType=affiliation, netId="ab12")
                    )
                self.assertEqual(ctx.exception.field, "program")

    def test_outside_needs_no_conditional_fields(self):
        record = validate_registration(_payload(affiliationType="Outside of Cornell"))
        self.assertEqual(record.program, "")
        self.assertEqual(record.graduation_year, "")

    def test_required_fields_for_table(self):
        self.assertEqual(required_fields_for(Affiliation.ALUMNI), ("graduationYear", "netId"))
        self.assertEqual(required_fields_for(Affiliation.CURRENT_CLASS), ("netId", "program"))
        self.assertEqual(required_fields_for(Affiliation.OUTSIDE_CORNELL), ())

    def test_client_timestamp_ignored(self):
        record = validate_registration(
            _payload(timestamp="1999-01-01T00:00:00.000Z"), now=FIXED_NOW
        )
        self.assertEqual(record.timestamp, "2025-03-14T15:09:26.535Z")

    def test_values_kept_unchanged(self):
        record = validate_registration(
            _payload(
                affiliationType="Alumni",
                netId="al1",
                graduationYear=1843,
                questions='He said, "hi"\nbye',
                extra="ignored",
            )
        )
        self.assertEqual(record.graduation_year, "1843")
        self.assertEqual(record.questions, 'He said, "hi"\nbye')
        self.assertFalse(hasattr(record, "extra"))

    def test_error_payload(self):
        with self.assertRaises(MissingConditionalFieldError) as ctx:
            validate_registration(_payload(affiliationType="Alumni", netId="al1"))
        self.assertEqual(
            ctx.exception.as_dict(),
            {
                "code": "MISSING_CONDITIONAL_FIELD",
                "field": "graduationYear",
                "message": "Please provide your graduation year",
            },
        )


class UtcTimestampTest(unittest.TestCase):

    def test_naive_datetime_treated_as_utc(self):
        self.assertEqual(
            utc_timestamp(datetime(2024, 1, 2, 3, 4, 5)), "2024-01-02T03:04:05.000Z"
        )

    def test_default_is_current_utc(self):
        stamp = utc_timestamp()
        self.assertTrue(stamp.endswith("Z"))
        parsed = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
        self.assertEqual(parsed.tzinfo, timezone.utc)


if __name__ == "__main__":
    unittest.main()
