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

from shared.json_utils import convert_keys
from shared.types import Affiliation, Attendance, RegistrationRecord


class ConvertKeysTest(unittest.TestCase):

    def test_round_trip_nested(self):
        data = {"first_name": "Ada", "items": [{"graduation_year": "1843"}]}
        camel = convert_keys(data, "snake_to_camel")
        self.assertEqual(camel, {"firstName": "Ada", "items": [{"graduationYear": "1843"}]})
        self.assertEqual(convert_keys(camel, "camel_to_snake"), data)

    def test_unknown_direction(self):
        with self.assertRaises(ValueError):
            convert_keys({}, "kebab")


class EnumParseTest(unittest.TestCase):

    def test_affiliation_labels_and_compact_names(self):
        self.assertEqual(Affiliation.parse("Incoming Class"), Affiliation.INCOMING_CLASS)
        self.assertEqual(Affiliation.parse("IncomingClass"), Affiliation.INCOMING_CLASS)
        self.assertEqual(Affiliation.parse("OutsideCornell"), Affiliation.OUTSIDE_CORNELL)
        self.assertIsNone(Affiliation.parse("Staff"))

    def test_attendance(self):
        self.assertEqual(Attendance.parse("Maybe"), Attendance.MAYBE)
        self.assertIsNone(Attendance.parse("maybe later"))


class RegistrationRecordTest(unittest.TestCase):

    def test_as_dict_uses_wire_names(self):
        record = RegistrationRecord(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@x.com",
            affiliation_type="Alumni",
            attendance="Yes",
            timestamp="2025-01-01T00:00:00.000Z",
            net_id="al1",
            graduation_year="1843",
        )
        self.assertEqual(
            record.as_dict(),
            {
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "ada@x.com",
                "affiliationType": "Alumni",
                "attendance": "Yes",
                "timestamp": "2025-01-01T00:00:00.000Z",
                "netId": "al1",
                "graduationYear": "1843",
                "program": "",
                "questions": "",
            },
        )
        self.assertEqual(RegistrationRecord.from_dict(record.as_dict()), record)

    def test_from_dict_tolerates_legacy_documents(self):
        record = RegistrationRecord.from_dict(
            {
                "firstName": "Old",
                "lastName": "Entry",
                "email": "old@x.com",
                "affiliationType": "Alumni",
                "graduationYear": 1999,
                "timestamp": "2024-01-01T00:00:00.000Z",
                "id": "ignored",
            }
        )
        self.assertEqual(record.attendance, "")
        self.assertEqual(record.graduation_year, "1999")
        self.assertEqual(record.program, "")


if __name__ == "__main__":
    unittest.main()
