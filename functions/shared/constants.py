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


# Firestore collection holding one document per accepted registration.
REGISTRATIONS_COLLECTION = "registrations"

DEFAULT_REGISTRATIONS_FILENAME = "registrations.csv"
DEFAULT_REGISTRATIONS_OBJECT_KEY = "registrations/registrations.csv"

# (CSV column header, RegistrationRecord attribute), in serialized order.
CSV_COLUMNS = (
    ("First Name", "first_name"),
    ("Last Name", "last_name"),
    ("Email", "email"),
    ("Affiliation", "affiliation_type"),
    ("NetID", "net_id"),
    ("Graduation Year", "graduation_year"),
    ("Program", "program"),
    ("Attendance", "attendance"),
    ("Questions", "questions"),
    ("Timestamp", "timestamp"),
)
CSV_HEADER = tuple(name for name, _ in CSV_COLUMNS)
CSV_ATTRIBUTES = tuple(attr for _, attr in CSV_COLUMNS)

# Wire (camelCase) names of fields every submission must carry.
REQUIRED_FIELDS = (
    "firstName",
    "lastName",
    "email",
    "affiliationType",
    "attendance",
)

# Checked in this order when an affiliation requires more than one field.
CONDITIONAL_FIELDS = ("graduationYear", "netId", "program")

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
