import unittest

from shared.csv_codec import count_rows, document_header
from shared.types import RegistrationRecord
from signup.db import InMemoryRegistrationStore, SqlRegistrationStore


def _record(first_name: str, timestamp: str, **overrides) -> RegistrationRecord:
    values = dict(
        first_name=first_name,
        last_name="Tester",
        email=f"{first_name.lower()}@example.com",
        affiliation_type="Outside of Cornell",
        attendance="Yes",
        timestamp=timestamp,
    )
    values.update(overrides)
    return RegistrationRecord(**values)


class SqlRegistrationStoreTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL store logic.
    """

    def setUp(self):
        self.store = SqlRegistrationStore("sqlite+pysqlite:///:memory:")
        self.store.ensure_ready()

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            SqlRegistrationStore("")

    def test_ensure_ready_is_idempotent(self):
        self.store.ensure_ready()
        self.assertEqual(self.store.count(), 0)

    def test_add_and_list_most_recent_first(self):
        self.store.add(_record("Early", "2025-01-01T09:00:00.000Z"))
        self.store.add(_record("Late", "2025-01-03T09:00:00.000Z"))
        self.store.add(_record("Middle", "2025-01-02T09:00:00.000Z"))

        names = [record.first_name for record in self.store.list_recent()]
        self.assertEqual(names, ["Late", "Middle", "Early"])
        self.assertEqual(self.store.count(), 3)

        limited = self.store.list_recent(limit=1)
        self.assertEqual([record.first_name for record in limited], ["Late"])

    def test_round_trips_all_fields(self):
        record = _record(
            "Ada",
            "2025-01-01T00:00:00.000Z",
            affiliation_type="Alumni",
            net_id="al1",
            graduation_year="1843",
            questions='He said, "hi"\nbye',
        )
        self.store.add(record)
        self.assertEqual(self.store.list_recent(), [record])

    def test_export_and_reset(self):
        self.store.add(_record("One", "2025-01-01T00:00:00.000Z"))
        self.store.add(_record("Two", "2025-01-02T00:00:00.000Z"))

        document = self.store.export_document()
        self.assertTrue(document_header(document).startswith("First Name,"))
        self.assertEqual(count_rows(document), 2)
        self.assertTrue(document.splitlines()[1].startswith("Two,"))

        self.store.reset()
        self.assertEqual(self.store.count(), 0)
        self.assertEqual(count_rows(self.store.export_document()), 0)

    def test_location_hides_password(self):
        store = SqlRegistrationStore("sqlite+pysqlite:///:memory:")
        self.assertIn("sqlite", store.location)


class InMemoryRegistrationStoreTests(unittest.TestCase):

    def test_ties_list_latest_insert_first(self):
        store = InMemoryRegistrationStore()
        store.add(_record("First", "2025-01-01T00:00:00.000Z"))
        store.add(_record("Second", "2025-01-01T00:00:00.000Z"))
        self.assertEqual(
            [record.first_name for record in store.list_recent()],
            ["Second", "First"],
        )

    def test_reset(self):
        store = InMemoryRegistrationStore()
        store.add(_record("First", "2025-01-01T00:00:00.000Z"))
        store.reset()
        self.assertEqual(store.count(), 0)
        self.assertEqual(store.list_recent(), [])


if __name__ == "__main__":
    unittest.main()
