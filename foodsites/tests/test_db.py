import unittest

from foodsites.db import InMemoryRegistrationStore, PartnerRegistration, SqlRegistrationStore


def _registration(org: str, city: str = "Jackson", **extra) -> PartnerRegistration:
    return PartnerRegistration(
        org=org,
        name="Dana",
        email="dana@example.com",
        phone="601-555-0100",
        address="12 Main St",
        city=city,
        zip="39201",
        open_hours="9-5",
        **extra,
    )


class SqlRegistrationStoreTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL store.
    """

    def setUp(self):
        self.db = SqlRegistrationStore("sqlite+pysqlite:///:memory:")

    def test_create_and_get(self):
        record = _registration("Corner Grocery", offer_both=True, additional_info="Loading dock")
        saved = self.db.create_registration(record)
        self.assertEqual(saved.id, record.id)

        fetched = self.db.get_registration(record.id)
        self.assertIsNotNone(fetched)
        self.assertEqual(fetched.org, "Corner Grocery")
        self.assertTrue(fetched.offer_both)
        self.assertEqual(fetched.additional_info, "Loading dock")
        self.assertIsNone(self.db.get_registration("missing"))

    def test_list_filters_city_case_insensitively(self):
        self.db.create_registration(_registration("A", city="Jackson"))
        self.db.create_registration(_registration("B", city="Ridgeland"))
        self.assertEqual(
            [r.org for r in self.db.list_registrations(city="JACKSON")], ["A"]
        )
        self.assertEqual(len(self.db.list_registrations()), 2)


class InMemoryRegistrationStoreTests(unittest.TestCase):
    def test_list_and_reset(self):
        store = InMemoryRegistrationStore()
        store.create_registration(_registration("A", city="Jackson"))
        store.create_registration(_registration("B", city="Ridgeland"))
        self.assertEqual([r.org for r in store.list_registrations("ridgeland")], ["B"])
        store.reset()
        self.assertEqual(store.list_registrations(), [])


if __name__ == "__main__":
    unittest.main()
