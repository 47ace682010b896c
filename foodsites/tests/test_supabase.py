import unittest
from unittest.mock import MagicMock, patch

from foodsites.db import PartnerRegistration, StoreError
from foodsites.supabase import SupabaseRegistrationStore

ROW = {
    "id": "7b0c7f3e-0d7a-4bb1-9a53-3c5f0f2c9f10",
    "org": "Corner Grocery",
    "name": "Dana",
    "email": "dana@example.com",
    "phone": "601-555-0100",
    "address": "12 Main St",
    "city": "Jackson",
    "zip": "39201",
    "open_hours": "9-5",
    "business_type": None,
    "offer_dropoff": True,
    "offer_pickup": False,
    "offer_both": False,
    "created_at": "2025-05-01T12:00:00+00:00",
}


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response


class SupabaseRegistrationStoreTests(unittest.TestCase):
    def setUp(self):
        self.store = SupabaseRegistrationStore(
            url="https://proj.supabase.co/", service_role_key="service-key"
        )

    def test_requires_credentials(self):
        with self.assertRaises(ValueError):
            SupabaseRegistrationStore(url="https://proj.supabase.co", service_role_key="")

    def test_headers_use_service_role_key(self):
        headers = self.store._session.headers
        self.assertEqual(headers["apikey"], "service-key")
        self.assertEqual(headers["Authorization"], "Bearer service-key")

    def test_list_with_city_uses_ilike(self):
        with patch.object(
            self.store._session, "get", return_value=_response(payload=[ROW])
        ) as mock_get:
            records = self.store.list_registrations(city="jackson")

        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], "https://proj.supabase.co/rest/v1/partner_registrations")
        self.assertEqual(kwargs["params"]["city"], "ilike.jackson")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].id, ROW["id"])
        self.assertEqual(records[0].business_type, "")
        self.assertGreater(records[0].created_at, 0)

    def test_insert_omits_created_at(self):
        record = PartnerRegistration(
            org="Corner Grocery",
            name="Dana",
            email="dana@example.com",
            phone="601-555-0100",
            address="12 Main St",
            city="Jackson",
            zip="39201",
            open_hours="9-5",
        )
        with patch.object(
            self.store._session, "post", return_value=_response(201, payload=[ROW])
        ) as mock_post:
            saved = self.store.create_registration(record)

        sent = mock_post.call_args.kwargs["json"]
        self.assertNotIn("created_at", sent)
        self.assertEqual(sent["org"], "Corner Grocery")
        self.assertEqual(mock_post.call_args.kwargs["headers"]["Prefer"], "return=representation")
        self.assertEqual(saved.id, ROW["id"])

    def test_error_status_raises(self):
        with patch.object(
            self.store._session, "get", return_value=_response(500, text="boom")
        ):
            with self.assertRaises(StoreError):
                self.store.list_registrations()

    def test_get_missing_returns_none(self):
        with patch.object(self.store._session, "get", return_value=_response(payload=[])):
            self.assertIsNone(self.store.get_registration(ROW["id"]))

    def test_get_non_uuid_id_skips_request(self):
        with patch.object(
            self.store._session, "get", return_value=_response(400, text="invalid uuid")
        ) as mock_get:
            self.assertIsNone(self.store.get_registration("jackson-community-pantry"))
        mock_get.assert_not_called()

    def test_get_by_uuid(self):
        with patch.object(
            self.store._session, "get", return_value=_response(payload=[ROW])
        ) as mock_get:
            record = self.store.get_registration(ROW["id"])
        self.assertEqual(mock_get.call_args.kwargs["params"]["id"], f"eq.{ROW['id']}")
        self.assertEqual(record.org, "Corner Grocery")


if __name__ == "__main__":
    unittest.main()
