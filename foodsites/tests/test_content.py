import tempfile
import unittest
from pathlib import Path

from foodsites.content import ContentError, SiteCollection, split_front_matter
from foodsites.sites import SiteType

VALID = """---
name: Fondren Corner Market
type: drop-off
category: grocery
address: 2906 N State St
city: Jackson
zip: 39216
lat: 32.33
lng: -90.17
---
Drop-off bin by the registers.
"""


class SiteCollectionTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_loads_entries_with_defaults(self):
        (self.root / "fondren.md").write_text(VALID)
        collection = SiteCollection(self.root)
        item = collection.get("fondren")
        self.assertIsNotNone(item)
        self.assertEqual(item.entry.type, SiteType.DROP_OFF)
        self.assertEqual(item.entry.zip, "39216")
        self.assertFalse(item.entry.featured)
        self.assertEqual(item.description, "Drop-off bin by the registers.")
        self.assertEqual(collection.featured(), [])

        site = collection.sites()[0]
        self.assertEqual(site.slug, "fondren")
        self.assertTrue(site.has_coords)

    def test_invalid_type_names_file(self):
        (self.root / "broken.md").write_text(VALID.replace("drop-off", "delivery"))
        with self.assertRaises(ContentError) as ctx:
            SiteCollection(self.root).all()
        self.assertIn("broken.md", str(ctx.exception))

    def test_missing_directory_is_empty(self):
        self.assertEqual(SiteCollection(self.root / "nope").all(), [])

    def test_unterminated_front_matter(self):
        with self.assertRaises(ContentError):
            split_front_matter("---\nname: x\n")

    def test_no_front_matter(self):
        self.assertEqual(split_front_matter("just text"), ("", "just text"))


if __name__ == "__main__":
    unittest.main()
