import unittest
from datetime import datetime, timezone

from newsharvest.dates import DateNormalizer, date_sort_key, normalize_date


class NormalizeDateTests(unittest.TestCase):
    def test_indonesian_month_is_translated(self):
        self.assertEqual(normalize_date("5 Januari 2024"), datetime(2024, 1, 5, tzinfo=timezone.utc))
        self.assertEqual(normalize_date("17 Agustus 1945"), datetime(1945, 8, 17, tzinfo=timezone.utc))
        self.assertEqual(normalize_date("2 Mei 2023"), datetime(2023, 5, 2, tzinfo=timezone.utc))

    def test_date_embedded_in_listing_text(self):
        parsed = normalize_date("  Senin, 10 Februari 2024 | 10:00 WIB ")
        self.assertEqual(parsed, datetime(2024, 2, 10, tzinfo=timezone.utc))

    def test_pipe_noise_and_non_breaking_space(self):
        self.assertEqual(normalize_date("| 3 Desember 2023 |"), datetime(2023, 12, 3, tzinfo=timezone.utc))
        self.assertEqual(normalize_date("\xa07 Oktober 2022"), datetime(2022, 10, 7, tzinfo=timezone.utc))

    def test_english_month_passes_through(self):
        self.assertEqual(normalize_date("1 March 2024"), datetime(2024, 3, 1, tzinfo=timezone.utc))

    def test_unreadable_inputs_return_none(self):
        for text in ("N/A", "", "   ", None, "2024-01-05", "5 Foo 2024", "Januari 2024"):
            with self.subTest(text=text):
                self.assertIsNone(normalize_date(text))

    def test_impossible_calendar_date_returns_none(self):
        self.assertIsNone(normalize_date("31 Februari 2024"))

    def test_more_than_one_date_is_ambiguous(self):
        self.assertIsNone(normalize_date("5 Januari 2024 - 6 Januari 2024"))

    def test_month_match_is_case_sensitive(self):
        self.assertIsNone(normalize_date("5 januari 2024"))

    def test_deterministic(self):
        text = "Rabu, 21 Juni 2023"
        self.assertEqual(normalize_date(text), normalize_date(text))

    def test_custom_month_table(self):
        normalizer = DateNormalizer(months={"Janvier": "January"})
        self.assertEqual(normalizer.normalize("9 Janvier 2021"), datetime(2021, 1, 9, tzinfo=timezone.utc))
        self.assertIsNone(normalizer.normalize("9 Januari 2021"))


class DateSortKeyTests(unittest.TestCase):
    def test_newest_first_then_unreadable(self):
        texts = ["N/A", "5 Januari 2024", "10 Februari 2024", "1 Januari 2023"]
        ordered = sorted(texts, key=date_sort_key)
        self.assertEqual(ordered, ["10 Februari 2024", "5 Januari 2024", "1 Januari 2023", "N/A"])


if __name__ == "__main__":
    unittest.main()
