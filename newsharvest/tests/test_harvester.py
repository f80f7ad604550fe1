import threading
import time
import unittest

from crawler.schemas.models import ListingItem
from newsharvest.aggregator import finalize
from newsharvest.harvester import BoundedHarvester, PermitPool, harvest
from newsharvest.models import HarvestConfigError

BASE_URL = "https://example.com/berita"


class _FakeParser:
    """PageParser double keyed by page URL; records calls and peak concurrency."""

    def __init__(self, pages=None, delay: float = 0.0):
        self.pages = pages or {}
        self.delay = delay
        self.calls = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def parse_page(self, page_url):
        with self._lock:
            self.calls.append(page_url)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            outcome = self.pages.get(page_url, [])
            if isinstance(outcome, Exception):
                raise outcome
            return list(outcome)
        finally:
            with self._lock:
                self.active -= 1


def _item(title: str, date: str) -> ListingItem:
    return ListingItem(title=title, date=date, link=f"https://example.com/berita/{title}")


def _page(n: int) -> str:
    return f"{BASE_URL}/laman/{n}"


class BoundedHarvesterTests(unittest.TestCase):
    def test_three_page_scenario_sorted_with_unreadable_last(self):
        parser = _FakeParser(
            {
                _page(1): [_item("jan", "5 Januari 2024")],
                _page(2): [],
                _page(3): [_item("feb", "10 Februari 2024"), _item("na", "N/A")],
            }
        )
        records = harvest(BASE_URL, 1, 3, 2, parser)
        result = finalize(records)

        self.assertEqual([r.title for r in result.records], ["feb", "jan", "na"])

    def test_failed_page_is_excluded_without_error(self):
        parser = _FakeParser(
            {
                _page(1): [_item("jan", "5 Januari 2024")],
                _page(2): RuntimeError("boom"),
                _page(3): [_item("feb", "10 Februari 2024")],
            }
        )
        with self.assertLogs("newsharvest.harvester", level="WARNING") as logs:
            records = harvest(BASE_URL, 1, 3, 3, parser)

        self.assertEqual(sorted(r.title for r in records), ["feb", "jan"])
        self.assertTrue(any("boom" in line for line in logs.output))
        self.assertEqual([r.title for r in finalize(records).records], ["feb", "jan"])

    def test_every_page_in_range_is_attempted_once(self):
        parser = _FakeParser()
        harvest(BASE_URL, 4, 15, 5, parser)
        self.assertEqual(sorted(parser.calls), sorted(_page(n) for n in range(4, 16)))

    def test_concurrency_never_exceeds_limit_and_permits_are_returned(self):
        pages = {_page(n): [_item(f"p{n}", f"{n} Januari 2024")] for n in range(1, 21)}
        parser = _FakeParser(pages, delay=0.01)
        harvester = BoundedHarvester()

        records = harvester.harvest(BASE_URL, 1, 20, 3, parser)

        self.assertEqual(len(records), 20)
        self.assertLessEqual(parser.max_active, 3)
        self.assertLessEqual(harvester.permits.peak, 3)
        self.assertEqual(harvester.permits.in_flight, 0)

    def test_permits_returned_when_every_page_fails(self):
        parser = _FakeParser({_page(n): ValueError("bad markup") for n in range(1, 6)})
        harvester = BoundedHarvester()
        with self.assertLogs("newsharvest.harvester", level="WARNING"):
            records = harvester.harvest(BASE_URL, 1, 5, 2, parser)
        self.assertEqual(records, [])
        self.assertEqual(harvester.permits.in_flight, 0)

    def test_single_permit_runs_pages_one_at_a_time(self):
        parser = _FakeParser({_page(n): [_item(f"p{n}", "")] for n in range(1, 5)}, delay=0.005)
        records = harvest(BASE_URL, 1, 4, 1, parser)
        self.assertEqual(parser.max_active, 1)
        self.assertEqual(len(records), 4)

    def test_limit_larger_than_range(self):
        parser = _FakeParser({_page(1): [_item("only", "1 Juli 2020")]})
        records = harvest(BASE_URL, 1, 1, 50, parser)
        self.assertEqual([r.title for r in records], ["only"])

    def test_page_url_template_and_trailing_slash(self):
        harvester = BoundedHarvester("{base_url}?page={page}")
        parser = _FakeParser()
        harvester.harvest("https://example.com/list/", 2, 2, 1, parser)
        self.assertEqual(parser.calls, ["https://example.com/list?page=2"])

    def test_malformed_parameters_rejected_before_scheduling(self):
        cases = [
            (BASE_URL, 3, 2, 1),
            (BASE_URL, 0, 2, 1),
            (BASE_URL, 1, 2, 0),
            (BASE_URL, 1, 2, -4),
            ("", 1, 2, 1),
        ]
        for base_url, first, last, limit in cases:
            with self.subTest(first=first, last=last, limit=limit, base_url=base_url):
                parser = _FakeParser()
                with self.assertRaises(HarvestConfigError):
                    harvest(base_url, first, last, limit, parser)
                self.assertEqual(parser.calls, [])


class PermitPoolTests(unittest.TestCase):
    def test_counts_in_flight_and_peak(self):
        pool = PermitPool(2)
        pool.acquire()
        pool.acquire()
        self.assertEqual(pool.in_flight, 2)
        pool.release()
        pool.release()
        self.assertEqual(pool.in_flight, 0)
        self.assertEqual(pool.peak, 2)

    def test_over_release_is_an_error(self):
        pool = PermitPool(1)
        with self.assertRaises(ValueError):
            pool.release()


if __name__ == "__main__":
    unittest.main()
