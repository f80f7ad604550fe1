"""
Concurrent multi-page harvesting with a fixed concurrency ceiling.

Every page in the closed range is fetched on a worker thread once a permit is available.
Non-empty page results travel through a queue to a single collector thread, which is the
only writer of the aggregate list. The queue is closed only after all page tasks have
finished, so no result is sent after close and none is dropped.
"""
from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional

from crawler.schemas.models import ListingItem

from newsharvest.models import HarvestParams
from newsharvest.parsers.base import PageParser

logger = logging.getLogger(__name__)

DEFAULT_PAGE_URL_TEMPLATE = "{base_url}/laman/{page}"

_CLOSED = object()


class PermitPool:
    """Counting semaphore that also records how many permits are out and the peak."""

    def __init__(self, size: int) -> None:
        self.size = size
        self._semaphore = threading.BoundedSemaphore(size)
        self._lock = threading.Lock()
        self.in_flight = 0
        self.peak = 0

    def acquire(self) -> None:
        self._semaphore.acquire()
        with self._lock:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)

    def release(self) -> None:
        with self._lock:
            if self.in_flight == 0:
                raise ValueError("permit released more times than acquired")
            self.in_flight -= 1
        self._semaphore.release()


class BoundedHarvester:
    def __init__(self, page_url_template: str = DEFAULT_PAGE_URL_TEMPLATE) -> None:
        self.page_url_template = page_url_template
        self.permits: Optional[PermitPool] = None

    def page_url(self, base_url: str, page: int) -> str:
        return self.page_url_template.format(base_url=base_url.rstrip("/"), page=page)

    def harvest(
        self,
        base_url: str,
        first_page: int,
        last_page: int,
        max_concurrent: int,
        parser: PageParser,
    ) -> List[ListingItem]:
        params = HarvestParams(
            base_url=base_url,
            first_page=first_page,
            last_page=last_page,
            max_concurrent=max_concurrent,
        ).validate()

        sink: "queue.Queue[object]" = queue.Queue()
        collected: List[ListingItem] = []
        collector = threading.Thread(
            target=self._drain, args=(sink, collected), name="harvest-collector", daemon=True
        )
        collector.start()

        permits = PermitPool(params.max_concurrent)
        self.permits = permits
        workers = min(params.max_concurrent, params.page_count)
        logger.info(
            "Harvesting pages %d..%d of %s with %d workers",
            params.first_page,
            params.last_page,
            params.base_url,
            workers,
        )

        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="harvest-page") as executor:
                futures = []
                for page in range(params.first_page, params.last_page + 1):
                    url = self.page_url(params.base_url, page)
                    permits.acquire()
                    try:
                        futures.append(executor.submit(self._fetch_page, parser, page, url, sink, permits))
                    except BaseException:
                        permits.release()
                        raise
                wait(futures)
        finally:
            sink.put(_CLOSED)
            collector.join()

        logger.info("Collected %d records from %d pages", len(collected), params.page_count)
        return collected

    @staticmethod
    def _fetch_page(
        parser: PageParser,
        page: int,
        url: str,
        sink: "queue.Queue[object]",
        permits: PermitPool,
    ) -> None:
        try:
            try:
                items = list(parser.parse_page(url) or [])
            except Exception as exc:
                logger.warning("Page %d (%s) failed: %s", page, url, exc)
                return
            if not items:
                logger.debug("Page %d (%s) has no items", page, url)
                return
            sink.put(items)
        finally:
            permits.release()

    @staticmethod
    def _drain(sink: "queue.Queue[object]", collected: List[ListingItem]) -> None:
        while True:
            batch = sink.get()
            if batch is _CLOSED:
                break
            collected.extend(batch)  # type: ignore[arg-type]


def harvest(
    base_url: str,
    first_page: int,
    last_page: int,
    max_concurrent: int,
    parser: PageParser,
) -> List[ListingItem]:
    return BoundedHarvester().harvest(base_url, first_page, last_page, max_concurrent, parser)
