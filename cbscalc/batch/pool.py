from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from ..spline.errors import SplineError

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class IndexedPool:
    """Run ``fn(index, item)`` for every item on a fixed set of worker threads.

    Results land at the index of their item. If any call raises, the
    exception of the lowest failing index is re-raised by ``run`` and no
    results are returned; items after a known failure are skipped.
    """

    def __init__(self, fn: Callable[[int, T], R], workers: int):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.fn = fn
        self.workers = workers

        self._q: "queue.Queue[Optional[Tuple[int, T]]]" = queue.Queue()
        self._lock = threading.Lock()
        self._errors: Dict[int, BaseException] = {}
        self._first_error: Optional[int] = None
        self._results: List[Optional[R]] = []

    def run(self, items: Sequence[T]) -> List[R]:
        self._results = [None] * len(items)
        self._errors.clear()
        self._first_error = None

        for i, item in enumerate(items):
            self._q.put((i, item))
        threads = []
        for _ in range(min(self.workers, len(items))):
            self._q.put(None)  # one stop marker per worker
            th = threading.Thread(target=self._worker_loop, daemon=True)
            th.start()
            threads.append(th)
        for th in threads:
            th.join()

        if self._first_error is not None:
            raise self._errors[self._first_error]
        return self._results  # type: ignore[return-value]

    def _worker_loop(self) -> None:
        while True:
            job = self._q.get()
            if job is None:
                return
            i, item = job
            with self._lock:
                if self._first_error is not None and i > self._first_error:
                    continue
            try:
                self._results[i] = self.fn(i, item)
            except SplineError as e:
                log.debug(f"Item {i} rejected: {e}")
                self._record_error(i, e)
            except Exception as e:
                log.exception(f"Worker failed on item {i}")
                self._record_error(i, e)

    def _record_error(self, i: int, e: BaseException) -> None:
        with self._lock:
            self._errors[i] = e
            if self._first_error is None or i < self._first_error:
                self._first_error = i


def run_indexed(fn: Callable[[int, T], R], items: Sequence[T], workers: int) -> List[R]:
    return IndexedPool(fn, workers).run(items)
