"""URL scanner — runs every method against one URL under a concurrency cap."""

import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import replace
from typing import List, Sequence, Tuple

from methodscanner.core.models import MethodResult, ProbeOutcome, ProbeRequest, URLResult


def keep_result(view_mode: str, result: MethodResult) -> bool:
    """View-mode filter applied to each classified result."""
    if view_mode == "all":
        return True
    if view_mode == "enabled":
        return result.status_code not in (405, 501)
    if view_mode == "vulnerable":
        return result.is_vulnerable
    raise ValueError(f"Unknown view mode: {view_mode!r}")


class URLScanner:
    def __init__(self, prober, checker, logger=None):
        self.prober = prober
        self.checker = checker
        self.logger = logger

    def _probe_one(self, template: ProbeRequest, method: str) -> MethodResult:
        req = replace(template, method=method)
        try:
            outcome = self.prober.probe(req)
        except Exception as e:
            # a probe never takes the scan down with it
            msg = str(e) or type(e).__name__
            if self.logger:
                self.logger.fail(f"{method} {req.url}: unexpected error {msg}")
            outcome = ProbeOutcome(
                method=method, status_code=0, status_text=f"Error: {msg}",
                transport_error=msg, user_agent=req.user_agent)
        result = MethodResult.build(outcome, self.checker.classify(method, outcome))
        if self.logger:
            self.logger.probe(method, req.url, result.status_code, result.status)
        return result

    def scan(self, url: str, methods: Sequence[str], template: ProbeRequest,
             concurrency: int = 10, view_mode: str = "all",
             ordered: bool = False) -> URLResult:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")

        template = replace(template, url=url)
        kept: List[Tuple[int, MethodResult]] = []
        lock = threading.Lock()
        permits = threading.BoundedSemaphore(concurrency)

        def task(index: int, method: str) -> None:
            try:
                result = self._probe_one(template, method)
                if keep_result(view_mode, result):
                    with lock:
                        kept.append((index, result))
            finally:
                permits.release()

        with ThreadPoolExecutor(max_workers=concurrency) as pool:
            futures = []
            for index, method in enumerate(methods):
                permits.acquire()
                futures.append(pool.submit(task, index, method))
            wait(futures)

        for f in futures:
            # only a programming error in the filter can land here
            f.result()

        if ordered:
            kept.sort(key=lambda item: item[0])
        return URLResult(url=url, results=[r for _, r in kept])
